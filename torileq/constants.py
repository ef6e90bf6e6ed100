"""Field vocabulary shared by the item parser, the stats formatter and storage.

Field names match the columns of the ``eq`` / ``neweq`` tables, including
their historical casing (``TYPE``, ``VALUE``, ``POW``).
"""

STRING_FIELDS = [
    "name",
    "keywords",
    "TYPE",
    "worn",
    "affect_flags",
    "item_flags",
    "w_type",
    "w_class",
    "i_type",
    "p_poison",
    "s_spell",
    "called",
    "effects",
    "powers",
    "crit",
    "bonus",
    "gearset",
    "usable_by",
]

PRIMARY_STATS = ["str", "agi", "dex", "con", "POW", "int", "wis", "cha"]

SPELL_FOCUS_FIELDS = [
    "sf_ele",
    "sf_enc",
    "sf_heal",
    "sf_ill",
    "sf_inv",
    "sf_nat",
    "sf_nec",
    "sf_prot",
    "sf_spi",
    "sf_sum",
]

RESIST_FIELDS = [
    "r_fire",
    "r_cold",
    "r_acid",
    "r_elect",
    "r_poison",
    "r_sonic",
    "r_slash",
    "r_bludgn",
    "r_pierce",
    "r_ranged",
    "r_spell",
    "r_unarmd",
    "r_pos",
    "r_neg",
    "r_psi",
    "r_mental",
    "r_good",
    "r_evil",
    "r_law",
    "r_chaos",
    "r_force",
]

INTEGER_FIELDS = (
    ["wt", "VALUE", "ac", "armor", "pages"]
    + ["hit", "dam", "hp", "mana", "move"]
    + PRIMARY_STATS
    + ["max_" + stat.lower() for stat in PRIMARY_STATS]
    + ["luck", "karma", "age", "weight", "height", "mr", "psp"]
    + ["sv_spell", "sv_bre", "sv_para", "sv_petri", "sv_rod"]
    + SPELL_FOCUS_FIELDS
    + RESIST_FIELDS
    + ["w_dice_count", "w_dice", "w_range", "w_bonus"]
    + ["holds", "weightless"]
    + ["i_quality", "i_stutter", "i_min"]
    + ["p_level", "p_apps", "p_hits"]
    + ["s_level", "charge", "max_charge"]
    + ["pick", "break"]
)

ITEM_FIELDS = STRING_FIELDS + INTEGER_FIELDS

META_FIELDS = ["zone", "load", "quest"]
STATS_FIELDS = ["short_stats", "long_stats"]
RECORD_FIELDS = ITEM_FIELDS + META_FIELDS + STATS_FIELDS

LOAD_CODES = ["R", "Q", "N", "S", "X", "C"]
DEFAULT_LOAD = "N"
QUEST_FLAG = "X"

# Lower-cased column name -> canonical field name
FIELD_LOOKUP = {field.lower(): field for field in RECORD_FIELDS}


def _build_affect_map():
    affects = {
        "HITROLL": "hit",
        "HIT_ROLL": "hit",
        "DAMROLL": "dam",
        "DAM_ROLL": "dam",
        "DAMAGE_ROLL": "dam",
        "HIT_POINTS": "hp",
        "HITPOINTS": "hp",
        "HP": "hp",
        "MANA": "mana",
        "MOVE": "move",
        "MOVEMENT": "move",
        "MOVES": "move",
        "ARMOR": "armor",
        "LUCK": "luck",
        "KARMA": "karma",
        "AGE": "age",
        "WEIGHT": "weight",
        "HEIGHT": "height",
        "MAGIC_RESISTANCE": "mr",
        "MAGIC_RESIST": "mr",
        "MR": "mr",
        "PSP": "psp",
        "PSIONIC_POINTS": "psp",
        "SAVING_SPELL": "sv_spell",
        "SV_SPELL": "sv_spell",
        "SAVING_BREATH": "sv_bre",
        "SV_BREATH": "sv_bre",
        "SAVING_PARA": "sv_para",
        "SAVING_PARALYSIS": "sv_para",
        "SV_PARA": "sv_para",
        "SAVING_PETRI": "sv_petri",
        "SAVING_PETRIFICATION": "sv_petri",
        "SV_PETRI": "sv_petri",
        "SAVING_ROD": "sv_rod",
        "SV_ROD": "sv_rod",
    }
    long_names = {
        "STR": "STRENGTH",
        "AGI": "AGILITY",
        "DEX": "DEXTERITY",
        "CON": "CONSTITUTION",
        "POW": "POWER",
        "INT": "INTELLIGENCE",
        "WIS": "WISDOM",
        "CHA": "CHARISMA",
    }
    for stat in PRIMARY_STATS:
        short = stat.upper()
        max_field = "max_" + stat.lower()
        for alias in (short, long_names[short]):
            affects[alias] = stat
            affects["MAX_" + alias] = max_field
            affects[alias + "_MAX"] = max_field
    focus_names = {
        "sf_ele": ["ELEMENTAL"],
        "sf_enc": ["ENCHANTMENT", "ENCHANT"],
        "sf_heal": ["HEALING", "HEAL"],
        "sf_ill": ["ILLUSION"],
        "sf_inv": ["INVOCATION", "INVOKE"],
        "sf_nat": ["NATURE"],
        "sf_nec": ["NECROMANCY"],
        "sf_prot": ["PROTECTION"],
        "sf_spi": ["SPIRIT"],
        "sf_sum": ["SUMMONING", "SUMMON"],
    }
    for field, names in focus_names.items():
        affects[field.upper()] = field
        for name in names:
            affects["SF_" + name] = field
            affects["SPELL_FOCUS_" + name] = field
    return affects


# "Affects : KEYWORD by N" keyword -> field
AFFECT_MAP = _build_affect_map()

# Lower-cased resist label -> field
RESIST_MAP = {
    "fire": "r_fire",
    "cold": "r_cold",
    "acid": "r_acid",
    "electric": "r_elect",
    "elect": "r_elect",
    "elec": "r_elect",
    "poison": "r_poison",
    "sonic": "r_sonic",
    "slash": "r_slash",
    "slashing": "r_slash",
    "bludgeon": "r_bludgn",
    "bludgn": "r_bludgn",
    "bludg": "r_bludgn",
    "pierce": "r_pierce",
    "piercing": "r_pierce",
    "ranged": "r_ranged",
    "spell": "r_spell",
    "spells": "r_spell",
    "unarmed": "r_unarmd",
    "unarmd": "r_unarmd",
    "positive": "r_pos",
    "pos": "r_pos",
    "negative": "r_neg",
    "neg": "r_neg",
    "psionic": "r_psi",
    "psi": "r_psi",
    "mental": "r_mental",
    "good": "r_good",
    "evil": "r_evil",
    "law": "r_law",
    "lawful": "r_law",
    "chaos": "r_chaos",
    "chaotic": "r_chaos",
    "force": "r_force",
}
