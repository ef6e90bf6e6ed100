"""Render short_stats and long_stats display strings for an item.

Both strings are `` * ``-joined segments in a fixed order and are stored
verbatim in the ``eq`` table, so the literal output format must not drift.
"""

import datetime
import math

from torileq.constants import DEFAULT_LOAD, QUEST_FLAG

# Stat fields with their display labels. Hit/dam are handled separately.
STAT_LABELS = [
    ("ac", "AC"),
    ("armor", "Armor"),
    ("hp", "Hp"),
    ("mana", "Mana"),
    ("move", "Move"),
    ("str", "Str"),
    ("agi", "Agi"),
    ("dex", "Dex"),
    ("con", "Con"),
    ("POW", "Pow"),
    ("int", "Int"),
    ("wis", "Wis"),
    ("cha", "Cha"),
    ("max_str", "MaxStr"),
    ("max_agi", "MaxAgi"),
    ("max_dex", "MaxDex"),
    ("max_con", "MaxCon"),
    ("max_pow", "MaxPow"),
    ("max_int", "MaxInt"),
    ("max_wis", "MaxWis"),
    ("max_cha", "MaxCha"),
    ("luck", "Luck"),
    ("karma", "Karma"),
    ("age", "Age"),
    ("weight", "Weight"),
    ("height", "Height"),
    ("mr", "MR"),
    ("psp", "Psp"),
    ("sv_spell", "SvSp"),
    ("sv_bre", "SvBr"),
    ("sv_para", "SvPa"),
    ("sv_petri", "SvPe"),
    ("sv_rod", "SvRo"),
    ("sf_ele", "SfEle"),
    ("sf_enc", "SfEnc"),
    ("sf_heal", "SfHeal"),
    ("sf_ill", "SfIll"),
    ("sf_inv", "SfInv"),
    ("sf_nat", "SfNat"),
    ("sf_nec", "SfNec"),
    ("sf_prot", "SfProt"),
    ("sf_spi", "SfSpi"),
    ("sf_sum", "SfSum"),
]

RESIST_LABELS = [
    ("r_fire", "Fire"),
    ("r_cold", "Cold"),
    ("r_acid", "Acid"),
    ("r_elect", "Elect"),
    ("r_poison", "Poison"),
    ("r_sonic", "Sonic"),
    ("r_slash", "Slash"),
    ("r_bludgn", "Bludgn"),
    ("r_pierce", "Pierce"),
    ("r_ranged", "Ranged"),
    ("r_spell", "Spell"),
    ("r_unarmd", "Unarmd"),
    ("r_pos", "Pos"),
    ("r_neg", "Neg"),
    ("r_psi", "Psi"),
    ("r_mental", "Mental"),
    ("r_good", "Good"),
    ("r_evil", "Evil"),
    ("r_law", "Law"),
    ("r_chaos", "Chaos"),
    ("r_force", "Force"),
]

# Item types that get a label segment in short_stats
TYPE_SHORT = {
    "LIQUID_CONT": "DRINK",
    "SCROLL": "SCROLL",
    "WAND": "WAND",
    "STAFF": "STAFF",
    "POTION": "POTION",
    "FOOD": "FOOD",
    "LIGHT": "LIGHT",
    "SUMMON": "SUMMON",
    "NOTE": "NOTE",
    "TRASH": "TRASH",
}

# The four main classes, restricted with NO-X
CLASS_NO = {
    "NO-WARRIOR": "FIGHTER",
    "NO-CLERIC": "PRIEST",
    "NO-THIEF": "THIEF",
    "NO-MAGE": "MAGE",
}

CLASS_ANTI = {
    "ANTI-WARRIOR": "FIGHTER",
    "ANTI-CLERIC": "PRIEST",
    "ANTI-THIEF": "THIEF",
    "ANTI-MAGE": "MAGE",
    "ANTI-RANGER": "RANGER",
    "ANTI-PALADIN": "PALADIN",
    "ANTI-BARD": "BARD",
    "ANTI-DRUID": "DRUID",
    "ANTI-SHAMAN": "SHAMAN",
    "ANTI-PSIONICIST": "PSIONICIST",
    "ANTI-ELEMENTALIST": "ELEMENTALIST",
    "ANTI-ENCHANTER": "ENCHANTER",
    "ANTI-ILLUSIONIST": "ILLUSIONIST",
    "ANTI-INVOKER": "INVOKER",
    "ANTI-NECROMANCER": "NECROMANCER",
    "ANTI-BLACKGUARD": "BLACKGUARD",
}

RACE_GENDER_FLAGS = frozenset([
    "ANTI-BARBARIAN",
    "ANTI-DROW",
    "ANTI-DROWELF",
    "ANTI-DUERGAR",
    "ANTI-DWARF",
    "ANTI-GNOME",
    "ANTI-GREYELF",
    "ANTI-HALFELF",
    "ANTI-HALFLING",
    "ANTI-HALFORC",
    "ANTI-HUMAN",
    "ANTI-ILLITHID",
    "ANTI-LICH",
    "ANTI-OGRE",
    "ANTI-ORC",
    "ANTI-TROLL",
    "ANTI-YUANTI",
    "ANTI-MALE",
    "ANTI-FEMALE",
    "ANTI-PLAYER",
])

ALIGN_FLAGS = ["ANTI-GOOD", "ANTI-NEUTRAL", "ANTI-EVIL"]
ALIGN_NAMES = {
    "ANTI-GOOD": "GOOD",
    "ANTI-NEUTRAL": "NEUTRAL",
    "ANTI-EVIL": "EVIL",
}

# Item flags never shown in short_stats
ITEM_FLAGS_HIDDEN = frozenset([
    "MAGIC",
    "BLESS",
    "NOBURN",
    "NOSELL",
    "NORENT",
    "NOLOCATE",
    "NOTAKE",
    "NODROP",
    "NO-DROP",
    "NO-PC",
    "NO-PLAYER",
    "AGRESSIVE",
    "SONIC",
    "TRANSIENT",
    "STATS-UNKNOWN",
    "NOBITS",
    "DARK",
    "SECRET",
    "KEEN",
    "INVISIBLE",
    "WATERBREATH",
])

AFFECT_FLAG_SUB = {
    "NOSLEEP": "!SLEEP",
    "NOCHARM": "!CHARM",
    "NOBITS": "",
}


def utc_today():
    return datetime.datetime.now(datetime.timezone.utc).date()


def _round_half_up(value):
    return int(math.floor(value + 0.5))


def format_value(value):
    """Compact a copper value: 1000+ in platinum, 100+ in gold."""
    if not value:
        return "0"
    if value >= 1000:
        return "%sp" % _round_half_up(value / 1000)
    if value >= 100:
        return "%sg" % _round_half_up(value / 100)
    return str(value)


def _is_set(value):
    return value is not None and value != 0


def build_stat_fields(item):
    return [
        "%s:%s" % (label, item[field])
        for field, label in STAT_LABELS
        if _is_set(item.get(field))
    ]


def build_resists(item):
    return " ".join([
        "%s:%s%%" % (label, item[field])
        for field, label in RESIST_LABELS
        if _is_set(item.get(field))
    ])


def build_affect_display(affect_flags):
    if not affect_flags or affect_flags == "NOBITS":
        return ""
    flags = [AFFECT_FLAG_SUB.get(f, f) for f in affect_flags.split()]
    return " ".join([f for f in flags if f])


def build_class_align_flags(item_flags):
    """Split item_flags into (visible flags, class/alignment restrictions).

    Restrictions collapse where possible: two restricted alignments become a
    ``GOOD-`` style prefix on the class part, and three restricted main
    classes become ``MAGE-ONLY`` style.
    """
    if not item_flags or item_flags == "NOBITS":
        return "", ""
    flags = item_flags.split()

    restricted_aligns = [f for f in ALIGN_FLAGS if f in flags]
    allowed_aligns = [f for f in ALIGN_FLAGS if f not in flags]

    restricted_no = [f for f in flags if f in CLASS_NO]
    restricted_classes = []
    for name in [CLASS_NO[f] for f in restricted_no] + [
        CLASS_ANTI[f] for f in flags if f in CLASS_ANTI
    ]:
        if name not in restricted_classes:
            restricted_classes.append(name)

    race_part = " ".join(
        ["!" + f.replace("ANTI-", "") for f in flags if f in RACE_GENDER_FLAGS]
    )

    align_prefix = ""
    align_single = ""
    if len(restricted_aligns) >= 2 and len(allowed_aligns) == 1:
        align_prefix = ALIGN_NAMES[allowed_aligns[0]] + "-"
    elif len(restricted_aligns) == 1:
        align_single = "!" + ALIGN_NAMES[restricted_aligns[0]]

    class_part = ""
    main_allowed = [CLASS_NO[f] for f in CLASS_NO if f not in restricted_no]
    if len(restricted_no) >= 3 and len(main_allowed) == 1:
        class_part = main_allowed[0] + "-ONLY"
    elif restricted_classes:
        class_part = " ".join(["!" + c for c in restricted_classes])

    visible = [
        f
        for f in flags
        if f not in ALIGN_NAMES
        and f not in CLASS_NO
        and f not in CLASS_ANTI
        and f not in RACE_GENDER_FLAGS
        and f not in ITEM_FLAGS_HIDDEN
    ]

    if align_prefix:
        parts = [race_part, align_prefix + class_part]
    else:
        parts = [align_single, race_part, class_part]
    return " ".join(visible), " ".join([p for p in parts if p])


def _is_weapon(item):
    return item.get("TYPE") == "WEAPON" or item.get("w_dice_count") is not None


def _hit_dam(item):
    hit = item.get("hit")
    dam = item.get("dam")
    return (0 if hit is None else hit), (0 if dam is None else dam)


def _zone_segment(zone, load, always_show_load):
    if not zone:
        return ""
    if always_show_load or load not in ("N", "C"):
        return "%s (%s)" % (zone, load)
    return zone


def build_short_stats(item):
    load = item.get("load") or DEFAULT_LOAD
    is_weapon = _is_weapon(item)
    hit, dam = _hit_dam(item)

    worn = item.get("worn") or ""
    worn_display = ""
    if worn and worn != "NOBITS":
        worn_display = "(%s)" % ", ".join(worn.split())

    parts = [" ".join([p for p in [item.get("name") or "", worn_display] if p])]

    item_type = item.get("TYPE")
    if item_type in TYPE_SHORT:
        parts.append(TYPE_SHORT[item_type])

    if item_type == "CONTAINER" and item.get("holds") is not None:
        parts.append("CONTAINER (%s lbs)" % item["holds"])

    if item_type == "INSTRUMENT" and item.get("i_type"):
        parts.append("INSTRUMENT (%s: Quality %s, Stutter %s)" % (
            item["i_type"], item.get("i_quality") or 0, item.get("i_stutter") or 0))

    if is_weapon:
        weapon = []
        if item.get("w_dice_count") and item.get("w_dice"):
            weapon.append("%sD%s" % (item["w_dice_count"], item["w_dice"]))
        weapon.append("%s/%s" % (hit, dam))
        if item.get("w_range") and item.get("w_bonus"):
            weapon.append("%s/%s" % (item["w_range"], item["w_bonus"]))
        parts.append(" ".join(weapon))

    stat_line = build_stat_fields(item)
    if not is_weapon and (hit != 0 or dam != 0):
        stat_line.append("%s/%s" % (hit, dam))
    parts.append(" ".join(stat_line))

    parts.append(build_resists(item))
    parts.append(build_affect_display(item.get("affect_flags")))
    if item.get("powers"):
        parts.append("Powers: %s" % item["powers"])
    if item.get("gearset"):
        parts.append("Proc: %s" % item["gearset"])
    visible_flags, class_align_flags = build_class_align_flags(item.get("item_flags"))
    parts.append(visible_flags)
    parts.append(class_align_flags)

    wt = item.get("wt")
    parts.append("Wt:%s Val:%s" % (0 if wt is None else wt, format_value(item.get("VALUE"))))

    if item.get("quest") == QUEST_FLAG:
        parts.append("QUEST-ITEM")
    parts.append(_zone_segment(item.get("zone"), load, False))

    return " * ".join([p for p in parts if p])


def build_long_stats(item, clock=utc_today):
    load = item.get("load") or DEFAULT_LOAD
    is_weapon = _is_weapon(item)
    hit, dam = _hit_dam(item)

    keywords = "(%s)" % item["keywords"] if item.get("keywords") else ""
    parts = [" ".join([p for p in [item.get("name") or "", keywords] if p])]

    parts.append("%s (%s)" % (item.get("TYPE") or "UNKNOWN", item.get("worn") or "NOBITS"))

    if item.get("holds") is not None:
        parts.append("Holds:%s" % item["holds"])

    wt = item.get("wt")
    value = item.get("VALUE")
    parts.append("Wt:%s Val:%s" % (0 if wt is None else wt, 0 if value is None else value))

    if is_weapon:
        weapon = []
        if item.get("w_type") and item.get("w_class"):
            weapon.append("Type:%s Class:%s" % (item["w_type"], item["w_class"]))
        if item.get("w_dice_count") and item.get("w_dice"):
            weapon.append("Dice:%sD%s" % (item["w_dice_count"], item["w_dice"]))
        if item.get("hit") is not None:
            weapon.append("Hit:%s" % item["hit"])
        if item.get("dam") is not None:
            weapon.append("Dam:%s" % item["dam"])
        if item.get("w_range"):
            weapon.append("CritRange:%s" % item["w_range"])
        if item.get("w_bonus"):
            weapon.append("CritBonus:%s" % item["w_bonus"])
        parts.append(" ".join(weapon))

    stat_line = build_stat_fields(item)
    if not is_weapon:
        if hit != 0:
            stat_line.append("Hit:%s" % hit)
        if dam != 0:
            stat_line.append("Dam:%s" % dam)
    parts.append(" ".join(stat_line))

    parts.append(build_resists(item))
    if item.get("powers"):
        parts.append("Powers: %s" % item["powers"])
    if item.get("gearset"):
        parts.append("Proc: %s" % item["gearset"])

    parts.append(item.get("item_flags") or "NOBITS")
    affect_flags = item.get("affect_flags")
    if affect_flags and affect_flags != "NOBITS":
        parts.append(affect_flags)

    if item.get("quest") == QUEST_FLAG:
        parts.append("QUEST-ITEM")
    parts.append(_zone_segment(item.get("zone"), load, True))

    parts.append(clock().strftime("%Y-%m-%d"))
    return " * ".join([p for p in parts if p])


def generate_stats(item, clock=utc_today):
    """Render both display strings for a parsed item merged with zone/load/quest.

    ``clock`` returns the date stamped at the end of long_stats.
    """
    return {
        "short_stats": build_short_stats(item),
        "long_stats": build_long_stats(item, clock),
    }
