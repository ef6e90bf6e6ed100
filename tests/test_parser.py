"""Unit tests for the item text parser."""

import pytest

from torileq.parser import item_flags_pass, parse_item_text


def parse_with_name(*lines):
    """Parse the given lines after a Name line and drop the name again."""
    item = parse_item_text("\n".join(["Name 'a test item'"] + list(lines)))
    assert item.pop("name") == "a test item"
    return item


CHEETAH_PAW = (
    "Name 'a cheetah paw'\n"
    "Item type: WEAPON\n"
    "Weight: 2, Value: 50\n"
    "Affects : HITROLL by 3\n"
    "Affects : DAMROLL by 2\n"
)

LONGSWORD = """
You feel informed:
Name 'a gleaming longsword'
Keyword 'sword long gleaming', Item type: WEAPON
Item can be worn on: WIELD
Item will give you following abilities: NOBITS
Item is: MAGIC TWOHANDS ANTI-EVIL
Weight: 12, Value: 2500
Type: Longsword Class: Martial
Damage: 2D6 Crit Range: 5% Crit Bonus: 2x
Can affect you as :
   Affects : HITROLL by 4
   Affects : DAMROLL by 3
   Affects : STR_MAX by 2
"""


class TestParseItemText:
    def test_end_to_end_weapon(self):
        assert parse_item_text(CHEETAH_PAW) == {
            "name": "a cheetah paw",
            "TYPE": "WEAPON",
            "wt": 2,
            "VALUE": 50,
            "hit": 3,
            "dam": 2,
        }

    def test_full_identify_block(self):
        assert parse_item_text(LONGSWORD) == {
            "name": "a gleaming longsword",
            "keywords": "sword long gleaming",
            "TYPE": "WEAPON",
            "worn": "WIELD 2H",
            "affect_flags": "NOBITS",
            "item_flags": "MAGIC ANTI-EVIL",
            "wt": 12,
            "VALUE": 2500,
            "w_type": "Longsword",
            "w_class": "Martial",
            "w_dice_count": 2,
            "w_dice": 6,
            "w_range": 5,
            "w_bonus": 2,
            "hit": 4,
            "dam": 3,
            "max_str": 2,
        }

    def test_missing_name_leaves_name_absent(self):
        item = parse_item_text("Keyword 'paw', Item type: WEAPON\nWeight: 2, Value: 50")
        assert "name" not in item
        assert item["TYPE"] == "WEAPON"

    @pytest.mark.parametrize("raw", [None, "", "   \n\n  "])
    def test_empty_input(self, raw):
        assert parse_item_text(raw) == {}

    def test_unmatched_lines_ignored(self):
        assert parse_with_name("You feel informed:", "Can affect you as :") == {}

    def test_windows_line_endings(self):
        item = parse_item_text("Name 'a ring'\r\nWeight: 1, Value: 20\r\n")
        assert item == {"name": "a ring", "wt": 1, "VALUE": 20}

    def test_old_mac_line_endings(self):
        item = parse_item_text("Name 'a ring'\rAC-apply is 2")
        assert item == {"name": "a ring", "ac": 2}

    def test_name_keeps_inner_quotes(self):
        item = parse_item_text("Name 'Tiamat's scale'")
        assert item["name"] == "Tiamat's scale"

    def test_each_call_is_independent(self):
        first = parse_item_text(CHEETAH_PAW)
        first["hit"] = 99
        assert parse_item_text(CHEETAH_PAW)["hit"] == 3


class TestSingleLinePatterns:
    """Each pattern sets exactly its own fields."""

    def test_keyword_and_type_on_one_line(self):
        assert parse_with_name("Keyword 'paw cheetah', Item type: ARMOR") == {
            "keywords": "paw cheetah",
            "TYPE": "ARMOR",
        }

    def test_keyword_alone(self):
        assert parse_with_name("Keyword 'paw cheetah'") == {"keywords": "paw cheetah"}

    def test_item_type_alone(self):
        assert parse_with_name("Item type: CONTAINER") == {"TYPE": "CONTAINER"}

    def test_worn(self):
        assert parse_with_name("Item can be worn on: FINGER") == {"worn": "FINGER"}

    def test_affect_flags(self):
        assert parse_with_name("Item will give you following abilities: NOSLEEP HASTE") == {
            "affect_flags": "NOSLEEP HASTE"
        }

    def test_item_flags(self):
        assert parse_with_name("Item is: MAGIC FLOAT") == {"item_flags": "MAGIC FLOAT"}

    def test_usable_by(self):
        assert parse_with_name("Usable by: WARRIOR RANGER") == {"usable_by": "WARRIOR RANGER"}

    def test_weight_and_value(self):
        assert parse_with_name("Weight: 2, Value: 50") == {"wt": 2, "VALUE": 50}

    def test_ac_apply(self):
        assert parse_with_name("AC-apply is -3") == {"ac": -3}

    def test_instrument(self):
        line = "Instrument Type: Flute, Quality: 8, Stutter: 2, Min Level: 10"
        assert parse_with_name(line) == {
            "i_type": "Flute",
            "i_quality": 8,
            "i_stutter": 2,
            "i_min": 10,
        }

    def test_weapon_type_and_class(self):
        assert parse_with_name("Type: Longsword Class: Martial") == {
            "w_type": "Longsword",
            "w_class": "Martial",
        }

    def test_damage_and_crits(self):
        assert parse_with_name("Damage: 2D6 Crit Range: 5% Crit Bonus: 2x") == {
            "w_dice_count": 2,
            "w_dice": 6,
            "w_range": 5,
            "w_bonus": 2,
        }

    def test_crit_range_alone(self):
        assert parse_with_name("Crit Range: 10%") == {"w_range": 10}

    def test_crit_bonus_alone(self):
        assert parse_with_name("Crit Bonus: 3x") == {"w_bonus": 3}

    def test_damage_dice_is(self):
        assert parse_with_name("Damage Dice is '3D4'") == {"w_dice_count": 3, "w_dice": 4}

    def test_pages(self):
        assert parse_with_name("Total Pages: 100") == {"pages": 100}

    def test_container_with_weightless(self):
        assert parse_with_name("Can hold 50 more lbs with 25 lbs weightless") == {
            "holds": 50,
            "weightless": 25,
        }

    def test_container_without_weightless(self):
        assert parse_with_name("Can hold 30 more lbs") == {"holds": 30}

    def test_charges(self):
        assert parse_with_name("Has 5 charges, with 3 charges left") == {
            "max_charge": 5,
            "charge": 3,
        }

    def test_single_charge(self):
        assert parse_with_name("Has 1 charge, with 1 charge left") == {
            "max_charge": 1,
            "charge": 1,
        }

    def test_poison(self):
        assert parse_with_name("Poison affects as blindness at level 30") == {
            "p_poison": "blindness",
            "p_level": 30,
        }

    def test_poison_uses(self):
        assert parse_with_name("5 applications remaining with 2 hits per application") == {
            "p_apps": 5,
            "p_hits": 2,
        }

    def test_lockpick_bonus_and_break(self):
        line = "This lockpick has a bonus of 15 and a 5% chance to break"
        assert parse_with_name(line) == {"pick": 15, "break": 5}

    def test_lockpick_bonus_only(self):
        assert parse_with_name("This lockpick has a bonus of 7") == {"pick": 7}

    def test_lockpick_break_chance_on_next_line(self):
        item = parse_with_name("This lockpick has a bonus of 7", "It has a 12% chance of breaking")
        assert item == {"pick": 7, "break": 12}

    def test_break_chance_without_lockpick_ignored(self):
        assert parse_with_name("It has a 12% chance of breaking") == {}

    @pytest.mark.parametrize("line,field,value", [
        ("Effects: glows with a faint blue light", "effects", "glows with a faint blue light"),
        ("Powers: haste", "powers", "haste"),
        ("Combat Crit: stuns the target", "crit", "stuns the target"),
        ("Combat Bonus: extra fire damage", "bonus", "extra fire damage"),
        ("Gearset: cheetah set", "gearset", "cheetah set"),
    ])
    def test_labels(self, line, field, value):
        assert parse_with_name(line) == {field: value}

    @pytest.mark.parametrize("label,field", [
        ("Effects", "effects"),
        ("Powers", "powers"),
        ("Combat Crit", "crit"),
        ("Combat Bonus", "bonus"),
        ("Gearset", "gearset"),
    ])
    @pytest.mark.parametrize("text", [
        "Damage: 2D6 fire to attackers",
        "Crit Range: 5% when hasted",
        "Crit Bonus: 2x against giants",
        "5% chance to break an attacker's weapon",
        "AC-apply is 3 while raging",
        "Weight: 2, Value: 5 of the soul",
    ])
    def test_label_text_stays_in_label(self, label, field, text):
        assert parse_with_name("%s: %s" % (label, text)) == {field: text}

    @pytest.mark.parametrize("line", [
        "Weight: two, Value: 50",
        "AC-apply is ten",
        "Total Pages: many",
        "Has some charges, with 3 charges left",
    ])
    def test_malformed_numbers_are_unmatched(self, line):
        assert parse_with_name(line) == {}


class TestAffects:
    def test_hitroll(self):
        assert parse_with_name("Affects : HITROLL by 3") == {"hit": 3}

    def test_negative_value(self):
        assert parse_with_name("Affects : SAVING_SPELL by -5") == {"sv_spell": -5}

    def test_by_is_case_insensitive(self):
        assert parse_with_name("Affects : AGE By -2") == {"age": -2}

    def test_keyword_is_case_insensitive(self):
        assert parse_with_name("Affects : mana by 20") == {"mana": 20}

    def test_unknown_keyword_ignored(self):
        assert parse_with_name("Affects : FROBNICATE by 3") == {}

    def test_weight_affect_is_not_item_weight(self):
        assert parse_with_name("Affects : WEIGHT by 5") == {"weight": 5}

    def test_hit_points_aliases(self):
        assert parse_with_name("Affects : HIT_POINTS by 5") == parse_with_name(
            "Affects : HITPOINTS by 5") == {"hp": 5}

    def test_max_stat_aliases(self):
        assert parse_with_name("Affects : MAX_STR by 2") == parse_with_name(
            "Affects : STR_MAX by 2") == {"max_str": 2}

    def test_power_stat_casing(self):
        assert parse_with_name("Affects : POW by 4", "Affects : MAX_POW by 1") == {
            "POW": 4,
            "max_pow": 1,
        }

    def test_spell_focus(self):
        assert parse_with_name("Affects : SF_ELEMENTAL by 2") == {"sf_ele": 2}

    def test_magic_resistance(self):
        assert parse_with_name("Affects : MAGIC_RESISTANCE by 10") == {"mr": 10}


class TestResists:
    def test_continuation_lines(self):
        item = parse_with_name(
            "Resists:",
            "Fire : 10%  Cold : -5%",
            "Bludg : 15%",
            "Unarmd : 3%",
            "Weight: 2, Value: 5",
        )
        assert item == {
            "r_fire": 10,
            "r_cold": -5,
            "r_bludgn": 15,
            "r_unarmd": 3,
            "wt": 2,
            "VALUE": 5,
        }

    def test_same_line(self):
        assert parse_with_name("Resists: Fire : 10% Elec : 5%") == {"r_fire": 10, "r_elect": 5}

    def test_bludgeon_abbreviations(self):
        assert parse_with_name("Resists: Bludg : 10%") == parse_with_name(
            "Resists: Bludgn : 10%") == {"r_bludgn": 10}

    def test_electric_abbreviations(self):
        for label in ["Elec", "Elect", "Electric"]:
            assert parse_with_name("Resists: %s : 4%%" % label) == {"r_elect": 4}

    def test_unknown_label_ignored(self):
        assert parse_with_name("Resists: Frost : 5% Acid : 2%") == {"r_acid": 2}

    def test_empty_block(self):
        assert parse_with_name("Resists:", "AC-apply is 2") == {"ac": 2}


class TestBlocks:
    def test_spell_list(self):
        item = parse_with_name(
            "Level 30 spells of:",
            "fireball",
            "lightning bolt",
            "Has 5 charges, with 3 charges left",
        )
        assert item == {
            "s_level": 30,
            "s_spell": "fireball - lightning bolt",
            "max_charge": 5,
            "charge": 3,
        }

    def test_spell_list_on_same_line(self):
        assert parse_with_name("Level 20 spells of: bless, armor") == {
            "s_level": 20,
            "s_spell": "bless, armor",
        }

    def test_inline_spell(self):
        assert parse_with_name("Level 35 cure critic") == {
            "s_level": 35,
            "s_spell": "cure critic",
        }

    def test_inline_spell_with_continuation(self):
        assert parse_with_name("Level 35 cure critic", "heal", "Weight: 1, Value: 2") == {
            "s_level": 35,
            "s_spell": "cure critic - heal",
            "wt": 1,
            "VALUE": 2,
        }

    def test_called_effects(self):
        item = parse_with_name(
            "Called Effects : (invoked by 'say'ing them)",
            "'ignite' - sets the blade aflame",
            "'douse' - extinguishes it",
            "Affects : HITROLL by 1",
        )
        assert item == {
            "called": "'ignite' - sets the blade aflame\n'douse' - extinguishes it",
            "hit": 1,
        }

    @pytest.mark.parametrize("terminator", [
        "Special Effects : none",
        "Enchantments : none",
        "Can affect you as :",
        "This lockpick is crude",
        "Level 10 spells of:",
    ])
    def test_called_effects_terminators(self, terminator):
        item = parse_with_name("Called Effects :", "'glow' - lights up", terminator)
        assert item["called"] == "'glow' - lights up"

    def test_called_effects_without_lines(self):
        assert parse_with_name("Called Effects :", "Weight: 1, Value: 2") == {"wt": 1, "VALUE": 2}


class TestItemFlagsPass:
    def test_twohands_moves_to_worn(self):
        item = parse_with_name("Item can be worn on: BOTH-HANDS", "Item is: TWOHANDS NOBITS FLOAT")
        assert item == {"item_flags": "FLOAT", "worn": "BOTH-HANDS 2H"}

    def test_flags_before_worn_line(self):
        item = parse_with_name("Item is: TWOHANDS", "Item can be worn on: WIELD")
        assert item == {"item_flags": "NOBITS", "worn": "WIELD 2H"}

    def test_twohands_without_worn(self):
        item = {"item_flags": "TWOHANDS"}
        item_flags_pass(item)
        assert item == {"item_flags": "NOBITS", "worn": "2H"}

    def test_nobits_alone(self):
        item = {"item_flags": "NOBITS"}
        item_flags_pass(item)
        assert item == {"item_flags": "NOBITS"}

    def test_no_item_flags(self):
        item = {"worn": "HEAD"}
        item_flags_pass(item)
        assert item == {"worn": "HEAD"}
