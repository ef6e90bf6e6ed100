import re

from torileq.constants import AFFECT_MAP, RESIST_MAP

NAME_RE = re.compile(r"^Name\s+'(.+)'")
KEYWORD_RE = re.compile(r"^Keyword\s+'([^']+)'")
ITEM_TYPE_RE = re.compile(r"Item type:\s+(\S+)")
WORN_RE = re.compile(r"^Item can be worn on:\s+(.+)")
ABILITIES_RE = re.compile(r"^Item will give you following abilities:\s+(.+)")
ITEM_FLAGS_RE = re.compile(r"^Item is:\s+(.+)")
USABLE_BY_RE = re.compile(r"^Usable by:\s+(.+)")
WEIGHT_VALUE_RE = re.compile(r"Weight:\s*(\d+),\s*Value:\s*(\d+)")
AC_RE = re.compile(r"AC-apply is\s+([+-]?\d+)")
INSTRUMENT_RE = re.compile(
    r"^Instrument Type:\s*(.+?),\s*Quality:\s*(\d+),\s*Stutter:\s*(\d+),"
    r"\s*Min Level:\s*(\d+)"
)
WEAPON_TYPE_RE = re.compile(r"^Type:\s*(\S+)\s+Class:\s*(\S+)")
DAMAGE_RE = re.compile(r"Damage:\s*(\d+)\s*[dD]\s*(\d+)")
DAMAGE_DICE_RE = re.compile(r"Damage Dice is\s+'(\d+)[dD](\d+)'")
CRIT_RANGE_RE = re.compile(r"Crit Range:\s*(\d+)\s*%")
CRIT_BONUS_RE = re.compile(r"Crit Bonus:\s*(\d+)\s*[xX]?")
PAGES_RE = re.compile(r"^Total Pages:\s*(\d+)")
HOLDS_RE = re.compile(r"^Can hold (\d+) more lbs(?:\s+with (\d+) lbs weightless)?")
CHARGES_RE = re.compile(r"^Has (\d+) charges?,\s*with (\d+) charges? left")
POISON_RE = re.compile(r"^Poison affects as (.+?) at level (\d+)")
POISON_USES_RE = re.compile(
    r"^(\d+) applications? remaining with (\d+) hits? per application"
)
LOCKPICK_RE = re.compile(r"^This lockpick\b")
PICK_BONUS_RE = re.compile(r"\bbonus\b\D*?([+-]?\d+)", re.IGNORECASE)
BREAK_RE = re.compile(r"(\d+)%\s+chance\s+(?:to|of)\s+break", re.IGNORECASE)
AFFECT_RE = re.compile(r"^Affects\s*:\s*(\S+)\s+(?i:by)\s+([+-]?\d+)")
RESISTS_RE = re.compile(r"^Resists:")
RESIST_TOKEN_RE = re.compile(r"([A-Za-z]+)\s*:\s*([+-]?\d+)\s*%")
RESIST_LINE_RE = re.compile(r"^[A-Za-z]+\s*:\s*[+-]?\d+\s*%")
SPELLS_OF_RE = re.compile(r"^Level (\d+) spells? of:?\s*(.*)")
INLINE_SPELL_RE = re.compile(r"^Level (\d+)\s+(.+)")
CALLED_RE = re.compile(r"^Called Effects")

# Single-line free text labels
LABEL_FIELDS = [
    (re.compile(r"^Effects:\s*(.+)"), "effects"),
    (re.compile(r"^Powers:\s*(.+)"), "powers"),
    (re.compile(r"^Combat Crit:\s*(.+)"), "crit"),
    (re.compile(r"^Combat Bonus:\s*(.+)"), "bonus"),
    (re.compile(r"^Gearset:\s*(.+)"), "gearset"),
]

# A line starting with one of these closes any multi-line block
BLOCK_TERMINATOR_RE = re.compile(
    r"^(?:Name|Keyword|Item|Weight|AC-apply|Resists|Can affect|Affects"
    r"|Effects|Special Effects|Enchantments|Powers|Usable by|Combat Crit"
    r"|Combat Bonus|Gearset|Has \d+|Level \d+|This lockpick)"
)


def parse_item_text(raw):
    """Parse pasted item identify text into a sparse field dictionary.

    Only fields whose pattern matched are set. Lines that match nothing are
    skipped, so the result may be empty; callers decide what to do when
    ``name`` is missing.
    """
    item = {}
    if not raw:
        return item
    lines = [line.strip() for line in raw.splitlines()]
    lines = [line for line in lines if line]

    i = 0
    while i < len(lines):
        for handler in LINE_HANDLERS:
            consumed = handler(lines, i, item)
            if consumed is not None:
                i = consumed
                break
        i += 1

    item_flags_pass(item)
    return item


def item_flags_pass(item):
    """Move TWOHANDS out of item_flags into worn and drop NOBITS filler."""
    if "item_flags" not in item:
        return
    flags = item["item_flags"].split()
    twohands = "TWOHANDS" in flags
    flags = [f for f in flags if f not in ("TWOHANDS", "NOBITS")]
    if twohands:
        item["worn"] = " ".join([item.get("worn", "").strip(), "2H"]).strip()
    item["item_flags"] = " ".join(flags) if flags else "NOBITS"


def _collect_block(lines, i):
    """Return the lines after ``i`` up to the next block terminator."""
    collected = []
    while i + 1 < len(lines) and not BLOCK_TERMINATOR_RE.match(lines[i + 1]):
        i += 1
        collected.append(lines[i])
    return collected, i


# Each handler returns the index of the last line it consumed, or None
# when the line is not its pattern.


def _handle_name(lines, i, item):
    m = NAME_RE.match(lines[i])
    if m:
        item["name"] = m.group(1)
        return i


def _handle_keyword_type(lines, i, item):
    line = lines[i]
    kw = KEYWORD_RE.match(line)
    if kw:
        item["keywords"] = kw.group(1)
    item_type = ITEM_TYPE_RE.search(line)
    if item_type:
        item["TYPE"] = item_type.group(1)
    if kw or item_type:
        return i


def _text_handler(regex, field):
    def _handle(lines, i, item):
        m = regex.match(lines[i])
        if m:
            item[field] = m.group(1).strip()
            return i

    return _handle


def _handle_weight_value(lines, i, item):
    m = WEIGHT_VALUE_RE.search(lines[i])
    if m:
        item["wt"] = int(m.group(1))
        item["VALUE"] = int(m.group(2))
        return i


def _handle_ac(lines, i, item):
    m = AC_RE.search(lines[i])
    if m:
        item["ac"] = int(m.group(1))
        return i


def _handle_instrument(lines, i, item):
    m = INSTRUMENT_RE.match(lines[i])
    if m:
        item["i_type"] = m.group(1).strip()
        item["i_quality"] = int(m.group(2))
        item["i_stutter"] = int(m.group(3))
        item["i_min"] = int(m.group(4))
        return i


def _handle_weapon_type(lines, i, item):
    m = WEAPON_TYPE_RE.match(lines[i])
    if m:
        item["w_type"] = m.group(1)
        item["w_class"] = m.group(2)
        return i


def _handle_weapon_dice(lines, i, item):
    line = lines[i]
    dice = DAMAGE_RE.search(line) or DAMAGE_DICE_RE.search(line)
    crit_range = CRIT_RANGE_RE.search(line)
    crit_bonus = CRIT_BONUS_RE.search(line)
    if not (dice or crit_range or crit_bonus):
        return None
    if dice:
        item["w_dice_count"] = int(dice.group(1))
        item["w_dice"] = int(dice.group(2))
    if crit_range:
        item["w_range"] = int(crit_range.group(1))
    if crit_bonus:
        item["w_bonus"] = int(crit_bonus.group(1))
    return i


def _handle_pages(lines, i, item):
    m = PAGES_RE.match(lines[i])
    if m:
        item["pages"] = int(m.group(1))
        return i


def _handle_holds(lines, i, item):
    m = HOLDS_RE.match(lines[i])
    if m:
        item["holds"] = int(m.group(1))
        if m.group(2) is not None:
            item["weightless"] = int(m.group(2))
        return i


def _handle_charges(lines, i, item):
    m = CHARGES_RE.match(lines[i])
    if m:
        item["max_charge"] = int(m.group(1))
        item["charge"] = int(m.group(2))
        return i


def _handle_poison(lines, i, item):
    m = POISON_RE.match(lines[i])
    if m:
        item["p_poison"] = m.group(1).strip()
        item["p_level"] = int(m.group(2))
        return i


def _handle_poison_uses(lines, i, item):
    m = POISON_USES_RE.match(lines[i])
    if m:
        item["p_apps"] = int(m.group(1))
        item["p_hits"] = int(m.group(2))
        return i


def _handle_lockpick(lines, i, item):
    line = lines[i]
    if not LOCKPICK_RE.match(line):
        return None
    chance = BREAK_RE.search(line)
    if chance:
        line = line[: chance.start()] + line[chance.end():]
    elif (i + 1 < len(lines) and BREAK_RE.search(lines[i + 1])
            and not BLOCK_TERMINATOR_RE.match(lines[i + 1])):
        # break chance wrapped onto the following line
        i += 1
        chance = BREAK_RE.search(lines[i])
    if chance:
        item["break"] = int(chance.group(1))
    bonus = PICK_BONUS_RE.search(line)
    if bonus:
        item["pick"] = int(bonus.group(1))
    return i


def _handle_labels(lines, i, item):
    for regex, field in LABEL_FIELDS:
        m = regex.match(lines[i])
        if m:
            item[field] = m.group(1).strip()
            return i


def _handle_affect(lines, i, item):
    m = AFFECT_RE.match(lines[i])
    if m:
        field = AFFECT_MAP.get(m.group(1).upper())
        if field:
            item[field] = int(m.group(2))
        return i


def _handle_resists(lines, i, item):
    line = lines[i]
    if not RESISTS_RE.match(line):
        return None
    text = [RESISTS_RE.sub("", line)]
    while i + 1 < len(lines) and RESIST_LINE_RE.match(lines[i + 1]):
        i += 1
        text.append(lines[i])
    for label, value in RESIST_TOKEN_RE.findall(" ".join(text)):
        field = RESIST_MAP.get(label.lower())
        if field:
            item[field] = int(value)
    return i


def _spell_block(lines, i, item, level, first):
    spells = [first.strip()] if first.strip() else []
    block, i = _collect_block(lines, i)
    spells.extend(block)
    item["s_level"] = int(level)
    if spells:
        item["s_spell"] = " - ".join(spells)
    return i


def _handle_spells_of(lines, i, item):
    m = SPELLS_OF_RE.match(lines[i])
    if m:
        return _spell_block(lines, i, item, m.group(1), m.group(2))


def _handle_inline_spell(lines, i, item):
    m = INLINE_SPELL_RE.match(lines[i])
    if m:
        return _spell_block(lines, i, item, m.group(1), m.group(2))


def _handle_called(lines, i, item):
    if not CALLED_RE.match(lines[i]):
        return None
    block, i = _collect_block(lines, i)
    called = "\n".join(block).strip()
    if called:
        item["called"] = called
    return i


# Order matters: the first handler to claim a line wins. Labels come
# before the handlers that search anywhere in a line.
LINE_HANDLERS = [
    _handle_name,
    _handle_labels,
    _handle_keyword_type,
    _text_handler(WORN_RE, "worn"),
    _text_handler(ABILITIES_RE, "affect_flags"),
    _text_handler(ITEM_FLAGS_RE, "item_flags"),
    _text_handler(USABLE_BY_RE, "usable_by"),
    _handle_weight_value,
    _handle_ac,
    _handle_instrument,
    _handle_weapon_type,
    _handle_weapon_dice,
    _handle_pages,
    _handle_holds,
    _handle_charges,
    _handle_poison,
    _handle_poison_uses,
    _handle_lockpick,
    _handle_affect,
    _handle_resists,
    _handle_spells_of,
    _handle_inline_spell,
    _handle_called,
]
