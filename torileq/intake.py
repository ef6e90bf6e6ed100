import os
import sys
import json

from torileq.constants import DEFAULT_LOAD, FIELD_LOOKUP, INTEGER_FIELDS, META_FIELDS
from torileq.parser import parse_item_text
from torileq.schema import validate_against_schema
from torileq.stats import generate_stats, utc_today
from universal.files import makedirs, write_item
from universal.options import date_clock
from universal.utils import clean_item_text


def parse_item(filename, options):
    """Parse one pasted item file and write its staged record as json."""
    basename = os.path.basename(filename)
    if not options.stdout:
        sys.stderr.write("%s\n" % basename)
    with open(filename) as fp:
        text = fp.read()
    struct = intake_item(
        text, zone=options.zone, load=options.load, quest=options.quest,
        clock=date_clock(options) or utc_today,
        skip_schema=options.skip_schema)
    if not options.dryrun:
        jsondir = makedirs(options.output, struct.get("zone"))
        write_item(jsondir, struct)
    elif options.stdout:
        print(json.dumps(struct, indent=2))
    return struct


def intake_item(text, zone=None, load=None, quest=None, clock=utc_today, skip_schema=False):
    """Turn pasted item text into a record ready for the neweq table.

    Raises ValueError when the text is empty or no item name can be found.
    """
    struct = parse_pass(text)
    meta_pass(struct, zone, load, quest)
    stats_pass(struct, clock)
    if not skip_schema:
        validate_against_schema(struct, "item.schema.json")
    return struct


def preview_item(text, zone=None, load=None, quest=None, clock=utc_today):
    """Parse and render without validating or storing anything."""
    struct = parse_pass(text)
    parsed = dict(struct)
    meta_pass(struct, zone, load, quest)
    stats = generate_stats(struct, clock)
    return {
        "parsed": parsed,
        "short_stats": stats["short_stats"],
        "long_stats": stats["long_stats"],
    }


def parse_pass(text):
    if not text or not text.strip():
        raise ValueError("Item text is empty")
    struct = parse_item_text(clean_item_text(text))
    if "name" not in struct:
        raise ValueError("Could not parse item name from text")
    return struct


def meta_pass(struct, zone=None, load=None, quest=None):
    if zone:
        struct["zone"] = zone.strip()
    struct["load"] = load or struct.get("load") or DEFAULT_LOAD
    if quest:
        struct["quest"] = quest
    elif not struct.get("quest"):
        struct.pop("quest", None)


def stats_pass(struct, clock=utc_today):
    struct.update(generate_stats(struct, clock))


def normalize_record(record):
    """Map stored or hand-written records onto canonical field names.

    Column casing is normalised (``type`` -> ``TYPE``), empty values are
    dropped, and numeric strings in integer fields become ints. Unknown keys
    are kept so schema validation can report them.
    """
    normalized = {}
    for key, value in record.items():
        field = FIELD_LOOKUP.get(key.lower(), key)
        if value is None or value == "":
            continue
        if field in INTEGER_FIELDS and isinstance(value, str):
            value = int(value.strip())
        normalized[field] = value
    return normalized


def restat_record(record, clock=utc_today, skip_schema=False):
    """Re-render the stats strings of an existing record."""
    struct = normalize_record(record)
    struct.pop("short_stats", None)
    struct.pop("long_stats", None)
    meta_pass(struct, *[struct.get(f) for f in META_FIELDS])
    stats_pass(struct, clock)
    if not skip_schema:
        validate_against_schema(struct, "item.schema.json")
    return struct
