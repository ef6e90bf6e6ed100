import sys
import os
from optparse import OptionParser
from dateutil import parser as dateparser
from torileq.constants import LOAD_CODES


def exec_main(options, args, function):
    if not options.output and not options.dryrun:
        sys.stderr.write("-o/--output required\n")
        sys.exit(1)
    else:
        if not options.dryrun and not os.path.exists(options.output):
            sys.stderr.write(
                "-o/--output points to a directory that does not exist\n")
            sys.exit(1)
        if not options.dryrun and not os.path.isdir(options.output):
            sys.stderr.write(
                "-o/--output points to a file, it must point to a directory\n")
            sys.exit(1)
        check_item_options(options)
        for arg in args:
            function(arg, options)


def check_item_options(options):
    if options.load and options.load not in LOAD_CODES:
        sys.stderr.write(
            "-l/--load must be one of %s\n" % ", ".join(LOAD_CODES))
        sys.exit(1)
    if options.date:
        try:
            options.date = dateparser.parse(options.date).date()
        except (ValueError, OverflowError):
            sys.stderr.write("-t/--date is not a date: %s\n" % options.date)
            sys.exit(1)


def date_clock(options):
    """Return a clock pinned to --date, or None to use today."""
    if not options.date:
        return None
    pinned = options.date
    return lambda: pinned


def add_item_options(parser):
    parser.add_option(
        "-z", "--zone", dest="zone", default=None,
        help="Zone the item loads in.")
    parser.add_option(
        "-l", "--load", dest="load", default=None,
        help="Load code: R, Q, N, S or X (default: N)")
    parser.add_option(
        "-q", "--quest", dest="quest", default=None,
        help="X if the item is a quest item.")
    parser.add_option(
        "-t", "--date", dest="date", default=None,
        help="Date stamped on long_stats (default: today, UTC)")
    return parser


def option_parser(usage):
    parser = OptionParser(usage=usage)
    parser.add_option(
        "-o", "--output", dest="output",
        help="Output data directory.  Item json is written under a directory per zone. (required)")
    parser.add_option(
        "-d", "--dry-run", dest="dryrun", default=False, action="store_true",
        help="Dry run (no actual output)")
    parser.add_option(
        "-k", "--skip-schema", dest="skip_schema", default=False, action="store_true",
        help="Skip schema validation")
    parser.add_option(
        "-s", "--stdout", dest="stdout", default=False, action="store_true",
        help="Write json to stdout")
    return add_item_options(parser)


def load_option_parser(usage):
    parser = OptionParser(usage=usage)
    parser.add_option("-b", "--db", dest="db", default=None,
                      help="Sqlite DB to load into (default: ~/.torileq/eq.db)")
    parser.add_option(
        "-k", "--skip-schema", dest="skip_schema", default=False, action="store_true",
        help="Skip schema validation")
    parser.add_option(
        "-s", "--stats", dest="stats", default="short",
        help="Stats string to show when searching: short or long")
    return add_item_options(parser)
