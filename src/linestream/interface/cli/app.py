from __future__ import annotations

"""
Command Line Interface Application Controller.

Resolves options (defaults, JSON file, command line), configures logging,
opens the input through LineIterator and renders lines or records to stdout.
"""

import json
import os
import sys
from itertools import islice
from typing import Any, Iterator, List, Optional, TextIO

from linestream.core.boundaries import PrefixChangeBoundary
from linestream.domain.config import load_options, options_to_dict, validate_options
from linestream.domain.errors import LineStreamError
from linestream.infra.logging import LoggingConfig, configure_logging, get_logger
from linestream.interface.cli import args as cli_args
from linestream.iterator import LineIterator

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    """
    Run the linestream CLI.

    Args:
        argv: Command line arguments. Defaults to sys.argv.
        stdout: Output stream. Defaults to sys.stdout.

    Returns:
        int: Process exit code.
    """
    out = stdout or sys.stdout
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "WARNING"))

    # 1. Options: defaults < config file < command line
    base = load_options(args.config_path) if args.config_path else {}
    raw = cli_args.merge_options(base, cli_args.args_to_overrides(args))
    options, warnings = validate_options(raw)
    for w in warnings:
        logger.warning(f"Option constraint: {w}")

    if args.dump_config:
        print(json.dumps(options_to_dict(options), ensure_ascii=False, indent=2), file=out)
        return 0

    # 2. Input resolution
    if args.input is None:
        parser.print_usage(sys.stderr)
        print("ERROR: no input given", file=sys.stderr)
        return 2
    if args.input == "-":
        source: Any = sys.stdin.buffer if options.gzip else sys.stdin
    elif not os.path.exists(args.input):
        print(f"ERROR: input does not exist: {args.input}", file=sys.stderr)
        return 2
    else:
        source = args.input

    boundary = PrefixChangeBoundary() if args.prefix_records else None
    limit = cli_args.positive_or_none(args.limit)

    # 3. Rendering
    try:
        with LineIterator(source, options, boundary=boundary) as it:
            it.skip(max(args.skip, 0))
            if cli_args.wants_records(args):
                it.skip_records(max(args.skip_records, 0))
                _print_records(it, islice(it.each_record(), limit), args.json_output, out)
            else:
                _print_lines(it, limit, args.numbers, args.json_output, out)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except (LineStreamError, OSError, UnicodeDecodeError) as e:
        logger.debug("Read failure", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_lines(it: LineIterator, limit: Optional[int], numbers: bool, as_json: bool, out: TextIO) -> None:
    for line, number in islice(it.each_with_index(), limit):
        if as_json:
            print(json.dumps({"line": number, "text": line}, ensure_ascii=False), file=out)
        elif numbers:
            print(f"{number:6d}  {line}", file=out)
        else:
            print(line, file=out)


def _print_records(it: LineIterator, records: Iterator[List[str]], as_json: bool, out: TextIO) -> None:
    first = True
    for record in records:
        if as_json:
            payload = {"record": it.last_record_number, "lines": record}
            print(json.dumps(payload, ensure_ascii=False), file=out)
            continue
        if not first:
            print("", file=out)
        print("\n".join(record), file=out)
        first = False

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
