from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Declares the command-line schema and translates the parsed namespace into
ReaderOptions overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the linestream CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="linestream",
        description="Print the lines or records of a (possibly gzipped) text file.",
    )

    p.add_argument("input", nargs="?", default=None, help="Input file ('-' for stdin).")

    # --- Input decoding ---
    gz = p.add_mutually_exclusive_group()
    gz.add_argument(
        "--gzip",
        dest="gzip",
        action="store_const",
        const=True,
        default=None,
        help="Decompress the input (default: detect from a .gz suffix).",
    )
    gz.add_argument(
        "--no-gzip",
        dest="gzip",
        action="store_const",
        const=False,
        help="Never decompress the input.",
    )
    p.add_argument("--encoding", default=None, help="Text encoding of the input.")
    p.add_argument("--buffer-size", dest="buffer_size", type=int, default=None,
                   help="Number of lines kept for rewinding.")

    # --- Record mode ---
    p.add_argument("--records", action="store_true", help="Group lines into records.")
    p.add_argument("--pattern", dest="end_of_record_pattern", default=None,
                   help="Regex matching record delimiter lines (implies --records).")
    p.add_argument("--prefix-records", dest="prefix_records", action="store_true",
                   help="Group consecutive lines sharing a leading number (implies --records).")

    # --- Positioning and output ---
    p.add_argument("--skip", type=int, default=0, help="Lines to skip before output.")
    p.add_argument("--skip-records", dest="skip_records", type=int, default=0,
                   help="Records to skip before output.")
    p.add_argument("--limit", type=int, default=None, help="Maximum lines or records to print.")
    p.add_argument("-n", "--numbers", action="store_true", help="Prefix lines with their line number.")
    p.add_argument("--json", dest="json_output", action="store_true",
                   help="Emit one JSON object per line or record.")

    # --- Configuration and diagnostics ---
    p.add_argument("--config", dest="config_path", default=None, help="JSON options file.")
    p.add_argument("--dump-config", action="store_true", help="Print the effective options and exit.")
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into ReaderOptions overrides.

    None means "not given on the command line".
    """
    return {
        "gzip": args.gzip,
        "encoding": args.encoding,
        "buffer_size": args.buffer_size,
        "end_of_record_pattern": args.end_of_record_pattern,
    }


def wants_records(args: argparse.Namespace) -> bool:
    return bool(args.records or args.end_of_record_pattern or args.prefix_records or args.skip_records)


def merge_options(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge skipping overrides that were not given."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


def positive_or_none(value: Optional[int]) -> Optional[int]:
    if value is None or value < 0:
        return None
    return value
