from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson

from . import find_duplicates, find_usages, io
from .classify import format_usage_report, usage_rows, usage_summary
from .config import load_config, with_overrides
from .errors import EXIT_CHECK_FAILED, EXIT_OK, DictionaryWriteError, KeysweepError


def _error(message: str) -> None:
    print(f"[keysweep] {message}", file=sys.stderr)


def _print_json(payload: Dict[str, Any]) -> None:
    print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keysweep",
        description="Find duplicate and unused keys in JSON translation dictionaries.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scan progress to stderr")
    commands = parser.add_subparsers(dest="command", required=True)

    duplicates = commands.add_parser("duplicates", help="List all value duplicates in translation file")
    duplicates.add_argument("file", help="Translation dictionary (JSON)")
    duplicates.add_argument("-r", "--remove", action="store_true", help="Remove found duplicates, keeping the first key")
    duplicates.add_argument("--check", action="store_true", help="Exit with status 1 if duplicates remain")

    template = commands.add_parser("template", help="Show the usage template")
    template.add_argument("--config", help="JSON config file overriding the defaults")

    usages = commands.add_parser("usages", help="Count key usages in a source tree")
    usages.add_argument("file", help="Translation dictionary (JSON)")
    usages.add_argument("directory", help="Source tree to scan")
    usages.add_argument("-r", "--remove", action="store_true", help="Remove unused translations from file")
    usages.add_argument("-m", "--mask", help="Comma-separated file extensions to search in (default: js,jsx,ts,tsx)")
    usages.add_argument("--workers", type=int, help="Number of scanning threads")
    usages.add_argument("--config", help="JSON config file overriding the defaults")
    usages.add_argument("--report", help="Write a CSV of every key, its usage count and files")
    usages.add_argument("--json", action="store_true", help="Print a JSON summary instead of text")
    usages.add_argument("--check", action="store_true", help="Exit with status 1 if unused keys remain")
    return parser


def run_duplicates(args: argparse.Namespace) -> int:
    outcome = find_duplicates(args.file, remove=args.remove)
    print(f"Found {len(outcome.groups)} duplicates")
    for value, keys in outcome.groups.items():
        print(f'Translation "{value}", keys: {", ".join(keys)}')
        if args.remove:
            print(f"Removed keys: {', '.join(keys[1:])}")
    if outcome.saved:
        print("File has been saved successfully!")
    if args.check and outcome.groups and not outcome.saved:
        return EXIT_CHECK_FAILED
    return EXIT_OK


def run_template(args: argparse.Namespace) -> int:
    print(load_config(args.config).template)
    return EXIT_OK


def run_usages(args: argparse.Namespace) -> int:
    config = with_overrides(load_config(args.config), mask=args.mask, max_workers=args.workers)
    outcome = find_usages(args.file, args.directory, config=config, remove=args.remove)
    result = outcome.classification

    if args.report:
        try:
            io.write_csv(Path(args.report), ["key", "count", "files"], usage_rows(result))
        except OSError as exc:
            raise KeysweepError(f"Unable to write report {args.report}: {exc}", args.report) from exc

    if args.json:
        payload = usage_summary(result)
        payload["removed"] = outcome.removed
        payload["saved"] = outcome.saved
        _print_json(payload)
    else:
        for line in format_usage_report(result):
            print(line)
        if outcome.saved:
            print(f"Removed {len(outcome.removed)} useless translation(s)")
            print("File was saved successfully!")

    if args.check and result.useless and not outcome.saved:
        return EXIT_CHECK_FAILED
    return EXIT_OK


COMMANDS = {
    "duplicates": run_duplicates,
    "template": run_template,
    "usages": run_usages,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return COMMANDS[args.command](args)
    except DictionaryWriteError as exc:
        _error(str(exc))
        _error(f"keys removed in memory: {', '.join(exc.removed)}")
        return exc.exit_code
    except KeysweepError as exc:
        _error(str(exc))
        return exc.exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
