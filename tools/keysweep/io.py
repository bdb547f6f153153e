from __future__ import annotations

import csv
import hashlib
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import orjson
from jsonschema import Draft202012Validator

from .errors import InvalidConfigError, NotFoundError

DICTIONARY_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": {"type": "string"},
}

_BOM = b"\xef\xbb\xbf"
_validator = Draft202012Validator(DICTIONARY_SCHEMA)


def load_dictionary(path: Union[str, Path]) -> Dict[str, str]:
    """Read a flat ``key -> text`` JSON document, keeping document order."""
    source = Path(path).resolve()
    if not source.is_file():
        raise NotFoundError(f'File "{source}" does not exist', source)
    raw = source.read_bytes()
    if raw.startswith(_BOM):
        raw = raw[len(_BOM):]
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise InvalidConfigError(f"{source}: unable to parse json: {exc}", source) from exc

    errors = sorted(_validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        first = errors[0]
        where = "/".join(str(part) for part in first.path) or "<root>"
        raise InvalidConfigError(
            f"{source}: not a translation dictionary ({where}: {first.message})",
            source,
        )
    return data


def dump_dictionary(dictionary: Dict[str, str]) -> bytes:
    return orjson.dumps(dictionary, option=orjson.OPT_INDENT_2)


def save_dictionary(path: Union[str, Path], dictionary: Dict[str, str]) -> None:
    # Whole-file overwrite; OSError is left for the caller to report.
    Path(path).write_bytes(dump_dictionary(dictionary))


def file_checksum(path: Union[str, Path]) -> str:
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def write_csv(path: Path, headers: List[str], rows: Iterable[Iterable[Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerows([headers, *rows])
