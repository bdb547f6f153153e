from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Union

from . import io
from .errors import DictionaryWriteError


def remove_keys(dictionary: Dict[str, str], keys: Iterable[str]) -> List[str]:
    removed: List[str] = []
    for key in keys:
        if key in dictionary:
            del dictionary[key]
            removed.append(key)
    return removed


def remove_unused(dictionary: Dict[str, str], useless: Iterable[str]) -> List[str]:
    """Drop keys without usages from ``dictionary`` in place."""
    return remove_keys(dictionary, useless)


def persist(path: Union[str, Path], dictionary: Dict[str, str], removed: List[str]) -> bool:
    """Write ``dictionary`` back to ``path`` if anything was removed.

    Returns whether a write happened. A failed write raises
    :class:`DictionaryWriteError`; the caller's dictionary is already mutated
    at that point.
    """
    if not removed:
        return False
    try:
        io.save_dictionary(path, dictionary)
    except OSError as exc:
        raise DictionaryWriteError(path, removed, exc.strerror or str(exc)) from exc
    return True
