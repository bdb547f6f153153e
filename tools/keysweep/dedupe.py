from __future__ import annotations

from typing import Dict, List

from .prune import remove_keys


def group_duplicates(dictionary: Dict[str, str]) -> Dict[str, List[str]]:
    """Map each translation shared by two or more keys to those keys.

    Groups appear in the order their value is first seen and list keys in
    document order.
    """
    grouped: Dict[str, List[str]] = {}
    for key, value in dictionary.items():
        grouped.setdefault(value, []).append(key)
    return {value: keys for value, keys in grouped.items() if len(keys) > 1}


def remove_duplicates(dictionary: Dict[str, str], groups: Dict[str, List[str]]) -> List[str]:
    # the first key of every group survives
    redundant = [key for keys in groups.values() for key in keys[1:]]
    return remove_keys(dictionary, redundant)
