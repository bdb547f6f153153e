from __future__ import annotations

import re
from typing import Dict, Iterable, Mapping

from .errors import InvalidConfigError

PLACEHOLDER = ":key"
DEFAULT_TEMPLATE = r"""I18n\.t\(\s*['"]:key['"][^\)]*\)"""


def validate_template(template: str) -> str:
    occurrences = template.count(PLACEHOLDER)
    if occurrences != 1:
        raise InvalidConfigError(
            f"Usage template must contain the {PLACEHOLDER} placeholder exactly once, found {occurrences}: {template!r}"
        )
    return template


def build_matcher(key: str, template: str) -> re.Pattern[str]:
    source = template.replace(PLACEHOLDER, re.escape(key))
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as exc:
        raise InvalidConfigError(f"Usage template {template!r} does not compile for key {key!r}: {exc}") from exc


def compile_matchers(keys: Iterable[str], template: str) -> Dict[str, re.Pattern[str]]:
    validate_template(template)
    return {key: build_matcher(key, template) for key in keys}


def count_usages(text: str, matchers: Mapping[str, re.Pattern[str]]) -> Dict[str, int]:
    return {key: sum(1 for _ in matcher.finditer(text)) for key, matcher in matchers.items()}


class UsageScanner:
    """Counts template matches for a fixed key set.

    Matchers are compiled once and only read afterwards, so one instance can
    be shared by every worker of a scan.
    """

    def __init__(self, keys: Iterable[str], template: str = DEFAULT_TEMPLATE) -> None:
        self.template = template
        self.matchers = compile_matchers(keys, template)

    @property
    def keys(self) -> list[str]:
        return list(self.matchers)

    def __call__(self, content: bytes) -> Dict[str, int]:
        return count_usages(content.decode("utf-8", errors="replace"), self.matchers)


def scan_file(content: bytes, keys: Iterable[str], template: str = DEFAULT_TEMPLATE) -> Dict[str, int]:
    return UsageScanner(keys, template)(content)
