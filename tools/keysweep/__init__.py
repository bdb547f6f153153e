from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from . import io
from .aggregate import aggregate
from .classify import ClassificationResult, classify_usages
from .config import ScanConfig
from .dedupe import group_duplicates, remove_duplicates
from .prune import persist, remove_unused
from .scanner import UsageScanner
from .walker import walk

log = logging.getLogger(__name__)


@dataclass
class UsageOutcome:
    classification: ClassificationResult
    removed: List[str] = field(default_factory=list)
    saved: bool = False
    checksum_before: str = ""
    checksum_after: str = ""


@dataclass
class DuplicateOutcome:
    groups: Dict[str, List[str]]
    removed: List[str] = field(default_factory=list)
    saved: bool = False


def find_usages(
    dictionary_path: Union[str, Path],
    directory: Union[str, Path],
    config: Optional[ScanConfig] = None,
    remove: bool = False,
) -> UsageOutcome:
    if config is None:
        config = ScanConfig()
    path = Path(dictionary_path).resolve()
    translations = io.load_dictionary(path)
    checksum_before = io.file_checksum(path)

    files = walk(directory, config.file_pattern(), follow_symlinks=config.follow_symlinks)
    scanner = UsageScanner(translations.keys(), config.template)
    records = aggregate(scanner.keys, files, scanner, max_workers=config.max_workers)
    classification = classify_usages(records)

    outcome = UsageOutcome(classification, checksum_before=checksum_before, checksum_after=checksum_before)
    if remove:
        outcome.removed = remove_unused(translations, classification.useless_keys)
        outcome.saved = persist(path, translations, outcome.removed)
        if outcome.saved:
            log.info("removed %d key(s) from %s", len(outcome.removed), path)
            outcome.checksum_after = io.file_checksum(path)
    return outcome


def find_duplicates(dictionary_path: Union[str, Path], remove: bool = False) -> DuplicateOutcome:
    path = Path(dictionary_path).resolve()
    translations = io.load_dictionary(path)
    outcome = DuplicateOutcome(group_duplicates(translations))
    if remove:
        outcome.removed = remove_duplicates(translations, outcome.groups)
        outcome.saved = persist(path, translations, outcome.removed)
    return outcome
