from __future__ import annotations

import logging
import os
import re
from collections import deque
from pathlib import Path
from typing import Deque, List, Set, Tuple, Union

from .errors import InvalidConfigError, NotFoundError, SourceReadError

DEFAULT_MASK = "js,jsx,ts,tsx"

log = logging.getLogger(__name__)

_BAD_EXTENSION_RE = re.compile(r"[\s/\\]")


def parse_mask(mask: str) -> List[str]:
    """Split ``"js, ts"`` into ``["js", "ts"]``, rejecting unusable segments."""
    if not isinstance(mask, str) or not mask.strip():
        raise InvalidConfigError("Mask should be a non-empty, comma-separated list of extensions")
    extensions: List[str] = []
    for part in mask.split(","):
        ext = part.strip().lstrip(".")
        if not ext:
            raise InvalidConfigError(f"Mask {mask!r} contains an empty extension")
        if _BAD_EXTENSION_RE.search(ext):
            raise InvalidConfigError(f"Mask {mask!r}: invalid extension {ext!r}")
        extensions.append(ext)
    return extensions


def build_mask_pattern(mask: str = DEFAULT_MASK) -> re.Pattern[str]:
    alternation = "|".join(r"\." + re.escape(ext) for ext in parse_mask(mask))
    return re.compile(f"(?:{alternation})$")


def _dir_identity(path: Path) -> Tuple[int, int]:
    st = path.stat()
    return st.st_dev, st.st_ino


def walk(root: Union[str, Path], pattern: re.Pattern[str], follow_symlinks: bool = True) -> List[Path]:
    """Return every file below ``root`` whose name matches ``pattern``.

    Breadth-first; entries of each directory are visited in name order.
    Symlinked directories are followed unless ``follow_symlinks`` is false, and
    a directory reached twice (symlink cycle or alias) is only listed once.
    A file reached through a symlink is listed once, under its resolved path.
    """
    start = Path(root)
    if not start.is_dir():
        raise NotFoundError(f'Directory "{start.resolve()}" does not exist', start)
    start = start.resolve()

    files: List[Path] = []
    seen: Set[Tuple[int, int]] = set()
    seen_files: Set[Path] = set()
    pending: Deque[Path] = deque([start])
    while pending:
        current = pending.popleft()
        try:
            identity = _dir_identity(current)
            if identity in seen:
                log.debug("skipping already visited directory %s", current)
                continue
            seen.add(identity)
            entries = sorted(os.scandir(current), key=lambda entry: entry.name)
        except OSError as exc:
            raise SourceReadError(f"Unable to list directory {current}: {exc}", current) from exc

        log.debug("scanning directory %s (%d entries)", current, len(entries))
        for entry in entries:
            path = Path(current, entry.name)
            try:
                if entry.is_dir(follow_symlinks=follow_symlinks):
                    pending.append(path)
                    continue
                is_file = entry.is_file()
            except OSError as exc:
                raise SourceReadError(f"Unable to stat {path}: {exc}", path) from exc
            if is_file and pattern.search(entry.name):
                resolved = path.resolve()
                if resolved in seen_files:
                    log.debug("skipping %s, already listed as %s", path, resolved)
                    continue
                seen_files.add(resolved)
                files.append(resolved)

    log.info("found %d file(s) under %s", len(files), start)
    return files
