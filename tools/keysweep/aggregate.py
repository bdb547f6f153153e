from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from .errors import SourceReadError

log = logging.getLogger(__name__)

ScanFn = Callable[[bytes], Mapping[str, int]]


@dataclass
class UsageRecord:
    key: str
    count: int = 0
    files: List[Path] = field(default_factory=list)

    @property
    def used(self) -> bool:
        return self.count > 0


def _scan_path(path: Path, scan: ScanFn) -> Mapping[str, int]:
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise SourceReadError(f"Unable to read {path}: {exc}", path) from exc
    return scan(content)


def _merge(records: Dict[str, UsageRecord], path: Path, counts: Mapping[str, int]) -> None:
    for key, count in counts.items():
        if count > 0:
            record = records[key]
            record.count += count
            record.files.append(path)


def aggregate(
    keys: Iterable[str],
    files: Sequence[Path],
    scan: ScanFn,
    max_workers: Optional[int] = None,
) -> Dict[str, UsageRecord]:
    """Scan ``files`` concurrently and total the usages of every key.

    Workers only read and scan; results are merged on the calling thread as
    they complete, so the record map has a single writer. The map is returned
    once every file has been scanned. If any file fails, the remaining tasks
    are cancelled and the error is raised instead of a partial result.
    """
    records: Dict[str, UsageRecord] = {key: UsageRecord(key) for key in keys}
    if not files:
        return records

    with ThreadPoolExecutor(max_workers=max_workers) as ex:
        fut_map: Dict[Future[Mapping[str, int]], Path] = {
            ex.submit(_scan_path, Path(path), scan): Path(path) for path in files
        }
        try:
            for fut in as_completed(fut_map):
                path = fut_map[fut]
                counts = fut.result()
                log.debug("scanned %s", path)
                _merge(records, path, counts)
        except BaseException:
            for pending in fut_map:
                pending.cancel()
            raise

    log.info("scanned %d file(s) for %d key(s)", len(files), len(records))
    return records
