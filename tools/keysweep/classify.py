from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from .aggregate import UsageRecord


@dataclass
class ClassificationResult:
    records: List[UsageRecord]
    used: List[UsageRecord]
    useless: List[UsageRecord]

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def useless_keys(self) -> List[str]:
        return [record.key for record in self.useless]


def classify_usages(records: Mapping[str, UsageRecord]) -> ClassificationResult:
    # sorted() is stable, so equal counts keep dictionary order
    ordered = sorted(records.values(), key=lambda record: -record.count)
    used = [record for record in ordered if record.used]
    useless = [record for record in ordered if not record.used]
    return ClassificationResult(ordered, used, useless)


def format_usage_report(result: ClassificationResult) -> Iterator[str]:
    for record in result.records:
        if record.used:
            yield f'Translation "{record.key}", usages: {record.count}'
        else:
            yield f'Translation "{record.key}" have no usages'
    yield ""
    yield f"Total translations: {result.total}, used: {len(result.used)}, useless: {len(result.useless)}"


def usage_rows(result: ClassificationResult) -> Iterator[Tuple[str, int, str]]:
    for record in result.records:
        yield record.key, record.count, ";".join(sorted(str(path) for path in record.files))


def usage_summary(result: ClassificationResult) -> Dict[str, Any]:
    return {
        "total": result.total,
        "used": len(result.used),
        "useless": len(result.useless),
        "usages": {record.key: record.count for record in result.records},
        "useless_keys": result.useless_keys,
    }
