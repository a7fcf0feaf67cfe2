import re
import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from loguru import logger

from core.types import LabTest

# ----------------------------
# Result text -> status
# ----------------------------
NEGATIVE = re.compile(
    r"^negative$|^non-reactive$|^not detected$|^absent$|no evidence|no antibodies detected|no hiv.*detected",
    re.I,
)
IMMUNE = re.compile(r"evidence of immunity", re.I)
POSITIVE = re.compile(r"^positive$|^reactive$|^detected$|antibodies detected|hiv.*detected", re.I)


def standardize_result(result: Optional[str]) -> str:
    if not result:
        return "pending"

    clean = result.lower().strip()

    if NEGATIVE.search(clean):
        return "negative"
    # immune counts as a good outcome
    if IMMUNE.search(clean):
        return "negative"
    if POSITIVE.search(clean):
        return "positive"
    # numeric values, borderline wording and anything unknown need review
    return "pending"


def with_statuses(tests: List[LabTest]) -> List[LabTest]:
    """Copies of ``tests`` with any blank status read from the result text."""
    return [t if t.status else replace(t, status=standardize_result(t.result)) for t in tests]


# ----------------------------
# Deduplication
# ----------------------------
# positives must never be silently discarded
STATUS_PRIORITY: Dict[str, int] = {
    "positive": 4,
    "negative": 3,
    "pending": 2,
    "inconclusive": 1,
}


@dataclass
class TestConflict:
    test_name: str
    occurrences: List[LabTest]
    suggested: LabTest


@dataclass
class DeduplicationResult:
    tests: List[LabTest] = field(default_factory=list)
    conflicts: List[TestConflict] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)


def _priority(status: str) -> int:
    p = STATUS_PRIORITY.get(status)
    if p is None:
        logger.warning(f"Unknown test status encountered: {status!r}")
        return 0
    return p


def dedup_key(name: str) -> str:
    """'HIV-1/2', 'hiv 1/2' and 'Hiv_1 2' all map to 'hiv 1 2'."""
    key = re.sub(r"[-_/]", " ", (name or "").lower().strip())
    key = re.sub(r"\s+", " ", key).strip()
    if not key:
        logger.warning(f"Empty test name encountered in deduplication: {name!r}")
        return f"__empty_{uuid.uuid4().hex}__"
    return key


def _best(occurrences: List[LabTest]) -> LabTest:
    best = occurrences[0]
    for cur in occurrences[1:]:
        bp, cp = _priority(best.status), _priority(cur.status)
        if cp == bp:
            if len(cur.result or "") > len(best.result or ""):
                best = cur
        elif cp > bp:
            best = cur
    return best


def deduplicate_tests(tests: List[LabTest]) -> DeduplicationResult:
    """Collapse repeated tests (overlapping pages / screenshots).

    Same status -> keep the most detailed row. Different statuses -> keep the
    clinically most significant row and report a conflict for review.
    """
    if not tests:
        return DeduplicationResult(stats={
            "total_input": 0, "unique_tests": 0, "duplicates_removed": 0, "conflicts_detected": 0,
        })

    logger.info(f"Deduplicating {len(tests)} test rows")

    groups: Dict[str, List[LabTest]] = {}
    for t in tests:
        groups.setdefault(dedup_key(t.name), []).append(t)

    unique: List[LabTest] = []
    conflicts: List[TestConflict] = []
    removed = 0

    for occurrences in groups.values():
        if len(occurrences) == 1:
            unique.append(occurrences[0])
            continue

        removed += len(occurrences) - 1
        statuses = {o.status for o in occurrences}
        best = _best(occurrences)
        unique.append(best)

        if len(statuses) == 1:
            logger.info(f"Collapsed {len(occurrences)} x {occurrences[0].name!r} ({best.status})")
        else:
            conflicts.append(TestConflict(occurrences[0].name, occurrences, best))
            logger.warning(
                f"Conflicting results for {occurrences[0].name!r}: {sorted(statuses)}; using {best.status}"
            )

    stats = {
        "total_input": len(tests),
        "unique_tests": len(unique),
        "duplicates_removed": removed,
        "conflicts_detected": len(conflicts),
    }
    logger.info(f"Deduplication complete: {stats}")
    return DeduplicationResult(unique, conflicts, stats)
