"""In-memory reductions used by the summary, map and overview routes."""
from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

from .scoring import round_half_away


def mean(values: Iterable[Optional[float]]) -> float:
    """Average of the non-null values; 0 for an empty set."""
    vals = [v for v in values if v is not None]
    if not vals:
        return 0
    return sum(vals) / len(vals)


def round2(value: float) -> float:
    return round_half_away(value, 2)


def distribution(labels: Iterable[Optional[str]]) -> Dict[str, int]:
    """Count of each distinct label, in first-seen order."""
    return dict(Counter(label for label in labels if label is not None))


def count_where(rows: Iterable[Any], attr: str, value: Any) -> int:
    return sum(1 for r in rows if getattr(r, attr) == value)


def distinct(values: Iterable[Hashable]) -> List[Hashable]:
    return list(dict.fromkeys(values))


def latest_by(rows: Iterable[Any], key: Callable[[Any], Hashable]) -> List[Any]:
    """First row per key. Rows must already be sorted newest first."""
    seen: Dict[Hashable, Any] = {}
    for r in rows:
        seen.setdefault(key(r), r)
    return list(seen.values())


def group_by(rows: Iterable[Any], key: Callable[[Any], Hashable]) -> Dict[Hashable, List[Any]]:
    groups: Dict[Hashable, List[Any]] = {}
    for r in rows:
        groups.setdefault(key(r), []).append(r)
    return groups
