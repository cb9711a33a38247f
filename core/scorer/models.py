#!/usr/bin/env python3
"""
Scoring Models - Data structures for ranked results.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, TypeVar

T = TypeVar('T')


@dataclass
class ScoredItem(Generic[T]):
    """An item with the score it was ranked by."""
    item: T
    score: float = 0.0
    matched: bool = False
    components: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RankedPage(Generic[T]):
    """One page of a ranked result set."""
    results: List[ScoredItem[T]] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
