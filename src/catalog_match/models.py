from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

RawRecord = Mapping[str, str]


@dataclass(frozen=True, slots=True)
class CanonicalEntity:
    """Normalized view of one catalog row, ready for pairwise scoring."""

    source: str
    source_id: str
    raw_name: str
    normalized_name: str
    tokens: tuple[str, ...]
    brand: str | None = None
    size_oz: float | None = None
    size_label: str | None = None
    category: str | None = None
    price: float | None = None
    is_diet: bool = False
    scancode: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class AttributeScores:
    """Per-attribute similarity for one entity pair.

    Every score is within [0, 1]; ``diet_penalty`` is 1 when exactly one side is a
    diet product and 0 otherwise.
    """

    upc: float
    name: float
    brand: float
    size: float
    category: float
    price: float
    diet_penalty: float

    def rounded(self, digits: int = 2) -> "AttributeScores":
        return AttributeScores(
            upc=round(self.upc, digits),
            name=round(self.name, digits),
            brand=round(self.brand, digits),
            size=round(self.size, digits),
            category=round(self.category, digits),
            price=round(self.price, digits),
            diet_penalty=round(self.diet_penalty, digits),
        )


class Decision(StrEnum):
    AUTO = "auto"
    REVIEW = "review"


@dataclass(slots=True)
class ProductSummary:
    """Output projection of a canonical entity."""

    source: str
    source_id: str
    name: str
    brand: str | None = None
    size_oz: float | None = None
    size_label: str | None = None
    price: float | None = None
    category: str | None = None
    scancode: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class MatchRecord:
    """A catalog A product paired with its best catalog B candidate."""

    product_a: ProductSummary
    product_b: ProductSummary
    confidence: float
    decision: Decision
    feature_scores: AttributeScores


@dataclass(slots=True)
class MatchResult:
    matches: list[MatchRecord] = field(default_factory=list)
    unmatched_a: list[ProductSummary] = field(default_factory=list)
    unmatched_b: list[ProductSummary] = field(default_factory=list)

    def decision_counts(self) -> dict[str, int]:
        counts = {decision.value: 0 for decision in Decision}
        for match in self.matches:
            counts[match.decision.value] += 1
        return counts
