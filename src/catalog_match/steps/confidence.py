from __future__ import annotations

import re
from dataclasses import dataclass

from catalog_match.models import AttributeScores, CanonicalEntity

_UPC_RE = re.compile(r"\d{8,14}")


@dataclass(frozen=True, slots=True)
class AttributeWeights:
    upc: float = 0.25
    name: float = 0.25
    brand: float = 0.20
    size: float = 0.20
    category: float = 0.05
    price: float = 0.05
    diet_penalty: float = 0.05


def is_likely_upc(value: str | None) -> bool:
    """True for purely numeric codes of 8-14 digits, not internal ids like PRD001."""
    if not value:
        return False
    return _UPC_RE.fullmatch(value) is not None


class WeightedConfidenceAggregator:
    """Availability-weighted average of attribute scores minus the diet penalty.

    An attribute missing on either side drops out of both the numerator and the
    denominator, so sparse metadata is not read as disagreement.
    """

    def __init__(self, weights: AttributeWeights | None = None) -> None:
        self._weights = weights or AttributeWeights()

    def components(
        self, scores: AttributeScores, left: CanonicalEntity, right: CanonicalEntity
    ) -> list[tuple[float, float, bool]]:
        weights = self._weights
        return [
            (scores.upc, weights.upc, is_likely_upc(left.scancode) and is_likely_upc(right.scancode)),
            (scores.name, weights.name, True),
            (scores.brand, weights.brand, bool(left.brand and right.brand)),
            (scores.size, weights.size, bool(left.size_oz and right.size_oz)),
            (scores.category, weights.category, bool(left.category and right.category)),
            (scores.price, weights.price, left.price is not None and right.price is not None),
        ]

    def confidence(self, scores: AttributeScores, left: CanonicalEntity, right: CanonicalEntity) -> float:
        available = [(score, weight) for score, weight, ok in self.components(scores, left, right) if ok]
        weight_sum = sum(weight for _, weight in available)
        if weight_sum == 0:
            return 0.0

        weighted = sum(score * weight for score, weight in available) / weight_sum
        penalty = scores.diet_penalty * self._weights.diet_penalty
        return min(1.0, max(0.0, weighted - penalty))
