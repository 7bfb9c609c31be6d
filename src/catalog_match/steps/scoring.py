from __future__ import annotations

from collections import Counter

from catalog_match.lexicon import DEFAULT_LEXICON, Lexicon
from catalog_match.models import AttributeScores, CanonicalEntity

DEFAULT_PRICE_TOLERANCE = 0.25
SIZE_DIFF_MULTIPLIER = 1.5


class FeatureScorer:
    """Independent per-attribute similarity between two canonical entities.

    Missing values score 0 here; whether an attribute counts at all is decided
    by the confidence aggregator.
    """

    def __init__(self, lexicon: Lexicon = DEFAULT_LEXICON, price_tolerance: float = DEFAULT_PRICE_TOLERANCE) -> None:
        self._lexicon = lexicon
        self._price_tolerance = price_tolerance

    def score(self, left: CanonicalEntity, right: CanonicalEntity) -> AttributeScores:
        return AttributeScores(
            upc=score_upc(left.scancode, right.scancode),
            name=score_name(left, right),
            brand=self.score_brand(left.brand, right.brand),
            size=score_size(left.size_oz, right.size_oz),
            category=self.score_category(left.category, right.category),
            price=score_relative(left.price, right.price, self._price_tolerance),
            diet_penalty=0.0 if left.is_diet == right.is_diet else 1.0,
        )

    def score_brand(self, left: str | None, right: str | None) -> float:
        if not left and not right:
            return 0.0
        if not left or not right:
            return 0.2
        if left == right:
            return 1.0
        if self._lexicon.canonical_brand(left) == self._lexicon.canonical_brand(right):
            return 0.7
        return 0.0

    def score_category(self, left: str | None, right: str | None) -> float:
        if not left and not right:
            return 0.0
        if not left or not right:
            return 0.2
        bucket_left = self._lexicon.category_bucket(left)
        bucket_right = self._lexicon.category_bucket(right)
        if bucket_left == bucket_right:
            return 1.0
        if bucket_left and bucket_right and bucket_left.split(" ")[0] == bucket_right.split(" ")[0]:
            return 0.6
        return 0.0


def score_upc(left: str | None, right: str | None) -> float:
    if not left or not right:
        return 0.0
    return 1.0 if left == right else 0.0


def score_name(left: CanonicalEntity, right: CanonicalEntity) -> float:
    return max(
        token_jaccard(left.tokens, right.tokens),
        bigram_dice(left.normalized_name, right.normalized_name),
    )


def token_jaccard(left: tuple[str, ...], right: tuple[str, ...]) -> float:
    left_set = set(left)
    right_set = set(right)
    if not left_set or not right_set:
        return 0.0
    return len(left_set & right_set) / len(left_set | right_set)


def bigram_dice(left: str, right: str) -> float:
    left_grams = _bigrams(left)
    right_grams = _bigrams(right)
    if not left_grams or not right_grams:
        return 0.0
    shared = sum((Counter(left_grams) & Counter(right_grams)).values())
    return 2 * shared / (len(left_grams) + len(right_grams))


def score_size(left: float | None, right: float | None) -> float:
    if not left or not right:
        return 0.0
    relative_diff = abs(left - right) / max(left, right)
    return _clamp(1.0 - relative_diff * SIZE_DIFF_MULTIPLIER)


def score_relative(left: float | None, right: float | None, tolerance: float) -> float:
    if left is None or right is None:
        return 0.0
    if left == 0 and right == 0:
        return 1.0
    if left == 0 or right == 0:
        return 0.0
    mean = abs(left + right) / 2
    if mean == 0:
        return 0.0
    ratio = abs(left - right) / mean
    if ratio <= tolerance:
        return 1.0 - ratio / tolerance
    return 0.0


def _bigrams(value: str) -> list[str]:
    text = " ".join(value.split())
    return [text[i : i + 2] for i in range(len(text) - 1)]


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(high, max(low, value))
