import itertools

import pytest

from catalog_match.datasets import RETAIL_PROFILE, VENDING_PROFILE, ReferenceCatalogGenerator
from catalog_match.models import AttributeScores, CanonicalEntity
from catalog_match.steps import AttributeWeights, FeatureScorer, ProductNormalizer, WeightedConfidenceAggregator
from catalog_match.steps.confidence import is_likely_upc


def _entity(**overrides: object) -> CanonicalEntity:
    values: dict[str, object] = {
        "source": "retail",
        "source_id": "1",
        "raw_name": "Dasani Water 20oz",
        "normalized_name": "dasani water 20oz",
        "tokens": ("dasani", "water", "20oz"),
        "brand": "dasani",
        "size_oz": 20.0,
    }
    values.update(overrides)
    return CanonicalEntity(**values)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("049000028911", True),
        ("12345678", True),
        ("12345678901234", True),
        ("1234567", False),
        ("123456789012345", False),
        ("PRD001", False),
        ("", False),
        (None, False),
    ],
)
def test_is_likely_upc(value: str | None, expected: bool) -> None:
    assert is_likely_upc(value) is expected


def test_missing_optional_attribute_does_not_penalize() -> None:
    scorer = FeatureScorer()
    aggregator = WeightedConfidenceAggregator()
    left = _entity(category="Bottled Water")
    right = _entity()

    scores = scorer.score(left, right)

    assert scores.category == 0.2
    assert aggregator.confidence(scores, left, right) == 1.0


def test_internal_ids_do_not_count_as_upc_evidence() -> None:
    aggregator = WeightedConfidenceAggregator()
    left = _entity(scancode="PRD001")
    right = _entity(scancode="PRD001")
    scores = AttributeScores(upc=1.0, name=0.5, brand=0.0, size=0.0, category=0.0, price=0.0, diet_penalty=0.0)

    # Only name, brand and size are available: (0.5 * 0.25) / 0.65
    assert aggregator.confidence(scores, left, right) == pytest.approx(0.125 / 0.65)


def test_diet_penalty_is_subtracted() -> None:
    left = _entity()
    right = _entity(is_diet=True)

    scores = FeatureScorer().score(left, right)

    assert WeightedConfidenceAggregator().confidence(scores, left, right) == pytest.approx(0.95)


def test_confidence_is_clamped_at_zero() -> None:
    left = _entity(brand=None, size_oz=None)
    right = _entity(brand=None, size_oz=None, is_diet=True)
    scores = AttributeScores(upc=0.0, name=0.01, brand=0.0, size=0.0, category=0.0, price=0.0, diet_penalty=1.0)

    assert WeightedConfidenceAggregator().confidence(scores, left, right) == 0.0


def test_custom_weights() -> None:
    aggregator = WeightedConfidenceAggregator(AttributeWeights(name=1.0, brand=0.0, size=0.0))
    left = _entity()
    right = _entity()
    scores = AttributeScores(upc=0.0, name=0.4, brand=1.0, size=1.0, category=0.0, price=0.0, diet_penalty=0.0)

    assert aggregator.confidence(scores, left, right) == pytest.approx(0.4)


def test_confidence_is_bounded_for_reference_catalogs() -> None:
    retail_rows, vending_rows = ReferenceCatalogGenerator(seed=3).generate(size=16)
    entities_a = ProductNormalizer(RETAIL_PROFILE).normalize_all(retail_rows)
    entities_b = ProductNormalizer(VENDING_PROFILE).normalize_all(vending_rows)
    scorer = FeatureScorer()
    aggregator = WeightedConfidenceAggregator()

    for left, right in itertools.product(entities_a, entities_b):
        scores = scorer.score(left, right)
        for value in (scores.upc, scores.name, scores.brand, scores.size, scores.category, scores.price):
            assert 0.0 <= value <= 1.0
        assert 0.0 <= aggregator.confidence(scores, left, right) <= 1.0
