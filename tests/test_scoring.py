import pytest

from catalog_match.datasets import RETAIL_PROFILE, VENDING_PROFILE
from catalog_match.models import CanonicalEntity
from catalog_match.steps import FeatureScorer, ProductNormalizer, WeightedConfidenceAggregator
from catalog_match.steps.scoring import bigram_dice, score_relative, score_size, score_upc, token_jaccard


def _retail(name: str, **fields: str) -> CanonicalEntity:
    return ProductNormalizer(RETAIL_PROFILE).normalize({"PRDNAME": name, **fields})


def _vending(name: str, **fields: str) -> CanonicalEntity:
    return ProductNormalizer(VENDING_PROFILE).normalize({"id": "b1", "product_name": name, **fields})


def test_coke_scenario_scores() -> None:
    left = _retail("Coca Cola 20oz Can")
    right = _vending("Coke 20 oz")

    scores = FeatureScorer().score(left, right)
    confidence = WeightedConfidenceAggregator().confidence(scores, left, right)

    assert scores.brand == 1.0
    assert scores.size == 1.0
    assert scores.name == pytest.approx(2 / 3)
    assert scores.diet_penalty == 0.0
    assert confidence == pytest.approx(0.872, abs=0.005)


def test_water_scenario_scores() -> None:
    left = _retail("Dasani Water 16.9oz")
    right = _vending("Aquafina Bottled Water 16oz")

    scores = FeatureScorer().score(left, right)
    confidence = WeightedConfidenceAggregator().confidence(scores, left, right)

    assert scores.brand == 0.0
    assert scores.size == pytest.approx(0.92, abs=0.005)
    assert scores.name == pytest.approx(0.41, abs=0.01)
    assert confidence == pytest.approx(0.44, abs=0.01)


def test_self_match_scores_are_perfect() -> None:
    entity = _retail(
        "Red Bull Energy Drink 8.4oz",
        SCANCODE="611269991000",
        CATEGORY2="Energy Drinks",
        PRICE="3.49",
    )

    scores = FeatureScorer().score(entity, entity)

    assert scores.upc == 1.0
    assert scores.name == 1.0
    assert scores.brand == 1.0
    assert scores.size == 1.0
    assert scores.category == 1.0
    assert scores.price == 1.0
    assert scores.diet_penalty == 0.0
    assert WeightedConfidenceAggregator().confidence(scores, entity, entity) == 1.0


def test_self_match_without_any_signal_is_zero() -> None:
    entity = CanonicalEntity(source="retail", source_id="x", raw_name="", normalized_name="", tokens=())

    scores = FeatureScorer().score(entity, entity)

    assert scores.name == 0.0
    assert WeightedConfidenceAggregator().confidence(scores, entity, entity) == 0.0


def test_upc_requires_both_sides() -> None:
    assert score_upc("049000028911", "049000028911") == 1.0
    assert score_upc("049000028911", "049000028912") == 0.0
    assert score_upc(None, "049000028911") == 0.0
    assert score_upc(None, None) == 0.0


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        (None, None, 0.0),
        ("coca cola", None, 0.2),
        (None, "pepsi", 0.2),
        ("coca cola", "coca cola", 1.0),
        ("Coke", "coca cola", 0.7),
        ("pepsi", "coca cola", 0.0),
    ],
)
def test_brand_tiers(left: str | None, right: str | None, expected: float) -> None:
    assert FeatureScorer().score_brand(left, right) == expected


def test_size_score_penalizes_relative_difference() -> None:
    assert score_size(None, 12) == 0.0
    assert score_size(12, 12) == 1.0
    assert score_size(10, 20) == pytest.approx(0.25)
    assert score_size(10, 40) == 0.0


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        (None, None, 0.0),
        ("Soda", None, 0.2),
        ("Soda", "Cola Drinks", 1.0),
        ("Soda", "Bottled Water", 0.6),
        ("Soda", "Chips", 0.0),
        ("Household", "household", 1.0),
    ],
)
def test_category_buckets(left: str | None, right: str | None, expected: float) -> None:
    assert FeatureScorer().score_category(left, right) == expected


def test_price_score_within_tolerance() -> None:
    assert score_relative(2.0, 2.0, 0.25) == 1.0
    assert score_relative(0.0, 0.0, 0.25) == 1.0
    assert score_relative(0.0, 2.0, 0.25) == 0.0
    assert score_relative(2.0, 2.2, 0.25) == pytest.approx(1 - (0.2 / 2.1) / 0.25)
    assert score_relative(1.0, 2.0, 0.25) == 0.0
    assert score_relative(None, 1.0, 0.25) == 0.0


def test_token_jaccard_ignores_order() -> None:
    assert token_jaccard(("red bull", "12oz"), ("12oz", "red bull")) == 1.0
    assert token_jaccard(("a", "b"), ("b", "c")) == pytest.approx(1 / 3)
    assert token_jaccard((), ("a",)) == 0.0


def test_bigram_dice_respects_multiplicity() -> None:
    assert bigram_dice("aaa", "aa") == pytest.approx(2 / 3)
    assert bigram_dice("dasani", "dasani") == 1.0
    assert bigram_dice("a", "a") == 0.0


def test_diet_flag_mismatch_is_penalized() -> None:
    regular = _retail("Coca Cola 20oz")
    diet = _vending("Coca Cola Zero 20oz")

    scores = FeatureScorer().score(regular, diet)

    assert scores.diet_penalty == 1.0
