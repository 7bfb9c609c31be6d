import json
from dataclasses import asdict

import pytest

from catalog_match import ConfigurationError, Decision, LocalMatchPipeline, MatchOptions, match_catalogs
from catalog_match.datasets import ReferenceCatalogGenerator
from catalog_match.lexicon import DEFAULT_LEXICON
from catalog_match.tracing import RecordingTracer


def test_pipeline_auto_matches_coke_and_leaves_waters_apart() -> None:
    retail = [
        {"SCANCODE": "PRD001", "PRDNAME": "Coca Cola 20oz Can"},
        {"SCANCODE": "PRD002", "PRDNAME": "Dasani Water 16.9oz", "PRICE": "$1.79"},
    ]
    vending = [
        {"id": "v1", "product_no": "", "product_name": "Coke 20 oz"},
        {"id": "v2", "product_no": "", "product_name": "Aquafina Bottled Water 16oz", "price_unit": "1.25"},
    ]

    result = match_catalogs(retail, vending)

    assert len(result.matches) == 1
    match = result.matches[0]
    assert match.product_a.source_id == "PRD001"
    assert match.product_b.source_id == "v1"
    assert match.decision is Decision.AUTO
    assert match.feature_scores.brand == 1.0
    assert match.feature_scores.size == 1.0
    assert match.feature_scores.name >= 0.6
    assert 0.82 <= match.confidence <= 1.0

    assert [product.source_id for product in result.unmatched_a] == ["PRD002"]
    assert [product.source_id for product in result.unmatched_b] == ["v2"]


def test_run_together_brand_still_matches() -> None:
    result = match_catalogs(
        [{"SCANCODE": "PRD001", "PRDNAME": "CocaCola 20oz"}],
        [{"id": "v1", "product_name": "Coke 20 oz"}],
    )

    assert [(m.product_a.source_id, m.product_b.source_id) for m in result.matches] == [("PRD001", "v1")]
    match = result.matches[0]
    assert match.product_a.brand == "coca cola"
    assert match.feature_scores.brand == 1.0
    assert match.feature_scores.size == 1.0
    assert match.decision is Decision.REVIEW
    assert result.unmatched_a == []


def test_result_is_rounded_and_json_serializable() -> None:
    result = match_catalogs(
        [{"PRDNAME": "Coca Cola 20oz Can"}],
        [{"id": "v1", "product_name": "Coke 20 oz"}],
    )

    payload = json.loads(json.dumps(asdict(result)))

    match = payload["matches"][0]
    assert match["decision"] == "auto"
    assert match["confidence"] == 0.87
    assert match["feature_scores"]["name"] == 0.67
    assert match["product_a"]["size_label"] == "20oz"
    assert match["product_a"]["extra"] == {"size_match_text": "20oz"}
    assert payload["unmatched_a"] == []
    assert payload["unmatched_b"] == []


def test_invalid_configuration_produces_no_result() -> None:
    with pytest.raises(ConfigurationError):
        match_catalogs(
            [{"PRDNAME": "Coca Cola 20oz Can"}],
            [{"id": "v1", "product_name": "Coke 20 oz"}],
            MatchOptions(auto_accept_threshold=0.5, review_threshold=0.9),
        )


def test_pipeline_uses_injected_lexicon() -> None:
    lexicon = DEFAULT_LEXICON.merged(brand_synonyms={"mtn dew": "mountain dew", "mountain dew": "mountain dew"})
    pipeline = LocalMatchPipeline.build(lexicon=lexicon)

    result = pipeline.run(
        [{"PRDNAME": "Mountain Dew 20oz"}],
        [{"id": "v1", "product_name": "Mtn Dew 20 oz"}],
    )

    assert len(result.matches) == 1
    assert result.matches[0].feature_scores.brand == 1.0


def test_pipeline_forwards_tracer() -> None:
    tracer = RecordingTracer()

    match_catalogs(
        [{"PRDNAME": "Coca Cola 20oz Can"}],
        [{"id": "v1", "product_name": "Coke 20 oz"}, {"id": "v2", "product_name": "Snickers 52.7g"}],
        tracer=tracer,
    )

    assert [event.entity_b.source_id for event in tracer.events] == ["v1", "v2"]


def test_reference_catalogs_produce_confident_matches() -> None:
    retail_rows, vending_rows = ReferenceCatalogGenerator(seed=5).generate(size=24)

    result = match_catalogs(retail_rows, vending_rows)

    assert result.decision_counts()["auto"] > 0
    assert len(result.matches) + len(result.unmatched_a) == len(retail_rows)


def test_reference_generator_is_deterministic() -> None:
    first = ReferenceCatalogGenerator(seed=9).generate(size=10, overlap_rate=0.5)
    second = ReferenceCatalogGenerator(seed=9).generate(size=10, overlap_rate=0.5)

    assert first == second
    retail_rows, vending_rows = first
    # 5 shared products, the other 5 split between the catalogs.
    assert len(retail_rows) == 8
    assert len(vending_rows) == 7
    assert ReferenceCatalogGenerator().generate(size=0) == ([], [])
