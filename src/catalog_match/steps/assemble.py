from __future__ import annotations

from catalog_match.models import CanonicalEntity, MatchRecord, MatchResult, ProductSummary
from catalog_match.steps.matching import MatchOutcome

SCORE_DIGITS = 2


class ResultAssembler:
    """Projects matcher output into the serializable result shape."""

    def __init__(self, digits: int = SCORE_DIGITS) -> None:
        self._digits = digits

    def assemble(self, outcome: MatchOutcome) -> MatchResult:
        matches = [
            MatchRecord(
                product_a=summarize(pair.entity_a),
                product_b=summarize(pair.entity_b),
                confidence=round(pair.confidence, self._digits),
                decision=pair.decision,
                feature_scores=pair.scores.rounded(self._digits),
            )
            for pair in outcome.matches
        ]
        return MatchResult(
            matches=matches,
            unmatched_a=[summarize(entity) for entity in outcome.unmatched_a],
            unmatched_b=[summarize(entity) for entity in outcome.unmatched_b],
        )


def summarize(entity: CanonicalEntity) -> ProductSummary:
    return ProductSummary(
        source=entity.source,
        source_id=entity.source_id,
        name=entity.raw_name,
        brand=entity.brand,
        size_oz=entity.size_oz,
        size_label=entity.size_label,
        price=entity.price,
        category=entity.category,
        scancode=entity.scancode,
        extra=dict(entity.attributes),
    )
