from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

from catalog_match.models import AttributeScores, CanonicalEntity, MatchResult, RawRecord

if TYPE_CHECKING:
    from catalog_match.steps.matching import MatchOutcome
    from catalog_match.tracing import TraceEvent


class RecordNormalizer(Protocol):
    """Step 1: turn raw source rows into canonical entities."""

    def normalize(self, record: RawRecord) -> CanonicalEntity:
        ...

    def normalize_all(self, records: Sequence[RawRecord]) -> list[CanonicalEntity]:
        ...


class PairScorer(Protocol):
    """Step 2a: independent per-attribute similarity for one pair."""

    def score(self, left: CanonicalEntity, right: CanonicalEntity) -> AttributeScores:
        ...


class ConfidenceAggregator(Protocol):
    """Step 2b: fold attribute scores into one confidence in [0, 1]."""

    def confidence(self, scores: AttributeScores, left: CanonicalEntity, right: CanonicalEntity) -> float:
        ...


class MatchTracer(Protocol):
    """Observer for the per-candidate score breakdown of selected A entities."""

    def wants(self, entity: CanonicalEntity) -> bool:
        ...

    def record(self, event: TraceEvent) -> None:
        ...


class Matcher(Protocol):
    """Step 3: pick and classify the best B candidate for every A entity."""

    def match(
        self,
        entities_a: Sequence[CanonicalEntity],
        entities_b: Sequence[CanonicalEntity],
        tracer: MatchTracer | None = None,
    ) -> MatchOutcome:
        ...


class MatchPipeline(Protocol):
    """Unified pipeline interface from raw rows to the assembled result."""

    def run(
        self,
        records_a: Sequence[RawRecord],
        records_b: Sequence[RawRecord],
        tracer: MatchTracer | None = None,
    ) -> MatchResult:
        ...
