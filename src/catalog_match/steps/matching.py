from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from catalog_match.config import MatchOptions
from catalog_match.interfaces import ConfidenceAggregator, MatchTracer, PairScorer
from catalog_match.models import AttributeScores, CanonicalEntity, Decision
from catalog_match.tracing import TraceEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScoredPair:
    entity_a: CanonicalEntity
    entity_b: CanonicalEntity
    confidence: float
    scores: AttributeScores
    decision: Decision | None = None


@dataclass(slots=True)
class MatchOutcome:
    """Classified pairs plus both unmatched sides, before output projection."""

    matches: list[ScoredPair] = field(default_factory=list)
    unmatched_a: list[CanonicalEntity] = field(default_factory=list)
    unmatched_b: list[CanonicalEntity] = field(default_factory=list)


class GreedyBestMatcher:
    """For each A entity, scan all of B and keep the single best candidate.

    Assignment is one-sided: several A entities may settle on the same B entity.
    """

    def __init__(
        self,
        scorer: PairScorer,
        aggregator: ConfidenceAggregator,
        options: MatchOptions | None = None,
    ) -> None:
        self._scorer = scorer
        self._aggregator = aggregator
        self._options = options or MatchOptions()
        self._options.validate()

    @property
    def options(self) -> MatchOptions:
        return self._options

    def match(
        self,
        entities_a: Sequence[CanonicalEntity],
        entities_b: Sequence[CanonicalEntity],
        tracer: MatchTracer | None = None,
    ) -> MatchOutcome:
        options = self._options
        options.validate()

        outcome = MatchOutcome()
        claimed_b_ids: set[str] = set()

        for entity_a in entities_a:
            best = self.best_candidate(entity_a, entities_b, tracer)
            if best is None or best.confidence < options.review_threshold:
                outcome.unmatched_a.append(entity_a)
                continue

            decision = Decision.AUTO if best.confidence >= options.auto_accept_threshold else Decision.REVIEW
            outcome.matches.append(
                ScoredPair(
                    entity_a=best.entity_a,
                    entity_b=best.entity_b,
                    confidence=best.confidence,
                    scores=best.scores,
                    decision=decision,
                )
            )
            claimed_b_ids.add(best.entity_b.source_id)

        outcome.unmatched_b = [entity for entity in entities_b if entity.source_id not in claimed_b_ids]

        logger.debug(
            "Matched %d of %d A entities against %d B entities (%d B unclaimed)",
            len(outcome.matches),
            len(entities_a),
            len(entities_b),
            len(outcome.unmatched_b),
        )
        return outcome

    def best_candidate(
        self,
        entity_a: CanonicalEntity,
        entities_b: Sequence[CanonicalEntity],
        tracer: MatchTracer | None = None,
    ) -> ScoredPair | None:
        floor = self._options.candidate_floor
        tracing = tracer is not None and tracer.wants(entity_a)
        best: ScoredPair | None = None

        for entity_b in entities_b:
            scores = self._scorer.score(entity_a, entity_b)
            confidence = self._aggregator.confidence(scores, entity_a, entity_b)
            below_floor = confidence < floor

            if tracing:
                tracer.record(
                    TraceEvent(
                        entity_a=entity_a,
                        entity_b=entity_b,
                        scores=scores,
                        confidence=confidence,
                        below_floor=below_floor,
                    )
                )

            if below_floor:
                continue
            # Strictly greater: the first candidate seen wins ties.
            if best is None or confidence > best.confidence:
                best = ScoredPair(entity_a=entity_a, entity_b=entity_b, confidence=confidence, scores=scores)

        return best
