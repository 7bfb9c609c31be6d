from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from catalog_match.models import AttributeScores, CanonicalEntity

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TraceEvent:
    """Score breakdown for one evaluated (A, B) pair."""

    entity_a: CanonicalEntity
    entity_b: CanonicalEntity
    scores: AttributeScores
    confidence: float
    below_floor: bool


class LoggingTracer:
    """Logs every candidate evaluated for the selected A source ids at DEBUG level."""

    def __init__(self, source_ids: Iterable[str]) -> None:
        self._source_ids = frozenset(source_ids)

    def wants(self, entity: CanonicalEntity) -> bool:
        return entity.source_id in self._source_ids

    def record(self, event: TraceEvent) -> None:
        logger.debug(
            "%s <-> %s confidence=%.4f below_floor=%s scores=%s",
            event.entity_a.raw_name,
            event.entity_b.raw_name,
            event.confidence,
            event.below_floor,
            event.scores,
        )


class RecordingTracer:
    """Keeps trace events in memory. ``source_ids=None`` traces every A entity."""

    def __init__(self, source_ids: Iterable[str] | None = None) -> None:
        self._source_ids = frozenset(source_ids) if source_ids is not None else None
        self.events: list[TraceEvent] = []

    def wants(self, entity: CanonicalEntity) -> bool:
        return self._source_ids is None or entity.source_id in self._source_ids

    def record(self, event: TraceEvent) -> None:
        self.events.append(event)
