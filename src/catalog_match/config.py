from __future__ import annotations

import math
from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when matcher or lexicon configuration is unusable."""


DEFAULT_AUTO_ACCEPT_THRESHOLD = 0.82
DEFAULT_REVIEW_THRESHOLD = 0.6
DEFAULT_CANDIDATE_FLOOR_RATIO = 0.65


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """Decision thresholds for the matcher.

    ``candidate_floor_ratio`` scales ``review_threshold`` into the confidence
    below which a candidate is dropped without being compared to the current best.
    """

    auto_accept_threshold: float = DEFAULT_AUTO_ACCEPT_THRESHOLD
    review_threshold: float = DEFAULT_REVIEW_THRESHOLD
    candidate_floor_ratio: float = DEFAULT_CANDIDATE_FLOOR_RATIO

    @classmethod
    def from_overrides(cls, auto: float | None = None, review: float | None = None) -> "MatchOptions":
        options = cls(
            auto_accept_threshold=DEFAULT_AUTO_ACCEPT_THRESHOLD if auto is None else auto,
            review_threshold=DEFAULT_REVIEW_THRESHOLD if review is None else review,
        )
        options.validate()
        return options

    @property
    def candidate_floor(self) -> float:
        return self.review_threshold * self.candidate_floor_ratio

    def validate(self) -> None:
        for name in ("auto_accept_threshold", "review_threshold", "candidate_floor_ratio"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number, got {value}")
        if not self.review_threshold <= self.auto_accept_threshold:
            raise ConfigurationError(
                f"review_threshold ({self.review_threshold}) must be <= "
                f"auto_accept_threshold ({self.auto_accept_threshold})"
            )
        if not 0.0 <= self.candidate_floor_ratio <= 1.0:
            raise ConfigurationError(
                f"candidate_floor_ratio must be within [0, 1], got {self.candidate_floor_ratio}"
            )
