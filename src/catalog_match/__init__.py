"""Two-catalog retail product matching: normalization, scoring and decisions."""

from catalog_match.config import ConfigurationError, MatchOptions
from catalog_match.models import AttributeScores, CanonicalEntity, Decision, MatchRecord, MatchResult, ProductSummary
from catalog_match.runners.local import LocalMatchPipeline, match_catalogs

__all__ = [
    "AttributeScores",
    "CanonicalEntity",
    "ConfigurationError",
    "Decision",
    "LocalMatchPipeline",
    "MatchOptions",
    "MatchRecord",
    "MatchResult",
    "ProductSummary",
    "match_catalogs",
]
