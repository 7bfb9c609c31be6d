from __future__ import annotations

import logging
from collections.abc import Sequence

from catalog_match.config import MatchOptions
from catalog_match.datasets.profiles import RETAIL_PROFILE, VENDING_PROFILE
from catalog_match.interfaces import Matcher, MatchTracer, RecordNormalizer
from catalog_match.lexicon import DEFAULT_LEXICON, Lexicon
from catalog_match.models import MatchResult, RawRecord
from catalog_match.schema import SourceProfile
from catalog_match.steps.assemble import ResultAssembler
from catalog_match.steps.confidence import WeightedConfidenceAggregator
from catalog_match.steps.matching import GreedyBestMatcher
from catalog_match.steps.normalize import ProductNormalizer
from catalog_match.steps.scoring import FeatureScorer

logger = logging.getLogger(__name__)


class LocalMatchPipeline:
    """In-process runner: normalize both catalogs, match, assemble."""

    def __init__(
        self,
        normalizer_a: RecordNormalizer,
        normalizer_b: RecordNormalizer,
        matcher: Matcher,
        assembler: ResultAssembler | None = None,
    ) -> None:
        self._normalizer_a = normalizer_a
        self._normalizer_b = normalizer_b
        self._matcher = matcher
        self._assembler = assembler or ResultAssembler()

    @classmethod
    def build(
        cls,
        options: MatchOptions | None = None,
        *,
        profile_a: SourceProfile = RETAIL_PROFILE,
        profile_b: SourceProfile = VENDING_PROFILE,
        lexicon: Lexicon = DEFAULT_LEXICON,
    ) -> "LocalMatchPipeline":
        return cls(
            normalizer_a=ProductNormalizer(profile_a, lexicon),
            normalizer_b=ProductNormalizer(profile_b, lexicon),
            matcher=GreedyBestMatcher(
                scorer=FeatureScorer(lexicon),
                aggregator=WeightedConfidenceAggregator(),
                options=options,
            ),
        )

    def run(
        self,
        records_a: Sequence[RawRecord],
        records_b: Sequence[RawRecord],
        tracer: MatchTracer | None = None,
    ) -> MatchResult:
        entities_a = self._normalizer_a.normalize_all(records_a)
        entities_b = self._normalizer_b.normalize_all(records_b)
        logger.info("Matching %d A records against %d B records", len(entities_a), len(entities_b))

        outcome = self._matcher.match(entities_a, entities_b, tracer=tracer)
        result = self._assembler.assemble(outcome)

        counts = result.decision_counts()
        logger.info(
            "auto=%d review=%d unmatched_a=%d unmatched_b=%d",
            counts["auto"],
            counts["review"],
            len(result.unmatched_a),
            len(result.unmatched_b),
        )
        return result


def match_catalogs(
    records_a: Sequence[RawRecord],
    records_b: Sequence[RawRecord],
    options: MatchOptions | None = None,
    *,
    profile_a: SourceProfile = RETAIL_PROFILE,
    profile_b: SourceProfile = VENDING_PROFILE,
    lexicon: Lexicon = DEFAULT_LEXICON,
    tracer: MatchTracer | None = None,
) -> MatchResult:
    pipeline = LocalMatchPipeline.build(options, profile_a=profile_a, profile_b=profile_b, lexicon=lexicon)
    return pipeline.run(records_a, records_b, tracer=tracer)
