from catalog_match.steps.assemble import ResultAssembler
from catalog_match.steps.confidence import AttributeWeights, WeightedConfidenceAggregator
from catalog_match.steps.matching import GreedyBestMatcher, MatchOutcome
from catalog_match.steps.normalize import ProductNormalizer
from catalog_match.steps.scoring import FeatureScorer

__all__ = [
    "ProductNormalizer",
    "FeatureScorer",
    "AttributeWeights",
    "WeightedConfidenceAggregator",
    "GreedyBestMatcher",
    "MatchOutcome",
    "ResultAssembler",
]
