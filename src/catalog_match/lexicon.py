"""Synonym, stop-word and keyword tables shared by normalization and scoring.

Tables are read-only once a ``Lexicon`` is built. Alternate vocabularies are
passed in explicitly (or loaded from YAML) instead of patching module state.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from catalog_match.config import ConfigurationError

logger = logging.getLogger(__name__)

_DEFAULT_BRAND_SYNONYMS = {
    "coke": "coca cola",
    "coca-cola": "coca cola",
    "coca": "coca cola",
    "coca cola": "coca cola",
    "diet coke": "diet coca cola",
    "coca-cola diet": "diet coca cola",
    "diet coca cola": "diet coca cola",
    "coca cola diet": "diet coca cola",
    "pepsi cola": "pepsi",
    "pepsi-cola": "pepsi",
    "redbull": "red bull",
    "redbull energy": "red bull",
    "redbull energy drink": "red bull",
    "red bull": "red bull",
    "snickers": "snickers",
    "lays": "lays",
    "doritos": "doritos",
    "aquafina": "aquafina",
    "dasani": "dasani",
}

_DEFAULT_STOP_WORDS = (
    "the",
    "and",
    "with",
    "regular",
    "classic",
    "bottle",
    "can",
    "drink",
    "bar",
    "chips",
    "original",
)

_DEFAULT_DIET_KEYWORDS = ("diet", "zero", "sugar-free", "sugarfree", "lite")

_DEFAULT_UNIT_TOKENS = ("oz", "ounce", "ounces", "ml", "g", "lb", "lbs")

_DEFAULT_CATEGORY_BUCKETS = (
    (("soda", "cola"), "beverage soda"),
    (("water",), "beverage water"),
    (("energy",), "beverage energy"),
    (("chips",), "snack chips"),
    (("candy", "chocolate"), "snack candy"),
)

CategoryBuckets = tuple[tuple[tuple[str, ...], str], ...]


@dataclass(frozen=True)
class Lexicon:
    brand_synonyms: Mapping[str, str]
    stop_words: frozenset[str]
    diet_keywords: tuple[str, ...]
    unit_tokens: frozenset[str]
    category_buckets: CategoryBuckets
    _brand_keys: tuple[str, ...] = field(init=False, repr=False, compare=False)
    _category_patterns: tuple[tuple[re.Pattern[str], str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        synonyms = {key.lower().strip(): value.lower().strip() for key, value in self.brand_synonyms.items()}
        object.__setattr__(self, "brand_synonyms", MappingProxyType(synonyms))
        object.__setattr__(self, "stop_words", frozenset(self.stop_words))
        object.__setattr__(self, "unit_tokens", frozenset(self.unit_tokens))
        object.__setattr__(self, "diet_keywords", tuple(self.diet_keywords))
        object.__setattr__(
            self,
            "category_buckets",
            tuple((tuple(keywords), bucket) for keywords, bucket in self.category_buckets),
        )
        # Longest first so "diet coke" wins over "coke".
        object.__setattr__(self, "_brand_keys", tuple(sorted(synonyms, key=len, reverse=True)))
        # Keywords must start a word: "cola" does not fire inside "chocolate".
        patterns = tuple(
            (re.compile("|".join(rf"(?<![a-z]){re.escape(keyword)}" for keyword in keywords)), bucket)
            for keywords, bucket in self.category_buckets
            if keywords
        )
        object.__setattr__(self, "_category_patterns", patterns)

    @property
    def brand_keys(self) -> tuple[str, ...]:
        return self._brand_keys

    @classmethod
    def default(cls) -> "Lexicon":
        return cls(
            brand_synonyms=_DEFAULT_BRAND_SYNONYMS,
            stop_words=frozenset(_DEFAULT_STOP_WORDS),
            diet_keywords=_DEFAULT_DIET_KEYWORDS,
            unit_tokens=frozenset(_DEFAULT_UNIT_TOKENS),
            category_buckets=_DEFAULT_CATEGORY_BUCKETS,
        )

    def merged(self, **overrides: Any) -> "Lexicon":
        return replace(self, **overrides)

    def canonical_brand(self, value: str | None) -> str | None:
        if not value:
            return None
        lowered = value.lower().strip()
        if not lowered:
            return None
        return self.brand_synonyms.get(lowered, lowered)

    def canonical_token(self, token: str) -> str:
        return self.brand_synonyms.get(token, token)

    def category_bucket(self, value: str | None) -> str | None:
        if not value:
            return None
        lowered = value.lower()
        for pattern, bucket in self._category_patterns:
            if pattern.search(lowered):
                return bucket
        return lowered


DEFAULT_LEXICON = Lexicon.default()

_KNOWN_KEYS = {"brand_synonyms", "stop_words", "diet_keywords", "unit_tokens", "category_buckets"}


def load_lexicon(path: Path, base: Lexicon = DEFAULT_LEXICON) -> Lexicon:
    """Load table overrides from a YAML file on top of ``base``.

    Top-level keys replace the corresponding table wholesale::

        brand_synonyms: {"mtn dew": "mountain dew"}
        stop_words: [the, and, pack]
        category_buckets:
          - bucket: beverage soda
            keywords: [soda, cola, pop]
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse lexicon file {path}: {exc}") from exc

    if payload is None:
        return base
    if not isinstance(payload, Mapping):
        raise ConfigurationError(f"Lexicon file {path} must contain a mapping at the top level")

    unknown = set(payload) - _KNOWN_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown lexicon keys in {path}: {sorted(unknown)}")

    overrides: dict[str, Any] = {}
    if "brand_synonyms" in payload:
        overrides["brand_synonyms"] = _string_mapping(payload["brand_synonyms"], "brand_synonyms")
    for key in ("stop_words", "unit_tokens"):
        if key in payload:
            overrides[key] = frozenset(_string_list(payload[key], key))
    if "diet_keywords" in payload:
        overrides["diet_keywords"] = tuple(_string_list(payload["diet_keywords"], "diet_keywords"))
    if "category_buckets" in payload:
        overrides["category_buckets"] = _category_buckets(payload["category_buckets"])

    logger.info("Loaded lexicon overrides from %s: %s", path, sorted(overrides))
    return base.merged(**overrides)


def _string_mapping(value: object, key: str) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Lexicon key '{key}' must be a mapping")
    return {str(k): str(v) for k, v in value.items()}


def _string_list(value: object, key: str) -> list[str]:
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ConfigurationError(f"Lexicon key '{key}' must be a list of strings")
    return [str(item).lower().strip() for item in value]


def _category_buckets(value: object) -> CategoryBuckets:
    if not isinstance(value, list):
        raise ConfigurationError("Lexicon key 'category_buckets' must be a list")
    buckets = []
    for entry in value:
        if not isinstance(entry, Mapping) or "bucket" not in entry or "keywords" not in entry:
            raise ConfigurationError("Each category bucket needs 'bucket' and 'keywords'")
        keywords = tuple(_string_list(entry["keywords"], "category_buckets.keywords"))
        buckets.append((keywords, str(entry["bucket"])))
    return tuple(buckets)
