from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from catalog_match.lexicon import DEFAULT_LEXICON, Lexicon
from catalog_match.models import CanonicalEntity, RawRecord
from catalog_match.schema import FieldTag, SourceProfile

logger = logging.getLogger(__name__)

ML_TO_OZ = 0.033814
GRAMS_PER_OZ = 28.3495

_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]+")
_WHITESPACE_RE = re.compile(r"\s+")
_FLUID_OUNCE_RE = re.compile(r"(?<![a-z])fl\s*oz(?![a-z])")
_OUNCE_RE = re.compile(r"(?<![a-z])ounces?(?![a-z])")
_NUMERIC_TOKEN_RE = re.compile(r"\d+(?:\.\d+)?")
_BRAND_SPLIT_RE = re.compile(r"[\s,]+")
_SIZE_RE = re.compile(
    r"(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>fl\.?\s*oz\.?|ounces?|oz\.?|ml|g)(?![a-z])",
    re.IGNORECASE,
)
_UNIT_JUNK_RE = re.compile(r"[\s.]+")
_PRICE_JUNK_RE = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


@dataclass(frozen=True, slots=True)
class ParsedSize:
    size_oz: float
    label: str
    match: str


def normalize_name(value: str) -> str:
    """Lower-case, strip punctuation and fold unit spellings into ``oz``.

    Folding runs to a fixed point, so the function is idempotent.
    """
    text = _collapse(_NON_ALNUM_RE.sub(" ", value.lower()))
    while True:
        folded = _collapse(_OUNCE_RE.sub("oz", _FLUID_OUNCE_RE.sub("oz", text)))
        if folded == text:
            return folded
        text = folded


def tokenize(normalized_name: str, lexicon: Lexicon = DEFAULT_LEXICON) -> tuple[str, ...]:
    raw_tokens = normalized_name.split()
    merged: list[str] = []
    i = 0
    while i < len(raw_tokens):
        token = raw_tokens[i]
        following = raw_tokens[i + 1] if i + 1 < len(raw_tokens) else None
        if following is not None and following in lexicon.unit_tokens and _NUMERIC_TOKEN_RE.fullmatch(token):
            merged.append(f"{token}{following}")
            i += 2
            continue
        merged.append(token)
        i += 1

    return tuple(lexicon.canonical_token(token) for token in merged if token not in lexicon.stop_words)


def extract_brand(raw_name: str, lexicon: Lexicon = DEFAULT_LEXICON) -> str | None:
    """Best-effort brand from a product title, in canonical form.

    Known synonym keys are tried longest first, as plain substrings, so
    "CocaCola" and "Cokes" still resolve. Otherwise the first known token,
    otherwise the first token.
    """
    lowered = raw_name.lower()
    for key in lexicon.brand_keys:
        if key in lowered:
            return lexicon.brand_synonyms[key]

    tokens = [token for token in _BRAND_SPLIT_RE.split(lowered) if token]
    if not tokens:
        return None
    for token in tokens:
        if token in lexicon.brand_synonyms:
            return lexicon.brand_synonyms[token]
    return lexicon.canonical_brand(tokens[0])


def parse_size(raw_name: str) -> ParsedSize | None:
    match = _SIZE_RE.search(raw_name)
    if not match:
        return None

    value = float(match.group("value"))
    if value <= 0:
        return None

    unit = _canonical_unit(match.group("unit"))
    if unit == "ml":
        size_oz = value * ML_TO_OZ
    elif unit == "g":
        size_oz = value / GRAMS_PER_OZ
    else:
        size_oz = value

    return ParsedSize(size_oz=size_oz, label=f"{_format_quantity(value)}{unit}", match=match.group(0))


def parse_price(values: Iterable[str]) -> float | None:
    for value in values:
        sanitized = _PRICE_JUNK_RE.sub("", value)
        match = _LEADING_NUMBER_RE.match(sanitized)
        if match:
            return float(match.group(0))
    return None


def detect_diet(raw_name: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    lowered = raw_name.lower()
    return any(keyword in lowered for keyword in lexicon.diet_keywords)


class ProductNormalizer:
    """Source-aware normalizer: looks fields up through the profile's schema."""

    def __init__(self, profile: SourceProfile, lexicon: Lexicon = DEFAULT_LEXICON) -> None:
        self._profile = profile
        self._lexicon = lexicon

    @property
    def source(self) -> str:
        return self._profile.tag

    def normalize(self, record: RawRecord) -> CanonicalEntity:
        schema = self._profile.schema
        raw_name = schema.first_value(record, FieldTag.NAME) or ""
        normalized = normalize_name(raw_name)
        size = parse_size(raw_name)

        return CanonicalEntity(
            source=self._profile.tag,
            source_id=self._source_id(record, raw_name),
            raw_name=raw_name,
            normalized_name=normalized,
            tokens=tokenize(normalized, self._lexicon),
            brand=extract_brand(raw_name, self._lexicon),
            size_oz=size.size_oz if size else None,
            size_label=size.label if size else None,
            category=schema.first_value(record, FieldTag.CATEGORY),
            price=parse_price(schema.values_for(record, FieldTag.PRICE)),
            is_diet=detect_diet(raw_name, self._lexicon),
            scancode=schema.first_value(record, FieldTag.SCANCODE),
            attributes=MappingProxyType({"size_match_text": size.match if size else None}),
        )

    def normalize_all(self, records: Sequence[RawRecord]) -> list[CanonicalEntity]:
        entities = [self.normalize(record) for record in records]
        logger.debug("Normalized %d %s records", len(entities), self._profile.tag)
        return entities

    def _source_id(self, record: RawRecord, raw_name: str) -> str:
        schema = self._profile.schema
        source_id = schema.first_value(record, FieldTag.SOURCE_ID)
        if source_id:
            return source_id
        device = schema.first_value(record, FieldTag.DEVICE)
        if device:
            return device.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
        return raw_name


def _canonical_unit(unit: str) -> str:
    compact = _UNIT_JUNK_RE.sub("", unit.lower())
    if compact in ("ml", "g"):
        return compact
    return "oz"


def _format_quantity(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()
