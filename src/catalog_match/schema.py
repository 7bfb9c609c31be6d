from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

from catalog_match.models import RawRecord


class FieldTag(StrEnum):
    CATEGORY = "CATEGORY"
    DEVICE = "DEVICE"
    NAME = "NAME"
    PRICE = "PRICE"
    SCANCODE = "SCANCODE"
    SOURCE_ID = "SOURCE_ID"


@dataclass(frozen=True)
class RecordSchema:
    """Semantic tag → source columns, each tag's columns in preference order.

    Catalog exports often carry the same fact in several columns (``PRICE``
    and ``TOTALPRICE``, ``product_no`` and ``id``); lookups walk them in the
    listed order and skip blanks.
    """

    preferred_columns: Mapping[FieldTag, tuple[str, ...]]

    @classmethod
    def from_mapping(cls, mapping: Mapping[FieldTag, Sequence[str]]) -> "RecordSchema":
        return cls(preferred_columns=MappingProxyType({tag: tuple(columns) for tag, columns in mapping.items()}))

    def columns_for(self, tag: FieldTag) -> tuple[str, ...]:
        return self.preferred_columns.get(tag, ())

    def iter_values(self, record: RawRecord, tag: FieldTag) -> Iterator[str]:
        for column in self.columns_for(tag):
            raw = record.get(column)
            text = str(raw).strip() if raw is not None else ""
            if text:
                yield text

    def values_for(self, record: RawRecord, tag: FieldTag) -> list[str]:
        return list(self.iter_values(record, tag))

    def first_value(self, record: RawRecord, tag: FieldTag) -> str | None:
        return next(self.iter_values(record, tag), None)


@dataclass(frozen=True)
class SourceProfile:
    """A named source shape: its tag on canonical entities plus its column schema."""

    tag: str
    schema: RecordSchema
