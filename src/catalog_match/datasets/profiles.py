from __future__ import annotations

from catalog_match.schema import FieldTag, RecordSchema, SourceProfile

# Point-of-sale export columns.
RETAIL_COLUMNS = [
    "SCANCODE",
    "PRDNAME",
    "CATEGORY1",
    "CATEGORY2",
    "PRICE",
    "TOTALPRICE",
    "DEVICE",
]

# Vending machine order export columns.
VENDING_COLUMNS = [
    "id",
    "product_no",
    "product_name",
    "price_unit",
    "product_actual_payment_amount",
]


RETAIL_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.NAME: ["PRDNAME"],
        FieldTag.SOURCE_ID: ["SCANCODE", "PRDNAME"],
        FieldTag.DEVICE: ["DEVICE"],
        FieldTag.CATEGORY: ["CATEGORY2", "CATEGORY1"],
        FieldTag.PRICE: ["PRICE", "TOTALPRICE"],
        FieldTag.SCANCODE: ["SCANCODE"],
    }
)

VENDING_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.NAME: ["product_name"],
        FieldTag.SOURCE_ID: ["product_no", "id"],
        FieldTag.PRICE: ["price_unit", "product_actual_payment_amount"],
        FieldTag.SCANCODE: ["product_no"],
    }
)

RETAIL_PROFILE = SourceProfile(tag="retail", schema=RETAIL_SCHEMA)
VENDING_PROFILE = SourceProfile(tag="vending", schema=VENDING_SCHEMA)
