from __future__ import annotations

import random
from dataclasses import dataclass

_CATALOG = [
    # (retail brand spelling, vending brand spelling, product, size, unit, category, price)
    ("Coca Cola", "Coke", "", 20, "oz", "Soda", 2.29),
    ("Coca-Cola", "Coke", "Mini", 7.5, "oz", "Soda", 1.19),
    ("Diet Coke", "Coca-Cola Diet", "", 20, "oz", "Soda", 2.29),
    ("Pepsi-Cola", "Pepsi", "", 20, "oz", "Soda", 2.19),
    ("Red Bull", "Redbull", "Energy Drink", 8.4, "oz", "Energy Drinks", 3.49),
    ("Red Bull", "Redbull", "Sugarfree", 12, "oz", "Energy Drinks", 3.99),
    ("Dasani", "Dasani", "Water", 16.9, "oz", "Bottled Water", 1.79),
    ("Aquafina", "Aquafina", "Purified Water", 500, "ml", "Bottled Water", 1.59),
    ("Snickers", "Snickers", "Bar", 52.7, "g", "Candy & Chocolate", 1.89),
    ("Lays", "Lays", "Classic Potato Chips", 1, "oz", "Chips", 1.49),
    ("Doritos", "Doritos", "Nacho Cheese", 1.75, "oz", "Chips", 1.79),
    ("Smartwater", "Smartwater", "Vapor Distilled", 20, "oz", "Bottled Water", 2.49),
]

_UNIT_SPELLINGS = {
    "oz": ["oz", " oz", " fl oz", "oz.", " Ounce"],
    "ml": ["ml", " ml", "mL"],
    "g": ["g", " g"],
}
_RETAIL_SUFFIXES = ["Bottle", "Can", "", ""]
_DEVICES = ["kiosk-01", "kiosk-02", "market-07"]


@dataclass(frozen=True, slots=True)
class _Product:
    index: int
    retail_brand: str
    vending_brand: str
    description: str
    size: float
    unit: str
    category: str
    price: float
    upc: str


class ReferenceCatalogGenerator:
    """Generate a retail/vending catalog pair with known overlap for demos and benchmarks."""

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate(self, size: int, overlap_rate: float = 0.7) -> tuple[list[dict[str, str]], list[dict[str, str]]]:
        if size <= 0:
            return [], []

        products = [self._product(i) for i in range(size)]
        shared_count = max(0, min(size, int(size * overlap_rate)))
        shared = products[:shared_count]
        exclusive = products[shared_count:]

        retail_products = list(shared)
        vending_products = list(shared)
        for i, product in enumerate(exclusive):
            (retail_products if i % 2 == 0 else vending_products).append(product)

        retail_rows = [self._retail_row(product) for product in retail_products]
        vending_rows = [self._vending_row(product, idx) for idx, product in enumerate(vending_products)]
        self._rng.shuffle(retail_rows)
        self._rng.shuffle(vending_rows)
        return retail_rows, vending_rows

    def _product(self, idx: int) -> _Product:
        retail_brand, vending_brand, description, size, unit, category, price = _CATALOG[idx % len(_CATALOG)]
        # Later laps through the catalog get distinct sizes so each product stays unique.
        lap = idx // len(_CATALOG)
        if lap:
            size = round(size * (1 + lap), 2)
            price = round(price * (1 + 0.6 * lap), 2)
        return _Product(
            index=idx,
            retail_brand=retail_brand,
            vending_brand=vending_brand,
            description=description,
            size=size,
            unit=unit,
            category=category,
            price=price,
            upc=f"{490000000000 + idx * 7919:012d}",
        )

    def _retail_row(self, product: _Product) -> dict[str, str]:
        suffix = self._rng.choice(_RETAIL_SUFFIXES)
        name = " ".join(
            part
            for part in (product.retail_brand, product.description, self._size_text(product), suffix)
            if part
        )
        price = product.price
        return {
            "SCANCODE": product.upc if self._rng.random() < 0.5 else f"PRD{product.index:04d}",
            "PRDNAME": name,
            "CATEGORY1": "Beverages" if "Chips" not in product.category and "Candy" not in product.category else "Snacks",
            "CATEGORY2": product.category,
            "PRICE": f"${price:.2f}",
            "TOTALPRICE": f"{price * 2:.2f}",
            "DEVICE": f"/devices/{self._rng.choice(_DEVICES)}",
        }

    def _vending_row(self, product: _Product, idx: int) -> dict[str, str]:
        name = " ".join(part for part in (product.vending_brand, product.description, self._size_text(product)) if part)
        if self._rng.random() < 0.3:
            name = name.upper()
        # Vending prices drift a little from the shelf price.
        price = round(product.price * self._rng.uniform(0.95, 1.08), 2)
        return {
            "id": f"v{idx:06d}",
            "product_no": product.upc if self._rng.random() < 0.5 else "",
            "product_name": name,
            "price_unit": f"{price:.2f}",
            "product_actual_payment_amount": f"{price:.2f}",
        }

    def _size_text(self, product: _Product) -> str:
        unit = self._rng.choice(_UNIT_SPELLINGS[product.unit])
        value = f"{product.size:g}"
        return f"{value}{unit}"
