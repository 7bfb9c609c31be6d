from __future__ import annotations

import argparse
import csv
from pathlib import Path

from catalog_match.datasets import RETAIL_COLUMNS, VENDING_COLUMNS, ReferenceCatalogGenerator


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a synthetic retail/vending catalog pair")
    parser.add_argument("--size", type=int, default=200)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--overlap-rate", type=float, default=0.7)
    parser.add_argument("--output-dir", type=Path, default=Path("data"))
    args = parser.parse_args()

    retail_rows, vending_rows = ReferenceCatalogGenerator(seed=args.seed).generate(
        size=args.size,
        overlap_rate=args.overlap_rate,
    )

    args.output_dir.mkdir(parents=True, exist_ok=True)
    _write_csv(args.output_dir / "retail_catalog.csv", retail_rows, RETAIL_COLUMNS)
    _write_csv(args.output_dir / "vending_catalog.csv", vending_rows, VENDING_COLUMNS)


def _write_csv(path: Path, rows: list[dict[str, str]], columns: list[str]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=columns)
        writer.writeheader()
        writer.writerows(rows)


if __name__ == "__main__":
    main()
