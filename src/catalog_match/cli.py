from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from catalog_match.config import ConfigurationError, MatchOptions
from catalog_match.datasets import RETAIL_COLUMNS, RETAIL_PROFILE, VENDING_COLUMNS, VENDING_PROFILE
from catalog_match.datasets.reference import ReferenceCatalogGenerator
from catalog_match.lexicon import DEFAULT_LEXICON, load_lexicon
from catalog_match.models import MatchResult
from catalog_match.runners import LocalMatchPipeline
from catalog_match.tracing import LoggingTracer

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        try:
            run(
                source_a=args.source_a,
                source_b=args.source_b,
                auto=args.auto,
                review=args.review,
                output=args.output,
                output_file=args.output_file,
                lexicon_path=args.lexicon,
                trace_ids=args.trace_id,
                size=args.size,
                seed=args.seed,
            )
        except ConfigurationError as exc:
            parser.error(str(exc))
        except FileNotFoundError as exc:
            parser.error(f"input file not found: {exc.filename}")
        return

    parser.print_help()


def run(
    *,
    source_a: Path | None,
    source_b: Path | None,
    auto: float | None,
    review: float | None,
    output: str,
    output_file: Path | None,
    lexicon_path: Path | None,
    trace_ids: list[str],
    size: int,
    seed: int,
) -> MatchResult:
    # Thresholds are checked before any input is read.
    options = MatchOptions.from_overrides(auto=auto, review=review)
    lexicon = load_lexicon(lexicon_path) if lexicon_path else DEFAULT_LEXICON

    if source_a is None or source_b is None:
        generated_a, generated_b = ReferenceCatalogGenerator(seed=seed).generate(size=size)
        records_a = _read_records_csv(source_a) if source_a else generated_a
        records_b = _read_records_csv(source_b) if source_b else generated_b
        logger.info("Using generated reference catalogs (seed=%d, size=%d)", seed, size)
    else:
        records_a = _read_records_csv(source_a)
        records_b = _read_records_csv(source_b)

    pipeline = LocalMatchPipeline.build(
        options,
        profile_a=RETAIL_PROFILE,
        profile_b=VENDING_PROFILE,
        lexicon=lexicon,
    )
    tracer = LoggingTracer(trace_ids) if trace_ids else None
    result = pipeline.run(records_a, records_b, tracer=tracer)

    if output_file is None:
        _emit(result, output, sys.stdout)
    else:
        with output_file.open("w", encoding="utf-8") as handle:
            _emit(result, output, handle)
        logger.info("Wrote %s output to %s", output, output_file)
    return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog-match", description="Retail catalog matching CLI")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser(
        "run",
        help="Match a retail catalog (A) against a vending catalog (B) and print the result",
    )
    run_parser.add_argument(
        "--source-a",
        type=Path,
        default=None,
        help=f"Retail CSV ({', '.join(RETAIL_COLUMNS)}); generated when omitted",
    )
    run_parser.add_argument(
        "--source-b",
        type=Path,
        default=None,
        help=f"Vending CSV ({', '.join(VENDING_COLUMNS)}); generated when omitted",
    )
    run_parser.add_argument("--auto", type=float, default=None, help="Auto-accept threshold (default 0.82)")
    run_parser.add_argument("--review", type=float, default=None, help="Review threshold (default 0.6)")
    run_parser.add_argument("--output", choices=["json", "table"], default="json")
    run_parser.add_argument("--output-file", type=Path, default=None)
    run_parser.add_argument("--lexicon", type=Path, default=None, help="YAML file overriding synonym tables")
    run_parser.add_argument(
        "--trace-id",
        action="append",
        default=[],
        help="Log every candidate score for this A source id (repeatable, needs --log-level DEBUG)",
    )
    run_parser.add_argument("--size", type=int, default=24, help="Generated catalog size")
    run_parser.add_argument("--seed", type=int, default=42)
    run_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )

    return parser


def _read_records_csv(path: Path) -> list[dict[str, str]]:
    records: list[dict[str, str]] = []
    with path.open("r", newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            cleaned = {key.strip(): (value or "").strip() for key, value in row.items() if key}
            if not any(cleaned.values()):
                continue
            records.append(cleaned)
    logger.info("Read %d records from %s", len(records), path)
    return records


def _emit(result: MatchResult, output: str, handle: TextIO) -> None:
    if output == "table":
        _render_table(result, handle)
    else:
        json.dump(asdict(result), handle, indent=2)
        handle.write("\n")


def _render_table(result: MatchResult, handle: TextIO) -> None:
    handle.write("Matched Products:\n\n")
    for match in result.matches:
        a, b = match.product_a, match.product_b
        handle.write(f"{a.name} <-> {b.name} | confidence={match.confidence} ({match.decision})\n")
        handle.write(f"  brand: {a.brand or '-'} <-> {b.brand or '-'}\n")
        handle.write(f"  size: {_size_text(a.size_label, a.size_oz)} <-> {_size_text(b.size_label, b.size_oz)}\n")
        handle.write(f"  features: {json.dumps(asdict(match.feature_scores))}\n\n")

    if result.unmatched_a:
        handle.write("Unmatched Source A:\n\n")
        for product in result.unmatched_a:
            handle.write(f"  - {product.name} ({product.source_id})\n")
        handle.write("\n")

    if result.unmatched_b:
        handle.write("Unmatched Source B:\n\n")
        for product in result.unmatched_b:
            handle.write(f"  - {product.name} ({product.source_id})\n")


def _size_text(label: str | None, size_oz: float | None) -> str:
    if label:
        return label
    if size_oz is not None:
        return f"{size_oz:.2f}oz"
    return "-"


if __name__ == "__main__":
    main()
