#!/usr/bin/env python3
"""
Single Page Scan

Runs one extraction pass over a saved travel shop page and prints what
was found. With --upload the batch goes through the change-gated
reporter to the collector.

Usage:
    python3 scan_page.py --html saved/mexico.html
    python3 scan_page.py --html saved/mexico.html --json
    python3 scan_page.py --html saved/mexico.html --upload --verbose
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from overseas_reporter.common import load_settings, setup_logging
from overseas_reporter.extraction import ExtractionOrchestrator, StaticPage
from overseas_reporter.models import ExtractionBatch
from overseas_reporter.reporting import (
    ChangeGatedReporter,
    CollectorClient,
    LogStatus,
    cooldown_from_settings,
    format_breakdown,
)

load_dotenv(Path(__file__).parent / ".env")


def print_report(batch: ExtractionBatch) -> None:
    """Print the extracted batch."""
    print("\n" + "=" * 72)
    print("SCAN REPORT")
    print("=" * 72)
    print(f"\nLocation: {batch.location or 'NOT DETECTED'}")
    print(f"Tier:     {batch.tier.value}")
    print(f"Items:    {len(batch.items)}")
    if batch.items:
        print(f"Shops:    {format_breakdown(batch)}")

        print("\n" + "-" * 72)
        print(f"  {'SHOP':15} {'NAME':30} {'COST':>14} {'STOCK':>8}")
        print("-" * 72)
        for item in batch.items:
            print(f"  {item.shop:15} {item.name[:30]:30} {item.unit_cost:>14,} {item.stock:>8,}")
    print("=" * 72)


async def scan(html: str, upload: bool, settings: dict) -> ExtractionBatch:
    page = StaticPage(html)
    batch = await ExtractionOrchestrator(page, settings=settings).run()

    if not upload:
        return batch

    with CollectorClient.from_settings(settings["collector"]) as client:
        reporter = ChangeGatedReporter(
            client,
            cooldown=cooldown_from_settings(settings["cooldown"], persistent=True),
            status=LogStatus(),
        )
        outcome = await reporter.report(batch)
        print(f"Upload: {outcome.value}")
        if reporter.status.current:
            print(reporter.status.current)

    return batch


def main():
    parser = argparse.ArgumentParser(description="Extract shop stock from a saved page")
    parser.add_argument("--html", required=True, help="Saved HTML of the travel shop page")
    parser.add_argument("--upload", action="store_true", help="Report the batch to the collector")
    parser.add_argument("--json", action="store_true", help="Print the collector payload as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--trace-probes", action="store_true", help="With --verbose, log every detail probe")
    parser.add_argument("--quiet", "-q", action="store_true", help="Warnings only")
    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, trace_probes=args.trace_probes)

    html_path = Path(args.html)
    if not html_path.exists():
        print(f"File not found: {html_path}", file=sys.stderr)
        sys.exit(2)

    settings = load_settings()
    batch = asyncio.run(scan(html_path.read_text(encoding="utf-8"), args.upload, settings))

    if args.json:
        payload = {
            "location": batch.location,
            "items": [item.to_payload() for item in batch.items],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_report(batch)

    sys.exit(0 if batch.is_valid else 1)


if __name__ == "__main__":
    main()
