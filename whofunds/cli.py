"""
Command-line interface.

Usage:
    # Top donors for Mike Lee, 2024 cycle
    whofunds donors S2UT00106 --cycle 2024

    # Senate roster
    whofunds roster --office Senator

    # Run the API
    whofunds serve --port 8000
"""
import argparse
import asyncio
import logging
import sys
from typing import Optional

from whofunds.config.settings import settings
from whofunds.errors import DonorLookupError
from whofunds.ingestion.client import FECClient
from whofunds.models.politician import Office
from whofunds.services.classifier import DonorClassifier
from whofunds.services.donors import DonorPipeline
from whofunds.services.impact import build_impact_summary
from whofunds.services.roster import RosterService


async def show_donors(cid: str, cycle: Optional[int], limit: int, threshold: float) -> int:
    async with FECClient() as client:
        pipeline = DonorPipeline(client, small_donation_threshold=threshold, limit=limit)
        try:
            result = await pipeline.run(cid, cycle=cycle)
        except DonorLookupError as e:
            print(f"❌ {e.kind}: {e.message}")
            return 1

    classifier = DonorClassifier()

    print("=" * 60)
    print(f"💰 TOP DONORS: {result.candidate_id} ({result.cycle})")
    print("=" * 60)
    if result.is_mock_data:
        print("⚠️  EXAMPLE DATA - set FEC_API_KEY for real filings")
    if result.message:
        print(f"ℹ️  {result.message}")

    for i, donor in enumerate(result.donors, 1):
        print(
            f"{i:>3}. {donor.name[:40]:<40} ${donor.amount:>12,.2f}  "
            f"{classifier.classify(donor.name):<16} {donor.industry or 'Unknown'}"
        )

    summary = build_impact_summary(result.donors)
    print("\n📊 What this means")
    if summary.dominant_industry:
        print(f"   Dominant donor industry: {summary.dominant_industry}")
    print(f"   {summary.text}")
    return 0


async def show_roster(office: Optional[Office]) -> int:
    async with FECClient() as client:
        roster = await RosterService(client).list_politicians(office=office)

    if roster.error:
        print(f"⚠️  {roster.error}")
    for politician in roster.politicians:
        print(f"  - {politician} CID={politician.candidate_id}")

    stats = roster.stats
    print(f"\nTotal: {stats.total} (senators: {stats.senators}, representatives: {stats.representatives})")
    return 0


def serve(host: str, port: int):
    import uvicorn

    uvicorn.run("whofunds.api.app:app", host=host, port=port, reload=settings.API_RELOAD)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="whofunds",
        description="Who funds this politician? Top donors from OpenFEC.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    donors = sub.add_parser("donors", help="Top donors for an FEC candidate ID")
    donors.add_argument("cid", help="FEC candidate ID (e.g. S2UT00106)")
    donors.add_argument("--cycle", type=int, default=None, help="Election year (default: current)")
    donors.add_argument("--limit", type=int, default=settings.TOP_DONORS_LIMIT, help="Donors to show")
    donors.add_argument(
        "--threshold",
        type=float,
        default=settings.SMALL_DONATION_THRESHOLD,
        help="Pool contributions at or below this amount (0 disables)",
    )

    roster = sub.add_parser("roster", help="List Senate and House candidates")
    roster.add_argument("--office", choices=[o.value for o in Office], default=None)

    server = sub.add_parser("serve", help="Run the HTTP API")
    server.add_argument("--host", default=settings.API_HOST)
    server.add_argument("--port", type=int, default=settings.API_PORT)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

    if args.command == "donors":
        return asyncio.run(show_donors(args.cid, args.cycle, args.limit, args.threshold))
    if args.command == "roster":
        office = Office(args.office) if args.office else None
        return asyncio.run(show_roster(office))

    serve(args.host, args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
