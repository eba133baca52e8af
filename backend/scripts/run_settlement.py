"""Run a settlement over the pending invoices and print the result as JSON.

Usage:
    python scripts/run_settlement.py [--preview]
        [--organization-concurrency N] [--invoice-concurrency N]
"""

import argparse
import asyncio
import json
import logging
import sys

from pydantic import TypeAdapter

from settlement.core.config import settings
from settlement.core.errors import AppError
from settlement.schemas.payment import PaidPaymentStatus, SettlementPlanEntry
from settlement.services.billing_client import BillingClient
from settlement.services.settlement_service import SettlementService

logger = logging.getLogger("settlement.scripts.run_settlement")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Settle pending invoices.")
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Plan the charges without calling the payment endpoint",
    )
    parser.add_argument(
        "--organization-concurrency",
        type=positive_int,
        default=None,
        help="Organizations settled concurrently",
    )
    parser.add_argument(
        "--invoice-concurrency",
        type=positive_int,
        default=None,
        help="Invoices settled concurrently",
    )
    return parser


async def run(args: argparse.Namespace) -> bytes:
    async with BillingClient() as client:
        service = SettlementService(
            client,
            organization_concurrency=args.organization_concurrency,
            invoice_concurrency=args.invoice_concurrency,
        )
        if args.preview:
            plan = await service.preview_pending()
            return TypeAdapter(list[SettlementPlanEntry]).dump_json(plan, indent=2)
        statuses = await service.settle_pending()
        return TypeAdapter(list[PaidPaymentStatus]).dump_json(statuses, indent=2)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL)

    try:
        output = asyncio.run(run(args))
    except AppError as exc:
        logger.error("Settlement failed: %s", exc)
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1

    print(output.decode())
    return 0


if __name__ == "__main__":
    sys.exit(main())
