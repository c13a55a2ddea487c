# src/ideahub_stage/scripts/reconcile.py
"""Audit denormalized vote counters against their ledgers."""
from __future__ import annotations

import argparse
import logging
import sys

from ideahub_stage.db.session import SessionLocal
from ideahub_stage.services.votes import COMMENT_LEDGER, IDEA_LEDGER, reconcile_vote_counts

LEDGERS = {"comments": COMMENT_LEDGER, "ideas": IDEA_LEDGER}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "kind",
        nargs="?",
        choices=[*LEDGERS, "all"],
        default="all",
        help="Which counters to check (default: all)",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Overwrite drifted counters with the ledger totals",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Report drifted counters; exit status 1 if any were found and left unfixed."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    kinds = list(LEDGERS) if args.kind == "all" else [args.kind]
    unfixed = 0
    with SessionLocal() as db:
        for kind in kinds:
            drifts = reconcile_vote_counts(db, LEDGERS[kind], fix=args.fix)
            for drift in drifts:
                print(f"{kind} {drift.target_id}: stored={drift.stored} expected={drift.expected}")
            print(f"{kind}: {len(drifts)} drifted counter(s){' repaired' if args.fix else ''}")
            if not args.fix:
                unfixed += len(drifts)
    return 1 if unfixed else 0


if __name__ == "__main__":
    sys.exit(main())
