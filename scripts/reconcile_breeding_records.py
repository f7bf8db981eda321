#!/usr/bin/env python3
"""
Backfill breeding records for insemination events that have none.

Each insemination event on the farm's timeline without a breeding record on the
same animal and date gets one, marked as auto-generated. Running it again when
nothing new was recorded creates nothing.

Usage:
  python scripts/reconcile_breeding_records.py --farm-id UUID [--actor-id UUID]
"""

import argparse
import asyncio
import sys
from pathlib import Path
from uuid import UUID

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.use_cases.breeding import reconcile_breeding_records
from src.config.logging import configure_logging
from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def reconcile(farm_id: UUID, actor_id: UUID | None = None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            result = await reconcile_breeding_records.execute(
                uow, farm_id, actor_user_id=actor_id
            )
    finally:
        await engine.dispose()

    print(f"Synced {result.synced_count} breeding record(s) for farm {farm_id}")
    for error in result.errors:
        print(f"  - {error}", file=sys.stderr)
    if not result.success:
        return 1
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Create breeding records for insemination events that have none"
    )
    parser.add_argument("--farm-id", type=UUID, required=True, help="Farm UUID")
    parser.add_argument(
        "--actor-id", type=UUID, help="User UUID recorded as creator of the new records"
    )

    args = parser.parse_args()
    sys.exit(asyncio.run(reconcile(args.farm_id, args.actor_id)))


if __name__ == "__main__":
    main()
