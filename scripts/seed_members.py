#!/usr/bin/env python3
"""
Seed member records from a JSON file.

The file holds an array of objects:
  [{"memberId": "MEMBER-001", "organisationInfo": {...}, "userSnapshots": [...]}]

Members that already exist are skipped, so the script can be re-run safely.

Usage:
  python scripts/seed_members.py --file members.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.application.errors import AppError
from src.application.use_cases.members import create_member
from src.config.settings import get_settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)

logger = logging.getLogger("seed_members")


async def seed(path: Path) -> tuple[int, int]:
    records = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise SystemExit("Expected a JSON array of members")

    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    created = skipped = 0
    try:
        for record in records:
            member_id = str(record.get("memberId") or "").strip()
            uow = SQLAlchemyUnitOfWork(session_factory)
            async with uow:
                if member_id and await uow.members.get_by_member_id(member_id):
                    logger.info("Member %s already exists, skipping", member_id)
                    skipped += 1
                    continue
                try:
                    await create_member.execute(
                        uow,
                        create_member.CreateMemberInput(
                            member_id=member_id,
                            organisation_info=record.get("organisationInfo") or {},
                            user_snapshots=record.get("userSnapshots") or [],
                            status=record.get("status"),
                            allowed_user_count=int(record.get("allowedUserCount") or 0),
                        ),
                    )
                except AppError as exc:
                    logger.error("Skipping member %r: %s", member_id, exc.message)
                    skipped += 1
                    continue
            logger.info("Created member %s", member_id)
            created += 1
    finally:
        await engine.dispose()
    return created, skipped


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed members from a JSON file")
    parser.add_argument("--file", required=True, type=Path, help="Path to the members JSON file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
    if not args.file.exists():
        print(f"File not found: {args.file}")
        sys.exit(1)

    created_count, skipped_count = asyncio.run(seed(args.file))
    print(f"Created {created_count} member(s), skipped {skipped_count}")
