"""
Seed the admin account and the slot grid.

Usage:
    python -m app.seed [--start-date YYYY-MM-DD] [--days N] [--slots-per-day N]

Safe to run repeatedly: existing slots and the admin account are left alone.
"""
import argparse
import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from .core.config import settings
from .core.database import SessionLocal, init_db
from .services.auth_service import AuthService
from .services.slot_catalog import seed_slots

logger = logging.getLogger(__name__)

def run_seed(db: Session, start_date: Optional[date] = None, **grid) -> int:
    """Seed the admin user and slots; returns the number of new slots."""
    AuthService(db).ensure_admin(
        settings.ADMIN_NAME, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD
    )
    return seed_slots(db, start_date=start_date, **grid)

def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Seed admin user and appointment slots")
    parser.add_argument(
        "--start-date",
        type=date.fromisoformat,
        default=None,
        help="First day of the grid (default: today)",
    )
    parser.add_argument("--days", type=int, default=settings.SLOT_DAYS)
    parser.add_argument("--slots-per-day", type=int, default=settings.SLOTS_PER_DAY)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    logger.info("Start seeding...")

    init_db()
    db = SessionLocal()
    try:
        created = run_seed(
            db,
            start_date=args.start_date,
            days=args.days,
            slots_per_day=args.slots_per_day,
        )
    finally:
        db.close()

    logger.info(f"Seeding complete, {created} new slots")

if __name__ == "__main__":
    main()
