"""
Seed-time generation of the bookable slot grid.

Slots are produced as consecutive intervals starting at a fixed hour each
day. When the next interval would overlap the lunch window the cursor jumps
to the end of lunch instead of emitting anything, so no slot ever touches
the break.
"""
from sqlalchemy.orm import Session
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple
import logging

from ..models.slot import Slot
from ..core.config import settings

logger = logging.getLogger(__name__)

Interval = Tuple[datetime, datetime]

def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` setting."""
    return datetime.strptime(value, "%H:%M").time()

def generate_slots(
    start_date: date,
    start_hour: int = 9,
    days: int = 7,
    slots_per_day: int = 8,
    slot_minutes: int = 30,
    lunch_start: time = time(12, 30),
    lunch_end: time = time(13, 30),
) -> List[Interval]:
    """Return ``days * slots_per_day`` (start, end) pairs in ascending order.

    Raises ValueError when the configuration cannot produce a grid, either
    because a count is not positive, the lunch window is inverted, or a
    day's slots would run past midnight.
    """
    if days < 1 or slots_per_day < 1 or slot_minutes < 1:
        raise ValueError("days, slots_per_day and slot_minutes must be positive")
    if not 0 <= start_hour < 24:
        raise ValueError("start_hour must be between 0 and 23")
    if lunch_end <= lunch_start:
        raise ValueError("lunch_end must be after lunch_start")

    step = timedelta(minutes=slot_minutes)
    slots: List[Interval] = []

    for offset in range(days):
        day = start_date + timedelta(days=offset)
        day_end = datetime.combine(day + timedelta(days=1), time(0, 0))
        lunch_from = datetime.combine(day, lunch_start)
        lunch_to = datetime.combine(day, lunch_end)

        cursor = datetime.combine(day, time(start_hour, 0))
        emitted = 0
        while emitted < slots_per_day:
            end = cursor + step
            if cursor < lunch_to and end > lunch_from:
                # Jump past lunch
                cursor = lunch_to
                continue
            if end > day_end:
                raise ValueError(f"slots for {day.isoformat()} run past midnight")
            slots.append((cursor, end))
            emitted += 1
            cursor = end

    return slots

def seed_slots(db: Session, start_date: Optional[date] = None, **grid) -> int:
    """Persist the slot grid, skipping intervals that already exist.

    Grid parameters default to the application settings. Returns the number
    of slots inserted; running it twice for the same grid inserts nothing.
    """
    params = {
        "start_hour": settings.SLOT_START_HOUR,
        "days": settings.SLOT_DAYS,
        "slots_per_day": settings.SLOTS_PER_DAY,
        "slot_minutes": settings.SLOT_MINUTES,
        "lunch_start": parse_clock(settings.LUNCH_START),
        "lunch_end": parse_clock(settings.LUNCH_END),
    }
    params.update(grid)

    intervals = generate_slots(start_date or date.today(), **params)
    if not intervals:
        return 0

    rows = (
        db.query(Slot.start_at, Slot.end_at)
        .filter(Slot.start_at >= intervals[0][0], Slot.start_at <= intervals[-1][0])
        .all()
    )
    existing = {(row.start_at, row.end_at) for row in rows}
    new_slots = [
        Slot(start_at=start, end_at=end)
        for start, end in intervals
        if (start, end) not in existing
    ]

    db.add_all(new_slots)
    db.commit()

    logger.info(f"Seeded {len(new_slots)} slots ({len(intervals) - len(new_slots)} already present)")
    return len(new_slots)
