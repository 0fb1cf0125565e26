"""Storage sizing and publishing fee arithmetic."""

import math
from collections.abc import Iterable
from datetime import date, datetime

from marketplace.content.exceptions import MissingParameterError
from marketplace.content.models import Seeder

STORAGE_UNIT_BYTES = 1024 * 1024


def normalize_size(size_bytes: int) -> int:
    """Convert a raw byte count to whole storage units, always rounding up."""
    if size_bytes < 0:
        raise ValueError(f"Size cannot be negative: {size_bytes}")
    return math.ceil(size_bytes / STORAGE_UNIT_BYTES)


def parse_expiration(value: str | date) -> date:
    """Read an expiration given as ``YYYY-MM-DD`` or an ISO datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise MissingParameterError("Expiration date is required")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise MissingParameterError(f"Invalid expiration date '{value}'") from exc


def rental_days(expiration: str | date, today: date) -> int:
    """Whole calendar days from today through expiration, counting today.

    A same-day or past expiration still rents for one day.
    """
    days = (parse_expiration(expiration) - today).days + 1
    return max(days, 1)


def calculate_fee(file_size_bytes: int, seeders: Iterable[Seeder], days: int) -> int:
    """Publishing fee: storage units times the summed per-day price of every seeder."""
    per_unit = sum(seeder.price.amount * days for seeder in seeders)
    return math.ceil(normalize_size(file_size_bytes) * per_unit)
