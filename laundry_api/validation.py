# laundry_api/validation.py
import datetime
from typing import Iterable

from pydantic import BaseModel

from laundry_api.errors import InvalidInput


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def require_fields(payload: BaseModel, fields: Iterable[str], message: str) -> dict:
    """
    Presence check for request payloads.

    Returns the named fields as a dict, or raises ``InvalidInput`` listing
    every missing one (by its JSON name).
    """
    fields = list(fields)
    values = payload.model_dump(include=set(fields))
    missing = [name for name in fields if is_blank(values.get(name))]
    if missing:
        by_alias = type(payload).model_fields
        raise InvalidInput(message, fields=[by_alias[name].alias or name for name in missing])
    return values


def parse_booking_date(value: str) -> datetime.date:
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp; offset timestamps give their UTC date."""
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        pass
    try:
        parsed = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise InvalidInput("Invalid booking date", fields=["date"])
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(datetime.timezone.utc)
    return parsed.date()
