import re
from datetime import datetime, timezone
from typing import Optional, Tuple, Union

from .config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from .exceptions import InvalidIdentifier

_INT_RE = re.compile(r"^\d+$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def clamp_limit(limit: Optional[int], default: int = DEFAULT_PAGE_SIZE) -> int:
    if limit is None:
        return default
    return max(1, min(int(limit), MAX_PAGE_SIZE))


def clamp_offset(offset: Optional[int]) -> int:
    if offset is None:
        return 0
    return max(0, int(offset))


def clamp_page(limit: Optional[int], offset: Optional[int]) -> Tuple[int, int]:
    """Return (limit, offset) forced into the allowed page window."""
    return clamp_limit(limit), clamp_offset(offset)


def as_positive_id(value: Union[int, str, None]) -> Optional[int]:
    """Parse a record id, returning None for anything that is not a positive integer."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    value = str(value).strip()
    if not _INT_RE.match(value):
        return None
    parsed = int(value)
    return parsed if parsed > 0 else None


def parse_id(value: str, entity: str = "record") -> int:
    parsed = as_positive_id(value)
    if parsed is None:
        raise InvalidIdentifier(f"Invalid {entity} ID")
    return parsed
