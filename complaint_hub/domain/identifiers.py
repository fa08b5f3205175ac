"""Human-readable complaint identifiers.

Format: ``<prefix>-<year>-<ms suffix><random>``, e.g. ``CCH-2024-1234569876``
where the suffix is the last six digits of the epoch milliseconds and the
random part is drawn from [1000, 9999].

Identifiers are not guaranteed unique; the complaint store's unique
constraint is the authority and callers retry on a collision.
"""

import random
import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

DEFAULT_PREFIX = "CCH"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

COMPLAINT_ID_PATTERN = re.compile(r"^(?P<prefix>[A-Z]+)-(?P<year>\d{4})-(?P<stamp>\d{6})(?P<rnd>\d{4})$")


def generate_complaint_id(
    prefix: str = DEFAULT_PREFIX,
    now: datetime | None = None,
    randint: Callable[[int, int], int] = random.randint,
) -> str:
    """Build a new complaint identifier from the current time and a random suffix."""
    now = now or datetime.now(timezone.utc)
    millis = (now - _EPOCH) // timedelta(milliseconds=1)
    stamp = f"{millis % 1_000_000:06d}"
    rnd = randint(1000, 9999)
    return f"{prefix}-{now.year}-{stamp}{rnd}"
