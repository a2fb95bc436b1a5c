"""Coupon code generation."""

import string
from datetime import datetime
from secrets import choice

ALPHANUM = string.ascii_uppercase + string.digits
SUFFIX_LENGTH = 3


def generate_code(prefix: str = "", now: datetime | None = None) -> str:
    """Return a new coupon code.

    The code is ``prefix`` followed by the timestamp in hex (8 digits of
    seconds, 5 of microseconds) and a short random suffix. It is unique with
    high probability only; the unique index on ``code`` is the real guarantee
    and callers retry on a collision.
    """
    if now is None:
        now = datetime.now()
    seconds = int(now.timestamp())
    suffix = "".join(choice(ALPHANUM) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}{seconds:08x}{now.microsecond:05x}{suffix}".upper()
