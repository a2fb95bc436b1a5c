"""Time sources for the discount rules."""

from datetime import datetime
from typing import Protocol

from django.utils import timezone


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Clock backed by Django's timezone-aware ``now``."""

    def now(self) -> datetime:
        return timezone.now()
