"""App settings, overridable through ``settings.DISCOUNTS``."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    "CODE_PREFIX": "",
    "CODE_GENERATION_ATTEMPTS": 5,
}


def get_setting(name: str) -> Any:
    overrides = getattr(settings, "DISCOUNTS", {})
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
