"""
Typed store configuration.

Settings are stored as plain strings (``Setting`` rows written by the admin
form). They are parsed exactly once per operation into an immutable
``StoreConfig`` so the settlement engine never interprets raw strings itself.

Example:
    Loading the config at the start of a settlement::

        from apps.configuration.store_config import load_store_config

        config = load_store_config()
        points = int(order_total // config.loyalty_threshold)

Note:
    Every required key is validated on load. A missing or malformed key
    raises ``ConfigurationError`` listing all offending keys at once, and the
    failure is logged for operator attention.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, Mapping, Optional

from apps.common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreConfig:
    """Validated numeric store settings."""

    usd_rate: Decimal
    min_order: Decimal
    loyalty_threshold: Decimal
    loyalty_gift_points: int
    discount_orders_count: int
    discount_amount: Decimal


def parse_decimal(raw: str) -> Decimal:
    value = Decimal(raw.strip())
    if not value.is_finite():
        raise ValueError(f"{raw!r} is not a finite number")
    return value


def parse_int(raw: str) -> int:
    return int(raw.strip())


@dataclass(frozen=True)
class SettingSpec:
    """How one setting key is parsed and bounded."""

    key: str
    parse: Callable[[str], object]
    positive: bool
    default: str
    description: str

    def coerce(self, raw: str):
        """Parse ``raw`` and check its bounds; raises ValueError on failure."""
        try:
            value = self.parse(raw)
        except (InvalidOperation, ValueError, TypeError, AttributeError):
            raise ValueError(f"{raw!r} is not a valid number")
        if self.positive and value <= 0:
            raise ValueError(f"must be greater than zero, got {raw!r}")
        if value < 0:
            raise ValueError(f"must not be negative, got {raw!r}")
        return value


SETTING_SPECS = (
    SettingSpec('usd_rate', parse_decimal, True, '41.50', 'USD to UAH exchange rate'),
    SettingSpec('min_order', parse_decimal, False, '5000', 'Minimum order amount, UAH'),
    SettingSpec('loyalty_threshold', parse_decimal, True, '1000', 'UAH spent per loyalty point'),
    SettingSpec('loyalty_gift_points', parse_int, False, '100', 'Point balance that earns a gift'),
    SettingSpec('discount_orders_count', parse_int, True, '10', 'Every N-th order unlocks a discount'),
    SettingSpec('discount_amount', parse_decimal, False, '1000', 'Flat discount for the next order, UAH'),
)

SPECS_BY_KEY = {spec.key: spec for spec in SETTING_SPECS}

DEFAULT_SETTINGS = {spec.key: spec.default for spec in SETTING_SPECS}


def _read_settings() -> dict:
    from .models import Setting

    return dict(Setting.objects.values_list('key', 'value'))


def load_store_config(settings_map: Optional[Mapping[str, str]] = None) -> StoreConfig:
    """
    Build a ``StoreConfig`` from the settings table (or a given mapping).

    Args:
        settings_map: Optional key -> string mapping. When omitted, all
            ``Setting`` rows are read in one query.

    Returns:
        StoreConfig with every field parsed and bounds-checked.

    Raises:
        ConfigurationError: If any required key is missing or malformed.
    """
    if settings_map is None:
        settings_map = _read_settings()

    values = {}
    problems = []
    for spec in SETTING_SPECS:
        raw = settings_map.get(spec.key)
        if raw is None:
            problems.append(f"{spec.key}: missing")
            continue
        try:
            values[spec.key] = spec.coerce(raw)
        except ValueError as exc:
            problems.append(f"{spec.key}: {exc}")

    if problems:
        message = "Invalid store configuration: " + "; ".join(problems)
        logger.error(message)
        raise ConfigurationError(message)

    return StoreConfig(**values)
