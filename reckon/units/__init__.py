"""Unit families, the unit registry and currency-rate loading."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from ..config import get_config
from .currency import CURRENCY_FAMILY, default_currency_family
from .rates import RatesSnapshot, currency_family, load_rates, parse_rates
from .registry import UnitDefinition, UnitFamily, UnitRegistry, unit_definition, unit_family, unit_with_ratio
from .temperature import TEMPERATURE_FAMILY, temperature_family


def build_registry(rates_file: Optional[Path] = None, *, strict_units: bool = False) -> UnitRegistry:
    """
    Registry of the built-in families, with live currency rates when given.

    Unit synonyms may not shadow the lexer's reserved words.

    Raises:
        RatesFileError: If ``rates_file`` cannot be loaded.
        UnitRegistryError: If a unit synonym collides with a reserved word or
            another unit.
    """
    from ..lexer import RESERVED_WORDS

    registry = UnitRegistry(
        [temperature_family(), default_currency_family()],
        strict=strict_units,
        reserved=RESERVED_WORDS,
    )
    if rates_file is not None:
        registry = registry.with_family(currency_family(load_rates(rates_file)))
    return registry


@lru_cache(maxsize=1)
def get_default_registry() -> UnitRegistry:
    """Process-wide registry built from the active configuration."""
    config = get_config()
    return build_registry(config.rates_file, strict_units=config.strict_units)


__all__ = [
    "CURRENCY_FAMILY",
    "TEMPERATURE_FAMILY",
    "RatesSnapshot",
    "UnitDefinition",
    "UnitFamily",
    "UnitRegistry",
    "build_registry",
    "currency_family",
    "default_currency_family",
    "get_default_registry",
    "load_rates",
    "parse_rates",
    "temperature_family",
    "unit_definition",
    "unit_family",
    "unit_with_ratio",
]
