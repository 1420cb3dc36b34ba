"""Currency units built from a flat table of rates against a base currency."""

from __future__ import annotations

from typing import Mapping

from .registry import Formatter, UnitDefinition, UnitFamily, unit_family, unit_with_ratio

CURRENCY_FAMILY = "currency"

# Currencies whose amounts render with the bare symbol
HOME_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

# Shared symbols; the code is appended to tell them apart
SHARED_SYMBOLS = {
    "AUD": "$",
    "CAD": "$",
    "HKD": "$",
    "MXN": "$",
    "NZD": "$",
    "SGD": "$",
    "CNY": "¥",
    "JPY": "¥",
    "INR": "₹",
    "KRW": "₩",
}

# Placeholder until a rates file from the fetch job is configured
DEFAULT_RATES = {
    "USD": 1.0,
    "CAD": 1.32,
}
DEFAULT_BASE = "USD"


def currency_formatter(code: str) -> Formatter:
    code = code.upper()
    if code in HOME_SYMBOLS:
        symbol = HOME_SYMBOLS[code]
        return lambda rendered: f"{symbol}{rendered}"
    if code in SHARED_SYMBOLS:
        symbol = SHARED_SYMBOLS[code]
        return lambda rendered: f"{symbol}{rendered} {code}"
    return lambda rendered: f"{rendered} {code}"


def currency_unit(code: str, rate: float) -> UnitDefinition:
    """One unit of the base currency is worth ``rate`` units of ``code``."""
    return unit_with_ratio(code, (), rate, currency_formatter(code))


def currency_family_from_table(base: str, rates: Mapping[str, float]) -> UnitFamily:
    table = {code.upper(): float(rate) for code, rate in rates.items()}
    table.setdefault(base.upper(), 1.0)
    units = [currency_unit(code, rate) for code, rate in sorted(table.items())]
    return unit_family(CURRENCY_FAMILY, base, units)


def default_currency_family() -> UnitFamily:
    return currency_family_from_table(DEFAULT_BASE, DEFAULT_RATES)
