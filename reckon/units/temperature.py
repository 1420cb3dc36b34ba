"""Temperature units with kelvin as the base."""

from __future__ import annotations

from .registry import UnitFamily, unit_definition, unit_family

TEMPERATURE_FAMILY = "temperature"

ABSOLUTE_ZERO_CELSIUS = 273.15


def temperature_family() -> UnitFamily:
    return unit_family(
        TEMPERATURE_FAMILY,
        "kelvin",
        [
            unit_definition(
                "kelvin",
                (),
                to_base=lambda value: value,
                from_base=lambda value: value,
                formatter=lambda rendered: f"{rendered} K",
            ),
            unit_definition(
                "celsius",
                ("c", "°c"),
                to_base=lambda value: value + ABSOLUTE_ZERO_CELSIUS,
                from_base=lambda value: value - ABSOLUTE_ZERO_CELSIUS,
                formatter=lambda rendered: f"{rendered} °C",
            ),
            unit_definition(
                "fahrenheit",
                ("f", "°f"),
                to_base=lambda value: (value - 32) * 5 / 9 + ABSOLUTE_ZERO_CELSIUS,
                from_base=lambda value: (value - ABSOLUTE_ZERO_CELSIUS) * 9 / 5 + 32,
                formatter=lambda rendered: f"{rendered} °F",
            ),
        ],
    )
