"""Registry of convertible unit families.

Every unit converts to and from its family's base unit, so any two units of
the same family convert through the base::

    target.from_base(source.to_base(value))

The registry is read-only after construction and can be shared between
threads without locking.

By default units of different families convert through their base values
without complaint (``5 USD in kelvin`` is 5 K). A registry built with
``strict=True`` raises IncompatibleUnitsError instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from ..errors import IncompatibleUnitsError, UnitRegistryError, UnknownUnitError

Conversion = Callable[[float], float]
Formatter = Callable[[str], str]


@dataclass(frozen=True)
class UnitDefinition:
    """A single unit with its synonyms, conversions and display formatter."""

    name: str
    synonyms: FrozenSet[str]
    to_base: Conversion
    from_base: Conversion
    formatter: Formatter
    family: str = ""

    def format(self, rendered: str) -> str:
        return self.formatter(rendered)


@dataclass(frozen=True)
class UnitFamily:
    """A group of mutually convertible units sharing one base unit."""

    name: str
    base: str
    units: Tuple[UnitDefinition, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[UnitDefinition]:
        return iter(self.units)


def unit_definition(
    name: str,
    synonyms: Iterable[str],
    to_base: Conversion,
    from_base: Conversion,
    formatter: Formatter,
) -> UnitDefinition:
    """Build a unit whose name is always one of its synonyms."""
    names = {name.lower(), *(synonym.lower() for synonym in synonyms)}
    return UnitDefinition(
        name=name.lower(),
        synonyms=frozenset(names),
        to_base=to_base,
        from_base=from_base,
        formatter=formatter,
    )


def unit_with_ratio(
    name: str,
    synonyms: Iterable[str],
    ratio: float,
    formatter: Formatter,
) -> UnitDefinition:
    """Build a unit worth ``ratio`` of itself per base unit."""
    return unit_definition(
        name,
        synonyms,
        to_base=lambda value: value / ratio,
        from_base=lambda value: value * ratio,
        formatter=formatter,
    )


def unit_family(name: str, base: str, units: Iterable[UnitDefinition]) -> UnitFamily:
    """Build a family, tagging each unit with the family name."""
    tagged = tuple(
        UnitDefinition(
            name=unit.name,
            synonyms=unit.synonyms,
            to_base=unit.to_base,
            from_base=unit.from_base,
            formatter=unit.formatter,
            family=name,
        )
        for unit in units
    )
    if base.lower() not in {unit.name for unit in tagged}:
        raise UnitRegistryError(f"Base unit {base!r} is not a member of family {name!r}")
    return UnitFamily(name=name, base=base.lower(), units=tagged)


class UnitRegistry:
    """Synonym-indexed view over a set of unit families."""

    def __init__(
        self,
        families: Iterable[UnitFamily],
        *,
        strict: bool = False,
        reserved: Iterable[str] = (),
    ) -> None:
        self.strict = strict
        self.reserved: FrozenSet[str] = frozenset(word.lower() for word in reserved)
        self._families: Dict[str, UnitFamily] = {}
        self._by_synonym: Dict[str, UnitDefinition] = {}
        for family in families:
            if family.name in self._families:
                raise UnitRegistryError(f"Duplicate unit family: {family.name!r}")
            self._families[family.name] = family
            for unit in family.units:
                for synonym in unit.synonyms:
                    if synonym in self.reserved:
                        raise UnitRegistryError(
                            f"Synonym {synonym!r} of {family.name}/{unit.name} is a reserved word",
                            hint="Reserved words are operator words, radix names and 'in'",
                        )
                    existing = self._by_synonym.get(synonym)
                    if existing is not None:
                        raise UnitRegistryError(
                            f"Synonym {synonym!r} is used by both "
                            f"{existing.family}/{existing.name} and {family.name}/{unit.name}"
                        )
                    self._by_synonym[synonym] = unit

    def __contains__(self, synonym: object) -> bool:
        return isinstance(synonym, str) and synonym.lower() in self._by_synonym

    def __len__(self) -> int:
        return sum(len(family.units) for family in self._families.values())

    @property
    def families(self) -> List[UnitFamily]:
        return list(self._families.values())

    @property
    def units(self) -> List[UnitDefinition]:
        return [unit for family in self._families.values() for unit in family.units]

    @property
    def synonyms(self) -> FrozenSet[str]:
        return frozenset(self._by_synonym)

    def family(self, name: str) -> Optional[UnitFamily]:
        return self._families.get(name)

    def lookup(self, synonym: str) -> Optional[UnitDefinition]:
        """Return the unit registered under ``synonym`` (case-insensitive)."""
        return self._by_synonym.get(synonym.lower())

    def require(self, synonym: str) -> UnitDefinition:
        unit = self.lookup(synonym)
        if unit is None:
            raise UnknownUnitError(synonym)
        return unit

    def convert(self, from_unit: Optional[str], to_unit: str, value: float) -> float:
        """
        Convert ``value`` from one unit to another.

        A value without a unit passes through unchanged, which is how a bare
        number picks up its first unit.

        Raises:
            UnknownUnitError: If either unit is not registered.
            IncompatibleUnitsError: If the registry is strict and the units
                belong to different families.
        """
        if from_unit is None:
            return value
        source = self.require(from_unit)
        target = self.require(to_unit)
        if self.strict and source.family != target.family:
            raise IncompatibleUnitsError(from_unit, to_unit)
        return target.from_base(source.to_base(value))

    def format(self, unit: str, rendered: str) -> str:
        return self.require(unit).format(rendered)

    def with_family(self, family: UnitFamily) -> "UnitRegistry":
        """Return a new registry with ``family`` added or replacing a namesake.

        The new registry keeps this one's strictness and reserved words.
        """
        families = [existing for existing in self._families.values() if existing.name != family.name]
        families.append(family)
        return UnitRegistry(families, strict=self.strict, reserved=self.reserved)

    def __repr__(self) -> str:
        names = ", ".join(self._families)
        return f"UnitRegistry(families=[{names}])"


__all__ = [
    "Conversion",
    "Formatter",
    "UnitDefinition",
    "UnitFamily",
    "UnitRegistry",
    "unit_definition",
    "unit_with_ratio",
    "unit_family",
]
