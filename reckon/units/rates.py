"""
Loading of the currency-rate artifact written by the rate-fetch job.

The fetch job stores the body of a fixer.io ``latest`` response as JSON::

    {"success": true, "timestamp": 1561400000, "base": "EUR",
     "date": "2019-06-24", "rates": {"USD": 1.139, "CAD": 1.497}}

or, when the upstream call failed::

    {"success": false, "error": {"code": 101, "type": "invalid_access_key"}}

Only the success shape can be turned into a currency family. Rates are read
as "one unit of ``base`` is worth ``rate`` units of the currency".
"""

from __future__ import annotations

import json
import math
import re
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from ..errors import RatesFileError
from ..observability import get_logger
from .currency import currency_family_from_table
from .registry import UnitFamily

logger = get_logger(__name__)

_CURRENCY_CODE = re.compile(r"^[A-Za-z]{3}$")


def _normalise_code(code: str) -> str:
    if not isinstance(code, str) or not _CURRENCY_CODE.match(code):
        raise ValueError(f"invalid currency code {code!r}")
    return code.upper()


class FetchErrorDetail(BaseModel):
    """Error body reported by the upstream rate service."""

    model_config = ConfigDict(extra="ignore")

    code: Optional[int] = None
    type: Optional[str] = None
    info: Optional[str] = None


class FetchFailure(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: Literal[False]
    error: FetchErrorDetail = Field(default_factory=FetchErrorDetail)


class RatesSnapshot(BaseModel):
    """A validated base-currency rate table."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    success: Literal[True] = True
    timestamp: Optional[int] = None
    base: str = Field(..., description="Currency every rate is quoted against")
    date: Optional[str] = None
    rates: Dict[str, float] = Field(..., min_length=1)

    @field_validator("base")
    @classmethod
    def _validate_base(cls, value: str) -> str:
        return _normalise_code(value)

    @field_validator("rates")
    @classmethod
    def _validate_rates(cls, value: Dict[str, float], info: ValidationInfo) -> Dict[str, float]:
        table: Dict[str, float] = {}
        for code, rate in value.items():
            normalised = _normalise_code(code)
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"rate for {normalised} must be a positive number, got {rate!r}")
            table[normalised] = rate
        base = info.data.get("base")
        if base:
            table.setdefault(base, 1.0)
        return table


def parse_rates(payload: Mapping[str, Any]) -> RatesSnapshot:
    """
    Validate a decoded rate artifact.

    Raises:
        RatesFileError: If the artifact records a failed fetch or does not
            match the expected shape.
    """
    if not isinstance(payload, Mapping):
        raise RatesFileError("Rates artifact must be a JSON object")
    if payload.get("success") is False:
        try:
            failure = FetchFailure.model_validate(payload)
        except ValidationError as exc:
            raise RatesFileError(f"Malformed rate fetch failure: {exc}") from exc
        reason = failure.error.type or "unknown error"
        raise RatesFileError(
            f"Rate fetch failed: {reason}",
            hint="Re-run the rate fetch job before loading its output",
        )
    try:
        return RatesSnapshot.model_validate(dict(payload))
    except ValidationError as exc:
        raise RatesFileError(f"Invalid rates artifact: {exc}") from exc


def load_rates(path: Path) -> RatesSnapshot:
    """Read and validate the rate artifact stored at ``path``."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning("Cannot read rates file %s: %s", path, exc)
        raise RatesFileError(f"Cannot read rates file {path}: {exc}") from exc
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("Rates file %s is not valid JSON", path)
        raise RatesFileError(f"Rates file {path} is not valid JSON: {exc}") from exc
    snapshot = parse_rates(payload)
    logger.info(
        "Loaded %d currency rates against %s from %s",
        len(snapshot.rates),
        snapshot.base,
        path,
    )
    return snapshot


def currency_family(snapshot: RatesSnapshot) -> UnitFamily:
    return currency_family_from_table(snapshot.base, snapshot.rates)


__all__ = [
    "FetchErrorDetail",
    "FetchFailure",
    "RatesSnapshot",
    "parse_rates",
    "load_rates",
    "currency_family",
]
