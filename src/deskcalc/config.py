"""Calculator tunables and environment loading."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

from deskcalc.exceptions import InvalidInputError
from deskcalc.validators import validate_positive, validate_range

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "DESKCALC_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CalculatorConfig:
    """
    Numeric and formatting limits shared by the engine and the state machine.

    Attributes:
        result_digits: Significant digits kept after every evaluation
        display_digits: Significant digits kept when formatting for display
        snap_tolerance: Distance within which a unary result snaps to an integer
        max_input_length: Unsigned characters allowed in a typed entry
            (one more when the entry has no integer digits)
        exponent_upper: Magnitude from which display switches to exponent form
        exponent_lower: Magnitude below which display switches to exponent form
        exponent_fraction_digits: Fraction digits shown in exponent form
        log_level: Level used by ``configure_logging``
    """

    result_digits: int = 12
    display_digits: int = 15
    snap_tolerance: float = 1e-10
    max_input_length: int = 16
    exponent_upper: float = 1e15
    exponent_lower: float = 1e-6
    exponent_fraction_digits: int = 11
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        validate_range(self.result_digits, min_val=1, max_val=17)
        validate_range(self.display_digits, min_val=1, max_val=17)
        validate_range(self.snap_tolerance, min_val=0, max_val=1, inclusive=False)
        validate_positive(self.max_input_length)
        validate_positive(self.exponent_upper)
        validate_positive(self.exponent_lower)
        validate_range(self.exponent_fraction_digits, min_val=0, max_val=20)
        if self.log_level.upper() not in LOG_LEVELS:
            raise InvalidInputError(self.log_level, "Unknown log level")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CalculatorConfig:
        """
        Build a config from ``DESKCALC_<FIELD>`` environment variables.

        Unset variables keep their defaults.

        Raises:
            InvalidInputError: If a variable cannot be parsed
        """
        if environ is None:
            environ = os.environ

        overrides: dict[str, object] = {}
        for field in fields(cls):
            raw = environ.get(ENV_PREFIX + field.name.upper())
            if raw is None:
                continue
            kind = type(field.default)
            try:
                overrides[field.name] = raw.strip() if kind is str else kind(raw)
            except ValueError as e:
                raise InvalidInputError(raw, f"Cannot parse {field.name}") from e
        return cls(**overrides)


DEFAULT_CONFIG = CalculatorConfig()
