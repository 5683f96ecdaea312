# src/lossofcharge/units.py
import logging
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.info("Pint Unit Registry initialized.")


def to_si_magnitude(value: Union[str, int, float], unit: str) -> float:
    """
    Converts a literal such as "5 Mohm" or "10 uF" to a float in the given SI unit.

    Bare numbers (or numeric strings without a unit) are taken to already be
    in SI units.

    Raises:
        pint.DimensionalityError: if the literal's unit is incompatible.
        pint.UndefinedUnitError: if the literal names an unknown unit.
        ValueError: if a string cannot be parsed at all.
    """
    if isinstance(value, bool):
        raise ValueError(f"Expected a number or quantity string, got boolean {value!r}.")
    if isinstance(value, (int, float)):
        return float(value)

    parsed = ureg.Quantity(value)
    if parsed.dimensionless:
        return float(parsed.magnitude)
    return float(parsed.to(unit).magnitude)
