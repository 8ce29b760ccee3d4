"""
measura.core.measurement
========================

A thin value type pairing a number with a :class:`~measura.core.unit.Unit`.

All unit bookkeeping is delegated to the unit engine:

- addition and subtraction require identical units;
- multiplication and division compose the units;
- conversion goes through the affine laws of both units after a
  dimensional-equivalence check.
"""

from __future__ import annotations

from math import isclose
from typing import TYPE_CHECKING, Any, Mapping, Union

from measura.core.unit import DefinedUnit, Unit, convert
from measura.errors import IncompatibleUnitsError

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from measura.units.registry import UnitsRegistry

Number = Union[int, float]


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _resolve_unit(unit: "Unit | DefinedUnit | str", registry: "UnitsRegistry | None" = None) -> Unit:
    if isinstance(unit, Unit):
        return unit
    if isinstance(unit, DefinedUnit):
        return Unit(unit)
    if isinstance(unit, str):
        if registry is None:
            from measura.units.registry import DEFAULT_REGISTRY as registry
        return registry.get(unit)
    raise TypeError(f"Expected a Unit or unit expression, got {type(unit).__name__}")


class Measurement:
    """
    A numeric value expressed in a unit.

    Attributes
    ----------
    value : float
        The magnitude in ``unit`` (not converted to base units).
    unit : Unit
        The unit the value is expressed in.
    """
    __slots__ = ("value", "unit")

    def __init__(self, value: Number, unit: "Unit | DefinedUnit | str") -> None:
        if not _is_number(value):
            raise TypeError(f"Measurement value must be a number, got {type(value).__name__}")
        self.value = float(value)
        self.unit = _resolve_unit(unit)

    # --- Comparison ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self.value == other.value and self.unit == other.unit

    def __hash__(self) -> int:
        return hash((self.value, self.unit))

    def isclose(self, other: "Measurement", rel_tol: float = 1e-9, abs_tol: float = 0.0) -> bool:
        """Compare after converting ``other`` into this measurement's unit."""
        if not isinstance(other, Measurement):
            raise TypeError(f"Cannot compare Measurement with type {type(other)}")
        return isclose(self.value, other.convert(self.unit).value, rel_tol=rel_tol, abs_tol=abs_tol)

    def is_dimensionally_equivalent(self, other: "Measurement") -> bool:
        return self.unit.is_dimensionally_equivalent(other.unit)

    # --- Conversion ---
    def declare(self, unit: "Unit | DefinedUnit | str") -> "Measurement":
        """Same value, new unit. The value is *not* converted."""
        return Measurement(self.value, _resolve_unit(unit))

    def convert(self, unit: "Unit | DefinedUnit | str") -> "Measurement":
        new_unit = _resolve_unit(unit)
        if new_unit == self.unit:
            return self
        return Measurement(convert(self.value, self.unit, new_unit), new_unit)

    # --- Arithmetic ---
    def _check_same_unit(self, other: "Measurement") -> None:
        if self.unit != other.unit:
            raise IncompatibleUnitsError(
                f"Incompatible units: {self.unit.symbol!r} != {other.unit.symbol!r}"
            )

    def __add__(self, other: object) -> "Measurement":
        if not isinstance(other, Measurement):
            return NotImplemented
        self._check_same_unit(other)
        return Measurement(self.value + other.value, self.unit)

    def __sub__(self, other: object) -> "Measurement":
        if not isinstance(other, Measurement):
            return NotImplemented
        self._check_same_unit(other)
        return Measurement(self.value - other.value, self.unit)

    def __neg__(self) -> "Measurement":
        return Measurement(-self.value, self.unit)

    def __mul__(self, other: object) -> "Measurement":
        if isinstance(other, Measurement):
            return Measurement(self.value * other.value, self.unit * other.unit)
        if isinstance(other, (Unit, DefinedUnit)):
            return Measurement(self.value, self.unit * other)
        if _is_number(other):
            return Measurement(self.value * other, self.unit)
        return NotImplemented

    def __rmul__(self, other: object) -> "Measurement":
        # allows 3 * (2 m) -> 6 m and unit * measurement
        if isinstance(other, (Unit, DefinedUnit)):
            return Measurement(self.value, other * self.unit)
        if _is_number(other):
            return Measurement(other * self.value, self.unit)
        return NotImplemented

    def __truediv__(self, other: object) -> "Measurement":
        if isinstance(other, Measurement):
            return Measurement(self.value / other.value, self.unit / other.unit)
        if isinstance(other, (Unit, DefinedUnit)):
            return Measurement(self.value, self.unit / other)
        if _is_number(other):
            return Measurement(self.value / other, self.unit)
        return NotImplemented

    def __rtruediv__(self, other: object) -> "Measurement":
        if isinstance(other, (Unit, DefinedUnit)):
            return Measurement(1.0 / self.value, other / self.unit)
        if _is_number(other):
            return Measurement(other / self.value, self.unit ** -1)
        return NotImplemented

    def __pow__(self, n: int) -> "Measurement":
        new_unit = self.unit ** n
        return Measurement(self.value ** n, new_unit)

    def pow(self, n: int) -> "Measurement":
        return self ** n

    # --- Serialization ---
    def as_dict(self) -> dict[str, Any]:
        """Wire form: the value and the canonical unit symbol."""
        return {"value": self.value, "unit": self.unit.symbol}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], registry: "UnitsRegistry | None" = None) -> "Measurement":
        if registry is None:
            from measura.units.registry import DEFAULT_REGISTRY as registry
        return cls(data["value"], registry.parse(data["unit"]))

    # --- Display ---
    def _render(self, unit_text: str) -> str:
        return f"{self.value:.15g}" if not unit_text else f"{self.value:.15g} {unit_text}"

    def __str__(self) -> str:
        return self._render(self.unit.symbol)

    def __repr__(self) -> str:
        return f"Measurement({self.value!r}, {self.unit.symbol!r})"

    def __format__(self, spec: str) -> str:
        """
        Supported specifiers
        --------------------
        "" (empty), or "native"
            Value followed by the canonical unit symbol.
        "name"
            Value followed by the unit name.
        "pretty"
            Value followed by the superscripted symbol (``kg·m/s²``).
        anything else
            A float format spec applied to the value (``.2f``, ``>10.3e``),
            followed by the canonical unit symbol.
        """
        key = (spec or "").strip().lower()
        if key in ("", "native"):
            return str(self)
        if key == "name":
            return self._render(self.unit.name)
        if key == "pretty":
            return self._render(format(self.unit, "pretty"))
        value = format(self.value, spec)
        return f"{value} {self.unit.symbol}" if self.unit.symbol else value


__all__ = ["Measurement"]
