from __future__ import annotations

from dataclasses import dataclass
from math import isfinite
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Tuple, Union

from measura.core.dimensions import DIM_0, Dim, Dimension, combine, scale
from measura.core.utils import render_name, render_pretty, render_symbol, sort_terms
from measura.errors import (
    IncompatibleUnitsError,
    InvalidSymbolError,
    NonLinearCompositeError,
)

if TYPE_CHECKING:  # pragma: no cover - imported only for type checking
    from measura.core.measurement import Measurement


# Characters that carry meaning in the canonical unit grammar.
OPERATOR_SYMBOLS: Tuple[str, ...] = ("*", "/", "^")


def _validate_label(kind: str, value: object, allow_inner_spaces: bool) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidSymbolError(f"{kind} cannot be empty")
    for op in OPERATOR_SYMBOLS:
        if op in value:
            raise InvalidSymbolError(f"{kind} {value!r} cannot contain {op!r}")
    if allow_inner_spaces:
        if value != value.strip():
            raise InvalidSymbolError(f"{kind} {value!r} cannot start or end with whitespace")
    elif any(ch.isspace() for ch in value):
        raise InvalidSymbolError(f"{kind} {value!r} cannot contain whitespace")


@dataclass(frozen=True, slots=True, eq=False)
class DefinedUnit:
    """An atomic unit: a name, a symbol, a dimension and an affine conversion law.

    Converting a value of this unit to the base unit of its dimension is
    ``value * coefficient + constant``. Base units have coefficient 1 and
    constant 0; shifted scales such as Celsius carry a non-zero constant.

    Units hash by symbol, since symbols are unique within a registry.
    """

    name: str
    symbol: str
    dimension: Dim
    coefficient: float = 1.0
    constant: float = 0.0

    def __post_init__(self) -> None:
        _validate_label("Symbol", self.symbol, allow_inner_spaces=False)
        _validate_label("Name", self.name, allow_inner_spaces=True)
        if not isinstance(self.dimension, Dimension):
            object.__setattr__(self, "dimension", Dimension(self.dimension))

        coefficient = float(self.coefficient)
        constant = float(self.constant)
        if not (isfinite(coefficient) and coefficient != 0.0):
            raise ValueError("coefficient must be a finite, non-zero number")
        if not isfinite(constant):
            raise ValueError("constant must be a finite number")
        object.__setattr__(self, "coefficient", coefficient)
        object.__setattr__(self, "constant", constant)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DefinedUnit):
            return NotImplemented
        return (
            self.symbol == other.symbol
            and self.dimension == other.dimension
            and self.coefficient == other.coefficient
            and self.constant == other.constant
        )

    def __hash__(self) -> int:
        return hash(self.symbol)

    @property
    def is_linear(self) -> bool:
        return self.constant == 0.0

    def to_base(self, value: float) -> float:
        return value * self.coefficient + self.constant

    def from_base(self, value: float) -> float:
        return (value - self.constant) / self.coefficient


UnitLike = Union["Unit", DefinedUnit]
Term = Tuple[DefinedUnit, int]


def _as_unit(value: object) -> Optional["Unit"]:
    if isinstance(value, Unit):
        return value
    if isinstance(value, DefinedUnit):
        return Unit(value)
    return None


def _check_power(n: object) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Unit exponents must be int, got {type(n).__name__}")
    return n


@dataclass(frozen=True, slots=True, init=False, repr=False)
class Unit:
    """A unit of measure: one defined unit, or a product of defined units.

    The composition is stored as ``(DefinedUnit, exponent)`` pairs in
    canonical order with zero exponents removed, so:

    - a single entry at exponent 1 *is* the atomic form of that unit;
    - the empty composition is the unitless unit;
    - equality and hashing are structural over the exponent map.
    """

    _terms: Tuple[Term, ...]

    def __init__(
        self,
        subunits: Union[DefinedUnit, Mapping[DefinedUnit, int], Iterable[Term], None] = None,
    ) -> None:
        merged: dict[DefinedUnit, int] = {}
        if isinstance(subunits, DefinedUnit):
            merged[subunits] = 1
        elif subunits is not None:
            items = subunits.items() if isinstance(subunits, Mapping) else subunits
            for sub, exp in items:
                if not isinstance(sub, DefinedUnit):
                    raise TypeError(f"Unit components must be DefinedUnit, got {type(sub).__name__}")
                merged[sub] = merged.get(sub, 0) + _check_power(exp)
        object.__setattr__(self, "_terms", tuple(sort_terms(merged.items())))

    # --- Structure ---
    @property
    def subunits(self) -> Mapping[DefinedUnit, int]:
        return MappingProxyType(dict(self._terms))

    @property
    def is_atomic(self) -> bool:
        return len(self._terms) == 1 and self._terms[0][1] == 1

    @property
    def is_composite(self) -> bool:
        return not self.is_atomic

    @property
    def is_unitless(self) -> bool:
        return not self._terms

    @property
    def defined(self) -> Optional[DefinedUnit]:
        """The wrapped defined unit for an atomic unit, else ``None``."""
        return self._terms[0][0] if self.is_atomic else None

    @property
    def dimension(self) -> Dimension:
        if self.is_atomic:
            return self._terms[0][0].dimension
        dim = DIM_0
        for sub, exp in self._terms:
            dim = combine(dim, scale(sub.dimension, exp))
        return dim

    # --- Rendering ---
    @property
    def symbol(self) -> str:
        if self.is_atomic:
            return self._terms[0][0].symbol
        return render_symbol(self._terms)

    @property
    def name(self) -> str:
        if self.is_atomic:
            return self._terms[0][0].name
        return render_name(self._terms)

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return f"Unit({self.symbol!r})"

    def __format__(self, spec: str) -> str:
        if spec in ("", "symbol"):
            return self.symbol
        if spec == "name":
            return self.name
        if spec == "pretty":
            return self._terms[0][0].symbol if self.is_atomic else render_pretty(self._terms)
        raise ValueError("Unknown format spec; use '', 'symbol', 'name', or 'pretty'")

    # --- Algebra ---
    def _merge(self, other: "Unit", sign: int) -> "Unit":
        merged = dict(self._terms)
        for sub, exp in other._terms:
            merged[sub] = merged.get(sub, 0) + sign * exp
        return Unit(merged)

    def __mul__(self, other: object) -> "Unit":
        rhs = _as_unit(other)
        if rhs is None:
            return NotImplemented
        return self._merge(rhs, 1)

    def __rmul__(self, other: object) -> "Unit | Measurement":
        lhs = _as_unit(other)
        if lhs is not None:
            return lhs._merge(self, 1)
        if isinstance(other, (int, float)) and not isinstance(other, bool):
            from measura.core.measurement import Measurement

            return Measurement(float(other), self)
        return NotImplemented

    def __truediv__(self, other: object) -> "Unit":
        rhs = _as_unit(other)
        if rhs is None:
            return NotImplemented
        return self._merge(rhs, -1)

    def __rtruediv__(self, other: object) -> "Unit":
        lhs = _as_unit(other)
        if lhs is not None:
            return lhs._merge(self, -1)
        if isinstance(other, (int, float)) and not isinstance(other, bool) and other == 1:
            return self ** -1
        raise TypeError(
            f"Invalid operation: cannot divide {other!r} by a Unit ({self.symbol}). "
            "Only 1/unit (reciprocal) is supported."
        )

    def __pow__(self, n: int, modulo: object = None) -> "Unit":
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Unit.")
        n = _check_power(n)
        return Unit((sub, exp * n) for sub, exp in self._terms)

    def pow(self, n: int) -> "Unit":
        return self ** n

    # --- Conversion ---
    def is_dimensionally_equivalent(self, other: UnitLike) -> bool:
        other_unit = _as_unit(other)
        if other_unit is None:
            raise TypeError(f"Expected a Unit, got {type(other).__name__}")
        return self.dimension == other_unit.dimension

    @property
    def is_linear(self) -> bool:
        """True when no component carries an additive constant."""
        return all(sub.constant == 0.0 for sub, _ in self._terms)

    @property
    def coefficient(self) -> float:
        """Multiplier from this unit to the base units of its dimension."""
        if self.is_atomic:
            return self._terms[0][0].coefficient
        total = 1.0
        for sub, exp in self._terms:
            if sub.constant != 0.0:
                raise NonLinearCompositeError(
                    f"Nonlinear unit prevents conversion of {self.symbol!r}: "
                    f"{sub.symbol!r} has an additive constant and cannot be part of a composite unit."
                )
            total *= sub.coefficient ** exp
        return total

    def to_base(self, value: float) -> float:
        if self.is_atomic:
            return self._terms[0][0].to_base(value)
        return value * self.coefficient

    def from_base(self, value: float) -> float:
        if self.is_atomic:
            return self._terms[0][0].from_base(value)
        return value / self.coefficient

    def convert(self, value: float, to: UnitLike) -> float:
        """Convert ``value`` expressed in this unit into ``to``."""
        return convert(value, self, to)


def convert(value: float, from_unit: UnitLike, to_unit: UnitLike) -> float:
    """Convert ``value`` from one unit to a dimensionally equivalent one."""
    src, dst = _as_unit(from_unit), _as_unit(to_unit)
    if src is None or dst is None:
        raise TypeError("convert() expects Unit or DefinedUnit arguments")
    if not src.is_dimensionally_equivalent(dst):
        raise IncompatibleUnitsError(
            f"Cannot convert {src.symbol or '1'!r} {src.dimension!r} "
            f"to {dst.symbol or '1'!r} {dst.dimension!r}"
        )
    return dst.from_base(src.to_base(value))


UNITLESS = Unit()

__all__ = ["DefinedUnit", "Unit", "UNITLESS", "OPERATOR_SYMBOLS", "convert"]
