# measura.core.dimensions

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TypeAlias, Union

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
DimLike = Union["Dimension", Mapping[str, int], Iterable[tuple[str, int]]]


def _check_exponent(n: Any) -> int:
    # bool is an int subclass; True ** 2 style mistakes should not slip through
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Exponent must be int, got {type(n).__name__}")
    return n


# --- Core object -------------------------------------------------------------

class Dimension(Mapping[str, int]):
    """
    Immutable vector of integer exponents keyed by base-dimension name.

    Only non-zero exponents are stored: a dimension that is absent has
    exponent 0. Two vectors are equal iff their non-zero entries match, and a
    vector also compares equal to a plain ``dict`` with the same entries.
    """

    __slots__ = ("_exps",)

    def __init__(self, data: DimLike | None = None) -> None:
        exps: dict[str, int] = {}
        if data is not None:
            items = data.items() if isinstance(data, Mapping) else data
            for key, exp in items:
                if not isinstance(key, str) or not key:
                    raise TypeError("Dimension identifiers must be non-empty strings")
                exps[key] = exps.get(key, 0) + _check_exponent(exp)
        # sorted keys => deterministic iteration and repr
        self._exps: dict[str, int] = {k: exps[k] for k in sorted(exps) if exps[k] != 0}

    @classmethod
    def base(cls, name: str) -> "Dimension":
        """A single base dimension with exponent 1, e.g. ``Dimension.base("length")``."""
        return cls({name: 1})

    # --- Mapping protocol ---
    def __getitem__(self, key: str) -> int:
        return self._exps[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._exps)

    def __len__(self) -> int:
        return len(self._exps)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Dimension):
            return self._exps == other._exps
        if isinstance(other, Mapping):
            return self._exps == {k: v for k, v in other.items() if v != 0}
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._exps.items()))

    # --- Algebra (operator overloads) ---
    def __mul__(self, other: DimLike) -> "Dimension":
        return combine(self, other)

    def __rmul__(self, other: DimLike) -> "Dimension":
        return combine(other, self)

    def __truediv__(self, other: DimLike) -> "Dimension":
        return combine(self, other, -1)

    def __rtruediv__(self, other: DimLike) -> "Dimension":
        """Handles (dict / Dimension) by calculating (other / self)."""
        return combine(other, self, -1)

    def __pow__(self, n: int, modulo: Any | None = None) -> "Dimension":
        # three-argument pow() passes a modulo; not meaningful for exponents
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        return scale(self, n)

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return not self._exps

    def exponent(self, name: str) -> int:
        """Exponent of ``name``; 0 when the dimension is absent."""
        return self._exps.get(name, 0)

    def as_dict(self) -> dict[str, int]:
        return dict(self._exps)

    def __repr__(self) -> str:
        parts = "".join(f"[{name}^{exp}]" for name, exp in self._exps.items())
        return parts or "[dimensionless]"


# --- Composition -------------------------------------------------------------

def combine(a: DimLike, b: DimLike, sign: int = 1) -> Dimension:
    """Add (``sign=1``) or subtract (``sign=-1``) exponents, dropping zero sums."""
    if sign not in (1, -1):
        raise ValueError("sign must be 1 or -1")
    left, right = Dimension(a), Dimension(b)
    merged = dict(left)
    for name, exp in right.items():
        merged[name] = merged.get(name, 0) + sign * exp
    return Dimension(merged)


def scale(v: DimLike, k: int) -> Dimension:
    """Multiply every exponent by the integer ``k``."""
    k = _check_exponent(k)
    return Dimension({name: exp * k for name, exp in Dimension(v).items()})


def dim_mul(a: DimLike, b: DimLike) -> Dimension:
    return combine(a, b)


def dim_div(a: DimLike, b: DimLike) -> Dimension:
    return combine(a, b, -1)


def dim_pow(a: DimLike, n: int) -> Dimension:
    return scale(a, n)


# --- Public constants --------------------------------------------------------

DIM_0: Dim       = Dimension()
LENGTH: Dim      = Dimension.base("length")
MASS: Dim        = Dimension.base("mass")
TIME: Dim        = Dimension.base("time")
CURRENT: Dim     = Dimension.base("current")
TEMPERATURE: Dim = Dimension.base("temperature")
AMOUNT: Dim      = Dimension.base("amount")
LUMINOUS: Dim    = Dimension.base("luminous_intensity")
# extended base dimensions: plane angle and information
ANGLE: Dim       = Dimension.base("angle")
DATA: Dim        = Dimension.base("data")


__all__ = [
    "Dim",
    "DimLike",
    "Dimension",
    "combine",
    "scale",
    "dim_mul",
    "dim_div",
    "dim_pow",
    "DIM_0",
    "LENGTH",
    "MASS",
    "TIME",
    "CURRENT",
    "TEMPERATURE",
    "AMOUNT",
    "LUMINOUS",
    "ANGLE",
    "DATA",
]
