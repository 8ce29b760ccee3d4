"""
measura.units.registry
======================

A thread-safe registry of defined units, addressable by symbol, name or alias.

- `UnitsRegistry` owns the symbol map, the name map and the alias `Bimap`.
- Registration is atomic: a unit's symbol and name entries appear together
  or not at all, under a single lock shared by readers and writers.
- Duplicate symbols and duplicate names are both reported as recoverable errors.
- `parse` / `parse_name` turn canonical renderings back into units.
- `UnitNamespace` gives attribute-style access (`u.km`, `u("km/hr")`).

Lifecycle: build the registry (bootstrap the built-in table, then define any
custom units), then use it. `DEFAULT_REGISTRY` is the shared instance built at
import time; create a fresh `UnitsRegistry()` or call
`_bootstrap_default_registry()` for isolation.
"""
from __future__ import annotations

import logging
import threading
from typing import ClassVar, Dict, Iterable, Mapping, Optional

from measura.core.dimensions import DimLike
from measura.core.unit import OPERATOR_SYMBOLS, DefinedUnit, Unit
from measura.errors import (
    DuplicateNameError,
    DuplicateSymbolError,
    UnitNotFoundError,
)
from measura.units.bimap import Bimap
from measura.units.builtin import BUILTIN_ALIASES, BUILTIN_UNITS
from measura.units.parser import extract_unit_expr, extract_unit_name_expr

logger = logging.getLogger(__name__)


def _defined_of(unit: "Unit | DefinedUnit") -> DefinedUnit:
    if isinstance(unit, DefinedUnit):
        return unit
    if isinstance(unit, Unit) and unit.defined is not None:
        return unit.defined
    raise TypeError(f"Aliases can only be attached to atomic units, got {unit!r}")


# ---------------------------------------------------------------------------
# Units registry
# ---------------------------------------------------------------------------
class UnitsRegistry:
    """Thread-safe registry for `DefinedUnit` objects.

    Lookups by symbol and by name return the atomic `Unit` wrapping the
    definition, so repeated lookups return the same object.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._by_symbol: Dict[str, Unit] = {}
        self._by_name: Dict[str, Unit] = {}
        self._aliases: Bimap[DefinedUnit, str] = Bimap()

    def __contains__(self, spec: str) -> bool:
        return self.has(spec)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_symbol)

    # -------------------------- registration --------------------------------
    def define(
        self,
        name: str,
        symbol: str,
        dimension: DimLike,
        coefficient: float = 1.0,
        constant: float = 0.0,
    ) -> Unit:
        """Define and register a new atomic unit; return it as a `Unit`.

        Raises `InvalidSymbolError` for malformed symbols or names,
        `DuplicateSymbolError` / `DuplicateNameError` on collisions.
        """
        return self.register(DefinedUnit(name, symbol, dimension, coefficient, constant))

    def register(self, defined: DefinedUnit) -> Unit:
        """Register a pre-built `DefinedUnit` under its symbol and name."""
        if not isinstance(defined, DefinedUnit):
            raise TypeError(f"Expected DefinedUnit, got {type(defined).__name__}")
        unit = Unit(defined)

        # The lock wraps the *entire* check-and-set operation so both maps
        # change together.
        with self._lock:
            if defined.symbol in self._by_symbol:
                raise DuplicateSymbolError(
                    f"Cannot register unit {defined.name!r}: "
                    f"a unit with the symbol {defined.symbol!r} already exists."
                )
            if defined.name in self._by_name:
                raise DuplicateNameError(
                    f"Cannot register unit {defined.symbol!r}: "
                    f"a unit with the name {defined.name!r} already exists."
                )
            owner = self._aliases.parent(defined.symbol) or self._aliases.parent(defined.name)
            if owner is not None:
                raise DuplicateSymbolError(
                    f"Cannot register unit {defined.symbol!r}: "
                    f"its symbol or name is already an alias of {owner.symbol!r}."
                )
            self._by_symbol[defined.symbol] = unit
            self._by_name[defined.name] = unit

        logger.debug("registered unit %s (%s) %r", defined.name, defined.symbol, defined.dimension)
        return unit

    # -------------------------- lookup --------------------------------------
    def get_by_symbol(self, symbol: str) -> Unit:
        with self._lock:
            unit = self._by_symbol.get(symbol)
        if unit is None:
            raise UnitNotFoundError(f"Symbol {symbol!r} not recognized")
        return unit

    def get_by_name(self, name: str) -> Unit:
        with self._lock:
            unit = self._by_name.get(name)
        if unit is None:
            raise UnitNotFoundError(f"Name {name!r} not recognized")
        return unit

    def get(self, spec: str) -> Unit:
        """Lookup by symbol, then name, then alias.

        Composite expressions (anything containing `*`, `/` or `^`) and the
        empty string (the unitless unit) are parsed with `parse`.

        Raises `UnitNotFoundError` if unknown.
        """
        # if it is a composed expression
        if not spec or any(op in spec for op in OPERATOR_SYMBOLS):
            return self.parse(spec)

        with self._lock:
            unit = self._by_symbol.get(spec) or self._by_name.get(spec)
            if unit is None:
                owner = self._aliases.parent(spec)
                if owner is not None:
                    unit = self._by_symbol.get(owner.symbol)
        if unit is None:
            raise UnitNotFoundError(f"Unknown unit: {spec!r}")
        return unit

    def has(self, spec: str) -> bool:
        try:
            self.get(spec)
            return True
        except ValueError:
            return False

    def all(self) -> Mapping[str, Unit]:
        """Snapshot of all units keyed by symbol."""
        with self._lock:
            return dict(self._by_symbol)

    # -------------------------- parsing -------------------------------------
    def parse(self, symbol: str) -> Unit:
        """Rebuild a unit from its canonical symbol (`str(unit)`)."""
        return extract_unit_expr(symbol, self)

    def parse_name(self, name: str) -> Unit:
        """Rebuild a unit from its long name (`unit.name`)."""
        return extract_unit_name_expr(name, self)

    # -------------------------- aliases -------------------------------------
    def aliases(self, unit: "Unit | DefinedUnit") -> frozenset[str]:
        defined = _defined_of(unit)
        with self._lock:
            return self._aliases.children(defined)

    def set_aliases(self, unit: "Unit | DefinedUnit", aliases: Iterable[str]) -> None:
        """Replace the full alias set of `unit`.

        Aliases not listed are released; listed aliases are taken from
        whichever unit held them before.
        """
        defined = _defined_of(unit)
        new_aliases = frozenset(aliases)
        with self._lock:
            self._require_registered(defined)
            for alias in new_aliases:
                self._check_alias_free(alias, defined)
            self._aliases.set_children(defined, new_aliases)
        logger.debug("aliases of %s set to %s", defined.symbol, sorted(new_aliases))

    def set_alias(self, alias: str, unit: "Unit | DefinedUnit | None") -> None:
        """Point a single alias at `unit` (or unmap it with ``None``).

        The previous owner loses only this alias.
        """
        with self._lock:
            if unit is None:
                self._aliases.set_parent(alias, None)
                defined = None
            else:
                defined = _defined_of(unit)
                self._require_registered(defined)
                self._check_alias_free(alias, defined)
                self._aliases.set_parent(alias, defined)
        logger.debug("alias %r -> %s", alias, defined.symbol if defined else None)

    def resolve_alias(self, alias: str) -> Unit:
        with self._lock:
            owner = self._aliases.parent(alias)
            unit = self._by_symbol.get(owner.symbol) if owner is not None else None
        if unit is None:
            raise UnitNotFoundError(f"Alias {alias!r} not recognized")
        return unit

    def as_namespace(self) -> UnitNamespace:
        return UnitNamespace(self)

    # ------------------------- internals -----------------------------------
    def _require_registered(self, defined: DefinedUnit) -> None:
        if self._by_symbol.get(defined.symbol) != Unit(defined):
            raise UnitNotFoundError(f"Unit {defined.symbol!r} is not registered in this registry")

    def _check_alias_free(self, alias: str, defined: DefinedUnit) -> None:
        if not isinstance(alias, str) or not alias:
            raise ValueError("Aliases must be non-empty strings")
        for table in (self._by_symbol, self._by_name):
            other = table.get(alias)
            if other is not None and other.defined != defined:
                raise DuplicateSymbolError(
                    f"Cannot use alias {alias!r}: it already identifies unit {other.symbol!r}."
                )


class UnitNamespace:
    _reserved_names: ClassVar[set[str]] = set()

    def __init__(self, reg: "UnitsRegistry") -> None:
        self._reg = reg

    def __contains__(self, spec: str) -> bool:
        return self._reg.has(spec)

    def define(
        self,
        name: str,
        symbol: str,
        dimension: DimLike,
        coefficient: "float|int" = 1.0,
        constant: "float|int" = 0.0,
    ) -> Unit:
        for label in (name, symbol):
            if label in getattr(UnitNamespace, "_reserved_names", ()):
                raise ValueError(
                    f"Cannot define unit '{label}': "
                    "name conflicts with UnitNamespace attribute/method."
                )
        return self._reg.define(name, symbol, dimension, coefficient, constant)

    def __call__(self, spec: "str") -> "Unit":
        return self._reg.get(spec)

    def __getattr__(self, name: "str") -> "Unit":
        if name.startswith("__"):
            raise AttributeError(name)
        try:
            return self._reg.get(name)
        except ValueError as e:
            # Unknown symbol should look like a missing attribute
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        """List all available unit symbols for autocomplete."""
        base_dir = set(super().__dir__())
        units = {sym for sym in self._reg.all() if sym.isidentifier()}
        return sorted(base_dir | units)

UnitNamespace._reserved_names = set(dir(UnitNamespace))  # pyright: ignore[reportInvalidTypeForm] # type: set[str]


# ---------------------------------------------------------------------------
# Bootstrap a default registry with the built-in units
# ---------------------------------------------------------------------------

def _bootstrap_default_registry() -> UnitsRegistry:
    reg = UnitsRegistry()

    for name, symbol, dim, coefficient, constant in BUILTIN_UNITS:
        reg.define(name, symbol, dim, coefficient, constant)

    for symbol, aliases in BUILTIN_ALIASES.items():
        reg.set_aliases(reg.get_by_symbol(symbol), aliases)

    logger.debug("bootstrapped registry with %d units", len(reg))
    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitsRegistry = _bootstrap_default_registry()


def define(
    name: str,
    symbol: str,
    dimension: DimLike,
    coefficient: float = 1.0,
    constant: float = 0.0,
    registry: Optional[UnitsRegistry] = None,
) -> Unit:
    """Define a unit in `registry` (default: `DEFAULT_REGISTRY`)."""
    target = registry if registry is not None else DEFAULT_REGISTRY
    return target.define(name, symbol, dimension, coefficient, constant)


__all__ = [
    "UnitsRegistry",
    "UnitNamespace",
    "DEFAULT_REGISTRY",
    "define",
]
