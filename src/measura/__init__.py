"""
measura: unit algebra, dimensional analysis and linear unit conversion.

Units compose with ``*``, ``/`` and integer powers, carry their dimensional
signature, convert values between dimensionally equivalent units, and render to
(and parse from) a canonical symbol such as ``kg*m/s^2``.
This module exposes a minimal, stable public API. The units registry is
imported lazily because building it registers the whole built-in unit table.
"""

from importlib import metadata as _metadata


__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("measura")
except _metadata.PackageNotFoundError:
    import os
    import tomllib
    _pyproject = os.path.join(os.path.dirname(__file__), "..", "..", "pyproject.toml")
    with open(_pyproject, "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

from typing import TYPE_CHECKING, Any

from measura.core.dimensions import Dimension
from measura.core.measurement import Measurement
from measura.core.unit import UNITLESS, DefinedUnit, Unit, convert
from measura.errors import (
    DuplicateNameError,
    DuplicateSymbolError,
    IncompatibleUnitsError,
    InvalidSymbolError,
    NonLinearCompositeError,
    UnitError,
    UnitNotFoundError,
    UnitParseError,
)

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from measura.units.registry import UnitsRegistry

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "Dimension",
    "DefinedUnit",
    "Unit",
    "UNITLESS",
    "Measurement",
    "convert",
    "UnitError",
    "InvalidSymbolError",
    "DuplicateSymbolError",
    "DuplicateNameError",
    "UnitNotFoundError",
    "UnitParseError",
    "IncompatibleUnitsError",
    "NonLinearCompositeError",
]

_LAZY_REGISTRY_NAMES = ("DEFAULT_REGISTRY", "UnitsRegistry", "define")


# Lazy access helpers -------------------------------------------------------

def _get_default_registry() -> "UnitsRegistry":
    # Import here to avoid import-time side-effects / circular imports.
    from measura.units.registry import DEFAULT_REGISTRY  # local import
    return DEFAULT_REGISTRY

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. Accessing 'u' will construct a namespace from the
    package's default registry on first use.
    """
    if name == "u":
        return _get_default_registry().as_namespace()
    if name in _LAZY_REGISTRY_NAMES:
        from measura.units import registry
        return getattr(registry, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + ["u", *_LAZY_REGISTRY_NAMES])
