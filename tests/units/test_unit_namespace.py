# pytest tests for measura.units.registry.UnitNamespace

import pytest

import measura.units.registry as regmod
from measura.core.dimensions import LENGTH
from measura.core.unit import UNITLESS, Unit
from measura.units.registry import UnitNamespace


@pytest.fixture()
def ns(reg):
    """A UnitNamespace over an isolated registry."""
    return UnitNamespace(reg)

# ---------------------------------------------------------------------------
# Access styles: __call__, __getattr__
# ---------------------------------------------------------------------------

def test_namespace_call_returns_unit(ns, reg):
    u1 = ns("m")
    u2 = reg.get("m")
    assert isinstance(u1, Unit)
    assert u1 is u2

def test_namespace_getattr_returns_unit(ns, reg):
    u1 = ns.kg
    u2 = reg.get("kg")
    assert isinstance(u1, Unit)
    assert u1 is u2

def test_namespace_access_styles_equivalent(ns):
    assert ns("A") is ns.A
    assert ns("meter") is ns.meter is ns.m

def test_as_namespace_wraps_registry(reg):
    ns = reg.as_namespace()
    assert isinstance(ns, UnitNamespace)
    assert ns.m is reg.get("m")

# ---------------------------------------------------------------------------
# Aliases also work via __getattr__
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("alias, canonical", [
    ("Ohm", "Ω"),
    ("OHM", "Ω"),
    ("ohm", "Ω"),  # the unit's name
    ("feet", "ft"),
    ("degC", "°C"),
])
def test_namespace_getattr_aliases(ns, reg, alias, canonical):
    assert getattr(ns, alias) is reg.get(canonical)

# ---------------------------------------------------------------------------
# Compound expressions route through registry.get
# ---------------------------------------------------------------------------

def test_namespace_call_compound_expression(ns, reg):
    a = ns("m/s^2")
    b = reg.get("m") / (reg.get("s") ** 2)
    assert a == b
    assert a.dimension == {"length": 1, "time": -2}

def test_namespace_call_empty_is_unitless(ns):
    assert ns("") == UNITLESS

def test_contains(ns):
    assert "km" in ns
    assert "km/hr" in ns
    assert "feet" in ns
    assert "parsec" not in ns

# ---------------------------------------------------------------------------
# Error behavior
# ---------------------------------------------------------------------------

def test_namespace_getattr_unknown_raises_attributeerror(ns):
    with pytest.raises(AttributeError):
        _ = ns.blorp

def test_namespace_getattr_dunder_raises_attributeerror(ns):
    with pytest.raises(AttributeError):
        _ = ns.__wrapped__

def test_namespace_call_unknown_raises_valueerror(ns):
    with pytest.raises(ValueError):
        _ = ns("blorp")

def test_namespace_call_malformed_raises_valueerror(ns):
    with pytest.raises(ValueError):
        _ = ns("m//s")

# ---------------------------------------------------------------------------
# __dir__: registered identifier-like symbols
# ---------------------------------------------------------------------------

def test_namespace_dir_includes_registered_symbols(ns, reg):
    reg.define("centifoot", "cft", LENGTH, 0.003048)

    names = dir(ns)
    assert "m" in names
    assert "s" in names
    assert "cft" in names
    # symbols that are not identifiers are only reachable through __call__
    assert "°C" not in names
    assert "%" not in names

def test_namespace_dir_is_sorted_and_not_empty(ns):
    names = dir(ns)
    assert names == sorted(names)
    assert len(names) > 10

# ---------------------------------------------------------------------------
# Top-level convenience 'u' wiring smoke test
# ---------------------------------------------------------------------------

def test_top_level_u_uses_default_registry(monkeypatch, reg):
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", reg, raising=True)

    from measura import u
    assert u.m is reg.get("m")
    assert u("cm").dimension == reg.get("cm").dimension

# ---------------------------------------------------------------------------
# `define` refuses names that would be shadowed by UnitNamespace attributes.
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("label", ["define", "__init__", "_reserved_names"])
def test_define_raises_value_error_when_conflicted_with_namespace_attributes(ns, label):
    with pytest.raises(ValueError, match="conflicts with UnitNamespace"):
        ns.define(label, "zz", LENGTH, 1.0)
    with pytest.raises(ValueError, match="conflicts with UnitNamespace"):
        ns.define("zzz", label, LENGTH, 1.0)

def test_define_nonconflicting_name_succeeds(ns):
    fur = ns.define("furlong", "fur", LENGTH, 201.168)
    assert ns("fur").coefficient == pytest.approx(201.168)
    assert ns.fur is fur
    assert ns.furlong is fur
