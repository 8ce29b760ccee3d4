import pytest

from measura.core.measurement import Measurement
from measura.core.unit import UNITLESS
from measura.errors import IncompatibleUnitsError, UnitNotFoundError


@pytest.fixture()
def u(ureg):
    return ureg.as_namespace()


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_construct_from_unit_and_expression(u):
    a = Measurement(2, u.m / u.s)
    b = Measurement(2, "m/s")
    assert a == b
    assert isinstance(a.value, float)
    assert a.unit == u.m / u.s

def test_construct_from_defined_unit(u):
    q = Measurement(1.0, u.km.defined)
    assert q.unit == u.km

@pytest.mark.parametrize("bad", ["5", None, True])
def test_value_must_be_number(bad):
    with pytest.raises(TypeError):
        Measurement(bad, "m")  # type: ignore[arg-type]

def test_unknown_unit_expression():
    with pytest.raises(UnitNotFoundError):
        Measurement(1, "furlong")

def test_unit_must_be_unit_like():
    with pytest.raises(TypeError):
        Measurement(1, 3)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Equality & hashing
# ---------------------------------------------------------------------------

def test_equality_is_exact_on_value_and_unit():
    assert Measurement(1, "km") == Measurement(1.0, "km")
    assert Measurement(1, "km") != Measurement(1000, "m")
    assert Measurement(1, "m") != 1.0

def test_hash_consistent_with_equality():
    assert hash(Measurement(2, "m/s")) == hash(Measurement(2.0, "m/s"))
    assert len({Measurement(2, "m"), Measurement(2.0, "m"), Measurement(2, "s")}) == 2

def test_isclose_converts_other():
    assert Measurement(1, "km").isclose(Measurement(1000, "m"))
    assert Measurement(60, "mi/hr").isclose(Measurement(96.56064, "km/hr"))
    assert not Measurement(1, "km").isclose(Measurement(999, "m"))

def test_isclose_requires_measurement():
    with pytest.raises(TypeError):
        Measurement(1, "m").isclose(1.0)  # type: ignore[arg-type]

def test_isclose_incompatible_units():
    with pytest.raises(IncompatibleUnitsError):
        Measurement(1, "m").isclose(Measurement(1, "s"))

def test_dimensional_equivalence():
    assert Measurement(1, "J").is_dimensionally_equivalent(Measurement(3, "N*m"))
    assert not Measurement(1, "J").is_dimensionally_equivalent(Measurement(3, "W"))


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def test_convert(u):
    q = Measurement(1, "km").convert("m")
    assert q.value == pytest.approx(1000.0)
    assert q.unit == u.m

def test_convert_to_same_unit_returns_self():
    q = Measurement(3, "m")
    assert q.convert("m") is q

def test_convert_incompatible():
    with pytest.raises(IncompatibleUnitsError):
        Measurement(1, "m").convert("kg")

def test_declare_relabels_without_converting(u):
    q = Measurement(5, "m").declare(u.ft)
    assert q.value == 5.0
    assert q.unit == u.ft


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

def test_add_and_sub_same_unit():
    assert Measurement(2, "m") + Measurement(3, "m") == Measurement(5, "m")
    assert Measurement(2, "m") - Measurement(3, "m") == Measurement(-1, "m")
    assert -Measurement(2, "m") == Measurement(-2, "m")

def test_add_requires_identical_units():
    with pytest.raises(IncompatibleUnitsError):
        Measurement(1, "km") + Measurement(1, "m")
    with pytest.raises(IncompatibleUnitsError):
        Measurement(1, "m") - Measurement(1, "s")

def test_add_non_measurement_raises():
    with pytest.raises(TypeError):
        Measurement(1, "m") + 1  # type: ignore[operator]

def test_multiply_measurements_composes_units(u):
    q = Measurement(2, "m") * Measurement(3, "s")
    assert q == Measurement(6, u.m * u.s)
    assert str(q.unit) == "m*s"

def test_multiply_by_number_and_unit(u):
    assert Measurement(2, "m") * 3 == Measurement(6, "m")
    assert 3 * Measurement(2, "m") == Measurement(6, "m")
    assert Measurement(2, "m") * u.s == Measurement(2, "m*s")
    assert u.s * Measurement(2, "m") == Measurement(2, "m*s")

def test_divide(u):
    assert Measurement(10, "m") / Measurement(2, "s") == Measurement(5, "m/s")
    assert Measurement(10, "m") / 4 == Measurement(2.5, "m")
    assert Measurement(10, "m") / u.s == Measurement(10, "m/s")
    assert 2 / Measurement(4, "s") == Measurement(0.5, "1/s")
    assert u.m / Measurement(2, "s") == Measurement(0.5, "m/s")

def test_divide_same_unit_is_unitless():
    q = Measurement(6, "m") / Measurement(3, "m")
    assert q.unit == UNITLESS
    assert str(q) == "2"

def test_pow():
    assert Measurement(3, "m") ** 2 == Measurement(9, "m^2")
    assert Measurement(2, "s").pow(-1) == Measurement(0.5, "1/s")


# ---------------------------------------------------------------------------
# Display & serialization
# ---------------------------------------------------------------------------

def test_str_and_repr():
    q = Measurement(9.81, "m/s^2")
    assert str(q) == "9.81 m/s^2"
    assert repr(q) == "Measurement(9.81, 'm/s^2')"

@pytest.mark.parametrize("spec,expected", [
    ("", "3 km/hr"),
    ("native", "3 km/hr"),
    ("name", "3 kilometer / hour"),
    ("pretty", "3 km/hr"),
])
def test_format_specs(spec, expected):
    assert format(Measurement(3, "km/hr"), spec) == expected

def test_pretty_format_uses_superscripts():
    assert f"{Measurement(9.81, 'm/s^2'):pretty}" == "9.81 m/s²"

@pytest.mark.parametrize("spec,expected", [
    (".2f", "1.23 m"),
    (".3e", "1.235e+00 m"),
    (">8.1f", "     1.2 m"),
])
def test_numeric_format_spec_applies_to_value(spec, expected):
    assert format(Measurement(1.23456, "m"), spec) == expected

def test_numeric_format_spec_on_composite_and_unitless():
    assert f"{Measurement(9.8066, 'm/s^2'):.1f}" == "9.8 m/s^2"
    assert f"{Measurement(6, 'm') / Measurement(4, 'm'):.2f}" == "1.50"

def test_invalid_format_spec():
    with pytest.raises(ValueError):
        format(Measurement(1, "m"), "bogus")

def test_as_dict_uses_canonical_symbol():
    assert Measurement(2, "kg*m/s^2").as_dict() == {"value": 2.0, "unit": "kg*m/s^2"}

def test_from_dict_round_trip(reg):
    q = Measurement(2, "kg*m/s^2")
    back = Measurement.from_dict(q.as_dict(), registry=reg)
    assert back.value == q.value
    assert back.unit.symbol == q.unit.symbol

def test_from_dict_with_custom_unit(reg):
    reg.define("centifoot", "cft", {"length": 1}, 0.003048)
    q = Measurement.from_dict({"value": 5, "unit": "cft/s"}, registry=reg)
    assert q.convert(reg.get("m/s")).value == pytest.approx(0.01524)
