import math

import pytest

from measura.core.unit import UNITLESS, convert
from measura.errors import IncompatibleUnitsError, NonLinearCompositeError, UnitError
from measura.units.registry import define


def test_km_per_hour_to_miles_per_hour(reg):
    value = convert(96.56064, reg.get("km/hr"), reg.get("mi/hr"))
    assert math.isclose(value, 60.0, abs_tol=1e-6)

def test_unit_convert_method_matches_function(reg):
    km_hr, m_s = reg.get("km/hr"), reg.get("m/s")
    assert km_hr.convert(36.0, m_s) == pytest.approx(10.0)
    assert km_hr.convert(36.0, m_s) == convert(36.0, km_hr, m_s)

@pytest.mark.parametrize("src,dst,value,expected", [
    ("ft", "m", 1.0, 0.3048),
    ("mi", "km", 1.0, 1.609344),
    ("hr", "min", 2.0, 120.0),
    ("kWh", "J", 1.0, 3.6e6),
    ("lbf", "N", 1.0, 4.448222),
    ("kg*m/s^2", "N", 5.0, 5.0),
    ("J/s", "W", 7.0, 7.0),
    ("g/mL", "kg/L", 1.0, 1.0),
    ("°C", "K", 0.0, 273.15),
    ("°C", "°F", 100.0, 212.0),
    ("°F", "°C", 32.0, 0.0),
    ("K", "°R", 1.0, 1.8),
    ("%", "", 50.0, 0.5),
])
def test_conversion_table(reg, src, dst, value, expected):
    assert convert(value, reg.get(src), reg.get(dst)) == pytest.approx(expected, abs=1e-9)

@pytest.mark.parametrize("src,dst", [
    ("ft", "m"),
    ("km/hr", "mi/hr"),
    ("°F", "°C"),
    ("kg*m^2/s^2", "kWh"),
    ("1/s", "kHz"),
])
@pytest.mark.parametrize("value", [-40.0, 0.0, 1.5, 1234.5678])
def test_conversion_round_trip(reg, src, dst, value):
    a, b = reg.get(src), reg.get(dst)
    back = convert(convert(value, a, b), b, a)
    assert math.isclose(back, value, rel_tol=1e-12, abs_tol=1e-9)

def test_to_base_and_from_base(reg):
    km_hr = reg.get("km/hr")
    assert km_hr.coefficient == pytest.approx(1000.0 / 3600.0)
    assert km_hr.to_base(36.0) == pytest.approx(10.0)
    assert km_hr.from_base(10.0) == pytest.approx(36.0)
    assert UNITLESS.coefficient == 1.0
    assert UNITLESS.to_base(3.0) == 3.0

def test_shifted_atomic_unit_uses_affine_law(reg):
    celsius = reg.get("°C")
    assert celsius.is_linear is False
    assert celsius.to_base(25.0) == pytest.approx(298.15)
    assert celsius.from_base(0.0) == pytest.approx(-273.15)

@pytest.mark.parametrize("spec", ["°C*m", "°C/s", "°F^2", "1/°C"])
def test_shifted_unit_inside_composite_cannot_convert(reg, spec):
    unit = reg.get(spec)
    assert not unit.is_linear
    with pytest.raises(NonLinearCompositeError):
        unit.to_base(1.0)
    with pytest.raises(NonLinearCompositeError):
        unit.from_base(1.0)
    with pytest.raises(NonLinearCompositeError):
        unit.coefficient

def test_celsius_times_meter_conversion_raises(reg):
    with pytest.raises(NonLinearCompositeError):
        convert(1.0, reg.get("°C") * reg.get("m"), reg.get("K") * reg.get("m"))
    # the absolute scale works
    assert convert(1.0, reg.get("K*m"), reg.get("°R*m")) == pytest.approx(1.8)

def test_incompatible_units(reg):
    with pytest.raises(IncompatibleUnitsError):
        convert(1.0, reg.get("m"), reg.get("s"))
    with pytest.raises(IncompatibleUnitsError):
        reg.get("N").convert(1.0, reg.get("J"))

def test_incompatible_units_error_is_type_error(reg):
    with pytest.raises(TypeError):
        convert(1.0, reg.get("kg"), reg.get("m"))
    with pytest.raises(UnitError):
        convert(1.0, reg.get("kg"), reg.get("m"))

def test_convert_accepts_defined_units(reg):
    assert convert(1.0, reg.get("km").defined, reg.get("m").defined) == pytest.approx(1000.0)

def test_convert_rejects_non_units(reg):
    with pytest.raises(TypeError):
        convert(1.0, "m", reg.get("km"))  # type: ignore[arg-type]

def test_custom_unit_centifoot(reg):
    cft = define("centifoot", "cft", {"length": 1}, 0.003048, registry=reg)
    assert reg.get("cft") is cft
    assert reg.get("centifoot") is cft
    q = (5 * cft).convert(reg.get("m"))
    assert q.value == pytest.approx(0.01524)
    assert q.unit == reg.get("m")
    # composes with built-in units like any other
    assert convert(1.0, reg.get("cft/s"), reg.get("ft/s")) == pytest.approx(0.01)
