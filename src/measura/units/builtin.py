"""
measura.units.builtin
=====================

The table of units every default registry starts with.

Each entry is ``(name, symbol, dimension, coefficient, constant)`` where
``coefficient`` and ``constant`` convert a value of the unit to the base unit
of its dimension: ``base = value * coefficient + constant``. Base units have
coefficient 1.
"""
from math import pi
from typing import Dict, FrozenSet, Tuple

from measura.core.dimensions import (
    AMOUNT,
    ANGLE,
    CURRENT,
    DATA,
    DIM_0,
    LENGTH,
    LUMINOUS,
    MASS,
    TEMPERATURE,
    TIME,
    Dim,
    dim_div,
    dim_mul,
    dim_pow,
)

UnitRow = Tuple[str, str, Dim, float, float]

# ---------------------------------------------------------------------------
# Helpful composite dimensions (readable + reuse)
# ---------------------------------------------------------------------------
AREA         = dim_pow(LENGTH, 2)
VOLUME       = dim_pow(LENGTH, 3)
ACCELERATION = dim_div(LENGTH, dim_pow(TIME, 2))
FORCE        = dim_mul(MASS, ACCELERATION)                                    # N
PRESSURE     = dim_div(FORCE, AREA)                                           # Pa
ENERGY       = dim_mul(FORCE, LENGTH)                                         # J
POWER        = dim_div(ENERGY, TIME)                                          # W
CHARGE       = dim_mul(CURRENT, TIME)                                         # C
VOLTAGE      = dim_div(POWER, CURRENT)                                        # V
CAPACITANCE  = dim_div(CHARGE, VOLTAGE)                                       # F
RESISTANCE   = dim_div(VOLTAGE, CURRENT)                                      # Ω
INDUCTANCE   = dim_div(dim_mul(VOLTAGE, TIME), CURRENT)                       # H
FREQUENCY    = dim_pow(TIME, -1)                                              # Hz
ILLUMINANCE  = dim_div(dim_mul(LUMINOUS, dim_pow(ANGLE, 2)), AREA)            # lx = cd·sr/m²

_GREGORIAN_DAY = 24.0 * 60.0 * 60.0
_AVOGADRO = 6.02214076e23
_RANKINE = 5.0 / 9.0


def _scaled(name: str, symbol: str, dim: Dim, coefficient: float) -> UnitRow:
    return (name, symbol, dim, coefficient, 0.0)


BASE_UNITS: Tuple[UnitRow, ...] = (
    _scaled("mole",     "mol", AMOUNT,      1.0),
    _scaled("ampere",   "A",   CURRENT,     1.0),
    _scaled("meter",    "m",   LENGTH,      1.0),
    _scaled("kilogram", "kg",  MASS,        1.0),
    _scaled("kelvin",   "K",   TEMPERATURE, 1.0),
    _scaled("second",   "s",   TIME,        1.0),
    _scaled("candela",  "cd",  LUMINOUS,    1.0),
    _scaled("radian",   "rad", ANGLE,       1.0),
    _scaled("bit",      "bit", DATA,        1.0),
)

DERIVED_UNITS: Tuple[UnitRow, ...] = (
    # Acceleration
    _scaled("standardGravity", "ɡ", ACCELERATION, 9.80665),

    # Amount
    _scaled("millimole", "mmol",     AMOUNT, 1e-3),
    _scaled("particle",  "particle", AMOUNT, 1.0 / _AVOGADRO),

    # Angle
    _scaled("degree",     "°",   ANGLE, pi / 180.0),
    _scaled("revolution", "rev", ANGLE, 2.0 * pi),

    # Area
    _scaled("acre",    "ac", AREA, 4046.8564224),
    _scaled("are",     "a",  AREA, 100.0),
    _scaled("hectare", "ha", AREA, 10_000.0),

    # Capacitance, charge, inductance, resistance
    _scaled("farad",   "F", CAPACITANCE, 1.0),
    _scaled("coulomb", "C", CHARGE,      1.0),
    _scaled("henry",   "H", INDUCTANCE,  1.0),
    _scaled("ohm",     "Ω", RESISTANCE,  1.0),

    # Current
    _scaled("microampere", "μA", CURRENT, 1e-6),
    _scaled("milliampere", "mA", CURRENT, 1e-3),
    _scaled("kiloampere",  "kA", CURRENT, 1e3),
    _scaled("megaampere",  "MA", CURRENT, 1e6),

    # Data
    _scaled("byte",     "byte", DATA, 8.0),
    _scaled("kilobyte", "kB",   DATA, 8.0e3),
    _scaled("megabyte", "MB",   DATA, 8.0e6),
    _scaled("gigabyte", "GB",   DATA, 8.0e9),
    _scaled("terabyte", "TB",   DATA, 8.0e12),
    _scaled("petabyte", "PB",   DATA, 8.0e15),

    # Electric potential difference
    _scaled("volt",      "V",  VOLTAGE, 1.0),
    _scaled("microvolt", "μV", VOLTAGE, 1e-6),
    _scaled("millivolt", "mV", VOLTAGE, 1e-3),
    _scaled("kilovolt",  "kV", VOLTAGE, 1e3),
    _scaled("megavolt",  "MV", VOLTAGE, 1e6),

    # Energy
    _scaled("joule",        "J",    ENERGY, 1.0),
    _scaled("kilojoule",    "kJ",   ENERGY, 1e3),
    _scaled("megajoule",    "MJ",   ENERGY, 1e6),
    _scaled("calorie",      "cal",  ENERGY, 4.184),
    _scaled("kilocalorie",  "kcal", ENERGY, 4184.0),
    _scaled("electronVolt", "eV",   ENERGY, 1.602176634e-19),
    _scaled("kilowattHour", "kWh",  ENERGY, 3.6e6),

    # Force
    _scaled("newton",     "N",   FORCE, 1.0),
    _scaled("poundForce", "lbf", FORCE, 4.448222),

    # Frequency
    _scaled("nanohertz",  "nHz", FREQUENCY, 1e-9),
    _scaled("microhertz", "μHz", FREQUENCY, 1e-6),
    _scaled("millihertz", "mHz", FREQUENCY, 1e-3),
    _scaled("hertz",      "Hz",  FREQUENCY, 1.0),
    _scaled("kilohertz",  "kHz", FREQUENCY, 1e3),
    _scaled("megahertz",  "MHz", FREQUENCY, 1e6),
    _scaled("gigahertz",  "GHz", FREQUENCY, 1e9),
    _scaled("terahertz",  "THz", FREQUENCY, 1e12),

    # Illuminance
    _scaled("lux",        "lx", ILLUMINANCE, 1.0),
    _scaled("footCandle", "fc", ILLUMINANCE, 10.76),
    _scaled("phot",       "ph", ILLUMINANCE, 10_000.0),

    # Length
    _scaled("picometer",  "pm",  LENGTH, 1e-12),
    _scaled("nanometer",  "nm",  LENGTH, 1e-9),
    _scaled("micrometer", "μm",  LENGTH, 1e-6),
    _scaled("millimeter", "mm",  LENGTH, 1e-3),
    _scaled("centimeter", "cm",  LENGTH, 1e-2),
    _scaled("decameter",  "dam", LENGTH, 10.0),
    _scaled("hectometer", "hm",  LENGTH, 100.0),
    _scaled("kilometer",  "km",  LENGTH, 1e3),
    _scaled("megameter",  "Mm",  LENGTH, 1e6),
    _scaled("inch",       "in",  LENGTH, 0.0254),
    _scaled("foot",       "ft",  LENGTH, 0.3048),
    _scaled("yard",       "yd",  LENGTH, 0.9144),
    _scaled("mile",       "mi",  LENGTH, 1609.344),

    # Mass
    _scaled("gram",      "g",  MASS, 1e-3),
    _scaled("milligram", "mg", MASS, 1e-6),
    _scaled("metricTon", "t",  MASS, 1e3),
    _scaled("pound",     "lb", MASS, 0.45359237),
    _scaled("ounce",     "oz", MASS, 0.028349523125),

    # Power
    _scaled("femtowatt",  "fW", POWER, 1e-15),
    _scaled("picowatt",   "pW", POWER, 1e-12),
    _scaled("nanowatt",   "nW", POWER, 1e-9),
    _scaled("microwatt",  "μW", POWER, 1e-6),
    _scaled("milliwatt",  "mW", POWER, 1e-3),
    _scaled("watt",       "W",  POWER, 1.0),
    _scaled("kilowatt",   "kW", POWER, 1e3),
    _scaled("megawatt",   "MW", POWER, 1e6),
    _scaled("gigawatt",   "GW", POWER, 1e9),
    _scaled("terawatt",   "TW", POWER, 1e12),
    _scaled("horsepower", "hp", POWER, 745.6998715822702),

    # Pressure
    _scaled("pascal",     "Pa",  PRESSURE, 1.0),
    _scaled("kilopascal", "kPa", PRESSURE, 1e3),
    _scaled("bar",        "bar", PRESSURE, 1e5),
    _scaled("atmosphere", "atm", PRESSURE, 101_325.0),
    _scaled("psi",        "psi", PRESSURE, 6894.757293168361),

    # Temperature (absolute scales only; shifted scales below)
    _scaled("rankine", "°R", TEMPERATURE, _RANKINE),

    # Time
    _scaled("nanosecond",  "ns",   TIME, 1e-9),
    _scaled("microsecond", "μs",   TIME, 1e-6),
    _scaled("millisecond", "ms",   TIME, 1e-3),
    _scaled("minute",      "min",  TIME, 60.0),
    _scaled("hour",        "hr",   TIME, 3600.0),
    _scaled("day",         "d",    TIME, _GREGORIAN_DAY),
    _scaled("week",        "week", TIME, 7.0 * _GREGORIAN_DAY),

    # Volume
    _scaled("liter",      "L",  VOLUME, 1e-3),
    _scaled("milliliter", "mL", VOLUME, 1e-6),

    # Dimensionless
    _scaled("percent", "%", DIM_0, 0.01),
)

# Shifted scales carry an additive constant and cannot appear in composite units.
SHIFTED_UNITS: Tuple[UnitRow, ...] = (
    ("celsius",    "°C", TEMPERATURE, 1.0,      273.15),
    ("fahrenheit", "°F", TEMPERATURE, _RANKINE, 459.67 * _RANKINE),
)

BUILTIN_UNITS: Tuple[UnitRow, ...] = BASE_UNITS + DERIVED_UNITS + SHIFTED_UNITS

# Display synonyms keyed by unit symbol.
BUILTIN_ALIASES: Dict[str, FrozenSet[str]] = {
    "m":   frozenset({"meters", "metre", "metres"}),
    "km":  frozenset({"kilometers", "kilometre", "kilometres"}),
    "in":  frozenset({"inches"}),
    "ft":  frozenset({"feet"}),
    "yd":  frozenset({"yards"}),
    "mi":  frozenset({"miles"}),
    "s":   frozenset({"sec", "seconds"}),
    "min": frozenset({"minutes"}),
    "hr":  frozenset({"h", "hours"}),
    "d":   frozenset({"days"}),
    "week": frozenset({"wk", "weeks"}),
    "g":   frozenset({"grams"}),
    "kg":  frozenset({"kilograms"}),
    "lb":  frozenset({"lbs", "pounds"}),
    "Ω":   frozenset({"Ohm", "OHM"}),
    "°C":  frozenset({"degC"}),
    "°F":  frozenset({"degF"}),
    "°R":  frozenset({"degR"}),
    "°":   frozenset({"deg", "degrees"}),
    "L":   frozenset({"l", "liters", "litre", "litres"}),
}


__all__ = [
    "BASE_UNITS",
    "DERIVED_UNITS",
    "SHIFTED_UNITS",
    "BUILTIN_UNITS",
    "BUILTIN_ALIASES",
]
