"""Dimension-checked quantities for mass, volume, time and concentration.

A Quantity stores its magnitude in SI coherent units (kg, m, s) next to a
Dimension. Arithmetic checks dimensions where two quantities meet and
raises DimensionMismatchError on any illegal combination, so a mass is
never silently added to a volume.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Union

from serum_ethanol.exceptions import DimensionMismatchError, UnknownUnitError

Number = Union[int, float]


@dataclass(frozen=True)
class Dimension:
    """Exponents over the base dimensions mass, length and time."""

    mass: int = 0
    length: int = 0
    time: int = 0
    # Display only; two dimensions with equal exponents are the same dimension.
    name: Optional[str] = field(default=None, compare=False)

    def times(self, other: "Dimension") -> "Dimension":
        return Dimension(
            self.mass + other.mass,
            self.length + other.length,
            self.time + other.time,
        )

    def over(self, other: "Dimension") -> "Dimension":
        return self.times(other.inverse())

    def inverse(self) -> "Dimension":
        return Dimension(-self.mass, -self.length, -self.time)

    def power(self, exponent: int) -> "Dimension":
        return Dimension(self.mass * exponent, self.length * exponent, self.time * exponent)

    def named(self, name: str) -> "Dimension":
        return replace(self, name=name)

    @property
    def is_dimensionless(self) -> bool:
        return self.mass == 0 and self.length == 0 and self.time == 0

    def __str__(self) -> str:
        if self.name:
            return self.name
        if self.is_dimensionless:
            return "dimensionless"
        parts = []
        for symbol, exponent in (("kg", self.mass), ("m", self.length), ("s", self.time)):
            if exponent == 1:
                parts.append(symbol)
            elif exponent:
                parts.append(f"{symbol}^{exponent}")
        return "·".join(parts)


DIMENSIONLESS = Dimension(name="dimensionless")
MASS = Dimension(mass=1, name="Mass")
LENGTH = Dimension(length=1, name="Length")
TIME = Dimension(time=1, name="Time")
VOLUME = LENGTH.power(3).named("Volume")

VOLUME_DENSITY = MASS.over(VOLUME).named("VolumeDensity")
ELIMINATION_RATE = VOLUME_DENSITY.over(TIME).named("EliminationRate")
VOLUME_OF_DISTRIBUTION = VOLUME.over(MASS).named("VolumeOfDistribution")
SERUM_CONCENTRATION = VOLUME_DENSITY


@dataclass(frozen=True)
class Unit:
    """A named multiple of the SI coherent unit of a dimension."""

    symbol: str
    scale: float  # SI magnitude of one of this unit
    dimension: Dimension

    def times(self, other: "Unit") -> "Unit":
        return Unit(
            f"{self.symbol}*{other.symbol}",
            self.scale * other.scale,
            self.dimension.times(other.dimension),
        )

    def over(self, other: "Unit") -> "Unit":
        return Unit(
            f"{self.symbol}/{other.symbol}",
            self.scale / other.scale,
            self.dimension.over(other.dimension),
        )

    def __str__(self) -> str:
        return self.symbol


def _prefixed(unit: Unit, prefix: str, factor: float) -> Unit:
    return Unit(prefix + unit.symbol, unit.scale * factor, unit.dimension)


def milli(unit: Unit) -> Unit:
    return _prefixed(unit, "m", 1e-3)


def centi(unit: Unit) -> Unit:
    return _prefixed(unit, "c", 1e-2)


def deci(unit: Unit) -> Unit:
    return _prefixed(unit, "d", 1e-1)


def deca(unit: Unit) -> Unit:
    return _prefixed(unit, "da", 1e1)


def kilo(unit: Unit) -> Unit:
    return _prefixed(unit, "k", 1e3)


@dataclass(frozen=True)
class Quantity:
    """
    Immutable scalar tagged with a physical dimension.

    ``value`` is always expressed in SI coherent units; use ``Quantity.of``
    to build one from a concrete unit and ``to`` to read it back.
    """

    value: float
    dimension: Dimension

    @classmethod
    def of(cls, value: Number, unit: Union[Unit, Dimension]) -> "Quantity":
        """Tag ``value`` with a unit, or with the SI unit of a dimension."""
        if isinstance(unit, Dimension):
            return cls(float(value), unit)
        return cls(float(value) * unit.scale, unit.dimension)

    @classmethod
    def dimensionless(cls, value: Number) -> "Quantity":
        return cls(float(value), DIMENSIONLESS)

    @property
    def is_dimensionless(self) -> bool:
        return self.dimension.is_dimensionless

    def _check_same(self, other: "Quantity", operation: str) -> None:
        if self.dimension != other.dimension:
            raise DimensionMismatchError(
                f"Cannot {operation} {self.dimension} and {other.dimension}"
            )

    def plus(self, other: Union["Quantity", Number]) -> "Quantity":
        other = _as_quantity(other)
        self._check_same(other, "add")
        return Quantity(self.value + other.value, self.dimension)

    def minus(self, other: Union["Quantity", Number]) -> "Quantity":
        other = _as_quantity(other)
        self._check_same(other, "subtract")
        return Quantity(self.value - other.value, self.dimension)

    def times(self, other: Union["Quantity", Number]) -> "Quantity":
        other = _as_quantity(other)
        return Quantity(self.value * other.value, self.dimension.times(other.dimension))

    def div(self, other: Union["Quantity", Number]) -> "Quantity":
        other = _as_quantity(other)
        return Quantity(self.value / other.value, self.dimension.over(other.dimension))

    def lt(self, other: Union["Quantity", Number]) -> bool:
        other = _as_quantity(other)
        self._check_same(other, "compare")
        return self.value < other.value

    def lte(self, other: Union["Quantity", Number]) -> bool:
        other = _as_quantity(other)
        self._check_same(other, "compare")
        return self.value <= other.value

    def gt(self, other: Union["Quantity", Number]) -> bool:
        other = _as_quantity(other)
        self._check_same(other, "compare")
        return self.value > other.value

    def gte(self, other: Union["Quantity", Number]) -> bool:
        other = _as_quantity(other)
        self._check_same(other, "compare")
        return self.value >= other.value

    def isclose(
        self,
        other: Union["Quantity", Number],
        rel_tol: float = 1e-9,
        abs_tol: float = 0.0,
    ) -> bool:
        """Tolerance comparison; ``abs_tol`` is in SI units."""
        other = _as_quantity(other)
        self._check_same(other, "compare")
        return math.isclose(self.value, other.value, rel_tol=rel_tol, abs_tol=abs_tol)

    def to(self, unit: Union[Unit, Dimension]) -> float:
        """Magnitude of this quantity expressed in ``unit``."""
        if isinstance(unit, Dimension):
            unit = Unit(str(unit), 1.0, unit)
        if self.dimension != unit.dimension:
            raise DimensionMismatchError(
                f"Cannot express {self.dimension} in {unit.symbol} ({unit.dimension})"
            )
        return self.value / unit.scale

    def format(self, unit: Unit, digits: int = 1) -> str:
        return f"{self.to(unit):.{digits}f} {unit.symbol}"

    # Operator forms of the methods above.

    def __add__(self, other):
        if not isinstance(other, (Quantity, int, float)):
            return NotImplemented
        return self.plus(other)

    def __radd__(self, other):
        if not isinstance(other, (int, float)):
            return NotImplemented
        return _as_quantity(other).plus(self)

    def __sub__(self, other):
        if not isinstance(other, (Quantity, int, float)):
            return NotImplemented
        return self.minus(other)

    def __rsub__(self, other):
        if not isinstance(other, (int, float)):
            return NotImplemented
        return _as_quantity(other).minus(self)

    def __mul__(self, other):
        if not isinstance(other, (Quantity, int, float)):
            return NotImplemented
        return self.times(other)

    def __rmul__(self, other):
        if not isinstance(other, (int, float)):
            return NotImplemented
        return self.times(other)

    def __truediv__(self, other):
        if not isinstance(other, (Quantity, int, float)):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other):
        if not isinstance(other, (int, float)):
            return NotImplemented
        return _as_quantity(other).div(self)

    def __neg__(self) -> "Quantity":
        return Quantity(-self.value, self.dimension)

    def __abs__(self) -> "Quantity":
        return Quantity(abs(self.value), self.dimension)

    def __lt__(self, other):
        if not isinstance(other, (Quantity, int, float)):
            return NotImplemented
        return self.lt(other)

    def __le__(self, other):
        if not isinstance(other, (Quantity, int, float)):
            return NotImplemented
        return self.lte(other)

    def __gt__(self, other):
        if not isinstance(other, (Quantity, int, float)):
            return NotImplemented
        return self.gt(other)

    def __ge__(self, other):
        if not isinstance(other, (Quantity, int, float)):
            return NotImplemented
        return self.gte(other)

    def __float__(self) -> float:
        if not self.is_dimensionless:
            raise DimensionMismatchError(f"Cannot convert {self.dimension} to a plain number")
        return self.value

    def __str__(self) -> str:
        return f"{self.value:g} {self.dimension}"


def _as_quantity(value: Union[Quantity, Number]) -> Quantity:
    if isinstance(value, Quantity):
        return value
    if isinstance(value, (int, float)):
        return Quantity.dimensionless(value)
    raise TypeError(f"Expected a Quantity or a number, not {type(value).__name__}")


def require(value, dimension: Dimension, name: str = "quantity") -> Quantity:
    """Raise DimensionMismatchError unless ``value`` is a quantity of ``dimension``."""
    if not isinstance(value, Quantity):
        raise DimensionMismatchError(
            f"{name} must be a {dimension} quantity, not {type(value).__name__}"
        )
    if value.dimension != dimension:
        raise DimensionMismatchError(
            f"{name} must be a {dimension} quantity, not {value.dimension}"
        )
    return value


# Base units.
grams = Unit("g", 1e-3, MASS)
meters = Unit("m", 1.0, LENGTH)
liters = Unit("L", 1e-3, VOLUME)
seconds = Unit("s", 1.0, TIME)
minutes = Unit("min", 60.0, TIME)
hours = Unit("h", 3600.0, TIME)

kilograms = kilo(grams)
milligrams = milli(grams)
deciliters = deci(liters)
milliliters = milli(liters)
cubic_meters = Unit("m^3", 1.0, VOLUME)

# US customary units accepted from hosts.
pounds = Unit("lb", 0.45359237, MASS)
fluid_ounces = Unit("fl oz", 29.5735e-6, VOLUME)

percent = Unit("%", 1e-2, DIMENSIONLESS)

# Concentrations and rates.
mg_per_dl = milligrams.over(deciliters)
g_per_dl = grams.over(deciliters)
g_per_l = grams.over(liters)
kg_per_m3 = kilograms.over(cubic_meters)
l_per_kg = liters.over(kilograms)
mg_per_dl_per_h = mg_per_dl.over(hours)
g_per_dl_per_h = g_per_dl.over(hours)

UNITS: Dict[str, Unit] = {
    unit.symbol: unit
    for unit in (
        grams,
        kilograms,
        milligrams,
        pounds,
        liters,
        deciliters,
        milliliters,
        cubic_meters,
        fluid_ounces,
        seconds,
        minutes,
        hours,
        percent,
        mg_per_dl,
        g_per_dl,
        g_per_l,
        kg_per_m3,
        l_per_kg,
        mg_per_dl_per_h,
        g_per_dl_per_h,
    )
}


def parse_unit(symbol: str) -> Unit:
    """Return the registered unit for ``symbol`` (e.g. ``"mg/dL"``)."""
    unit = UNITS.get(symbol.strip())
    if unit is None:
        raise UnknownUnitError(f"Unknown unit: {symbol!r}")
    return unit
