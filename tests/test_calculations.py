"""Tests for the Widmark estimates. Run from project root: pytest tests/ -v"""
import pytest

from serum_ethanol.calculations import (
    ebac,
    ebac_curve,
    elimination_time,
    ethanol_ingested,
    peak_serum_ethanol,
)
from serum_ethanol.constants import (
    FEMALE_MEAN,
    MALE_MEAN,
    POPULATION_MEAN,
    KineticProfile,
    profile_for,
)
from serum_ethanol.exceptions import DimensionMismatchError
from serum_ethanol.units import (
    MASS,
    SERUM_CONCENTRATION,
    TIME,
    Quantity,
    g_per_dl_per_h,
    grams,
    hours,
    kilograms,
    l_per_kg,
    liters,
    mg_per_dl,
)

ETHANOL = Quantity.of(14.0, grams)
WEIGHT = Quantity.of(70, kilograms)
VD = Quantity.of(0.6, l_per_kg)
RATE = Quantity.of(0.016, g_per_dl_per_h)


def test_ethanol_ingested_beer():
    # 355 mL beer at 5% ABV
    mass = ethanol_ingested(Quantity.of(0.355, liters), 0.05)
    assert mass.dimension == MASS
    assert mass.to(grams) == pytest.approx(0.355 * 0.05 * 789)
    assert mass.to(grams) == pytest.approx(14.0, abs=0.01)


def test_ethanol_ingested_accepts_dimensionless_quantity():
    mass = ethanol_ingested(Quantity.of(0.355, liters), Quantity.dimensionless(0.05))
    assert mass.to(grams) == pytest.approx(14.00475)


def test_ethanol_ingested_does_not_validate_fraction():
    mass = ethanol_ingested(Quantity.of(1, liters), 1.5)
    assert mass.to(grams) == pytest.approx(1183.5)


def test_peak_serum_ethanol():
    peak = peak_serum_ethanol(ETHANOL, WEIGHT, VD)
    assert peak.dimension == SERUM_CONCENTRATION
    assert peak.to(mg_per_dl) == pytest.approx(33.333, abs=0.001)


def test_peak_defaults_to_population_vd():
    assert peak_serum_ethanol(ETHANOL, WEIGHT).isclose(peak_serum_ethanol(ETHANOL, WEIGHT, VD))


def test_peak_uses_profile_vd():
    male = peak_serum_ethanol(ETHANOL, WEIGHT, profile=MALE_MEAN)
    female = peak_serum_ethanol(ETHANOL, WEIGHT, profile=FEMALE_MEAN)
    assert male.to(mg_per_dl) == pytest.approx(14.0 / (70 * 0.58) * 100)
    assert female.gt(male)


def test_peak_zero_weight_is_undefined():
    with pytest.raises(ZeroDivisionError):
        peak_serum_ethanol(ETHANOL, Quantity.of(0, kilograms))


def test_ebac_after_two_hours():
    result = ebac(ETHANOL, WEIGHT, Quantity.of(2, hours), vd=VD, r=RATE)
    # 33.33 peak - 32 eliminated
    assert result.to(mg_per_dl) == pytest.approx(1.333, abs=0.001)


def test_ebac_is_not_clamped():
    result = ebac(ETHANOL, WEIGHT, Quantity.of(3, hours), vd=VD, r=RATE)
    assert result.to(mg_per_dl) == pytest.approx(33.333 - 48.0, abs=0.001)
    assert result.lt(Quantity.of(0, mg_per_dl))


def test_ebac_at_zero_equals_peak():
    result = ebac(ETHANOL, WEIGHT, Quantity.of(0, hours))
    assert result.isclose(peak_serum_ethanol(ETHANOL, WEIGHT))


def test_ebac_profile_defaults_and_overrides():
    duration = Quantity.of(1, hours)
    population = ebac(ETHANOL, WEIGHT, duration)
    explicit = ebac(ETHANOL, WEIGHT, duration, vd=VD, r=RATE)
    assert population.isclose(explicit)

    male = ebac(ETHANOL, WEIGHT, duration, profile=MALE_MEAN)
    expected = 14.0 / (70 * 0.58) * 100 - 15.0
    assert male.to(mg_per_dl) == pytest.approx(expected)

    # Explicit r wins over the profile's rate.
    mixed = ebac(ETHANOL, WEIGHT, duration, r=RATE, profile=MALE_MEAN)
    assert mixed.to(mg_per_dl) == pytest.approx(expected - 1.0)


def test_elimination_time():
    t = elimination_time(ETHANOL, WEIGHT, vd=VD, r=RATE)
    assert t.dimension == TIME
    assert t.to(hours) == pytest.approx(33.333 / 16.0, abs=0.001)
    assert ebac(ETHANOL, WEIGHT, t, vd=VD, r=RATE).isclose(
        Quantity.of(0, mg_per_dl), abs_tol=1e-9
    )


def test_ebac_curve():
    points = ebac_curve(ETHANOL, WEIGHT, Quantity.of(0.5, hours), Quantity.of(2, hours), vd=VD, r=RATE)
    assert len(points) == 5
    assert points[0][1].isclose(peak_serum_ethanol(ETHANOL, WEIGHT, VD))
    assert points[-1][0].to(hours) == pytest.approx(2.0)
    assert points[-1][1].to(mg_per_dl) == pytest.approx(1.333, abs=0.001)
    levels = [c.to(mg_per_dl) for _, c in points]
    assert levels == sorted(levels, reverse=True)


def test_ebac_curve_rejects_non_positive_step():
    with pytest.raises(ValueError):
        ebac_curve(ETHANOL, WEIGHT, Quantity.of(0, hours), Quantity.of(2, hours))


def test_illegal_combinations_are_rejected():
    volume = Quantity.of(0.355, liters)
    with pytest.raises(DimensionMismatchError):
        ethanol_ingested(ETHANOL, 0.05)
    with pytest.raises(DimensionMismatchError):
        ethanol_ingested(volume, Quantity.of(0.05, grams))
    with pytest.raises(DimensionMismatchError):
        peak_serum_ethanol(volume, WEIGHT)
    with pytest.raises(DimensionMismatchError):
        peak_serum_ethanol(ETHANOL, volume)
    with pytest.raises(DimensionMismatchError):
        peak_serum_ethanol(ETHANOL, WEIGHT, vd=RATE)
    with pytest.raises(DimensionMismatchError):
        ebac(ETHANOL, WEIGHT, Quantity.of(2, grams))
    with pytest.raises(DimensionMismatchError):
        ebac(ETHANOL, WEIGHT, Quantity.of(2, hours), r=VD)
    with pytest.raises(DimensionMismatchError):
        ebac(14.0, 70.0, 2.0)


def test_profiles():
    assert profile_for("population") is POPULATION_MEAN
    assert profile_for(" Male ") is MALE_MEAN
    assert profile_for("female") is FEMALE_MEAN
    assert FEMALE_MEAN.elimination_rate.to(g_per_dl_per_h) == pytest.approx(0.017)
    with pytest.raises(ValueError):
        profile_for("unknown")


def test_profile_fields_are_dimension_checked():
    with pytest.raises(DimensionMismatchError):
        KineticProfile("swapped", RATE, VD)


def test_ebac_curve_negative_end_is_empty():
    assert ebac_curve(ETHANOL, WEIGHT, Quantity.of(1, hours), Quantity.of(-0.5, hours)) == []
    assert len(ebac_curve(ETHANOL, WEIGHT, Quantity.of(1, hours), Quantity.of(0, hours))) == 1
