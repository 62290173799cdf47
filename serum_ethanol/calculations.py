"""Serum ethanol estimates using the Widmark equation.

Model:
- Ethanol mass = volume ingested * fraction ethanol * ethanol density
- Peak serum concentration = ethanol / (body weight * Vd)
- eBAC = peak - elimination rate * elapsed time (zero-order elimination)

eBAC is not clamped and goes negative once ethanol is fully eliminated.
Clamping for display is up to the caller.
"""

from typing import List, Optional, Tuple, Union

from serum_ethanol.constants import ETHANOL_DENSITY, POPULATION_MEAN, KineticProfile
from serum_ethanol.logger import LOGGER
from serum_ethanol.units import (
    DIMENSIONLESS,
    ELIMINATION_RATE,
    MASS,
    TIME,
    VOLUME,
    VOLUME_OF_DISTRIBUTION,
    Quantity,
    require,
)


def ethanol_ingested(
    volume_ingested: Quantity,
    concentration_ingested: Union[Quantity, float],
) -> Quantity:
    """
    Mass of pure ethanol in a beverage.

    ``concentration_ingested`` is a fraction (0.40 for 40% ABV), as a float
    or a dimensionless quantity. It is not range checked.
    """
    require(volume_ingested, VOLUME, "volume_ingested")
    if isinstance(concentration_ingested, Quantity):
        concentration = require(concentration_ingested, DIMENSIONLESS, "concentration_ingested")
    else:
        concentration = Quantity.dimensionless(concentration_ingested)

    ethanol_volume = volume_ingested.times(concentration)
    return ETHANOL_DENSITY.times(ethanol_volume)


def _kinetics(
    profile: KineticProfile,
    vd: Optional[Quantity],
    r: Optional[Quantity],
) -> Tuple[Quantity, Quantity]:
    vd = profile.volume_of_distribution if vd is None else vd
    r = profile.elimination_rate if r is None else r
    return (
        require(vd, VOLUME_OF_DISTRIBUTION, "vd"),
        require(r, ELIMINATION_RATE, "r"),
    )


def peak_serum_ethanol(
    ethanol: Quantity,
    weight: Quantity,
    vd: Optional[Quantity] = None,
    profile: KineticProfile = POPULATION_MEAN,
) -> Quantity:
    """
    Instantaneous (pre-elimination) serum concentration.

    ``vd`` overrides the profile's volume of distribution. ``weight`` must be
    positive.
    """
    require(ethanol, MASS, "ethanol")
    require(weight, MASS, "weight")
    vd, _ = _kinetics(profile, vd, None)

    distribution_volume = weight.times(vd)
    return ethanol.div(distribution_volume)


def ebac(
    ethanol: Quantity,
    weight: Quantity,
    duration: Quantity,
    vd: Optional[Quantity] = None,
    r: Optional[Quantity] = None,
    profile: KineticProfile = POPULATION_MEAN,
) -> Quantity:
    """
    Estimated blood alcohol concentration ``duration`` after drinking began.

    Assumes a single ingestion followed by zero-order elimination. ``vd`` and
    ``r`` override the profile's values.
    """
    require(duration, TIME, "duration")
    vd, r = _kinetics(profile, vd, r)

    peak = peak_serum_ethanol(ethanol, weight, vd)
    eliminated = r.times(duration)
    result = peak.minus(eliminated)
    LOGGER.debug("ebac peak=%s eliminated=%s result=%s", peak, eliminated, result)
    return result


def elimination_time(
    ethanol: Quantity,
    weight: Quantity,
    vd: Optional[Quantity] = None,
    r: Optional[Quantity] = None,
    profile: KineticProfile = POPULATION_MEAN,
) -> Quantity:
    """Time after the start of drinking at which ebac reaches zero."""
    vd, r = _kinetics(profile, vd, r)
    peak = peak_serum_ethanol(ethanol, weight, vd)
    return peak.div(r)


def ebac_curve(
    ethanol: Quantity,
    weight: Quantity,
    step: Quantity,
    end: Quantity,
    vd: Optional[Quantity] = None,
    r: Optional[Quantity] = None,
    profile: KineticProfile = POPULATION_MEAN,
) -> List[Tuple[Quantity, Quantity]]:
    """(time, ebac) pairs from zero to ``end`` inclusive, every ``step``.

    A negative ``end`` yields no points.
    """
    require(step, TIME, "step")
    require(end, TIME, "end")
    if step.value <= 0:
        raise ValueError("step must be > 0")
    if end.value < 0:
        return []

    points: List[Tuple[Quantity, Quantity]] = []
    count = int(end.div(step).value + 1e-9)
    for i in range(count + 1):
        t = step.times(i)
        points.append((t, ebac(ethanol, weight, t, vd=vd, r=r, profile=profile)))
    return points
