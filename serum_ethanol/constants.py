"""Reference physiologic constants for ethanol.

Volumes of distribution and elimination rates are population means. They
are grouped into named KineticProfile presets so callers pick one
explicitly instead of relying on silent defaults.
"""

from dataclasses import dataclass
from typing import Dict

from serum_ethanol.units import (
    ELIMINATION_RATE,
    VOLUME_OF_DISTRIBUTION,
    Quantity,
    g_per_dl_per_h,
    g_per_l,
    grams,
    l_per_kg,
    require,
)

# Density of ethanol (789 kg/m3).
ETHANOL_DENSITY = Quantity.of(789, g_per_l)

# US standard drink in grams of pure ethanol.
STANDARD_DRINK = Quantity.of(14.0, grams)

# Volume of distribution of ethanol.
ETHANOL_VD = Quantity.of(0.6, l_per_kg)
ETHANOL_VD_MALE = Quantity.of(0.58, l_per_kg)
ETHANOL_VD_FEMALE = Quantity.of(0.49, l_per_kg)

# Mean elimination rates of ethanol.
ETHANOL_ER = Quantity.of(0.016, g_per_dl_per_h)
ETHANOL_ER_MALE = Quantity.of(0.015, g_per_dl_per_h)
ETHANOL_ER_FEMALE = Quantity.of(0.017, g_per_dl_per_h)


@dataclass(frozen=True)
class KineticProfile:
    """Volume of distribution and elimination rate used together."""

    name: str
    volume_of_distribution: Quantity
    elimination_rate: Quantity

    def __post_init__(self):
        require(self.volume_of_distribution, VOLUME_OF_DISTRIBUTION, "volume_of_distribution")
        require(self.elimination_rate, ELIMINATION_RATE, "elimination_rate")


POPULATION_MEAN = KineticProfile("population", ETHANOL_VD, ETHANOL_ER)
MALE_MEAN = KineticProfile("male", ETHANOL_VD_MALE, ETHANOL_ER_MALE)
FEMALE_MEAN = KineticProfile("female", ETHANOL_VD_FEMALE, ETHANOL_ER_FEMALE)

PROFILES: Dict[str, KineticProfile] = {
    p.name: p for p in (POPULATION_MEAN, MALE_MEAN, FEMALE_MEAN)
}


def profile_for(name: str) -> KineticProfile:
    """Return the preset named ``population``, ``male`` or ``female``."""
    profile = PROFILES.get(name.strip().lower())
    if profile is None:
        raise ValueError(f"Unknown kinetic profile: {name!r}")
    return profile
