"""
Serum ethanol estimator: dimension-checked quantities, Widmark eBAC,
clinical effects, drinks and sessions.
Use from project root: python -m serum_ethanol.main
"""

from serum_ethanol.units import (
    Dimension,
    Quantity,
    Unit,
    centi,
    deca,
    deci,
    kilo,
    milli,
    parse_unit,
)
from serum_ethanol.exceptions import DimensionMismatchError, UnitError, UnknownUnitError
from serum_ethanol.constants import (
    FEMALE_MEAN,
    MALE_MEAN,
    POPULATION_MEAN,
    KineticProfile,
    profile_for,
)
from serum_ethanol.calculations import (
    ebac,
    ebac_curve,
    elimination_time,
    ethanol_ingested,
    peak_serum_ethanol,
)
from serum_ethanol.clinical import (
    CLINICAL_EFFECTS,
    ClinicalRange,
    classify,
)
from serum_ethanol.drinks import DRINK_TYPES, ethanol_from_drink, list_drink_types
from serum_ethanol.session import DrinkingSession
from serum_ethanol.graph import curve_data, save_ebac_graph

__all__ = [
    "Dimension",
    "Quantity",
    "Unit",
    "milli",
    "centi",
    "deci",
    "deca",
    "kilo",
    "parse_unit",
    "UnitError",
    "DimensionMismatchError",
    "UnknownUnitError",
    "KineticProfile",
    "POPULATION_MEAN",
    "MALE_MEAN",
    "FEMALE_MEAN",
    "profile_for",
    "ethanol_ingested",
    "peak_serum_ethanol",
    "ebac",
    "ebac_curve",
    "elimination_time",
    "ClinicalRange",
    "CLINICAL_EFFECTS",
    "classify",
    "DrinkingSession",
    "DRINK_TYPES",
    "ethanol_from_drink",
    "list_drink_types",
    "curve_data",
    "save_ebac_graph",
]
