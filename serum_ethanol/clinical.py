"""Clinical effects of blood alcohol concentration.

Adapted from: Marx JA. Rosen's emergency medicine: concepts and clinical
practice, 5th ed, Mosby, Inc., St. Louis 2002. p. 2513.

Bands are closed on both ends, so neighbouring bands share their boundary
value and the two open-ended bands overlap above 400 mg/dL. When several
bands match, ``classify`` returns the most severe one (the last match in
ascending order).
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from serum_ethanol.units import SERUM_CONCENTRATION, Quantity, mg_per_dl, require

NO_EFFECTS = "No expected clinical effects"


@dataclass(frozen=True)
class ClinicalRange:
    """One band of the clinical-effects table. ``upper`` of None means "and above"."""

    description: str
    lower: Quantity
    upper: Optional[Quantity] = None

    def __post_init__(self):
        require(self.lower, SERUM_CONCENTRATION, "lower")
        if self.upper is not None:
            require(self.upper, SERUM_CONCENTRATION, "upper")

    def within_range(self, concentration: Quantity) -> bool:
        # Edges compare with a tolerance: 250 mg/dL and 0.25 g/dL differ in the last bit.
        if not (self.lower.lte(concentration) or self.lower.isclose(concentration)):
            return False
        if self.upper is None:
            return True
        return self.upper.gte(concentration) or self.upper.isclose(concentration)

    def describe(self) -> str:
        return self.description

    def as_dict(self) -> dict:
        """JSON-friendly form with bounds in mg/dL."""
        return {
            "description": self.description,
            "lower_mg_dl": round(self.lower.to(mg_per_dl), 6),
            "upper_mg_dl": None if self.upper is None else round(self.upper.to(mg_per_dl), 6),
        }


def _band(description: str, lower: float, upper: Optional[float] = None) -> ClinicalRange:
    return ClinicalRange(
        description,
        Quantity.of(lower, mg_per_dl),
        None if upper is None else Quantity.of(upper, mg_per_dl),
    )


CLINICAL_EFFECTS: Tuple[ClinicalRange, ...] = (
    _band("Diminished fine motor coordination", 20, 50),
    _band("Impaired judgement; impaired coordination", 50, 100),
    _band("Difficulty with gait and balance", 100, 150),
    _band("Lethargy; difficulty sitting upright", 150, 250),
    _band("Coma in the non-habituated drinker", 300),
    _band("Respiratory depression", 400),
)


def validate_ranges(ranges: Sequence[ClinicalRange]) -> None:
    """Raise ValueError unless lower bounds ascend and each band is well formed."""
    previous: Optional[ClinicalRange] = None
    for band in ranges:
        if band.upper is not None and band.upper.lt(band.lower):
            raise ValueError(f"Band {band.description!r} has upper bound below lower bound")
        if previous is not None and not previous.lower.lt(band.lower):
            raise ValueError(
                f"Band {band.description!r} is out of order after {previous.description!r}"
            )
        previous = band


def matching_ranges(
    concentration: Quantity,
    ranges: Sequence[ClinicalRange] = CLINICAL_EFFECTS,
) -> List[ClinicalRange]:
    """All bands containing ``concentration``, in table order."""
    require(concentration, SERUM_CONCENTRATION, "concentration")
    return [band for band in ranges if band.within_range(concentration)]


def classify(
    concentration: Quantity,
    ranges: Sequence[ClinicalRange] = CLINICAL_EFFECTS,
) -> Optional[ClinicalRange]:
    """The most severe band containing ``concentration``, or None."""
    matches = matching_ranges(concentration, ranges)
    return matches[-1] if matches else None


def describe(
    concentration: Quantity,
    ranges: Sequence[ClinicalRange] = CLINICAL_EFFECTS,
) -> str:
    band = classify(concentration, ranges)
    return NO_EFFECTS if band is None else band.describe()
