"""Beverage presets and ethanol content helpers.

US standard drink = 14 g ethanol.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from serum_ethanol.calculations import ethanol_ingested
from serum_ethanol.constants import STANDARD_DRINK
from serum_ethanol.units import Quantity, milliliters


@dataclass(frozen=True)
class DrinkType:
    """A drink category with ABV and serving size."""

    key: str
    name: str
    abv: float  # e.g. 0.05 for 5%
    serving: Quantity  # volume of one serving

    @property
    def ethanol(self) -> Quantity:
        """Ethanol mass in one serving."""
        return ethanol_ingested(self.serving, self.abv)


# Common drink types (US servings: 12 oz, 5 oz, 1.5 oz).
DRINK_TYPES = {
    "beer": DrinkType("beer", "Beer (5%)", 0.05, Quantity.of(355, milliliters)),
    "wine": DrinkType("wine", "Wine (12%)", 0.12, Quantity.of(148, milliliters)),
    "liquor": DrinkType("liquor", "Spirit (40%)", 0.40, Quantity.of(44, milliliters)),
    "seltzer": DrinkType("seltzer", "Hard seltzer (5%)", 0.05, Quantity.of(355, milliliters)),
}


def ethanol_from_drink(
    drink_key: str,
    volume: Optional[Quantity] = None,
    count: float = 1.0,
) -> Quantity:
    """
    Ethanol mass for ``count`` servings of a drink type.

    Unknown keys count as standard drinks. An explicit ``volume`` is the total
    volume drunk and uses the drink's ABV.
    """
    dt = DRINK_TYPES.get(drink_key)
    if dt is None:
        return STANDARD_DRINK.times(count)
    if volume is not None:
        return ethanol_ingested(volume, dt.abv)
    return dt.ethanol.times(count)


def list_drink_types() -> List[Tuple[str, str]]:
    """Return list of (key, name) for UI dropdowns."""
    return [(d.key, d.name) for d in DRINK_TYPES.values()]
