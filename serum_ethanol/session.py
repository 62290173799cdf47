"""
Drinking session: body weight, kinetic profile and a drink log.
Time: hours from session start (0); negative = before the start.

Each drink is treated as its own ingestion event. Its contribution is the
Widmark estimate since that drink, clamped at zero, and contributions are
summed.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from serum_ethanol import calculations
from serum_ethanol.constants import POPULATION_MEAN, KineticProfile
from serum_ethanol.drinks import ethanol_from_drink
from serum_ethanol.units import MASS, SERUM_CONCENTRATION, Quantity, hours, mg_per_dl, require

# Event: (hours_from_start, ethanol mass)
Event = Tuple[float, Quantity]

# Concentration treated as fully eliminated.
SOBER_THRESHOLD = Quantity.of(0.1, mg_per_dl)
MAX_SESSION_HOURS = 48.0

_ZERO = Quantity.of(0.0, SERUM_CONCENTRATION)


@dataclass
class DrinkingSession:
    weight: Quantity
    profile: KineticProfile = POPULATION_MEAN
    _events: List[Event] = field(default_factory=list)

    def __post_init__(self):
        require(self.weight, MASS, "weight")

    def add_drink(self, hours_from_start: float, drink_key: str, count: float = 1.0) -> None:
        self.add_ethanol(hours_from_start, ethanol_from_drink(drink_key, count=count))

    def add_drink_ago(self, hours_ago: float, drink_key: str, count: float = 1.0) -> None:
        self.add_drink(-hours_ago, drink_key, count)

    def add_ethanol(self, hours_from_start: float, ethanol: Quantity) -> None:
        require(ethanol, MASS, "ethanol")
        self._events.append((float(hours_from_start), ethanol))

    @property
    def events(self) -> List[Event]:
        return sorted(self._events, key=lambda e: e[0])

    @property
    def total_ethanol(self) -> Quantity:
        return sum((e[1] for e in self._events), Quantity.of(0.0, MASS))

    def concentration_at(self, time_hours: float) -> Quantity:
        """Serum concentration at ``time_hours``; drinks after that time are ignored."""
        total = _ZERO
        for t_drink, ethanol in self._events:
            if time_hours < t_drink:
                continue
            elapsed = Quantity.of(time_hours - t_drink, hours)
            contribution = calculations.ebac(ethanol, self.weight, elapsed, profile=self.profile)
            if contribution.gt(_ZERO):
                total = total.plus(contribution)
        return total

    def _end_time(self, max_hours: Optional[float]) -> float:
        if not self._events:
            return 0.0
        estimated_end = max(
            t + calculations.elimination_time(e, self.weight, profile=self.profile).to(hours)
            for t, e in self._events
        )
        if max_hours is not None:
            return min(estimated_end, max_hours)
        return estimated_end

    def curve(
        self,
        step_hours: float = 0.25,
        start_hours: Optional[float] = None,
        max_hours: Optional[float] = None,
    ) -> List[Tuple[float, float]]:
        """Return (time_hours, concentration in mg/dL) pairs for graphing."""
        if not self._events:
            return []
        if step_hours <= 0:
            raise ValueError("step_hours must be > 0")

        start = 0.0 if start_hours is None else start_hours
        end = max(self._end_time(max_hours), start)

        points: List[Tuple[float, float]] = []
        i = 0
        t = start
        while t <= end + 1e-9:
            points.append((round(t, 4), round(self.concentration_at(t).to(mg_per_dl), 4)))
            i += 1
            t = start + i * step_hours
        return points

    def peak(self, step_hours: float = 0.25) -> Quantity:
        """Highest sampled concentration over the session."""
        if not self._events:
            return _ZERO
        start = min(t for t, _ in self._events)
        return Quantity.of(max(c for _, c in self.curve(step_hours, start_hours=start)), mg_per_dl)

    def hours_until_sober(self) -> float:
        """Hours from the first drink until concentration drops to the sober threshold."""
        if not self._events:
            return 0.0

        first = min(t for t, _ in self._events)
        last = max(t for t, _ in self._events)
        t = last
        while t - first <= MAX_SESSION_HOURS:
            if self.concentration_at(t).lte(SOBER_THRESHOLD):
                return round(t - first, 2)
            t += 0.25
        return MAX_SESSION_HOURS
