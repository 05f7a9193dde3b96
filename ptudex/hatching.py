"""Convert PokeAPI hatch counters into PTU average hatch rates."""

import math
from typing import Dict, Mapping, Optional

# hatch counter -> average hatch rate in days, from the PTU breeding chart.
HATCH_RATE_TABLE: Dict[int, int] = {
    120: 75,
    100: 50,
    80: 40,
    50: 30,
    40: 25,
    35: 20,
    30: 16,
    15: 7,
    10: 4,
    5: 2,
}


class HatchRateMapper:
    """Look up the average hatch rate for a hatch counter.

    Counters missing from the table fall back to half the counter, rounded
    half up.
    """

    def __init__(self, table: Optional[Mapping[int, int]] = None):
        self.table = dict(HATCH_RATE_TABLE if table is None else table)

    def map_hatch_counter(self, counter: Optional[int]) -> Optional[int]:
        if counter is None:
            return None
        if counter in self.table:
            return self.table[counter]
        return math.floor(counter / 2 + 0.5)

    @staticmethod
    def format_rate(rate: Optional[int]) -> Optional[str]:
        """Render a hatch rate the way the rulebook prints it."""
        if rate is None:
            return None
        return f"{rate} Days"
