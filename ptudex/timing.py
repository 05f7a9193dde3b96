import time
from typing import Callable, Dict, Hashable, Optional


class PerformanceMetricTracker:
    """Record start/end timestamps per key and report the average duration.

    ``start`` and ``end`` may be called at any time for a key; only keys with
    both timestamps count towards the average.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock = clock or time.perf_counter
        self.timestamps: Dict[Hashable, Dict[str, float]] = {}

    def _initialize(self, key: Hashable) -> Dict[str, float]:
        return self.timestamps.setdefault(key, {})

    def start(self, key: Hashable) -> None:
        self._initialize(key)["start_time"] = self.clock()

    def end(self, key: Hashable) -> None:
        self._initialize(key)["end_time"] = self.clock()

    def reset(self) -> None:
        self.timestamps.clear()

    def _durations(self):
        for entry in self.timestamps.values():
            if "start_time" in entry and "end_time" in entry:
                yield entry["end_time"] - entry["start_time"]

    @property
    def total_duration(self) -> float:
        return sum(self._durations())

    @property
    def average_duration_in_seconds(self) -> float:
        durations = list(self._durations())
        if not durations:
            return 0.0
        return sum(durations) / len(durations)

    @property
    def average_duration_in_minutes(self) -> float:
        return self.average_duration_in_seconds / 60
