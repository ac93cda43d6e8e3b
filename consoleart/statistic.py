"""Descriptive statistics over a list of numbers."""

from __future__ import annotations

import math
from collections import Counter
from typing import Iterable


class Statistic:
    """A growable dataset with mean, median, variance and mode."""

    def __init__(self, dataset: Iterable[float] | None = None) -> None:
        self._data: list[float] = list(dataset) if dataset is not None else []

    @property
    def data(self) -> tuple[float, ...]:
        """The values currently held, in their stored order."""
        return tuple(self._data)

    def add_value(self, value: float) -> None:
        self._data.append(value)

    def add_values(self, values: Iterable[float]) -> None:
        self._data.extend(values)

    def mean(self) -> float:
        """Arithmetic mean; 0.0 for an empty dataset."""
        if not self._data:
            return 0.0
        return sum(self._data, 0.0) / len(self._data)

    def median(self) -> float:
        """Middle value; sorts the stored data. 0.0 for an empty dataset."""
        if not self._data:
            return 0.0
        self._data.sort()
        size = len(self._data)
        half = size // 2
        if size % 2 == 0:
            return (self._data[half - 1] + self._data[half]) / 2.0
        return self._data[half]

    def variance(self, sample: bool = False) -> float:
        """Variance around the mean; 0.0 with fewer than two values."""
        if len(self._data) < 2:
            return 0.0
        mean_value = self.mean()
        total = sum((value - mean_value) ** 2 for value in self._data)
        return total / (len(self._data) - 1 if sample else len(self._data))

    def variance_welford(self, sample: bool = False) -> float:
        """Variance computed in one pass with Welford's method."""
        if len(self._data) < 2:
            return 0.0
        mean_value = 0.0
        m2 = 0.0
        for count, value in enumerate(self._data, start=1):
            delta = value - mean_value
            mean_value += delta / count
            m2 += delta * (value - mean_value)
        return m2 / (len(self._data) - 1 if sample else len(self._data))

    def standardize(self, variance: float) -> float:
        """Standard deviation from a variance."""
        return math.sqrt(variance)

    def mode(self) -> list[float]:
        """All values sharing the highest frequency, in ascending order."""
        if not self._data:
            return []
        frequency = Counter(self._data)
        highest = max(frequency.values())
        return sorted(value for value, count in frequency.items() if count == highest)

    def calculate_statistics(self, sample_data: bool = False) -> list[tuple[str, float]]:
        """Labelled summary: mean, median, two deviations and every mode."""
        pairs: list[tuple[str, float]] = [
            ("Mean (E[X]):", self.mean()),
            ("Median:", self.median()),
            ("Standard variance:", self.standardize(self.variance(sample_data))),
            (
                "Standard variance (Welford):",
                self.standardize(self.variance_welford(sample_data)),
            ),
        ]
        pairs.extend(("Mode:", value) for value in self.mode())
        return pairs