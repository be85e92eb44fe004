"""Sum of squared differences between two sets of features."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

_CAUCHY = 2.3849
_MAD_MIN = 0.0017


def cauchy_weights(residues) -> np.ndarray:
    """Cauchy M-estimator weights of residues, scaled by their median absolute deviation."""
    r = np.asarray(residues, dtype=float).ravel()
    if r.size == 0:
        return np.empty(0)
    index = math.ceil(r.size / 2.0) - 1
    median = np.partition(r, index)[index]
    deviations = np.abs(r - median)
    mad = 1.4826 * np.partition(deviations, index)[index]
    scale = max(mad, _MAD_MIN) * _CAUCHY
    return 1.0 / (1.0 + (deviations / scale) ** 2)


def _scalar(feature) -> float:
    to_double = getattr(feature, "to_double", None)
    return float(to_double() if to_double is not None else feature)


def _total(terms: Iterable):
    iterator = iter(terms)
    total = next(iterator, None)
    if total is None:
        return 0.0
    for term in iterator:
        total += term
    return total


class SSDComparator:
    """Compares two equally long feature sets element by element.

    Features must support subtraction and multiplication, and either be numbers
    or provide to_double(). With robust estimation, Cauchy weights are computed
    from the differences.
    """

    def __init__(self, first, second, robust=False):
        self.robust = bool(robust)
        self.differences: list = []
        self._residues = np.empty(0)
        self._weights = np.empty(0)
        self.compare(first, second)

    @property
    def count(self) -> int:
        return len(self.differences)

    def compare(self, first, second) -> None:
        """Store the differences first[i] - second[i] and, if robust, their weights."""
        first, second = list(first), list(second)
        if len(first) != len(second):
            raise ValueError(
                f"feature sets differ in size: {len(first)} and {len(second)}"
            )
        self.differences = [a - b for a, b in zip(first, second)]
        if self.robust:
            self._update_residues()
            self._weights = cauchy_weights(self._residues)

    def _update_residues(self) -> None:
        if self.differences:
            self._residues = np.array([_scalar(d) for d in self.differences], dtype=float)

    def cost(self):
        """Sum of the squared differences, in the feature type."""
        return _total(d * d for d in self.differences)

    def robust_cost(self):
        """Sum of the squared weighted differences; the plain cost if not robust."""
        if not self.robust:
            return self.cost()
        weighted = (d * float(w) for d, w in zip(self.differences, self._weights))
        return _total(t * t for t in weighted)

    def robust_weights(self) -> np.ndarray:
        """The weights, or a single -1 when robust estimation is off."""
        if self.robust:
            return self._weights.copy()
        return np.array([-1.0])

    def residues(self) -> np.ndarray:
        """The differences as a vector of floats."""
        if not self.robust:
            self._update_residues()
        return self._residues.copy()