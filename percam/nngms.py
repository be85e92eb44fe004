"""Non-normalized photometric Gaussian mixture samples on regular image grids."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass
class GridImage:
    """An image sampled on a regular grid of height x width samples.

    Samples are indexed row by row. Each sample has a location, which defaults
    to its pixel coordinates (column, row), an intensity and a depth rho,
    which defaults to 1.
    """

    values: np.ndarray
    points: np.ndarray | None = field(default=None)
    rhos: np.ndarray | None = field(default=None)

    def __post_init__(self) -> None:
        self.values = np.asarray(self.values, dtype=float)
        if self.values.ndim != 2 or self.values.shape[1] == 0:
            raise ValueError(
                f"expected a non-empty 2D array of intensities, got shape {self.values.shape}"
            )
        self._flat = self.values.ravel()
        count = self._flat.size
        if self.points is None:
            rows, cols = np.indices(self.values.shape)
            self.points = np.column_stack([cols.ravel(), rows.ravel()]).astype(float)
        else:
            points = np.asarray(self.points, dtype=float)
            if points.ndim == 1:
                points = points.reshape(-1, 1)
            if len(points) != count:
                raise ValueError(f"{count} samples but {len(points)} locations")
            self.points = points
        if self.rhos is None:
            self.rhos = np.ones(count)
        else:
            self.rhos = np.asarray(self.rhos, dtype=float).ravel()
            if len(self.rhos) != count:
                raise ValueError(f"{count} samples but {len(self.rhos)} depths")

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def height(self) -> int:
        return self.values.shape[0]

    @property
    def flat_values(self) -> np.ndarray:
        return self._flat

    def __len__(self) -> int:
        return self._flat.size

    def sample(self, index) -> tuple[np.ndarray, float]:
        return self.points[index].copy(), float(self._flat[index])

    def rho(self, index) -> float:
        return float(self.rhos[index])


def _window(start, block, step, end, total) -> tuple[np.ndarray, np.ndarray]:
    """Indices visited by a square window, and the row start of each one.

    Rows that start at a negative index are left out entirely, and each row
    stops at the last sample of the image.
    """
    indices: list[int] = []
    row_starts: list[int] = []
    for row in range(start, end, step):
        if row < 0:
            continue
        span = range(row, min(row + block, total))
        indices.extend(span)
        row_starts.extend([row] * len(span))
    return np.array(indices, dtype=int), np.array(row_starts, dtype=int)


class PhotometricNNGMS:
    """Unnormalized Gaussian mixture of the intensities around one sample.

    Only the samples of a square window of side 2 * half_side + 1 centred on
    the source sample contribute. The Gaussian weights are kept so that the
    mixture can be re-evaluated quickly on a new image with update_from().
    """

    def __init__(self, lambda_g=1.0):
        self.value = 0.0
        self.location = np.zeros(0)
        self.nb_dim = 0
        self._jacobian = np.zeros(6)
        self.feature_jacobian_computed = False
        self._weights: np.ndarray | None = None
        self._gradients: np.ndarray | None = None
        self.set_lambda(lambda_g)
        self.half_side = int(3.0 * lambda_g + 0.5)
        self._block = 2 * self.half_side + 1
        self._start = 0
        self._step = self._block
        self._end = self._block

    def set_lambda(self, lambda_g) -> None:
        """Set the Gaussian spread and the constants derived from it."""
        if lambda_g > 0:
            self.lambda_g = float(lambda_g)
            self.one_o_l2 = 1.0 / (self.lambda_g * self.lambda_g)
            self.m_one_o_2l2 = -self.one_o_l2 * 0.5
            self.norm_fact = 1.0
        else:
            self.lambda_g = 1.0
            self.m_one_o_2l2 = 0.0
            self.one_o_l2 = 0.0
            self.norm_fact = 0.0

    def build_from(self, image: GridImage, location, compute_feature_derivatives=False,
                   rho=1.0, source_index=0) -> None:
        """Evaluate the mixture at location over the window around source_index."""
        self.location = np.asarray(location, dtype=float).ravel().copy()
        self.nb_dim = self.location.size
        self._jacobian = np.zeros(self.nb_dim)

        width = image.width
        self._block = 2 * self.half_side + 1
        self._start = source_index - self.half_side - width * self.half_side
        self._step = width
        self._end = self._start + self._block * width

        indices, _ = _window(self._start, self._block, self._step, self._end, len(image))
        diff = image.points[indices] - self.location
        dist2 = np.einsum("ij,ij->i", diff, diff)
        weights = np.exp(dist2 * self.m_one_o_2l2)
        gs = image.flat_values[indices] * weights
        self.value = float(gs.sum())
        self._weights = weights

        if compute_feature_derivatives:
            gradients = diff * self.one_o_l2
            self._gradients = gradients
            self._jacobian = (gradients * gs[:, None]).sum(axis=0)
            self.feature_jacobian_computed = True
        elif self._gradients is None or self._gradients.shape != diff.shape:
            self._gradients = np.zeros_like(diff)

    def update_from(self, image: GridImage, compute_feature_derivatives=False,
                    source_index=0) -> None:
        """Re-evaluate the mixture on a new image with the stored Gaussian weights."""
        if self._weights is None:
            raise RuntimeError("the mixture must be built before it can be updated")
        indices, row_starts = _window(
            self._start, self._block, self._step, self._end, len(image)
        )
        count = len(indices)
        if count > len(self._weights):
            raise ValueError("the image holds more window samples than were built")
        weights = self._weights[:count]
        self._jacobian = np.zeros(self.nb_dim)

        if compute_feature_derivatives:
            gs = image.flat_values[indices] * weights
            self.value = float(gs.sum())
            self._jacobian = (self._gradients[:count] * gs[:, None]).sum(axis=0)
            self.feature_jacobian_computed = True
        else:
            # Each row is read at its first sample only.
            gs = image.flat_values[row_starts] * weights
            self.value = float(gs.sum())

    def feature_jacobian(self) -> np.ndarray:
        """Derivatives of the mixture value with respect to its location."""
        if not self.feature_jacobian_computed:
            raise RuntimeError("the feature Jacobian has not been computed")
        return self._jacobian.copy()

    def to_double(self) -> float:
        return self.value

    def copy(self) -> "PhotometricNNGMS":
        other = PhotometricNNGMS(self.lambda_g)
        other.m_one_o_2l2 = self.m_one_o_2l2
        other.one_o_l2 = self.one_o_l2
        other.norm_fact = self.norm_fact
        other.half_side = self.half_side
        other._block = self._block
        other._start = self._start
        other._step = self._step
        other._end = self._end
        other.value = self.value
        other.location = self.location.copy()
        other.nb_dim = self.nb_dim
        other._jacobian = self._jacobian.copy()
        other.feature_jacobian_computed = self.feature_jacobian_computed
        if self._weights is not None:
            other._weights = self._weights.copy()
        if self._gradients is not None:
            other._gradients = self._gradients.copy()
        return other

    def __sub__(self, other: "PhotometricNNGMS") -> "PhotometricNNGMS":
        result = PhotometricNNGMS(self.lambda_g)
        result.value = self.value - other.value
        return result

    def __mul__(self, other) -> "PhotometricNNGMS":
        factor = other.value if isinstance(other, PhotometricNNGMS) else float(other)
        result = PhotometricNNGMS(self.lambda_g)
        result.value = self.value * factor
        return result

    def __iadd__(self, other: "PhotometricNNGMS") -> "PhotometricNNGMS":
        self.value += other.value
        return self