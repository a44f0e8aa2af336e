"""Zipf-distributed random integers with an extendable upper bound."""

from __future__ import annotations

import math
import random
import threading

# Precomputed zeta for the most common large configuration; summing
# ten billion terms from scratch would take far too long.
DEFAULT_I_MAX = 10_000_000_000
DEFAULT_THETA = 0.99
DEFAULT_ZETA_N = 26.46902820178302


def compute_zeta_incrementally(
    old_i_max: int, i_max: int, theta: float, total: float
) -> float:
    """Extend ``total == zeta(old_i_max, theta)`` to ``zeta(i_max, theta)``."""
    if i_max < old_i_max:
        raise ValueError("can't increment i_max backwards")
    for i in range(old_i_max + 1, i_max + 1):
        total += 1.0 / math.pow(i, theta)
    return total


def compute_zeta_from_scratch(n: int, theta: float) -> float:
    """Return ``zeta(n, theta) = sum((1/i) ** theta for i in 1..n)``."""
    if n == DEFAULT_I_MAX and theta == DEFAULT_THETA:
        return DEFAULT_ZETA_N
    return compute_zeta_incrementally(0, n, theta, 0.0)


class ZipfGenerator:
    """Draws integers in ``[i_min, i_max]`` following a Zipf distribution.

    Unlike ``random`` based samplers, the upper bound can be raised cheaply
    with :meth:`increment_i_max`, and any non-negative theta other than 1
    is accepted.
    """

    def __init__(
        self,
        rng: random.Random,
        i_min: int,
        i_max: int,
        theta: float,
        verbose: bool = False,
    ) -> None:
        if i_min > i_max:
            raise ValueError(f"i_min {i_min} > i_max {i_max}")
        if theta < 0.0 or theta == 1.0:
            raise ValueError("0 < theta, and theta != 1")

        self._lock = threading.Lock()
        self._rng = rng
        self.i_min = i_min
        self.i_max = i_max
        self.theta = theta
        self.verbose = verbose

        self._zeta2 = compute_zeta_from_scratch(2, theta)
        self._zeta_n = compute_zeta_from_scratch(i_max + 1 - i_min, theta)
        self._alpha = 1.0 / (1.0 - theta)
        self._eta = self._compute_eta(self._zeta_n)
        self._half_pow_theta = 1.0 + math.pow(0.5, theta)

    def _compute_eta(self, zeta_n: float) -> float:
        spread = self.i_max + 1 - self.i_min
        return (1 - math.pow(2.0 / spread, 1.0 - self.theta)) / (
            1.0 - self._zeta2 / zeta_n
        )

    def draw(self) -> int:
        """Draw the next value between ``i_min`` and ``i_max``."""
        with self._lock:
            u = self._rng.random()
            uz = u * self._zeta_n
            if uz < 1.0:
                result = self.i_min
            elif uz < self._half_pow_theta:
                result = self.i_min + 1
            else:
                spread = float(self.i_max + 1 - self.i_min)
                result = self.i_min + int(
                    spread * math.pow(self._eta * u - self._eta + 1.0, self._alpha)
                )
            if self.verbose:
                print(f"draw[{self.i_min}, {self.i_max}] -> {result}")
            return result

    def increment_i_max(self, count: int) -> None:
        """Raise ``i_max`` by ``count`` and update the derived parameters."""
        with self._lock:
            old_n = self.i_max + 1 - self.i_min
            try:
                zeta_n = compute_zeta_incrementally(
                    old_n, old_n + count, self.theta, self._zeta_n
                )
            except ValueError as exc:
                raise ValueError("could not incrementally compute zeta") from exc
            self.i_max += count
            self._eta = self._compute_eta(zeta_n)
            self._zeta_n = zeta_n