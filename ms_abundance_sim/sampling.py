"""
Discrete Poisson Sampling Module

Random source and the Poisson inverse-transform sampler that drives every
fold change in the simulation.
"""

import math
from typing import Optional, Sequence

import numpy as np
from scipy.stats import poisson as poisson_distribution

from .validation import DistributionSearchError


class RandomStream:
    """Explicit random source threaded through every sampling function.

    Wraps a numpy Generator. Two streams built from the same seed produce the
    same sequence of draws, so a seeded run is reproducible as long as the
    draw order of each code path is unchanged.

    Usage:
        rng = RandomStream(seed=67809)
        rng.next_uniform()   # float in [0, 1)
        rng.choose_sign()    # +1 or -1
    """

    def __init__(self, seed: Optional[int] = None, generator: Optional[np.random.Generator] = None):
        if generator is not None and seed is not None:
            raise ValueError("Pass either seed or generator, not both")
        self.seed = seed
        self._generator = generator if generator is not None else np.random.default_rng(seed)

    def next_uniform(self) -> float:
        """Uniform draw on [0, 1)."""
        return float(self._generator.random())

    def choose_sign(self) -> int:
        """+1 or -1 with equal probability."""
        return 1 if self._generator.integers(0, 2) == 0 else -1

    def integer(self, low: int, high: int) -> int:
        """Uniform integer in the closed range [low, high]."""
        return int(self._generator.integers(low, high, endpoint=True))

    def permutation(self, values: Sequence[int]) -> np.ndarray:
        return self._generator.permutation(np.asarray(values))

    def sample_without_replacement(self, population_size: int, k: int) -> np.ndarray:
        """k distinct integers from range(population_size)."""
        return self._generator.choice(population_size, size=k, replace=False)


def poisson(rate: float, k: int) -> float:
    """
    Poisson probability mass rate^k * e^-rate / k!.

    Parameters:
    -----------
    rate : float
        Event rate (lambda), positive
    k : int
        Number of occurrences, non-negative

    Returns:
    --------
    float : Probability of exactly k events
    """
    if int(k) != k or k < 0:
        raise ValueError(f"k must be a non-negative integer, got {k!r}")
    return float(poisson_distribution.pmf(int(k), rate))


def inverse_transform_sample(rate: float, rng: RandomStream) -> int:
    """
    Draw one Poisson(rate) sample by inverse-transform search.

    The pmf at round(rate) bounds the distribution from above; a target
    probability is drawn under that bound and candidates 0..floor(rate*4) are
    visited in shuffled order until one has a larger pmf.

    Parameters:
    -----------
    rate : float
        Event rate (lambda), finite and positive
    rng : RandomStream
        Source of the target draw and the visiting order

    Returns:
    --------
    int : Sampled number of occurrences in [0, floor(rate*4)]
    """
    if not math.isfinite(rate) or rate <= 0:
        raise ValueError(f"rate must be a finite positive number, got {rate!r}")

    peak = poisson(rate, round(rate))
    target = rng.next_uniform() * peak

    candidates = np.arange(0, math.floor(rate * 4) + 1)
    probabilities = poisson_distribution.pmf(candidates, rate)

    for k in rng.permutation(candidates):
        if target < probabilities[k]:
            return int(k)

    raise DistributionSearchError(rate, target, len(candidates))
