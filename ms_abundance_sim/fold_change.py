"""
Fold Change Module

Turns Poisson draws into signed fold changes, optionally biases them
downward, and resamples a protein abundance from its template values.
"""

from typing import Optional, Sequence

from .sampling import RandomStream, inverse_transform_sample

JITTER_FRACTION = 0.1


def get_fold_change(
    protein_abundances: Sequence[float],
    rate: float,
    max_abundance: float,
    rng: RandomStream,
) -> float:
    """
    Signed fold change scaled by how far the protein sits below the file's
    most abundant protein (max fold change at lowest abundance).

    Parameters:
    -----------
    protein_abundances : Sequence[float]
        Sorted template abundances of one protein (non-empty)
    rate : float
        Poisson rate (lambda) for this sample group
    max_abundance : float
        Largest abundance in the input file, > 0
    rng : RandomStream
        Random source

    Returns:
    --------
    float : Fold change, positive or negative
    """
    if len(protein_abundances) == 0:
        raise ValueError("protein_abundances must contain at least one value")
    if max_abundance <= 0:
        raise ValueError(f"max_abundance must be positive, got {max_abundance!r}")

    raw_fc = inverse_transform_sample(rate, rng)
    norm_fc = raw_fc * (1.0 - float(protein_abundances[0]) / max_abundance)
    pert_fc = norm_fc * rng.next_uniform()
    return pert_fc * rng.choose_sign()


def get_fold_change_clean(protein_abundances: Sequence[float], rate: float, rng: RandomStream) -> float:
    """Signed raw Poisson draw, without abundance scaling or dampening."""
    if len(protein_abundances) == 0:
        raise ValueError("protein_abundances must contain at least one value")
    raw_fc = inverse_transform_sample(rate, rng)
    return raw_fc * rng.choose_sign()


def downshift(
    value: float,
    min_threshold: float,
    probability_threshold: float,
    amount: float,
    random_draw: Optional[float] = None,
    rng: Optional[RandomStream] = None,
) -> float:
    """
    Reduce a fold change by ``amount`` when it exceeds ``min_threshold`` and
    the draw falls under ``probability_threshold``.

    ``random_draw`` is taken from ``rng`` when not given.
    """
    if random_draw is None:
        if rng is None:
            raise ValueError("downshift needs either random_draw or rng")
        random_draw = rng.next_uniform()

    if value > min_threshold and random_draw < probability_threshold:
        return value - amount
    return value


def sample_abundance(abundances: Sequence[float], fold_change: float, rng: RandomStream) -> float:
    """
    Simulate one abundance for a protein.

    With several template abundances the value is interpolated between two
    neighbouring observations and the fold change is ignored. With a single
    abundance the fold change is applied: growth is linear for a positive
    change, decay is exponential (base 2) for a negative one.

    Every result then gets up to 10% multiplicative jitter in a random
    direction. The result is not clamped at zero.
    """
    if len(abundances) == 0:
        raise ValueError("abundances must contain at least one value")

    if len(abundances) > 1:
        idx = rng.integer(1, len(abundances) - 1)
        next_idx = idx + 1 if idx + 1 < len(abundances) else 0  # wraps for 2 abundances
        abundance = abundances[idx] + rng.next_uniform() * (abundances[next_idx] - abundances[idx])
    else:
        base = float(abundances[0])
        if fold_change >= 0:
            abundance = base * fold_change + base
        else:
            abundance = base / (2.0 ** abs(fold_change))

    sign = rng.choose_sign()
    return abundance + sign * rng.next_uniform() * JITTER_FRACTION * abundance
