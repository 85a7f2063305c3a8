"""
Differential Expression Module

Chooses, once per input file, which proteins are shifted between case and
control samples.
"""

import math
import warnings
from dataclasses import dataclass, field
from typing import Dict, FrozenSet

from .sampling import RandomStream


@dataclass(frozen=True)
class DifferentialExpressionPlan:
    """Proteins selected for differential expression in one input file.

    sign_by_index holds a +1/-1 bias per selected protein. The simulation does
    not read it; it is kept so the plan carries the same fields as the
    original tool's output.
    """

    num_proteins: int
    selected_indices: FrozenSet[int] = field(default_factory=frozenset)
    sign_by_index: Dict[int, int] = field(default_factory=dict)

    def is_selected(self, protein_index: int) -> bool:
        return protein_index in self.selected_indices

    @property
    def num_selected(self) -> int:
        return len(self.selected_indices)


def count_differentially_expressed(num_proteins: int, pct_diff_express: float) -> int:
    """floor(num_proteins * pct_diff_express / 100)"""
    return int(math.floor(num_proteins * pct_diff_express / 100.0))


def select_differentially_expressed(
    num_proteins: int,
    pct_diff_express: float,
    rng: RandomStream,
) -> DifferentialExpressionPlan:
    """
    Draw the differential-expression plan for one file.

    Parameters:
    -----------
    num_proteins : int
        Number of protein records in the file
    pct_diff_express : float
        Percent (0-100) of proteins to differentially express
    rng : RandomStream
        Random source

    Returns:
    --------
    DifferentialExpressionPlan
    """
    if num_proteins < 0:
        raise ValueError(f"num_proteins must be non-negative, got {num_proteins}")
    if not 0 <= pct_diff_express <= 100:
        raise ValueError(f"pct_diff_express must be between 0 and 100, got {pct_diff_express}")

    n_selected = count_differentially_expressed(num_proteins, pct_diff_express)
    if n_selected == 0 and pct_diff_express > 0 and num_proteins > 0:
        warnings.warn(
            f"{pct_diff_express}% of {num_proteins} proteins rounds down to 0; "
            "no protein will be differentially expressed"
        )

    chosen = rng.sample_without_replacement(num_proteins, n_selected)
    selected = frozenset(int(i) for i in chosen)
    signs = {idx: rng.choose_sign() for idx in sorted(selected)}

    return DifferentialExpressionPlan(
        num_proteins=num_proteins,
        selected_indices=selected,
        sign_by_index=signs,
    )
