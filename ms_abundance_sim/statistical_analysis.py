"""
Statistical Analysis Module for Simulated Datasets

Loads generated samples back into a proteins x samples table and checks how
well a standard case/control test recovers the simulated ground truth.
"""

import os

import pandas as pd
import numpy as np
from scipy.stats import ttest_ind
from statsmodels.stats.multitest import multipletests
from typing import Dict, List, Optional, Tuple

from .data_import import read_sample_abundances


def build_sample_matrix(
    file_outputs: Dict[str, List[str]],
    separator: str = " #",
) -> Tuple[pd.DataFrame, Dict[str, str]]:
    """
    Assemble the generated samples of one template file into a DataFrame.

    Parameters:
    -----------
    file_outputs : Dict[str, List[str]]
        {'case': [paths], 'control': [paths]} as returned by process_file
    separator : str
        Separator used between header text and abundance

    Returns:
    --------
    sample_matrix : pd.DataFrame
        Rows are proteins (header text), columns are sample file names
    sample_groups : Dict[str, str]
        Sample column -> 'case' or 'control'
    """
    columns = {}
    sample_groups = {}
    for sample_type, paths in file_outputs.items():
        for path in paths:
            sample_name = os.path.basename(path)
            columns[sample_name] = pd.Series(read_sample_abundances(path, separator))
            sample_groups[sample_name] = sample_type

    sample_matrix = pd.DataFrame(columns)
    sample_matrix.index.name = "Protein"
    return sample_matrix, sample_groups


def run_case_control_t_test(
    sample_matrix: pd.DataFrame,
    sample_groups: Dict[str, str],
    correction_method: str = "fdr_bh",
    p_value_threshold: float = 0.05,
    log_transform: bool = True,
) -> pd.DataFrame:
    """
    Welch t-test of case against control for every protein.

    Parameters:
    -----------
    sample_matrix : pd.DataFrame
        Proteins x samples abundances
    sample_groups : Dict[str, str]
        Sample column -> 'case' or 'control'
    correction_method : str
        Any statsmodels multipletests method
    p_value_threshold : float
        Threshold on the adjusted p-value for 'Significant'
    log_transform : bool
        Test log2 abundances (zeros become NaN)

    Returns:
    --------
    pd.DataFrame with Protein, logFC, AveExpr, t, P.Value, adj.P.Val, Significant
    """
    case_columns = [s for s, t in sample_groups.items() if t == "case" and s in sample_matrix.columns]
    control_columns = [s for s, t in sample_groups.items() if t == "control" and s in sample_matrix.columns]

    if len(case_columns) < 2 or len(control_columns) < 2:
        raise ValueError(
            f"Need at least 2 case and 2 control samples, got {len(case_columns)} and {len(control_columns)}"
        )

    values = sample_matrix[case_columns + control_columns].astype(float)
    if log_transform:
        values = np.log2(values.where(values > 0))

    print(f"Running Welch t-test for {len(values)} proteins "
          f"({len(case_columns)} case vs {len(control_columns)} control)...")

    results = []
    for protein, row in values.iterrows():
        case_values = row[case_columns].dropna()
        control_values = row[control_columns].dropna()

        if len(case_values) < 2 or len(control_values) < 2:
            t_stat, p_value = np.nan, np.nan
        else:
            t_stat, p_value = ttest_ind(case_values, control_values, equal_var=False)

        results.append(
            {
                "Protein": protein,
                "logFC": case_values.mean() - control_values.mean(),
                "AveExpr": row.mean(),
                "t": t_stat,
                "P.Value": p_value,
            }
        )

    results_df = pd.DataFrame(results)

    # constant rows give nan p-values; treat them as non-significant
    all_pvalues = results_df["P.Value"].fillna(1.0)
    rejected, adj_pvalues, _, _ = multipletests(
        all_pvalues, alpha=p_value_threshold, method=correction_method
    )
    results_df["adj.P.Val"] = adj_pvalues
    results_df["Significant"] = rejected

    print(f"✓ Significant proteins (adjusted p < {p_value_threshold}): {int(rejected.sum())}")
    return results_df


def evaluate_differential_recovery(
    results_df: pd.DataFrame,
    ground_truth: pd.DataFrame,
    significance_column: str = "Significant",
) -> Dict[str, float]:
    """
    Compare test calls against the simulated ground truth.

    Parameters:
    -----------
    results_df : pd.DataFrame
        Output of run_case_control_t_test (Protein + significance column)
    ground_truth : pd.DataFrame
        Ground-truth table (Protein, DiffExpressed)
    significance_column : str
        Boolean column of results_df holding the calls

    Returns:
    --------
    Dict with counts (tp, fp, fn, tn) and sensitivity, specificity,
    false_discovery_rate (nan when undefined)
    """
    merged = results_df[["Protein", significance_column]].merge(
        ground_truth[["Protein", "DiffExpressed"]], on="Protein", how="inner"
    )
    called = merged[significance_column].astype(bool)
    truth = merged["DiffExpressed"].astype(bool)

    tp = int((called & truth).sum())
    fp = int((called & ~truth).sum())
    fn = int((~called & truth).sum())
    tn = int((~called & ~truth).sum())

    def _ratio(numerator: int, denominator: int) -> float:
        return numerator / denominator if denominator else float("nan")

    return {
        "proteins": len(merged),
        "true_positives": tp,
        "false_positives": fp,
        "false_negatives": fn,
        "true_negatives": tn,
        "sensitivity": _ratio(tp, tp + fn),
        "specificity": _ratio(tn, tn + fp),
        "false_discovery_rate": _ratio(fp, tp + fp),
    }


def display_recovery_summary(recovery: Dict[str, float], title: Optional[str] = None) -> None:
    """Print the output of evaluate_differential_recovery."""
    print(title or "GROUND TRUTH RECOVERY")
    print("=" * 50)
    print(f"Proteins compared: {recovery['proteins']}")
    print(f"  True positives:  {recovery['true_positives']}")
    print(f"  False positives: {recovery['false_positives']}")
    print(f"  False negatives: {recovery['false_negatives']}")
    print(f"  True negatives:  {recovery['true_negatives']}")
    print(f"Sensitivity: {recovery['sensitivity']:.3f}")
    print(f"Specificity: {recovery['specificity']:.3f}")
    print(f"False discovery rate: {recovery['false_discovery_rate']:.3f}")
