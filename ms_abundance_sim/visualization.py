"""
Visualization Module for Simulated Datasets

Quality control plots for generated samples and for the recovery of the
simulated differential expression.
"""

import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle
from typing import Dict, Optional, Tuple

GROUP_COLORS = {"case": "#d62728", "control": "#1f77b4"}


def plot_box_plot(
    sample_matrix: pd.DataFrame,
    sample_groups: Dict[str, str],
    group_colors: Optional[Dict[str, str]] = None,
    log_transform: bool = True,
    figsize: Tuple[int, int] = (14, 6),
    title: str = "Simulated Abundance Distribution by Sample",
):
    """
    Create box plot of simulated abundances by sample, case samples first.

    Parameters:
    -----------
    sample_matrix : pd.DataFrame
        Proteins x samples abundances (see build_sample_matrix)
    sample_groups : Dict[str, str]
        Sample column -> 'case' or 'control'
    group_colors : Dict[str, str], optional
        Colors for each group
    log_transform : bool
        Whether to log2 transform data for plotting
    figsize : Tuple[int, int]
        Figure size (width, height)
    title : str
        Plot title

    Returns:
    --------
    matplotlib.figure.Figure
    """
    group_colors = group_colors or GROUP_COLORS

    if log_transform:
        plot_data = np.log2(sample_matrix.where(sample_matrix > 0))
        ylabel = "Log2 Abundance"
    else:
        plot_data = sample_matrix
        ylabel = "Abundance"

    group_order = ["case", "control"]
    ordered_samples = [
        sample
        for group in group_order
        for sample in sample_matrix.columns
        if sample_groups.get(sample) == group
    ]

    fig, ax = plt.subplots(figsize=figsize)

    box_data = [plot_data[sample].dropna() for sample in ordered_samples]
    colors = [group_colors.get(sample_groups[sample], "#7f7f7f") for sample in ordered_samples]

    bp = ax.boxplot(
        box_data,
        patch_artist=True,
        widths=0.8,
        showfliers=True,
        flierprops={"marker": "o", "markersize": 2, "alpha": 0.5},
    )
    for patch, color in zip(bp["boxes"], colors):
        patch.set_facecolor(color)
        patch.set_alpha(0.7)

    ax.set_xlabel("Sample", fontsize=14)
    ax.set_ylabel(ylabel, fontsize=14)
    ax.set_title(title, fontsize=16, fontweight="bold")
    ax.set_xticks(range(1, len(ordered_samples) + 1))
    ax.set_xticklabels(ordered_samples, rotation=45, ha="right", fontsize=10)
    ax.grid(True, alpha=0.3, axis="y")

    legend_elements = [
        Rectangle((0, 0), 1, 1, facecolor=group_colors.get(group, "#7f7f7f"), alpha=0.7, label=group)
        for group in group_order
        if group in sample_groups.values()
    ]
    ax.legend(handles=legend_elements, loc="upper right")

    plt.tight_layout()
    plt.show()

    print(f"Box plot summary: {len(box_data)} samples plotted")
    return fig


def plot_volcano(
    results_df: pd.DataFrame,
    ground_truth: Optional[pd.DataFrame] = None,
    p_value_column: str = "adj.P.Val",
    p_value_threshold: float = 0.05,
    figsize: Tuple[int, int] = (10, 8),
    title: str = "Case vs Control",
):
    """
    Volcano plot of case/control results.

    When ground_truth is given, simulated differentially expressed proteins
    are drawn in red and the rest in grey; otherwise significant proteins are
    highlighted.

    Returns:
    --------
    matplotlib.figure.Figure
    """
    plot_df = results_df.copy()
    if ground_truth is not None:
        plot_df = plot_df.merge(ground_truth[["Protein", "DiffExpressed"]], on="Protein", how="left")
        highlight = plot_df["DiffExpressed"].eq(True)
        highlight_label = "Simulated differential expression"
    else:
        highlight = plot_df[p_value_column] < p_value_threshold
        highlight_label = f"{p_value_column} < {p_value_threshold}"

    neg_log_p = -np.log10(plot_df[p_value_column].clip(lower=1e-300))

    fig, ax = plt.subplots(figsize=figsize)
    ax.scatter(plot_df.loc[~highlight, "logFC"], neg_log_p[~highlight],
               c="#7f7f7f", alpha=0.5, s=12, label="Other proteins")
    ax.scatter(plot_df.loc[highlight, "logFC"], neg_log_p[highlight],
               c="#d62728", alpha=0.8, s=18, label=highlight_label)
    ax.axhline(-np.log10(p_value_threshold), color="black", linestyle="--", linewidth=1)

    ax.set_xlabel("Log2 Fold Change (case - control)", fontsize=14)
    ax.set_ylabel(f"-Log10 {p_value_column}", fontsize=14)
    ax.set_title(title, fontsize=16, fontweight="bold")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")

    plt.tight_layout()
    plt.show()

    print(f"Volcano plot: {int(highlight.sum())} of {len(plot_df)} proteins highlighted")
    return fig
