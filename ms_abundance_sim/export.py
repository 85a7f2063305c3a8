"""
Export Module for MS Abundance Simulator

This module writes simulated sample files and the records that make a run
reproducible: the YAML summary of generated files, the ground-truth table of
differentially expressed proteins and a timestamped configuration file.
"""

import os
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd
import yaml

from .config import SimulationConfig
from .data_import import ProteinEntry
from .differential_expression import DifferentialExpressionPlan


def _output_base(input_filename: str, output_dir: Optional[str] = None) -> str:
    directory = output_dir if output_dir is not None else os.path.dirname(input_filename)
    base = os.path.splitext(os.path.basename(input_filename))[0]
    return os.path.join(directory, base)


def sample_file_name(input_filename: str, sample_number: int, sample_type: str,
                     output_dir: Optional[str] = None) -> str:
    """
    Path of one generated sample: <basename>_<n>_<case|control>.

    The basename is the input file name without its extension. Files go next
    to the input unless output_dir is given.
    """
    return f"{_output_base(input_filename, output_dir)}_{sample_number}_{sample_type}"


def ground_truth_file_name(input_filename: str, output_dir: Optional[str] = None) -> str:
    """Path of the ground-truth table: <basename>_ground_truth.csv"""
    return f"{_output_base(input_filename, output_dir)}_ground_truth.csv"


def write_sample_file(path: str, rows: Iterable) -> int:
    """
    Write generated rows (header line followed by body lines) to ``path``.

    Returns:
    --------
    int : Number of protein records written
    """
    n_records = 0
    with open(path, "w", encoding="utf-8") as f:
        for row in rows:
            f.write(row.header_line + "\n")
            for body_line in row.body_lines:
                f.write(body_line + "\n")
            n_records += 1
    return n_records


def export_summary_yaml(summary: Dict[str, Dict[str, List[str]]], output_file: Optional[str] = None,
                        verbose: bool = True) -> str:
    """
    Serialize the run summary (input file -> {case: [...], control: [...]}).

    Parameters:
    -----------
    summary : dict
        Result of process_files
    output_file : str, optional
        Path to save the YAML document
    verbose : bool
        Print the output path when saving

    Returns:
    --------
    str : The YAML text
    """
    plain = {
        str(filename): {sample_type: list(paths) for sample_type, paths in outputs.items()}
        for filename, outputs in summary.items()
    }
    text = yaml.safe_dump(plain, default_flow_style=False, sort_keys=False)

    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(text)
        if verbose:
            print(f"Summary saved to: {output_file}")

    return text


def create_ground_truth_table(entries: Sequence[ProteinEntry], plan: DifferentialExpressionPlan) -> pd.DataFrame:
    """One row per protein stating whether it was differentially expressed."""
    return pd.DataFrame(
        {
            "Protein_Index": range(len(entries)),
            "Protein": [entry.header_text for entry in entries],
            "Base_Abundance": [entry.abundances[0] for entry in entries],
            "Num_Abundances": [len(entry.abundances) for entry in entries],
            "DiffExpressed": [plan.is_selected(i) for i in range(len(entries))],
        }
    )


def export_ground_truth(entries: Sequence[ProteinEntry], plan: DifferentialExpressionPlan,
                        output_file: str, verbose: bool = True) -> str:
    """
    Export the ground-truth labels for one input file as CSV.

    Returns:
    --------
    str : Path of the written file
    """
    table = create_ground_truth_table(entries, plan)
    table.to_csv(output_file, index=False)
    if verbose:
        print(f"Ground truth ({plan.num_selected} of {len(entries)} proteins differentially expressed) "
              f"exported to: {output_file}")
    return output_file


def _write_config_section(f, section_num: int, section_title: str, keys: List[str],
                          config_dict: Dict[str, Any]) -> None:
    """Write one numbered block of name = value lines."""
    f.write("# =============================================================================\n")
    f.write(f"# {section_num}. {section_title}\n")
    f.write("# =============================================================================\n")
    for key in keys:
        if key in config_dict:
            f.write(f"{key} = {config_dict[key]!r}\n")
    f.write("\n")


def export_timestamped_config(
    config: SimulationConfig,
    output_prefix: str = "ms_abundance_sim",
    input_files: Optional[List[str]] = None,
    analysis_description: str = "Simulated case/control abundance dataset",
    computed_values: Optional[Dict[str, Any]] = None,
    verbose: bool = True,
) -> str:
    """
    Export the simulation configuration as a timestamped Python file.

    Parameters:
    -----------
    config : SimulationConfig
        Configuration used for the run
    output_prefix : str
        Prefix for the configuration filename
    input_files : list, optional
        Template files the run was applied to
    analysis_description : str
        Free text written into the header
    computed_values : dict, optional
        Additional values to include as comments
    verbose : bool
        Print the output path

    Returns:
    --------
    str : Path to the exported configuration file
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    config_file = f"{output_prefix}_config_{timestamp}.py"

    if verbose:
        print(f"Exporting simulation configuration to: {config_file}")

    config_dict = config.to_dict()
    config_dict["input_files"] = list(input_files or [])

    section_configs = [
        (1, "INPUT FILES", ["input_files"]),
        (2, "SAMPLE GROUPS", ["num_case", "num_control"]),
        (3, "DIFFERENTIAL EXPRESSION", ["pct_diff_express", "control_variance", "case_variance"]),
        (
            4,
            "DOWNSHIFT",
            ["downshift_min_threshold", "downshift_probability_threshold", "downshift_amount"],
        ),
        (5, "OUTPUT AND REPRODUCIBILITY", ["output_abundance_separator", "random_seed"]),
    ]

    with open(config_file, "w", encoding="utf-8") as f:
        f.write("# =============================================================================\n")
        f.write("# MS ABUNDANCE SIMULATION CONFIGURATION\n")
        f.write(f"# Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"# Description: {analysis_description}\n")
        f.write("# =============================================================================\n\n")

        for section_num, title, keys in section_configs:
            _write_config_section(f, section_num, title, keys, config_dict)

        if computed_values:
            f.write("# =============================================================================\n")
            f.write("# COMPUTED VALUES (for reference only)\n")
            f.write("# =============================================================================\n")
            for key, value in computed_values.items():
                f.write(f"# {key}: {value}\n")

    return config_file
