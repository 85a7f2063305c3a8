"""
Simulation Module

Drives the generation of case and control samples for each template file:
per protein it draws a fold change, applies the downshift policy, resamples
the abundance and hands the row to the sample writer.
"""

import os
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .config import SimulationConfig
from .data_import import ProteinEntry, load_protein_entries
from .differential_expression import DifferentialExpressionPlan, select_differentially_expressed
from .export import export_ground_truth, ground_truth_file_name, sample_file_name, write_sample_file
from .fold_change import downshift, get_fold_change, sample_abundance
from .sampling import RandomStream

CASE = "case"
CONTROL = "control"
SAMPLE_TYPES = (CASE, CONTROL)


@dataclass(frozen=True)
class GeneratedRow:
    """Header line with simulated abundance plus the protein's body lines."""

    header_line: str
    body_lines: Tuple[str, ...]
    abundance: float


def build_sample_assignment(num_case: int, num_control: int) -> List[Tuple[int, str]]:
    """Numbered sample types, case samples first: [(0, 'case'), ..., (n-1, 'control')]"""
    return [(n, CASE) for n in range(num_case)] + [
        (num_case + n, CONTROL) for n in range(num_control)
    ]


def simulate_protein_abundance(
    entry: ProteinEntry,
    rate: float,
    config: SimulationConfig,
    max_abundance: float,
    rng: RandomStream,
) -> float:
    """Fold change -> downshift -> resampled abundance for one protein row."""
    fold_change = get_fold_change(entry.abundances, rate, max_abundance, rng)
    fold_change = downshift(
        fold_change,
        config.downshift_min_threshold,
        config.downshift_probability_threshold,
        config.downshift_amount,
        rng=rng,
    )
    return sample_abundance(entry.abundances, fold_change, rng)


def generate_sample_rows(
    entries: Sequence[ProteinEntry],
    sample_type: str,
    plan: DifferentialExpressionPlan,
    config: SimulationConfig,
    max_abundance: float,
    rng: RandomStream,
) -> Iterator[GeneratedRow]:
    """
    Yield one simulated row per protein, in input order.

    Parameters:
    -----------
    entries : Sequence[ProteinEntry]
        Template proteins
    sample_type : str
        'case' or 'control'
    plan : DifferentialExpressionPlan
        Proteins that use case_variance in case samples
    config : SimulationConfig
        Simulation parameters
    max_abundance : float
        Largest template abundance of the file
    rng : RandomStream
        Random source
    """
    if sample_type not in SAMPLE_TYPES:
        raise ValueError(f"sample_type must be one of {SAMPLE_TYPES}, got {sample_type!r}")

    for idx, entry in enumerate(entries):
        rate = config.variance_for(sample_type, plan.is_selected(idx))
        abundance = simulate_protein_abundance(entry, rate, config, max_abundance, rng)
        yield GeneratedRow(
            header_line=f"{entry.header_text}{config.output_abundance_separator}{abundance}",
            body_lines=entry.body_lines,
            abundance=abundance,
        )


def process_file(
    filename: str,
    config: Optional[SimulationConfig] = None,
    rng: Optional[RandomStream] = None,
    output_dir: Optional[str] = None,
    ground_truth: bool = False,
    verbose: bool = True,
) -> Dict[str, List[str]]:
    """
    Generate every case and control sample for one template file.

    Parameters:
    -----------
    filename : str
        Template FASTA-like file
    config : SimulationConfig, optional
        Defaults to SimulationConfig()
    rng : RandomStream, optional
        Defaults to a stream seeded with config.random_seed
    output_dir : str, optional
        Where sample files are written (default: next to the input)
    ground_truth : bool
        Also write <basename>_ground_truth.csv
    verbose : bool
        Print progress

    Returns:
    --------
    Dict[str, List[str]] : {'case': [paths], 'control': [paths]}
    """
    config = config if config is not None else SimulationConfig()
    rng = rng if rng is not None else RandomStream(config.random_seed)

    entries, max_abundance = load_protein_entries(filename)
    if verbose:
        print(f"✓ Loaded {len(entries)} proteins from {filename} (max abundance {max_abundance})")

    plan = select_differentially_expressed(len(entries), config.pct_diff_express, rng)
    if verbose:
        print(f"  Differentially expressed proteins: {plan.num_selected}")

    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)

    outputs = {CASE: [], CONTROL: []}
    assignment = build_sample_assignment(config.num_case, config.num_control)
    for sample_number, sample_type in assignment:
        path = sample_file_name(filename, sample_number, sample_type, output_dir)
        if verbose:
            print(f"Creating sample {sample_number + 1} of {len(assignment)}: {path}")
        rows = generate_sample_rows(entries, sample_type, plan, config, max_abundance, rng)
        write_sample_file(path, rows)
        outputs[sample_type].append(path)

    if ground_truth:
        export_ground_truth(entries, plan, ground_truth_file_name(filename, output_dir), verbose=verbose)

    if verbose:
        print(f"✓ {filename}: {len(outputs[CASE])} case and {len(outputs[CONTROL])} control samples written")

    return outputs


def process_files(
    filenames: Sequence[str],
    config: Optional[SimulationConfig] = None,
    rng: Optional[RandomStream] = None,
    output_dir: Optional[str] = None,
    ground_truth: bool = False,
    verbose: bool = True,
) -> Dict[str, Dict[str, List[str]]]:
    """
    Run process_file for each template, sharing one random stream.

    Returns:
    --------
    Dict[str, Dict[str, List[str]]] : input filename -> {case: [...], control: [...]}
    """
    config = config if config is not None else SimulationConfig()
    rng = rng if rng is not None else RandomStream(config.random_seed)

    summary = {}
    for filename in filenames:
        summary[filename] = process_file(
            filename,
            config=config,
            rng=rng,
            output_dir=output_dir,
            ground_truth=ground_truth,
            verbose=verbose,
        )
    return summary
