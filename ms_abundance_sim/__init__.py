"""
MS Abundance Simulator
======================

Generates simulated mass spectrometry protein-abundance datasets from a
template FASTA-like file. Each template protein carries one or more
abundances on its header line; the simulator writes several "case" and
"control" sample files whose abundances are perturbed by a Poisson-driven
fold-change model, with a chosen percentage of proteins differentially
expressed between the two groups. The result is a ground-truth-labeled
dataset for validating downstream proteomics and statistics tools.

QUICK START EXAMPLE:
-------------------
    import ms_abundance_sim as mas

    # 1. Configure (defaults merged with overrides)
    config = mas.SimulationConfig.from_overrides(num_case=5, num_control=5, random_seed=67809)

    # 2. Generate samples for one or more templates
    summary = mas.process_files(['plasma.fasta'], config=config, ground_truth=True)

    # 3. Save the summary of generated files
    mas.export_summary_yaml(summary, 'summary.yml')

    # 4. Check how well a Welch t-test recovers the simulated signal
    matrix, groups = mas.build_sample_matrix(summary['plasma.fasta'])
    results = mas.run_case_control_t_test(matrix, groups)

MODULE OVERVIEW:
===============

sampling
    Purpose: Random source and Poisson inverse-transform sampler
    Key functions: RandomStream, poisson(), inverse_transform_sample()

fold_change
    Purpose: Fold change model, downshift policy and abundance resampling
    Key functions: get_fold_change(), downshift(), sample_abundance()

differential_expression
    Purpose: Choose which proteins are differentially expressed per file
    Key functions: select_differentially_expressed(), DifferentialExpressionPlan

simulation
    Purpose: Generate case and control samples for template files
    Key functions: process_file(), process_files(), generate_sample_rows()

config / validation
    Purpose: Simulation parameters and the errors raised for bad input
    Key functions: SimulationConfig, ConfigurationError, MalformedInputError

data_import / export
    Purpose: Read templates and generated samples, write samples and records
    Key functions: load_protein_entries(), export_summary_yaml(), export_ground_truth()

statistical_analysis / visualization
    Purpose: Check and plot the simulated differential expression
    Key functions: run_case_control_t_test(), evaluate_differential_recovery(), plot_volcano()

ERROR HANDLING:
==============
- ConfigurationError: Invalid options, raised before any sampling
- MalformedInputError: Template file cannot be parsed
- DistributionSearchError: Poisson search found no candidate (pathological rate)
"""

from . import sampling                  # Random source and Poisson sampler
from . import fold_change               # Fold change, downshift, resampling
from . import differential_expression   # Differential expression selection
from . import simulation                # Sample generation
from . import config                    # Simulation parameters
from . import validation                # Exceptions and option checks
from . import data_import               # Template and sample file reading
from . import export                    # Sample files, summaries and records
from . import statistical_analysis      # Ground truth recovery checks
from . import visualization             # QC plots

__version__ = "0.1.0"

# CORE ENGINE
from .sampling import RandomStream, poisson, inverse_transform_sample
from .fold_change import get_fold_change, get_fold_change_clean, downshift, sample_abundance
from .differential_expression import DifferentialExpressionPlan, select_differentially_expressed

# SIMULATION
from .simulation import (
    build_sample_assignment,
    generate_sample_rows,
    process_file,            # Main function: all samples for one template
    process_files,           # Main function: all samples for many templates
)
from .config import SimulationConfig, DEFAULTS

# DATA IMPORT / EXPORT
from .data_import import ProteinEntry, load_protein_entries, read_sample_abundances
from .export import export_summary_yaml, export_ground_truth, export_timestamped_config

# DOWNSTREAM CHECKS
from .statistical_analysis import (
    build_sample_matrix,
    run_case_control_t_test,
    evaluate_differential_recovery,
    display_recovery_summary,
)
from .visualization import plot_box_plot, plot_volcano

# ERRORS
from .validation import ConfigurationError, MalformedInputError, DistributionSearchError

__all__ = [
    # MODULES
    "sampling",
    "fold_change",
    "differential_expression",
    "simulation",
    "config",
    "validation",
    "data_import",
    "export",
    "statistical_analysis",
    "visualization",

    # CORE ENGINE
    "RandomStream",
    "poisson",
    "inverse_transform_sample",
    "get_fold_change",
    "get_fold_change_clean",
    "downshift",
    "sample_abundance",
    "DifferentialExpressionPlan",
    "select_differentially_expressed",

    # SIMULATION
    "build_sample_assignment",
    "generate_sample_rows",
    "process_file",
    "process_files",
    "SimulationConfig",
    "DEFAULTS",

    # DATA IMPORT / EXPORT
    "ProteinEntry",
    "load_protein_entries",
    "read_sample_abundances",
    "export_summary_yaml",
    "export_ground_truth",
    "export_timestamped_config",

    # DOWNSTREAM CHECKS
    "build_sample_matrix",
    "run_case_control_t_test",
    "evaluate_differential_recovery",
    "display_recovery_summary",
    "plot_box_plot",
    "plot_volcano",

    # ERRORS
    "ConfigurationError",
    "MalformedInputError",
    "DistributionSearchError",
]
