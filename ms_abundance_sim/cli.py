#!/usr/bin/env python3
"""
ms-abundance-sim command line entry point.

Reads one or more template files and writes <file>_<n>_<case|control>
samples for each, then prints (or saves) a YAML summary of what was written.
"""

import argparse
import contextlib
import sys

from .config import DEFAULTS, SimulationConfig
from .export import export_summary_yaml, export_timestamped_config
from .simulation import process_files
from .validation import ConfigurationError, DistributionSearchError, MalformedInputError

DESCRIPTION = """\
output: <file>_<n>_<case|control>

The file must have one or more abundances per protein entry (the protein
sequence following the header line is optional). The abundance is placed at
the end of the line following a ' #', with multiple abundances separated
with a ','. Here are two examples:

> SWISSAB|23B The anchor protein #23.2
> SWISSSPECIAL|24B A green protein #23.2,29.4

notes: Protein sequences are optional and files need not end in '.fasta'
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ms-abundance-sim",
        usage="%(prog)s [options] <file>.fasta ...",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("filenames", nargs="+", metavar="FILE", help="template FASTA-like file(s)")

    group = parser.add_argument_group("simulation")
    group.add_argument("--num-control", type=int, default=None,
                       help=f"how many control samples to generate (default {DEFAULTS['num_control']})")
    group.add_argument("--num-case", type=int, default=None,
                       help=f"how many case samples to generate (default {DEFAULTS['num_case']})")
    group.add_argument("--pct-diff-express", "--diff-express-percent", dest="pct_diff_express",
                       type=float, default=None,
                       help="percent of proteins to differentially express between case and control "
                            f"(default {DEFAULTS['pct_diff_express']})")
    group.add_argument("--control-variance", type=float, default=None,
                       help="Variance for control samples (max lambda for Poisson distribution). "
                            "The higher the value, the more fold change will occur among healthy "
                            "populations. Used only when multiple abundances are not provided in the "
                            "template. Not recommended to modify this parameter. "
                            f"(default {DEFAULTS['control_variance']})")
    group.add_argument("--case-variance", type=float, default=None,
                       help="Variance increase for case samples (max lambda for Poisson distribution). "
                            "The higher the value, the more fold change will occur. "
                            f"(default {DEFAULTS['case_variance']})")

    group = parser.add_argument_group("downshift")
    group.add_argument("--downshift-min-threshold", type=float, default=None,
                       help="only fold changes above this value are downshifted "
                            f"(default {DEFAULTS['downshift_min_threshold']})")
    group.add_argument("--downshift-probability-threshold", type=float, default=None,
                       help="probability (0-1) of downshifting an eligible fold change "
                            f"(default {DEFAULTS['downshift_probability_threshold']})")
    group.add_argument("--downshift-amount", type=float, default=None,
                       help=f"amount subtracted from a downshifted fold change (default {DEFAULTS['downshift_amount']})")

    group = parser.add_argument_group("output")
    group.add_argument("--output-abundance-separator", default=None,
                       help=f"text between header and abundance (default {DEFAULTS['output_abundance_separator']!r})")
    group.add_argument("--output-dir", default=None,
                       help="directory for generated samples (default: next to each input)")
    group.add_argument("--seed", dest="random_seed", type=int, default=None,
                       help="random seed for a reproducible run")
    group.add_argument("--summary", default=None,
                       help="write the YAML summary here instead of printing it")
    group.add_argument("--ground-truth", action="store_true",
                       help="also write <file>_ground_truth.csv")
    group.add_argument("--export-config", metavar="PREFIX", default=None,
                       help="write a timestamped <PREFIX>_config_<time>.py record of the run")
    group.add_argument("-q", "--quiet", action="store_true", help="suppress progress output")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    verbose = not args.quiet
    # stdout carries the YAML summary unless --summary names a file
    progress_stream = sys.stdout if args.summary else sys.stderr

    try:
        config = SimulationConfig.from_overrides(
            num_control=args.num_control,
            num_case=args.num_case,
            pct_diff_express=args.pct_diff_express,
            control_variance=args.control_variance,
            case_variance=args.case_variance,
            downshift_min_threshold=args.downshift_min_threshold,
            downshift_probability_threshold=args.downshift_probability_threshold,
            downshift_amount=args.downshift_amount,
            output_abundance_separator=args.output_abundance_separator,
            random_seed=args.random_seed,
        )
        with contextlib.redirect_stdout(progress_stream):
            summary = process_files(
                args.filenames,
                config=config,
                output_dir=args.output_dir,
                ground_truth=args.ground_truth,
                verbose=verbose,
            )
    except (ConfigurationError, MalformedInputError, DistributionSearchError, OSError) as e:
        print(f"ms-abundance-sim: error: {e}", file=sys.stderr)
        return 1

    if args.export_config:
        with contextlib.redirect_stdout(progress_stream):
            export_timestamped_config(
                config, output_prefix=args.export_config, input_files=args.filenames, verbose=verbose
            )

    if args.summary:
        export_summary_yaml(summary, args.summary, verbose=verbose)
    else:
        sys.stdout.write(export_summary_yaml(summary))

    return 0


if __name__ == "__main__":
    sys.exit(main())
