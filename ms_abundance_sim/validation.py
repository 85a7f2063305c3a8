"""
Validation Module for MS Abundance Simulator

Exceptions raised by the simulator and the checks that reject a bad
configuration before any random draw is made.
"""

import math
from typing import Any, Dict, List


class ConfigurationError(ValueError):
    """Custom exception for invalid simulation options."""
    def __init__(self, message):
        super().__init__(message)


class MalformedInputError(Exception):
    """Custom exception for FASTA-like input that cannot be parsed."""
    def __init__(self, message, filename=None, line_number=None):
        self.filename = filename
        self.line_number = line_number
        location = ""
        if filename is not None:
            location = f"{filename}"
            if line_number is not None:
                location += f":{line_number}"
            location += ": "
        super().__init__(f"{location}{message}")


class DistributionSearchError(RuntimeError):
    """Raised when the inverse-transform search finds no candidate.

    This is an internal invariant violation (usually a pathological rate),
    never a condition to be defaulted away.
    """
    def __init__(self, rate, target, num_candidates):
        self.rate = rate
        self.target = target
        self.num_candidates = num_candidates
        super().__init__(
            f"Inverse-transform search exhausted {num_candidates} candidates "
            f"for rate={rate!r} (target probability {target!r})"
        )


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def check_simulation_options(options: Dict[str, Any]) -> List[str]:
    """
    Collect every problem with a set of simulation options.

    Parameters:
    -----------
    options : Dict[str, Any]
        Option name -> value, as held by SimulationConfig

    Returns:
    --------
    List[str] : Human readable problems (empty when the options are valid)
    """
    errors = []

    for name in ("num_control", "num_case"):
        value = options[name]
        if not _is_integer(value) or value < 0:
            errors.append(f"{name} must be a non-negative integer, got {value!r}")

    pct = options["pct_diff_express"]
    if not _is_real(pct) or not 0 <= pct <= 100:
        errors.append(f"pct_diff_express must be between 0 and 100, got {pct!r}")

    for name in ("control_variance", "case_variance"):
        value = options[name]
        if not _is_real(value) or value <= 0:
            errors.append(f"{name} must be a positive number, got {value!r}")

    probability = options["downshift_probability_threshold"]
    if not _is_real(probability) or not 0 <= probability <= 1:
        errors.append(
            f"downshift_probability_threshold must be between 0 and 1, got {probability!r}"
        )

    for name in ("downshift_min_threshold", "downshift_amount"):
        if not _is_real(options[name]):
            errors.append(f"{name} must be a finite number, got {options[name]!r}")

    if not isinstance(options["output_abundance_separator"], str):
        errors.append("output_abundance_separator must be a string")

    seed = options.get("random_seed")
    if seed is not None and (not _is_integer(seed) or seed < 0):
        errors.append(f"random_seed must be a non-negative integer, got {seed!r}")

    return errors


def validate_simulation_options(options: Dict[str, Any]) -> None:
    """Raise ConfigurationError listing every invalid option."""
    errors = check_simulation_options(options)
    if errors:
        raise ConfigurationError(
            "Invalid simulation configuration:\n  " + "\n  ".join(errors)
        )
