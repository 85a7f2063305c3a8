"""
Configuration for the abundance simulation.

SimulationConfig is built once from DEFAULTS merged with caller overrides and
is never changed afterwards.
"""

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Optional

from .validation import ConfigurationError, validate_simulation_options


DEFAULTS: Dict[str, Any] = {
    "num_control": 5,
    "num_case": 5,
    "pct_diff_express": 3.0,
    "control_variance": 1.0,  # Poisson lambda for control samples
    "case_variance": 2.0,  # Poisson lambda for differentially expressed proteins in cases
    "downshift_min_threshold": 0.0,
    "downshift_probability_threshold": 0.0,  # 0.0 leaves fold changes untouched
    "downshift_amount": 1.0,
    "output_abundance_separator": " #",
    "random_seed": None,
}


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration class for simulation parameters

    Group sizes:
    - num_control / num_case: how many sample files of each type to write

    Differential expression:
    - pct_diff_express: percent of proteins shifted between case and control
    - control_variance / case_variance: Poisson rate (lambda) used for the
      fold change. The higher the value, the more fold change will occur.
      Only used for proteins with a single template abundance.

    Downshift (applied to fold changes):
    - a fold change above downshift_min_threshold is reduced by
      downshift_amount with probability downshift_probability_threshold
    """

    num_control: int = DEFAULTS["num_control"]
    num_case: int = DEFAULTS["num_case"]
    pct_diff_express: float = DEFAULTS["pct_diff_express"]
    control_variance: float = DEFAULTS["control_variance"]
    case_variance: float = DEFAULTS["case_variance"]
    downshift_min_threshold: float = DEFAULTS["downshift_min_threshold"]
    downshift_probability_threshold: float = DEFAULTS["downshift_probability_threshold"]
    downshift_amount: float = DEFAULTS["downshift_amount"]
    output_abundance_separator: str = DEFAULTS["output_abundance_separator"]
    random_seed: Optional[int] = DEFAULTS["random_seed"]

    def __post_init__(self):
        validate_simulation_options(self.to_dict())

    @classmethod
    def from_overrides(cls, **overrides) -> "SimulationConfig":
        """
        Merge caller overrides into DEFAULTS.

        Overrides whose value is None are ignored so that unset command line
        options fall through to the defaults.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(f"Unknown simulation option(s): {unknown}")

        options = dict(DEFAULTS)
        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**options)

    @property
    def num_samples(self) -> int:
        return self.num_case + self.num_control

    def variance_for(self, sample_type: str, differentially_expressed: bool) -> float:
        """Poisson rate for one protein row of one sample."""
        if sample_type == "case" and differentially_expressed:
            return self.case_variance
        return self.control_variance

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
