"""
Tests for validation module
"""

import pytest

from ms_abundance_sim.config import DEFAULTS
from ms_abundance_sim.validation import (
    ConfigurationError,
    DistributionSearchError,
    MalformedInputError,
    check_simulation_options,
    validate_simulation_options,
)


class TestExceptions:
    """Test exception messages and attributes"""

    def test_malformed_input_location(self):
        error = MalformedInputError("bad header", "plasma.fasta", 12)
        assert str(error) == "plasma.fasta:12: bad header"
        assert error.filename == "plasma.fasta"
        assert error.line_number == 12

    def test_malformed_input_without_line(self):
        assert str(MalformedInputError("no protein records found", "x.fasta")) == "x.fasta: no protein records found"

    def test_malformed_input_without_location(self):
        assert str(MalformedInputError("bad")) == "bad"

    def test_distribution_search_error(self):
        error = DistributionSearchError(0.5, 0.9, 3)
        assert isinstance(error, RuntimeError)
        assert error.rate == 0.5
        assert error.num_candidates == 3
        assert "3 candidates" in str(error)

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


class TestCheckSimulationOptions:
    """Test option checks"""

    def test_defaults_pass(self):
        assert check_simulation_options(dict(DEFAULTS)) == []
        validate_simulation_options(dict(DEFAULTS))

    def test_bool_is_not_a_count(self):
        options = dict(DEFAULTS, num_case=True)
        assert any("num_case" in e for e in check_simulation_options(options))

    def test_non_finite_threshold(self):
        options = dict(DEFAULTS, downshift_min_threshold=float("inf"))
        assert any("downshift_min_threshold" in e for e in check_simulation_options(options))

    def test_separator_must_be_string(self):
        options = dict(DEFAULTS, output_abundance_separator=3)
        assert check_simulation_options(options) == ["output_abundance_separator must be a string"]

    def test_every_error_in_message(self):
        options = dict(DEFAULTS, num_control=-2, case_variance=0.0, random_seed=-1)
        with pytest.raises(ConfigurationError) as excinfo:
            validate_simulation_options(options)
        message = str(excinfo.value)
        for name in ["num_control", "case_variance", "random_seed"]:
            assert name in message
