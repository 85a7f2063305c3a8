"""
Pytest configuration and fixtures for ms_abundance_sim tests
"""

import os
import shutil

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

from ms_abundance_sim.config import SimulationConfig  # noqa: E402
from ms_abundance_sim.sampling import RandomStream  # noqa: E402

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
TEST_SEED = 67809


class ScriptedStream:
    """Random stream returning pre-set draws, for exact arithmetic checks.

    permutation() keeps the ascending order and sample_without_replacement()
    returns the first k indices.
    """

    def __init__(self, uniforms=(), signs=(), integers=()):
        self.uniforms = list(uniforms)
        self.signs = list(signs)
        self.integers = list(integers)

    def next_uniform(self):
        return self.uniforms.pop(0)

    def choose_sign(self):
        return self.signs.pop(0)

    def integer(self, low, high):
        value = self.integers.pop(0)
        assert low <= value <= high
        return value

    def permutation(self, values):
        return np.asarray(values)

    def sample_without_replacement(self, population_size, k):
        return np.arange(k)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedStream"""
    return ScriptedStream


@pytest.fixture
def rng():
    """Seeded random stream"""
    return RandomStream(seed=TEST_SEED)


@pytest.fixture
def default_config():
    """Default simulation configuration"""
    return SimulationConfig()


@pytest.fixture
def test_fasta(tmp_path):
    """Copy of tests/data/test.fasta in a temporary directory (10 proteins)"""
    target = tmp_path / "test.fasta"
    shutil.copy(os.path.join(DATA_DIR, "test.fasta"), target)
    return str(target)


@pytest.fixture
def large_fasta(tmp_path):
    """Template with 200 single-abundance proteins, each with one sequence line"""
    np.random.seed(42)
    abundances = np.round(np.random.lognormal(mean=6, sigma=2, size=200), 3)

    lines = []
    for i, abundance in enumerate(abundances):
        lines.append(f">sp|P{i:05d}|PROT{i}_HUMAN Protein {i} OS=Homo sapiens #{abundance}")
        lines.append("MKWVTFISLLFLFSSAYSRGVFRRDAHKSEVAHRFKDLGEENFKALVLIAFAQYLQQCPF")

    target = tmp_path / "large.fasta"
    target.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(target)


@pytest.fixture
def write_fasta(tmp_path):
    """Factory writing arbitrary template text to a file"""
    def _write(text, name="template.fasta"):
        target = tmp_path / name
        target.write_text(text, encoding="utf-8")
        return str(target)

    return _write
