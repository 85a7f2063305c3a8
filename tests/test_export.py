"""
Tests for export module
"""

import os
import runpy

import pandas as pd
import yaml

from ms_abundance_sim.config import SimulationConfig
from ms_abundance_sim.data_import import load_protein_entries
from ms_abundance_sim.differential_expression import DifferentialExpressionPlan
from ms_abundance_sim.export import (
    create_ground_truth_table,
    export_ground_truth,
    export_summary_yaml,
    export_timestamped_config,
    ground_truth_file_name,
    sample_file_name,
    write_sample_file,
)
from ms_abundance_sim.simulation import GeneratedRow


class TestFileNames:
    """Test output naming"""

    def test_sample_file_name_next_to_input(self):
        assert sample_file_name("data/plasma.fasta", 3, "case") == os.path.join("data", "plasma_3_case")

    def test_sample_file_name_in_output_dir(self):
        assert sample_file_name("data/plasma.fasta", 7, "control", "out") == os.path.join("out", "plasma_7_control")

    def test_input_without_extension(self):
        assert sample_file_name("plasma", 0, "case") == "plasma_0_case"

    def test_ground_truth_file_name(self):
        assert ground_truth_file_name("data/plasma.fasta") == os.path.join("data", "plasma_ground_truth.csv")


class TestWriteSampleFile:
    """Test the sample writer"""

    def test_writes_rows(self, tmp_path):
        rows = [
            GeneratedRow(">A #1.5", ("SEQ1", "SEQ2"), 1.5),
            GeneratedRow(">B #2.5", (), 2.5),
        ]
        path = str(tmp_path / "x_0_case")
        assert write_sample_file(path, rows) == 2
        with open(path, encoding="utf-8") as f:
            assert f.read() == ">A #1.5\nSEQ1\nSEQ2\n>B #2.5\n"

    def test_accepts_generator(self, tmp_path):
        path = str(tmp_path / "x_1_case")
        rows = (GeneratedRow(f">P{i} #{i}", (), float(i)) for i in range(3))
        assert write_sample_file(path, rows) == 3


class TestSummaryYaml:
    """Test the YAML summary"""

    def test_round_trip(self, tmp_path):
        summary = {
            "test.fasta": {"case": ["test_0_case", "test_1_case"], "control": ["test_2_control"]},
        }
        output_file = str(tmp_path / "summary.yml")
        text = export_summary_yaml(summary, output_file)

        assert yaml.safe_load(text) == summary
        with open(output_file, encoding="utf-8") as f:
            assert yaml.safe_load(f) == summary

    def test_preserves_key_order(self):
        summary = {"b.fasta": {"case": [], "control": []}, "a.fasta": {"case": [], "control": []}}
        text = export_summary_yaml(summary)
        assert text.index("b.fasta") < text.index("a.fasta")
        assert text.index("case") < text.index("control")


class TestGroundTruth:
    """Test the ground truth table"""

    def test_table(self, test_fasta):
        entries, _ = load_protein_entries(test_fasta)
        plan = DifferentialExpressionPlan(len(entries), frozenset({0, 4}), {0: 1, 4: -1})
        table = create_ground_truth_table(entries, plan)

        assert list(table.columns) == ["Protein_Index", "Protein", "Base_Abundance", "Num_Abundances", "DiffExpressed"]
        assert len(table) == 10
        assert table["DiffExpressed"].tolist() == [i in (0, 4) for i in range(10)]
        assert table.loc[2, "Base_Abundance"] == 980.0
        assert table.loc[2, "Num_Abundances"] == 3

    def test_export(self, test_fasta, tmp_path):
        entries, _ = load_protein_entries(test_fasta)
        plan = DifferentialExpressionPlan(len(entries), frozenset({3}), {3: 1})
        output_file = export_ground_truth(entries, plan, str(tmp_path / "truth.csv"))

        table = pd.read_csv(output_file)
        assert table["DiffExpressed"].sum() == 1
        assert table.loc[table["DiffExpressed"], "Protein_Index"].tolist() == [3]

    def test_quiet_export(self, test_fasta, tmp_path, capsys):
        entries, _ = load_protein_entries(test_fasta)
        plan = DifferentialExpressionPlan(len(entries))
        export_ground_truth(entries, plan, str(tmp_path / "truth.csv"), verbose=False)
        assert capsys.readouterr().out == ""


class TestTimestampedConfig:
    """Test the configuration record"""

    def test_config_file_is_valid_python(self, tmp_path):
        config = SimulationConfig.from_overrides(num_case=3, random_seed=42, output_abundance_separator="\t")
        config_file = export_timestamped_config(
            config,
            output_prefix=str(tmp_path / "run"),
            input_files=["plasma.fasta"],
            computed_values={"proteins": 10},
        )

        assert os.path.basename(config_file).startswith("run_config_")
        assert config_file.endswith(".py")

        namespace = runpy.run_path(config_file)
        assert namespace["num_case"] == 3
        assert namespace["random_seed"] == 42
        assert namespace["output_abundance_separator"] == "\t"
        assert namespace["input_files"] == ["plasma.fasta"]
        assert namespace["pct_diff_express"] == 3.0

        with open(config_file, encoding="utf-8") as f:
            text = f.read()
        assert "# proteins: 10" in text
        assert "DOWNSHIFT" in text

    def test_quiet_export(self, tmp_path, capsys):
        config_file = export_timestamped_config(SimulationConfig(), output_prefix=str(tmp_path / "q"), verbose=False)
        assert os.path.exists(config_file)
        assert capsys.readouterr().out == ""
