"""
Data Import Module for MS Abundance Simulator

Functions for loading FASTA-like template files whose header lines carry
one or more protein abundances, e.g.

    > SWISSAB|23B The anchor protein #23.2
    > SWISSSPECIAL|24B A green protein #23.2,29.4
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .validation import MalformedInputError

HEADER_PREFIX = ">"
ABUNDANCE_MARKER = "#"


@dataclass(frozen=True)
class ProteinEntry:
    """One protein record of a template file."""

    header_text: str
    abundances: Tuple[float, ...]
    body_lines: Tuple[str, ...] = field(default_factory=tuple)


def parse_header_abundances(line: str) -> Tuple[str, Tuple[float, ...]]:
    """
    Split a header line into its text and its sorted abundances.

    Handles formats like: > sp|P12345|PROT_HUMAN Name #23.2,29.4

    Parameters:
    -----------
    line : str
        Header line (starting with '>')

    Returns:
    --------
    header_text : str
        Everything before the last '#', trailing whitespace removed
    abundances : Tuple[float, ...]
        Abundances sorted ascending
    """
    if ABUNDANCE_MARKER not in line:
        raise ValueError("header has no '#' abundance annotation")

    header_text, _, annotation = line.rpartition(ABUNDANCE_MARKER)
    values = [part.strip() for part in annotation.split(",")]
    if not any(values):
        raise ValueError("header has an empty abundance annotation")

    abundances = []
    for value in values:
        try:
            abundance = float(value)
        except ValueError:
            raise ValueError(f"could not parse abundance {value!r}") from None
        if not abundance >= 0:  # also rejects nan
            raise ValueError(f"abundance must be non-negative, got {value!r}")
        abundances.append(abundance)

    return header_text.rstrip(), tuple(sorted(abundances))


def load_protein_entries(filename: str) -> Tuple[List[ProteinEntry], float]:
    """
    Load every protein record from a template file.

    Parameters:
    -----------
    filename : str
        Path to the FASTA-like template file

    Returns:
    --------
    entries : List[ProteinEntry]
        Records in file order, the final record included
    max_abundance : float
        Largest abundance across all records
    """
    if not os.path.exists(filename):
        raise FileNotFoundError(f"Template file not found: {filename}")

    entries = []
    header = None
    abundances = ()
    body_lines = []

    with open(filename, "r", encoding="utf-8") as f:
        for line_number, raw_line in enumerate(f, start=1):
            line = raw_line.rstrip("\r\n")

            if line.startswith(HEADER_PREFIX):
                if header is not None:
                    entries.append(ProteinEntry(header, abundances, tuple(body_lines)))
                try:
                    header, abundances = parse_header_abundances(line)
                except ValueError as e:
                    raise MalformedInputError(str(e), filename, line_number) from e
                body_lines = []
            elif header is None:
                if line.strip():
                    raise MalformedInputError(
                        "sequence line found before any '>' header line",
                        filename,
                        line_number,
                    )
            else:
                body_lines.append(line)

    if header is not None:
        entries.append(ProteinEntry(header, abundances, tuple(body_lines)))

    if not entries:
        raise MalformedInputError("no protein records found", filename)

    max_abundance = max(entry.abundances[-1] for entry in entries)
    if max_abundance <= 0:
        raise MalformedInputError("at least one abundance must be positive", filename)

    return entries, max_abundance


def read_sample_abundances(filename: str, separator: str = " #") -> Dict[str, float]:
    """
    Read a generated sample file back as header text -> simulated abundance.

    Parameters:
    -----------
    filename : str
        Path to a generated sample file
    separator : str
        Separator used between header text and abundance when it was written

    Returns:
    --------
    Dict[str, float] : Abundance per protein header, in file order

    Raises:
    -------
    MalformedInputError
        If a header cannot be parsed or repeats an earlier header
    """
    if not separator:
        raise ValueError("separator must not be empty")

    abundances = {}
    with open(filename, "r", encoding="utf-8") as f:
        for line_number, raw_line in enumerate(f, start=1):
            line = raw_line.rstrip("\r\n")
            if not line.startswith(HEADER_PREFIX):
                continue
            header_text, found, value = line.rpartition(separator)
            if not found:
                raise MalformedInputError(
                    f"separator {separator!r} not found in header", filename, line_number
                )
            if header_text in abundances:
                raise MalformedInputError(
                    f"duplicate protein header {header_text!r}", filename, line_number
                )
            try:
                abundances[header_text] = float(value)
            except ValueError as e:
                raise MalformedInputError(
                    f"could not parse abundance {value!r}", filename, line_number
                ) from e

    return abundances
