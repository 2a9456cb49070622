"""
Sequence handling utilities for peptidescope.

The property engine never rejects a sequence: characters outside the twenty
canonical codes are simply zero-weighted. This module provides the pieces
around that engine that do care about sequence quality, namely reading
peptides from FASTA, reporting non-canonical residues, and computing
residue composition.
"""

from __future__ import annotations

import hashlib
import logging
from io import StringIO
from pathlib import Path
from typing import Iterator, Optional, TextIO, Union

from Bio import SeqIO

logger = logging.getLogger(__name__)


# Standard amino acid alphabet, in the order used for tables and composition
AMINO_ACIDS = "ACDEFGHIKLMNPQRSTVWY"
STANDARD_AA = frozenset(AMINO_ACIDS)

# Ambiguous or non-standard IUPAC codes that may appear in generated sets
AMBIGUOUS_AA = frozenset("BXZJUO")


class SequenceError(Exception):
    """Exception raised for sequence-related errors."""
    pass


def clean_sequence(sequence: str) -> str:
    """Upper-case a sequence and drop whitespace."""
    return "".join(sequence.split()).upper()


def non_canonical_residues(sequence: str) -> list[str]:
    """
    Characters in the sequence that are not canonical amino acids.

    Returned sorted and without duplicates.
    """
    return sorted(set(sequence) - STANDARD_AA)


def canonical_count(sequence: str) -> int:
    """Number of positions holding one of the 20 canonical residues."""
    return sum(1 for aa in sequence if aa in STANDARD_AA)


class SequenceValidator:
    """
    Checks peptide sequences before they are handed to downstream tools.

    The profiler accepts anything; this validator is for callers that want
    to know when a generated peptide carries unexpected characters or falls
    outside the length range their pipeline expects.
    """

    def __init__(
        self,
        allow_ambiguous: bool = False,
        min_length: int = 1,
        max_length: Optional[int] = None,
    ):
        """
        Args:
            allow_ambiguous: Accept ambiguous codes (B, X, Z, J, U, O)
            min_length: Minimum sequence length
            max_length: Maximum sequence length (no limit if None)
        """
        self.allow_ambiguous = allow_ambiguous
        self.min_length = min_length
        self.max_length = max_length

        self.allowed_chars = set(STANDARD_AA)
        if allow_ambiguous:
            self.allowed_chars |= AMBIGUOUS_AA

    def validate(self, sequence: str) -> tuple[bool, list[str]]:
        """
        Validate a sequence and return status with error messages.

        Returns:
            Tuple of (is_valid, list_of_error_messages)
        """
        errors = []
        seq = clean_sequence(sequence)

        if len(seq) < self.min_length:
            errors.append(f"Sequence too short: {len(seq)} < {self.min_length}")

        if self.max_length is not None and len(seq) > self.max_length:
            errors.append(f"Sequence too long: {len(seq)} > {self.max_length}")

        invalid_chars = set(seq) - self.allowed_chars
        if invalid_chars:
            errors.append(f"Invalid characters: {sorted(invalid_chars)}")

        return len(errors) == 0, errors


def parse_fasta(
    source: Union[str, Path, TextIO],
    validator: Optional[SequenceValidator] = None,
) -> Iterator[tuple[str, str]]:
    """
    Parse peptide sequences from FASTA format.

    Args:
        source: File path, FASTA-formatted string, or an open text handle
        validator: If given, every record must pass it

    Yields:
        Tuples of (record id, cleaned upper-case sequence)

    Raises:
        SequenceError: If a record fails validation
    """
    close_handle = False
    if isinstance(source, Path):
        handle = open(source, "r")
        close_handle = True
    elif isinstance(source, str):
        if source.lstrip().startswith(">"):
            handle = StringIO(source)
        else:
            handle = open(source, "r")
            close_handle = True
    else:
        handle = source

    try:
        for record in SeqIO.parse(handle, "fasta"):
            seq = clean_sequence(str(record.seq))

            if validator is not None:
                is_valid, errors = validator.validate(seq)
                if not is_valid:
                    raise SequenceError(
                        f"Sequence '{record.id}' failed validation: {'; '.join(errors)}"
                    )

            yield record.id, seq
    finally:
        if close_handle:
            handle.close()


def sequence_hash(sequence: str) -> str:
    """
    Stable identifier for a sequence.

    Used to derive record ids for peptides that arrive without one.
    """
    return hashlib.md5(clean_sequence(sequence).encode()).hexdigest()


def calculate_composition(sequence: str) -> dict[str, float]:
    """
    Amino acid composition as fractions of the full sequence length.

    Non-canonical characters count toward the length, so the fractions sum
    to less than one when any are present.
    """
    total = len(sequence)

    if total == 0:
        return {aa: 0.0 for aa in AMINO_ACIDS}

    return {aa: sequence.count(aa) / total for aa in AMINO_ACIDS}
