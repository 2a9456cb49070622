"""
Core data structures and utilities for peptidescope.

Modules:
    models: Pydantic records for profiles, model scores and consensus
    sequence: Alphabet, FASTA parsing, validation and composition
"""

from .models import (
    ConsensusResult,
    ModelName,
    ModelScoreSet,
    PeptideRecord,
    SequenceProfile,
)
from .sequence import (
    AMINO_ACIDS,
    STANDARD_AA,
    SequenceError,
    SequenceValidator,
    calculate_composition,
    canonical_count,
    clean_sequence,
    non_canonical_residues,
    parse_fasta,
    sequence_hash,
)

__all__ = [
    # Models
    "SequenceProfile",
    "ModelName",
    "ModelScoreSet",
    "ConsensusResult",
    "PeptideRecord",
    # Sequence utilities
    "SequenceValidator",
    "SequenceError",
    "parse_fasta",
    "sequence_hash",
    "clean_sequence",
    "canonical_count",
    "non_canonical_residues",
    "calculate_composition",
    "AMINO_ACIDS",
    "STANDARD_AA",
]
