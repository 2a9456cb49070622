"""
peptidescope: physicochemical profiling and consensus scoring of peptides.

This package turns raw amino-acid sequences, such as those proposed by a
peptide generator, into records that can be tabulated, filtered and
exported. Two pure computations feed those records:

    - A physicochemical profile per sequence: molecular weight, mean
      Eisenberg hydrophobicity, net charge at pH 7.0, isoelectric point
      and Boman index.
    - A consensus over up to five activity classifiers, which keeps a
      missing prediction distinct from a prediction of zero.

Key components:
    - core: Data models and sequence utilities
    - properties: Residue tables, charge model, pI solver, profiler
    - consensus: Consensus scorer and prediction payload mapping
    - analysis: Group-level summaries
    - filters: Score, length and residue filters
    - cli: Command-line interface

Basic usage:
    >>> from peptidescope import profile, consensus
    >>> p = profile("GIGKFLHSAKKFGKAFVGEIMNS")
    >>> print(f"MW {p.molecular_weight:.1f} Da, pI {p.isoelectric_point:.2f}")
    >>> consensus({"xgboost": 80}).consensus_score
    0.8
    >>> consensus({}).display()
    'unknown'

License: MIT
"""

__version__ = "0.1.0"

from typing import Iterable, Mapping, Optional

from .consensus import (
    ConsensusConfig,
    ConsensusScorer,
    ScoreError,
    consensus,
    scores_by_sequence,
    scores_from_prediction,
)
from .core.models import (
    ConsensusResult,
    ModelName,
    ModelScoreSet,
    PeptideRecord,
    SequenceProfile,
)
from .core.sequence import SequenceError, parse_fasta, sequence_hash
from .filters import FilterCriteria, filter_records
from .properties import (
    PhysicochemicalProfiler,
    ProfilerConfig,
    isoelectric_point,
    net_charge,
)


def profile(sequence: str) -> SequenceProfile:
    """
    Physicochemical profile of one sequence with the default configuration.

    Example:
        >>> p = profile("ACDEFGHIKLMNPQRSTVWY")
        >>> p.length
        20
    """
    return PhysicochemicalProfiler().profile(sequence)


def build_records(
    sequences: Iterable[tuple[str, str]],
    scores: Optional[Mapping[str, ModelScoreSet]] = None,
    source: Optional[str] = None,
    profiler: Optional[PhysicochemicalProfiler] = None,
    scorer: Optional[ConsensusScorer] = None,
    max_workers: Optional[int] = None,
) -> list[PeptideRecord]:
    """
    Profile sequences and attach their consensus, if any scores are known.

    Args:
        sequences: (id, sequence) pairs; an empty id is replaced by a
            hash-derived one
        scores: Model scores keyed by upper-case sequence. None means the
            prediction service was not consulted, so no record carries a
            consensus; a mapping without an entry for a sequence gives that
            record an unknown consensus.
        source: Provenance label stored on every record
        profiler: Profiler to use (default configuration if None)
        scorer: Consensus scorer to use (default configuration if None)
        max_workers: Thread pool size for profiling

    Returns:
        One PeptideRecord per input pair, in input order
    """
    profiler = profiler or PhysicochemicalProfiler()
    scorer = scorer or ConsensusScorer()

    pairs = list(sequences)
    profiles = profiler.profile_batch([seq for _, seq in pairs], max_workers=max_workers)

    records = []
    for (seq_id, _), seq_profile in zip(pairs, profiles):
        result = None
        if scores is not None:
            result = scorer.score(scores.get(seq_profile.sequence, ModelScoreSet()))
        records.append(PeptideRecord(
            id=seq_id or f"pep-{sequence_hash(seq_profile.sequence)[:8]}",
            profile=seq_profile,
            consensus=result,
            source=source,
        ))
    return records


__all__ = [
    # Version
    "__version__",
    # Main functions
    "profile",
    "consensus",
    "build_records",
    # Models
    "SequenceProfile",
    "ModelName",
    "ModelScoreSet",
    "ConsensusResult",
    "PeptideRecord",
    # Properties
    "PhysicochemicalProfiler",
    "ProfilerConfig",
    "net_charge",
    "isoelectric_point",
    # Consensus
    "ConsensusScorer",
    "ConsensusConfig",
    "ScoreError",
    "scores_from_prediction",
    "scores_by_sequence",
    # Sequence utilities
    "SequenceError",
    "parse_fasta",
    "sequence_hash",
    # Filtering
    "FilterCriteria",
    "filter_records",
]
