"""
Group-level summaries of profiled peptides.

Peptides are usually compared by where they came from (for example the
generator that proposed them). These helpers reduce a list of
``PeptideRecord`` objects to per-group averages, residue composition and
length distributions.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import numpy as np

from peptidescope.core.models import PeptideRecord
from peptidescope.core.sequence import AMINO_ACIDS

DEFAULT_GROUP = "all"

GroupKey = Callable[[PeptideRecord], str]


def by_source(record: PeptideRecord) -> str:
    """Group peptides by their provenance label."""
    return record.source or DEFAULT_GROUP


@dataclass
class GroupSummary:
    """Mean physicochemical properties of one group of peptides."""
    count: int
    mean_isoelectric_point: float
    mean_hydrophobicity: float
    mean_molecular_weight: float
    mean_length: float
    mean_consensus: Optional[float] = None
    n_scored: int = 0


def _group(records: Iterable[PeptideRecord], key: GroupKey) -> dict[str, list[PeptideRecord]]:
    groups: dict[str, list[PeptideRecord]] = defaultdict(list)
    for record in records:
        groups[key(record)].append(record)
    return dict(groups)


def summarize(
    records: Iterable[PeptideRecord],
    key: GroupKey = by_source,
) -> dict[str, GroupSummary]:
    """
    Per-group means of pI, hydrophobicity, molecular weight and length.

    The mean consensus only covers peptides with a known score; it is None
    for a group in which no peptide was scored.
    """
    summaries = {}
    for name, members in _group(records, key).items():
        scored = [r.consensus_score for r in members if r.consensus_score is not None]
        summaries[name] = GroupSummary(
            count=len(members),
            mean_isoelectric_point=float(np.mean([r.profile.isoelectric_point for r in members])),
            mean_hydrophobicity=float(np.mean([r.profile.hydrophobicity for r in members])),
            mean_molecular_weight=float(np.mean([r.profile.molecular_weight for r in members])),
            mean_length=float(np.mean([r.length for r in members])),
            mean_consensus=float(np.mean(scored)) if scored else None,
            n_scored=len(scored),
        )
    return summaries


def composition_by_group(
    records: Iterable[PeptideRecord],
    key: GroupKey = by_source,
) -> dict[str, dict[str, float]]:
    """
    Residue composition (percent of all residues) for each group.

    Groups whose peptides are all empty report 0 for every residue.
    """
    result = {}
    for name, members in _group(records, key).items():
        total = sum(r.length for r in members)
        counts = Counter()
        for record in members:
            counts.update(record.sequence)
        result[name] = {
            aa: (counts[aa] / total * 100 if total > 0 else 0.0)
            for aa in AMINO_ACIDS
        }
    return result


def length_distribution(
    records: Iterable[PeptideRecord],
    key: GroupKey = by_source,
) -> dict[str, dict[int, int]]:
    """Number of peptides of each length, per group, lengths ascending."""
    result = {}
    for name, members in _group(records, key).items():
        counts = Counter(r.length for r in members)
        result[name] = dict(sorted(counts.items()))
    return result


__all__ = [
    "GroupSummary",
    "by_source",
    "summarize",
    "composition_by_group",
    "length_distribution",
]
