"""
Filtering of profiled peptides by score, length and excluded residues.

The consensus score may be unknown. An unknown score is not 0, so it is
never compared against the threshold: with no score constraint
(``min_score == 0``) unscored peptides pass, and with a positive threshold
they pass only when ``keep_unscored`` is set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .core.models import PeptideRecord

logger = logging.getLogger(__name__)


@dataclass
class FilterCriteria:
    """
    Constraints applied to a set of peptides.

    Attributes:
        min_score: Minimum consensus score in [0, 1]
        min_length: Minimum sequence length (inclusive)
        max_length: Maximum sequence length (inclusive, no limit if None)
        excluded_residues: Peptides containing any of these are dropped
        keep_unscored: Keep peptides with unknown consensus when min_score > 0
    """
    min_score: float = 0.0
    min_length: int = 0
    max_length: Optional[int] = None
    excluded_residues: frozenset[str] = field(default_factory=frozenset)
    keep_unscored: bool = True

    def __post_init__(self):
        if not 0.0 <= self.min_score <= 1.0:
            raise ValueError(f"min_score must be in [0, 1], got {self.min_score}")
        if self.max_length is not None and self.max_length < self.min_length:
            raise ValueError(
                f"max_length ({self.max_length}) is below min_length ({self.min_length})"
            )
        self.excluded_residues = frozenset(aa.upper() for aa in self.excluded_residues)


def passes(record: PeptideRecord, criteria: FilterCriteria) -> bool:
    """Whether one peptide satisfies every constraint."""
    if record.length < criteria.min_length:
        return False
    if criteria.max_length is not None and record.length > criteria.max_length:
        return False
    if criteria.excluded_residues & set(record.sequence):
        return False

    score = record.consensus_score
    if score is None:
        return criteria.min_score == 0.0 or criteria.keep_unscored
    return score >= criteria.min_score


def filter_records(
    records: Iterable[PeptideRecord],
    criteria: FilterCriteria,
) -> list[PeptideRecord]:
    """Peptides satisfying the criteria, in input order."""
    records = list(records)
    kept = [r for r in records if passes(r, criteria)]
    logger.debug(f"Filter kept {len(kept)}/{len(records)} peptide(s)")
    return kept
