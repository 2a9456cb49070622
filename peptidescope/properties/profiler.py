"""
Physicochemical profiling of peptide sequences.

The profiler combines the residue tables, the charge model and the
isoelectric point solver into one ``SequenceProfile`` per sequence:

- **Molecular weight**: water plus the sum of residue masses
- **Hydrophobicity**: mean Eisenberg value over canonical residues
- **Net charge**: Henderson-Hasselbalch sum at pH 7.0
- **Isoelectric point**: bisection on the charge curve
- **Boman index**: mean Boman value over the full length

Every computation is pure, so batches can be mapped in any order or in
parallel; ``profile_batch`` keeps results aligned with the input.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional

from ..core.models import SequenceProfile
from ..core.sequence import STANDARD_AA, non_canonical_residues
from .charge import net_charge
from .isoelectric import DEFAULT_TOLERANCE, isoelectric_point
from .tables import WATER_MASS, boman_of, hydrophobicity_of, mass_of

logger = logging.getLogger(__name__)


def molecular_weight(sequence: str) -> float:
    """Monoisotopic mass in Da; non-canonical residues add nothing."""
    return WATER_MASS + sum(mass_of(aa) for aa in sequence)


def mean_hydrophobicity(sequence: str) -> float:
    """
    Mean Eisenberg hydrophobicity over canonical residues only.

    The denominator is the number of canonical residues, not the sequence
    length. Returns 0.0 when there are none.
    """
    values = [hydrophobicity_of(aa) for aa in sequence if aa in STANDARD_AA]
    if not values:
        return 0.0
    return sum(values) / len(values)


def boman_index(sequence: str) -> float:
    """
    Boman index: sum of Boman scale values divided by the full length.

    Non-canonical residues count toward the length with a value of 0.
    Returns 0.0 for an empty sequence.
    """
    if not sequence:
        return 0.0
    return sum(boman_of(aa) for aa in sequence) / len(sequence)


@dataclass
class ProfilerConfig:
    """
    Configuration for the physicochemical profiler.

    Attributes:
        ph: pH at which the net charge is reported
        pi_tolerance: Bracket width at which the pI bisection stops
    """
    ph: float = 7.0
    pi_tolerance: float = DEFAULT_TOLERANCE


class PhysicochemicalProfiler:
    """
    Computes the physicochemical profile of peptide sequences.

    Usage:
        >>> profiler = PhysicochemicalProfiler()
        >>> profile = profiler.profile("GIGKFLHSAKKFGKAFVGEIMNS")
        >>> print(f"pI {profile.isoelectric_point:.2f}")
    """

    def __init__(self, config: Optional[ProfilerConfig] = None):
        self.config = config or ProfilerConfig()

    def profile(self, sequence: str) -> SequenceProfile:
        """
        Profile one sequence.

        Never raises for string input: non-canonical characters are
        zero-weighted and an empty sequence yields the degenerate values
        (water mass, zero hydrophobicity and Boman index, termini-only pI).
        """
        unknown = non_canonical_residues(sequence)
        if unknown:
            logger.debug(f"Zero-weighting non-canonical residues {unknown} in {sequence}")

        return SequenceProfile(
            sequence=sequence,
            length=len(sequence),
            molecular_weight=molecular_weight(sequence),
            hydrophobicity=mean_hydrophobicity(sequence),
            net_charge=net_charge(sequence, self.config.ph),
            isoelectric_point=isoelectric_point(sequence, self.config.pi_tolerance),
            boman_index=boman_index(sequence),
        )

    def profile_batch(
        self,
        sequences: Iterable[str],
        max_workers: Optional[int] = None,
    ) -> list[SequenceProfile]:
        """
        Profile many sequences, preserving input order.

        Args:
            sequences: Sequences to profile
            max_workers: Thread pool size; sequential when None or 1

        Returns:
            One profile per input sequence, in input order
        """
        sequences = list(sequences)

        if max_workers is None or max_workers <= 1:
            profiles = [self.profile(seq) for seq in sequences]
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                profiles = list(executor.map(self.profile, sequences))

        logger.info(f"Profiled {len(profiles)} sequence(s)")
        return profiles


def profile_sequence(sequence: str, config: Optional[ProfilerConfig] = None) -> SequenceProfile:
    """Profile a single sequence without explicit profiler setup."""
    return PhysicochemicalProfiler(config).profile(sequence)
