"""
Net charge of a peptide as a function of pH.

Each ionizable group contributes a Henderson-Hasselbalch fraction:

    basic group:   +1 / (1 + 10^(pH - pKa))
    acidic group:  -1 / (1 + 10^(pKa - pH))

The free N-terminus counts as one basic group and the C-terminus as one
acidic group. Side chains are weighted by their count in the sequence, which
is aggregated once per call. The resulting curve is non-increasing in pH.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .tables import (
    ACIDIC_RESIDUES,
    BASIC_RESIDUES,
    C_TERMINUS_PKA,
    N_TERMINUS_PKA,
    SIDE_CHAIN_PKA,
    pka_of,
)

PH = Union[float, np.ndarray]


def count_ionizable(sequence: str) -> dict[str, int]:
    """Count each ionizable residue (C, D, E, H, K, R, Y) in the sequence."""
    counts = dict.fromkeys(SIDE_CHAIN_PKA, 0)
    for aa in sequence:
        if aa in counts:
            counts[aa] += 1
    return counts


def _basic_fraction(ph: PH, pka: float) -> PH:
    return 1.0 / (1.0 + 10.0 ** (ph - pka))


def _acidic_fraction(ph: PH, pka: float) -> PH:
    return 1.0 / (1.0 + 10.0 ** (pka - ph))


def charge_from_counts(counts: dict[str, int], ph: PH) -> PH:
    """
    Net charge for pre-aggregated ionizable counts.

    Works on a scalar pH or element-wise on a numpy array of pH values.
    """
    positive = _basic_fraction(ph, N_TERMINUS_PKA)
    for aa in BASIC_RESIDUES:
        positive = positive + counts[aa] * _basic_fraction(ph, pka_of(aa))

    negative = _acidic_fraction(ph, C_TERMINUS_PKA)
    for aa in ACIDIC_RESIDUES:
        negative = negative + counts[aa] * _acidic_fraction(ph, pka_of(aa))

    return positive - negative


def net_charge(sequence: str, ph: float = 7.0) -> float:
    """
    Net charge of a peptide at the given pH.

    Args:
        sequence: Peptide sequence; non-ionizable and non-canonical
            characters do not contribute
        ph: pH at which to evaluate the charge

    Returns:
        Net charge in elementary charge units
    """
    return float(charge_from_counts(count_ionizable(sequence), ph))


def charge_curve(sequence: str, ph_values: Sequence[float]) -> np.ndarray:
    """
    Net charge evaluated over many pH values at once.

    Args:
        sequence: Peptide sequence
        ph_values: pH values to evaluate

    Returns:
        Array of net charges, aligned with ``ph_values``
    """
    ph = np.asarray(ph_values, dtype=float)
    return np.asarray(charge_from_counts(count_ionizable(sequence), ph), dtype=float)
