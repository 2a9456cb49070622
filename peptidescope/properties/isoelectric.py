"""
Isoelectric point by bisection on the net-charge curve.
"""

from __future__ import annotations

import logging

from .charge import charge_from_counts, count_ionizable

logger = logging.getLogger(__name__)

PH_MIN = 0.0
PH_MAX = 14.0
DEFAULT_TOLERANCE = 0.01


def isoelectric_point(sequence: str, tolerance: float = DEFAULT_TOLERANCE) -> float:
    """
    pH at which the net charge of the peptide crosses zero.

    Bisects [0, 14]: while the bracket is wider than ``tolerance`` the
    midpoint replaces the lower bound if the charge there is still positive
    and the upper bound otherwise. The last midpoint is returned, so the
    result is within one final bracket width of the root.

    The bracket is assumed to contain the sign change. The two termini
    alone make the charge positive near pH 0 and negative near pH 14, so
    this holds for any string, including the empty one (pI 6.1).

    Args:
        sequence: Peptide sequence
        tolerance: Stop once the bracket is this narrow (pH units)

    Returns:
        Isoelectric point in pH units

    Raises:
        ValueError: If tolerance is not positive
    """
    if tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")

    counts = count_ionizable(sequence)

    lo, hi = PH_MIN, PH_MAX
    ph = (PH_MIN + PH_MAX) / 2
    n_steps = 0

    while hi - lo > tolerance:
        ph = (lo + hi) / 2
        if charge_from_counts(counts, ph) > 0:
            lo = ph
        else:
            hi = ph
        n_steps += 1

    logger.debug(f"pI {ph:.3f} after {n_steps} bisection steps")
    return ph
