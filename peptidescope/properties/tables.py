"""
Per-residue constant tables.

All tables are read-only views created once at import time. Lookups for a
character outside the 20 canonical codes return 0.0, so non-canonical
residues contribute nothing to any weighted sum instead of raising.

References
----------
- Eisenberg et al. (1984) - Consensus hydrophobicity scale
- Boman (2003) - Protein-binding potential index
- EMBOSS iep - pKa values of termini and ionizable side chains
"""

from __future__ import annotations

from types import MappingProxyType

from ..core.sequence import AMINO_ACIDS


# =============================================================================
# Fixed constants
# =============================================================================

# Mass of H2O added for the free termini (Da)
WATER_MASS = 18.01528

# Terminal group pKa values
N_TERMINUS_PKA = 8.6
C_TERMINUS_PKA = 3.6


# =============================================================================
# Amino Acid Property Scales
# =============================================================================

# Monoisotopic residue masses (Da)
RESIDUE_MASS = MappingProxyType({
    'A': 71.03711, 'C': 103.00919, 'D': 115.02694, 'E': 129.04259, 'F': 147.06841,
    'G': 57.02146, 'H': 137.05891, 'I': 113.08406, 'K': 128.09496, 'L': 113.08406,
    'M': 131.04049, 'N': 114.04293, 'P': 97.05276, 'Q': 128.05858, 'R': 156.10111,
    'S': 87.03203, 'T': 101.04768, 'V': 99.06841, 'W': 186.07931, 'Y': 163.06333,
})

# Eisenberg consensus hydrophobicity
HYDROPHOBICITY_EISENBERG = MappingProxyType({
    'A': 0.62, 'C': 0.29, 'D': -0.90, 'E': -0.74, 'F': 1.19,
    'G': 0.48, 'H': -0.40, 'I': 1.38, 'K': -1.50, 'L': 1.06,
    'M': 0.64, 'N': -0.78, 'P': 0.12, 'Q': -0.85, 'R': -2.53,
    'S': -0.18, 'T': -0.05, 'V': 1.08, 'W': 0.81, 'Y': 0.26,
})

# Boman potential-interaction scale (kcal/mol); proline is not scaled
BOMAN_SCALE = MappingProxyType({
    'L': -4.92, 'I': -4.92, 'V': -4.04, 'M': -4.02, 'F': -2.98,
    'W': -2.33, 'A': -2.25, 'C': -1.22, 'G': -0.94, 'Y': -0.01,
    'T': 2.78, 'S': 3.40, 'H': 4.66, 'Q': 5.27, 'K': 5.71,
    'N': 6.64, 'E': 10.42, 'D': 13.08, 'R': 14.92, 'P': 0.0,
})

# Ionizable side-chain pKa values
SIDE_CHAIN_PKA = MappingProxyType({
    'C': 8.5, 'D': 3.9, 'E': 4.1, 'H': 6.5, 'K': 10.8, 'R': 12.5, 'Y': 10.1,
})

# Side chains carrying + charge when protonated, and - charge when not
BASIC_RESIDUES = ("H", "K", "R")
ACIDIC_RESIDUES = ("D", "E", "C", "Y")


def mass_of(aa: str) -> float:
    """Residue mass in Da, 0.0 for non-canonical codes."""
    return RESIDUE_MASS.get(aa, 0.0)


def hydrophobicity_of(aa: str) -> float:
    """Eisenberg hydrophobicity, 0.0 for non-canonical codes."""
    return HYDROPHOBICITY_EISENBERG.get(aa, 0.0)


def boman_of(aa: str) -> float:
    """Boman scale value, 0.0 for non-canonical codes."""
    return BOMAN_SCALE.get(aa, 0.0)


def pka_of(aa: str) -> float:
    """
    Side-chain pKa of an ionizable residue.

    Only defined for C, D, E, H, K, R and Y; any other code raises KeyError.
    """
    return SIDE_CHAIN_PKA[aa]


def residue_table() -> list[dict[str, object]]:
    """One row per canonical residue with every tabulated constant."""
    return [
        {
            "residue": aa,
            "mass": RESIDUE_MASS[aa],
            "hydrophobicity": HYDROPHOBICITY_EISENBERG[aa],
            "boman": BOMAN_SCALE[aa],
            "pka": SIDE_CHAIN_PKA.get(aa),
        }
        for aa in AMINO_ACIDS
    ]
