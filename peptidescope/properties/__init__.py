"""
Physicochemical property engine.

Computes, from a raw amino-acid sequence, the properties shown for every
candidate peptide: molecular weight, mean hydrophobicity, net charge at
pH 7.0, isoelectric point and Boman index.

- tables: read-only per-residue constants
- charge: Henderson-Hasselbalch net charge at any pH
- isoelectric: bisection solver for the isoelectric point
- profiler: orchestration into a SequenceProfile
"""

from .charge import charge_curve, count_ionizable, net_charge
from .isoelectric import isoelectric_point
from .profiler import (
    PhysicochemicalProfiler,
    ProfilerConfig,
    boman_index,
    mean_hydrophobicity,
    molecular_weight,
    profile_sequence,
)
from .tables import (
    BOMAN_SCALE,
    C_TERMINUS_PKA,
    HYDROPHOBICITY_EISENBERG,
    N_TERMINUS_PKA,
    RESIDUE_MASS,
    SIDE_CHAIN_PKA,
    WATER_MASS,
    boman_of,
    hydrophobicity_of,
    mass_of,
    pka_of,
)

__all__ = [
    "PhysicochemicalProfiler",
    "ProfilerConfig",
    "profile_sequence",
    "molecular_weight",
    "mean_hydrophobicity",
    "boman_index",
    "net_charge",
    "charge_curve",
    "count_ionizable",
    "isoelectric_point",
    "mass_of",
    "hydrophobicity_of",
    "boman_of",
    "pka_of",
    "RESIDUE_MASS",
    "HYDROPHOBICITY_EISENBERG",
    "BOMAN_SCALE",
    "SIDE_CHAIN_PKA",
    "WATER_MASS",
    "N_TERMINUS_PKA",
    "C_TERMINUS_PKA",
]
