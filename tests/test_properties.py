"""
Tests for the physicochemical property engine.

Reference values for the all-residue peptide and for magainin 2 were
computed by hand from the residue tables; the remaining checks are
structural properties of the charge curve and the bisection solver.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from peptidescope.properties import (
    BOMAN_SCALE,
    HYDROPHOBICITY_EISENBERG,
    RESIDUE_MASS,
    SIDE_CHAIN_PKA,
    WATER_MASS,
    PhysicochemicalProfiler,
    ProfilerConfig,
    boman_index,
    boman_of,
    charge_curve,
    count_ionizable,
    hydrophobicity_of,
    isoelectric_point,
    mass_of,
    mean_hydrophobicity,
    molecular_weight,
    net_charge,
    pka_of,
    profile_sequence,
)
from peptidescope.properties.tables import residue_table


# =============================================================================
# Test Data: Antimicrobial peptides
# =============================================================================

# Every canonical residue once
ALL_RESIDUES = "ACDEFGHIKLMNPQRSTVWY"

# Magainin 2 (Xenopus laevis) - cationic helical AMP
MAGAININ_2 = "GIGKFLHSAKKFGKAFVGEIMNS"

# Indolicidin (bovine neutrophils) - Trp/Pro-rich AMP
INDOLICIDIN = "ILPWKWPWWPWRR"

# LL-37 (human cathelicidin)
LL37 = "LLGDFFRKSKEKIGKEFKRIVQRIKDFLRNLVPRTES"

# Melittin (honeybee venom)
MELITTIN = "GIGAVLKVLTTGLPALISWIKRKRQQ"

PEPTIDES = [ALL_RESIDUES, MAGAININ_2, INDOLICIDIN, LL37, MELITTIN, "EAAAK", ""]


class TestResidueTables:
    """Tests for the per-residue constant tables."""

    def test_tables_cover_canonical_alphabet(self):
        """Mass, hydrophobicity and Boman tables cover all 20 residues."""
        for table in (RESIDUE_MASS, HYDROPHOBICITY_EISENBERG, BOMAN_SCALE):
            assert set(table) == set(ALL_RESIDUES)

    def test_documented_values(self):
        """Spot-check values that downstream comparisons depend on."""
        assert mass_of("A") == 71.03711
        assert mass_of("W") == 186.07931
        assert hydrophobicity_of("R") == -2.53
        assert hydrophobicity_of("I") == 1.38
        assert boman_of("R") == 14.92
        assert boman_of("P") == 0.0
        assert pka_of("H") == 6.5
        assert pka_of("R") == 12.5

    def test_non_canonical_lookups_are_zero(self):
        """Unknown codes contribute nothing instead of raising."""
        for code in ("X", "B", "Z", "*", "-", "a"):
            assert mass_of(code) == 0.0
            assert hydrophobicity_of(code) == 0.0
            assert boman_of(code) == 0.0

    def test_pka_only_for_ionizable_residues(self):
        """Side-chain pKa exists only for C, D, E, H, K, R, Y."""
        assert set(SIDE_CHAIN_PKA) == set("CDEHKRY")
        with pytest.raises(KeyError):
            pka_of("A")

    def test_tables_are_read_only(self):
        """The shared tables cannot be mutated."""
        with pytest.raises(TypeError):
            RESIDUE_MASS["A"] = 0.0
        with pytest.raises(TypeError):
            SIDE_CHAIN_PKA["X"] = 7.0

    def test_residue_table_rows(self):
        """One row per canonical residue, pKa None for non-ionizable ones."""
        rows = residue_table()
        assert [r["residue"] for r in rows] == list(ALL_RESIDUES)
        by_residue = {r["residue"]: r for r in rows}
        assert by_residue["K"]["pka"] == 10.8
        assert by_residue["A"]["pka"] is None


class TestMolecularWeight:
    """Tests for molecular weight."""

    def test_empty_sequence_is_water(self):
        assert molecular_weight("") == pytest.approx(18.01528, abs=1e-6)

    def test_single_alanine(self):
        assert molecular_weight("A") == pytest.approx(89.05239, abs=1e-6)

    def test_all_residues(self):
        """Water plus every residue mass once."""
        expected = WATER_MASS + sum(RESIDUE_MASS.values())
        assert molecular_weight(ALL_RESIDUES) == pytest.approx(expected, abs=1e-6)
        assert molecular_weight(ALL_RESIDUES) == pytest.approx(2394.1296, abs=1e-4)

    def test_magainin_2(self):
        assert molecular_weight(MAGAININ_2) == pytest.approx(2465.32998, abs=1e-4)

    def test_non_canonical_adds_nothing(self):
        assert molecular_weight("AXB") == pytest.approx(molecular_weight("A"), abs=1e-9)


class TestHydrophobicity:
    """Tests for mean Eisenberg hydrophobicity."""

    def test_empty_and_non_canonical_are_zero(self):
        assert mean_hydrophobicity("") == 0.0
        assert mean_hydrophobicity("XXBZ") == 0.0

    def test_scale_extremes(self):
        assert mean_hydrophobicity("IIII") == pytest.approx(1.38)
        assert mean_hydrophobicity("RRRR") == pytest.approx(-2.53)

    def test_denominator_counts_canonical_only(self):
        """'AXA' averages over the two alanines, not over three positions."""
        assert mean_hydrophobicity("AXA") == pytest.approx(0.62)

    def test_all_residues_balance_out(self):
        """The Eisenberg values of the 20 residues sum to zero."""
        assert mean_hydrophobicity(ALL_RESIDUES) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize("sequence", PEPTIDES[:-1])
    def test_within_scale_bounds(self, sequence):
        assert -2.53 <= mean_hydrophobicity(sequence) <= 1.38


class TestBomanIndex:
    """Tests for the Boman index."""

    def test_empty_sequence(self):
        assert boman_index("") == 0.0

    def test_all_residues(self):
        assert boman_index(ALL_RESIDUES) == pytest.approx(39.25 / 20)

    def test_matches_per_residue_mean(self):
        """Canonical sequences give exactly the mean of the scale values."""
        for sequence in (MAGAININ_2, LL37, MELITTIN):
            expected = sum(BOMAN_SCALE[aa] for aa in sequence) / len(sequence)
            assert boman_index(sequence) == pytest.approx(expected)

    def test_denominator_is_full_length(self):
        """Non-canonical residues count toward the length with value 0."""
        assert boman_index("AXA") == pytest.approx(-4.5 / 3)


class TestChargeModel:
    """Tests for the Henderson-Hasselbalch charge model."""

    def test_count_ionizable(self):
        counts = count_ionizable(MAGAININ_2)
        assert counts == {"C": 0, "D": 0, "E": 1, "H": 1, "K": 4, "R": 0, "Y": 0}

    def test_single_lysine_at_neutral_ph(self):
        """N-terminus + lysine side chain minus C-terminus."""
        assert net_charge("K", 7.0) == pytest.approx(0.975736, abs=1e-5)

    def test_magainin_2_is_cationic(self):
        assert net_charge(MAGAININ_2) == pytest.approx(3.2168, abs=1e-3)

    def test_default_ph_is_neutral(self):
        assert net_charge(LL37) == net_charge(LL37, 7.0)

    def test_non_canonical_ignored(self):
        assert net_charge("KXXB") == pytest.approx(net_charge("K"))

    def test_extremes_of_ph(self):
        """Fully protonated at pH 0, fully deprotonated at pH 14."""
        assert net_charge(MAGAININ_2, 0.0) > 0
        assert net_charge(MAGAININ_2, 14.0) < 0
        assert net_charge("", 0.0) > 0
        assert net_charge("", 14.0) < 0

    @pytest.mark.parametrize("sequence", PEPTIDES)
    def test_non_increasing_in_ph(self, sequence):
        """More basic pH never increases the net charge."""
        charges = charge_curve(sequence, np.linspace(0.0, 14.0, 141))
        assert np.all(np.diff(charges) <= 1e-12)

    def test_curve_matches_scalar(self):
        ph_values = [2.0, 5.5, 7.0, 9.25, 12.0]
        curve = charge_curve(LL37, ph_values)
        assert curve.shape == (5,)
        for ph, value in zip(ph_values, curve):
            assert value == pytest.approx(net_charge(LL37, ph))


class TestIsoelectricPoint:
    """Tests for the bisection pI solver."""

    @pytest.mark.parametrize("sequence", [ALL_RESIDUES, MAGAININ_2, INDOLICIDIN, "EAAAK"])
    def test_charge_near_zero_at_pi(self, sequence):
        tolerance = 0.01
        pi = isoelectric_point(sequence, tolerance)
        assert abs(net_charge(sequence, pi)) < 2 * tolerance

    def test_all_residues_regression(self):
        """Balanced acidic and basic content lands close to neutral."""
        assert isoelectric_point(ALL_RESIDUES) == pytest.approx(7.357, abs=0.02)

    def test_empty_sequence_uses_termini(self):
        """Termini alone cross zero at (8.6 + 3.6) / 2."""
        assert isoelectric_point("") == pytest.approx(6.1, abs=0.01)

    def test_cationic_and_anionic(self):
        assert isoelectric_point(INDOLICIDIN) > 10.0
        assert isoelectric_point(MAGAININ_2) > 9.0
        assert isoelectric_point("DDDEEE") < 4.5

    def test_tighter_tolerance_converges(self):
        coarse = isoelectric_point(LL37, 0.1)
        fine = isoelectric_point(LL37, 0.0001)
        assert abs(coarse - fine) < 0.1
        assert abs(net_charge(LL37, fine)) < 0.01

    def test_wide_tolerance_returns_midpoint(self):
        """No bisection step is taken when the bracket is already narrow enough."""
        assert isoelectric_point(MAGAININ_2, tolerance=20.0) == 7.0

    def test_non_positive_tolerance_rejected(self):
        with pytest.raises(ValueError, match="tolerance"):
            isoelectric_point(MAGAININ_2, tolerance=0.0)


class TestProfiler:
    """Tests for the profiler orchestration."""

    def test_profile_fields(self):
        profile = profile_sequence(ALL_RESIDUES)
        assert profile.sequence == ALL_RESIDUES
        assert profile.length == 20
        assert profile.molecular_weight == pytest.approx(molecular_weight(ALL_RESIDUES))
        assert profile.hydrophobicity == pytest.approx(0.0, abs=1e-9)
        assert profile.net_charge == pytest.approx(net_charge(ALL_RESIDUES, 7.0))
        assert profile.isoelectric_point == isoelectric_point(ALL_RESIDUES)
        assert profile.boman_index == pytest.approx(1.9625)

    def test_empty_sequence_profile(self):
        """Degenerate input resolves to defined values."""
        profile = profile_sequence("")
        assert profile.length == 0
        assert profile.molecular_weight == pytest.approx(18.01528)
        assert profile.hydrophobicity == 0.0
        assert profile.boman_index == 0.0
        assert profile.isoelectric_point == pytest.approx(6.1, abs=0.01)

    def test_non_canonical_counted_in_length(self):
        profile = profile_sequence("GIGXKFL")
        assert profile.length == 7
        assert profile.molecular_weight == pytest.approx(molecular_weight("GIGKFL"))

    def test_input_profiled_as_given(self):
        """Whitespace counts toward the length with zero weight."""
        profile = profile_sequence("GIG KFL")
        assert profile.sequence == "GIG KFL"
        assert profile.length == 7
        assert profile.boman_index == pytest.approx(boman_index("GIG KFL"))
        assert profile.boman_index == pytest.approx(boman_index("GIGKFL") * 6 / 7)
        assert profile.hydrophobicity == pytest.approx(mean_hydrophobicity("GIGKFL"))

    def test_lowercase_is_non_canonical(self):
        profile = profile_sequence("acd")
        assert profile.sequence == "acd"
        assert profile.length == 3
        assert profile.molecular_weight == pytest.approx(WATER_MASS)
        assert profile.hydrophobicity == 0.0
        assert profile.net_charge == pytest.approx(net_charge("", 7.0))

    def test_configured_ph(self):
        profiler = PhysicochemicalProfiler(ProfilerConfig(ph=2.0))
        assert profiler.profile(MAGAININ_2).net_charge == pytest.approx(net_charge(MAGAININ_2, 2.0))

    def test_profile_is_frozen(self):
        profile = profile_sequence(MAGAININ_2)
        with pytest.raises(ValidationError):
            profile.net_charge = 0.0

    @pytest.mark.parametrize("max_workers", [None, 1, 4])
    def test_batch_preserves_order(self, max_workers):
        profiler = PhysicochemicalProfiler()
        profiles = profiler.profile_batch(PEPTIDES, max_workers=max_workers)
        assert [p.sequence for p in profiles] == PEPTIDES
        assert profiles[1] == profiler.profile(MAGAININ_2)

    def test_batch_accepts_generator(self):
        profiles = PhysicochemicalProfiler().profile_batch(s for s in (LL37, MELITTIN))
        assert [p.length for p in profiles] == [37, 26]
