"""
Core data models for peptidescope.

This module defines the records exchanged between the property engine, the
consensus scorer and their consumers (tables, filters, exports). All models
use Pydantic for validation and serialization and are frozen once built.

The most important modelling decision lives in ``ModelScoreSet`` and
``ConsensusResult``: a classifier that produced no result is ``None``,
never ``0``. A peptide whose scores could not be fetched must be shown as
"unknown" rather than as a 0% candidate.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ModelName(str, Enum):
    """
    The five classifiers reported by the property-prediction service.

    The order here is the order used for display and for the consensus sum.
    """
    XGBOOST = "xgboost"
    RANDOM_FOREST = "random_forest"
    NEURAL_NETWORK = "neural_network"
    DECISION_TREE = "decision_tree"
    LOGISTIC_REGRESSION = "logistic_regression"


class SequenceProfile(BaseModel):
    """
    Physicochemical profile of a single peptide.

    Derived entirely from the sequence and the residue constant tables.
    """
    model_config = ConfigDict(frozen=True)

    sequence: str = Field(..., description="Peptide sequence (single-letter codes)")
    length: int = Field(..., ge=0, description="Number of characters, canonical or not")
    molecular_weight: float = Field(..., description="Monoisotopic mass (Da)")
    hydrophobicity: float = Field(..., description="Mean Eisenberg hydrophobicity")
    net_charge: float = Field(..., description="Net charge at pH 7.0")
    isoelectric_point: float = Field(..., ge=0, le=14, description="pI (pH units)")
    boman_index: float = Field(..., description="Boman index (kcal/mol)")


ScoreMapping = Mapping[Union[ModelName, str], Optional[float]]


class ModelScoreSet(BaseModel):
    """
    Per-model classifier scores (0-100) for one peptide.

    Every slot is optional. ``None`` means the model produced no result,
    which is distinct from a model that scored the peptide at 0.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    xgboost: Optional[float] = Field(None, ge=0, le=100)
    random_forest: Optional[float] = Field(None, ge=0, le=100)
    neural_network: Optional[float] = Field(None, ge=0, le=100)
    decision_tree: Optional[float] = Field(None, ge=0, le=100)
    logistic_regression: Optional[float] = Field(None, ge=0, le=100)

    @classmethod
    def from_mapping(cls, scores: ScoreMapping) -> ModelScoreSet:
        """
        Build a score set from a mapping keyed by ``ModelName`` or its value.

        Unknown model names are rejected by validation.
        """
        fields = {}
        for key, value in scores.items():
            name = key.value if isinstance(key, ModelName) else str(key)
            fields[name] = value
        return cls(**fields)

    def get(self, model: Union[ModelName, str]) -> Optional[float]:
        """Score for one model, or None if that model produced no result."""
        return getattr(self, ModelName(model).value)

    def present(self) -> dict[ModelName, float]:
        """Scores that are actually available, in model order."""
        return {
            model: score
            for model in ModelName
            if (score := getattr(self, model.value)) is not None
        }

    @property
    def n_present(self) -> int:
        return len(self.present())


class ConsensusResult(BaseModel):
    """
    Consensus of the available per-model scores.

    ``consensus_score`` is in [0, 1] and is present iff at least one model
    score was present. ``per_model_scores`` is the input, unmodified.
    """
    model_config = ConfigDict(frozen=True)

    per_model_scores: ModelScoreSet
    consensus_score: Optional[float] = Field(None, ge=0, le=1)
    n_models: int = Field(0, ge=0, description="Number of models that contributed")

    @property
    def is_known(self) -> bool:
        return self.consensus_score is not None

    def display(self, precision: int = 1) -> str:
        """Render for tables: a percentage, or 'unknown' when absent."""
        if self.consensus_score is None:
            return "unknown"
        return f"{self.consensus_score * 100:.{precision}f}%"


class PeptideRecord(BaseModel):
    """
    One peptide as seen by filtering, ranking and export consumers.

    Combines the physicochemical profile with the (possibly missing)
    consensus result and an optional provenance label such as the
    generation method that produced the sequence.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    profile: SequenceProfile
    consensus: Optional[ConsensusResult] = None
    source: Optional[str] = Field(None, description="Provenance label, e.g. generator")

    @property
    def sequence(self) -> str:
        return self.profile.sequence

    @property
    def length(self) -> int:
        return self.profile.length

    @property
    def consensus_score(self) -> Optional[float]:
        """Consensus score, or None when no prediction is available."""
        if self.consensus is None:
            return None
        return self.consensus.consensus_score
