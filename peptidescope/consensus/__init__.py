"""
Consensus scoring across the activity classifiers.

Each candidate peptide is scored by up to five independent classifiers
(gradient-boosted trees, random forest, neural network, decision tree and
logistic regression), each reporting a probability on a 0-100 scale. The
consensus is the plain mean of whichever scores are available, rescaled to
[0, 1].

Missing Scores
--------------
The prediction service can fail for a single model, for a single peptide,
or entirely. A missing score is kept as ``None`` all the way through:

- k >= 1 scores present: consensus = (sum / k) / 100
- no scores present: consensus is ``None``, rendered as "unknown"

A missing consensus is never read as 0.

Prediction Payload
------------------
The prediction service returns one JSON object per peptide, keyed by the
Spanish model labels used on the server side (``"XGboost"``,
``"Bosque Aleatorio"``, ...). ``scores_from_prediction`` maps one such object
to a ``ModelScoreSet``; ``scores_by_sequence`` indexes a whole response by
the ``"Peptido"`` field.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Iterable, Mapping, Optional, Union

from peptidescope.core.models import (
    ConsensusResult,
    ModelName,
    ModelScoreSet,
)

logger = logging.getLogger(__name__)


# Keys used by the prediction service for each model's probability
PREDICTION_KEYS: dict[ModelName, str] = {
    ModelName.XGBOOST: "XGboost",
    ModelName.RANDOM_FOREST: "Bosque Aleatorio",
    ModelName.NEURAL_NETWORK: "Red Neuronal",
    ModelName.DECISION_TREE: "Arbol de Decisión",
    ModelName.LOGISTIC_REGRESSION: "Regresión Lógistica",
}

# Key holding the peptide sequence in each prediction record
SEQUENCE_KEY = "Peptido"


class ScoreError(ValueError):
    """Raised when a prediction payload carries a malformed score."""
    pass


@dataclass
class ConsensusConfig:
    """
    Configuration for consensus scoring.

    Attributes:
        score_scale: Upper end of the raw per-model score range
        models: Model slots that take part in the consensus; a score for
            any other slot is rejected
    """
    score_scale: float = 100.0
    models: tuple[ModelName, ...] = field(default_factory=lambda: tuple(ModelName))


class ConsensusScorer:
    """
    Combines per-model classifier scores into a single consensus score.

    Usage:
        >>> scorer = ConsensusScorer()
        >>> result = scorer.score({"xgboost": 80, "random_forest": 70})
        >>> result.consensus_score
        0.75
        >>> scorer.score({}).display()
        'unknown'
    """

    def __init__(self, config: Optional[ConsensusConfig] = None):
        self.config = config or ConsensusConfig()

    def score(
        self,
        scores: Union[ModelScoreSet, Mapping[Union[ModelName, str], Optional[float]]],
    ) -> ConsensusResult:
        """
        Consensus for one peptide.

        Args:
            scores: A ModelScoreSet, or a mapping from model name to score
                (absent or None entries mean the model produced no result)

        Returns:
            ConsensusResult echoing the input scores

        Raises:
            ScoreError: If a model outside ``config.models`` carries a score
        """
        if not isinstance(scores, ModelScoreSet):
            scores = ModelScoreSet.from_mapping(scores)

        available = scores.present()
        excluded = [m.value for m in available if m not in self.config.models]
        if excluded:
            raise ScoreError(f"Scores given for models outside the consensus: {excluded}")

        present = list(available.values())

        if not present:
            return ConsensusResult(per_model_scores=scores, consensus_score=None, n_models=0)

        consensus = (sum(present) / len(present)) / self.config.score_scale

        return ConsensusResult(
            per_model_scores=scores,
            consensus_score=consensus,
            n_models=len(present),
        )

    def score_batch(
        self,
        score_sets: Iterable[Union[ModelScoreSet, Mapping[Union[ModelName, str], Optional[float]]]],
    ) -> list[ConsensusResult]:
        """Consensus for many peptides, in input order."""
        results = [self.score(s) for s in score_sets]
        n_unknown = sum(1 for r in results if not r.is_known)
        if n_unknown:
            logger.info(f"{n_unknown}/{len(results)} peptide(s) have no model scores")
        return results


def _parse_score(model: ModelName, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ScoreError(f"Score for {model.value} must be numeric, got {value!r}")
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError as e:
            raise ScoreError(f"Score for {model.value} is not numeric: {value!r}") from e
    if not isinstance(value, Real):
        raise ScoreError(f"Score for {model.value} must be numeric, got {type(value).__name__}")
    if math.isnan(value):
        logger.warning(f"NaN score for {model.value}, treating as missing")
        return None
    return float(value)


def scores_from_prediction(payload: Optional[Mapping[str, Any]]) -> ModelScoreSet:
    """
    Map one prediction-service record to a ModelScoreSet.

    Args:
        payload: One record from the prediction response, or None when the
            service could not be reached

    Returns:
        ModelScoreSet with missing or null entries left absent

    Raises:
        ScoreError: If a score value is not numeric
    """
    if payload is None:
        return ModelScoreSet()

    fields = {
        model.value: _parse_score(model, payload.get(key))
        for model, key in PREDICTION_KEYS.items()
    }
    return ModelScoreSet(**fields)


def scores_by_sequence(
    payloads: Optional[Iterable[Mapping[str, Any]]],
) -> dict[str, ModelScoreSet]:
    """
    Index a prediction response by peptide sequence.

    Records without a sequence are skipped with a warning. A None response
    (service unreachable) gives an empty index, so every lookup falls back
    to an empty score set and an unknown consensus.
    """
    index: dict[str, ModelScoreSet] = {}
    if payloads is None:
        return index

    for payload in payloads:
        sequence = payload.get(SEQUENCE_KEY)
        if not sequence:
            logger.warning(f"Prediction record without '{SEQUENCE_KEY}' skipped")
            continue
        index[str(sequence).upper()] = scores_from_prediction(payload)

    return index


def consensus(
    scores: Union[ModelScoreSet, Mapping[Union[ModelName, str], Optional[float]]],
) -> ConsensusResult:
    """Consensus for one score set with the default configuration."""
    return ConsensusScorer().score(scores)


__all__ = [
    "ConsensusScorer",
    "ConsensusConfig",
    "ScoreError",
    "PREDICTION_KEYS",
    "SEQUENCE_KEY",
    "consensus",
    "scores_from_prediction",
    "scores_by_sequence",
]
