"""
Model Selection Module

Chooses the oracle model from an explicit choice, a preferred-model list and
the catalog of installed models, with a pluggable closest-match scorer.
"""

from .selector import ModelSelection, select_model, resolve_model
from .scorers import SimilarityScorer, BaseNameScorer, base_model_name, find_closest_model

__all__ = [
    "ModelSelection",
    "select_model",
    "resolve_model",
    "SimilarityScorer",
    "BaseNameScorer",
    "base_model_name",
    "find_closest_model",
]
