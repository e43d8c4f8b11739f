"""
Model Selection

Resolves which model to address when the operator does not pin one.

Priority (first hit wins):
1. explicit model - returned as is, never checked against the catalog
2. catalog unavailable or empty - first preferred model, unchecked
3. first preferred model present verbatim in the catalog
4. first preferred model with a closest match in the catalog
5. first model in the catalog, with a diagnostic
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.llm_client_base import OracleClient
from ..errors import ModelSelectionError, OracleError
from .scorers import SimilarityScorer, find_closest_model

logger = logging.getLogger(__name__)

# How the model was chosen
SOURCE_EXPLICIT = "explicit"
SOURCE_UNVERIFIED = "preferred_unverified"
SOURCE_EXACT = "exact"
SOURCE_CLOSEST = "closest"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class ModelSelection:
    model: str
    source: str
    diagnostic: Optional[str] = None


def select_model(
    explicit_model: Optional[str],
    preferred_models: Sequence[str],
    available_models: Optional[Sequence[str]],
    scorer: Optional[SimilarityScorer] = None,
    catalog_error: Optional[BaseException] = None,
) -> ModelSelection:
    """
    Pick the model for this run.

    Args:
        explicit_model: Model pinned by the operator ("" or None if not pinned)
        preferred_models: Ordered priority list
        available_models: Catalog reported by the oracle, None if the query failed
        scorer: Closest-match strategy (BaseNameScorer by default)
        catalog_error: Why the catalog query failed, for the diagnostic

    Raises:
        ModelSelectionError: No explicit model, no usable catalog and no preferred models
    """
    if explicit_model:
        return ModelSelection(explicit_model, SOURCE_EXPLICIT)

    if catalog_error is not None or not available_models:
        if not preferred_models:
            raise ModelSelectionError("no preferred models configured")
        if catalog_error is not None:
            diagnostic = f"unable to query models: {catalog_error}"
        else:
            diagnostic = "model catalog is empty"
        return ModelSelection(preferred_models[0], SOURCE_UNVERIFIED, diagnostic)

    catalog = set(available_models)
    for preferred in preferred_models:
        if preferred in catalog:
            return ModelSelection(preferred, SOURCE_EXACT)

    for preferred in preferred_models:
        match, _ = find_closest_model(preferred, available_models, scorer)
        if match is not None:
            return ModelSelection(
                match,
                SOURCE_CLOSEST,
                f"using closest installed model {match} for preferred {preferred}"
            )

    fallback = available_models[0]
    return ModelSelection(
        fallback,
        SOURCE_FALLBACK,
        f"none of the preferred models {list(preferred_models)} are installed; "
        f"using {fallback} instead"
    )


async def resolve_model(
    client: OracleClient,
    explicit_model: Optional[str],
    preferred_models: Sequence[str],
    scorer: Optional[SimilarityScorer] = None,
    verbose: bool = False,
) -> ModelSelection:
    """
    Query the catalog (unless a model is pinned) and select a model.

    Logs the selection diagnostic: fallback to the first installed model is
    always a warning, other diagnostics are only reported when verbose.
    """
    if explicit_model:
        return select_model(explicit_model, preferred_models, None, scorer)

    available: Optional[List[str]] = None
    catalog_error: Optional[BaseException] = None
    try:
        available = await client.list_models()
    except OracleError as e:
        catalog_error = e

    selection = select_model(
        explicit_model, preferred_models, available, scorer, catalog_error=catalog_error
    )

    if selection.source == SOURCE_FALLBACK:
        logger.warning(f"[MODEL_SELECT] {selection.diagnostic}")
    elif selection.diagnostic:
        log = logger.warning if verbose else logger.debug
        log(f"[MODEL_SELECT] {selection.diagnostic}")
    logger.debug(f"[MODEL_SELECT] model={selection.model} | source={selection.source}")
    return selection
