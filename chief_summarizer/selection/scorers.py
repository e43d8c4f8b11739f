"""
Similarity scorers for closest-model matching.

A scorer rates how well an installed model stands in for a preferred one.
Zero means "no match"; higher is better.
"""

from typing import Optional, Protocol, Sequence, Tuple


class SimilarityScorer(Protocol):
    def score(self, preferred: str, candidate: str) -> int: ...


def base_model_name(name: str) -> str:
    """Strip the ':'-delimited variant tag ("qwen3:14b" -> "qwen3")."""
    base, _, _ = name.partition(":")
    return base


class BaseNameScorer:
    """
    Compare base names, ignoring variant tags.

    3 - equal base names
    2 - one base name is a prefix of the other
    1 - one base name contains the other
    0 - unrelated
    """

    def score(self, preferred: str, candidate: str) -> int:
        a = base_model_name(preferred)
        b = base_model_name(candidate)
        if a == b:
            return 3
        if b.startswith(a) or a.startswith(b):
            return 2
        if a in b or b in a:
            return 1
        return 0


def find_closest_model(
    preferred: str,
    available: Sequence[str],
    scorer: Optional[SimilarityScorer] = None
) -> Tuple[Optional[str], int]:
    """
    Pick the best positively-scored catalog entry for a preferred name.

    An entry identical to ``preferred`` wins outright. Otherwise the first
    entry with the strictly highest score is kept.

    Returns:
        (model, score), or (None, 0) when nothing scores above zero
    """
    scorer = scorer or BaseNameScorer()
    best = None
    best_score = 0
    for candidate in available:
        if candidate == preferred:
            return candidate, 3
        candidate_score = scorer.score(preferred, candidate)
        if candidate_score > best_score:
            best = candidate
            best_score = candidate_score
    return best, best_score
