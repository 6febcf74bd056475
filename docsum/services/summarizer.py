import re
from typing import Callable, Dict, List

from ..tiers import LengthTier, budget_for

ELLIPSIS = "..."
NO_SUMMARY_MESSAGE = "Summary could not be generated from the provided text."

# A run of non-terminators followed by its terminator(s); trailing text with
# no terminator is not a sentence and is dropped.
_SENTENCE = re.compile(r"[^.!?]+[.!?]+")

_PICKS: Dict[LengthTier, Callable[[int], List[int]]] = {
    LengthTier.SHORT: lambda n: [0],
    LengthTier.MEDIUM: lambda n: [0, n // 2, n - 1],
    LengthTier.LONG: lambda n: [0, n // 4, n // 2, (3 * n) // 4, n - 1],
}


def split_sentences(text: str) -> List[str]:
    """Sentence candidates with terminators attached; the whole text if none match."""
    return _SENTENCE.findall(text) or [text]


def pick_indices(n: int, tier: LengthTier) -> List[int]:
    """Positional picks for a tier, deduplicated, in first-seen order."""
    return list(dict.fromkeys(i for i in _PICKS[tier](n) if 0 <= i < n))


def _clip(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def fallback_summarize(text: str, language: str = "english", tier: LengthTier = LengthTier.MEDIUM) -> str:
    """Deterministic extractive summary used when the LLM path is unavailable.

    Picks first/middle/last style sentences by position and clips the result
    to the tier's character budget. ``language`` is accepted so callers can
    treat both paths alike, but it has no effect here: the output is always
    verbatim spans of the input, whatever language was requested.
    """
    text = text or ""
    budget = budget_for(tier)
    sentences = split_sentences(text)

    if len(sentences) <= 3:
        summary = _clip(text, budget.truncate_chars)
        return summary if summary.strip() else NO_SUMMARY_MESSAGE

    picked = (sentences[i].strip() for i in pick_indices(len(sentences), tier))
    summary = " ".join(s for s in picked if s)
    summary = _clip(summary, budget.summary_chars)
    return summary or NO_SUMMARY_MESSAGE
