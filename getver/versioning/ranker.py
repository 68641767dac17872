"""Ordering of the collected candidates."""

from typing import Iterable, List, Tuple

from .candidates import CandidateMap, CandidateRecord


def rank_key(word: str, record: CandidateRecord) -> Tuple[int, int, int, int]:
    """Most dots first, then earliest on the page, shallowest page, earliest offset."""
    return (-word.count('.'), record.word_index, -record.depth, record.char_index)


def rank_items(items: Iterable[Tuple[str, CandidateRecord]], max_results: int) -> List[str]:
    if max_results <= 0:
        return []
    # The word itself breaks remaining ties so thread scheduling never shows
    ordered = sorted(items, key=lambda item: (rank_key(*item), item[0]))
    return [word for word, _ in ordered[:max_results]]


def rank(candidates: CandidateMap, max_results: int) -> List[str]:
    """Return at most ``max_results`` words, best candidate first."""
    return rank_items(candidates.items(), max_results)
