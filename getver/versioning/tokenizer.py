"""Splits page text into candidate words and feeds the classifier."""

import logging
from typing import Iterator, Tuple

from ..metrics import CANDIDATES_ACCEPTED, record_rejection
from .candidates import CandidateMap, CandidateRecord
from .rules import ALLOWED, evaluate

logger = logging.getLogger('getver.versioning')


def iter_words(body: str) -> Iterator[Tuple[str, int]]:
    """Yield ``(word, char_index)`` for every run of allowed characters.

    Text inside ``<...>`` is skipped. ``char_index`` is the offset of the
    character that closed the word. A word still open at the end of the body
    is not yielded.
    """
    word = []
    in_tag = False
    for char_index, c in enumerate(body):
        if in_tag:
            if c == '>':
                in_tag = False
            continue
        if c in ALLOWED:
            word.append(c)
            continue
        if word:
            yield ''.join(word), char_index
            word = []
        if c == '<':
            in_tag = True


def collect_candidates(body: str, depth: int, candidates: CandidateMap,
                       keep_letters: bool = False) -> int:
    """Classify every word of ``body`` and merge the accepted ones.

    ``word_index`` counts accepted words on this page only. Returns the
    number of accepted words.
    """
    word_index = 0
    if candidates.is_full():
        return word_index
    for raw, char_index in iter_words(body):
        word, rule = evaluate(raw, keep_letters)
        if word is None:
            record_rejection(rule)
            continue
        if not candidates.add(word, CandidateRecord(depth, word_index, char_index)):
            logger.debug('candidate map full, skipping rest of page')
            break
        CANDIDATES_ACCEPTED.inc()
        word_index += 1
        if candidates.is_full():
            break
    return word_index
