"""Candidate aggregation shared by all crawl threads."""

import threading
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..config import MAX_COLLECTED_WORDS


@dataclass(frozen=True)
class CandidateRecord:
    """Where a candidate word was found.

    depth: remaining crawl budget of the page (larger is shallower)
    word_index: ordinal among accepted words on that page
    char_index: offset in the page body where the word ended
    """
    depth: int
    word_index: int
    char_index: int


class CandidateMap:
    """Word -> best :class:`CandidateRecord`, guarded by a single lock.

    A recurring word keeps the record with the smaller depth; on equal depth
    the existing record stays. No new words are accepted once ``max_words``
    entries are stored.
    """

    def __init__(self, max_words: int = MAX_COLLECTED_WORDS):
        self.max_words = max_words
        self._lock = threading.Lock()
        self._records: Dict[str, CandidateRecord] = {}

    def add(self, word: str, record: CandidateRecord) -> bool:
        """Merge ``record`` for ``word``. Returns False when the map is full."""
        with self._lock:
            existing = self._records.get(word)
            if existing is None:
                if len(self._records) >= self.max_words:
                    return False
                self._records[word] = record
            elif record.depth < existing.depth:
                self._records[word] = record
            return True

    def is_full(self) -> bool:
        with self._lock:
            return len(self._records) >= self.max_words

    def get(self, word: str):
        with self._lock:
            return self._records.get(word)

    def items(self) -> List[Tuple[str, CandidateRecord]]:
        """Snapshot of ``(word, record)`` pairs in insertion order."""
        with self._lock:
            return list(self._records.items())

    def __contains__(self, word: object) -> bool:
        with self._lock:
            return word in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
