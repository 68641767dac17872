"""Version Detection Module.

Heuristic discovery of version numbers in crawled page text.

Architecture:
- tokenizer.py: splits page text (outside tags) into words
- rules.py: ordered accept/reject/transform rules for candidate words
- candidates.py: thread-safe aggregation of accepted words
- ranker.py: deterministic ordering of the candidates
- finder.py: crawl + collect + rank entry point
"""

from .candidates import CandidateMap, CandidateRecord
from .finder import find_version_candidates, normalize_root_url, select_result, sort_descending
from .ranker import rank
from .rules import RULES, classify

__all__ = [
    'CandidateMap',
    'CandidateRecord',
    'RULES',
    'classify',
    'find_version_candidates',
    'normalize_root_url',
    'rank',
    'select_result',
    'sort_descending',
]
