"""Candidate classifier rules.

Each rule takes a word and either returns it (possibly transformed) or
returns ``None`` to reject it. ``RULES`` is applied strictly in order; the
first rejection ends the chain.
"""

import re
import string
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

DIGITS = string.digits
LETTERS = string.ascii_letters
UPPER = string.ascii_uppercase
SPECIAL = '.-+_'
ALLOWED = frozenset(DIGITS + LETTERS + SPECIAL)

MIN_LENGTH = 2
# "100.23.3123-beta"
MAX_LENGTH = 16

KEEP_LETTER_MARKERS = ('alpha', 'beta')

# Usually part of file names, not of version numbers
DENYLIST = ('i686', 'x86', 'x64', '64bit', '32bit', 'md5', 'sha1')

_DIGIT_RUN_RE = re.compile(r'\d+')


@dataclass(frozen=True)
class RuleContext:
    raw: str
    keep_letters: bool = False


@dataclass(frozen=True)
class Rule:
    name: str
    apply: Callable[[str, RuleContext], Optional[str]]


def _has_special(word: str) -> bool:
    return any(c in SPECIAL for c in word)


def _reject_empty(word, ctx):
    return word or None


def _reject_too_short(word, ctx):
    return None if len(word) < MIN_LENGTH else word


def _reject_too_long(word, ctx):
    return None if len(word) > MAX_LENGTH else word


def _reject_many_uppercase(word, ctx):
    return None if sum(1 for c in word if c in UPPER) > 1 else word


def _reject_uppercase_without_dot(word, ctx):
    caps = sum(1 for c in word if c in UPPER)
    return None if caps == 1 and '.' not in word else word


def _strip_trailing_dot(word, ctx):
    return word[:-1] if word.endswith('.') else word


def _strip_whitespace(word, ctx):
    return word.strip()


def _reject_no_digit(word, ctx):
    return word if any(c in DIGITS for c in word) else None


def _reject_too_many_dots(word, ctx):
    return None if word.count('.') > 4 else word


def _reject_dots_without_separator(word, ctx):
    if word.count('.') > 3 and not any(c in '-+_' for c in word):
        return None
    return word


def _reject_doubled_special(word, ctx):
    return None if any(c + c in word for c in SPECIAL) else word


def _reject_filename_extension(word, ctx):
    # "setup.exe", "notes.md": a short suffix after the last dot
    if len(word) >= 4 and word[-1] not in DIGITS and '.' in (word[-4], word[-3]):
        return None
    return word


def _reject_leading_special(word, ctx):
    return None if word[0] in SPECIAL else word


def _reject_date_two_dashes(word, ctx):
    if word.count('-') == 2 and all(c in DIGITS + '-' for c in word):
        return None
    return word


def _reject_date_one_dash(word, ctx):
    if word.count('-') != 1:
        return word
    left, right = word.split('-')
    if len(left) <= 2 and len(right) <= 2 and all(c in DIGITS for c in left + right):
        return None
    return word


def _strip_letters(word, ctx):
    if ctx.keep_letters or any(m in word for m in KEEP_LETTER_MARKERS):
        return word
    stripped = ''.join(c for c in word if c in DIGITS or c in SPECIAL)
    if stripped.startswith('.'):
        stripped = stripped[1:]
    return stripped


def _reject_letters_before_dot(word, ctx):
    if '.' in word and all(c in LETTERS for c in word.split('.', 1)[0]):
        return None
    return word


def _reject_long_digit_run(word, ctx):
    longest = max((len(run) for run in _DIGIT_RUN_RE.findall(word)), default=0)
    return None if longest > 3 else word


def _reject_leading_zero(word, ctx):
    return None if not _has_special(word) and word.startswith('0') else word


def _reject_single_prefix(word, ctx):
    # "-1", "+2": one non-letter right before the first digit
    for pos, c in enumerate(word):
        if c in DIGITS:
            if pos == 1 and word[0] not in LETTERS:
                return None
            break
    return word


def _reject_all_zeros(word, ctx):
    return None if word and all(c == '0' for c in word) else word


def _reject_denylisted(word, ctx):
    for unrelated in DENYLIST:
        if unrelated in word or unrelated in ctx.raw:
            return None
    return word


RULES: List[Rule] = [
    Rule('empty', _reject_empty),
    Rule('too_short', _reject_too_short),
    Rule('too_long', _reject_too_long),
    Rule('many_uppercase', _reject_many_uppercase),
    Rule('uppercase_without_dot', _reject_uppercase_without_dot),
    Rule('strip_trailing_dot', _strip_trailing_dot),
    Rule('strip_whitespace', _strip_whitespace),
    Rule('no_digit', _reject_no_digit),
    Rule('too_many_dots', _reject_too_many_dots),
    Rule('dots_without_separator', _reject_dots_without_separator),
    Rule('doubled_special', _reject_doubled_special),
    Rule('filename_extension', _reject_filename_extension),
    Rule('leading_special', _reject_leading_special),
    Rule('date_two_dashes', _reject_date_two_dashes),
    Rule('date_one_dash', _reject_date_one_dash),
    Rule('strip_letters', _strip_letters),
    Rule('letters_before_dot', _reject_letters_before_dot),
    Rule('long_digit_run', _reject_long_digit_run),
    Rule('leading_zero', _reject_leading_zero),
    Rule('single_prefix', _reject_single_prefix),
    Rule('all_zeros', _reject_all_zeros),
    Rule('denylist', _reject_denylisted),
]

RULES_BY_NAME = {rule.name: rule for rule in RULES}


def evaluate(word: str, keep_letters: bool = False) -> Tuple[Optional[str], Optional[str]]:
    """Run the chain on ``word``.

    Returns ``(accepted_word, None)`` or ``(None, rejecting_rule_name)``.
    """
    ctx = RuleContext(raw=word, keep_letters=keep_letters)
    current = word
    for rule in RULES:
        result = rule.apply(current, ctx)
        if result is None:
            return None, rule.name
        current = result
    return current, None


def classify(word: str, keep_letters: bool = False) -> Optional[str]:
    """Return the accepted (possibly transformed) word, or ``None``."""
    return evaluate(word, keep_letters)[0]
