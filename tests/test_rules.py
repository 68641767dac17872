import pytest

from getver.versioning.rules import RULES, RULES_BY_NAME, RuleContext, classify, evaluate


def _apply(name, word, raw=None, keep_letters=False):
    ctx = RuleContext(raw=raw if raw is not None else word, keep_letters=keep_letters)
    return RULES_BY_NAME[name].apply(word, ctx)


def test_rule_order_is_stable():
    names = [rule.name for rule in RULES]
    assert names[0] == 'empty'
    assert names[-1] == 'denylist'
    assert names.index('strip_letters') < names.index('letters_before_dot')
    assert len(names) == len(set(names)) == 22


@pytest.mark.parametrize('word', ['2.0.1', '0.1.2', '3.2.1', '1.0', '10.4', '1.2.3-rc1'])
def test_version_like_words_accepted(word):
    assert classify(word) is not None


def test_accepted_unchanged():
    assert classify('2.0.1') == '2.0.1'
    assert classify('0.1.2') == '0.1.2'


@pytest.mark.parametrize('word,rule', [
    ('', 'empty'),
    ('0', 'too_short'),
    ('1.2.3.4.5.6.7.8.9', 'too_long'),
    ('README.md', 'many_uppercase'),
    ('Version1', 'uppercase_without_dot'),
    ('release', 'no_digit'),
    ('1.2.3.4.5.6', 'too_many_dots'),
    ('1.2.3.4.5', 'dots_without_separator'),
    ('1..2', 'doubled_special'),
    ('v1.2.tar', 'filename_extension'),
    ('-1.2', 'leading_special'),
    ('2016-01-29', 'date_two_dashes'),
    ('12-24', 'date_one_dash'),
    ('a.b.1', 'letters_before_dot'),
    ('1.2016', 'long_digit_run'),
    ('012', 'leading_zero'),
    ('i686', 'denylist'),
    ('x86_64', 'denylist'),
])
def test_rejections_name_the_rule(word, rule):
    accepted, rejected_by = evaluate(word)
    assert accepted is None
    assert rejected_by == rule


def test_trailing_dot_is_stripped():
    assert classify('3.2.1.') == '3.2.1'


def test_letters_are_stripped_by_default():
    assert classify('v2.4') == '2.4'
    assert classify('1.2.3-rc1') == '1.2.3-1'


def test_keep_letters():
    assert classify('v2.4', keep_letters=True) == 'v2.4'
    assert classify('1.2.3-rc1', keep_letters=True) == '1.2.3-rc1'


def test_alpha_and_beta_keep_their_letters():
    assert classify('1.0-beta2') == '1.0-beta2'
    assert classify('2.0alpha') == '2.0alpha'


def test_many_dots_allowed_with_separator():
    assert classify('1.2.3.4-1') == '1.2.3.4-1'


def test_denylist_checks_raw_token_even_after_stripping():
    # "i686" would be stripped to "686" otherwise
    assert classify('i686') is None
    assert classify('i686', keep_letters=True) is None


# ---- individual rules ----

def test_filename_rule():
    assert _apply('filename_extension', 'notes.md') is None
    assert _apply('filename_extension', 'setup.exe') is None
    assert _apply('filename_extension', '1.2.3') == '1.2.3'
    assert _apply('filename_extension', 'abc') == 'abc'


def test_date_one_dash_rule():
    assert _apply('date_one_dash', '1-2') is None
    assert _apply('date_one_dash', '1.2-3') == '1.2-3'
    assert _apply('date_one_dash', '123-4') == '123-4'
    assert _apply('date_one_dash', '1-rc') == '1-rc'


def test_strip_letters_rule_drops_leading_dot():
    assert _apply('strip_letters', 'v.1.2') == '1.2'


def test_letters_before_dot_rule():
    assert _apply('letters_before_dot', '.5') is None
    assert _apply('letters_before_dot', 'v2.1') == 'v2.1'


def test_single_prefix_rule():
    assert _apply('single_prefix', '+1.2') is None
    assert _apply('single_prefix', 'v1.2') == 'v1.2'
    assert _apply('single_prefix', '1.2') == '1.2'


def test_all_zeros_rule():
    assert _apply('all_zeros', '000') is None
    assert _apply('all_zeros', '0.0') == '0.0'


def test_long_digit_run_rule():
    assert _apply('long_digit_run', '1.234') == '1.234'
    assert _apply('long_digit_run', '12345') is None


def test_leading_zero_rule():
    assert _apply('leading_zero', '01') is None
    assert _apply('leading_zero', '0.1') == '0.1'


def test_denylist_rule_uses_raw_word():
    assert _apply('denylist', '686', raw='i686') is None
    assert _apply('denylist', '1.2', raw='1.2') == '1.2'


def test_letters_before_dot_with_kept_letters():
    assert evaluate('jquery.3', keep_letters=True) == (None, 'letters_before_dot')
    # Stripping leaves only "3"
    assert classify('jquery.3') == '3'
