import pytest

from app.core.choices import NO_ANSWER
from app.services.scoring import (
    demographic_or_none,
    is_valid_employee_code,
    is_valid_score,
    normalize_employee_code,
    score_answer,
)


@pytest.mark.parametrize("raw,expected", [(1, 6), (2, 5), (3, 4), (4, 3), (5, 2), (6, 1)])
def test_reverse_score_reflects_around_middle(raw, expected):
    assert score_answer(raw, is_reverse=True) == expected


def test_forward_score_is_identity():
    for raw in range(1, 7):
        assert score_answer(raw, is_reverse=False) == raw


def test_scored_value_always_in_range():
    for raw in range(1, 7):
        for reverse in (True, False):
            assert 1 <= score_answer(raw, reverse) <= 6


@pytest.mark.parametrize("value", ["a01", "  a01  ", "A00123", "abcdefghij0123456789"])
def test_normalize_is_idempotent(value):
    once = normalize_employee_code(value)
    assert normalize_employee_code(once) == once
    assert once == once.upper()


@pytest.mark.parametrize("value,ok", [
    ("A01", True),
    ("a01", True),
    ("AB", False),
    ("A" * 21, False),
    ("A-01", False),
    ("A 01", False),
    ("A01\n", False),
    ("ＡＢＣ", False),  # ancho completo
    ("", False),
])
def test_employee_code_format(value, ok):
    assert is_valid_employee_code(value) is ok


@pytest.mark.parametrize("value,ok", [
    (1, True), (6, True), (0, False), (7, False),
    (3.0, False), ("3", False), (True, False), (None, False),
])
def test_score_predicate(value, ok):
    assert is_valid_score(value) is ok


def test_no_answer_sentinel_becomes_null():
    assert demographic_or_none(NO_ANSWER) is None
    assert demographic_or_none(None) is None
    assert demographic_or_none("女性") == "女性"
