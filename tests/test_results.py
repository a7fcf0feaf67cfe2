# tests/test_results.py
"""Result standardization and duplicate handling."""
import pytest

from core.results import dedup_key, deduplicate_tests, standardize_result
from core.types import LabTest


def _t(name, result, status):
    return LabTest(name=name, result=result, status=status)


# --------------------------------------------------------------------------- standardize_result
@pytest.mark.parametrize("text, expected", [
    ("NEGATIVE", "negative"),
    ("Non-Reactive", "negative"),
    ("  not detected ", "negative"),
    ("No HIV-1 or HIV-2 antibodies detected", "negative"),
    ("Evidence of immunity", "negative"),
    ("POSITIVE", "positive"),
    ("Reactive", "positive"),
    ("Detected", "positive"),
    ("HIV-1 antibodies detected", "positive"),
    ("12.5 mIU/mL", "pending"),
    ("Equivocal", "pending"),
    ("see comment", "pending"),
    ("", "pending"),
    (None, "pending"),
])
def test_standardize_result(text, expected):
    assert standardize_result(text) == expected


# --------------------------------------------------------------------------- dedup_key
@pytest.mark.parametrize("name", ["HIV-1/2", "hiv 1/2", "  Hiv_1   2 "])
def test_dedup_key_ignores_case_and_separators(name):
    assert dedup_key(name) == "hiv 1 2"


def test_blank_names_never_group_together():
    assert dedup_key("") != dedup_key("")
    assert dedup_key(" - ").startswith("__empty_")


# --------------------------------------------------------------------------- deduplicate_tests
def test_empty_input():
    out = deduplicate_tests([])
    assert out.tests == [] and out.conflicts == []
    assert out.stats == {"total_input": 0, "unique_tests": 0, "duplicates_removed": 0, "conflicts_detected": 0}


def test_same_status_keeps_most_detailed_row():
    short = _t("HIV-1/2", "Neg", "negative")
    long = _t("hiv 1/2", "Non-Reactive", "negative")
    out = deduplicate_tests([short, long, _t("RPR", "Non-Reactive", "negative")])

    assert out.tests[0] is long
    assert out.tests[1].name == "RPR"
    assert out.conflicts == []
    assert out.stats["duplicates_removed"] == 1
    assert out.stats["unique_tests"] == 2


def test_conflict_prefers_positive():
    neg = _t("Syphilis", "Non-Reactive", "negative")
    pos = _t("SYPHILIS", "Reactive", "positive")
    pend = _t("syphilis", "Equivocal", "pending")
    out = deduplicate_tests([neg, pos, pend])

    assert out.tests == [pos]
    assert len(out.conflicts) == 1
    c = out.conflicts[0]
    assert c.test_name == "Syphilis"
    assert c.occurrences == [neg, pos, pend]
    assert c.suggested is pos
    assert out.stats == {"total_input": 3, "unique_tests": 1, "duplicates_removed": 2, "conflicts_detected": 1}


def test_unknown_status_loses_to_known():
    odd = _t("HCV", "???", "weird")
    pend = _t("hcv", "x", "pending")
    out = deduplicate_tests([odd, pend])
    assert out.tests == [pend]
    assert out.conflicts[0].suggested is pend
