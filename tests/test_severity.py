# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for severity classification helpers."""

import pytest

from diaglint.severity import (
    PUNCTUATION_CLASSIFIER,
    Severity,
    SeverityClassifier,
    classify,
    severity_from_label,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("note: x", Severity.INFO),
        ("info: cached result", Severity.INFO),
        ("Error: y", Severity.ERROR),
        ("warning: unused variable", Severity.WARNING),
        ("   error: indented", Severity.ERROR),
        ("gibberish", Severity.WARNING),
        ("", Severity.WARNING),
    ],
)
def test_classify_full_word_prefixes(text: str, expected: Severity) -> None:
    assert classify(text) is expected


def test_classify_does_not_match_single_letters() -> None:
    assert classify("e") is Severity.WARNING
    assert classify("expected ';' before '}'") is Severity.WARNING


def test_whitespace_classifier_keeps_punctuation() -> None:
    assert classify("(error) bad thing") is Severity.WARNING


def test_punctuation_classifier_strips_leading_brackets_and_quotes() -> None:
    assert PUNCTUATION_CLASSIFIER.classify("(error) bad thing") is Severity.ERROR
    assert PUNCTUATION_CLASSIFIER.classify("[note] see here") is Severity.INFO
    assert PUNCTUATION_CLASSIFIER.classify("*'warning' quoted") is Severity.WARNING


def test_classifier_default_is_configurable() -> None:
    classifier = SeverityClassifier(default=Severity.ERROR)

    assert classifier.classify("something odd") is Severity.ERROR
    assert classifier.classify("note: fine") is Severity.INFO


def test_severity_from_label_uses_remap_table_case_insensitively() -> None:
    table = {"C": Severity.INFO, "E": Severity.ERROR}

    assert severity_from_label("c", table) is Severity.INFO
    assert severity_from_label("E", table) is Severity.ERROR


def test_severity_from_label_falls_back_to_classifier() -> None:
    assert severity_from_label("error", {}) is Severity.ERROR
    assert severity_from_label("W", {"E": Severity.ERROR}) is Severity.WARNING
