"""Test term splitting and the coefficient/name tokenizer."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from fbar.errors import MalformedTermError
from fbar.terms import Term, parse_met_list, split_terms, tokenize_term


@pytest.mark.parametrize(
    "term, expected",
    [
        ("B", Term(1.0, "B")),
        ("2 B", Term(2.0, "B")),
        ("  3   atp ", Term(3.0, "atp")),
        ("0.5 o2", Term(0.5, "o2")),
        ("(0.5) nadh", Term(0.5, "nadh")),
        ("(2) h", Term(2.0, "h")),
        ("1e-3 h2o", Term(0.001, "h2o")),
        ("-1 A", Term(-1.0, "A")),
    ],
)
def test_coefficient_tokens(term, expected):
    assert tokenize_term(term) == expected


@pytest.mark.parametrize(
    "term, name",
    [
        ("2-oxoglutarate", "2-oxoglutarate"),  # digit-led name, no whitespace after run
        ("3pg", "3pg"),
        ("e- acceptor", "e- acceptor"),         # run is not a number
        ("1.5.2 X", "1.5.2 X"),
        ("() X", "() X"),
        ("- A", "- A"),
        ("10", "10"),                           # no trailing whitespace: a name
    ],
)
def test_numeric_looking_names_stay_whole(term, name):
    assert tokenize_term(term) == Term(1.0, name)


def test_coefficient_before_digit_led_name():
    assert tokenize_term("2 2-oxoglutarate") == Term(2.0, "2-oxoglutarate")


def test_dangling_coefficient_gives_empty_name():
    assert tokenize_term("2 ") == Term(2.0, "")


@pytest.mark.parametrize("coef", [1.0, 2.0, 0.25, 3.5, 1e-4, 12.0])
@pytest.mark.parametrize("met", ["A", "glc__D_e", "2pg", "co2[c]"])
def test_rebuilt_term_reads_back(coef, met):
    t = tokenize_term(f"{coef!r} {met}")
    assert t.stoich == pytest.approx(coef)
    assert t.met == met


def test_split_terms():
    assert split_terms("A + 2 B + C") == ["A", "2 B", "C"]
    assert split_terms("") == []
    assert split_terms("A") == ["A"]
    # '+' without surrounding spaces is part of a name
    assert split_terms("fe2+ + B") == ["fe2+", "B"]


def test_parse_met_list_frame():
    df = parse_met_list(["A", "2 B", "(3) C"])
    assert list(df.columns) == ["stoich", "met"]
    assert np.allclose(df["stoich"], [1.0, 2.0, 3.0])
    assert df["met"].tolist() == ["A", "B", "C"]


def test_parse_met_list_empty():
    df = parse_met_list([])
    assert len(df) == 0
    assert list(df.columns) == ["stoich", "met"]


def test_dangling_term_strict_raises():
    with pytest.raises(MalformedTermError, match="R7"):
        parse_met_list(["A", "2 "], strict=True, labels=["R7", "R7"])


def test_dangling_term_permissive_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="fbar.terms"):
        df = parse_met_list(["A", "2 "])
    assert df["met"].tolist() == ["A", ""]
    assert any("no metabolite" in r.getMessage() for r in caplog.records)


def test_labels_length_checked():
    with pytest.raises(ValueError):
        parse_met_list(["A", "B"], labels=["R1"])
