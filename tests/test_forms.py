#!/usr/bin/env python3
"""
Tests for the record-round form helpers.

Run with:
    python -m pytest tests/test_forms.py
"""
import unittest
from datetime import date

from clubf4_core.errors import FormValidationError
from clubf4_core.forms import form_defaults, parse_score_input, validate_round_form
from clubf4_core.models import MEMBERS, PlayerName, Round, ScoreEntry


def _raw(**overrides):
    scores = {PlayerName.GREGORY: "82", PlayerName.BIRCHAN: "85", PlayerName.PETER: "79", PlayerName.SEVEN: "88"}
    scores.update({PlayerName(k): v for k, v in overrides.items()})
    return scores


class TestParseScoreInput(unittest.TestCase):

    def test_plain_integer(self):
        self.assertEqual(parse_score_input("82"), 82)

    def test_leading_digits_and_whitespace(self):
        self.assertEqual(parse_score_input(" 79 "), 79)
        self.assertEqual(parse_score_input("91pts"), 91)

    def test_blank_or_text_is_zero(self):
        self.assertEqual(parse_score_input(""), 0)
        self.assertEqual(parse_score_input("abc"), 0)
        self.assertEqual(parse_score_input(None), 0)

    def test_numeric_values(self):
        self.assertEqual(parse_score_input(80), 80)
        self.assertEqual(parse_score_input(80.9), 80)


class TestValidateRoundForm(unittest.TestCase):

    def test_valid_form_returns_one_entry_per_member(self):
        course, scores = validate_round_form("  Sunset Ridge  ", _raw())
        self.assertEqual(course, "Sunset Ridge")
        self.assertEqual([s.player for s in scores], list(MEMBERS))
        self.assertEqual([s.score for s in scores], [82, 85, 79, 88])

    def test_blank_course_is_rejected(self):
        with self.assertRaises(FormValidationError):
            validate_round_form("   ", _raw())

    def test_zero_score_is_rejected(self):
        with self.assertRaises(FormValidationError):
            validate_round_form("Course", _raw(SEVEN="0"))

    def test_negative_score_is_rejected(self):
        with self.assertRaises(FormValidationError):
            validate_round_form("Course", _raw(PETER="-3"))

    def test_missing_member_is_rejected(self):
        raw = _raw()
        del raw[PlayerName.BIRCHAN]
        with self.assertRaises(FormValidationError):
            validate_round_form("Course", raw)


class TestFormDefaults(unittest.TestCase):

    def test_add_defaults(self):
        defaults = form_defaults(today=date(2024, 6, 17))
        self.assertEqual(defaults["date"], date(2024, 6, 17))
        self.assertEqual(defaults["course"], "")
        self.assertEqual(set(defaults["scores"].values()), {""})

    def test_edit_defaults_prefill_existing_round(self):
        existing = Round(
            id="1",
            date=date(2024, 5, 15),
            course="Green Valley",
            scores=(ScoreEntry(PlayerName.GREGORY, 82), ScoreEntry(PlayerName.PETER, 79)),
        )
        defaults = form_defaults(existing)
        self.assertEqual(defaults["date"], date(2024, 5, 15))
        self.assertEqual(defaults["course"], "Green Valley")
        self.assertEqual(defaults["scores"][PlayerName.GREGORY], "82")
        self.assertEqual(defaults["scores"][PlayerName.SEVEN], "")


if __name__ == '__main__':
    unittest.main()
