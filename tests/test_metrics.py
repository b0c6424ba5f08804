#!/usr/bin/env python3
"""
Tests for per-player statistics and leaderboard ranking.

Run with:
    python -m pytest tests/test_metrics.py
"""
import unittest
from datetime import date

from clubf4_core.metrics import (
    compute_player_stats,
    format_score,
    leaderboard_frame,
    recent_score,
    safe_div,
)
from clubf4_core.models import MEMBERS, PlayerName, Round, ScoreEntry

G, B, P, S = PlayerName.GREGORY, PlayerName.BIRCHAN, PlayerName.PETER, PlayerName.SEVEN


def _round(round_id, day, **scores):
    return Round(
        id=round_id,
        date=day,
        course="Course " + round_id,
        scores=tuple(ScoreEntry(PlayerName(name), score) for name, score in scores.items()),
    )


R1 = _round("1", date(2024, 5, 15), GREGORY=82, BIRCHAN=85, PETER=79, SEVEN=88)
R2 = _round("2", date(2024, 6, 10), GREGORY=80, BIRCHAN=82, PETER=81, SEVEN=84)


def _by_player(stats):
    return {s.player: s for s in stats}


# ===========================================================================
# Helpers
# ===========================================================================

class TestHelpers(unittest.TestCase):

    def test_safe_div(self):
        self.assertEqual(safe_div(10, 4), 2.5)
        self.assertEqual(safe_div(10, 0), 0.0)

    def test_format_score(self):
        self.assertEqual(format_score(81.25, 1), "81.2")
        self.assertEqual(format_score(0), "-")
        self.assertEqual(format_score(79), "79")


# ===========================================================================
# compute_player_stats
# ===========================================================================

class TestComputePlayerStats(unittest.TestCase):

    def test_two_round_scenario_averages(self):
        stats = _by_player(compute_player_stats([R1, R2], [R1, R2]))
        self.assertEqual(stats[G].average_score, 81.0)
        self.assertEqual(stats[B].average_score, 83.5)
        self.assertEqual(stats[P].average_score, 80.0)
        self.assertEqual(stats[S].average_score, 86.0)

    def test_two_round_scenario_rank_order(self):
        stats = compute_player_stats([R1, R2], [R1, R2])
        self.assertEqual([s.player for s in stats], [P, G, B, S])
        self.assertEqual([s.rank for s in stats], [1, 2, 3, 4])

    def test_best_total_and_games(self):
        stats = _by_player(compute_player_stats([R1, R2], [R1, R2]))
        self.assertEqual(stats[P].best_score, 79)
        self.assertEqual(stats[P].total_score, 160)
        self.assertEqual(stats[P].games_played, 2)

    def test_player_without_games_sinks_to_bottom(self):
        only_three = _round("3", date(2024, 6, 12), GREGORY=95, BIRCHAN=99, PETER=101)
        stats = compute_player_stats([only_three], [R1, only_three])
        last = stats[-1]
        self.assertEqual(last.player, S)
        self.assertEqual(last.average_score, 0)
        self.assertEqual(last.best_score, 0)
        self.assertEqual(last.games_played, 0)
        self.assertEqual(last.rank, 4)

    def test_all_players_without_games_keep_member_order(self):
        stats = compute_player_stats([], [R1, R2])
        self.assertEqual([s.player for s in stats], list(MEMBERS))
        self.assertTrue(all(s.average_score == 0 for s in stats))

    def test_ties_get_consecutive_ranks_in_member_order(self):
        tie = _round("t", date(2024, 6, 1), GREGORY=80, BIRCHAN=80, PETER=80, SEVEN=80)
        stats = compute_player_stats([tie], [tie])
        self.assertEqual([s.player for s in stats], list(MEMBERS))
        self.assertEqual([s.rank for s in stats], [1, 2, 3, 4])

    def test_rank_is_a_permutation(self):
        stats = compute_player_stats([R2], [R1, R2])
        self.assertEqual(sorted(s.rank for s in stats), [1, 2, 3, 4])

    def test_zero_score_is_not_counted_as_a_game(self):
        zero = _round("z", date(2024, 6, 20), GREGORY=0, BIRCHAN=90)
        stats = _by_player(compute_player_stats([R1, zero], [R1, zero]))
        self.assertEqual(stats[G].games_played, 1)
        self.assertEqual(stats[G].average_score, 82.0)


# ===========================================================================
# Recent score
# ===========================================================================

class TestRecentScore(unittest.TestCase):

    def test_recent_uses_full_history_not_period(self):
        # Only R1 is in the period, but R2 is the latest round overall.
        stats = _by_player(compute_player_stats([R1], [R1, R2]))
        self.assertEqual(stats[G].recent_score, 80)
        self.assertEqual(stats[G].average_score, 82.0)

    def test_recent_ignores_storage_order(self):
        self.assertEqual(recent_score([R2, R1], S), 84)

    def test_recent_skips_rounds_without_the_player(self):
        later = _round("3", date(2024, 7, 1), GREGORY=77)
        self.assertEqual(recent_score([R1, R2, later], B), 82)
        self.assertEqual(recent_score([R1, R2, later], G), 77)

    def test_recent_is_zero_for_never_played(self):
        self.assertEqual(recent_score([], P), 0)


# ===========================================================================
# leaderboard_frame
# ===========================================================================

class TestLeaderboardFrame(unittest.TestCase):

    def test_frame_rows_follow_rank(self):
        frame = leaderboard_frame(compute_player_stats([R1, R2], [R1, R2]))
        self.assertEqual(list(frame["Member"]), ["PETER", "GREGORY", "BIRCHAN", "SEVEN"])
        self.assertEqual(list(frame["AVG"]), ["80.0", "81.0", "83.5", "86.0"])
        self.assertEqual(list(frame["Code"]), ["J71", "B59", "K341", "K396"])

    def test_frame_shows_dash_for_empty_values(self):
        frame = leaderboard_frame(compute_player_stats([], []))
        self.assertTrue((frame["AVG"] == "-").all())
        self.assertTrue((frame["RECENT"] == "-").all())


if __name__ == '__main__':
    unittest.main()
