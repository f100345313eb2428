#!/usr/bin/env python3
"""
Unit tests for vote_tally.py.

Run with: python tests/test_vote_tally.py
"""

import sys
import unittest
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tally_types import ResolutionPolicy, TallyWarning, WarningCause
from vote_tally import add_position, count_ballot, tally, validate_ballot


MIXED_BALLOTS = [
    ["xyz2", "AVote4", "BVote4"],
    ["abc", "AVote2", "BVote2"],
    ["abc", "AVote3", "BVote3"],
    ["xyz", "AVote4", "BVote4"],
    ["hi", "AVote4", "BVote3"],
    ["hi2", "AVote4", "BVote2"],
    ["hi3", "AVote4"],
    ["hi4", "", "BVote2"],
    ["fake", "hi"],
]

MIXED_TOKENS = {
    "abc": "A",
    "bcd": "B",
    "hi": "H",
    "hi2": "H",
    "hi3": "H",
    "hi4": "H",
    "xyz": "X",
    "xyz2": "X2",
}


class TestAddPosition(unittest.TestCase):

    def test_creates_once(self):
        votes = {}
        for _ in range(3):
            add_position(votes, 0)
            self.assertEqual(votes, {0: {}})
        add_position(votes, 1)
        self.assertEqual(votes, {0: {}, 1: {}})

    def test_keeps_existing_counts(self):
        votes = {1: {"A": 2}}
        self.assertEqual(add_position(votes, 1), {"A": 2})


class TestCountBallot(unittest.TestCase):

    def test_counts_each_position(self):
        votes = {}
        count_ballot(votes, ["abc", "George Washington", "John Adams"])
        count_ballot(votes, ["bcd", "George Washington", "Aaron Burr"])
        self.assertEqual(votes, {
            1: {"George Washington": 2},
            2: {"John Adams": 1, "Aaron Burr": 1},
        })

    def test_empty_cells_abstain(self):
        votes = {}
        count_ballot(votes, ["abc", "", "Thomas Jefferson", None])
        self.assertEqual(votes, {2: {"Thomas Jefferson": 1}})

    def test_names_are_literal(self):
        votes = {}
        count_ballot(votes, ["a", "Alice"])
        count_ballot(votes, ["b", "alice"])
        count_ballot(votes, ["c", "Alice "])
        self.assertEqual(votes, {1: {"Alice": 1, "alice": 1, "Alice ": 1}})


class TestValidateBallot(unittest.TestCase):
    """Step-by-step validation against shared state."""

    def setUp(self):
        self.vote_counts = {}
        self.used_tokens = {}
        self.token_map = {"abc": "A", "bcd": "B", "efg": "E", "fgh": "F"}
        self.vote = ["George Washington", "John Adams", "Thomas Jefferson", "Alexander Hamilton"]

    def test_first_use_counts(self):
        warning = validate_ballot(self.vote_counts, self.used_tokens, ["abc"] + self.vote, self.token_map)
        self.assertIsNone(warning)
        self.assertEqual(self.used_tokens, {"abc": True})
        self.assertEqual(self.vote_counts, {
            1: {"George Washington": 1},
            2: {"John Adams": 1},
            3: {"Thomas Jefferson": 1},
            4: {"Alexander Hamilton": 1},
        })

    def test_repeat_use_is_not_counted(self):
        validate_ballot(self.vote_counts, self.used_tokens, ["abc"] + self.vote, self.token_map)
        for _ in range(2):
            warning = validate_ballot(self.vote_counts, self.used_tokens, ["abc"] + self.vote, self.token_map)
            self.assertEqual(str(warning), "abc (A) voted multiple times. Using latest.")
            self.assertEqual(warning.cause, WarningCause.DUPLICATE_TOKEN)
        self.assertEqual(self.used_tokens, {"abc": True})
        self.assertEqual(self.vote_counts[1], {"George Washington": 1})

    def test_repeat_wording_follows_policy(self):
        validate_ballot(self.vote_counts, self.used_tokens, ["bcd"], self.token_map, ResolutionPolicy.FIRST_WINS)
        warning = validate_ballot(
            self.vote_counts, self.used_tokens, ["bcd"], self.token_map, ResolutionPolicy.FIRST_WINS
        )
        self.assertEqual(warning.message, "bcd (B) voted multiple times. Using first.")

    def test_invalid_token(self):
        warning = validate_ballot(self.vote_counts, self.used_tokens, ["zzz"] + self.vote, self.token_map)
        self.assertEqual(warning, TallyWarning.invalid_token("zzz"))
        self.assertEqual(warning.message, "zzz is an invalid token. Vote not counted.")
        self.assertEqual(self.used_tokens, {})
        self.assertEqual(self.vote_counts, {})

    def test_short_ballots_abstain(self):
        self.assertIsNone(validate_ballot(self.vote_counts, self.used_tokens, ["efg", "", "", ""], self.token_map))
        self.assertIsNone(validate_ballot(self.vote_counts, self.used_tokens, ["fgh"], self.token_map))
        self.assertEqual(self.used_tokens, {"efg": True, "fgh": True})
        self.assertEqual(self.vote_counts, {})

    def test_empty_row_is_invalid(self):
        warning = validate_ballot(self.vote_counts, self.used_tokens, [], self.token_map)
        self.assertEqual(warning.cause, WarningCause.INVALID_TOKEN)


class TestTally(unittest.TestCase):
    """Tests for a full tally run."""

    def test_first_wins(self):
        report = tally([["T1", "X"], ["T1", "Y"]], {"T1": "OrgA"}, ResolutionPolicy.FIRST_WINS)
        self.assertEqual(report.per_position_counts, {1: {"X": 1}})
        self.assertEqual(report.total_valid_voters, 1)
        self.assertEqual(report.warning_messages, ["T1 (OrgA) voted multiple times. Using first."])

    def test_last_wins(self):
        report = tally([["T1", "X"], ["T1", "Y"]], {"T1": "OrgA"}, ResolutionPolicy.LAST_WINS)
        self.assertEqual(report.per_position_counts, {1: {"Y": 1}})
        self.assertEqual(report.warning_messages, ["T1 (OrgA) voted multiple times. Using latest."])

    def test_default_policy_is_last_wins(self):
        report = tally([["T1", "X"], ["T1", "Y"]], {"T1": "OrgA"})
        self.assertEqual(report.resolution_policy, ResolutionPolicy.LAST_WINS)
        self.assertEqual(report.per_position_counts, {1: {"Y": 1}})

    def test_invalid_token(self):
        report = tally([["ZZZ", "X"]], {"T1": "OrgA"})
        self.assertEqual(report.total_valid_voters, 0)
        self.assertEqual(report.per_position_counts, {})
        self.assertEqual(report.warning_messages, ["ZZZ is an invalid token. Vote not counted."])
        self.assertEqual(report.warnings[0].cause, WarningCause.INVALID_TOKEN)

    def test_mixed_ballots_latest(self):
        report = tally(MIXED_BALLOTS, MIXED_TOKENS)
        self.assertEqual(report.warning_messages, [
            "fake is an invalid token. Vote not counted.",
            "abc (A) voted multiple times. Using latest.",
        ])
        self.assertEqual(report.per_position_counts, {
            1: {"AVote3": 1, "AVote4": 5},
            2: {"BVote2": 2, "BVote3": 2, "BVote4": 2},
        })
        self.assertEqual(report.total_valid_voters, 7)

    def test_mixed_ballots_first(self):
        report = tally(MIXED_BALLOTS, MIXED_TOKENS, ResolutionPolicy.FIRST_WINS)
        self.assertEqual(report.warning_messages, [
            "abc (A) voted multiple times. Using first.",
            "fake is an invalid token. Vote not counted.",
        ])
        self.assertEqual(report.per_position_counts, {
            1: {"AVote2": 1, "AVote4": 5},
            2: {"BVote2": 3, "BVote3": 1, "BVote4": 2},
        })
        self.assertEqual(report.total_valid_voters, 7)

    def test_warning_order_follows_traversal(self):
        ballots = [["xyz2", ""], ["abc", ""], ["abc", ""], ["xyz", ""]]
        report = tally(ballots, {"abc": "A"})
        self.assertEqual(report.warning_messages, [
            "xyz is an invalid token. Vote not counted.",
            "abc (A) voted multiple times. Using latest.",
            "xyz2 is an invalid token. Vote not counted.",
        ])

    def test_empty_inputs(self):
        for ballots, token_map in (([], {}), ([], {"a": "A"}), ([["a", "X"]], {})):
            report = tally(ballots, token_map)
            self.assertEqual(report.per_position_counts, {})
            if not ballots:
                self.assertEqual(report.warnings, [])
            self.assertEqual(report.total_valid_voters, 0)

    def test_runs_do_not_share_state(self):
        first = tally(MIXED_BALLOTS, MIXED_TOKENS)
        second = tally(MIXED_BALLOTS, MIXED_TOKENS)
        self.assertEqual(first, second)
        self.assertIsNot(first.per_position_counts, second.per_position_counts)

    def test_input_not_modified(self):
        ballots = [list(b) for b in MIXED_BALLOTS]
        tally(ballots, MIXED_TOKENS)
        self.assertEqual(ballots, MIXED_BALLOTS)

    def test_position_totals_never_exceed_voters(self):
        report = tally(MIXED_BALLOTS, MIXED_TOKENS)
        for counts in report.per_position_counts.values():
            self.assertLessEqual(sum(counts.values()), report.total_valid_voters)


if __name__ == "__main__":
    unittest.main(verbosity=2)
