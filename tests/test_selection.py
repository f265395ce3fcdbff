"""
Tests for the one-ply expectimax selection of slides.
"""

from unittest import TestCase, main

import numpy as np

from threes.agents.selection import best_slide_value, candidate_tiles, chance_value, select_action
from threes.core.board import Board, slide
from threes.core.gamemove import ACTIONS, DIRECTIONS
from threes.network import TUPLE_SETS, NTupleNetwork

generator = np.random.default_rng(3)

DEAD = [1, 3, 1, 3, 3, 1, 3, 1, 1, 3, 1, 3, 3, 1, 3, 1]


class TestChanceNode(TestCase):
    """Test the expectation over tile insertions."""

    def setUp(self):
        """Create a network with random weights."""
        self.network = NTupleNetwork(TUPLE_SETS["lines"])
        for table in self.network.tables:
            table.weights[:] = generator.normal(size=len(table))

    def test_no_candidate_cell(self):
        """An exposed edge without empty cell contributes zero."""
        board = Board([0, 0, 0, 3] * 4, hint=1)
        self.assertEqual(chance_value(self.network, board, ACTIONS["left"]), 0.0)

    def test_single_candidate_cell(self):
        """With one candidate cell the expectation is exactly its best next value."""
        board = Board([0, 0, 0, 3, 0, 0, 0, 3, 0, 1, 0, 0, 0, 0, 0, 3], hint=2)
        expected = best_slide_value(self.network, board.with_tile(11, 2))
        self.assertEqual(chance_value(self.network, board, ACTIONS["left"]), expected)

    def test_average_over_cells(self):
        """Candidate cells are weighted uniformly."""
        board = Board([0, 0, 0, 3, 0, 0, 0, 0, 0, 1, 0, 0, 0, 0, 0, 3], hint=2)
        values = [best_slide_value(self.network, board.with_tile(position, 2)) for position in (7, 11)]
        self.assertAlmostEqual(chance_value(self.network, board, ACTIONS["left"]), sum(values) / 2)

    def test_unknown_hint_uses_bag(self):
        """Without hint, the tiles left in the bag are candidates."""
        board = Board([0, 0, 0, 3] * 3 + [0, 0, 0, 0], bag={1: 1, 2: 0, 3: 1})
        self.assertEqual(candidate_tiles(board), [1, 3])
        values = [best_slide_value(self.network, board.with_tile(15, tile)) for tile in (1, 3)]
        self.assertAlmostEqual(chance_value(self.network, board, ACTIONS["left"]), sum(values) / 2)

    def test_dead_child_contributes_zero(self):
        """An insertion leaving no legal slide contributes zero."""
        cells = list(DEAD)
        cells[15] = 0
        board = Board(cells, hint=1)
        self.assertIsNone(best_slide_value(self.network, board.with_tile(15, 1)))
        self.assertEqual(chance_value(self.network, board, ACTIONS["left"]), 0.0)


class TestSelectAction(TestCase):
    """Test the choice of the slide."""

    def setUp(self):
        """Create a network with zero weights."""
        self.network = NTupleNetwork(TUPLE_SETS["lines"])

    def test_terminal_board(self):
        """No legal slide gives no selection."""
        self.assertIsNone(select_action(self.network, Board(DEAD, hint=1)))

    def test_tie_keeps_first_direction(self):
        """Equal scores keep the earliest direction."""
        board = Board([0] * 5 + [3] + [0] * 10, hint=1)
        selection = select_action(self.network, board)
        self.assertEqual(selection.direction, 0)
        self.assertEqual(selection.score, 0.0)

    def test_selects_best_score(self):
        """The selection maximizes reward, afterstate value and chance value."""
        for table in self.network.tables:
            table.weights[:] = generator.normal(size=len(table))
        board = Board([1, 2, 0, 3, 0, 6, 0, 0, 2, 0, 0, 1, 0, 3, 0, 0], hint=2)

        scores = {}
        for direction in DIRECTIONS:
            after, reward = slide(board, direction)
            if reward != -1:
                scores[direction] = reward + self.network.value(after) + chance_value(self.network, after, direction)
        best = max(scores.values())
        expected = min(direction for direction, score in scores.items() if score == best)

        selection = select_action(self.network, board)
        self.assertEqual(selection.direction, expected)
        self.assertEqual(selection.score, best)
        self.assertEqual(selection.afterstate, slide(board, expected)[0])

    def test_board_unchanged(self):
        """Selecting a slide does not modify the board."""
        board = Board([1, 2, 0, 0] + [0] * 12, hint=3)
        before = board.copy()
        select_action(self.network, board)
        self.assertEqual(board, before)


if __name__ == "__main__":
    main()
