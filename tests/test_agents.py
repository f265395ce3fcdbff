"""
Tests for the agent configuration, the baseline agents and the TD-learning slider.
"""

import tempfile
from pathlib import Path
from unittest import TestCase, main

from threes.addons.config import AgentConfig, parse_args
from threes.addons.errors import ConfigurationError, WeightFileError
from threes.agents import GreedySlider, Place, RandomPlacer, RandomSlider, Slide, TDSlider
from threes.agents.baseline import lookahead
from threes.core.board import Board
from threes.core.gamemove import ACTIONS

DEAD = [1, 3, 1, 3, 3, 1, 3, 1, 1, 3, 1, 3, 3, 1, 3, 1]


class TestAgentConfig(TestCase):
    """Test the parsing of key=value tokens."""

    def test_parse_args(self):
        """Tokens are split on spaces and the last value wins."""
        self.assertEqual(parse_args("name=a alpha=0.1 name=b"), {"name": "b", "alpha": "0.1"})
        with self.assertRaises(ConfigurationError):
            parse_args("alpha")

    def test_typed_values(self):
        """Values are converted to their field types."""
        config = AgentConfig.from_args("alpha=0.05 seed=3 save=w.bin init=65536,65536 fallback=1")
        self.assertEqual(config.alpha, 0.05)
        self.assertEqual(config.seed, 3)
        self.assertEqual(config.save, Path("w.bin"))
        self.assertEqual(config.init, (65536, 65536))
        self.assertTrue(config.fallback)
        self.assertIsNone(config.load)

    def test_defaults_are_overridden(self):
        """Explicit tokens override the defaults of the agent."""
        config = AgentConfig.from_args("name=learner", name="slide", role="slider")
        self.assertEqual(config.name, "learner")
        self.assertEqual(config.role, "slider")

    def test_invalid_values(self):
        """Unknown keys and uncoercible values are rejected."""
        for args in ["colour=red", "alpha=fast", "alpha=-1", "seed=1.5", "index=hash", "init=none", "fallback=maybe"]:
            with self.assertRaises(ConfigurationError, msg=args):
                AgentConfig.from_args(args)


class TestBaselineAgents(TestCase):
    """Test the random and greedy sliders and the random placer."""

    def test_random_slider(self):
        """The random slider plays a legal direction, or nothing on a dead board."""
        slider = RandomSlider(AgentConfig(seed=1))
        board = Board([3] + [0] * 15)
        for _ in range(10):
            self.assertIn(slider.select_action(board).direction, (ACTIONS["right"], ACTIONS["down"]))
        self.assertIsNone(slider.select_action(Board(DEAD)))

    def test_greedy_slider(self):
        """The greedy slider takes the merging move."""
        slider = GreedySlider(AgentConfig(), depth=1)
        board = Board([1, 2, 0, 0] + [0] * 12)
        self.assertEqual(slider.select_action(board), Slide(ACTIONS["left"]))
        self.assertIsNone(slider.select_action(Board(DEAD)))
        with self.assertRaises(ValueError):
            GreedySlider(AgentConfig(), depth=4)

    def test_lookahead(self):
        """Deeper lookahead adds the reward of the following slides."""
        board = Board([1, 2, 0, 0, 2, 1, 0, 0] + [0] * 8)
        # ##>: Up and left both merge the two pairs, up comes first.
        self.assertEqual(lookahead(board, 1), (ACTIONS["up"], 6))
        direction, reward = lookahead(board, 2)
        self.assertGreaterEqual(reward, 6)
        # ##>: A position without legal slide scores -1 at every depth.
        for depth in (1, 2, 3):
            self.assertEqual(lookahead(Board(DEAD), depth), (None, -1))

    def test_placer_opening(self):
        """Opening placements may use any empty cell and keep the bag consistent."""
        placer = RandomPlacer.from_args("seed=5")
        board = Board()
        for count in range(1, 10):
            action = placer.select_action(board)
            self.assertIsInstance(action, Place)
            self.assertEqual(board[action.position], 0)
            action.apply(board)
            self.assertEqual(sum(1 for position in range(16) if board[position]), count)
            self.assertIn(board.hint, (1, 2, 3))

    def test_placer_uses_hint_on_exposed_edge(self):
        """After a slide the hint tile goes on the exposed edge."""
        placer = RandomPlacer.from_args("seed=5")
        board = Board([3, 0, 0, 0] * 4, hint=2, bag={1: 1, 2: 0, 3: 1})
        board.slide(ACTIONS["right"])
        action = placer.select_action(board)
        self.assertIn(action.position, (0, 4, 8, 12))
        self.assertEqual(action.tile, 2)
        self.assertIn(action.hint, (1, 3))

    def test_placer_without_space(self):
        """The placer has no action when the exposed edge is full."""
        placer = RandomPlacer.from_args()
        self.assertIsNone(placer.select_action(Board([3] * 16, hint=1)))


class TestTDSlider(TestCase):
    """Test the TD-learning slider."""

    def setUp(self):
        """Create a temporary directory."""
        self._directory = tempfile.TemporaryDirectory()
        self.path = Path(self._directory.name) / "weights.bin"

    def tearDown(self):
        """Remove the temporary directory."""
        self._directory.cleanup()

    def test_defaults(self):
        """The slider is named after its role and uses the line tuples."""
        slider = TDSlider.from_args()
        self.assertEqual(slider.name, "slide")
        self.assertEqual(slider.role, "slider")
        self.assertEqual(len(slider.network.descriptors), 8)
        self.assertEqual(slider.network.index.version, 2)

    def test_init_sizes_must_match(self):
        """Table sizes disagreeing with the tuples are a configuration error."""
        with self.assertRaises(ConfigurationError):
            TDSlider.from_args("init=65536")
        TDSlider.from_args("init=" + ",".join(["65536"] * 8))
        TDSlider.from_args("index=sum init=" + ",".join(["61"] * 8))

    def test_missing_weights(self):
        """A missing weight file is fatal unless falling back."""
        with self.assertRaises(WeightFileError):
            TDSlider.from_args(f"load={self.path}")
        slider = TDSlider.from_args(f"load={self.path} fallback=1")
        self.assertEqual(slider.network.value(Board([3] * 16)), 0.0)

    def test_save_and_load(self):
        """Saved weights are loaded by a new slider."""
        slider = TDSlider.from_args(f"save={self.path}")
        slider.network.update(Board([1, 2, 3] + [0] * 13), 0.5)
        slider.save()

        loaded = TDSlider.from_args(f"load={self.path}")
        board = Board([1, 2, 3] + [0] * 13)
        self.assertEqual(loaded.network.value(board), slider.network.value(board))

    def test_episode_window(self):
        """Slides fill the window and the terminal board clears it with a final update."""
        slider = TDSlider.from_args("alpha=0.5")
        slider.reset_episode()
        board = Board([1, 2, 0, 0] + [0] * 12, hint=3)

        action = slider.select_action(board)
        self.assertIsInstance(action, Slide)
        prev = slider.learner.prev
        self.assertIsNotNone(prev)

        slider.network.update(prev, 1.0)
        value = slider.network.value(prev)
        self.assertIsNone(slider.select_action(Board(DEAD, hint=1)))
        self.assertIsNone(slider.learner.prev)
        self.assertLess(slider.network.value(prev), value)


if __name__ == "__main__":
    main()
