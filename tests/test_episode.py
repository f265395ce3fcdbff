"""
Tests for the episode driver, the statistics and the command line.

Tests cover complete episodes between agents, reproducibility with seeds, block summaries and the
training entry point.
"""

import tempfile
from pathlib import Path
from unittest import TestCase, main

from threes.addons.config import AgentConfig
from threes.agents import RandomPlacer, RandomSlider, TDSlider
from threes.game import EpisodeResult, Statistics, play_episode
from threes.train import build_slider
from threes.train import main as train_main


class TestPlayEpisode(TestCase):
    """Test complete episodes."""

    def test_random_episode(self):
        """A random episode ends on a finished board."""
        result = play_episode(RandomSlider(AgentConfig(seed=1)), RandomPlacer(AgentConfig(seed=2)))
        self.assertGreater(result.steps, 0)
        self.assertGreaterEqual(result.max_tile, 3)
        self.assertGreaterEqual(result.score, 0)

    def test_seed_reproducibility(self):
        """Same seeds produce identical episodes."""
        first = play_episode(RandomSlider(AgentConfig(seed=4)), RandomPlacer(AgentConfig(seed=9)))
        second = play_episode(RandomSlider(AgentConfig(seed=4)), RandomPlacer(AgentConfig(seed=9)))
        self.assertEqual(first, second)

    def test_invalid_initial_tiles(self):
        """Opening placements must fit on the board."""
        for initial_tiles in (-1, 17):
            with self.assertRaises(ValueError, msg=initial_tiles):
                play_episode(RandomSlider(AgentConfig(seed=1)), RandomPlacer(AgentConfig(seed=2)), initial_tiles)

    def test_td_episode(self):
        """A learning episode ends with an empty window and trained weights."""
        slider = TDSlider.from_args("alpha=0.1")
        result = play_episode(slider, RandomPlacer.from_args("seed=3"))
        self.assertGreater(result.steps, 0)
        self.assertIsNone(slider.learner.prev)
        self.assertTrue(any(table.weights.any() for table in slider.network.tables))


class TestStatistics(TestCase):
    """Test block summaries."""

    def test_block_summary(self):
        """A summary is produced once per block."""
        statistics = Statistics(block=2)
        self.assertIsNone(statistics.add(EpisodeResult(score=10, steps=5, max_tile=6, total_reward=9)))
        summary = statistics.add(EpisodeResult(score=30, steps=7, max_tile=12, total_reward=21))

        self.assertEqual(summary.episodes, 2)
        self.assertEqual(summary.mean_score, 20.0)
        self.assertEqual(summary.max_score, 30)
        self.assertEqual(summary.mean_steps, 6.0)
        self.assertEqual(summary.reach, {6: 1.0, 12: 0.5})
        self.assertEqual(statistics.episodes, 2)

    def test_invalid_block(self):
        """A block must hold at least one episode."""
        with self.assertRaises(ValueError):
            Statistics(block=0)


class TestTrain(TestCase):
    """Test the command line entry point."""

    def test_build_slider(self):
        """Sliders are built by kind."""
        self.assertIsInstance(build_slider("random", "seed=1"), RandomSlider)
        self.assertIsInstance(build_slider("td"), TDSlider)

    def test_run_and_save(self):
        """Training writes the weights at the end."""
        with tempfile.TemporaryDirectory() as directory:
            path = Path(directory) / "weights.bin"
            code = train_main(["--total", "1", "--block", "1", "--slide", f"alpha=0.1 save={path}", "--place", "seed=1"])
            self.assertEqual(code, 0)
            self.assertEqual(path.stat().st_size, 4 + 8 * 65536 * 4)

    def test_invalid_configuration(self):
        """Configuration errors end with a non-zero status."""
        self.assertEqual(train_main(["--total", "1", "--slide", "alpha=fast"]), 1)
        self.assertEqual(train_main(["--total", "1", "--slide", "load=/nonexistent/weights.bin"]), 1)


if __name__ == "__main__":
    main()
