# -*- coding: utf-8 -*-
"""
Summaries of blocks of finished episodes.
"""
import logging
from collections import Counter, deque
from dataclasses import dataclass

from threes.game.episode import EpisodeResult

_logger = logging.getLogger(__name__)


@dataclass
class BlockSummary:
    """
    Summary of the last block of episodes.

    ``reach`` maps each largest tile to the share of episodes that reached at least that tile.
    """

    episodes: int
    mean_score: float
    max_score: int
    mean_steps: float
    reach: dict[int, float]


class Statistics:
    """
    Collect episode results and summarize them every ``block`` episodes.

    Parameters
    ----------
    block : int
        Number of episodes per summary.
    """

    def __init__(self, block: int = 100):
        if block <= 0:
            raise ValueError(f"block must be positive, got {block}")
        self._block = block
        self._results: deque[EpisodeResult] = deque(maxlen=block)
        self._episodes = 0

    @property
    def episodes(self) -> int:
        """Number of episodes recorded."""
        return self._episodes

    def add(self, result: EpisodeResult) -> BlockSummary | None:
        """
        Record an episode.

        Returns
        -------
        BlockSummary or None
            The summary of the block if this episode completes one.
        """
        self._results.append(result)
        self._episodes += 1
        if self._episodes % self._block:
            return None

        summary = self.summary()
        _logger.info(
            "%d episodes: mean score %.1f, max score %d, mean steps %.1f, reach %s",
            self._episodes,
            summary.mean_score,
            summary.max_score,
            summary.mean_steps,
            ", ".join(f"{tile}: {rate:.1%}" for tile, rate in summary.reach.items()),
        )
        return summary

    def summary(self) -> BlockSummary:
        """Summarize the episodes of the current block."""
        results = list(self._results)
        if not results:
            return BlockSummary(episodes=0, mean_score=0.0, max_score=0, mean_steps=0.0, reach={})

        frequency = Counter(result.max_tile for result in results)
        reach, reached = {}, 0
        for tile in sorted(frequency, reverse=True):
            reached += frequency[tile]
            reach[tile] = reached / len(results)

        return BlockSummary(
            episodes=len(results),
            mean_score=sum(result.score for result in results) / len(results),
            max_score=max(result.score for result in results),
            mean_steps=sum(result.steps for result in results) / len(results),
            reach=dict(sorted(reach.items())),
        )
