# -*- coding: utf-8 -*-
"""
Train or evaluate a slider by playing episodes of Threes! against the random placer.
"""
import logging
import sys
from argparse import ArgumentParser
from typing import Optional, Sequence

from tqdm import trange

from threes.addons.config import AgentConfig
from threes.addons.errors import ConfigurationError, WeightFileError
from threes.agents import Agent, GreedySlider, RandomPlacer, RandomSlider, TDSlider
from threes.game import Statistics, play_episode

_logger = logging.getLogger(__name__)

SLIDERS = ("td", "random", "greedy1", "greedy2", "greedy3")


def build_slider(kind: str, args: str = "") -> Agent:
    """
    Build a slider.

    Parameters
    ----------
    kind : str
        One of ``SLIDERS``.
    args : str, optional
        ``key=value`` configuration tokens.

    Returns
    -------
    Agent
        The slider.
    """
    if kind == "td":
        return TDSlider.from_args(args)

    config = AgentConfig.from_args(args, name="slide", role="slider")
    if kind == "random":
        return RandomSlider(config)
    if kind.startswith("greedy"):
        return GreedySlider(config, depth=int(kind[len("greedy"):]))
    raise ConfigurationError(f"Unknown slider '{kind}', expected one of {SLIDERS}")


def run(slider: Agent, placer: Agent, total: int, block: int) -> Statistics:
    """
    Play episodes and collect their statistics.

    Parameters
    ----------
    slider : Agent
        The slider.
    placer : Agent
        The environment.
    total : int
        Number of episodes.
    block : int
        Number of episodes per logged summary.

    Returns
    -------
    Statistics
        The collected statistics.
    """
    statistics = Statistics(block=block)

    with trange(total) as period:
        for num in period:
            result = play_episode(slider, placer)
            statistics.add(result)

            # ##: Log.
            period.set_description(f"Episode: {num + 1}")
            period.set_postfix(score=result.score, max=result.max_tile)

    if isinstance(slider, TDSlider):
        slider.save()
    return statistics


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point."""
    parser = ArgumentParser(description="Play Threes! episodes with a learning slider.")
    parser.add_argument("--total", type=int, default=1000, help="number of episodes")
    parser.add_argument("--block", type=int, default=100, help="episodes per statistics summary")
    parser.add_argument("--slider", choices=SLIDERS, default="td")
    parser.add_argument("--slide", type=str, default="", help='slider arguments, e.g. "alpha=0.1 save=w.bin"')
    parser.add_argument("--place", type=str, default="", help='placer arguments, e.g. "seed=7"')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        slider = build_slider(args.slider, args.slide)
        placer = RandomPlacer.from_args(args.place)
        run(slider, placer, total=args.total, block=args.block)
    except (ConfigurationError, WeightFileError) as error:
        _logger.error("%s", error)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
