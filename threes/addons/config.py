# -*- coding: utf-8 -*-
"""
Configuration of the agents.

Agents are configured from space-separated ``key=value`` tokens (for instance
``"name=slide role=slider alpha=0.1 save=weights.bin"``), parsed once into an ``AgentConfig``.
"""
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Tuple

from threes.addons.errors import ConfigurationError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_args(args: str) -> dict[str, str]:
    """
    Split ``key=value`` tokens into a dictionary.

    Parameters
    ----------
    args : str
        Space-separated tokens. A later token overrides an earlier one with the same key.

    Returns
    -------
    dict[str, str]
        The raw values by key.

    Raises
    ------
    ConfigurationError
        If a token has no ``=`` or an empty key.
    """
    values = {}
    for token in args.split():
        key, separator, value = token.partition("=")
        if not separator or not key:
            raise ConfigurationError(f"Expected key=value, got '{token}'")
        values[key] = value
    return values


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"Invalid boolean for {key}: '{value}'")


def _parse_sizes(value: str) -> Tuple[int, ...]:
    # ##>: Any non-digit separates sizes, e.g. "65536,65536" or "65536x8".
    sizes = tuple(int(size) for size in re.findall(r"\d+", value))
    if not sizes or any(size == 0 for size in sizes):
        raise ConfigurationError(f"Invalid table sizes: '{value}'")
    return sizes


@dataclass(frozen=True)
class AgentConfig:
    """
    Agent configuration.
    """

    name: str = "unknown"
    role: str = "unknown"
    seed: Optional[int] = None
    alpha: float = 0.1
    init: Optional[Tuple[int, ...]] = None
    load: Optional[Path] = None
    save: Optional[Path] = None
    tuples: str = "lines"
    index: str = "radix"
    fallback: bool = False

    def __post_init__(self):
        if self.alpha < 0:
            raise ConfigurationError(f"alpha must be non-negative, got {self.alpha}")
        if self.index not in ("radix", "sum"):
            raise ConfigurationError(f"Unknown feature index '{self.index}', expected radix or sum")

    @classmethod
    def from_args(cls, args: str = "", **defaults: str) -> "AgentConfig":
        """
        Build a configuration from ``key=value`` tokens.

        Parameters
        ----------
        args : str
            Space-separated tokens.
        **defaults : str
            Raw values used when a key is absent from ``args`` (e.g. ``name="slide"``).

        Returns
        -------
        AgentConfig
            The validated configuration.

        Raises
        ------
        ConfigurationError
            If a key is unknown or a value cannot be converted.
        """
        raw = {**defaults, **parse_args(args)}
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        values = {}
        try:
            for key, value in raw.items():
                if key == "seed":
                    values[key] = int(value)
                elif key == "alpha":
                    values[key] = float(value)
                elif key == "init":
                    values[key] = _parse_sizes(value)
                elif key in ("load", "save"):
                    values[key] = Path(value)
                elif key == "fallback":
                    values[key] = _parse_bool(key, value)
                else:
                    values[key] = value
        except ValueError as error:
            raise ConfigurationError(f"Invalid value for {key}: '{raw[key]}'") from error
        return cls(**values)
