# -*- coding: utf-8 -*-
"""
Configuration and exceptions shared across the project.
"""
from .config import AgentConfig, parse_args
from .errors import ConfigurationError, WeightFileError

__all__ = ["AgentConfig", "ConfigurationError", "WeightFileError", "parse_args"]
