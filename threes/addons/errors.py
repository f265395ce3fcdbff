# -*- coding: utf-8 -*-
"""
Exceptions raised by this project.
"""


class ConfigurationError(ValueError):
    """
    Invalid agent or network configuration: unknown key, bad value, or tuple and table sizes that
    do not agree with each other.
    """


class WeightFileError(OSError):
    """
    A weight file is missing, unreadable, or does not match the configured tables.
    """
