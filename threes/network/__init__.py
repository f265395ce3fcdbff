# -*- coding: utf-8 -*-
"""
This module provides the n-tuple network used to approximate afterstate values.

It includes tuple descriptors and feature index strategies, weight tables with their binary
persistence, and the network summing weights over the eight symmetric views of a board.
"""

from .features import INDEX_STRATEGIES, TUPLE_SETS, FeatureIndex, RadixIndex, SumIndex, TupleDescriptor, tuple_set
from .ntuple import NTupleNetwork
from .weights import WeightTable, load_tables, save_tables

__all__ = [
    "FeatureIndex",
    "INDEX_STRATEGIES",
    "NTupleNetwork",
    "RadixIndex",
    "SumIndex",
    "TUPLE_SETS",
    "TupleDescriptor",
    "WeightTable",
    "load_tables",
    "save_tables",
    "tuple_set",
]
