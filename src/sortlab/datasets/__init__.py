"""
Datasets package public API.

Re-export the sequence generators so callers can write:
    from sortlab.datasets import make_dataset, make_sequence, SUPPORTED_DISTS
"""

from .generators import SUPPORTED_DISTS, make_dataset, make_sequence

__all__ = ["make_dataset", "make_sequence", "SUPPORTED_DISTS"]
