"""
Worklist construction from command-line inputs.
"""

from vpkpack.worklist.builder import WorklistBuilder

__all__ = ["WorklistBuilder"]
