"""Chunking and concurrent fan-out over the document store."""

from ceremony_spine.execution.chunking import chunk
from ceremony_spine.execution.fanout import FanoutMode, FanoutResult, run_fanout

__all__ = ["FanoutMode", "FanoutResult", "chunk", "run_fanout"]
