"""
Writers persisting generated artifacts to the project tree.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .fan_out import FanOutWriter

__all__ = [
    "AtomicWriter",
    "FanOutWriter",
]
