"""Runtime services shared by sources and the transform engine."""

from .memory import MemoryManager

__all__ = ['MemoryManager']
