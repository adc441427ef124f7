"""
Core runtime services.

- services.memory: pre-flight memory checks before in-memory parsing
"""

from .services import MemoryManager

__all__ = ['MemoryManager']
