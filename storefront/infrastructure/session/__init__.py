"""
Session accessor implementations
"""

from .in_memory_session_accessor import InMemorySessionAccessor

__all__ = ["InMemorySessionAccessor"]
