"""
Utilities

Shared constants and the exception taxonomy.
"""
