"""
Domain Layer

Entities, value objects and repository interfaces of the storefront client.
Nothing here performs I/O.
"""
