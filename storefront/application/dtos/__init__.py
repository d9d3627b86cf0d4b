"""
Application DTOs

Responses and inputs exchanged between use cases and the surfaces that call them.
"""
