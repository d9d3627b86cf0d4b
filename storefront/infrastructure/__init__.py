"""
Infrastructure Layer

Contains all external dependencies and implementations:
- HTTP gateway to the store backend
- Repository implementations
- Session accessor implementation
- Configuration management
- Logging infrastructure
- Cart changed notification channel
"""
