"""
Observability module.

Provides structured logging, correlation ID tracking and request logging
middleware shared by the backend API and the gateway.
"""
