"""
Server-side proxy routes.

Forwards frontend calls under /api to the backend API, propagating the
caller's bearer token.
"""
