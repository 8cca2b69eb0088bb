"""
Core utilities shared across the blog package.

- configuration helpers (env vars, storage paths, artificial delays)
- error taxonomy raised by repositories/services
- password hashing and mock session tokens
"""
