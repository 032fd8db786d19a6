"""
Security module: JWT helpers, password hashing, rate limiting.
"""
