"""
Generic CRUD building blocks: repository, lifecycle guard, integrity checks, list queries.
"""
