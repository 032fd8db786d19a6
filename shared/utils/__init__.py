"""
Utilities: domain exceptions, validators, slugs.
"""
