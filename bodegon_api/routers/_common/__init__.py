"""
Common router helpers.
"""
