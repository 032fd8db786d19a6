"""
Bodegon REST API: menu, taxonomy, contacts and backoffice users.
"""

__version__ = "0.1.0"
