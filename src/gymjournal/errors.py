"""Domain exceptions raised by services and mapped to HTTP status codes in main.py.

Services raise ``ValueError`` for invalid input (400).
"""


class NotFoundError(Exception):
    """The requested record does not exist (404)."""


class ForbiddenError(Exception):
    """The record exists but belongs to another user (403)."""
