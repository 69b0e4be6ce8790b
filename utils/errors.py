"""
utils/errors.py
---------------
Errors surfaced to the presentation layer.
"""


class NotFoundError(Exception):
    """
    Raised when a lookup by primary key matches no row.

    Attributes:
        status: HTTP-style status code for the caller to translate (404).
    """

    status = 404

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
