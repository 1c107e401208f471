"""Hard failures of a single page visit.

Raising any :class:`VisitFailure` ends the current visit. The request it
happened on is marked failed in the Locust statistics; the simulated visitor
keeps running.
"""
from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "VisitFailure",
    "TransportFailure",
    "DecodeFailure",
    "ValidationFailure",
    "MissingTokenFailure",
]


class VisitFailure(Exception):
    """Base class: the visit did not produce the expected page."""

    def __init__(self, reason: str, response: Optional[Any] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.response = response


class TransportFailure(VisitFailure):
    """No response from the server."""


class DecodeFailure(VisitFailure):
    """A response arrived but its body could not be read as text."""


class ValidationFailure(VisitFailure):
    """The body does not carry the expected title."""


class MissingTokenFailure(VisitFailure):
    """A form flow could not find its hidden token field."""
