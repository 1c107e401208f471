"""Data exchanged between the virtual user and the page-visit engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(slots=True)
class FormSubmission:
    """A form POST. Field order is kept as given."""

    url: str
    fields: List[Tuple[str, str]] = field(default_factory=list)
