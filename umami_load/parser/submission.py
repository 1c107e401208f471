"""Classification of the page returned after submitting the contact form."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from umami_load.catalog import Locale
from umami_load.logger import logger

__all__ = ["SubmissionOutcome", "THROTTLE_PHRASES", "classify_submission"]


class SubmissionOutcome(str, Enum):
    ACCEPTED = "accepted"
    THROTTLED = "throttled"


# Drupal's contact flood control message, per interface language.
THROTTLE_PHRASES: Mapping[Locale, str] = MappingProxyType(
    {
        Locale.EN: "You cannot send more than",
        Locale.ES: "No puede enviar más de",
    }
)


def classify_submission(html: str, locale: Locale) -> SubmissionOutcome:
    """Return THROTTLED if *html* carries the flood control message for *locale*.

    Throttling is expected under sustained load; it is logged, not treated as
    an error.
    """
    if THROTTLE_PHRASES[locale] in html:
        logger.info("Contact form submission throttled (%s)", locale.value)
        return SubmissionOutcome.THROTTLED
    return SubmissionOutcome.ACCEPTED
