"""Counts of contact form outcomes for the current test run.

Locust's request statistics only know pass and fail. A throttled submission
is a pass, so this keeps the accepted/throttled split next to them.
"""
from __future__ import annotations

import threading
from collections import Counter
from typing import Dict, Optional, Tuple

from umami_load.catalog import Locale
from umami_load.parser.submission import SubmissionOutcome

__all__ = ["SubmissionTally", "TALLY"]


class SubmissionTally:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.counts: Counter[Tuple[Locale, SubmissionOutcome]] = Counter()

    def reset(self) -> None:
        with self.lock:
            self.counts = Counter()

    def record(self, locale: Locale, outcome: SubmissionOutcome) -> None:
        with self.lock:
            self.counts[(locale, outcome)] += 1

    def count(self, outcome: SubmissionOutcome, locale: Optional[Locale] = None) -> int:
        with self.lock:
            return sum(n for (loc, out), n in self.counts.items() if out is outcome and locale in (None, loc))

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        """``{"en": {"accepted": 3, "throttled": 1}, ...}`` for every locale."""
        with self.lock:
            return {
                locale.value: {outcome.value: self.counts[(locale, outcome)] for outcome in SubmissionOutcome}
                for locale in Locale
            }


TALLY = SubmissionTally()
