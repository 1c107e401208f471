import logging

import pytest

from umami_load.catalog import Locale
from umami_load.parser.submission import THROTTLE_PHRASES, SubmissionOutcome, classify_submission


@pytest.mark.parametrize(
    "html,locale,expected",
    [
        ("<div>You cannot send more than 5 messages in 1 hour.</div>", Locale.EN, SubmissionOutcome.THROTTLED),
        ("<div>No puede enviar más de 5 mensajes en 1 hora.</div>", Locale.ES, SubmissionOutcome.THROTTLED),
        ("<div>Your message has been sent.</div>", Locale.EN, SubmissionOutcome.ACCEPTED),
        ("<div>Su mensaje ha sido enviado.</div>", Locale.ES, SubmissionOutcome.ACCEPTED),
        # phrases are locale specific
        ("<div>No puede enviar más de 5 mensajes en 1 hora.</div>", Locale.EN, SubmissionOutcome.ACCEPTED),
        ("<div>You cannot send more than 5 messages in 1 hour.</div>", Locale.ES, SubmissionOutcome.ACCEPTED),
        ("<div>you cannot send more than 5 messages</div>", Locale.EN, SubmissionOutcome.ACCEPTED),
        ("", Locale.EN, SubmissionOutcome.ACCEPTED),
    ],
)
def test_classify_submission(html, locale, expected):
    assert classify_submission(html, locale) is expected


def test_every_locale_has_a_phrase():
    assert set(THROTTLE_PHRASES) == set(Locale)


def test_throttle_is_logged_as_info(caplog):
    lg = logging.getLogger("UmamiLoad")
    lg.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="UmamiLoad"):
            classify_submission(THROTTLE_PHRASES[Locale.EN], Locale.EN)
    finally:
        lg.removeHandler(caplog.handler)
    records = [r for r in caplog.records if "throttled" in r.getMessage()]
    assert records and all(r.levelno == logging.INFO for r in records)
