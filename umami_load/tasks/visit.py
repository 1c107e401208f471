"""Page visit engine: fetch, validate, load assets, and replay the contact form.

Every step of a visit runs strictly in order on one virtual user. Hard
failures are raised as :class:`~umami_load.errors.VisitFailure` subclasses
inside the request block they belong to, which marks that request failed and
ends the visit; static asset errors are ignored.
"""
from __future__ import annotations

import random
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from umami_load.catalog import Locale, page_title
from umami_load.errors import DecodeFailure, MissingTokenFailure, TransportFailure, ValidationFailure
from umami_load.parser.html_parser import extract_assets, get_form_value, remove_duplicates, valid_title
from umami_load.parser.submission import SubmissionOutcome, classify_submission
from umami_load.tally import TALLY
from umami_load.user.models import FormSubmission
from umami_load.user.session import VirtualUser

__all__ = [
    "STATIC_ASSET",
    "CONTACT_FORM_ID",
    "response_text",
    "load_static_elements",
    "validate_and_load_static_assets",
    "visit_page",
    "contact_form_fields",
    "submit_contact_form",
]

#: Request name all static assets are reported under.
STATIC_ASSET = "static asset"
CONTACT_FORM_ID = "contact_message_feedback_form"

_WORDS: Mapping[Locale, Tuple[str, ...]] = MappingProxyType(
    {
        Locale.EN: (
            "umami", "recipe", "herbs", "carrot", "mushroom", "chocolate", "quiche", "soup",
            "pizza", "curry", "sauce", "oatmeal", "baking", "fresh", "tasty", "kitchen",
        ),
        Locale.ES: (
            "umami", "receta", "hierbas", "zanahoria", "setas", "chocolate", "quiche", "sopa",
            "pizza", "curry", "salsa", "avena", "hornear", "fresco", "sabroso", "cocina",
        ),
    }
)
_SUBMIT_LABEL: Mapping[Locale, str] = MappingProxyType(
    {Locale.EN: "Send message", Locale.ES: "Enviar mensaje"}
)


def _charset(response: Any) -> str:
    # requests assumes ISO-8859-1 for text/* without a charset; Drupal always means UTF-8
    if "charset=" in response.headers.get("Content-Type", "").lower() and response.encoding:
        return response.encoding
    return "utf-8"


def response_text(response: Any) -> str:
    """Return the decoded body of *response* or raise the matching failure."""
    url = response.request.url if response.request is not None else response.url
    error = getattr(response, "error", None)
    if error is not None or not response.status_code:
        raise TransportFailure(f"{url}: no response from server: {error}", response)
    try:
        return response.content.decode(_charset(response))
    except (UnicodeDecodeError, LookupError) as exc:
        raise DecodeFailure(f"{url}: failed to parse page: {exc}", response) from None


def load_static_elements(user: VirtualUser, html: str) -> List[str]:
    """Request every local static asset referenced by *html*, ignoring the responses."""
    urls = extract_assets(html)
    if user.dedupe_assets:
        urls = remove_duplicates(urls)
    for asset in urls:
        user.load_asset(asset, name=STATIC_ASSET)
    return urls


def validate_and_load_static_assets(user: VirtualUser, response: Any, title: str) -> str:
    """Check that *response* is the page titled *title*, then load its assets.

    Returns the page HTML for flows that need to read more out of it.
    """
    html = response_text(response)
    if not valid_title(html, title):
        raise ValidationFailure(f"{response.request.url}: title not found: {title}", response)
    load_static_elements(user, html)
    return html


def visit_page(user: VirtualUser, path: str, title: str, name: Optional[str] = None) -> str:
    with user.get(path, name=name) as page:
        return validate_and_load_static_assets(user, page, title)


def _random_words(rng: random.Random, count: int, locale: Locale) -> str:
    return " ".join(rng.choice(_WORDS[locale]) for _ in range(count))


def contact_form_fields(form_build_id: str, locale: Locale, rng: random.Random) -> List[Tuple[str, str]]:
    """Fields of the site feedback form, in the order the browser sends them."""
    return [
        ("name", _random_words(rng, 2, locale)),
        ("mail", f"{_random_words(rng, 1, locale)}@example.com"),
        ("subject", _random_words(rng, 8, locale)),
        ("message[0][value]", _random_words(rng, 12, locale)),
        ("form_build_id", form_build_id),
        ("form_id", CONTACT_FORM_ID),
        ("op", _SUBMIT_LABEL[locale]),
    ]


def submit_contact_form(user: VirtualUser, locale: Locale) -> SubmissionOutcome:
    """Load the feedback form, post it back, and classify the answer.

    A throttled answer is a passed request; the outcome is counted in
    :data:`~umami_load.tally.TALLY`.
    """
    path, title = page_title("contact", locale)
    with user.get(path) as page:
        html = validate_and_load_static_assets(user, page, title)
        form_build_id = get_form_value(html, "form_build_id")
        if form_build_id is None:
            raise MissingTokenFailure(f"{page.request.url}: no form_build_id on page", page)

    submission = FormSubmission(url=path, fields=contact_form_fields(form_build_id, locale, user.rng))
    with user.post(submission) as answer:
        html = response_text(answer)
        outcome = classify_submission(html, locale)
        load_static_elements(user, html)

    TALLY.record(locale, outcome)
    if outcome is SubmissionOutcome.ACCEPTED:
        user.log.debug("contact form accepted (%s)", locale.value)
    return outcome
