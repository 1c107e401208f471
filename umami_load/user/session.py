"""
Virtual user: the HTTP and reporting capabilities a page visit runs against.
"""
from __future__ import annotations

import itertools
import random
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from locust.clients import HttpSession, ResponseContextManager
from requests import Response

from umami_load.errors import VisitFailure
from umami_load.logger import visitor_logger
from umami_load.user.models import FormSubmission

__all__ = ("VirtualUser",)

_visitor_ids = itertools.count(1)


class VirtualUser:
    """One simulated visitor on top of a Locust :class:`HttpSession`.

    Pages and form posts are opened as context managers around a
    ``catch_response`` request. Leaving the block normally marks the request
    passed; leaving it with a :class:`VisitFailure` marks it failed with the
    failure's reason. The pass/fail verdict is the visit's, not the HTTP
    status: a 404 page fails only because its title does not match.

    Static assets go through :meth:`load_asset`, whose bodies are never read as
    text. Locust still counts HTTP errors on them in the ``static asset`` row.
    """

    def __init__(
        self,
        client: HttpSession,
        *,
        timeout: Optional[float] = None,
        rng: Optional[random.Random] = None,
        dedupe_assets: bool = False,
    ) -> None:
        self.client = client
        self.timeout = timeout
        self.rng = rng or random.Random()
        self.dedupe_assets = dedupe_assets
        self.visitor_id = next(_visitor_ids)
        self.log = visitor_logger(self.visitor_id)

    @contextmanager
    def get(self, path: str, name: Optional[str] = None) -> Iterator[ResponseContextManager]:
        with self._request("GET", path, name=name) as response:
            yield response

    @contextmanager
    def post(self, submission: FormSubmission, name: Optional[str] = None) -> Iterator[ResponseContextManager]:
        """POST *submission* form-encoded, fields in the order given."""
        with self._request("POST", submission.url, name=name, data=list(submission.fields)) as response:
            yield response

    @contextmanager
    def _request(self, method: str, path: str, *, name: Optional[str], **kwargs: Any) -> Iterator[ResponseContextManager]:
        with self.client.request(
            method, path, name=name, timeout=self.timeout, catch_response=True, **kwargs
        ) as response:
            try:
                yield response
            except VisitFailure as exc:
                self.set_failure(exc.reason, response)
                raise
            self.set_success(response)

    def load_asset(self, path: str, name: str) -> Response:
        response = self.client.get(path, name=name, timeout=self.timeout)
        self.log.debug("GET %s -> %s", path, response.status_code)
        return response

    def set_success(self, response: ResponseContextManager) -> None:
        response.success()

    def set_failure(self, reason: str, response: ResponseContextManager) -> None:
        self.log.warning("%s (status %s)", reason, response.status_code)
        response.failure(reason)
