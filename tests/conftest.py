# File: tests/conftest.py
from __future__ import annotations

import logging
import socket
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple
from urllib.parse import parse_qsl

import gevent
import pytest
from gevent.pywsgi import WSGIServer
from locust.env import Environment

from umami_load.catalog import CATALOG, Locale, PAGE_TITLES
from umami_load.tally import TALLY
from umami_load.user.session import VirtualUser
from umami_load.users import EnglishUser, SpanishUser, UmamiUser

THROTTLE_BODY = {
    Locale.EN: "You cannot send more than 5 messages in 1 hour. Try again later.",
    Locale.ES: "No puede enviar más de 5 mensajes en 1 hora. Inténtelo más tarde.",
}

# PNG signature followed by bytes that are not valid UTF-8
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xd8\xfe\x00"


def umami_page(title: str, body: str = "") -> str:
    """Markup shaped like the Umami theme: one aggregated stylesheet, one image, one script."""
    return (
        "<!DOCTYPE html><html><head>"
        f"<title>{title} | Umami Food Magazine</title>"
        '<link rel="stylesheet" media="all" href="/sites/default/files/css/css_main.css" />'
        "</head><body>"
        f"{body}"
        '<img src="/sites/default/files/logo.png" alt="Umami">'
        '<script src="/core/misc/drupal.js"></script>'
        "</body></html>"
    )


def contact_page(title: str, with_token: bool = True) -> str:
    token = '<input type="hidden" name="form_build_id" value="form-AbC123_xyz" />' if with_token else ""
    form = (
        '<form class="contact-message-feedback-form" method="post">'
        f"{token}"
        '<input type="hidden" name="form_id" value="contact_message_feedback_form" />'
        "</form>"
    )
    return umami_page(title, form)


def closed_port() -> int:
    """A localhost port nothing listens on."""
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@dataclass
class UmamiSite:
    """A fake Umami site and everything it received."""

    base_url: str = ""
    pages: Dict[str, str] = field(default_factory=dict)
    hits: List[Tuple[str, str]] = field(default_factory=list)
    posted: List[List[Tuple[str, str]]] = field(default_factory=list)
    throttle: bool = False
    post_delay: float = 0.0
    post_body: Optional[bytes] = None

    def paths(self, method: str = "GET") -> List[str]:
        return [path for m, path in self.hits if m == method]


def _default_pages() -> Dict[str, str]:
    pages: Dict[str, str] = {}
    for page, variants in PAGE_TITLES.items():
        for locale, (path, title) in variants.items():
            pages[path] = contact_page(title) if page == "contact" else umami_page(title)
    for nodes in CATALOG.values():
        for node in nodes:
            for locale in Locale:
                pages[node.url_for(locale)] = umami_page(node.title_for(locale))
            pages[f"/node/{node.nid}"] = umami_page(node.title_for(Locale.EN))
    return pages


def build_app(site: UmamiSite) -> Callable:
    def respond(start_response, status: str, body: bytes, content_type: str) -> List[bytes]:
        start_response(status, [("Content-Type", content_type), ("Content-Length", str(len(body)))])
        return [body]

    def app(environ, start_response):
        method = environ["REQUEST_METHOD"]
        path = environ["PATH_INFO"].encode("latin-1").decode("utf-8")
        site.hits.append((method, path))

        if method == "POST" and path in ("/en/contact", "/es/contact"):
            size = int(environ.get("CONTENT_LENGTH") or 0)
            body = environ["wsgi.input"].read(size).decode("utf-8")
            site.posted.append(parse_qsl(body, keep_blank_values=True))
            if site.post_delay:
                gevent.sleep(site.post_delay)
            if site.post_body is not None:
                return respond(start_response, "200 OK", site.post_body, "text/html; charset=utf-8")
            locale = Locale.ES if path.startswith("/es") else Locale.EN
            message = THROTTLE_BODY[locale] if site.throttle else "Your message has been sent."
            html = umami_page("Website feedback", f"<div>{message}</div>")
            return respond(start_response, "200 OK", html.encode("utf-8"), "text/html; charset=utf-8")

        if path.startswith("/sites") and path.endswith(".png"):
            return respond(start_response, "200 OK", PNG_BYTES, "image/png")
        if path.startswith("/sites"):
            return respond(start_response, "200 OK", b"asset", "text/css")
        if path.startswith("/core"):
            return respond(start_response, "404 Not Found", b"", "text/plain")
        if path == "/bad-encoding":
            return respond(start_response, "200 OK", b"<title>Home\xff\xfe\xfa", "text/html; charset=utf-8")
        html = site.pages.get(path)
        if html is None:
            return respond(
                start_response, "404 Not Found", b"<title>Page not found</title>", "text/html; charset=utf-8"
            )
        return respond(start_response, "200 OK", html.encode("utf-8"), "text/html; charset=utf-8")

    return app


@pytest.fixture()
def umami_site() -> Iterator[UmamiSite]:
    """Serve a fake Umami site on localhost and yield its state."""
    site = UmamiSite(pages=_default_pages())
    server = WSGIServer(("127.0.0.1", 0), build_app(site), log=None)
    server.start()
    site.base_url = f"http://127.0.0.1:{server.server_port}"
    try:
        yield site
    finally:
        server.stop()


@pytest.fixture()
def environment(umami_site: UmamiSite) -> Iterator[Environment]:
    """A Locust environment with a local runner, so requests land in ``environment.stats``."""
    env = Environment(user_classes=[EnglishUser, SpanishUser], host=umami_site.base_url)
    env.create_local_runner()
    try:
        yield env
    finally:
        env.runner.quit()


@pytest.fixture()
def make_user(environment: Environment, umami_site: UmamiSite) -> Callable[..., UmamiUser]:
    """Build a visitor of *cls* bound to the fake site; keyword arguments override class attributes."""

    def _make(cls=EnglishUser, **attrs) -> UmamiUser:
        attrs.setdefault("host", umami_site.base_url)
        return type(cls.__name__, (cls,), attrs)(environment)

    return _make


@pytest.fixture()
def user(make_user) -> VirtualUser:
    return make_user().visitor


@pytest.fixture(autouse=True)
def reset_tally():
    TALLY.reset()
    yield
    TALLY.reset()


@pytest.fixture(autouse=True)
def reset_logger():
    """CLI tests bind the project logger to CliRunner streams; drop them afterwards."""
    yield
    for name in ("UmamiLoad", "locust.runners", "locust.stats_logger"):
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
        lg.setLevel(logging.NOTSET)
