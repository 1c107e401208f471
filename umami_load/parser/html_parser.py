"""Narrow HTML pattern matching used to validate Umami pages.

This is **not** a general HTML parser. The Umami theme renders predictable
markup, so a handful of non-greedy regular expressions is enough to:

* confirm that a response is the page we asked for (:func:`valid_title`);
* list the local static assets a browser would load (:func:`extract_assets`);
* read the value of a hidden form field (:func:`get_form_value`).

Known gaps, kept on purpose: ``srcset=``, lazy-loaded images, ``url(...)``
references inside stylesheets and single-quoted ``src``/``href`` attributes
are not discovered.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache
from typing import List, Optional

__all__: Sequence[str] = (
    "ASSET_PREFIXES",
    "CSS_AGGREGATE_PREFIX",
    "valid_title",
    "extract_assets",
    "get_form_value",
    "remove_duplicates",
)

#: ``src`` values served from the site's theme and module directories.
ASSET_PREFIXES: tuple[str, ...] = ("/sites", "/core")
#: Directory holding Drupal's aggregated CSS.
CSS_AGGREGATE_PREFIX = "/sites/default/files/css/"

_SRC_RE = re.compile(r'src="(.*?)"')
_CSS_RE = re.compile(r'href="(' + re.escape(CSS_AGGREGATE_PREFIX) + r'.*?)"')


def valid_title(html: str, title: str) -> bool:
    """Return True if *html* contains ``<title>`` immediately followed by *title*.

    A valid title on this site starts with the expected text; anything after
    it (the `` | Umami Food Magazine`` suffix) is ignored. The comparison is
    exact: no case folding, whitespace normalisation or entity decoding, so
    *title* must be given in its raw encoded form.
    """
    return f"<title>{title}" in html


def extract_assets(html: str) -> List[str]:
    """Return the local static asset paths referenced by *html*.

    Image and script sources (``src="/sites..."`` and ``src="/core..."``) come
    first, followed by aggregated stylesheets
    (``href="/sites/default/files/css/..."``), each group in document order.
    Duplicates are kept.
    """
    urls = [src for src in _SRC_RE.findall(html) if src.startswith(ASSET_PREFIXES)]
    urls.extend(_CSS_RE.findall(html))
    return urls


@lru_cache(maxsize=32)
def _form_value_re(name: str) -> re.Pattern[str]:
    return re.compile(rf"""name="{re.escape(name)}" value=['"](.*?)['"]""")


def get_form_value(html: str, name: str) -> Optional[str]:
    """Return the ``value`` of the form element called *name*, or None.

    Matches ``name="<name>" value="..."`` with either quote style around the
    value; the first occurrence wins.
    """
    match = _form_value_re(name).search(html)
    return match.group(1) if match else None


def remove_duplicates(urls: Sequence[str]) -> List[str]:
    """Drop repeated asset paths, keeping the first occurrence of each."""
    return list(dict.fromkeys(urls))
