"""Page visit flows a virtual user can run.

Each flow is written once and bound to a :class:`Locale` with
:func:`functools.partial`; the ``*_en`` / ``*_es`` names below are those
bindings. A flow takes the user, returns True on success and False after a
reported failure.
"""
from __future__ import annotations

import functools
from types import MappingProxyType
from typing import Callable, Mapping, Sequence

from umami_load.catalog import ContentType, Locale, get_nodes, page_title
from umami_load.errors import VisitFailure
from umami_load.tasks.visit import submit_contact_form, visit_page
from umami_load.user.session import VirtualUser

TaskFn = Callable[[VirtualUser], bool]

__all__: Sequence[str] = (
    "TaskFn",
    "TASK_NAMES",
    "visit_task",
    "flow_for",
    "front_page",
    "listing_page",
    "random_node",
    "page_by_nid",
    "contact_form",
)

_NODE_REQUEST_NAMES: Mapping[ContentType, str] = MappingProxyType(
    {
        ContentType.ARTICLE: "articles/%",
        ContentType.RECIPE: "recipes/%",
        ContentType.BASIC_PAGE: "basicpage",
    }
)


def visit_task(func: Callable[..., object]) -> Callable[..., bool]:
    """Turn a flow that raises :class:`VisitFailure` into one returning pass/fail.

    The failure is already recorded on the request it happened on.
    """

    @functools.wraps(func)
    def wrapper(user: VirtualUser, *args, **kwargs) -> bool:
        try:
            func(user, *args, **kwargs)
        except VisitFailure:
            return False
        return True

    return wrapper


@visit_task
def front_page(user: VirtualUser, locale: Locale) -> None:
    path, title = page_title("front", locale)
    visit_page(user, path, title)


@visit_task
def listing_page(user: VirtualUser, locale: Locale, page: str) -> None:
    """Load the ``"articles"`` or ``"recipes"`` listing."""
    path, title = page_title(page, locale)
    visit_page(user, path, title)


@visit_task
def random_node(user: VirtualUser, locale: Locale, content_type: ContentType) -> None:
    """Load a node of *content_type* picked uniformly at random, by its alias."""
    node = user.rng.choice(get_nodes(content_type))
    name = f"/{locale.value}/{_NODE_REQUEST_NAMES[content_type]}"
    visit_page(user, node.url_for(locale), node.title_for(locale), name=name)


@visit_task
def page_by_nid(user: VirtualUser) -> None:
    """Load a random node of a random content type through ``/node/<nid>``.

    Unaliased paths are served in the default language, so the English title
    is expected.
    """
    content_type = user.rng.choice(list(ContentType))
    node = user.rng.choice(get_nodes(content_type))
    visit_page(user, f"/node/{node.nid}", node.title_for(Locale.EN), name="/node/%nid")


@visit_task
def contact_form(user: VirtualUser, locale: Locale) -> None:
    submit_contact_form(user, locale)


_FLOWS: Mapping[str, Callable[[Locale], TaskFn]] = MappingProxyType(
    {
        "front_page": lambda locale: functools.partial(front_page, locale=locale),
        "article_listing": lambda locale: functools.partial(listing_page, locale=locale, page="articles"),
        "article": lambda locale: functools.partial(random_node, locale=locale, content_type=ContentType.ARTICLE),
        "recipe_listing": lambda locale: functools.partial(listing_page, locale=locale, page="recipes"),
        "recipe": lambda locale: functools.partial(random_node, locale=locale, content_type=ContentType.RECIPE),
        "basic_page": lambda locale: functools.partial(
            random_node, locale=locale, content_type=ContentType.BASIC_PAGE
        ),
        "page_by_nid": lambda locale: page_by_nid,
        "contact_form": lambda locale: functools.partial(contact_form, locale=locale),
    }
)

TASK_NAMES: tuple[str, ...] = tuple(_FLOWS)


def flow_for(name: str, locale: Locale) -> TaskFn:
    """Return the flow called *name* bound to *locale*."""
    try:
        return _FLOWS[name](locale)
    except KeyError:
        raise ValueError(f"unknown task {name!r}, expected one of {', '.join(TASK_NAMES)}") from None


front_page_en = flow_for("front_page", Locale.EN)
front_page_es = flow_for("front_page", Locale.ES)
article_listing_en = flow_for("article_listing", Locale.EN)
article_listing_es = flow_for("article_listing", Locale.ES)
recipe_listing_en = flow_for("recipe_listing", Locale.EN)
recipe_listing_es = flow_for("recipe_listing", Locale.ES)
article_en = flow_for("article", Locale.EN)
article_es = flow_for("article", Locale.ES)
recipe_en = flow_for("recipe", Locale.EN)
recipe_es = flow_for("recipe", Locale.ES)
basic_page_en = flow_for("basic_page", Locale.EN)
basic_page_es = flow_for("basic_page", Locale.ES)
contact_form_en = flow_for("contact_form", Locale.EN)
contact_form_es = flow_for("contact_form", Locale.ES)
