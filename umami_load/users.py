"""
Locust visitors of the Umami demo site.

Run directly with Locust:
  locust -f umami_load/users.py --host=https://drupal-9.0.7.ddev.site

or through ``umami-load run``, which applies the YAML/JSON configuration
with :func:`configure_user_classes`.

Two populations browse the same pages in their own language: English
visitors outnumber Spanish ones 6 to 2. Each ``@task`` weight is the share of
that page among one visitor's page views.
"""
from __future__ import annotations

from typing import List, Optional, Type

from locust import HttpUser, between, events, task

from umami_load.catalog import ContentType, Locale
from umami_load.config import DEFAULT_HOST, LoadTestConfig
from umami_load.logger import logger
from umami_load.tally import TALLY
from umami_load.tasks import pages
from umami_load.user.session import VirtualUser

__all__ = ["UmamiUser", "EnglishUser", "SpanishUser", "configure_user_classes"]


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    TALLY.reset()
    logger.info("Load test against %s started", environment.host or UmamiUser.host)


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    for locale, counts in TALLY.as_dict().items():
        logger.info("[contact %s] accepted=%d throttled=%d", locale, counts["accepted"], counts["throttled"])


class UmamiUser(HttpUser):
    """A visitor browsing in :attr:`locale`."""

    abstract = True
    host = DEFAULT_HOST
    wait_time = between(0, 0)
    locale: Locale = Locale.EN
    dedupe_assets = False
    request_timeout: Optional[float] = None
    user_agent = "UmamiLoad/0.1"

    def __init__(self, environment):
        super().__init__(environment)
        self.client.headers["User-Agent"] = self.user_agent
        self.visitor = VirtualUser(self.client, timeout=self.request_timeout, dedupe_assets=self.dedupe_assets)

    @task(2)
    def front_page(self):
        pages.front_page(self.visitor, self.locale)

    @task(1)
    def article_listing(self):
        pages.listing_page(self.visitor, self.locale, "articles")

    @task(2)
    def article(self):
        pages.random_node(self.visitor, self.locale, ContentType.ARTICLE)

    @task(1)
    def recipe_listing(self):
        pages.listing_page(self.visitor, self.locale, "recipes")

    @task(4)
    def recipe(self):
        pages.random_node(self.visitor, self.locale, ContentType.RECIPE)

    @task(1)
    def basic_page(self):
        pages.random_node(self.visitor, self.locale, ContentType.BASIC_PAGE)

    @task(1)
    def page_by_nid(self):
        pages.page_by_nid(self.visitor)

    @task(1)
    def contact_form(self):
        pages.contact_form(self.visitor, self.locale)


class EnglishUser(UmamiUser):
    locale = Locale.EN
    weight = 6


class SpanishUser(UmamiUser):
    locale = Locale.ES
    weight = 2


def configure_user_classes(cfg: LoadTestConfig) -> List[Type[UmamiUser]]:
    """Subclass each visitor with the host, weight and pacing of *cfg*.

    Locales whose weight is 0 are left out.
    """
    classes: List[Type[UmamiUser]] = []
    for base in (EnglishUser, SpanishUser):
        weight = cfg.weight_for(base.locale)
        if weight <= 0:
            continue
        attrs = {
            "__module__": __name__,
            "host": cfg.host,
            "weight": weight,
            "wait_time": between(*cfg.wait_time),
            "dedupe_assets": cfg.dedupe_assets,
            "request_timeout": cfg.timeout,
            "user_agent": cfg.user_agent,
        }
        classes.append(type(base.__name__, (base,), attrs))
    return classes
