"""
Load test runner.

Starts the configured Umami visitors on Locust's local runner, lets them
browse for ``run_time`` seconds and hands back the Locust environment with the
collected statistics.
"""
from __future__ import annotations

import logging
import time

import gevent
from locust import events
from locust.env import Environment

from umami_load.config import LoadTestConfig
from umami_load.users import configure_user_classes

__all__ = ("LoadTest", "start_load_test")


class LoadTest:
    """One run against ``config.host``.

    Visitors are started at ``spawn_rate`` per second and keep browsing until
    ``run_time`` has elapsed or :meth:`stop` is called.
    """

    def __init__(self, config: LoadTestConfig) -> None:
        self.config = config
        self.logger = logging.getLogger("UmamiLoad")
        self.environment = Environment(
            user_classes=configure_user_classes(config),
            host=config.host,
            events=events,
        )
        self.runner = self.environment.create_local_runner()
        self.duration = 0.0

    def run(self) -> Environment:
        cfg = self.config
        self.logger.info(
            "Starting load test: %s, %d users at %.2f/s for %.0f s",
            cfg.host, cfg.users, cfg.spawn_rate, cfg.run_time,
        )
        start = time.monotonic()
        self.runner.start(cfg.users, spawn_rate=cfg.spawn_rate)
        deadline = gevent.spawn_later(cfg.run_time, self.stop)
        self.runner.greenlet.join()
        deadline.kill(block=False)
        self.duration = time.monotonic() - start

        total = self.environment.stats.total
        self.logger.info(
            "Finished: %d requests, %d failures in %.2f s (%.2f req/s)",
            total.num_requests, total.num_failures, self.duration, total.total_rps,
        )
        return self.environment

    def stop(self) -> None:
        self.runner.quit()


def start_load_test(cfg: LoadTestConfig) -> LoadTest:
    """Run a load test with *cfg* to the end and return it."""
    load_test = LoadTest(cfg)
    load_test.run()
    return load_test
