"""umami_load.report: console, JSON and HTML output of a finished load test."""

from __future__ import annotations

from typing import List

from locust.env import Environment
from locust.stats import get_error_report_summary, get_percentile_stats_summary, get_stats_summary

from umami_load.report.html_report import render_html
from umami_load.report.json_report import render_json, report_data
from umami_load.tally import TALLY


def render_summary(environment: Environment) -> str:
    """Locust's end-of-run console tables plus the contact form outcomes."""
    stats = environment.stats
    lines: List[str] = [f"Host: {environment.host}", ""]
    lines += get_stats_summary(stats, current=False)
    lines += [""] + get_percentile_stats_summary(stats)
    if stats.errors:
        lines += [""] + get_error_report_summary(stats)
    lines.append("")
    for locale, counts in TALLY.as_dict().items():
        lines.append(f"Contact form ({locale}): {counts['accepted']} accepted, {counts['throttled']} throttled")
    return "\n".join(lines)


__all__ = ["render_json", "render_html", "render_summary", "report_data"]
