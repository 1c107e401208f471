"""umami_load.report.html_report: the Locust HTML report of a finished run."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from locust.env import Environment
from locust.html import get_html_report


def render_html(environment: Environment, output_path: Union[Path, str]) -> Path:
    """Write the report ``locust --html`` would produce and return its path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(get_html_report(environment, show_download_link=False), encoding="utf-8")
    return output_path
