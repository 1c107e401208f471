"""
JSON report for umami_load.

Flattens the Locust request statistics and the contact form outcomes of a
finished run into one document.
"""
import json
from pathlib import Path
from typing import Any, Dict

from locust.env import Environment

from umami_load.tally import TALLY


def _entry_row(entry) -> Dict[str, Any]:
    return {
        "method": entry.method,
        "name": entry.name,
        "requests": entry.num_requests,
        "failures": entry.num_failures,
        "avg_ms": round(entry.avg_response_time, 2),
        "min_ms": entry.min_response_time or 0,
        "max_ms": entry.max_response_time,
        "median_ms": entry.median_response_time,
        "p95_ms": entry.get_response_time_percentile(0.95),
        "rps": round(entry.total_rps, 2),
    }


def report_data(environment: Environment) -> Dict[str, Any]:
    stats = environment.stats
    entries = sorted(stats.entries.values(), key=lambda e: (e.name, e.method))
    return {
        "host": environment.host,
        "total": _entry_row(stats.total),
        "requests": [_entry_row(e) for e in entries],
        "failures": [
            {"method": err.method, "name": err.name, "error": str(err.error), "occurrences": err.occurrences}
            for err in sorted(stats.errors.values(), key=lambda err: -err.occurrences)
        ],
        "contact_form": TALLY.as_dict(),
    }


def render_json(environment: Environment, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save the statistics of *environment* as JSON at *output_path* and return the path.

    Example:
    ```python
    from umami_load.report.json_report import render_json
    report_path = render_json(load_test.environment, 'reports/report.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(report_data(environment), ensure_ascii=False, indent=2 if pretty else None),
        encoding="utf-8",
    )
    return output
