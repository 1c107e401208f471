#!/usr/bin/env python3
"""
Command line entry point for umami_load.

Commands:
  run       Run the load test on Locust and print/save the reports
  config    Show the effective configuration
  catalog   List the content nodes the visitors browse

Global options:
  --config PATH       Path to the YAML/JSON config (default: configs/default.yaml)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

run options:
  --host URL          Override base_url
  --users N           Number of virtual users
  --spawn-rate R      Users started per second
  --run-time SEC      Run duration
  --json PATH         Save the JSON report
  --html PATH         Save the Locust HTML report
  --pretty            Indent JSON output

Example:
  umami-load --config configs/default.yaml run --users 20 --run-time 300 --json report.json
"""
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from umami_load import __version__
from umami_load.catalog import ContentType, Locale, get_nodes
from umami_load.config import DEFAULT_CONFIG_PATH, LoadTestConfig, load_config
from umami_load.logger import init_logging
from umami_load.report import render_summary
from umami_load.report.html_report import render_html
from umami_load.report.json_report import render_json
from umami_load.runner import start_load_test

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='umami-load, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """umami-load command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _load(ctx):
    config_path = ctx.obj['config_path']
    if config_path is None and not DEFAULT_CONFIG_PATH.exists():
        return LoadTestConfig()
    try:
        return load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option('--host', 'host', default=None, help='Override base_url')
@click.option('--users', '-u', 'users', type=int, default=None, help='Number of virtual users')
@click.option('--spawn-rate', '-r', 'spawn_rate', type=float, default=None, help='Users started per second')
@click.option('--run-time', '-t', 'run_time', type=float, default=None, help='Run duration (seconds)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the Locust HTML report to a file'
)
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.pass_context
def run(ctx, host, users, spawn_rate, run_time, json_output, html_output, pretty):
    """Run the load test and produce the reports."""
    cfg = _load(ctx)
    try:
        cfg = cfg.with_overrides(
            base_url=host, users=users, spawn_rate=spawn_rate, run_time=run_time
        )
    except ValidationError as e:
        print_error(f'Invalid option: {e}')

    click.echo(f'Starting load test against {cfg.host}')
    try:
        environment = start_load_test(cfg).environment
    except KeyboardInterrupt:
        print_error('Load test interrupted')
    except Exception as e:
        print_error(f'Load test failed: {e}')

    click.echo(render_summary(environment))

    if json_output:
        try:
            saved_json = render_json(environment, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(environment, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the effective configuration as JSON."""
    cfg = _load(ctx)
    click.echo(cfg.model_dump_json(indent=2))


@cli.command('catalog', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--type', 'content_type',
    default=None,
    type=click.Choice([t.value for t in ContentType]),
    help='Only list nodes of this content type'
)
@click.option(
    '--locale', 'locale',
    default=Locale.EN.value, show_default=True,
    type=click.Choice([loc.value for loc in Locale]),
    help='Locale of the listed paths and titles'
)
def catalog(content_type, locale):
    """List content nodes as JSON."""
    loc = Locale(locale)
    types = [ContentType(content_type)] if content_type else list(ContentType)
    rows = [
        {"nid": node.nid, "type": ct.value, "url": node.url_for(loc), "title": node.title_for(loc)}
        for ct in types
        for node in get_nodes(ct)
    ]
    click.echo(json.dumps(rows, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    cli()
