#!/usr/bin/env python3
"""
Command line entry point for SiteMapper.

Commands:
  crawl     Crawl a site and save its site map as text
  config    Show the effective configuration

Common options:
  --config PATH       YAML/JSON config file (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Logging format string

crawl arguments and options:
  BASE_URL            Page to start from (overrides base_url from the config)
  MAX_SEARCH_DEPTH    Deepest link level to fetch (default 1)
  OUTPUT_FILE         Site map destination (default siteMap.txt)
  --timeout MILLIS    Timeout for a single page
  --user-agent LABEL  User-Agent header

Also:
  --version, -v       Show the SiteMapper version

Example:
  site-mapper crawl example.com 2 example.txt
"""
import sys
from pathlib import Path

import click

from site_mapper import __version__
from site_mapper.config import CrawlerConfig, load_config
from site_mapper.crawler.crawler import SiteMapCrawler
from site_mapper.logger import DEFAULT_FORMAT, init_logging
from site_mapper.report.text_report import render_text

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])
SEPARATOR = "=" * 32


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
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
    help='Log file (stdout if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteMapper command group."""
    init_logging(level=log_level, log_file=log_file, log_format=log_format)
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('base_url', required=False)
@click.argument('max_search_depth', required=False, type=click.IntRange(min=0))
@click.argument('output_file', required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    '--timeout', '-t', 'timeout_millis',
    type=click.IntRange(min=1),
    default=None,
    help='Timeout for a single page (milliseconds)'
)
@click.option(
    '--user-agent', '-u', 'user_agent',
    default=None,
    help='User-Agent header sent with every request'
)
@click.pass_context
def crawl(ctx, base_url, max_search_depth, output_file, timeout_millis, user_agent):
    """Crawl BASE_URL and save the site map to OUTPUT_FILE."""
    overrides = {
        'base_url': base_url,
        'max_search_depth': max_search_depth,
        'output_file': output_file,
        'page_timeout_millis': timeout_millis,
        'user_agent': user_agent,
    }
    cfg = CrawlerConfig(**{
        **ctx.obj['config'].model_dump(),
        **{k: v for k, v in overrides.items() if v is not None},
    })
    if not cfg.base_url:
        raise click.UsageError('Missing BASE_URL (pass it as an argument or set base_url in the config).')

    output_path = cfg.output_file.expanduser().absolute()
    click.echo('Configuration')
    click.echo(f' baseUrl: {cfg.base_url}')
    click.echo(f' maxSearchDepth: {cfg.max_search_depth}')
    click.echo(f' outputFile: {output_path}')
    click.echo(SEPARATOR)

    crawler = SiteMapCrawler(
        cfg.page_timeout_millis,
        cfg.max_search_depth,
        user_agent=cfg.user_agent,
    )
    site_map = crawler.create_site_map(cfg.base_url)

    try:
        saved = render_text(site_map, output_path)
    except OSError as e:
        print_error(f'Failed to save site map: {e}')

    click.echo(SEPARATOR)
    click.echo(f'SiteMap saved to: {saved}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
