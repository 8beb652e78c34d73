"""Command line entry point for the Druid tasks exporter."""

import logging
import click
import uvicorn

from .config import Settings
from .logger import setup_json_logger
from .main import create_app

logger = logging.getLogger(__name__)

_defaults = Settings()


@click.command()
@click.option('--listen-address', default=_defaults.listen_address, show_default=True,
              help='The address to listen on for HTTP requests.')
@click.option('--druid-uri', default=_defaults.druid_uri, show_default=True,
              help="The URI to reach Druid's SQL API.")
@click.option('--exit-on-error/--no-exit-on-error', default=_defaults.exit_on_error, show_default=True,
              help='Terminate the process when a scrape cannot query Druid, instead of answering 503.')
@click.option('--strict-records/--no-strict-records', default=_defaults.strict_records, show_default=True,
              help='Reject task records with missing fields instead of zero-filling them.')
@click.option('--log-level', default=_defaults.log_level.upper(), show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False))
def main(listen_address: str, druid_uri: str, exit_on_error: bool, strict_records: bool, log_level: str):
    """Export Druid task counts per type and status as Prometheus gauges."""
    settings = Settings(
        listen_address=listen_address,
        druid_uri=druid_uri,
        exit_on_error=exit_on_error,
        strict_records=strict_records,
        log_level=log_level,
    )
    try:
        host, port = settings.bind_address()
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="'--listen-address'") from exc

    setup_json_logger(settings.log_level)
    logger.info("The server is listening on %s and scraping %s", settings.listen_address, settings.druid_uri)
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


if __name__ == '__main__':
    main()
