"""cgikit console command: decode the current CGI request and dump it.

Install as a CGI program (or a wrapper script calling ``cgikit``) to see
exactly what a form submission delivers:

    cgikit [--json] [--config decoder.yaml] [-v]
    cgikit --check      # exit status 0 when running under CGI, 1 otherwise
"""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path

import click

from cgikit._config import ConfigParseError, DecoderConfig, load_decoder_config
from cgikit._decoder import RequestDecoder
from cgikit._dump import dump, dump_json

logger = logging.getLogger(__name__)

CGI_HEADER = "Content-type: text/plain\r\n\r\n"


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Dump fields as JSON instead of text.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML decoder config.",
)
@click.option("--check", is_flag=True, help="Only test whether a CGI request is present.")
@click.option("-v", "--verbose", is_flag=True, help="Log decoding details to stderr.")
def main(as_json: bool, config_path: Path | None, check: bool, verbose: bool) -> None:
    """Decode the CGI request in the environment and stdin, and print it."""
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_decoder_config(config_path) if config_path else DecoderConfig()
    except ConfigParseError as e:
        raise click.ClickException(str(e)) from e

    decoder = RequestDecoder(config)
    if check:
        sys.exit(0 if decoder.is_active() else 1)

    outcome = decoder.run(body=click.get_binary_stream("stdin"))
    logger.debug("query: %s, body: %s", outcome.query.status, outcome.body.status)
    click.echo(CGI_HEADER, nl=False)
    if as_json:
        click.echo(dump_json(outcome.request))
    else:
        buf = io.StringIO()
        dump(outcome.request, buf)
        click.echo(buf.getvalue(), nl=False)


if __name__ == "__main__":
    main()
