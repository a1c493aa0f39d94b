"""Entry point: python -m testrail_swagger BASE_URL

Fetches TestRail's custom case and result fields and prints a stamped
Swagger 2.0 document describing the TestRail API.
"""

from __future__ import annotations

import datetime
import logging
import sys
from pathlib import Path

import click
import httpx

from .codegen import generate
from .config import DEFAULT_TIMEOUT, GeneratorConfig, load_config, parse_service_coordinates
from .context_builder import build_context
from .field_types import FieldDefinitionError
from .loader import (
    CASE_FIELDS_METHOD,
    RESULT_FIELDS_METHOD,
    fetch_field_definitions,
    make_client,
)
from .stamp import stamp

logger = logging.getLogger(__name__)

_USAGE_HINT = """\
Expected exactly one base URL, e.g.
  testrail-swagger https://example.testrail.net/index.php?/api/v2
Received: {received}

The following environment variables must also be set:
  TESTRAIL_API_USER - the username of an account on that TestRail instance
  TESTRAIL_API_KEY  - an API key (or the password) for that user"""


class CliError(click.ClickException):
    """Failure reported to the operator without a traceback."""


def build_document(
    config: GeneratorConfig,
    *,
    client: httpx.Client | None = None,
    generated_on: datetime.date | None = None,
) -> tuple[str, dict]:
    """Fetch field metadata and return (stamped document, template context)."""
    service = parse_service_coordinates(config.base_url)
    own_client = client is None
    client = client or make_client(config)
    try:
        case_fields = fetch_field_definitions(client, config, CASE_FIELDS_METHOD)
        result_fields = fetch_field_definitions(client, config, RESULT_FIELDS_METHOD)
    finally:
        if own_client:
            client.close()

    context = build_context(service, case_fields, result_fields)
    return stamp(generate(context), generated_on=generated_on), context


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog="Credentials are read from TESTRAIL_API_USER and TESTRAIL_API_KEY.",
)
@click.version_option(package_name="testrail-swagger")
@click.argument("base_urls", nargs=-1, metavar="BASE_URL")
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the document to this file instead of stdout.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_TIMEOUT,
    show_default=True,
    help="Seconds to wait for each TestRail API response.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log requests to stderr.")
def cli(
    base_urls: tuple[str, ...],
    output_path: Path | None,
    timeout: float,
    verbose: bool,
) -> None:
    """Generate a Swagger 2.0 spec of the TestRail API at BASE_URL,
    including the instance's custom case and result fields."""
    if len(base_urls) != 1:
        raise click.UsageError(_USAGE_HINT.format(received=list(base_urls)))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(base_urls[0], timeout=timeout)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    logger.debug("Generating Swagger document for %s", config.base_url)

    try:
        document, context = build_document(config)
    except httpx.HTTPError as exc:
        raise CliError(f"TestRail request failed: {exc}") from exc
    except FieldDefinitionError as exc:
        raise CliError(f"Invalid custom field metadata: {exc}") from exc

    if output_path is None:
        click.echo(document, nl=False)
        return

    try:
        output_path.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        f"Generated {output_path} ({context['case_field_count']} case fields,"
        f" {context['result_field_count']} result fields)",
        err=True,
    )


def main(argv: list[str] | None = None) -> int:
    """Console script entry point."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), prog_name="testrail-swagger", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    # --help / --version return their exit code
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
