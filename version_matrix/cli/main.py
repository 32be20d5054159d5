"""Command-line interface for version-matrix-action.

Every option can also be supplied through an environment variable so the
same entry point works as a GitHub Action and locally:

- REQUIRES_PYTHON: Constraint expression (e.g. ">=3.10,<3.14" or "^3.11")
- EOL_API_URL: Override the endoflife.date feed URL
- EOL_TIMEOUT: Per-request timeout in seconds (default: 6)
- EOL_MAX_RETRIES: Retries after the first request (default: 2)
- OFFLINE: Skip the feed and use the built-in fallback list
- OUTPUT_FORMAT: json, text or github (default: json)
- LOG_LEVEL: DEBUG, INFO, WARNING or ERROR (default: INFO)

In `github` format the results are also appended to $GITHUB_OUTPUT.
"""

import json
import os
import sys
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import click

from .. import __version__
from .._eol import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, ENDOFLIFE_API_URL, FALLBACK_LAST_REVIEWED, EOLCatalogClient
from ..console import gha_error, gha_group, gha_warning, print_matrix_table, print_summary_table, print_tool_status
from ..exceptions import (
    ConfigurationError,
    ConstraintError,
    EmptyConstraintError,
    NoCandidatesError,
    NoMatchError,
    VersionMatrixError,
)
from ..logging_config import logger, set_log_level
from ..matrix import SupportMatrix, build_support_matrix, sort_versions
from ..tool_checks import detect_python_interpreters, log_tool_status

OUTPUT_FORMATS = ("json", "text", "github")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOCALHOST_PATTERNS = ["127.0.0.1", "localhost", "0.0.0.0"]

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class Config:
    """Configuration settings for a support matrix run."""

    requires_python: str
    feed_url: str = ENDOFLIFE_API_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    offline: bool = False
    output_format: str = "json"
    log_level: str = "INFO"
    github_output: Optional[str] = None

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.requires_python or not self.requires_python.strip():
            raise ConfigurationError("requires-python constraint is not defined (use --requires-python)")
        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be a positive number of seconds")
        if self.max_retries < 0:
            raise ConfigurationError("Max retries must not be negative")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output format '{self.output_format}'. Use one of: {', '.join(OUTPUT_FORMATS)}"
            )
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level '{self.log_level}'. Use one of: {', '.join(LOG_LEVELS)}")
        if not self.offline:
            self._validate_feed_url()

    def _validate_feed_url(self) -> None:
        """
        Validate and normalize the feed URL.

        Raises:
            ConfigurationError: If URL format is invalid
        """
        parsed = urlparse(self.feed_url)

        if not parsed.scheme or parsed.scheme not in ("http", "https"):
            raise ConfigurationError("EOL feed URL must start with http:// or https://")

        if not parsed.netloc:
            raise ConfigurationError("EOL feed URL must include a valid hostname")

        if parsed.scheme == "http" and not any(localhost in parsed.netloc for localhost in LOCALHOST_PATTERNS):
            logger.warning("Using HTTP (not HTTPS) for the EOL feed - consider using HTTPS")


def evaluate_boolean(value: str) -> bool:
    """
    Evaluate string values as boolean.

    Args:
        value: String value to evaluate

    Returns:
        Boolean result
    """
    return value.lower() in ["true", "yes", "yeah", "1"]


def build_config(
    requires_python: Optional[str],
    feed_url: Optional[str] = None,
    timeout: Optional[float] = None,
    max_retries: Optional[int] = None,
    offline: Optional[bool] = None,
    output_format: Optional[str] = None,
    log_level: Optional[str] = None,
) -> Config:
    """
    Build a Config from CLI values, filling gaps from the environment.

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    if offline is None:
        offline = evaluate_boolean(os.getenv("OFFLINE", "false"))

    config = Config(
        requires_python=(requires_python or "").strip(),
        feed_url=feed_url or ENDOFLIFE_API_URL,
        timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
        max_retries=DEFAULT_MAX_RETRIES if max_retries is None else max_retries,
        offline=offline,
        output_format=(output_format or "json").lower(),
        log_level=(log_level or "INFO").upper(),
        github_output=os.getenv("GITHUB_OUTPUT"),
    )
    config.validate()
    return config


def write_github_output(path: str, matrix: SupportMatrix) -> None:
    """
    Append the matrix outputs to a GitHub Actions output file.

    Outputs: version_matrix, matrix_json, build_version, matrix_source
    """
    lines = [
        f"version_matrix={json.dumps(matrix.versions)}",
        f"matrix_json={matrix.matrix_json}",
        f"build_version={matrix.build_version or ''}",
        f"matrix_source={matrix.source}",
    ]
    with open(path, "a", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    logger.debug(f"Wrote {len(lines)} outputs to {path}")


def run(config: Config, client: Optional[EOLCatalogClient] = None) -> SupportMatrix:
    """
    Resolve the support matrix and emit it in the configured format.

    Args:
        config: Validated configuration
        client: Optional pre-built feed client (tests inject one)

    Returns:
        The resolved SupportMatrix
    """
    if client is None:
        client = EOLCatalogClient(
            feed_url=config.feed_url,
            timeout=config.timeout,
            max_retries=config.max_retries,
        )

    matrix = build_support_matrix(config.requires_python, client, offline=config.offline)

    if matrix.used_fallback and not config.offline:
        gha_warning(
            "Could not use endoflife.date data, "
            f"the built-in fallback list (last reviewed {FALLBACK_LAST_REVIEWED}) was used",
            title="Python EOL data",
        )

    if config.output_format == "text":
        catalog = None if matrix.used_fallback else client.cache.catalog
        print_matrix_table(matrix.versions, catalog, client.today())
        print_summary_table(
            "Summary",
            [
                ("requires-python", matrix.requires_python),
                ("Build version", matrix.build_version),
                ("Source", matrix.source),
            ],
        )
    else:
        click.echo(json.dumps(matrix.versions))

    if config.output_format == "github":
        if config.github_output:
            write_github_output(config.github_output, matrix)
        else:
            logger.warning("GITHUB_OUTPUT is not set, outputs were only printed")

    return matrix


@click.group(invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.option(
    "--requires-python",
    "-r",
    envvar="REQUIRES_PYTHON",
    help="Version constraint, e.g. '>=3.10,<3.14', '^3.11' or '~=3.12'. [env: REQUIRES_PYTHON]",
)
@click.option("--feed-url", envvar="EOL_API_URL", help="endoflife.date feed URL. [env: EOL_API_URL]")
@click.option(
    "--timeout", envvar="EOL_TIMEOUT", type=float, help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})."
)
@click.option(
    "--max-retries",
    envvar="EOL_MAX_RETRIES",
    type=int,
    help=f"Retries after the first request (default: {DEFAULT_MAX_RETRIES}).",
)
@click.option(
    "--offline/--online", default=None, help="Use the built-in fallback list instead of the feed. [env: OFFLINE]"
)
@click.option(
    "-f",
    "--format",
    "output_format",
    envvar="OUTPUT_FORMAT",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    help="Output format (default: json). [env: OUTPUT_FORMAT]",
)
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (default: INFO). [env: LOG_LEVEL]",
)
@click.version_option(__version__, "-V", "--version", prog_name="version-matrix", message="%(prog)s %(version)s")
@click.pass_context
def cli(ctx, requires_python, feed_url, timeout, max_retries, offline, output_format, log_level):
    """Resolve the Python versions a project should be tested against.

    Intersects a requires-python constraint with the Python release lines
    that have not reached end-of-life.
    """
    if log_level:
        set_log_level(log_level)

    if ctx.invoked_subcommand is not None:
        return

    if requires_python is None and "REQUIRES_PYTHON" not in os.environ:
        click.echo(ctx.get_help())
        return

    # Set but empty, e.g. REQUIRES_PYTHON="" for a manifest without requires-python
    if not (requires_python or "").strip():
        gha_error(str(EmptyConstraintError("requires-python constraint is empty")), title="Invalid requires-python")
        sys.exit(1)

    try:
        config = build_config(
            requires_python=requires_python,
            feed_url=feed_url,
            timeout=timeout,
            max_retries=max_retries,
            offline=offline,
            output_format=output_format,
            log_level=log_level,
        )
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    try:
        run(config)
    except ConstraintError as e:
        gha_error(str(e), title="Invalid requires-python")
        sys.exit(1)
    except (NoMatchError, NoCandidatesError) as e:
        gha_error(str(e), title="No Python versions")
        sys.exit(1)
    except VersionMatrixError as e:
        gha_error(str(e), title="Support matrix failed")
        sys.exit(1)


@cli.command()
@click.argument("versions", nargs=-1)
@click.option("--offline/--online", default=None, help="Check the fallback list instead of the feed.")
def tools(versions, offline):
    """Show which Python interpreters are installed locally.

    Checks the given VERSIONS, or every supported release line when none are given.
    """
    if not versions:
        if offline is None:
            offline = evaluate_boolean(os.getenv("OFFLINE", "false"))
        client = EOLCatalogClient()
        if offline:
            versions = client.fallback_versions()
        else:
            try:
                versions = sort_versions(client.supported_versions())
            except VersionMatrixError as e:
                logger.warning(f"Could not fetch Python EOL data, using fallback versions: {e}")
                versions = client.fallback_versions()

    with gha_group("Local Python interpreters"):
        statuses = detect_python_interpreters(list(versions))
        print_tool_status(statuses)
        log_tool_status(statuses)


def main() -> None:
    """Entry point for the version-matrix console script."""
    cli()


if __name__ == "__main__":
    main()
