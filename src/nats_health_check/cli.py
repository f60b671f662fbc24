"""Command-line interface for NATS health checks."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from nats_health_check import __version__
from nats_health_check.checks import CHECKS, CheckError
from nats_health_check.collectors import CollectorError, MonitoringCollector
from nats_health_check.config import Config, create_example_config
from nats_health_check.credentials import load_credential
from nats_health_check.models import Status
from nats_health_check.monitor import CheckRunner, load_snapshot
from nats_health_check.result import Result

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = ["nhc.yaml", "nhc.yml", "~/.config/nhc/config.yaml"]


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def status_color(status: Status) -> str:
    """Get Rich color for check status."""
    colors = {
        Status.OK: "green",
        Status.WARNING: "yellow",
        Status.CRITICAL: "red",
        Status.UNKNOWN: "dim",
    }
    return colors.get(status, "white")


def load_config(path: Optional[str]) -> Config:
    """Load the given config file, else the first default location found."""
    if path:
        return Config.from_yaml(path)

    for default_path in DEFAULT_CONFIG_PATHS:
        candidate = Path(default_path).expanduser()
        if candidate.exists():
            return Config.from_yaml(candidate)
    return Config()


def collect_snapshot(
    kind: str,
    config: Config,
    snapshot: Optional[str],
    url: Optional[str],
    credential: Optional[str],
) -> Any:
    """Obtain the snapshot a check needs from a file, a creds file or the monitoring endpoint."""
    if snapshot:
        return load_snapshot(kind, snapshot)

    if kind == "credential":
        path = credential or config.credential.path
        if not path:
            raise click.UsageError("credential check needs --credential or credential.path")
        return load_credential(path)

    if kind in ("vitals", "cluster"):
        collector = MonitoringCollector(url or config.monitor_url)
        try:
            return collector.vitals() if kind == "vitals" else collector.cluster()
        finally:
            collector.close()

    raise click.UsageError(f"{kind} check needs --snapshot")


def create_result_table(result: Result) -> Table:
    """Create a Rich table listing findings, worst first."""
    table = Table(title=f"{result.check} check", show_header=True, header_style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Finding")

    for status, messages in (
        (Status.CRITICAL, result.criticals),
        (Status.WARNING, result.warnings),
        (Status.OK, result.oks),
    ):
        for message in messages:
            table.add_row(Text(status.value, style=status_color(status)), message)

    return table


def create_perf_table(result: Result) -> Table:
    """Create a Rich table of perf data."""
    table = Table(title="Performance data", show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")

    for datum in result.perf_data:
        label, _, value = str(datum).partition("=")
        table.add_row(label, value)

    return table


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """NATS health checks with Nagios compatible output."""
    pass


@main.command()
@click.argument("kind", type=click.Choice(sorted(CHECKS)))
@click.option(
    "-c", "--config",
    type=click.Path(exists=True),
    help="Path to configuration file",
)
@click.option(
    "--snapshot",
    type=click.Path(exists=True),
    help="YAML or JSON snapshot to check instead of live data",
)
@click.option(
    "--url",
    help="Monitoring endpoint for vitals and cluster checks",
)
@click.option(
    "--credential", "credential",
    type=click.Path(exists=True),
    help="Credential file for the credential check",
)
@click.option(
    "--format", "output_format",
    default="nagios",
    type=click.Choice(["nagios", "json", "table"]),
    help="Output format",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
def check(
    kind: str,
    config: Optional[str],
    snapshot: Optional[str],
    url: Optional[str],
    credential: Optional[str],
    output_format: str,
    log_level: str,
) -> None:
    """Run one check and exit with its Nagios status code."""
    setup_logging(log_level)
    cfg = load_config(config)
    runner = CheckRunner(cfg)

    try:
        data = collect_snapshot(kind, cfg, snapshot, url, credential)
        result = runner.run(kind, data)
    except (CheckError, CollectorError) as e:
        logger.error(f"{kind} check failed: {e}")
        result = Result(check=kind)
        result.add_critical(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif output_format == "table":
        console.print(create_result_table(result))
        if result.perf_data:
            console.print(create_perf_table(result))
    else:
        click.echo(result.render_nagios())

    sys.exit(result.status.exit_code)


@main.command()
@click.option(
    "-o", "--output",
    default="nhc.yaml",
    help="Output file path",
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing file",
)
def init(output: str, force: bool) -> None:
    """Create an example configuration file."""
    path = Path(output)

    if path.exists() and not force:
        console.print(f"[red]File already exists: {path}[/]")
        console.print("Use --force to overwrite")
        sys.exit(1)

    example = create_example_config()
    example.to_yaml(path)

    console.print(f"[green]Created example configuration: {path}[/]")
    console.print("Edit this file to set your thresholds.")


if __name__ == "__main__":
    main()
