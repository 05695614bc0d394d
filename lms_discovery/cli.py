"""CLI entry point for media server discovery.

    lms-discovery [--timeout SEC] [--port PORT] [--config FILE] [options]

Prints a JSON envelope on stdout; logs go to stderr.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import click

from .config import ConfigIssue, DiscoveryConfig, load_config, validate_config
from .config.schema import VALID_LOG_LEVELS
from .reporting.json_reporter import JsonReporter
from .runner.executor import DiscoveryExecutor

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def output_error(message: str, **extra) -> None:
    """Output error in the JSON envelope format."""
    output = {
        "success": False,
        "command": "discover",
        "data": extra or None,
        "message": message,
    }
    click.echo(JsonReporter().to_json_string(output))


def _load(config_path: Optional[Path], **overrides) -> tuple[DiscoveryConfig, list[ConfigIssue]]:
    """Load, override and validate the configuration.

    Returns:
        The configuration and its validation warnings, which are left for the
        caller to log once logging is set up.

    Raises:
        ValueError: If validation found errors.
    """
    config = load_config(config_path).merged(**overrides)

    validation = validate_config(config)
    if not validation.valid:
        errors_str = "; ".join(str(e) for e in validation.errors)
        raise ValueError(f"Invalid configuration: {errors_str}")

    return config, validation.warnings


@click.command()
@click.option("--timeout", type=float, default=None,
              help="Receive wait bound in seconds (default: 5)")
@click.option("--port", type=int, default=None,
              help="UDP discovery port (default: 3483)")
@click.option("--deadline", type=float, default=None,
              help="Stop listening after this many seconds overall")
@click.option("--broadcast-address", default=None,
              help="Probe destination (default: 255.255.255.255)")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="YAML configuration file")
@click.option("--log-level", type=click.Choice(sorted(VALID_LOG_LEVELS), case_sensitive=False),
              default=None, help="Logging level (default: INFO)")
@click.option("--save-report", type=click.Path(path_type=Path), default=None,
              help="Write the full JSON report to this file")
@click.option("--pretty", is_flag=True, help="Pretty print output")
def main(
    timeout: Optional[float],
    port: Optional[int],
    deadline: Optional[float],
    broadcast_address: Optional[str],
    config_path: Optional[Path],
    log_level: Optional[str],
    save_report: Optional[Path],
    pretty: bool,
) -> None:
    """Discover media servers on the local network."""
    try:
        config, warnings = _load(
            config_path,
            timeout=timeout,
            port=port,
            deadline=deadline,
            broadcast_address=broadcast_address,
            log_level=log_level,
        )
    except (FileNotFoundError, ValueError, TypeError) as e:
        output_error(f"Failed to load configuration: {e}")
        sys.exit(1)

    setup_logging(config.log_level)
    for warning in warnings:
        logger.warning("%s", warning)

    start_time = time.time()
    try:
        executor = DiscoveryExecutor(config, save_report=save_report)
        result = executor.execute()
    except KeyboardInterrupt:
        duration_ms = int((time.time() - start_time) * 1000)
        output_error("Discovery interrupted by user", duration_ms=duration_ms)
        sys.exit(130)

    output = result.to_flow_json()
    click.echo(JsonReporter().to_json_string(output, pretty))

    if not output.get("success", False):
        sys.exit(1)


if __name__ == "__main__":
    main()
