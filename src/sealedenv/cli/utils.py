import json
import logging
import os
import traceback
from typing import Any

import click


def get_env_flag(env_var: str, default: bool = False) -> bool:
    """Get a boolean flag from an environment variable.

    Args:
        env_var: Name of the environment variable
        default: Default value if environment variable is not set

    Returns:
        True if the environment variable is set to "1", "true", or "yes" (case insensitive)
        False otherwise
    """
    value = os.environ.get(env_var, "").lower()
    return value in ("1", "true", "yes") if value else default


def configure_logging(debug: bool = False, log_level: str | None = None) -> None:
    """Configure logging for all modules.

    Logs go to stderr so that command output on stdout stays machine readable.

    Args:
        debug: Whether to enable debug logging (overrides log_level if True)
        log_level: Log level string ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    """
    # Check environment variable if debug flag is not set
    if not debug:
        debug = get_env_flag("SEALEDENV_DEBUG")

    if debug:
        level = logging.DEBUG
    elif log_level:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    root_logger.addHandler(stream_handler)

    logging.getLogger("sealedenv").setLevel(level)


def format_error(error: Exception, debug: bool = False) -> dict[str, Any]:
    """Format an error for output.

    Args:
        error: The exception that occurred
        debug: Whether to include debug information

    Returns:
        Dict containing error information
    """
    error_info = {"error": str(error)}

    if debug:
        error_info["traceback"] = traceback.format_exc()
        error_info["type"] = error.__class__.__name__

    return error_info


def output_result(result: Any, json_output: bool = False) -> None:
    """Output a result in either JSON or human-readable format.

    Mappings are printed as ``NAME=value`` lines in human-readable mode.
    """
    if json_output:
        click.echo(json.dumps({"status": "ok", "result": result}, indent=2, default=str))
    elif isinstance(result, dict):
        for name, value in result.items():
            click.echo(f"{name}={'' if value is None else value}")
    elif isinstance(result, list):
        for row in result:
            click.echo(row)
    else:
        click.echo(result)


def output_error(error: Exception, json_output: bool = False, debug: bool = False) -> None:
    """Output an error in either JSON or human-readable format, then abort.

    Args:
        error: The exception that occurred
        json_output: Whether to output in JSON format
        debug: Whether to include debug information
    """
    error_info = format_error(error, debug)

    if json_output:
        click.echo(json.dumps({"status": "error", **error_info}, indent=2))
    else:
        click.echo(f"Error: {error_info['error']}", err=True)
        if debug and "traceback" in error_info:
            click.echo("\nTraceback:", err=True)
            click.echo(error_info["traceback"], err=True)

    raise click.Abort()
