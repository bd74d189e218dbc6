"""
Logging for the geodesim package.

Exports:
    - logger: the global Loguru logger, re-exported for package modules.
    - setup_logfile: add a rotating file sink.
    - setup_json_logfile: add a JSON sink for machine parsing.

Library modules only emit records. They stay silent until an application
calls enable_logging() or adds a sink through one of the helpers.
"""

from loguru import logger

__all__ = [
    "logger",
    "enable_logging",
    "setup_logfile",
    "setup_json_logfile",
]

logger.disable("geodesim")


def enable_logging() -> None:
    """Let geodesim records through to the configured sinks."""
    logger.enable("geodesim")


def setup_logfile(
    log_path: str,
    rotation: str = "10 MB",
    retention: str = "10 days",
    compression: str = "zip",
    level: str = "INFO",
    colorize: bool = False,
) -> int:
    """
    Add a rotating file handler to the global logger.

    Args:
        log_path: Path to the log file
        rotation: Size or time string for log rotation
        retention: How long to keep old logs
        compression: Compression method for rotated logs
        level: Logging level (DEBUG, INFO, ...)
        colorize: Colorize file output

    Returns:
        The sink id, usable with logger.remove()
    """
    enable_logging()
    sink_id = logger.add(
        log_path,
        rotation=rotation,
        retention=retention,
        compression=compression,
        level=level.upper(),
        colorize=colorize,
        enqueue=True,  # oracle trials may run in worker processes
        backtrace=True,
        diagnose=False,
    )
    logger.info(f"File logging initialized: {log_path}")
    return sink_id


def setup_json_logfile(log_path: str, **kwargs) -> int:
    """Add a JSON-format log file. Extra kwargs go to logger.add()."""
    enable_logging()
    sink_id = logger.add(log_path, serialize=True, **kwargs)
    logger.info(f"JSON logging initialized: {log_path}")
    return sink_id
