"""
Logging configuration for MDP SDK
"""

import logging
import sys
from typing import TextIO

# Third-party loggers that log every request/RPC call at INFO/DEBUG
NOISY_LOGGERS = ("httpx", "httpcore", "web3", "urllib3")


def setup_logging(
    level: int = logging.INFO,
    stream: TextIO | None = None,
    dependency_level: int = logging.WARNING,
) -> None:
    """
    Configure root logging for scripts and agents using the SDK.

    Args:
        level: Level for the root logger and the mdp_sdk package (default: INFO)
        stream: Output stream (default: stdout)
        dependency_level: Level applied to httpx/web3 loggers so payment
            milestones are not buried under transport chatter
    """
    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)-8s %(name)s %(filename)s:%(lineno)d %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("mdp_sdk").setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, dependency_level))


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the mdp_sdk namespace"""
    if not name.startswith("mdp_sdk"):
        name = f"mdp_sdk.{name}"
    return logging.getLogger(name)
