import os
import sys

from loguru import logger

_SCORING_MODULES = ("tokenrisk.scoring", "tokenrisk.services")


def _is_scoring(record: dict) -> bool:
    return record["name"].startswith(_SCORING_MODULES)


def setup_logger(
    *, json_logs: bool = False, level: str = "INFO", log_dir: str = "logs"
) -> None:
    """Configure loguru for the API and the refresh script.

    Console level comes from LOG_LEVEL (falls back to ``level``). Two file
    sinks: everything at INFO, and a DEBUG-only audit of scoring and service
    decisions so a verdict can be traced back to the rules that fired.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stdout, serialize=True, level=console_level)
    else:
        logger.add(
            sys.stdout,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan> - "
                "<level>{message}</level>"
            ),
            level=console_level,
            colorize=True,
        )

    logger.add(
        f"{log_dir}/tokenrisk_{{time:YYYY-MM-DD}}.log",
        rotation="50 MB",
        retention="3 days",
        compression="gz",
        level="INFO",
        serialize=json_logs,
    )
    logger.add(
        f"{log_dir}/scoring_{{time:YYYY-MM-DD}}.log",
        rotation="20 MB",
        retention="7 days",
        compression="gz",
        level="DEBUG",
        filter=_is_scoring,
        serialize=json_logs,
    )
