"""Command line entry point: ``auto-banker /data/options.json``."""

import argparse
import sys
from typing import Any, Optional, Sequence

from .config.loader import ConfigLoader
from .config.validation import LOG_LEVELS
from .engine import AutoBankerEngine
from .errors import ConfigurationError
from .logging import configure_logging, get_logger

logger = get_logger("banker_app")


def _logging_options(options: dict[str, Any]) -> tuple[str, bool]:
    """Logging settings from raw options, falling back to defaults when invalid."""
    level = options.get("log_level", "INFO")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        level = "INFO"
    return level.upper(), options.get("log_json") is True


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="auto-banker",
        description="Watch an account balance and offer one-click top-ups."
    )
    parser.add_argument("options_path", help="Path to the add-on options file (JSON or YAML)")
    args = parser.parse_args(argv)

    loader = ConfigLoader.create()

    try:
        options = loader.read_options(args.options_path)
        level, format_json = _logging_options(options)
        configure_logging(level=level, format_json=format_json)
        config = loader.from_options(options, source=args.options_path)
    except ConfigurationError as e:
        configure_logging()
        logger.error(
            "Invalid configuration",
            error=str(e),
            problems=[str(p) for p in e.problems],
            source=e.source
        )
        return 1

    logger.info("Loaded options", **config.redacted())

    engine = AutoBankerEngine(config)
    engine.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
