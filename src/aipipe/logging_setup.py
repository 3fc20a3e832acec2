import logging
import os
from typing import Optional

_configured = False


def setup_logging(level: Optional[str] = None, override: bool = True) -> None:
    """
    Minimal logging setup.
    - Uses APP_LOG_LEVEL / LOG_LEVEL env if level is None (default INFO).
    - Configures a single console handler via logging.basicConfig.
    - override=False leaves an earlier setup_logging call (e.g. the CLI's
      --log-level) in place.
    """
    global _configured
    if _configured and not override:
        return

    level_name = (level or os.getenv("APP_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO").upper()
    # Fallback to INFO if user passes something weird
    level_value = getattr(logging, level_name, logging.INFO)
    if not isinstance(level_value, int):
        level_value = logging.INFO

    logging.basicConfig(
        level=level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger().setLevel(level_value)
    _configured = True
