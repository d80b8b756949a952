from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv


_LOADED = False

logger = logging.getLogger(__name__)


def load_env() -> None:
    global _LOADED
    if _LOADED:
        return
    _LOADED = True

    base_dir = Path(__file__).resolve().parent
    # Project root .env first, then app/.env, then the container path.
    candidates = [
        base_dir.parent / ".env",
        base_dir / ".env",
        Path("/app/.env"),
    ]

    for path in candidates:
        if not path.exists():
            continue
        # Real environment variables win over .env values.
        load_dotenv(dotenv_path=path, override=False)
        if os.getenv("FAKTURA_DEBUG") == "1":
            logger.debug("Environment loaded from %s", path)


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
