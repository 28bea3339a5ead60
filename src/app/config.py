# src/app/config.py
#!/usr/bin/env python3
"""
Viewer settings.

- ENV: PATHFINDER_ALGO, PATHFINDER_SIZE (WxH), PATHFINDER_LOG_LEVEL
- CLI: --algo=..., --size=WxH, --log-level=...   (CLI wins over ENV)
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple
import logging
import os
import sys

from src.core.search import resolve_algorithm
from src.core.types import Algorithm

logger = logging.getLogger(__name__)

DEFAULT_SIZE = (30, 20)
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_ENV_KEYS = {
    "algo": "PATHFINDER_ALGO",
    "size": "PATHFINDER_SIZE",
    "log-level": "PATHFINDER_LOG_LEVEL",
}


@dataclass(frozen=True)
class Settings:
    algorithm: Algorithm = Algorithm.ASTAR
    width: int = DEFAULT_SIZE[0]
    height: int = DEFAULT_SIZE[1]
    log_level: str = "INFO"


def parse_size(text: str) -> Tuple[int, int]:
    w, sep, h = text.lower().partition("x")
    if not sep:
        raise ValueError(f"expected WxH, got {text!r}")
    width, height = int(w), int(h)
    if width <= 0 or height <= 0:
        raise ValueError(f"grid size must be positive, got {text!r}")
    return width, height


def _raw_values(argv: Sequence[str], environ: Mapping[str, str]) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for key, env_key in _ENV_KEYS.items():
        if env_key in environ:
            values[key] = environ[env_key]
    for arg in argv:
        for key in _ENV_KEYS:
            if arg.startswith(f"--{key}="):
                values[key] = arg.split("=", 1)[1]
    return values


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ
    raw = _raw_values(argv, environ)

    algorithm = resolve_algorithm(raw["algo"]) if "algo" in raw else Algorithm.ASTAR

    width, height = DEFAULT_SIZE
    if "size" in raw:
        try:
            width, height = parse_size(raw["size"])
        except ValueError as ex:
            logger.warning("Ignoring grid size: %s. Using %dx%d.", ex, *DEFAULT_SIZE)

    log_level = raw.get("log-level", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning("Unknown log level %r, using INFO", log_level)
        log_level = "INFO"

    return Settings(algorithm=algorithm, width=width, height=height, log_level=log_level)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
