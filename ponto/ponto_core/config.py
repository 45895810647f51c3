"""
Paths, environment overrides, logging setup, safe_print.
"""

import os
import sys
import logging
from pathlib import Path

from .constants import (
    CONFIG_DIR_PARTS, CREDENTIALS_FILENAME, COOKIES_FILENAME,
    LOG_FILENAME, LOG_MAX_BYTES, DEFAULT_BASE_URL,
)


# ─── Paths ───────────────────────────────────────────────────────
# One config dir per user. PONTO_CONFIG_DIR overrides it (tests, containers).

def get_config_dir():
    override = os.environ.get("PONTO_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home().joinpath(*CONFIG_DIR_PARTS)


def get_base_url():
    """Portal base URL, overridable with PONTO_BASE_URL."""
    return os.environ.get("PONTO_BASE_URL", DEFAULT_BASE_URL).rstrip("/")


CONFIG_DIR = get_config_dir()
CREDENTIALS_FILE = CONFIG_DIR / CREDENTIALS_FILENAME
COOKIE_FILE = CONFIG_DIR / COOKIES_FILENAME
LOG_FILE = CONFIG_DIR / LOG_FILENAME


def atomic_write_text(path, text):
    """Replace `path` with `text` in one step. Raises OSError."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except OSError:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            pass
        raise


# ─── Safe print (no crash on closed/broken stdout) ───────────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except Exception:
        pass


# ─── Logging ─────────────────────────────────────────────────────

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

log = logging.getLogger("ponto")


def setup_logging(verbose=False, log_file=None):
    """
    Attach a file handler (config dir) and a stderr console handler.

    Called once by the CLI. Library use leaves the logger unconfigured.
    """
    if log.handlers:
        return log

    log_file = Path(log_file) if log_file else LOG_FILE
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if log_file.exists() and log_file.stat().st_size > LOG_MAX_BYTES:
            log_file.write_text("")
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)
    except OSError as e:
        # Console logging still works without a writable config dir
        safe_print(f"Aviso: não foi possível abrir o log em {log_file}: {e}", file=sys.stderr)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    log.addHandler(console_handler)
    return log
