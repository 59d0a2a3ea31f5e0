from pathlib import Path
import logging
import re
import sys
from typing import Optional
from datetime import datetime

_TOKEN_IN_PATH = re.compile(r"/bot[^/]+")


def setup_logging(
    logs_dir: Optional[str | Path] = None,
    log_file_name: str = "telegram_mcp.log",
    level: str | int = logging.INFO,
) -> logging.Logger:
    """Configure root logging to stderr and a timestamped file under `logs_dir`.

    Idempotent: calling multiple times won't add duplicate handlers.
    stdout is left untouched because the stdio transport speaks MCP over it.
    """
    if logs_dir is None:
        logs_dir = Path(__file__).resolve().parent.parent / "logs"
    else:
        logs_dir = Path(logs_dir)

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    # One file handler per process, whatever the timestamp in its name
    file_handler_exists = any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename).parent == logs_dir.resolve()
        for h in root_logger.handlers
    )
    if not file_handler_exists:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base = Path(log_file_name).stem
        ext = Path(log_file_name).suffix or ".log"
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(logs_dir / f"{base}_{timestamp}{ext}", encoding="utf-8")
        except OSError as e:
            # Read-only installs still get stderr logging
            sys.stderr.write(f"File logging disabled: {e}\n")
        else:
            fh.setFormatter(formatter)
            fh.setLevel(level)
            root_logger.addHandler(fh)

    stream_stderr_exists = any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in root_logger.handlers
    )
    if not stream_stderr_exists:
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(formatter)
        sh.setLevel(level)
        root_logger.addHandler(sh)

    return logging.getLogger("telegram_mcp")


def redact_token(url: str) -> str:
    """Hide the bot token embedded in a Bot API URL (`/bot<token>/...`)."""
    return _TOKEN_IN_PATH.sub("/bot***", url)
