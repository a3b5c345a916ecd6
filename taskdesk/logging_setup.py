from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Union


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the terminal readable while Streamlit reruns the script:
    - allow all taskdesk logs
    - third-party loggers (streamlit, sqlalchemy, ...) only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskdesk" or record.name.startswith("taskdesk."):
            return True
        return record.levelno >= logging.WARNING


_HANDLER_MARK = "_taskdesk_handler"


def setup_logging(
    *,
    log_dir: Union[str, Path] = ".local/taskdesk",
    console_level: Union[int, str] = logging.INFO,
    file_level: int = logging.DEBUG,
    to_file: bool = True,
) -> None:
    """
    Configure the root logger with:
    - Console handler: filtered for interactive use
    - File handler (optional): full logs for debugging

    Streamlit re-executes pages on every interaction, so handlers installed by
    an earlier call are replaced rather than stacked.
    """
    if isinstance(console_level, str):
        console_level = logging.getLevelName(console_level.upper())
        if not isinstance(console_level, int):
            console_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        if getattr(h, _HANDLER_MARK, False):
            root.removeHandler(h)
            h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    setattr(ch, _HANDLER_MARK, True)
    root.addHandler(ch)

    if to_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "taskdesk.log"), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        setattr(fh, _HANDLER_MARK, True)
        root.addHandler(fh)

    logging.captureWarnings(True)


def setup_from_config() -> None:
    from taskdesk.config import get_config

    cfg = get_config()
    setup_logging(log_dir=cfg.log_dir, console_level=cfg.log_level, to_file=cfg.log_to_file)
