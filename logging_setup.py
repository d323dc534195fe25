"""
Logging configuration: readable console output plus a full log file
"""
import logging
import sys
from pathlib import Path
from typing import Union


def setup_logging(
    log_dir: Union[str, Path],
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure the root logger with a stderr handler and verto.log in log_dir.

    Call once at startup, before the first log record. If the log file
    cannot be opened, logging continues on the console only.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    log_file = Path(log_dir) / "verto.log"
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError:
        logging.getLogger(__name__).warning("Cannot write log file %s, console only", log_file)
    else:
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # PIL logs every plugin import at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO)

    logging.captureWarnings(True)
