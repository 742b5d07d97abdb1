"""
Color-coded logging utilities for the DART runner.

Keeps console output consistent between the CLI and ad-hoc scripts.
Uses colorama for cross-platform terminal color support.
"""

import datetime
import logging
import os
import sys
from typing import Optional

from colorama import Fore, Style, init

init(autoreset=True)


# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------

class C:
    """Color shortcuts for runner output."""
    HEADER = Fore.CYAN + Style.BRIGHT
    STEP = Fore.BLUE + Style.BRIGHT
    OK = Fore.GREEN + Style.BRIGHT
    WARN = Fore.YELLOW + Style.BRIGHT
    ERR = Fore.RED + Style.BRIGHT
    DIM = Style.DIM
    COMPANY = Fore.MAGENTA + Style.BRIGHT
    VALUE = Fore.GREEN
    NULL = Fore.YELLOW
    RESET = Style.RESET_ALL


def _ts() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S")


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------

def header(msg: str) -> None:
    """Print a bold section header."""
    print(f"\n{C.HEADER}{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}{C.RESET}\n")


def step(msg: str) -> None:
    print(f"{C.STEP}[{_ts()}] >> {msg}{C.RESET}")


def info(msg: str) -> None:
    print(f"{C.DIM}[{_ts()}]{C.RESET} {msg}")


def ok(msg: str) -> None:
    print(f"{C.OK}[{_ts()}] OK {msg}{C.RESET}")


def warn(msg: str) -> None:
    print(f"{C.WARN}[{_ts()}] WARN {msg}{C.RESET}")


def err(msg: str) -> None:
    print(f"{C.ERR}[{_ts()}] ERR {msg}{C.RESET}")


def company_msg(corp_code: str, msg: str) -> None:
    """Print a message scoped to one DART corp_code."""
    print(f"{C.DIM}[{_ts()}]{C.RESET} {C.COMPANY}{corp_code}{C.RESET} {msg}")


def summary_table(title: str, rows: list[tuple[str, str]]) -> None:
    """
    Print a label/value table.

    Values equal to "-" are shown dimmed in yellow so missing figures stand out.
    """
    print(f"\n{C.HEADER}{title}{C.RESET}")
    max_label = max(len(r[0]) for r in rows) if rows else 0
    for label, value in rows:
        color = C.NULL if value == "-" else C.VALUE
        print(f"  {label:<{max_label}}  {color}{value}{C.RESET}")
    print()


# ---------------------------------------------------------------------------
# Verbose logging setup
# ---------------------------------------------------------------------------

def setup_verbose_logging(
    name: str = "sources.dart",
    level: int = logging.DEBUG,
    filename: Optional[str] = None,
) -> logging.Logger:
    """
    Create a logger that writes INFO+ to stderr and DEBUG+ to logs/<filename>.

    Pass a package name (e.g. "sources.dart") so module loggers below it
    propagate into the same handlers. stdout stays free for --json output.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Re-imports must not stack handlers
    if logger.handlers:
        return logger

    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(logging.INFO)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    log_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "logs")
    os.makedirs(log_dir, exist_ok=True)
    fh = logging.FileHandler(os.path.join(log_dir, filename or f"{name}.log"), encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    return logger
