# src/wallet/env.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from wallet.ledger.ledger_logging import log_event

_log = logging.getLogger("wallet.env")

_LOADED = False


def load_dotenv_if_present(dotenv_path: Optional[str] = None) -> Tuple[str, ...]:
    """Apply a .env file to os.environ, once per process.

    The file is `dotenv_path`, else WALLET_DOTENV_PATH, else ./.env.
    Variables already present in the environment win over the file.

    Returns the names set from the file; empty when there is no file, the
    optional python-dotenv extra is missing, or a previous call already ran.
    """
    global _LOADED
    if _LOADED:
        return ()
    _LOADED = True

    path = Path(dotenv_path or os.environ.get("WALLET_DOTENV_PATH") or ".env").expanduser()
    if not path.is_file():
        return ()

    try:
        from dotenv import dotenv_values
    except ImportError:
        return ()

    applied = []
    for name, value in dotenv_values(path).items():
        if value is None or name in os.environ:
            continue
        os.environ[name] = value
        applied.append(name)

    names = tuple(sorted(applied))
    log_event(_log, "dotenv_loaded", path=str(path), names=list(names))
    return names
