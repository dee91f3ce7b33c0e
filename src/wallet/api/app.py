from __future__ import annotations

import os
from typing import Optional

from fastapi import FastAPI

from wallet.api.errors import ApiError, api_error_handler
from wallet.api.routes_public import public_router
from wallet.api.security import RequestSizeLimitMiddleware
from wallet.api.structured_logging import RequestLogMiddleware
from wallet.ledger.contract import TransferLedger
from wallet.ledger.errors import LedgerError
from wallet.runtime.boot import build_ledger as _build_ledger
from wallet.runtime.config import WalletConfig, load_wallet_config


def build_ledger(cfg: Optional[WalletConfig] = None) -> TransferLedger:
    """Build the TransferLedger for the API runtime.

    This wrapper exists so tests can monkeypatch `wallet.api.app.build_ledger`
    without reaching into runtime modules.
    """
    return _build_ledger(cfg)


def create_app(*, boot_runtime: bool = True, ledger: Optional[TransferLedger] = None) -> FastAPI:
    """Create the FastAPI application.

    boot_runtime:
      - True (default): load WalletConfig + attach a ledger via build_ledger()
      - False: attach only `ledger` if given (unit tests)
    """
    cfg: Optional[WalletConfig] = load_wallet_config() if boot_runtime else None
    mode = cfg.mode if cfg is not None else os.environ.get("WALLET_MODE", "prod").strip().lower()

    # Disable docs in production.
    if mode == "prod":
        app = FastAPI(title="Wallet Ledger API", docs_url=None, redoc_url=None, openapi_url=None)
    else:
        app = FastAPI(title="Wallet Ledger API")

    app.state.cfg = cfg
    if ledger is not None:
        app.state.ledger = ledger
    elif boot_runtime:
        app.state.ledger = build_ledger(cfg)
    else:
        app.state.ledger = None

    # --- Errors ---
    app.add_exception_handler(LedgerError, api_error_handler)
    app.add_exception_handler(ApiError, api_error_handler)

    # --- Middleware ---
    # Added last runs first: request logging wraps the size limiter.
    app.add_middleware(RequestSizeLimitMiddleware)
    app.add_middleware(RequestLogMiddleware)

    # --- Routers ---
    app.include_router(public_router)

    return app
