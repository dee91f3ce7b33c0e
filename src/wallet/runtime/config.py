# src/wallet/runtime/config.py
from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

Json = Dict[str, Any]


def _as_int(v: Any, default: int) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return int(default)


def _as_str(v: Any, default: str) -> str:
    if v is None:
        return str(default)
    s = str(v)
    return s if s.strip() else str(default)


def _as_bool(v: Any, default: bool) -> bool:
    if v is None:
        return bool(default)
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in {"1", "true", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "no", "n", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class WalletConfig:
    mode: str  # "dev" | "testnet" | "prod"

    store: str  # "memory" | "sqlite"
    db_path: str

    api_host: str
    api_port: int

    log_level: str

    # Run initLedger once at boot (dev convenience).
    seed_on_boot: bool


_ALLOWED_MODES = {"dev", "testnet", "prod"}
_ALLOWED_STORES = {"memory", "sqlite"}
_ALLOWED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def validate_wallet_config(cfg: WalletConfig) -> None:
    """Fail-fast validation for operator config."""

    mode = str(cfg.mode or "").strip().lower()
    if mode not in _ALLOWED_MODES:
        raise ValueError(f"mode must be one of {sorted(_ALLOWED_MODES)}; got: {cfg.mode!r}")

    store = str(cfg.store or "").strip().lower()
    if store not in _ALLOWED_STORES:
        raise ValueError(f"store must be one of {sorted(_ALLOWED_STORES)}; got: {cfg.store!r}")

    if store == "sqlite" and not str(cfg.db_path or "").strip():
        raise ValueError("db_path must be a non-empty string for the sqlite store")

    if mode == "prod" and store == "memory":
        # A memory store loses every record on restart.
        raise ValueError("store 'memory' is not allowed in prod mode")

    if int(cfg.api_port) <= 0 or int(cfg.api_port) > 65535:
        raise ValueError(f"api_port must be 1..65535; got: {cfg.api_port}")

    if str(cfg.log_level or "").strip().upper() not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log_level must be one of {sorted(_ALLOWED_LOG_LEVELS)}; got: {cfg.log_level!r}")


def default_wallet_config() -> WalletConfig:
    return WalletConfig(
        mode="prod",
        store="sqlite",
        db_path="./data/wallet.db",
        api_host="127.0.0.1",
        api_port=8080,
        log_level="INFO",
        seed_on_boot=False,
    )


def _from_mapping(raw: Json, d: WalletConfig) -> WalletConfig:
    return WalletConfig(
        mode=_as_str(raw.get("mode"), d.mode).strip().lower(),
        store=_as_str(raw.get("store"), d.store).strip().lower(),
        db_path=_as_str(raw.get("db_path"), d.db_path),
        api_host=_as_str(raw.get("api_host"), d.api_host),
        api_port=_as_int(raw.get("api_port"), d.api_port),
        log_level=_as_str(raw.get("log_level"), d.log_level).strip().upper(),
        seed_on_boot=_as_bool(raw.get("seed_on_boot"), d.seed_on_boot),
    )


def read_wallet_config_file(path: str) -> WalletConfig:
    p = Path(path)
    raw = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError("wallet config must be a JSON object")

    cfg = _from_mapping(raw, default_wallet_config())
    validate_wallet_config(cfg)
    return cfg


def wallet_config_from_env(base: Optional[WalletConfig] = None) -> WalletConfig:
    env = {
        "mode": os.environ.get("WALLET_MODE"),
        "store": os.environ.get("WALLET_STORE"),
        "db_path": os.environ.get("WALLET_DB_PATH"),
        "api_host": os.environ.get("WALLET_API_HOST"),
        "api_port": os.environ.get("WALLET_API_PORT"),
        "log_level": os.environ.get("WALLET_LOG_LEVEL"),
        "seed_on_boot": os.environ.get("WALLET_SEED_ON_BOOT"),
    }
    return _from_mapping(env, base or default_wallet_config())


def load_wallet_config(*, config_path: Optional[str] = None) -> WalletConfig:
    """Config file (WALLET_CONFIG_PATH) if given, else WALLET_* env over defaults."""
    p = config_path or os.environ.get("WALLET_CONFIG_PATH")
    if p:
        return read_wallet_config_file(p)

    cfg = wallet_config_from_env()
    validate_wallet_config(cfg)
    return cfg
