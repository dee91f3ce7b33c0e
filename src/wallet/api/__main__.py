# src/wallet/api/__main__.py
from __future__ import annotations

import uvicorn

from wallet.env import load_dotenv_if_present


def main() -> None:
    # Load .env early so WALLET_* vars exist before anything reads them.
    load_dotenv_if_present()

    # Import after dotenv load (prevents "config read before env" surprises)
    from wallet.api.app import create_app
    from wallet.api.structured_logging import configure_structured_logging
    from wallet.runtime.config import load_wallet_config

    cfg = load_wallet_config()
    configure_structured_logging(cfg.log_level)

    uvicorn.run(create_app(), host=cfg.api_host, port=cfg.api_port, log_level=cfg.log_level.lower())


if __name__ == "__main__":
    main()
