from __future__ import annotations

import os
from pathlib import Path

import pytest

from wallet import env


@pytest.fixture(autouse=True)
def _fresh_loader(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(env, "_LOADED", False)


def test_missing_dotenv_is_a_noop(tmp_path: Path) -> None:
    assert env.load_dotenv_if_present(str(tmp_path / "absent.env")) == ()


def test_dotenv_sets_only_missing_names(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    pytest.importorskip("dotenv")
    p = tmp_path / ".env"
    p.write_text("WALLET_DOTENV_PROBE=loaded\nWALLET_MODE=dev\n", encoding="utf-8")
    monkeypatch.setenv("WALLET_MODE", "testnet")
    monkeypatch.delenv("WALLET_DOTENV_PROBE", raising=False)

    try:
        assert env.load_dotenv_if_present(str(p)) == ("WALLET_DOTENV_PROBE",)
        assert os.environ["WALLET_DOTENV_PROBE"] == "loaded"
        assert os.environ["WALLET_MODE"] == "testnet"

        # once per process
        p.write_text("WALLET_DOTENV_OTHER=1\n", encoding="utf-8")
        assert env.load_dotenv_if_present(str(p)) == ()
        assert "WALLET_DOTENV_OTHER" not in os.environ
    finally:
        os.environ.pop("WALLET_DOTENV_PROBE", None)
