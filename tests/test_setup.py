import logging
import os
import re
from pathlib import Path

import env
import logging_setup


def test_env_int(monkeypatch) -> None:
    monkeypatch.delenv("FAKTURA_PORT", raising=False)
    assert env.env_int("FAKTURA_PORT", 8000) == 8000
    monkeypatch.setenv("FAKTURA_PORT", "9000")
    assert env.env_int("FAKTURA_PORT", 8000) == 9000
    monkeypatch.setenv("FAKTURA_PORT", "port")
    assert env.env_int("FAKTURA_PORT", 8000) == 8000


def test_load_env_does_not_override_real_environment(monkeypatch, tmp_path) -> None:
    dotenv_file = tmp_path / ".env"
    dotenv_file.write_text("FAKTURA_PAYMENT_DAYS=21\nFAKTURA_PORT=9100\n", encoding="utf-8")
    monkeypatch.setenv("FAKTURA_PORT", "8000")
    monkeypatch.delenv("FAKTURA_PAYMENT_DAYS", raising=False)
    monkeypatch.setattr(env, "_LOADED", False)
    monkeypatch.setattr(env, "__file__", str(tmp_path / "app" / "env.py"))

    env.load_env()

    assert os.environ["FAKTURA_PORT"] == "8000"
    assert os.environ["FAKTURA_PAYMENT_DAYS"] == "21"
    monkeypatch.delenv("FAKTURA_PAYMENT_DAYS", raising=False)


def test_setup_logging_is_idempotent(monkeypatch, tmp_path) -> None:
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    monkeypatch.setenv("FAKTURA_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delattr(root, "_faktura_logging_configured", raising=False)
    try:
        logging_setup.setup_logging()
        assert (tmp_path / "logs").is_dir()
        handlers = root.handlers[:]
        assert len(handlers) == 2

        monkeypatch.setenv("FAKTURA_DEBUG", "1")
        logging_setup.setup_logging()
        assert root.handlers == handlers
        assert root.level == logging.DEBUG
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
        if hasattr(root, "_faktura_logging_configured"):
            del root._faktura_logging_configured


def test_env_example_lists_every_setting() -> None:
    root = Path(__file__).resolve().parents[1]
    used = set()
    for path in (root / "app").rglob("*.py"):
        used.update(re.findall(r"\bFAKTURA_[A-Z_]+\b", path.read_text(encoding="utf-8")))
    documented = set(re.findall(r"\bFAKTURA_[A-Z_]+\b", (root / ".env.example").read_text(encoding="utf-8")))
    assert used, "no FAKTURA_* settings found in app/"
    assert used <= documented, f".env.example misses {sorted(used - documented)}"
