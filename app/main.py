# =========================
# APP/MAIN.PY
# =========================

import os

from nicegui import app, ui

from env import env_int, load_env
from logging_setup import setup_logging

load_env()
setup_logging()

from api import router  # noqa: E402
from pages import render_invoice_create  # noqa: E402

app.include_router(router)


@ui.page("/")
def index():
    with ui.column().classes("w-full max-w-7xl mx-auto p-6"):
        render_invoice_create()


ui.run(
    title="Faktura",
    port=env_int("FAKTURA_PORT", 8000),
    language="pl",
    storage_secret=os.getenv("FAKTURA_STORAGE_SECRET", "faktura-dev-secret"),
    reload=os.getenv("FAKTURA_DEBUG") == "1",
)
