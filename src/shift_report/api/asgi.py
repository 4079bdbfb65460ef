"""ASGI entrypoint for the shift report API."""

from shift_report.api.app import create_app
from shift_report.containers import build_container

app = create_app(build_container())
