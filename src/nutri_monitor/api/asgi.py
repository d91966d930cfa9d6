"""ASGI entrypoint for the nutrition log API."""

from nutri_monitor.api.app import create_app
from nutri_monitor.containers import build_container

app = create_app(build_container())
