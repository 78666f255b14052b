"""ASGI entrypoint for the nutricoach API."""

from nutricoach.api.app import create_app
from nutricoach.containers import build_container

app = create_app(build_container())
