"""ASGI entrypoint for the tutor sessions API."""

from tutor_sessions.api.app import create_app
from tutor_sessions.containers import build_container

app = create_app(build_container())
