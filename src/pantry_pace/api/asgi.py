"""ASGI entrypoint for the pantry-pace API."""

from pantry_pace.api.app import create_app
from pantry_pace.containers import build_container

app = create_app(build_container())
