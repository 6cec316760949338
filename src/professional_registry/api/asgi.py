"""ASGI entrypoint for the professional registry API."""

from professional_registry.api.app import create_app
from professional_registry.containers import build_container

app = create_app(build_container())
