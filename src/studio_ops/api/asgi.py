"""ASGI entrypoint for the studio-ops API."""

from studio_ops.api.app import create_app
from studio_ops.containers import build_container

app = create_app(build_container())
