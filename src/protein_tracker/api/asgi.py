"""ASGI entrypoint for the protein tracker API."""

from protein_tracker.api.app import create_app
from protein_tracker.containers import build_container

app = create_app(build_container())
