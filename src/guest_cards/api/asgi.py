"""ASGI entrypoint for the guest cards API."""

from guest_cards.api.app import create_app
from guest_cards.containers import build_container

app = create_app(build_container())
