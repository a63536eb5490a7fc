"""ASGI entrypoint for the plant gallery."""

from plant_gallery.api.app import create_app
from plant_gallery.containers import build_container

app = create_app(build_container())
