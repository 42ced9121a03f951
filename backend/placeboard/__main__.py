"""Allow `python -m placeboard` to start the API server."""

from placeboard.main import run

run()
