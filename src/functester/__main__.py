"""Allow `python -m functester`."""

from functester.cli import app

app()
