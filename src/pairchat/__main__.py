"""Allow ``python -m pairchat`` to start the server."""

from pairchat.main import run

run()
