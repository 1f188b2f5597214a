"""Run the filekeeper command-line interface with ``python -m filekeeper``."""

from filekeeper.cli import app

if __name__ == "__main__":
    app()
