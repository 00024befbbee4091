"""Allow running treefind as ``python -m treefind``."""

from treefind.cli.main import app

if __name__ == "__main__":
    app()
