"""Allow ``python -m eoe``."""

from eoe.cli.main import app

if __name__ == "__main__":
    app()
