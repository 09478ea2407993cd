from __future__ import annotations

from inibind.cli.app import app


if __name__ == "__main__":
    app()
