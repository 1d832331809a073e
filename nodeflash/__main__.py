"""Entry point for ``python -m nodeflash``."""

from nodeflash.cli import app

if __name__ == "__main__":
    app(prog_name="nodeflash")
