"""Entry point for ``python -m create_kapp``."""

from create_kapp.cli import app

if __name__ == "__main__":
    app(prog_name="create-kapp")
