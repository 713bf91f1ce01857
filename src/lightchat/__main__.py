"""Allow ``python -m lightchat``."""

from lightchat.cli import cli

if __name__ == "__main__":
    cli()
