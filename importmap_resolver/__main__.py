"""Allow `python -m importmap_resolver`."""

from .cli import cli

if __name__ == "__main__":
    cli()
