"""`python -m hetznercloud` runs the CLI."""

from hetznercloud.cli.main import run

run()
