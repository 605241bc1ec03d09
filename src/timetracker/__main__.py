"""Allow running as ``python -m timetracker``."""

from timetracker.cli.main import cli

if __name__ == "__main__":
    cli(obj={})
