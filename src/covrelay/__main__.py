"""Allow ``python -m covrelay``."""

from covrelay.cli.main import cli

if __name__ == "__main__":
    cli()
