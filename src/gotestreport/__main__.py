"""Allow ``python -m gotestreport``."""

from gotestreport.cli.main import cli

if __name__ == "__main__":
    cli()
