from tablestyle.cli.main import cli

__all__ = ["cli"]
