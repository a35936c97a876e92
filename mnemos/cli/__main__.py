"""Entry point for ``python -m mnemos.cli``."""
from mnemos.cli import cli

cli(obj={})
