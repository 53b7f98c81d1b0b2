"""git-run: run a command, then commit whatever it changed."""

__version__ = "0.1.0"
