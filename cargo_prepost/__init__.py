"""Pre/post hooks around cargo subcommands."""

__version__ = "0.1.0"
