"""Git workflow helpers: argument checking, a git service interface, PR drafting, terminal output and update checks."""

__version__ = "0.1.0"