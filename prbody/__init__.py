"""Find and replace text in a GitHub pull request body."""

__version__ = "1.0.0"
