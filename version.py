"""Version information for the vote tally tools."""

__version__ = "1.2.0"
