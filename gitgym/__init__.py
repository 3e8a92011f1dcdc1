"""gitgym: an interactive git tutorial played level by level."""

__version__ = "0.1.0"
