"""pacman-helper: dependency queries over the local pacman database."""

__version__ = "0.1.0"
