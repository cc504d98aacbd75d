"""Net Pay - gross-to-net salary calculations."""

__version__ = "0.1.0"
