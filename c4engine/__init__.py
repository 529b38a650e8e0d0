"""Move-selection engine for a computer Connect Four opponent."""

__version__ = "0.1.0"
