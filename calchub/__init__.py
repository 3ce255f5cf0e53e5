"""calchub: calculator catalog with multi-currency display."""

__version__ = "0.3.0"
