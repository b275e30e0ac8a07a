"""Cross-provider player identity reconciliation for the fantasy command center."""

__version__ = "0.1.0"
