"""AURA USD wallet: simulated fiat payments for the agent marketplace."""

__version__ = "0.1.0"
