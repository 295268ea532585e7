"""Reputation scores and vote settlement storage for prediction markets."""

__version__ = "0.1.0"