"""Taxi fare regression: train, evaluate, predict and chart."""

__version__ = "1.0.0"
