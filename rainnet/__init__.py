"""Feed-forward neural network for rain prediction from weather tables."""

__version__ = "0.1.0"