"""Olympics delegation challenge: dataset preparation, model training and ensemble scoring."""

__version__ = "0.1.0"
