"""Camera models, projections, model conversion and photometric features."""

__version__ = "0.1.0"