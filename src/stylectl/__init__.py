"""stylectl — compile stylesheet entry points into build artifacts."""

__version__ = "0.1.0"
