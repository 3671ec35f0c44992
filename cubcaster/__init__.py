"""Grid raycasting, player movement and view rendering for a first-person maze."""

__version__ = "0.1.0"
__all__ = ["__version__"]