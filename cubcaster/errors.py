"""Errors raised while reading and validating a scene description."""


class SceneError(ValueError):
    """Raised when a scene file or one of its values is invalid."""