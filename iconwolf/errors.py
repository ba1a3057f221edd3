class IconwolfError(Exception):
    """Base class for errors raised by iconwolf."""


class NotFoundError(IconwolfError, FileNotFoundError):
    """A manifest, layer asset or source image does not exist."""


class FormatError(IconwolfError, ValueError):
    """A color, manifest or image could not be parsed."""


class ValidationError(IconwolfError, ValueError):
    """A source image fails the preconditions of the pipeline."""
