"""Errors raised while generating constructors."""


class GenerationError(RuntimeError):
    """Base class of generator errors."""


class ImportResolutionError(GenerationError):
    """A package referenced by a constant value is not imported by its file."""


class RenderError(GenerationError):
    """A template failed to render."""


class FormatError(GenerationError):
    """The generated source could not be formatted."""
