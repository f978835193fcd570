"""genconstructor - Constructor generator for annotated Go structs."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("genconstructor")
except PackageNotFoundError:
    __version__ = "(local)"
