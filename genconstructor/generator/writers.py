"""Destinations for generated files."""

import os
from pathlib import Path
from typing import TextIO

from ..golang.walker import GoPackage

DEFAULT_OUTPUT_NAME = "{package}_genconstructor.go"


class _AtomicFileWriter:
    """Write to a temporary file beside path; it replaces path on close.

    A failed write discards the temporary file and leaves path untouched.
    """

    def __init__(self, path: Path):
        self.path = path
        self._tmp_path = path.with_name(f".{path.name}.tmp")
        self._file = open(self._tmp_path, "w", encoding="utf-8")
        self._failed = False

    def write(self, text: str) -> int:
        try:
            return self._file.write(text)
        except Exception:
            self._failed = True
            raise

    def close(self) -> None:
        if self._file.closed:
            return
        try:
            self._file.close()
            if not self._failed:
                os.replace(self._tmp_path, self.path)
        finally:
            self._tmp_path.unlink(missing_ok=True)


class FileWriterFactory:
    """Open one output file per package, inside the package directory."""

    def __init__(self, output_name: str = DEFAULT_OUTPUT_NAME):
        self.output_name = output_name

    def output_path(self, pkg: GoPackage) -> Path:
        name = self.output_name.format(package=pkg.name)
        # External test packages only build from _test.go files
        if pkg.is_external_test and not name.endswith("_test.go"):
            name = name.removesuffix(".go") + "_test.go"
        return pkg.dir / name

    def __call__(self, pkg: GoPackage) -> _AtomicFileWriter:
        return _AtomicFileWriter(self.output_path(pkg))


class _StreamWriter:
    def __init__(self, stream: TextIO):
        self._stream = stream

    def write(self, text: str) -> int:
        return self._stream.write(text)


class StreamWriterFactory:
    """Write every package to the same stream, which is never closed."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def __call__(self, pkg: GoPackage) -> _StreamWriter:
        return _StreamWriter(self.stream)
