"""Collecting the imports needed by generated constructors."""

import re
from collections.abc import Iterable

from ..golang.printer import TypeResolutionError, package_name_for, to_type_printer
from .errors import ImportResolutionError
from .types import FieldInfo

_LITERAL_RE = re.compile(r'"(?:\\.|[^"\\\n])*"|`[^`]*`|\'(?:\\.|[^\'\\\n])*\'')
_SEPARATOR_RE = re.compile(r"[^\w.\-]|\d")
_IDENTIFIER_RE = re.compile(r"[^\W\d]+(?:\.[^\W\d]+)*")


class ImportTable:
    """Import paths keyed by package alias, for one generated file."""

    def __init__(self, pkg_path: str | None = None):
        self.pkg_path = pkg_path
        self.packages: dict[str, str] = {}

    def add(self, alias: str, path: str) -> None:
        if path == self.pkg_path:
            return
        self.packages[alias] = path

    def update(self, packages: dict[str, str]) -> None:
        for alias, path in packages.items():
            self.add(alias, path)


def const_identifiers(value: str) -> list[str]:
    """Identifiers and selectors referenced by a constant Go expression."""
    value = _LITERAL_RE.sub(" ", value)
    identifiers: list[str] = []
    for piece in _SEPARATOR_RE.split(value):
        identifiers.extend(_IDENTIFIER_RE.findall(piece))
    return identifiers


def collect_imports(
    table: ImportTable,
    fields: Iterable[FieldInfo],
    import_map: dict[str, str],
) -> None:
    """Record the imports the fields of one struct need.

    import_map holds the imports of the file declaring the struct.
    """
    for field in fields:
        if field.const_value is None:
            table.update(field.imports)
            continue

        for identifier in const_identifiers(field.const_value):
            if "." not in identifier:
                continue
            try:
                printer = to_type_printer(import_map, table.pkg_path, identifier)
            except TypeResolutionError as e:
                raise ImportResolutionError(
                    f"field {field.name}: {identifier} in {field.const_value!r} "
                    f"does not refer to an imported package"
                ) from e
            table.update(printer.import_pkg_map(table.pkg_path))


def format_imports(packages: dict[str, str]) -> str:
    """Render an import declaration, sorted by path, or "" when empty."""
    if not packages:
        return ""

    lines = []
    for alias, path in sorted(packages.items(), key=lambda item: (item[1], item[0])):
        if alias == package_name_for(path):
            lines.append(f'\t"{path}"')
        else:
            lines.append(f'\t{alias} "{path}"')
    return "import (\n" + "\n".join(lines) + "\n)"
