"""Printing of Go type expressions relative to a package."""

import re
from collections.abc import Iterator

from .types import (
    TYPE_NODES,
    ArrayType,
    ChanDir,
    ChanType,
    FuncType,
    GoFile,
    InterfaceType,
    MapType,
    PointerType,
    RawType,
    SliceType,
    StructType,
    TypeExpr,
    TypeName,
)

_MAJOR_VERSION_RE = re.compile(r"^v[0-9]+$")
_GOPKG_VERSION_RE = re.compile(r"\.v[0-9]+$")

_NO_SPACE_AFTER = frozenset(["(", "[", "]", ".", "*", "&", "!", "^", "..."])
_NO_SPACE_BEFORE = frozenset([")", "]", ",", ".", ";", ":"])

_CHAN_PREFIX = {
    ChanDir.BOTH: "chan ",
    ChanDir.SEND: "chan<- ",
    ChanDir.RECV: "<-chan ",
}


class TypeResolutionError(RuntimeError):
    """Raised when a package qualifier cannot be resolved to an import."""


def package_name_for(path: str) -> str:
    """Guess the package name an import path declares."""
    elements = [e for e in path.split("/") if e]
    while len(elements) > 1 and _MAJOR_VERSION_RE.match(elements[-1]):
        elements.pop()
    name = _GOPKG_VERSION_RE.sub("", elements[-1]) if elements else path
    if name.startswith("go-"):
        name = name[3:]
    return name.replace("-", "_").replace(".", "_")


def file_to_import_map(file: GoFile) -> dict[str, str]:
    """Map every usable package qualifier of a file to its import path."""
    imports: dict[str, str] = {}
    for spec in file.imports:
        if spec.name in ("_", "."):
            continue
        imports[spec.name or package_name_for(spec.path)] = spec.path
    return imports


def _is_word(tok: str) -> bool:
    return tok[:1].isalpha() or tok[:1] == "_"


def _needs_space(prev: str, tok: str) -> bool:
    if prev == "<-":
        return tok != "chan"
    if prev in _NO_SPACE_AFTER or tok in _NO_SPACE_BEFORE:
        return False
    if tok == "<-":
        return prev != "chan"
    if tok in ("(", "["):
        return not _is_word(prev) or prev == "chan"
    if prev == "{":
        return tok != "}"
    return True


def _join_tokens(tokens: tuple[str, ...]) -> str:
    out: list[str] = []
    prev: str | None = None
    for tok in tokens:
        if prev is not None and _needs_space(prev, tok):
            out.append(" ")
        out.append(tok)
        prev = tok
    return "".join(out)


def _qualifiers(expr: TypeExpr) -> Iterator[str]:
    """Yield the package qualifiers of strictly parsed type names."""
    if isinstance(expr, TypeName):
        if expr.package:
            yield expr.package
        for arg in expr.args:
            yield from _qualifiers(arg)
    elif isinstance(expr, (PointerType, SliceType, ArrayType, ChanType)):
        yield from _qualifiers(expr.elem)
    elif isinstance(expr, MapType):
        yield from _qualifiers(expr.key)
        yield from _qualifiers(expr.value)
    elif isinstance(expr, FuncType) and isinstance(expr.result, TYPE_NODES):
        yield from _qualifiers(expr.result)
    elif isinstance(expr, StructType):
        for field in expr.fields:
            yield from _qualifiers(field.type)


def _token_runs(expr: TypeExpr) -> Iterator[tuple[str, ...]]:
    """Yield the raw token runs kept for loosely parsed parts of a type."""
    if isinstance(expr, TypeName):
        for arg in expr.args:
            yield from _token_runs(arg)
    elif isinstance(expr, ArrayType):
        yield expr.length
        yield from _token_runs(expr.elem)
    elif isinstance(expr, (PointerType, SliceType, ChanType)):
        yield from _token_runs(expr.elem)
    elif isinstance(expr, MapType):
        yield from _token_runs(expr.key)
        yield from _token_runs(expr.value)
    elif isinstance(expr, FuncType):
        yield expr.params
        if isinstance(expr.result, tuple):
            yield expr.result
        elif expr.result is not None:
            yield from _token_runs(expr.result)
    elif isinstance(expr, InterfaceType):
        yield expr.body
    elif isinstance(expr, RawType):
        yield expr.tokens
    elif isinstance(expr, StructType):
        for field in expr.fields:
            yield from _token_runs(field.type)


def _selector_qualifiers(tokens: tuple[str, ...]) -> Iterator[str]:
    for i in range(len(tokens) - 2):
        if tokens[i + 1] == "." and (i == 0 or tokens[i - 1] != "."):
            yield tokens[i]


def format_type(expr: TypeExpr, local: frozenset[str] = frozenset()) -> str:
    """Render a type expression; qualifiers listed in local are dropped."""
    if isinstance(expr, TypeName):
        name = expr.name
        if expr.package and expr.package not in local:
            name = f"{expr.package}.{name}"
        if expr.args:
            name += "[" + ", ".join(format_type(a, local) for a in expr.args) + "]"
        return name
    if isinstance(expr, PointerType):
        return "*" + format_type(expr.elem, local)
    if isinstance(expr, SliceType):
        return "[]" + format_type(expr.elem, local)
    if isinstance(expr, ArrayType):
        return f"[{_join_tokens(expr.length)}]" + format_type(expr.elem, local)
    if isinstance(expr, MapType):
        return f"map[{format_type(expr.key, local)}]{format_type(expr.value, local)}"
    if isinstance(expr, ChanType):
        return _CHAN_PREFIX[expr.dir] + format_type(expr.elem, local)
    if isinstance(expr, FuncType):
        out = "func" + _join_tokens(expr.params)
        if isinstance(expr.result, tuple):
            out += " " + _join_tokens(expr.result)
        elif expr.result is not None:
            out += " " + format_type(expr.result, local)
        return out
    if isinstance(expr, InterfaceType):
        return "interface" + _join_tokens(expr.body)
    if isinstance(expr, RawType):
        return _join_tokens(expr.tokens)
    if isinstance(expr, StructType):
        if not expr.fields:
            return "struct{}"
        fields = []
        for field in expr.fields:
            decl = format_type(field.type, local)
            if not field.embedded:
                decl = ", ".join(field.names) + " " + decl
            if field.tag is not None:
                decl += f" `{field.tag}`"
            fields.append(decl)
        return "struct{ " + "; ".join(fields) + " }"
    raise TypeError(f"Unknown type expression {expr!r}")


class TypePrinter:
    """A type expression bound to the import paths of its package qualifiers."""

    def __init__(self, expr: TypeExpr, imports: dict[str, str]):
        self.expr = expr
        self.imports = imports

    def _local(self, pkg_path: str | None) -> frozenset[str]:
        if pkg_path is None:
            return frozenset()
        return frozenset(name for name, path in self.imports.items() if path == pkg_path)

    def print(self, pkg_path: str | None) -> str:
        """Print the type as seen from the package with import path pkg_path."""
        return format_type(self.expr, self._local(pkg_path))

    def import_pkg_map(self, pkg_path: str | None) -> dict[str, str]:
        """Return the imports the printed type needs inside pkg_path."""
        return {name: path for name, path in self.imports.items() if path != pkg_path}


def parse_selector(text: str) -> TypeName:
    """Turn an identifier or selector (pkg.Name) into a type name."""
    package, sep, name = text.partition(".")
    if not sep:
        return TypeName(name=text)
    return TypeName(name=name, package=package)


def to_type_printer(
    import_map: dict[str, str], pkg_path: str | None, expr: TypeExpr | str
) -> TypePrinter:
    """Resolve the package qualifiers of expr against a file's imports."""
    if isinstance(expr, str):
        expr = parse_selector(expr)

    imports: dict[str, str] = {}
    for qualifier in _qualifiers(expr):
        if qualifier not in import_map:
            raise TypeResolutionError(
                f"cannot resolve package {qualifier!r} of type {format_type(expr)}"
            )
        imports[qualifier] = import_map[qualifier]

    for tokens in _token_runs(expr):
        for qualifier in _selector_qualifiers(tokens):
            if qualifier in import_map:
                imports[qualifier] = import_map[qualifier]

    return TypePrinter(expr, imports)
