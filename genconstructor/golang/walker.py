"""Walk the packages of a directory of Go source files."""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from .parser import parse_file
from .printer import TypePrinter, file_to_import_map, to_type_printer
from .types import GoFile, StructField, TypeDecl, TypeExpr, TypeSpec

FileFilter = Callable[[Path], bool]


@dataclass
class GoPackage:
    """The files of one directory sharing a package clause."""

    name: str
    dir: Path
    path: str | None
    files: list[GoFile] = field(default_factory=list)

    @property
    def is_external_test(self) -> bool:
        return self.name.endswith("_test") and all(
            f.path.name.endswith("_test.go") for f in self.files
        )


def find_module_path(directory: Path) -> str | None:
    """Return the import path of a directory, using the nearest go.mod."""
    directory = directory.resolve()
    for parent in (directory, *directory.parents):
        go_mod = parent / "go.mod"
        if not go_mod.is_file():
            continue
        module = _read_module_directive(go_mod)
        if module is None:
            return None
        rel = directory.relative_to(parent).as_posix()
        return module if rel == "." else f"{module}/{rel}"
    return None


def _read_module_directive(go_mod: Path) -> str | None:
    with open(go_mod, encoding="utf-8") as f:
        for line in f:
            line = line.split("//", 1)[0].strip()
            if line.startswith("module"):
                return line[len("module") :].strip().strip('"') or None
    return None


def parse_dir(target_dir: Path | str, file_filter: FileFilter | None = None) -> list[GoPackage]:
    """Parse the .go files of a directory and group them by package, sorted by name."""
    target_dir = Path(target_dir)
    module_path = find_module_path(target_dir)

    packages: dict[str, GoPackage] = {}
    for path in sorted(target_dir.glob("*.go")):
        if not path.is_file():
            continue
        if file_filter is not None and not file_filter(path):
            continue
        go_file = parse_file(path)
        pkg = packages.get(go_file.package_name)
        if pkg is None:
            pkg = GoPackage(name=go_file.package_name, dir=target_dir, path=module_path)
            packages[go_file.package_name] = pkg
        pkg.files.append(go_file)

    for pkg in packages.values():
        if pkg.path is not None and pkg.is_external_test:
            pkg.path += "_test"

    return [packages[name] for name in sorted(packages)]


def parse_field_names(struct_field: StructField) -> list[str]:
    """Names a struct field declares; an embedded field is named after its type."""
    return list(struct_field.names)


class AstWalker:
    """Lookup helpers over the declarations of one package."""

    def __init__(self, pkg: GoPackage):
        self.pkg = pkg
        self.pkg_path = pkg.path
        self._owners: dict[int, tuple[TypeDecl, GoFile]] = {}
        for go_file in pkg.files:
            for decl in go_file.type_decls:
                for spec in decl.specs:
                    self._owners[id(spec)] = (decl, go_file)

    def all_struct_specs(self) -> list[TypeSpec]:
        """Struct type specs of the package, in file then declaration order."""
        return [
            spec
            for go_file in self.pkg.files
            for decl in go_file.type_decls
            for spec in decl.specs
            if spec.type is not None
        ]

    def type_spec_to_gen_decl(self, spec: TypeSpec) -> TypeDecl:
        return self._owner(spec)[0]

    def to_file(self, spec: TypeSpec) -> GoFile:
        return self._owner(spec)[1]

    def to_type_printer(self, expr: TypeExpr, go_file: GoFile) -> TypePrinter:
        return to_type_printer(file_to_import_map(go_file), self.pkg_path, expr)

    def _owner(self, spec: TypeSpec) -> tuple[TypeDecl, GoFile]:
        try:
            return self._owners[id(spec)]
        except KeyError:
            raise KeyError(f"type {spec.name} is not declared in package {self.pkg.name}") from None


def dir_to_walkers(
    target_dir: Path | str, file_filter: FileFilter | None = None
) -> Iterator[AstWalker]:
    """Yield one walker per package found in target_dir."""
    for pkg in parse_dir(target_dir, file_filter):
        yield AstWalker(pkg)
