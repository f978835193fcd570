"""Constructor generation for the packages of a directory."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path
from typing import Any

from jinja2 import TemplateError

from ..golang.printer import file_to_import_map
from ..golang.walker import AstWalker, FileFilter, GoPackage, dir_to_walkers
from ..logging import get_logger
from .constructor import env, render_constructor
from .errors import RenderError
from .fields import classify_fields
from .gofmt import format_source
from .imports import ImportTable, collect_imports, format_imports
from .naming import resolve_interface_name
from .options import doc_comments, parse_options
from .types import ConstructorSpec, GeneratedUnit
from .writers import DEFAULT_OUTPUT_NAME

logger = get_logger("generate")

DEFAULT_GENERATOR_NAME = "genconstructor"

Formatter = Callable[[str], str]
WriterFactory = Callable[[GoPackage], Any]

template = env.get_template("file.go.j2")


@dataclass
class PackagePlan:
    """The constructors planned for one package and the imports they need."""

    package: GoPackage
    constructors: list[ConstructorSpec]
    imports: ImportTable


def make_file_filter(
    *,
    include_tests: bool = False,
    exclude: Iterable[str] = (),
    output_name: str = DEFAULT_OUTPUT_NAME,
) -> FileFilter:
    """Build a filter for the files to scan.

    Generated files (matching output_name) are always left out, test files
    unless include_tests is set, and files matching any exclude glob.
    """
    patterns = list(exclude)
    output_glob = output_name.format(package="*")
    patterns.append(output_glob)
    patterns.append(output_glob.removesuffix(".go") + "_test.go")

    def file_filter(path: Path) -> bool:
        if not include_tests and path.name.endswith("_test.go"):
            return False
        return not any(fnmatch(path.name, pattern) for pattern in patterns)

    return file_filter


def plan_package(walker: AstWalker) -> PackagePlan:
    """Find the marked structs of a package and describe their constructors."""
    plan = PackagePlan(package=walker.pkg, constructors=[], imports=ImportTable(walker.pkg_path))

    for spec in walker.all_struct_specs():
        decl = walker.type_spec_to_gen_decl(spec)
        options = parse_options(doc_comments(spec, decl))
        if options is None:
            continue

        go_file = walker.to_file(spec)
        fields, base_name = classify_fields(walker, spec, go_file)
        if not fields:
            logger.info("%s: %s has no tagged fields, skipping", go_file.path.name, spec.name)
            continue

        collect_imports(plan.imports, fields, file_to_import_map(go_file))
        plan.constructors.append(
            ConstructorSpec(
                struct_name=spec.name,
                fields=fields,
                options=options,
                interface_name=resolve_interface_name(spec.name, options, base_name),
            )
        )
        logger.debug("%s: planned constructor for %s", go_file.path.name, spec.name)

    return plan


def generate_unit(walker: AstWalker) -> GeneratedUnit | None:
    """Render the constructors of a package, or None if it has none."""
    plan = plan_package(walker)
    if not plan.constructors:
        return None

    return GeneratedUnit(
        package_name=walker.pkg.name,
        constructors=[render_constructor(spec) for spec in plan.constructors],
        imports=dict(plan.imports.packages),
    )


def assemble(unit: GeneratedUnit, generator_name: str = DEFAULT_GENERATOR_NAME) -> str:
    """Wrap the constructors of a unit into a complete Go file."""
    try:
        return template.render(
            generator_name=generator_name,
            package_name=unit.package_name,
            imports=format_imports(unit.imports),
            constructors=unit.constructors,
        )
    except TemplateError as e:
        raise RenderError(f"Failed to render package {unit.package_name}: {e}") from e


def run(
    target_dir: Path | str,
    new_writer: WriterFactory,
    *,
    file_filter: FileFilter | None = None,
    generator_name: str = DEFAULT_GENERATOR_NAME,
    formatter: Formatter = format_source,
) -> list[GoPackage]:
    """Generate constructors for every package in target_dir.

    The text of a package is fully produced before its writer is requested.
    Writers with a close() method are closed after the write. Returns the
    packages that were written.
    """
    if file_filter is None:
        file_filter = make_file_filter()

    written: list[GoPackage] = []
    for walker in dir_to_walkers(target_dir, file_filter):
        unit = generate_unit(walker)
        if unit is None:
            logger.debug("package %s: no constructors to generate", walker.pkg.name)
            continue

        text = formatter(assemble(unit, generator_name))

        writer = new_writer(walker.pkg)
        try:
            writer.write(text)
        finally:
            close = getattr(writer, "close", None)
            if callable(close):
                close()

        logger.info(
            "package %s: generated %d constructor(s)", walker.pkg.name, len(unit.constructors)
        )
        written.append(walker.pkg)

    return written
