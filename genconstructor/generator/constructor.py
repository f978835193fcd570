"""Rendering of constructor functions."""

from dataclasses import dataclass

from jinja2 import Environment, PackageLoader, TemplateError

from .errors import RenderError
from .strcase import to_lower_camel, to_upper_camel
from .types import ConstructorSpec, FieldInfo

GO_KEYWORDS = frozenset(
    [
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    ]
)

env = Environment(
    loader=PackageLoader("genconstructor.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("constructor.go.j2")


@dataclass
class Param:
    name: str
    type: str


@dataclass
class Assignment:
    key: str
    value: str


def param_name(field_name: str) -> str:
    """Parameter name for a field, kept clear of Go keywords."""
    name = to_lower_camel(field_name)
    if name in GO_KEYWORDS:
        name += "_"
    return name


def is_narrowed(field: FieldInfo, spec: ConstructorSpec) -> bool:
    """Check if a field is passed as the interface and down-cast to its type."""
    if not spec.options.extends or not spec.interface_name:
        return False
    return field.is_base or to_upper_camel(field.name) == spec.interface_name


def field_rule(field: FieldInfo, spec: ConstructorSpec) -> tuple[Param | None, Assignment]:
    """Map a field to its constructor parameter (if any) and its assignment."""
    if field.const_value is not None:
        return None, Assignment(key=field.name, value=field.const_value)

    name = param_name(field.name)
    if is_narrowed(field, spec):
        return (
            Param(name=name, type=spec.interface_name),
            Assignment(key=field.name, value=f"{name}.({field.type})"),
        )
    return Param(name=name, type=field.type), Assignment(key=field.name, value=name)


def return_type(spec: ConstructorSpec) -> str:
    if spec.options.super or spec.options.extends:
        return spec.interface_name or ""
    if spec.options.pointer:
        return f"*{spec.struct_name}"
    return spec.struct_name


def constructor_name(struct_name: str) -> str:
    return f"New{to_upper_camel(struct_name)}"


def build_rows(spec: ConstructorSpec) -> tuple[list[Param], list[Assignment]]:
    """Apply field_rule to every field, in order."""
    params: list[Param] = []
    assignments: list[Assignment] = []
    for field in spec.fields:
        param, assignment = field_rule(field, spec)
        if param is not None:
            params.append(param)
        assignments.append(assignment)
    return params, assignments


def render_constructor(spec: ConstructorSpec) -> str:
    """Render the Go source of the constructor described by spec."""
    params, assignments = build_rows(spec)

    # gofmt aligns the values of consecutive key-value lines
    key_width = max((len(a.key) for a in assignments), default=0) + 1

    try:
        return template.render(
            name=constructor_name(spec.struct_name),
            struct_name=spec.struct_name,
            params=params,
            assignments=assignments,
            key_width=key_width,
            return_type=return_type(spec),
            address=spec.options.any(),
        )
    except TemplateError as e:
        raise RenderError(f"Failed to render constructor for {spec.struct_name}: {e}") from e
