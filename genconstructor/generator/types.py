"""Type definitions for constructor generation."""

from dataclasses import dataclass, field

from dataclasses_json import DataClassJsonMixin


@dataclass
class GenerationOptions(DataClassJsonMixin):
    """Options of a `//genconstructor` marker comment.

    - pointer (`-p`): return an owning pointer to the struct
    - super (`-s`): return the interface named after the struct
    - extends (`-e`): return the interface shared with the designated base field
    """

    pointer: bool = False
    super: bool = False
    extends: bool = False

    def any(self) -> bool:
        return self.pointer or self.super or self.extends


@dataclass
class FieldInfo(DataClassJsonMixin):
    """A struct field that takes part in the constructor.

    const_value is the raw Go expression from the tag, or None when the
    value is a constructor parameter. imports maps the package qualifiers
    used by the printed type to their import paths.
    """

    type: str
    name: str
    const_value: str | None = None
    is_base: bool = False
    imports: dict[str, str] = field(default_factory=dict)


@dataclass
class ConstructorSpec(DataClassJsonMixin):
    """Everything needed to render one constructor."""

    struct_name: str
    fields: list[FieldInfo]
    options: GenerationOptions
    interface_name: str | None = None


@dataclass
class GeneratedUnit(DataClassJsonMixin):
    """The generated constructors of one package, ready to be assembled."""

    package_name: str
    constructors: list[str]
    imports: dict[str, str]
