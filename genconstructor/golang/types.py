"""Declaration tree for the subset of Go source the generator inspects."""

from dataclasses import dataclass, field
from enum import StrEnum, auto
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class Comment:
    """A single `//` or `/* */` comment, text including its delimiters."""

    text: str
    line: int
    column: int
    end_line: int
    end_column: int


@dataclass(frozen=True)
class CommentGroup:
    """Comments on consecutive lines with no code and no blank line between them."""

    comments: tuple[Comment, ...]

    @property
    def line(self) -> int:
        return self.comments[0].line

    @property
    def end_line(self) -> int:
        return self.comments[-1].end_line


class ChanDir(StrEnum):
    """Direction of a channel type."""

    BOTH = auto()
    SEND = auto()
    RECV = auto()


@dataclass(frozen=True)
class TypeName:
    """A named type, optionally package qualified and instantiated."""

    name: str
    package: str | None = None
    args: tuple["TypeExpr", ...] = ()


@dataclass(frozen=True)
class PointerType:
    elem: "TypeExpr"


@dataclass(frozen=True)
class SliceType:
    elem: "TypeExpr"


@dataclass(frozen=True)
class ArrayType:
    length: tuple[str, ...]
    elem: "TypeExpr"


@dataclass(frozen=True)
class MapType:
    key: "TypeExpr"
    value: "TypeExpr"


@dataclass(frozen=True)
class ChanType:
    elem: "TypeExpr"
    dir: ChanDir = ChanDir.BOTH


@dataclass(frozen=True)
class FuncType:
    """A function type; the parameter list is kept as raw tokens."""

    params: tuple[str, ...]
    result: Union["TypeExpr", tuple[str, ...], None] = None


@dataclass(frozen=True)
class InterfaceType:
    """An interface type; the body is kept as raw tokens including braces."""

    body: tuple[str, ...]


@dataclass(frozen=True)
class RawType:
    """A type argument kept as raw tokens, where it cannot be told apart from an expression."""

    tokens: tuple[str, ...]


@dataclass(frozen=True)
class StructField:
    """A struct field declaration.

    Embedded fields have a single name, the name of their type.
    The tag is the unquoted content of the tag literal.
    """

    names: tuple[str, ...]
    type: "TypeExpr"
    tag: str | None
    embedded: bool
    line: int


@dataclass(frozen=True)
class StructType:
    fields: tuple[StructField, ...]


TypeExpr = Union[
    TypeName,
    PointerType,
    SliceType,
    ArrayType,
    MapType,
    ChanType,
    FuncType,
    InterfaceType,
    StructType,
    RawType,
]

TYPE_NODES = (
    TypeName,
    PointerType,
    SliceType,
    ArrayType,
    MapType,
    ChanType,
    FuncType,
    InterfaceType,
    StructType,
    RawType,
)


@dataclass
class TypeSpec:
    """A single type specification. `type` is None unless it declares a struct."""

    name: str
    type: StructType | None
    line: int
    column: int
    alias: bool = False
    doc: CommentGroup | None = None


@dataclass
class TypeDecl:
    """A `type` declaration, either a single spec or a parenthesized group."""

    specs: list[TypeSpec]
    line: int
    column: int
    grouped: bool
    doc: CommentGroup | None = None


@dataclass(frozen=True)
class ImportSpec:
    """An import; name is the explicit alias ("_" and "." included) or None."""

    name: str | None
    path: str
    line: int


@dataclass
class GoFile:
    """A parsed Go source file."""

    path: Path
    package_name: str
    imports: list[ImportSpec] = field(default_factory=list)
    type_decls: list[TypeDecl] = field(default_factory=list)
    comments: list[CommentGroup] = field(default_factory=list)
