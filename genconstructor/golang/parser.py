"""Go source parser using Lark."""

import os
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeVar

from lark import Lark, Token
from lark.exceptions import LarkError
from lark.lark import PostLex
from lark.visitors import Transformer

from .types import (
    TYPE_NODES,
    ArrayType,
    ChanDir,
    ChanType,
    Comment,
    CommentGroup,
    FuncType,
    GoFile,
    ImportSpec,
    InterfaceType,
    MapType,
    PointerType,
    RawType,
    SliceType,
    StructField,
    StructType,
    TypeDecl,
    TypeExpr,
    TypeName,
    TypeSpec,
)

_g_parser: Lark | None = None
_g_postlex: "SemicolonInserter | None" = None

# Tokens after which a newline terminates the statement.
_STATEMENT_END = frozenset(
    ["NAME", "NUMBER", "STRING", "RAW_STRING", "RUNE", "RPAR", "RSQB", "RBRACE"]
)

_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

_ESCAPE_RE = re.compile(r"\\(x[0-9a-fA-F]{2}|u[0-9a-fA-F]{4}|U[0-9a-fA-F]{8}|[0-7]{3}|.)", re.DOTALL)


class GoSyntaxError(RuntimeError):
    """Raised when a Go source file cannot be parsed."""


class SemicolonInserter(PostLex):
    """Go automatic semicolon insertion; collects comments on the way."""

    always_accept = ("NEWLINE", "COMMENT")

    def __init__(self) -> None:
        self.comments: list[Token] = []
        self.tokens: list[Token] = []

    def process(self, stream: Iterator[Token]) -> Iterator[Token]:
        self.comments = []
        self.tokens = []
        last: Token | None = None

        for tok in stream:
            if tok.type == "COMMENT":
                self.comments.append(tok)
                if "\n" not in tok:
                    continue
            if tok.type in ("NEWLINE", "COMMENT"):
                if last is not None and _ends_statement(last):
                    yield Token.new_borrow_pos("_SEMI", ";", last)
                last = None
                continue

            self.tokens.append(tok)
            last = tok
            yield tok

        if last is not None and _ends_statement(last):
            yield Token.new_borrow_pos("_SEMI", ";", last)


def _ends_statement(tok: Token) -> bool:
    if tok.type == "OP":
        return tok.value in ("++", "--")
    return tok.type in _STATEMENT_END


def unquote(literal: str) -> str:
    """Return the value of a Go string literal (raw or interpreted)."""
    if len(literal) < 2 or literal[0] != literal[-1] or literal[0] not in "`\"'":
        raise ValueError(f"Invalid string literal {literal}")
    body = literal[1:-1]
    if literal[0] == "`":
        return body.replace("\r", "")

    def _replace(match: re.Match[str]) -> str:
        esc = match.group(1)
        if esc[0] in "xuU" and len(esc) > 1:
            return chr(int(esc[1:], 16))
        if len(esc) == 3 and esc.isdigit():
            return chr(int(esc, 8))
        if esc in _ESCAPES:
            return _ESCAPES[esc]
        raise ValueError(f"Unknown escape sequence \\{esc}")

    return _ESCAPE_RE.sub(_replace, body)


@dataclass
class _Package:
    name: str


@dataclass
class _ImportDecl:
    specs: list[ImportSpec]


@dataclass
class _Alias:
    name: str


@dataclass
class _String:
    raw: str
    line: int


@dataclass
class _QualifiedName:
    name: str
    package: str | None
    line: int


@dataclass
class _TypeArgs:
    types: tuple[TypeExpr, ...]


@dataclass
class _Length:
    tokens: tuple[str, ...]


@dataclass
class _Indexes:
    groups: tuple[tuple[str, ...], ...]


@dataclass
class _Result:
    value: Any


@dataclass
class _TokenGroup:
    tokens: tuple[str, ...]


class _Skipped:
    pass


TFilter = TypeVar("TFilter")


def _find_many(args: list[Any], class_type: type[TFilter]) -> list[TFilter]:
    return [v for v in args if isinstance(v, class_type)]


def _find_one(args: list[Any], class_type: type[TFilter]) -> TFilter | None:
    filtered = _find_many(args, class_type)
    if len(filtered) > 1:
        raise RuntimeError(f"Found more than one {class_type}")
    return filtered[0] if filtered else None


def _has_token(args: list[Any], token_type: str) -> bool:
    return any(isinstance(v, Token) and v.type == token_type for v in args)


def _names(args: list[Any]) -> list[Token]:
    return [v for v in args if isinstance(v, Token) and v.type == "NAME"]


def _types(args: list[Any]) -> list[TypeExpr]:
    return [v for v in args if isinstance(v, TYPE_NODES)]


def _flatten(args: list[Any]) -> tuple[str, ...]:
    tokens: list[str] = []
    for arg in args:
        if isinstance(arg, _TokenGroup):
            tokens.extend(arg.tokens)
        elif arg is not None:
            tokens.append(str(arg))
    return tuple(tokens)


def _struct_field(
    args: list[Any], names: list[Token], field_type: TypeExpr, embedded: bool = False
) -> StructField:
    tag = _find_one(args, _String)
    return StructField(
        names=tuple(str(n) for n in names),
        type=field_type,
        tag=unquote(tag.raw) if tag else None,
        embedded=embedded,
        line=names[0].line,
    )


class TreeTransformer(Transformer):
    """Transform a Go parse tree into declaration types."""

    def start(self, args: list[Any]) -> list[Any]:
        return args

    def package_clause(self, args: list[Any]) -> _Package:
        return _Package(name=str(args[1]))

    # Imports

    def import_decl(self, args: list[Any]) -> _ImportDecl:
        return _ImportDecl(specs=_find_many(args, ImportSpec))

    def import_spec(self, args: list[Any]) -> ImportSpec:
        alias = _find_one(args, _Alias)
        path = _find_one(args, _String)
        return ImportSpec(
            name=alias.name if alias else None,
            path=unquote(path.raw),
            line=path.line,
        )

    def import_alias(self, args: list[Any]) -> _Alias:
        return _Alias(name=str(args[0]))

    def string_lit(self, args: list[Any]) -> _String:
        return _String(raw=str(args[0]), line=args[0].line)

    # Type declarations

    def type_decl(self, args: list[Any]) -> TypeDecl:
        return TypeDecl(
            specs=_find_many(args, TypeSpec),
            line=args[0].line,
            column=args[0].column,
            grouped=_has_token(args, "LPAR"),
        )

    def type_spec(self, args: list[Any]) -> TypeSpec:
        return TypeSpec(
            name=str(args[0]),
            type=_find_one(args, StructType),
            line=args[0].line,
            column=args[0].column,
            alias=_has_token(args, "EQUAL"),
        )

    def other_type(self, args: list[Any]) -> _Skipped:
        return _Skipped()

    def other_decl(self, args: list[Any]) -> _Skipped:
        return _Skipped()

    # Structs

    def struct_type(self, args: list[Any]) -> StructType:
        return StructType(fields=tuple(_find_many(args, StructField)))

    def named_field(self, args: list[Any]) -> StructField:
        return _struct_field(args, _names(args), _types(args)[0])

    def slice_field(self, args: list[Any]) -> StructField:
        return _struct_field(args, _names(args), SliceType(elem=_types(args)[0]))

    def array_field(self, args: list[Any]) -> StructField:
        indexes = _find_one(args, _Indexes)
        if len(indexes.groups) != 1:
            raise ValueError("array length must be a single expression")
        field_type = ArrayType(length=indexes.groups[0], elem=_types(args)[0])
        return _struct_field(args, _names(args), field_type)

    def generic_embedded_field(self, args: list[Any]) -> StructField:
        name = _names(args)[0]
        type_args = tuple(RawType(tokens=group) for group in _find_one(args, _Indexes).groups)
        field_type = TypeName(name=str(name), args=type_args)
        return _struct_field(args, [name], field_type, embedded=True)

    def embedded_field(self, args: list[Any]) -> StructField:
        qualified = _find_one(args, _QualifiedName) or self.qualified_name(args)
        type_args = _find_one(args, _TypeArgs)
        tag = _find_one(args, _String)
        field_type: TypeExpr = TypeName(
            name=qualified.name,
            package=qualified.package,
            args=type_args.types if type_args else (),
        )
        if _has_token(args, "STAR"):
            field_type = PointerType(elem=field_type)
        return StructField(
            names=(qualified.name,),
            type=field_type,
            tag=unquote(tag.raw) if tag else None,
            embedded=True,
            line=qualified.line,
        )

    def index_list(self, args: list[Any]) -> _Indexes:
        return _Indexes(groups=tuple(g.tokens for g in _find_many(args, _TokenGroup)))

    def index(self, args: list[Any]) -> _TokenGroup:
        return _TokenGroup(tokens=_flatten(args))

    def qualified_name(self, args: list[Any]) -> _QualifiedName:
        names = _names(args)
        if len(names) == 2:
            return _QualifiedName(name=str(names[1]), package=str(names[0]), line=names[0].line)
        return _QualifiedName(name=str(names[0]), package=None, line=names[0].line)

    # Type expressions

    def type_name(self, args: list[Any]) -> TypeName:
        qualified = _find_one(args, _QualifiedName)
        type_args = _find_one(args, _TypeArgs)
        return TypeName(
            name=qualified.name,
            package=qualified.package,
            args=type_args.types if type_args else (),
        )

    def type_args(self, args: list[Any]) -> _TypeArgs:
        return _TypeArgs(types=tuple(_types(args)))

    def pointer_type(self, args: list[Any]) -> PointerType:
        return PointerType(elem=_types(args)[0])

    def slice_type(self, args: list[Any]) -> SliceType:
        return SliceType(elem=_types(args)[0])

    def array_type(self, args: list[Any]) -> ArrayType:
        return ArrayType(length=_find_one(args, _Length).tokens, elem=_types(args)[0])

    def array_len(self, args: list[Any]) -> _Length:
        return _Length(tokens=_flatten(args))

    def map_type(self, args: list[Any]) -> MapType:
        key, value = _types(args)
        return MapType(key=key, value=value)

    def chan_type(self, args: list[Any]) -> ChanType:
        return ChanType(elem=_types(args)[0], dir=ChanDir.BOTH)

    def send_chan_type(self, args: list[Any]) -> ChanType:
        return ChanType(elem=_types(args)[0], dir=ChanDir.SEND)

    def recv_chan_type(self, args: list[Any]) -> ChanType:
        return ChanType(elem=_types(args)[0], dir=ChanDir.RECV)

    def func_type(self, args: list[Any]) -> FuncType:
        result = _find_one(args, _Result)
        value = result.value if result else None
        if isinstance(value, _TokenGroup):
            value = value.tokens
        return FuncType(params=args[1].tokens, result=value)

    def func_result(self, args: list[Any]) -> _Result:
        return _Result(value=args[0])

    def interface_type(self, args: list[Any]) -> InterfaceType:
        return InterfaceType(body=args[1].tokens)

    # Token groups

    def paren_group(self, args: list[Any]) -> _TokenGroup:
        return _TokenGroup(tokens=_flatten(args))

    def bracket_group(self, args: list[Any]) -> _TokenGroup:
        return _TokenGroup(tokens=_flatten(args))

    def brace_group(self, args: list[Any]) -> _TokenGroup:
        return _TokenGroup(tokens=_flatten(args))

    def semi(self, args: list[Any]) -> str:
        return ";"

    def token(self, args: list[Any]) -> str:
        return str(args[0])

    def head_token(self, args: list[Any]) -> str:
        return str(args[0])


def _is_standalone(comment: Token, tokens: list[Token]) -> bool:
    """Check that no code shares a line with the comment."""
    for tok in tokens:
        if tok.end_line == comment.line and tok.end_column <= comment.column:
            return False
        if tok.line == comment.end_line and tok.column >= comment.end_column:
            return False
    return True


def _group_comments(comments: list[Token], tokens: list[Token]) -> list[CommentGroup]:
    groups: list[CommentGroup] = []
    current: list[Comment] = []

    for tok in comments:
        if not _is_standalone(tok, tokens):
            if current:
                groups.append(CommentGroup(comments=tuple(current)))
                current = []
            continue

        comment = Comment(
            text=str(tok),
            line=tok.line,
            column=tok.column,
            end_line=tok.end_line,
            end_column=tok.end_column,
        )
        if current and comment.line > current[-1].end_line + 1:
            groups.append(CommentGroup(comments=tuple(current)))
            current = []
        current.append(comment)

    if current:
        groups.append(CommentGroup(comments=tuple(current)))
    return groups


def _attach_docs(decls: list[TypeDecl], groups: list[CommentGroup]) -> None:
    by_end_line = {group.end_line: group for group in groups}

    for decl in decls:
        decl.doc = by_end_line.get(decl.line - 1)
        if not decl.grouped:
            continue
        for spec in decl.specs:
            spec.doc = by_end_line.get(spec.line - 1)


def _get_parser() -> tuple[Lark, SemicolonInserter]:
    global _g_parser, _g_postlex

    if not _g_parser or not _g_postlex:
        with open(f"{os.path.dirname(__file__)}/gosource.lark", encoding="utf-8") as f:
            grammar = f.read()

        _g_postlex = SemicolonInserter()
        _g_parser = Lark(grammar, parser="lalr", lexer="basic", postlex=_g_postlex)

    return _g_parser, _g_postlex


def parse_source(text: str, path: Path | str = "<source>") -> GoFile:
    """Parse the text of a Go source file."""
    parser, postlex = _get_parser()

    try:
        tree = parser.parse(text.lstrip("\ufeff"))
        items = TreeTransformer().transform(tree)
    except LarkError as e:
        raise GoSyntaxError(f"{path}: {e}") from e

    package = _find_one(items, _Package)
    imports = [spec for decl in _find_many(items, _ImportDecl) for spec in decl.specs]
    type_decls = _find_many(items, TypeDecl)
    groups = _group_comments(postlex.comments, postlex.tokens)
    _attach_docs(type_decls, groups)

    return GoFile(
        path=Path(path),
        package_name=package.name,
        imports=imports,
        type_decls=type_decls,
        comments=groups,
    )


def parse_file(path: Path | str) -> GoFile:
    """Parse a Go source file from disk."""
    with open(path, encoding="utf-8") as f:
        return parse_source(f.read(), path)
