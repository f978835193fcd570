"""Parsing of the `//genconstructor` marker comment."""

from collections.abc import Iterable

from ..golang.types import Comment, TypeDecl, TypeSpec
from .types import GenerationOptions

COMMENT_MARKER = "//genconstructor"
POINTER_OPTION = "-p"
SUPER_OPTION = "-s"
EXTENDS_OPTION = "-e"


def doc_comments(spec: TypeSpec, decl: TypeDecl) -> list[Comment]:
    """Doc comments of a type spec followed by those of its declaration."""
    comments: list[Comment] = []
    for group in (spec.doc, decl.doc):
        if group is not None:
            comments.extend(group.comments)
    return comments


def parse_options(comments: Iterable[Comment | str]) -> GenerationOptions | None:
    """Find the marker among the comments and read its option.

    Returns None when no comment carries the marker. Only the first marker
    comment is read and only its first recognized option counts.
    """
    for comment in comments:
        text = comment.text if isinstance(comment, Comment) else comment
        if not text.strip().startswith(COMMENT_MARKER):
            continue

        options = GenerationOptions()
        for word in text.split():
            if word == POINTER_OPTION:
                options.pointer = True
                break
            if word == SUPER_OPTION:
                options.super = True
                break
            if word == EXTENDS_OPTION:
                options.extends = True
                break
        return options

    return None
