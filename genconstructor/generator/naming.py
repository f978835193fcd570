"""Naming of the interface returned by `-s` and `-e` constructors."""

from .strcase import split_into_words, to_upper_camel
from .types import GenerationOptions


def match(words: list[str], candidates: list[str]) -> list[str]:
    """Keep the words that also appear among the candidates, in order."""
    known = set(candidates)
    return [w for w in words if w in known]


def resolve_interface_name(
    struct_name: str, options: GenerationOptions, base_name: str | None
) -> str | None:
    """Name of the interface a constructor returns, or None without -s or -e.

    With -e the name is made of the words of the base field name that also
    occur in the struct name; it is empty when they share none.
    """
    if options.extends:
        matched = match(
            split_into_words(to_upper_camel(base_name or "")),
            split_into_words(to_upper_camel(struct_name)),
        )
        return "".join(matched)
    if options.super:
        return to_upper_camel(struct_name)
    return None
