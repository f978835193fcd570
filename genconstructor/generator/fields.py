"""Selecting and describing the struct fields a constructor sets."""

from ..golang.parser import unquote
from ..golang.types import GoFile, TypeSpec
from ..golang.walker import AstWalker, parse_field_names
from ..logging import get_logger
from .types import FieldInfo

logger = get_logger("fields")

CONST_TAG = "required"
BASE_TAG = "super"


class StructTag(str):
    """The content of a struct tag, `key:"value"` pairs separated by spaces."""

    def lookup(self, key: str) -> tuple[str, bool]:
        """Return the value for key and whether the key is present.

        Parsing stops at the first malformed pair, like reflect.StructTag.
        """
        tag = str(self)
        while tag:
            tag = tag.lstrip(" ")
            if not tag:
                break

            i = 0
            while i < len(tag) and tag[i] > " " and tag[i] not in ':"\x7f':
                i += 1
            if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
                break
            name = tag[:i]
            tag = tag[i + 1 :]

            i = 1
            while i < len(tag) and tag[i] != '"':
                if tag[i] == "\\":
                    i += 1
                i += 1
            if i >= len(tag):
                break
            quoted = tag[: i + 1]
            tag = tag[i + 1 :]

            if name == key:
                try:
                    return unquote(quoted), True
                except ValueError:
                    break

        return "", False


def classify_fields(
    walker: AstWalker, spec: TypeSpec, go_file: GoFile
) -> tuple[list[FieldInfo], str | None]:
    """Describe the tagged fields of a struct, in declaration order.

    Returns the field descriptors and the name of the designated base field
    (the last field tagged `super`), if any.
    """
    if spec.type is None:
        raise ValueError(f"{spec.name} is not a struct type")

    fields: list[FieldInfo] = []
    base_name: str | None = None

    for struct_field in spec.type.fields:
        if struct_field.tag is None:
            continue
        tag = StructTag(struct_field.tag)
        const_value, has_const_tag = tag.lookup(CONST_TAG)
        _, has_base_tag = tag.lookup(BASE_TAG)
        if not has_const_tag and not has_base_tag:
            logger.debug("%s: skipping untagged field %s", spec.name, ", ".join(struct_field.names))
            continue

        printer = walker.to_type_printer(struct_field.type, go_file)
        type_str = printer.print(walker.pkg_path)
        imports = printer.import_pkg_map(walker.pkg_path)

        for name in parse_field_names(struct_field):
            # Blank fields cannot be set in a composite literal
            if name == "_":
                continue
            fields.append(
                FieldInfo(
                    type=type_str,
                    name=name,
                    const_value=const_value or None,
                    is_base=has_base_tag,
                    imports=dict(imports),
                )
            )
            if has_base_tag:
                base_name = name

    return fields, base_name
