"""Tests for field classification."""

import pytest

from genconstructor.generator.fields import StructTag, classify_fields
from genconstructor.golang.printer import TypeResolutionError
from genconstructor.golang.walker import dir_to_walkers


def _classify(go_package, source):
    root = go_package({"models.go": source})
    walker = next(dir_to_walkers(root))
    (spec,) = walker.all_struct_specs()
    return classify_fields(walker, spec, walker.to_file(spec))


def describe_struct_tag():
    def looks_up_keys(expect):
        tag = StructTag('json:"name,omitempty" required:""')
        expect(tag.lookup("json")) == ("name,omitempty", True)
        expect(tag.lookup("required")) == ("", True)
        expect(tag.lookup("super")) == ("", False)

    def unquotes_values(expect):
        tag = StructTag('required:"\\"admin\\""')
        expect(tag.lookup("required")) == ('"admin"', True)

    def stops_at_malformed_pairs(expect):
        tag = StructTag('json:name required:"x"')
        expect(tag.lookup("required")) == ("", False)

    def handles_empty_tags(expect):
        expect(StructTag("").lookup("required")) == ("", False)


def describe_classify_fields():
    def keeps_tagged_fields_in_order(expect, go_package):
        fields, base_name = _classify(
            go_package,
            """package models

type Order struct {
\tID     string `required:""`
\tNote   string
\tStatus string `json:"status" required:"StatusNew"`
\tOwner  string `json:"owner"`
}
""",
        )
        expect([f.name for f in fields]) == ["ID", "Status"]
        expect(fields[0].const_value) == None
        expect(fields[1].const_value) == "StatusNew"
        expect(base_name) == None

    def prints_types_with_imports(expect, go_package):
        fields, _ = _classify(
            go_package,
            """package models

import (
\t"time"
\tm "example.com/app/metrics"
)

type Job struct {
\tTimeout time.Duration      `required:""`
\tGauges  map[string]m.Gauge `required:""`
}
""",
        )
        expect([f.type for f in fields]) == ["time.Duration", "map[string]m.Gauge"]
        expect(fields[0].imports) == {"time": "time"}
        expect(fields[1].imports) == {"m": "example.com/app/metrics"}

    def marks_designated_base(expect, go_package):
        fields, base_name = _classify(
            go_package,
            """package models

type AdminUser struct {
\t*UserBase `super:""`
\tRole      string `required:"\\"admin\\""`
}
""",
        )
        expect(fields[0].name) == "UserBase"
        expect(fields[0].type) == "*UserBase"
        expect(fields[0].is_base) == True
        expect(fields[1].const_value) == '"admin"'
        expect(base_name) == "UserBase"

    def last_base_field_wins(expect, go_package):
        _, base_name = _classify(
            go_package,
            'package models\n\ntype T struct {\n\tA int `super:""`\n\tB int `super:""`\n}\n',
        )
        expect(base_name) == "B"

    def expands_multi_name_fields(expect, go_package):
        fields, _ = _classify(
            go_package,
            'package models\n\ntype Point struct {\n\tX, Y int `required:""`\n}\n',
        )
        expect([(f.name, f.type) for f in fields]) == [("X", "int"), ("Y", "int")]

    def skips_blank_fields(expect, go_package):
        fields, _ = _classify(
            go_package,
            'package models\n\ntype T struct {\n\t_ int `required:""`\n\tA int `required:""`\n}\n',
        )
        expect([f.name for f in fields]) == ["A"]

    def returns_nothing_for_untagged_structs(expect, go_package):
        fields, _ = _classify(go_package, "package models\n\ntype Point struct {\n\tX, Y int\n}\n")
        expect(fields) == []

    def raises_on_unknown_packages(expect, go_package):
        with pytest.raises(TypeResolutionError):
            _classify(
                go_package,
                'package models\n\ntype T struct {\n\tR io.Reader `required:""`\n}\n',
            )
