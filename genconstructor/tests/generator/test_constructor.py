"""Tests for constructor rendering."""

from genconstructor.generator.constructor import (
    build_rows,
    constructor_name,
    param_name,
    render_constructor,
    return_type,
)
from genconstructor.generator.types import ConstructorSpec, FieldInfo, GenerationOptions


def _spec(options=None, fields=None, interface_name=None, struct_name="Order"):
    return ConstructorSpec(
        struct_name=struct_name,
        fields=fields
        or [
            FieldInfo(type="string", name="ID"),
            FieldInfo(type="time.Time", name="Created", imports={"time": "time"}),
            FieldInfo(type="Status", name="Status", const_value="StatusNew"),
        ],
        options=options or GenerationOptions(),
        interface_name=interface_name,
    )


def describe_render_constructor():
    def renders_value_constructor(expect):
        expect(render_constructor(_spec())) == (
            "func NewOrder(\n"
            "\tid string,\n"
            "\tcreated time.Time,\n"
            ") Order {\n"
            "\treturn Order{\n"
            "\t\tID:      id,\n"
            "\t\tCreated: created,\n"
            "\t\tStatus:  StatusNew,\n"
            "\t}\n"
            "}\n"
        )

    def renders_pointer_constructor(expect):
        text = render_constructor(_spec(GenerationOptions(pointer=True)))
        expect(") *Order {\n" in text) == True
        expect("\treturn &Order{\n" in text) == True

    def renders_super_constructor(expect):
        text = render_constructor(_spec(GenerationOptions(super=True), interface_name="Order"))
        expect(") Order {\n" in text) == True
        expect("\treturn &Order{\n" in text) == True

    def renders_constructor_without_parameters(expect):
        fields = [FieldInfo(type="string", name="Role", const_value='"admin"')]
        expect(render_constructor(_spec(fields=fields, struct_name="guest"))) == (
            "func NewGuest() guest {\n"
            "\treturn guest{\n"
            '\t\tRole: "admin",\n'
            "\t}\n"
            "}\n"
        )

    def renders_extends_constructor(expect):
        spec = _spec(
            GenerationOptions(extends=True),
            fields=[
                FieldInfo(type="*UserBase", name="UserBase", is_base=True),
                FieldInfo(type="string", name="Role", const_value='"admin"'),
            ],
            interface_name="User",
            struct_name="AdminUser",
        )
        expect(render_constructor(spec)) == (
            "func NewAdminUser(\n"
            "\tuserBase User,\n"
            ") User {\n"
            "\treturn &AdminUser{\n"
            "\t\tUserBase: userBase.(*UserBase),\n"
            '\t\tRole:     "admin",\n'
            "\t}\n"
            "}\n"
        )

    def renders_constant_values_verbatim(expect):
        fields = [FieldInfo(type="time.Duration", name="Timeout", const_value="5 * time.Second")]
        text = render_constructor(_spec(fields=fields))
        expect("\t\tTimeout: 5 * time.Second,\n" in text) == True


def describe_build_rows():
    def skips_constant_fields_in_parameters(expect):
        params, assignments = build_rows(_spec())
        expect([(p.name, p.type) for p in params]) == [("id", "string"), ("created", "time.Time")]
        expect([a.key for a in assignments]) == ["ID", "Created", "Status"]

    def narrows_fields_named_like_the_interface(expect):
        spec = _spec(
            GenerationOptions(extends=True),
            fields=[FieldInfo(type="*User", name="User"), FieldInfo(type="int", name="Level")],
            interface_name="User",
            struct_name="AdminUser",
        )
        params, assignments = build_rows(spec)
        expect([(p.name, p.type) for p in params]) == [("user", "User"), ("level", "int")]
        expect(assignments[0].value) == "user.(*User)"
        expect(assignments[1].value) == "level"

    def does_not_narrow_without_interface_name(expect):
        spec = _spec(
            GenerationOptions(extends=True),
            fields=[FieldInfo(type="*Base", name="Base", is_base=True)],
            interface_name="",
            struct_name="AdminUser",
        )
        params, assignments = build_rows(spec)
        expect([(p.name, p.type) for p in params]) == [("base", "*Base")]
        expect(assignments[0].value) == "base"


def describe_names():
    def escapes_go_keywords(expect):
        expect(param_name("Type")) == "type_"
        expect(param_name("Range")) == "range_"
        expect(param_name("Kind")) == "kind"

    def prefixes_constructor_names(expect):
        expect(constructor_name("adminUser")) == "NewAdminUser"

    def picks_return_type(expect):
        expect(return_type(_spec())) == "Order"
        expect(return_type(_spec(GenerationOptions(pointer=True)))) == "*Order"
        expect(return_type(_spec(GenerationOptions(super=True), interface_name="Order"))) == (
            "Order"
        )
        expect(return_type(_spec(GenerationOptions(extends=True), interface_name=""))) == ""
