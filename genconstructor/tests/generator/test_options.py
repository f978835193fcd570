"""Tests for marker comment options."""

from genconstructor.generator.options import doc_comments, parse_options
from genconstructor.generator.types import GenerationOptions
from genconstructor.golang.parser import parse_source


def describe_parse_options():
    def returns_none_without_marker(expect):
        expect(parse_options(["// User is a user."])) == None
        expect(parse_options([])) == None

    def accepts_bare_marker(expect):
        expect(parse_options(["//genconstructor"])) == GenerationOptions()

    def reads_each_option(expect):
        expect(parse_options(["//genconstructor -p"])) == GenerationOptions(pointer=True)
        expect(parse_options(["//genconstructor -s"])) == GenerationOptions(super=True)
        expect(parse_options(["//genconstructor -e"])) == GenerationOptions(extends=True)

    def first_option_wins(expect):
        expect(parse_options(["//genconstructor -s -e -p"])) == GenerationOptions(super=True)

    def ignores_unknown_words(expect):
        expect(parse_options(["//genconstructor --verbose -p"])) == GenerationOptions(pointer=True)

    def reads_only_first_marker(expect):
        options = parse_options(["//genconstructor", "//genconstructor -p"])
        expect(options) == GenerationOptions()

    def requires_marker_at_start(expect):
        expect(parse_options(["// see //genconstructor -p"])) == None
        expect(parse_options(["  //genconstructor -p  "])) == GenerationOptions(pointer=True)


def describe_doc_comments():
    def puts_spec_docs_before_declaration_docs(expect):
        go_file = parse_source(
            "package a\n\n// outer\ntype (\n\t//genconstructor -s\n\tA struct{}\n)\n"
        )
        decl = go_file.type_decls[0]
        comments = doc_comments(decl.specs[0], decl)
        expect([c.text for c in comments]) == ["//genconstructor -s", "// outer"]
        expect(parse_options(comments)) == GenerationOptions(super=True)
