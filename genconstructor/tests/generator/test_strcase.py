"""Tests for identifier case conversion."""

from genconstructor.generator.strcase import split_into_words, to_lower_camel, to_upper_camel


def describe_split_into_words():
    def splits_camel_case(expect):
        expect(split_into_words("AdminUser")) == ["Admin", "User"]
        expect(split_into_words("userBase")) == ["user", "Base"]

    def keeps_initialisms_together(expect):
        expect(split_into_words("HTTPServer")) == ["HTTP", "Server"]
        expect(split_into_words("UserID")) == ["User", "ID"]

    def splits_at_separators(expect):
        expect(split_into_words("created_at")) == ["created", "at"]
        expect(split_into_words("max-retries")) == ["max", "retries"]

    def keeps_digits_with_their_word(expect):
        expect(split_into_words("Base64Encoder")) == ["Base64", "Encoder"]
        expect(split_into_words("UTF8Name")) == ["UTF8", "Name"]


def describe_to_upper_camel():
    def capitalizes_words(expect):
        expect(to_upper_camel("user_base")) == "UserBase"
        expect(to_upper_camel("adminUser")) == "AdminUser"

    def upper_cases_initialisms(expect):
        expect(to_upper_camel("user_id")) == "UserID"
        expect(to_upper_camel("api_url")) == "APIURL"


def describe_to_lower_camel():
    def lower_cases_first_word(expect):
        expect(to_lower_camel("UserBase")) == "userBase"
        expect(to_lower_camel("Name")) == "name"

    def lower_cases_leading_initialisms(expect):
        expect(to_lower_camel("ID")) == "id"
        expect(to_lower_camel("URLPath")) == "urlPath"
        expect(to_lower_camel("OwnerID")) == "ownerID"


def describe_unicode_identifiers():
    def splits_at_unicode_case_changes(expect):
        expect(split_into_words("ÜberGröße")) == ["Über", "Größe"]
        expect(split_into_words("ÉtatCivil")) == ["État", "Civil"]

    def keeps_non_ascii_letters(expect):
        expect(to_upper_camel("Über")) == "Über"
        expect(to_lower_camel("Größe")) == "größe"
        expect(to_lower_camel("名前")) == "名前"

    def keeps_distinct_names_distinct(expect):
        expect(to_lower_camel("Größe")) == "größe"
        expect(to_lower_camel("Grüße")) == "grüße"
