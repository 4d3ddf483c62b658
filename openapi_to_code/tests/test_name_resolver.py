import pytest

from openapi_to_code.pipeline.analyzer.name_resolver import NameResolver
from openapi_to_code.pipeline.errors import InvalidIdentifierError
from openapi_to_code.utils import snake_to_pascal_case, to_snake_case


class TestTypeIdent:
    """Test type-like identifiers"""

    def setup_method(self):
        self.resolver = NameResolver()

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Foo", "Foo"),
            ("pet_store", "PetStore"),
            ("Foo::bar", "FooBar"),
            ("listPets::200::application/json", "ListPets200ApplicationJson"),
            ("/pets::200::application/json", "Pets200ApplicationJson"),
            ("@type", "AtType"),
            ("lorem", "Lorem"),
            ("in-progress", "InProgress"),
            ("Variant0", "Variant0"),
        ],
    )
    def test_sanitized(self, raw, expected):
        ident = self.resolver.type_ident(raw)
        assert ident.ident == expected
        assert ident.raw == raw

    @pytest.mark.parametrize("raw", ["", "123", "::", "self", "Self"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidIdentifierError):
            self.resolver.type_ident(raw)


class TestFieldName:
    """Test field-like identifiers"""

    def setup_method(self):
        self.resolver = NameResolver()

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("bar", "bar"),
            ("firstName", "first_name"),
            ("HTTPServer", "http_server"),
            ("@type", "at_type"),
            ("address2", "address2"),
            ("content-type", "content_type"),
        ],
    )
    def test_sanitized(self, raw, expected):
        name = self.resolver.field_name(raw)
        assert name.ident == expected
        assert name.raw == raw

    @pytest.mark.parametrize("raw", ["type", "match", "async", "Ref"])
    def test_keywords_become_raw_identifiers(self, raw):
        assert self.resolver.field_name(raw).ident == f"r#{raw.lower()}"

    @pytest.mark.parametrize("raw", ["self", "super", "crate", "", "42"])
    def test_invalid(self, raw):
        with pytest.raises(InvalidIdentifierError):
            self.resolver.field_name(raw)


def test_case_helpers():
    assert snake_to_pascal_case("first 3 rows") == "First3Rows"
    assert snake_to_pascal_case("FIRST_NAME") == "FirstName"
    assert to_snake_case("actionTemplate") == "action_template"
    assert to_snake_case("") == ""
