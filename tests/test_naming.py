from cuppa_cli.naming import (
    capitalize,
    format_value,
    is_identifier,
    parse_value,
    sanitize_type_name,
    to_camel_case,
    to_identifier,
    to_kebab_case,
    to_pascal_case,
)


class TestCaseConversion:
    def test_capitalize_only_touches_first_char(self):
        assert capitalize("bodyMedium") == "BodyMedium"
        assert capitalize("") == ""

    def test_camel_case_from_separators(self):
        assert to_camel_case("font-size_large") == "fontSizeLarge"
        assert to_camel_case("background-dark") == "backgroundDark"

    def test_pascal_case(self):
        assert to_pascal_case("my-app") == "MyApp"

    def test_kebab_case(self):
        assert to_kebab_case("primaryDark") == "primary-dark"
        assert to_kebab_case("HTTPServer") == "http-server"


class TestIdentifiers:
    def test_header_name(self):
        assert to_identifier("X-Request-Id") == "xRequestId"

    def test_spaces_and_snake_case(self):
        assert to_identifier("user name") == "userName"
        assert to_identifier("created_at") == "createdAt"

    def test_leading_digit_is_prefixed(self):
        assert to_identifier("2fa") == "_2fa"

    def test_nothing_usable(self):
        assert to_identifier("---") == "value"

    def test_is_identifier(self):
        assert is_identifier("id")
        assert not is_identifier("created_at")
        assert not is_identifier("zip-code")

    def test_sanitize_type_name(self):
        assert sanitize_type_name("Pet Store") == "PetStore"
        assert sanitize_type_name("my-api v2") == "myapiv2"


class TestValueParsing:
    def test_value_with_unit(self):
        assert parse_value("1.5rem") == (1.5, "rem")
        assert parse_value("16px") == (16, "px")

    def test_bare_numbers_default_to_px(self):
        assert parse_value("2") == (2, "px")
        assert parse_value(16) == (16, "px")

    def test_integral_float_becomes_int(self):
        value, _ = parse_value(16.0)
        assert value == 16
        assert isinstance(value, int)

    def test_unparseable_yields_zero(self):
        assert parse_value("abc") == (0, "px")

    def test_leading_number_is_kept(self):
        assert parse_value("12 px") == (12, "px")

    def test_format_value(self):
        assert format_value(16.0) == "16px"
        assert format_value(1.5, "rem") == "1.5rem"

    def test_format_then_parse_is_identity(self):
        for number, unit in ((16, "px"), (1.5, "rem"), (-2, "em"), (50, "%")):
            assert parse_value(format_value(number, unit)) == (number, unit)
