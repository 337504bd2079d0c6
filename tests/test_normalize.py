"""Tests for package list normalisation."""

import pytest

from bloatbuster.normalize import is_blank, parse_package_list


def test_parse_strips_prefix_and_whitespace():
    text = "  package:com.a.b  \n\npackage:com.c.d\ncom.e.f\n"
    assert parse_package_list(text) == ["com.a.b", "com.c.d", "com.e.f"]


def test_parse_keeps_order_and_duplicates():
    assert parse_package_list("b\na\nb") == ["b", "a", "b"]


def test_parse_strips_prefix_only_once():
    assert parse_package_list("package:package:x") == ["package:x"]


def test_parse_prefix_only_in_middle_is_kept():
    assert parse_package_list("com.package:odd") == ["com.package:odd"]


def test_parse_handles_crlf():
    assert parse_package_list("package:a\r\npackage:b\r\n") == ["a", "b"]


def test_parse_drops_lines_empty_after_prefix():
    assert parse_package_list("package:\npackage:   \n") == []


@pytest.mark.parametrize(
    "text,empty",
    [
        ("", True),
        ("   \n\t\n", True),
        ("package:\n\npackage:", True),
        ("package:x", False),
        ("\n  y  \n", False),
    ],
)
def test_parse_empty_iff_no_usable_line(text, empty):
    assert (len(parse_package_list(text)) == 0) is empty


def test_parse_is_idempotent_on_clean_output():
    first = parse_package_list("package:com.a\n  com.b \n\npackage:com.c\ncom.a")
    assert parse_package_list("\n".join(first)) == first


def test_parse_never_raises_on_none():
    assert parse_package_list(None) == []


def test_is_blank():
    assert is_blank("")
    assert is_blank(" \n\t ")
    assert not is_blank("package:")


def test_parse_strips_byte_order_mark():
    text = "\ufeffpackage:com.a\n package:com.b \npackage:\ufeffcom.c"
    assert parse_package_list(text) == ["com.a", "com.b", "com.c"]


def test_bom_only_input_is_blank():
    assert is_blank("\ufeff \n")
    assert parse_package_list("\ufeff\n\ufeffpackage:") == []
