"""Tests for top-level type detection."""

from javaslice.segmentation.classes import extract_classes, select_classes


def test_extract_public_class_body():
    source = "public class A { void m(){ if(true){x();} } }"
    spans = extract_classes(source, prefer_public=True)

    assert len(spans) == 1
    span = spans[0]
    assert span.class_name == "A"
    assert source[span.body_start:span.body_end] == " void m(){ if(true){x();} } "


def test_select_prefers_public(mixed_visibility_source):
    names = [s.class_name for s in select_classes(mixed_visibility_source)]
    assert names == ["Main"]


def test_select_falls_back_to_any(package_private_source):
    names = [s.class_name for s in select_classes(package_private_source)]
    assert names == ["First", "Second"]


def test_permissive_pass_finds_every_top_level_type(mixed_visibility_source):
    names = [s.class_name for s in extract_classes(mixed_visibility_source, prefer_public=False)]
    assert names == ["Helper", "Main"]


def test_class_literal_is_not_a_declaration():
    source = "Object o = Foo.class;\nclass B {}"
    spans = extract_classes(source, prefer_public=False)

    assert [s.class_name for s in spans] == ["B"]
    assert spans[0].body_start == spans[0].body_end


def test_declarations_in_comments_and_strings_are_ignored():
    source = (
        "// public class Fake {\n"
        'class Real { String s = "public class AlsoFake {"; }\n'
    )
    assert [s.class_name for s in select_classes(source)] == ["Real"]


def test_nested_public_class_is_not_top_level():
    source = "class Outer {\n    public static class Inner { void i() {} }\n}\n"
    assert extract_classes(source, prefer_public=True) == []
    assert [s.class_name for s in select_classes(source)] == ["Outer"]


def test_generic_and_extends_clauses():
    source = (
        "public final class Box<T extends Comparable<T>> extends Base\n"
        "        implements Runnable, java.io.Serializable {\n"
        "}\n"
    )
    assert [s.class_name for s in select_classes(source)] == ["Box"]


def test_enum_and_interface_keywords():
    source = "public enum Color { RED, GREEN; }\npublic interface Shape { }\n"
    assert [s.class_name for s in select_classes(source)] == ["Color", "Shape"]


def test_spans_do_not_overlap():
    source = "class A { class B { } }\nclass C { }\n"
    spans = extract_classes(source, prefer_public=False)

    assert [s.class_name for s in spans] == ["A", "C"]
    assert spans[0].body_end < spans[1].body_start


def test_unmatched_brace_yields_nothing():
    assert select_classes("public class Broken { void m() {") == []


def test_invalid_input():
    assert extract_classes(None, prefer_public=True) == []
    assert extract_classes("   ", prefer_public=False) == []
    assert select_classes(42) == []
