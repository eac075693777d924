"""
Tests for HTML attribute serialization.
"""

from media_tags.rendering.attributes import html_attrs, html_escape


def test_attributes_are_sorted():
    assert html_attrs({"width": 10, "alt": "a", "height": 5}) == "alt='a' height='5' width='10'"


def test_none_and_false_are_skipped():
    assert html_attrs({"alt": None, "hidden": False, "id": "x"}) == "id='x'"


def test_true_and_empty_render_bare_key():
    assert html_attrs({"controls": True, "muted": ""}) == "controls muted"


def test_values_are_escaped():
    assert html_attrs({"alt": "it's <b>\"big\"</b> & bold"}) == (
        "alt='it&#x27;s &lt;b&gt;&quot;big&quot;&lt;/b&gt; &amp; bold'"
    )


def test_zero_is_rendered():
    assert html_attrs({"tabindex": 0}) == "tabindex='0'"


def test_empty_mapping():
    assert html_attrs({}) == ""


def test_html_escape_converts_to_string():
    assert html_escape(42) == "42"
