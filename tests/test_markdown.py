"""Tests for the assistant reply markdown renderer."""

import pytest

from guidance.core.markdown import (
    ListItem,
    parse_list_item,
    render,
    render_header,
    strip_empty_items,
    to_display_html,
    wrap_lists,
)


class TestHeaders:
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_each_level(self, level):
        assert render("#" * level + " Title") == f"<h{level}>Title</h{level}>"

    def test_trailing_whitespace_trimmed(self):
        assert render("## Next steps   ") == "<h2>Next steps</h2>"

    def test_longest_prefix_wins(self):
        assert render_header("### Deep") == "<h3>Deep</h3>"

    def test_seven_marks_is_literal(self):
        assert render("####### Too deep") == "####### Too deep"

    def test_requires_whitespace_after_marks(self):
        assert render("#hashtag") == "#hashtag"

    def test_emphasis_inside_header(self):
        assert render("## *Plan*") == "<h2><em>Plan</em></h2>"


class TestEmphasis:
    def test_bold(self):
        assert render("**Skills:** Python") == "<strong>Skills:</strong> Python"

    def test_italic_star(self):
        assert render("a *quick* note") == "a <em>quick</em> note"

    def test_italic_underscore(self):
        assert render("_note_") == "<em>note</em>"

    def test_bold_and_italic_on_one_line(self):
        assert render("**Salary:** *approx*") == "<strong>Salary:</strong> <em>approx</em>"


class TestLists:
    def test_unordered(self):
        assert render("- item one\n- item two") == "<ul><li>item one</li><li>item two</li></ul>"

    def test_ordered(self):
        assert render("1. first\n2. second") == "<ol><li>first</li><li>second</li></ol>"

    @pytest.mark.parametrize("marker", ["-", "*", "+", "•"])
    def test_bullet_markers(self, marker):
        assert render(f"{marker} Job: Engineer") == "<ul><li>Job: Engineer</li></ul>"

    def test_indented_item(self):
        assert render("   - nested") == "<ul><li>nested</li></ul>"

    def test_marker_without_space_is_literal(self):
        assert render("-not a list") == "-not a list"

    def test_bold_inside_item(self):
        assert render("• **Exams:** JEE, NEET") == "<ul><li><strong>Exams:</strong> JEE, NEET</li></ul>"

    def test_surrounding_text_gets_breaks(self):
        html = render("Intro\n- a\n- b\nOutro")
        assert html == "Intro<br><ul><li>a</li><li>b</li></ul><br>Outro"

    def test_separate_runs_are_wrapped_separately(self):
        html = render("- a\ntext\n1. b")
        assert html == "<ul><li>a</li></ul><br>text<br><ol><li>b</li></ol>"

    def test_ordinal_text_makes_run_ordered(self):
        # Known approximation: any "digit." inside the run picks <ol>
        assert render("- Version 2. released") == "<ol><li>Version 2. released</li></ol>"

    def test_parse_list_item_marks_numbered(self):
        assert parse_list_item("3. third") == ListItem("third", ordered=True)
        assert parse_list_item("- dash") == ListItem("dash")
        assert parse_list_item("plain") == "plain"

    def test_wrap_lists_leaves_plain_lines(self):
        assert wrap_lists(["a", "b"]) == ["a", "b"]


class TestLineBreaks:
    def test_single_newline(self):
        assert render("line one\nline two") == "line one<br>line two"

    def test_double_newline(self):
        assert render("para one\n\npara two") == "para one<br><br>para two"

    def test_crlf_is_normalised(self):
        assert render("- a\r\n- b") == "<ul><li>a</li><li>b</li></ul>"


class TestTotality:
    @pytest.mark.parametrize("text", ["", None])
    def test_empty_input(self, text):
        assert render(text) == ""

    def test_plain_text_unchanged_except_breaks(self):
        text = "Plain text with no markup\nand a second line"
        assert render(text) == text.replace("\n", "<br>")

    def test_unbalanced_markers_fall_through(self):
        assert render("a lone * star") == "a lone * star"

    def test_html_is_not_escaped(self):
        assert render("a & b < c") == "a & b < c"


class TestDisplayHtml:
    def test_assistant_is_rendered(self):
        assert to_display_html("assistant", "**Hi**") == "<strong>Hi</strong>"

    def test_user_is_escaped_not_rendered(self):
        assert to_display_html("user", "<b>hi</b> & **x**") == "&lt;b&gt;hi&lt;/b&gt; &amp; **x**"


class TestCleanup:
    def test_strip_empty_items(self):
        assert strip_empty_items("<ul><li></li><li>x</li></ul>") == "<ul><li>x</li></ul>"

    def test_blank_line_splits_ordered_lists(self):
        assert render("1. a\n\n2. b") == "<ol><li>a</li></ol><br><br><ol><li>b</li></ol>"
