"""Tests for the scanner: token kinds, boundaries and positions."""

import unittest

from tagcheck.tokenizer import Tokenizer, TokenizerOpts
from tagcheck.tokens import (
    CharacterTokens,
    CommentToken,
    DirectiveToken,
    EOFToken,
    RawTextToken,
    Tag,
    TokenSinkResult,
)


class RecordingSink:
    def __init__(self, stop_after=None):
        self.tokens = []
        self.stop_after = stop_after

    def process_token(self, token):
        self.tokens.append(token)
        if self.stop_after is not None and len(self.tokens) >= self.stop_after:
            return TokenSinkResult.Stop
        return TokenSinkResult.Continue


def _token_to_list(token):
    if isinstance(token, Tag):
        kind = "StartTag" if token.kind == Tag.START else "EndTag"
        return [kind, token.name, token.self_closing]
    if isinstance(token, CharacterTokens):
        return ["Character", token.data]
    if isinstance(token, CommentToken):
        return ["Comment", token.data]
    if isinstance(token, DirectiveToken):
        return ["Directive", token.data]
    if isinstance(token, RawTextToken):
        return ["RawText", token.container, token.data]
    if isinstance(token, EOFToken):
        return ["EOF"]
    raise AssertionError(f"unexpected token {token!r}")


def tokenize(html, opts=None, stop_after=None):
    sink = RecordingSink(stop_after=stop_after)
    Tokenizer(sink, opts).run(html)
    return sink.tokens


def token_lists(html, opts=None):
    return [_token_to_list(t) for t in tokenize(html, opts)]


class TestTags(unittest.TestCase):
    def test_open_text_close(self):
        assert token_lists("<div>Content</p>") == [
            ["StartTag", "div", False],
            ["Character", "Content"],
            ["EndTag", "p", False],
            ["EOF"],
        ]

    def test_names_are_lower_cased(self):
        assert token_lists("<DiV></DIV>") == [
            ["StartTag", "div", False],
            ["EndTag", "div", False],
            ["EOF"],
        ]

    def test_custom_element_name_keeps_dashes(self):
        tokens = token_lists("<product-card></product-card>")
        assert tokens[0] == ["StartTag", "product-card", False]
        assert tokens[1] == ["EndTag", "product-card", False]

    def test_trailing_slash_marks_self_closing(self):
        assert token_lists("<div/>")[0] == ["StartTag", "div", True]
        assert token_lists("<div />")[0] == ["StartTag", "div", True]
        assert token_lists('<span title="x" />')[0] == ["StartTag", "span", True]

    def test_void_elements_are_self_closing_without_slash(self):
        assert token_lists("<br>")[0] == ["StartTag", "br", True]
        assert token_lists('<IMG src="a.png">')[0] == ["StartTag", "img", True]

    def test_end_tag_with_trailing_slash_is_self_closing(self):
        assert token_lists("</p/>")[0] == ["EndTag", "p", True]
        assert token_lists("</div />")[0] == ["EndTag", "div", True]
        assert token_lists("</div>")[0] == ["EndTag", "div", False]

    def test_less_than_ends_tag_name(self):
        # The tag still runs to the first ">", so "<p" is part of the div tag.
        assert token_lists("<div<p>x</div>") == [
            ["StartTag", "div", False],
            ["Character", "x"],
            ["EndTag", "div", False],
            ["EOF"],
        ]
        assert token_lists("</b<i>")[0] == ["EndTag", "b", False]

    def test_slash_inside_quoted_value_is_not_self_closing(self):
        assert token_lists('<span title="a/">x</span>')[0] == ["StartTag", "span", False]

    def test_quoted_values_may_contain_gt_and_other_quote(self):
        html = "<a title=\"x > y\" data-q='say \"hi\" >'>link</a>"
        assert token_lists(html) == [
            ["StartTag", "a", False],
            ["Character", "link"],
            ["EndTag", "a", False],
            ["EOF"],
        ]

    def test_unquoted_value(self):
        assert token_lists("<a href=/path?a=b>x</a>")[:2] == [
            ["StartTag", "a", False],
            ["Character", "x"],
        ]

    def test_less_than_not_followed_by_letter_is_text(self):
        assert token_lists("a < b and c<>d </ >") == [
            ["Character", "a < b and c<>d </ >"],
            ["EOF"],
        ]

    def test_unterminated_tag_runs_to_eof_as_text(self):
        assert token_lists("<p>x<span class='a") == [
            ["StartTag", "p", False],
            ["Character", "x<span class='a"],
            ["EOF"],
        ]

    def test_lone_less_than_at_eof(self):
        assert token_lists("x<") == [["Character", "x<"], ["EOF"]]


class TestMarkupDeclarations(unittest.TestCase):
    def test_comment_body_is_opaque(self):
        assert token_lists("<div><!-- <p> -->x</div>") == [
            ["StartTag", "div", False],
            ["Comment", " <p> "],
            ["Character", "x"],
            ["EndTag", "div", False],
            ["EOF"],
        ]

    def test_abrupt_empty_comments(self):
        assert token_lists("<!-->a")[:2] == [["Comment", ""], ["Character", "a"]]
        assert token_lists("<!--->a")[:2] == [["Comment", ""], ["Character", "a"]]
        assert token_lists("<!---->a")[:2] == [["Comment", ""], ["Character", "a"]]

    def test_unterminated_comment_consumes_rest(self):
        assert token_lists("<p><!-- </p>") == [
            ["StartTag", "p", False],
            ["Comment", " </p>"],
            ["EOF"],
        ]

    def test_doctype_is_directive(self):
        assert token_lists("<!doctype html><p>")[:2] == [
            ["Directive", "<!doctype html>"],
            ["StartTag", "p", False],
        ]

    def test_cdata_section_is_directive(self):
        assert token_lists("<![CDATA[<b>]]></i>")[:2] == [
            ["Directive", "<![CDATA[<b>]]>"],
            ["EndTag", "i", False],
        ]

    def test_processing_instruction_is_directive(self):
        assert token_lists("<?xml version='1.0'?>")[:1] == [["Directive", "<?xml version='1.0'?>"]]


class TestRawText(unittest.TestCase):
    def test_script_body_is_not_tokenized(self):
        html = '<script>if (a < b) { x = "</div>"; }</script>'
        assert token_lists(html) == [
            ["StartTag", "script", False],
            ["RawText", "script", 'if (a < b) { x = "</div>"; }'],
            ["EndTag", "script", False],
            ["EOF"],
        ]

    def test_end_tag_match_is_case_insensitive(self):
        assert token_lists("<STYLE>p{}</Style >") == [
            ["StartTag", "style", False],
            ["RawText", "style", "p{}"],
            ["EndTag", "style", False],
            ["EOF"],
        ]

    def test_longer_name_does_not_end_body(self):
        assert token_lists("<script>a</scripts>b</script>")[1] == ["RawText", "script", "a</scripts>b"]

    def test_empty_body(self):
        assert token_lists("<script></script>")[1] == ["RawText", "script", ""]

    def test_unterminated_body_consumes_rest(self):
        assert token_lists("<style>a{}<p>") == [
            ["StartTag", "style", False],
            ["RawText", "style", "a{}<p>"],
            ["EOF"],
        ]

    def test_unfinished_end_tag_is_text(self):
        assert token_lists("<script>x</script") == [
            ["StartTag", "script", False],
            ["RawText", "script", "x"],
            ["Character", "</script"],
            ["EOF"],
        ]

    def test_self_closing_script_does_not_enter_raw_text(self):
        assert token_lists('<script src="x.js"/><p></p>') == [
            ["StartTag", "script", True],
            ["StartTag", "p", False],
            ["EndTag", "p", False],
            ["EOF"],
        ]

    def test_initial_rawtext_state(self):
        opts = TokenizerOpts(initial_state=Tokenizer.RAWTEXT, initial_rawtext_tag="script")
        assert token_lists("a<b></script><p>", opts) == [
            ["RawText", "script", "a<b>"],
            ["EndTag", "script", False],
            ["StartTag", "p", False],
            ["EOF"],
        ]


class TestPositions(unittest.TestCase):
    def test_single_line_offsets(self):
        tokens = tokenize("<div>Content</p>")
        assert [(t.pos, t.line, t.column) for t in tokens] == [(0, 1, 0), (5, 1, 5), (12, 1, 12), (16, 1, 16)]

    def test_multi_line_positions(self):
        tokens = tokenize("a\n  <p>\n</p>")
        assert [(t.pos, t.line, t.column) for t in tokens] == [
            (0, 1, 0),
            (4, 2, 2),
            (7, 2, 5),
            (8, 3, 0),
            (12, 3, 4),
        ]

    def test_carriage_return_is_not_a_line_break(self):
        end_tag = tokenize("<div>\r\n</p>")[2]
        assert end_tag.name == "p"
        assert (end_tag.line, end_tag.column) == (2, 0)
        assert tokenize("<div>\r</p>")[2].column == 6

    def test_position_property(self):
        tag = tokenize("\n\n   <b>")[1]
        position = tag.position
        assert (position.pos, position.line, position.column) == (5, 3, 3)

    def test_bom_is_discarded_before_counting(self):
        assert tokenize("\ufeff<p>")[0].pos == 0
        tokens = tokenize("\ufeff<p>", TokenizerOpts(discard_bom=False))
        assert _token_to_list(tokens[0]) == ["Character", "\ufeff"]
        assert tokens[1].pos == 1


class TestSinkControl(unittest.TestCase):
    def test_stop_halts_scanning(self):
        tokens = tokenize("<a></b><c><d>", stop_after=2)
        assert [_token_to_list(t) for t in tokens] == [
            ["StartTag", "a", False],
            ["EndTag", "b", False],
        ]

    def test_stop_on_script_tag_skips_raw_text(self):
        tokens = tokenize("<script>x</script>", stop_after=1)
        assert len(tokens) == 1

    def test_tokenizer_can_be_reused(self):
        sink = RecordingSink()
        tokenizer = Tokenizer(sink)
        tokenizer.run("<p>\n")
        tokenizer.run("<i>")
        assert [(t.line, t.column) for t in sink.tokens[-2:]] == [(1, 0), (1, 3)]


if __name__ == "__main__":
    unittest.main()
