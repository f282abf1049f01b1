"""Unit tests for the expat-backed token source."""

from __future__ import annotations

import pytest

from feedscan.core.exceptions import ParseError
from feedscan.extraction.tokens import ExpatTokenSource, Token, TokenKind


def _tokens(text: str, **kwargs) -> list[Token]:
    return list(ExpatTokenSource(**kwargs)(text))


START, END, TEXT, CDATA, EOF = (
    TokenKind.START,
    TokenKind.END,
    TokenKind.TEXT,
    TokenKind.CDATA,
    TokenKind.EOF,
)


class TestBasicEvents:
    def test_start_text_end_eof(self) -> None:
        assert _tokens("<a>hi</a>") == [
            Token(START, "a"),
            Token(TEXT, "hi"),
            Token(END, "a"),
            Token(EOF),
        ]

    def test_self_closing_element_is_start_end_pair(self) -> None:
        assert _tokens("<rss><item/></rss>") == [
            Token(START, "rss"),
            Token(START, "item"),
            Token(END, "item"),
            Token(END, "rss"),
            Token(EOF),
        ]

    def test_prefixed_names_are_verbatim(self) -> None:
        kinds = _tokens("<rss xmlns:dc='urn:dc'><dc:creator>x</dc:creator></rss>")
        assert Token(START, "dc:creator") in kinds

    def test_declaration_comments_and_pi_produce_no_tokens(self) -> None:
        text = '<?xml version="1.0"?><!-- note --><a><?pi data?></a>'
        assert _tokens(text) == [Token(START, "a"), Token(END, "a"), Token(EOF)]


class TestTextPolicy:
    def test_entities_coalesced_into_one_text_token(self) -> None:
        assert _tokens("<a>Storm &amp; regn &#233;</a>")[1] == Token(TEXT, "Storm & regn é")

    def test_text_trimmed_by_default(self) -> None:
        assert _tokens("<a>\n   padded \t</a>")[1] == Token(TEXT, "padded")

    def test_whitespace_only_text_skipped(self) -> None:
        assert _tokens("<a>\n  <b/>\n</a>") == [
            Token(START, "a"),
            Token(START, "b"),
            Token(END, "b"),
            Token(END, "a"),
            Token(EOF),
        ]

    def test_trimming_can_be_disabled(self) -> None:
        assert _tokens("<a> x </a>", trim_text=False)[1] == Token(TEXT, " x ")

    def test_cdata_is_separate_and_untrimmed(self) -> None:
        assert _tokens("<a>pre<![CDATA[ <b>raw</b> ]]></a>") == [
            Token(START, "a"),
            Token(TEXT, "pre"),
            Token(CDATA, " <b>raw</b> "),
            Token(END, "a"),
            Token(EOF),
        ]

    def test_text_split_across_chunks_is_one_token(self) -> None:
        text = "<a>" + "word " * 50 + "</a>"
        tokens = _tokens(text, chunk_size=7)
        assert tokens[1] == Token(TEXT, ("word " * 50).strip())
        assert len(tokens) == 4

    def test_non_ascii_text_preserved(self) -> None:
        assert _tokens("<a>Søren Østergaard</a>")[1] == Token(TEXT, "Søren Østergaard")

    def test_declared_encoding_does_not_override_text(self) -> None:
        text = '<?xml version="1.0" encoding="ISO-8859-1"?><a>æøå</a>'
        assert _tokens(text)[1] == Token(TEXT, "æøå")


class TestEmptyDocuments:
    @pytest.mark.parametrize("text", ["", "   \n", "<!-- nothing here -->"])
    def test_no_elements_yields_only_eof(self, text: str) -> None:
        assert _tokens(text) == [Token(EOF)]


class TestFragments:
    def test_several_top_level_elements_are_scanned_in_order(self) -> None:
        assert _tokens("<a>x</a><b>y</b>") == [
            Token(START, "a"),
            Token(TEXT, "x"),
            Token(END, "a"),
            Token(START, "b"),
            Token(TEXT, "y"),
            Token(END, "b"),
            Token(EOF),
        ]

    def test_text_between_top_level_elements_is_skipped(self) -> None:
        assert _tokens("<a/> stray <b/>") == [
            Token(START, "a"),
            Token(END, "a"),
            Token(START, "b"),
            Token(END, "b"),
            Token(EOF),
        ]

    def test_trailing_text_after_root_is_skipped(self) -> None:
        assert _tokens("<rss><a>x</a></rss>\ngarbage") == [
            Token(START, "rss"),
            Token(START, "a"),
            Token(TEXT, "x"),
            Token(END, "a"),
            Token(END, "rss"),
            Token(EOF),
        ]

    def test_fragment_split_across_chunks(self) -> None:
        text = "".join(f"<item>t{i}</item>" for i in range(4))
        texts = [t.value for t in _tokens(text, chunk_size=5) if t.kind is TEXT]
        assert texts == ["t0", "t1", "t2", "t3"]

    def test_error_in_later_element_reports_document_position(self) -> None:
        with pytest.raises(ParseError) as alone:
            _tokens("<b></c>")
        with pytest.raises(ParseError) as same_line:
            _tokens("<a/><b></c>")
        with pytest.raises(ParseError) as next_line:
            _tokens("<a/>\n<b>\n</c>")
        assert same_line.value.line == 1
        assert same_line.value.column == alone.value.column + 4
        assert next_line.value.line == 3

    def test_unclosed_markup_after_root_raises(self) -> None:
        with pytest.raises(ParseError):
            _tokens("<a/>junk<")


class TestMalformedInput:
    def test_invalid_byte_in_tag_name(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _tokens("<rss><it\udcffem></it\udcffem></rss>")
        assert exc_info.value.line == 1
        assert "invalid token" in str(exc_info.value)

    def test_mismatched_end_tag(self) -> None:
        with pytest.raises(ParseError):
            _tokens("<rss><item></rss>")

    def test_unclosed_root(self) -> None:
        with pytest.raises(ParseError):
            _tokens("<rss><item>")

    def test_unencodable_lone_surrogate(self) -> None:
        with pytest.raises(ParseError):
            _tokens("<a>\ud800</a>")

    def test_tokens_before_error_are_yielded(self) -> None:
        stream = ExpatTokenSource(chunk_size=16)("<rss><item>" + " " * 64 + "<bad<</item></rss>")
        assert next(stream) == Token(START, "rss")
        with pytest.raises(ParseError):
            list(stream)

    def test_invalid_chunk_size(self) -> None:
        with pytest.raises(ValueError):
            ExpatTokenSource(chunk_size=0)
