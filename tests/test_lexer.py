import dataclasses

import pytest
from conftest import EXAMPLE_A, kinds
from hypothesis import given
from hypothesis import strategies as st

from yelang.yelang_errors import LexError
from yelang.yelang_keywords import KeywordTable
from yelang.yelang_lexer import CharacterStream, Lexer, Token, tokenize


def test_example_a_tokens() -> None:
    assert kinds(tokenize(EXAMPLE_A)) == [
        ("VAR", "ye"),
        ("IDENTIFIER", "x"),
        ("OPERATOR", "="),
        ("NUMBER", "5"),
        ("SEMICOLON", ";"),
        ("PRINT", "bol"),
        ("IDENTIFIER", "x"),
        ("SEMICOLON", ";"),
    ]


def test_all_keywords() -> None:
    types = [tok.type for tok in tokenize("ye bol agar yafir varna jabtak tabtak")]
    assert types == ["VAR", "PRINT", "IF", "ELSE_IF", "ELSE", "WHILE", "LOOP_START"]


def test_keywords_are_case_sensitive() -> None:
    tok = tokenize("Bol")[0]
    assert tok.type == "IDENTIFIER"
    assert tok.value == "Bol"


def test_identifier_with_digits() -> None:
    assert kinds(tokenize("x1y2")) == [("IDENTIFIER", "x1y2")]


def test_keyword_prefix_is_identifier() -> None:
    assert kinds(tokenize("bolna")) == [("IDENTIFIER", "bolna")]


def test_number_token() -> None:
    assert kinds(tokenize("123")) == [("NUMBER", "123")]


def test_number_then_word_splits() -> None:
    assert kinds(tokenize("12ab")) == [("NUMBER", "12"), ("IDENTIFIER", "ab")]


def test_string_tokens_both_quotes() -> None:
    tokens = tokenize("\"hello world\" 'single'")
    assert kinds(tokens) == [("STRING", "hello world"), ("STRING", "single")]
    assert tokens[0].text == '"hello world"'
    assert tokens[1].text == "'single'"


def test_string_has_no_escape_processing() -> None:
    tok = tokenize(r'"a\nb"')[0]
    assert tok.value == "a\\nb"


def test_string_keeps_other_quote() -> None:
    assert tokenize("'say \"hi\"'")[0].value == 'say "hi"'


def test_string_spans_lines() -> None:
    assert tokenize('"a\nb"')[0].value == "a\nb"


@pytest.mark.parametrize(  # type: ignore[misc]
    "source",
    ["=", "+", "-", "*", "/", "<", ">", "==", "<=", ">=", "+=", "*=", "/=", "-="],
)
def test_operator_tokens(source: str) -> None:
    assert kinds(tokenize(source)) == [("OPERATOR", source)]


def test_operator_takes_at_most_two_characters() -> None:
    assert kinds(tokenize("===")) == [("OPERATOR", "=="), ("OPERATOR", "=")]


def test_punctuation_tokens() -> None:
    types = [tok.type for tok in tokenize("; { }")]
    assert types == ["SEMICOLON", "OPEN_BRACE", "CLOSE_BRACE"]


def test_whitespace_is_elided() -> None:
    assert tokenize(" \t\r\n ") == []
    assert tokenize("") == []


def test_line_and_column_tracking() -> None:
    tokens = tokenize("ye x = 1\n  bol x")
    assert (tokens[4].line, tokens[4].col) == (2, 3)
    assert tokens[4].offset == 11


def test_tokens_are_immutable() -> None:
    tok = tokenize("x")[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        tok.value = "y"  # type: ignore[misc]


@pytest.mark.parametrize("char", ["!", "_", "(", "#", "%", "é", "٣"])  # type: ignore[misc]
def test_unexpected_character_raises(char: str) -> None:
    with pytest.raises(LexError) as e:
        tokenize(f"bol {char}")
    assert e.value.char == char
    assert e.value.offset == 4
    assert "Unexpected character" in str(e.value)


def test_lex_error_reports_byte_offset() -> None:
    with pytest.raises(LexError) as e:
        tokenize('bol "é" !')
    assert e.value.offset == 9
    assert (e.value.line, e.value.col) == (1, 9)


def test_lex_error_is_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        tokenize("@")


def test_unterminated_string_raises() -> None:
    with pytest.raises(LexError, match="Unterminated string literal") as e:
        tokenize('bol "oops')
    assert e.value.char == '"'
    assert e.value.offset == 4


def test_mismatched_quote_is_unterminated() -> None:
    with pytest.raises(LexError, match="Unterminated"):
        tokenize("bol \"oops'")


def test_custom_keyword_table() -> None:
    table = KeywordTable.default().with_aliases({"likho": "PRINT"})
    assert kinds(tokenize("likho 1", table)) == [("PRINT", "likho"), ("NUMBER", "1")]


def test_empty_keyword_table_makes_everything_identifiers() -> None:
    assert tokenize("bol", KeywordTable())[0].type == "IDENTIFIER"


def test_next_token_returns_eof_repeatedly() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next_token().type == "IDENTIFIER"
    assert lexer.next_token().type == "EOF"
    assert lexer.next_token().type == "EOF"


def test_character_stream_read_past_end() -> None:
    stream = CharacterStream("")
    with pytest.raises(EOFError):
        stream.next()


def test_token_repr() -> None:
    assert repr(Token("NUMBER", "5")) == "Token(NUMBER, '5')"


words = st.from_regex(r"[a-zA-Z][a-zA-Z0-9]{0,6}", fullmatch=True)
numbers = st.from_regex(r"[0-9]{1,6}", fullmatch=True)
strings = st.one_of(
    st.text(st.characters(exclude_characters='"'), max_size=8).map(lambda s: f'"{s}"'),
    st.text(st.characters(exclude_characters="'"), max_size=8).map(lambda s: f"'{s}'"),
)
operators = st.sampled_from(["=", "+", "-", "*", "/", "<", ">", "==", "<=", ">=", "*="])
punctuation = st.sampled_from([";", "{", "}"])
spellings = st.lists(st.one_of(words, numbers, strings, operators, punctuation), max_size=20)
gaps = st.text(" \t\n", min_size=1, max_size=3)


@given(spellings, gaps)  # type: ignore[misc]
def test_token_spellings_recover_source(parts: list[str], gap: str) -> None:
    tokens = tokenize(gap.join(parts))
    assert len(tokens) == len(parts)
    assert "".join(tok.text for tok in tokens) == "".join(parts)


@given(st.text(st.characters(exclude_characters='"', exclude_categories=("Cs",))))  # type: ignore[misc]
def test_unterminated_literal_always_fails(body: str) -> None:
    with pytest.raises(LexError, match="Unterminated"):
        tokenize('bol "' + body)


@given(st.text(st.characters(exclude_categories=("Cs",))))  # type: ignore[misc]
def test_arbitrary_text_lexes_or_raises_lex_error(source: str) -> None:
    try:
        tokens = tokenize(source)
    except LexError:
        return
    assert all(tok.text for tok in tokens)
