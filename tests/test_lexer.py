import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from polyparse.polyparse_errors import MalformedExpression, StreamFailure
from polyparse.polyparse_lexer import CharacterStream, Scanner, Token, is_word_char


def tokenize(source: str) -> list[Token]:
    scanner = Scanner(CharacterStream(source, 0, 1, 1))
    tokens = []
    while True:
        tok = scanner.next_token()
        if tok.is_eof():
            break
        tokens.append(tok)
    return tokens


def test_single_char_tokens() -> None:
    code = "( ) { } [ ] , + - * ^ | ;"
    expected = [
        "LPAREN",
        "RPAREN",
        "LBRACE",
        "RBRACE",
        "LBRACK",
        "RBRACK",
        "COMMA",
        "PLUS",
        "SUB",
        "MULT",
        "POW",
        "BAR",
        "CHAR",
    ]
    assert [tok.type for tok in tokenize(code)] == expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "word",
    ["x", "x_1", "3/4", "0.25", "~2", "1i2", "IGRLEX", "é", "αβ"],
)
def test_word_tokens(word: str) -> None:
    tokens = tokenize(word)
    assert len(tokens) == 1
    assert tokens[0].type == "WORD"
    assert tokens[0].value == word
    assert tokens[0].text == word


def test_words_split_on_operators() -> None:
    tokens = tokenize("3x^2*y-1/2")
    assert [(t.type, t.value) for t in tokens] == [
        ("WORD", "3x"),
        ("POW", "^"),
        ("WORD", "2"),
        ("MULT", "*"),
        ("WORD", "y"),
        ("SUB", "-"),
        ("WORD", "1/2"),
    ]


def test_operator_tokens_have_no_text() -> None:
    tok = tokenize("+")[0]
    assert tok.text is None
    assert not tok.is_word()


def test_quoted_literal() -> None:
    tokens = tokenize("'1 i 2' \"x\"")
    assert [(t.type, t.value) for t in tokens] == [("STRING", "1 i 2"), ("STRING", "x")]
    assert tokens[0].text == "1 i 2"


def test_unterminated_quote_raises() -> None:
    with pytest.raises(MalformedExpression, match="Unterminated quoted literal"):
        tokenize('"abc')


def test_comments_and_control_chars_are_skipped() -> None:
    tokens = tokenize("  \t\n # a comment ( x\n\x01 y")
    assert [t.value for t in tokens] == ["y"]


def test_line_and_column_tracking() -> None:
    tokens = tokenize("x +\n  y")
    assert (tokens[0].line, tokens[0].col) == (1, 1)
    assert (tokens[1].line, tokens[1].col) == (1, 3)
    assert (tokens[2].line, tokens[2].col) == (2, 3)


def test_eof_is_repeated() -> None:
    scanner = Scanner(CharacterStream(""))
    first = scanner.next_token()
    second = scanner.next_token()
    assert first.is_eof() and second.is_eof()
    assert first.value == "EOF"


def test_push_back_replays_token() -> None:
    scanner = Scanner(CharacterStream("a b"))
    tok = scanner.next_token()
    scanner.push_back(tok)
    assert scanner.next_token() is tok
    assert scanner.next_token().value == "b"


def test_second_push_back_raises() -> None:
    scanner = Scanner(CharacterStream("a b"))
    a = scanner.next_token()
    b = scanner.next_token()
    scanner.push_back(b)
    with pytest.raises(RuntimeError, match="Pushback slot already holds"):
        scanner.push_back(a)


def tokenize_stream(source: io.StringIO) -> list[Token]:
    scanner = Scanner(CharacterStream(source))
    tokens = []
    while not (tok := scanner.next_token()).is_eof():
        tokens.append(tok)
    return tokens


def test_reads_from_text_stream() -> None:
    source = io.StringIO("x" * 5000 + " + y")
    tokens = tokenize_stream(source)
    assert tokens[0].value == "x" * 5000
    assert [t.value for t in tokens[1:]] == ["+", "y"]


class FailingReader(io.StringIO):
    def read(self, size: int | None = -1) -> str:
        raise OSError("disk on fire")


def test_stream_failure_is_wrapped() -> None:
    scanner = Scanner(CharacterStream(FailingReader()))
    with pytest.raises(StreamFailure, match="disk on fire") as excinfo:
        scanner.next_token()
    assert isinstance(excinfo.value.__cause__, OSError)


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab")
    assert stream.peek() == "a"
    assert stream.peek(1) == "b"
    assert stream.peek(2) == ""
    assert stream.next() == "a"
    assert not stream.end_of_file()
    stream.next()
    assert stream.end_of_file()


def test_character_stream_next_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(
        Exception, match="CharacterStreamError: Attempted to read past end of source"
    ):
        stream.next()


def test_token_repr_and_eq() -> None:
    t1 = Token("WORD", "42", 1, 2)
    t2 = Token("WORD", "42", 1, 2)
    t3 = Token("SUB", "-")

    assert repr(t1) == "Token(WORD, 42)"
    assert t1 == t2
    assert t1 != t3
    assert len({t1, t2, t3}) == 2


def test_is_word_char() -> None:
    assert is_word_char("a")
    assert is_word_char("_")
    assert is_word_char("é")
    assert not is_word_char("-")
    assert not is_word_char(" ")


@given(st.text(alphabet=st.characters(blacklist_categories=["Cs"]), max_size=100))  # type: ignore[misc]
def test_scanner_does_not_crash_on_random_input(text: str) -> None:
    try:
        tokens = tokenize(text)
    except MalformedExpression as e:
        assert "Unterminated quoted literal" in str(e)
        return
    assert not any(tok.is_eof() for tok in tokens)
