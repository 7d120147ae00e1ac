import pytest

from minish.tokenizer import Token, TokenType, char_type, tokenize, trim_quotes


def _pairs(tokens):
    return [(t.data, t.type) for t in tokens]


@pytest.mark.parametrize(
    "char, expected",
    [
        ("|", TokenType.PIPE),
        ("&", TokenType.AMP),
        (";", TokenType.SEMICOLON),
        ("<", TokenType.LESS),
        (">", TokenType.GREAT),
        ("(", TokenType.OPEN_PAREN),
        (")", TokenType.CLOSE_PAREN),
        ("'", TokenType.QUOTE),
        ('"', TokenType.DQUOTE),
        ("\\", TokenType.ESCAPE),
        (" ", TokenType.SPACE),
        ("\t", TokenType.TAB),
        ("", TokenType.NULL),
        ("a", TokenType.GENERAL),
        ("$", TokenType.GENERAL),
        ("?", TokenType.GENERAL),
    ],
)
def test_char_type(char, expected):
    assert char_type(char) == expected


def test_operator_types_are_character_codes():
    assert char_type("|") == ord("|")
    assert char_type(";") == ord(";")
    assert tokenize("x")[0].type == -1


def test_empty_line_has_no_tokens():
    assert tokenize("") == []


def test_simple_words():
    assert _pairs(tokenize("echo hello")) == [
        ("echo", TokenType.WORD),
        ("hello", TokenType.WORD),
    ]


@pytest.mark.parametrize("words", [["ls"], ["a", "b", "c"], ["cat", "-e", "file.txt"]])
def test_words_round_trip(words):
    tokens = tokenize("  ".join(words))
    assert [t.data for t in tokens] == words
    assert all(t.type == TokenType.WORD for t in tokens)


def test_operators_split_words():
    assert _pairs(tokenize("ls|wc")) == [
        ("ls", TokenType.WORD),
        ("|", TokenType.PIPE),
        ("wc", TokenType.WORD),
    ]


def test_double_operator_is_two_tokens():
    datas = [t.data for t in tokenize("a && b")]
    assert datas[:4] == ["a", "&", "&", "b"]


def test_trailing_space_leaves_empty_null_token():
    tokens = tokenize("echo ")
    assert tokens[-1] == Token("", TokenType.NULL)
    assert tokens[0] == Token("echo", TokenType.WORD)


def test_trailing_operator_leaves_empty_null_token():
    tokens = tokenize("ls >")
    assert _pairs(tokens) == [
        ("ls", TokenType.WORD),
        (">", TokenType.GREAT),
        ("", TokenType.NULL),
    ]


def test_quotes_stay_in_word():
    assert [t.data for t in tokenize("echo 'a b' \"c | d\"")] == [
        "echo",
        "'a b'",
        '"c | d"',
    ]


def test_unterminated_quote_runs_to_end():
    tokens = tokenize("echo 'a b")
    assert tokens[-1] == Token("'a b", TokenType.WORD)


def test_curly_section_stays_in_word():
    assert [t.data for t in tokenize("${A B}")] == ["${A B}"]


def test_escape_takes_next_character():
    assert [t.data for t in tokenize("a\\ b")] == ["a b"]
    assert [t.data for t in tokenize("\\|x")] == ["|x"]


def test_trailing_backslash_gives_empty_word():
    tokens = tokenize("ab \\")
    assert tokens[-1] == Token("", TokenType.WORD)


def test_newline_is_dropped():
    assert [t.data for t in tokenize("a\nb")] == ["ab"]


def test_nul_ends_line():
    assert tokenize("\0abc") == []


@pytest.mark.parametrize(
    "text, expected",
    [
        ("'a b'", "a b"),
        ('"a b"', "a b"),
        ("\"it's\"", "it's"),
        ("x", "x"),
        ("'", "'"),
        ("plain", "plain"),
    ],
)
def test_trim_quotes(text, expected):
    assert trim_quotes(text) == expected


def test_trim_quotes_unterminated_drops_opening():
    assert trim_quotes("'abc") == "abc"