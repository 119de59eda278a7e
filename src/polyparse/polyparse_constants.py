"""
Shared tables and limits for the polyparse scanner and grammar.

Contents:
    token_hashmap: Operator characters recognised by the scanner and their token types.
    word_punctuation: Non-alphanumeric characters that belong to word tokens.
    coefficient_keywords: Coefficient-ring keywords (lower case) and the ring kind they select.
    term_order_keywords: Term-order keywords (lower case) and the order kind they select.
    MOD_LONG_LIMIT: Moduli below this bound select the word-sized modular ring.
    DEFAULT_MAX_DEPTH: Default cap on grammar recursion (parentheses, braces, extensions).
"""

token_hashmap: dict[str, str] = {
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACK",
    "]": "RBRACK",
    ",": "COMMA",
    "+": "PLUS",
    "-": "SUB",
    "*": "MULT",
    "^": "POW",
    "|": "BAR",
}

# "/" for rationals, "." for decimals, "~" for sign-free negative literals, "_" for x_1
word_punctuation = frozenset("_/.~")

COMMENT_CHAR = "#"
QUOTE_CHARS = ('"', "'")

# First code point of the high range treated as word characters (Latin-1 letters and up).
HIGH_WORD_CODEPOINT = 160

coefficient_keywords: dict[str, str] = {
    "q": "RATIONAL",
    "rat": "RATIONAL",
    "d": "DECIMAL",
    "z": "INTEGER",
    "int": "INTEGER",
    "c": "COMPLEX",
    "complex": "COMPLEX",
    "quat": "QUATERNION",
    "oct": "OCTONION",
    "mod": "MODULAR_INTEGER",
    "ratfunc": "UNSUPPORTED",
    "modfunc": "UNSUPPORTED",
    "intfunc": "FUNCTION_COEFFICIENT",
    "an": "ALGEBRAIC_EXTENSION",
}

term_order_keywords: dict[str, str] = {
    "l": "INVLEX",
    "il": "INVLEX",
    "invlex": "INVLEX",
    "lex": "LEX",
    "g": "IGRLEX",
    "ig": "IGRLEX",
    "igrlex": "IGRLEX",
    "grlex": "GRLEX",
    "revitdg": "REVITDG",
    "revilex": "REVILEX",
    "w": "WEIGHT",
}

DEFAULT_TERM_ORDER = "IGRLEX"

MOD_LONG_LIMIT = 2**63 - 1

DEFAULT_MAX_DEPTH = 256

__all__ = [
    "COMMENT_CHAR",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_TERM_ORDER",
    "HIGH_WORD_CODEPOINT",
    "MOD_LONG_LIMIT",
    "QUOTE_CHARS",
    "coefficient_keywords",
    "term_order_keywords",
    "token_hashmap",
    "word_punctuation",
]
