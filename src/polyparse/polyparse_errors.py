"""
Error taxonomy for the polyparse grammar.

Every error aborts the enclosing top-level parse call; there is no partial
result and no resynchronisation. All errors derive from `PolynomialParseError`,
itself a `SyntaxError`, so callers may catch either.

Classes:
    PolynomialParseError: Base class, carries optional line/column of the offending token.
    MalformedExpression: Structurally invalid input (mismatched braces, bad operator, nesting too deep).
    UnknownLiteral: A bare symbol that is neither a declared variable nor a ring literal.
    InvalidRingDescriptor: Unsupported or malformed coefficient ring or term order.
    LiteralParseFailure: The active coefficient ring rejected a literal substring.
    StreamFailure: The character source reported a read failure.
    ParseAdvisory: Warning category for non-fatal advisories.
"""


class PolynomialParseError(SyntaxError):
    """Base class for all polyparse errors.

    Attributes:
        line (int | None): 1-based line of the offending token, if known.
        col (int | None): 1-based column of the offending token, if known.
    """

    def __init__(self, message: str, line: int | None = None, col: int | None = None):
        if line is not None:
            message = f"{message} at line {line}, col {col}"
        super().__init__(message)
        self.line = line
        self.col = col


class MalformedExpression(PolynomialParseError):
    pass


class UnknownLiteral(PolynomialParseError):
    pass


class InvalidRingDescriptor(PolynomialParseError):
    pass


class LiteralParseFailure(PolynomialParseError):
    pass


class StreamFailure(PolynomialParseError):
    pass


class ParseAdvisory(UserWarning):
    """Non-fatal condition reported while parsing (e.g. quaternion sign caveat)."""


__all__ = [
    "InvalidRingDescriptor",
    "LiteralParseFailure",
    "MalformedExpression",
    "ParseAdvisory",
    "PolynomialParseError",
    "StreamFailure",
    "UnknownLiteral",
]
