"""
Polynomial Grammar Parser

Parses textual descriptions of coefficient rings, variable lists, term orders,
polynomials, polynomial lists and module lists into the objects of
`polyparse.polyparse_poly`.

Grammar
-------
- Polynomial set:   coeffRing varList termOrder polyList
- Module set:       coeffRing varList termOrder moduleList
- Coefficient ring: Q | Rat | Z | Int | D | C | Complex | Quat | Oct
                    | Mod m | Mod[m] | IntFunc (vars)
                    | AN[ m? (var) ( minimalPolynomial ) ]
- Variable list:    ( a, b c, de )   or   { a, b }
- Term order:       L | IL | INVLEX | LEX | G | IG | IGRLEX | GRLEX | REVITDG | REVILEX
                    followed by an optional split index |i| or [i,j];
                    or W((w11,...,w1n),...,(wm1,...,wmn))
- Polynomial list:  ( p1, p2, ..., pn )
- Module list:      ( ( p11, ..., p1n ), ..., ( pm1, ..., pmn ) )
- Polynomial:       terms joined by + and -; a term is a product of factors joined by
                    * or juxtaposition; a factor is a coefficient literal, a variable,
                    a braced coefficient {...} or a parenthesized polynomial, each
                    optionally raised to ^n or **n.

Parser Behavior
---------------
- Whether a word is a coefficient literal, a declared variable or a symbol of a
  recursively defined coefficient ring is decided token by token: numeral-like words
  go to the coefficient ring, declared names become monomials, any other word is
  offered to the coefficient ring as a literal.
- All grammar functions take an immutable `ParseContext` (coefficient ring, variables,
  term order, polynomial ring). Algebraic extensions parse their minimal polynomial
  under a child context; the caller's context is never modified.
- The scanner has a single pushback slot.
- Any error aborts the whole parse.

Entry Points
------------
- `parse_exponent()`, `parse_variable_list()`, `parse_weight_list()`,
  `parse_weight_array()`, `parse_split_index()`, `parse_term_order()`,
  `parse_coefficient_ring()`, `parse_polynomial()`, `parse_polynomial_list()`,
  `parse_module_list()`, `parse_polynomial_set()`, `parse_module_set()`.
- String helpers: `variable_names_from_parenthesized_list()`,
  `variable_names_from_expression()`.

Raises
------
MalformedExpression, UnknownLiteral, InvalidRingDescriptor, LiteralParseFailure,
StreamFailure (see `polyparse.polyparse_errors`).
"""

from __future__ import annotations

import logging
import warnings
from enum import Enum
from typing import Any, NamedTuple, TextIO

from polyparse.polyparse_constants import (
    DEFAULT_MAX_DEPTH,
    coefficient_keywords,
    term_order_keywords,
)
from polyparse.polyparse_errors import (
    InvalidRingDescriptor,
    LiteralParseFailure,
    MalformedExpression,
    ParseAdvisory,
    PolynomialParseError,
    UnknownLiteral,
)
from polyparse.polyparse_lexer import CharacterStream, Scanner, Token
from polyparse.polyparse_poly import (
    ModuleList,
    Polynomial,
    PolynomialList,
    PolynomialRing,
    TermOrder,
)
from polyparse.rings.algebraic_ring import AlgebraicNumberRing
from polyparse.rings.hypercomplex_rings import ComplexRing, OctonionRing, QuaternionRing
from polyparse.rings.numeric_rings import (
    DecimalRing,
    IntegerRing,
    ModIntegerRing,
    RationalRing,
    modular_ring,
)

logger = logging.getLogger(__name__)

# tokens that end a polynomial and are consumed by it
_CLOSERS = frozenset({"RPAREN", "COMMA"})
# tokens that end the term being built
_TERM_BOUNDARIES = frozenset({"SUB", "PLUS"})
# operator tokens that can never start a factor and are not re-read by the term loop
_STRAY = frozenset({"LBRACK", "RBRACK", "POW", "BAR", "CHAR"})


class CoefficientKind(Enum):
    RATIONAL = "RATIONAL"
    INTEGER = "INTEGER"
    MODULAR_INTEGER = "MODULAR_INTEGER"
    COMPLEX = "COMPLEX"
    QUATERNION = "QUATERNION"
    OCTONION = "OCTONION"
    DECIMAL = "DECIMAL"
    FUNCTION_COEFFICIENT = "FUNCTION_COEFFICIENT"
    ALGEBRAIC_EXTENSION = "ALGEBRAIC_EXTENSION"


def coefficient_kind(ring: Any) -> CoefficientKind:
    """Reports the kind tag of a coefficient-ring handle."""
    if isinstance(ring, ModIntegerRing):
        return CoefficientKind.MODULAR_INTEGER
    if isinstance(ring, PolynomialRing):
        return CoefficientKind.FUNCTION_COEFFICIENT
    if isinstance(ring, AlgebraicNumberRing):
        return CoefficientKind.ALGEBRAIC_EXTENSION
    kinds = {
        RationalRing: CoefficientKind.RATIONAL,
        IntegerRing: CoefficientKind.INTEGER,
        DecimalRing: CoefficientKind.DECIMAL,
        ComplexRing: CoefficientKind.COMPLEX,
        QuaternionRing: CoefficientKind.QUATERNION,
        OctonionRing: CoefficientKind.OCTONION,
    }
    for cls, kind in kinds.items():
        if isinstance(ring, cls):
            return kind
    raise InvalidRingDescriptor(f"Unsupported coefficient ring {ring!r}")


class RingSelection(NamedTuple):
    """A coefficient ring together with the kind tag that selected it."""

    kind: CoefficientKind
    ring: Any


class ParseContext(NamedTuple):
    """Immutable parse state threaded through every grammar function.

    Attributes:
        ring: Active coefficient-ring handle.
        kind: Kind tag of `ring`.
        variables: Declared variable names.
        order: Active term order.
        poly_ring: Polynomial ring over `ring` in `variables` with `order`.
        depth: Current grammar nesting depth.
    """

    ring: Any
    kind: CoefficientKind
    variables: tuple[str, ...]
    order: TermOrder
    poly_ring: PolynomialRing
    depth: int = 0

    @classmethod
    def from_ring(cls, poly_ring: PolynomialRing) -> "ParseContext":
        return cls(
            ring=poly_ring.coefficients,
            kind=coefficient_kind(poly_ring.coefficients),
            variables=poly_ring.variables,
            order=poly_ring.order,
            poly_ring=poly_ring,
        )

    @classmethod
    def initial(cls) -> "ParseContext":
        return cls.from_ring(PolynomialRing(RationalRing(), (), TermOrder()))

    def nested(self) -> "ParseContext":
        return self._replace(depth=self.depth + 1)


class Symbol(NamedTuple):
    """Outcome of resolving a bare word: a variable index, a ring element, or neither."""

    index: int | None = None
    value: Any = None

    @property
    def found(self) -> bool:
        return self.index is not None or self.value is not None


def _starts_with_digit(token: Token) -> bool:
    return token.is_word() and token.value[:1].isdigit()


def _integer(
    token: Token, what: str, error: type[PolynomialParseError] = MalformedExpression
) -> int:
    try:
        return int(token.value)
    except ValueError:
        raise error(f"Invalid {what} {token.value!r}", token.line, token.col) from None


class Parser:
    """
    Recursive-descent parser for polynomial expressions and their rings.

    Attributes
    ----------
    scanner : Scanner
        Token source with a single pushback slot.
    context : ParseContext
        Context used by entry points called without an explicit context. Set by the
        constructor and replaced by `parse_polynomial_set()` / `parse_module_set()`.
    max_depth : int
        Maximum grammar nesting depth before `MalformedExpression` is raised.
    """

    def __init__(
        self,
        source: str | TextIO | Scanner,
        ring: PolynomialRing | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if isinstance(source, Scanner):
            self.scanner = source
        else:
            self.scanner = Scanner(CharacterStream(source))
        self.context = (
            ParseContext.from_ring(ring) if ring is not None else ParseContext.initial()
        )
        self.max_depth = max_depth

    def next(self) -> Token:
        tok = self.scanner.next_token()
        logger.debug("token %r", tok)
        return tok

    def push_back(self, tok: Token) -> None:
        self.scanner.push_back(tok)

    def _enter(self, ctx: ParseContext, tok: Token | None = None) -> ParseContext:
        child = ctx.nested()
        if child.depth > self.max_depth:
            line, col = (tok.line, tok.col) if tok is not None else (None, None)
            raise MalformedExpression(
                f"Nesting deeper than {self.max_depth} levels", line, col
            )
        return child

    # ------------------------------------------------------------------
    # exponents, variable lists, weights, split indices, term orders

    def parse_exponent(self) -> int:
        """Parse an optional `^n` or `**n` suffix; 1 if absent.

        A `^` or `**` not followed by a numeral is dropped and the lookahead token
        restored, so the following factor is multiplied in by juxtaposition.
        """
        tok = self.next()
        if tok.type == "POW":
            tok = self.next()
            exponent = self._exponent_value(tok)
            if exponent is not None:
                return exponent
        elif tok.type == "MULT":
            tok = self.next()
            if tok.type == "MULT":
                tok = self.next()
                exponent = self._exponent_value(tok)
                if exponent is not None:
                    return exponent
        self.push_back(tok)
        return 1

    def _exponent_value(self, tok: Token) -> int | None:
        if tok.type == "SUB":
            raise MalformedExpression(
                "Negative exponents are not supported", tok.line, tok.col
            )
        if not _starts_with_digit(tok):
            return None
        exponent = _integer(tok, "exponent")
        logger.debug("exponent %d", exponent)
        return exponent

    def parse_variable_list(self) -> tuple[str, ...]:
        """Parse `(a, b c)` or `{a, b}`; an absent list is empty."""
        tok = self.next()
        names: list[str] = []
        if tok.type not in ("LPAREN", "LBRACE"):
            self.push_back(tok)
            return ()
        tok = self.next()
        while not tok.is_eof() and tok.type not in ("RPAREN", "RBRACE"):
            if tok.is_word():
                names.append(tok.value)
            tok = self.next()
        logger.debug("variable list %s", names)
        return tuple(names)

    def parse_weight_list(self) -> tuple[int, ...]:
        """Parse `(w1, ..., wn)`; an absent list is empty."""
        tok = self.next()
        if tok.type != "LPAREN":
            self.push_back(tok)
            return ()
        return self._weight_row(self.next())

    def _weight_row(self, tok: Token) -> tuple[int, ...]:
        weights: list[int] = []
        while not tok.is_eof() and tok.type != "RPAREN":
            if _starts_with_digit(tok):
                weights.append(_integer(tok, "weight"))
            tok = self.next()
        return tuple(weights)

    def parse_weight_array(self) -> tuple[tuple[int, ...], ...]:
        """Parse `((w11, ...), ..., (wm1, ...))` or a single row `(w1, ..., wn)`."""
        tok = self.next()
        if tok.type != "LPAREN":
            self.push_back(tok)
            return ()
        rows: list[tuple[int, ...]] = []
        tok = self.next()
        while not tok.is_eof() and tok.type != "RPAREN":
            if tok.type == "LPAREN":
                self.push_back(tok)
                rows.append(self.parse_weight_list())
            elif _starts_with_digit(tok):
                rows.append(self._weight_row(tok))
                break
            tok = self.next()
        logger.debug("weight array %s", rows)
        return tuple(rows)

    def parse_split_index(self) -> int | tuple[int, int]:
        """Parse `|i|` (one split point) or `[i,j]` (two); -1 if unspecified."""
        tok = self.next()
        if tok.type == "BAR":
            tok = self.next()
            if not _starts_with_digit(tok):
                self.push_back(tok)
                return -1
            split = _integer(tok, "split index")
            tok = self.next()
            if tok.type != "BAR":
                self.push_back(tok)
            return split
        if tok.type == "LBRACK":
            tok = self.next()
            if not _starts_with_digit(tok):
                self.push_back(tok)
                return -1
            first = _integer(tok, "split index")
            tok = self.next()
            if tok.type == "RBRACK":
                return first
            if tok.type != "COMMA":
                self.push_back(tok)
                return first
            tok = self.next()
            if not _starts_with_digit(tok):
                self.push_back(tok)
                return first
            second = _integer(tok, "split index")
            tok = self.next()
            if tok.type != "RBRACK":
                self.push_back(tok)
            return (first, second)
        self.push_back(tok)
        return -1

    def parse_term_order(self, nvars: int | None = None) -> TermOrder:
        """Parse a term-order keyword and optional split index.

        Args:
            nvars: Variable count for block orders; defaults to the context's.
        """
        if nvars is None:
            nvars = len(self.context.variables)
        kind = TermOrder().kind
        tok = self.next()
        keyword = term_order_keywords.get(tok.value.lower()) if tok.is_word() else None
        if keyword == "WEIGHT":
            return TermOrder.weighted(self.parse_weight_array())
        if keyword is not None:
            kind = keyword
        else:
            self.push_back(tok)
        split = self.parse_split_index()
        if isinstance(split, tuple):
            if split[0] <= 0:
                return TermOrder(kind)
            return TermOrder.block(kind, nvars, split)
        if split <= 0:
            return TermOrder(kind)
        return TermOrder.block(kind, nvars, split)

    # ------------------------------------------------------------------
    # coefficient rings

    def parse_coefficient_ring(self, ctx: ParseContext | None = None) -> RingSelection:
        """Parse a coefficient-ring keyword; defaults to the rationals."""
        ctx = ctx or self.context
        tok = self.next()
        keyword = coefficient_keywords.get(tok.value.lower()) if tok.is_word() else None
        if keyword is None:
            self.push_back(tok)
            return RingSelection(CoefficientKind.RATIONAL, RationalRing())
        if keyword == "RATIONAL":
            return RingSelection(CoefficientKind.RATIONAL, RationalRing())
        if keyword == "DECIMAL":
            return RingSelection(CoefficientKind.DECIMAL, DecimalRing())
        if keyword == "INTEGER":
            return RingSelection(CoefficientKind.INTEGER, IntegerRing())
        if keyword == "COMPLEX":
            return RingSelection(CoefficientKind.COMPLEX, ComplexRing())
        if keyword == "QUATERNION":
            self._advise("quaternion")
            return RingSelection(CoefficientKind.QUATERNION, QuaternionRing())
        if keyword == "OCTONION":
            self._advise("octonion")
            return RingSelection(CoefficientKind.OCTONION, OctonionRing())
        if keyword == "MODULAR_INTEGER":
            return RingSelection(
                CoefficientKind.MODULAR_INTEGER, self._parse_modulus(tok)
            )
        if keyword == "UNSUPPORTED":
            raise InvalidRingDescriptor(
                f"{tok.value} coefficients can no longer be read", tok.line, tok.col
            )
        if keyword == "FUNCTION_COEFFICIENT":
            variables = self.parse_variable_list()
            ring = PolynomialRing(RationalRing(), variables, TermOrder("INVLEX"))
            return RingSelection(CoefficientKind.FUNCTION_COEFFICIENT, ring)
        return RingSelection(
            CoefficientKind.ALGEBRAIC_EXTENSION, self._parse_extension(ctx, tok)
        )

    def _advise(self, name: str) -> None:
        message = (
            f"parse of {name} coefficients may fail for negative components (use ~ for -)"
        )
        logger.warning(message)
        warnings.warn(message, ParseAdvisory, stacklevel=3)

    def _parse_modulus(self, keyword_tok: Token) -> ModIntegerRing:
        tok = self.next()
        bracketed = tok.type == "LBRACK"
        if bracketed:
            tok = self.next()
        if not _starts_with_digit(tok):
            raise InvalidRingDescriptor(
                "Mod requires a numeric modulus", keyword_tok.line, keyword_tok.col
            )
        modulus = _integer(tok, "modulus", InvalidRingDescriptor)
        if bracketed:
            tok = self.next()
            if tok.type != "RBRACK":
                self.push_back(tok)
        return modular_ring(modulus)

    def _parse_extension(self, ctx: ParseContext, keyword_tok: Token) -> AlgebraicNumberRing:
        """Parse `[ m? (var) ( minimalPolynomial ) ]` after the `AN` keyword."""
        tok = self.next()
        if tok.type != "LBRACK":
            raise InvalidRingDescriptor(
                "AN must be followed by '['", keyword_tok.line, keyword_tok.col
            )
        tok = self.next()
        base: Any
        if _starts_with_digit(tok):
            base = modular_ring(_integer(tok, "modulus", InvalidRingDescriptor))
        else:
            base = RationalRing()
            self.push_back(tok)
        variables = self.parse_variable_list()
        if len(variables) != 1:
            raise InvalidRingDescriptor(
                f"AlgebraicNumber only for univariate polynomials {list(variables)}",
                keyword_tok.line,
                keyword_tok.col,
            )
        poly_ring = PolynomialRing(base, variables, TermOrder())
        inner = self._enter(ctx, keyword_tok)._replace(
            ring=base,
            kind=coefficient_kind(base),
            variables=variables,
            order=poly_ring.order,
            poly_ring=poly_ring,
        )
        logger.debug("extension ring %r", poly_ring)
        tok = self.next()
        if tok.type == "LPAREN":
            modulus, closer = self._parse_polynomial(inner)
            tok = self.next()
            if tok.type != "RPAREN":
                self.push_back(tok)
        else:
            self.push_back(tok)
            modulus, closer = self._parse_polynomial(
                inner, closers=_CLOSERS | {"RBRACK"}
            )
            if closer.type == "RBRACK":
                return AlgebraicNumberRing(base, variables[0], modulus)
        logger.debug("minimal polynomial %s", modulus)
        tok = self.next()
        if tok.type != "RBRACK":
            self.push_back(tok)
        return AlgebraicNumberRing(base, variables[0], modulus)

    # ------------------------------------------------------------------
    # polynomials

    def parse_polynomial(self, ctx: ParseContext | None = None) -> Polynomial:
        """Parse one polynomial; stops after a consumed `)` or `,`, or at end of stream."""
        polynomial, _ = self._parse_polynomial(ctx or self.context)
        return polynomial

    def parse_complete_polynomial(self, ctx: ParseContext | None = None) -> Polynomial:
        """Parse one polynomial that must extend to the end of the stream."""
        polynomial, closer = self._parse_polynomial(ctx or self.context)
        if not closer.is_eof():
            raise MalformedExpression(
                f"Unexpected '{closer.value}' after polynomial", closer.line, closer.col
            )
        return polynomial

    def _parse_polynomial(
        self, ctx: ParseContext, closers: frozenset[str] = _CLOSERS
    ) -> tuple[Polynomial, Token]:
        """Term loop of the polynomial grammar.

        Returns the polynomial and the token that ended it (a consumed closer or EOF).
        """
        pfac = ctx.poly_ring
        a = pfac.zero()
        one = pfac.one()
        b = one
        started = False
        while True:
            tok = self.next()
            if tok.is_eof():
                break
            if tok.type in closers:
                return a, tok
            if tok.type == "SUB":
                b = -b
                tok = self.next()
            elif tok.type in ("PLUS", "MULT"):
                tok = self.next()
            if tok.is_eof():
                break
            b, tok, consumed = self._parse_factor(ctx, tok, b)
            started = started or consumed
            if tok.is_eof():
                break
            self.push_back(tok)
            if tok.type in _TERM_BOUNDARIES or tok.type in closers:
                if started:
                    logger.debug("term %s", b)
                    a = a + b
                    b = one
                    started = False
        if started:
            a = a + b
        logger.debug("polynomial %s", a)
        return a, tok

    def _parse_factor(
        self, ctx: ParseContext, tok: Token, b: Polynomial
    ) -> tuple[Polynomial, Token, bool]:
        """Multiply the factor starting at `tok` into `b`.

        Returns the updated term, the lookahead token following the factor, and
        whether a factor was consumed.
        """
        if tok.type == "RBRACE":
            raise MalformedExpression(f"Mismatched braces after {b}", tok.line, tok.col)
        if tok.type == "LBRACE":
            literal = self._read_braced(tok)
            value = self._parse_literal(ctx, literal, tok) ** self.parse_exponent()
            return b.scale(value), self.next(), True
        if tok.type == "STRING":
            value = self._parse_literal(ctx, tok.value, tok) ** self.parse_exponent()
            return b.scale(value), self.next(), True
        if tok.type == "LPAREN":
            factor, _ = self._parse_polynomial(self._enter(ctx, tok))
            factor = factor ** self.parse_exponent()
            logger.debug("factor %s", factor)
            return b * factor, self.next(), True
        if tok.is_word():
            if tok.value[0].isdigit() or tok.value[0] in "/.~":
                b, tok = self._parse_numeral(ctx, tok, b)
                return b, tok, True
            return self._parse_symbol(ctx, tok, b), self.next(), True
        if tok.type in _STRAY:
            raise MalformedExpression(f"Unexpected '{tok.value}'", tok.line, tok.col)
        # +, -, *, ) and , are left for the term loop to re-read
        return b, tok, False

    def _read_braced(self, open_tok: Token) -> str:
        """Concatenate the tokens of a forced-coefficient block up to its matching `}`."""
        text = ""
        level = 0
        while True:
            tok = self.next()
            if tok.is_eof():
                raise MalformedExpression(
                    "Mismatched braces: '{' never closed", open_tok.line, open_tok.col
                )
            if tok.type == "LBRACE":
                level += 1
            elif tok.type == "RBRACE":
                level -= 1
                if level < 0:
                    return text
            if tok.text is not None:
                if text and text[-1] != ".":
                    text += " "
                text += tok.text
            else:
                text += tok.value

    def _parse_literal(self, ctx: ParseContext, literal: str, tok: Token) -> Any:
        try:
            value = ctx.ring.parse(literal)
        except LiteralParseFailure as exc:
            raise LiteralParseFailure(
                f"not a number {literal!r}", tok.line, tok.col
            ) from exc
        logger.debug("coefficient %s", value)
        return value

    def _try_literal(self, ctx: ParseContext, literal: str) -> Any:
        try:
            return ctx.ring.parse(literal)
        except LiteralParseFailure:
            return None

    def _parse_numeral(
        self, ctx: ParseContext, tok: Token, b: Polynomial
    ) -> tuple[Polynomial, Token]:
        """Coefficient literal starting with a digit, `/`, `.` or `~`."""
        text = tok.value
        literal = text
        if len(text) > 1 and text[1].isdigit():
            if text[0] == "/":
                literal = "1" + literal
            elif text[0] == ".":
                literal = "0" + literal
        if text.endswith("i") and ctx.kind is CoefficientKind.COMPLEX:
            literal = self._complex_tail(literal)
        value = self._try_literal(ctx, literal)
        if value is None:
            return self._split_numeral(ctx, tok, literal, b)
        value = value ** self.parse_exponent()
        logger.debug("coefficient^e %s", value)
        return b.scale(value), self.next()

    def _complex_tail(self, literal: str) -> str:
        """Append the imaginary part of `re i im` when it follows as separate tokens."""
        tok = self.next()
        if _starts_with_digit(tok):
            return literal + tok.value
        if tok.type != "SUB":
            self.push_back(tok)
            return literal
        literal += "-"
        tok = self.next()
        if _starts_with_digit(tok):
            return literal + tok.value
        self.push_back(tok)
        return literal

    def _split_numeral(
        self, ctx: ParseContext, tok: Token, literal: str, b: Polynomial
    ) -> tuple[Polynomial, Token]:
        """Read a word like `3x` as the coefficient `3` times the declared variable `x`."""
        for cut in range(len(literal) - 1, 0, -1):
            name = literal[cut:]
            index = ctx.poly_ring.index_of(name)
            if index is None or not name[0].isalpha():
                continue
            value = self._try_literal(ctx, literal[:cut])
            if value is None:
                continue
            b = b.scale(value) * ctx.poly_ring.monomial(index, self.parse_exponent())
            return b, self.next()
        raise LiteralParseFailure(f"not a number {literal!r}", tok.line, tok.col)

    def resolve_symbol(self, ctx: ParseContext, name: str) -> Symbol:
        """Look a bare word up as a declared variable, then as a ring literal."""
        index = ctx.poly_ring.index_of(name)
        if index is not None:
            return Symbol(index=index)
        return Symbol(value=self._try_literal(ctx, name))

    def _parse_symbol(self, ctx: ParseContext, tok: Token, b: Polynomial) -> Polynomial:
        symbol = self.resolve_symbol(ctx, tok.value)
        if not symbol.found:
            raise UnknownLiteral(
                f"recursively unknown variable {tok.value!r}", tok.line, tok.col
            )
        exponent = self.parse_exponent()
        if symbol.index is not None:
            return b * ctx.poly_ring.monomial(symbol.index, exponent)
        logger.debug("symbol %s read as coefficient %s", tok.value, symbol.value)
        return b.scale(symbol.value**exponent)

    # ------------------------------------------------------------------
    # lists and sets

    def parse_polynomial_list(self, ctx: ParseContext | None = None) -> list[Polynomial]:
        """Parse `( p1, p2, ..., pn )`; a missing `(` or `()` gives an empty list."""
        ctx = ctx or self.context
        polynomials: list[Polynomial] = []
        tok = self.next()
        if tok.type != "LPAREN":
            self.push_back(tok)
            return polynomials
        logger.debug("polynomial list")
        tok = self.next()
        if tok.type == "RPAREN":
            return polynomials
        self.push_back(tok)
        while True:
            polynomial, closer = self._parse_polynomial(ctx)
            logger.info("next pol = %s", polynomial)
            polynomials.append(polynomial)
            if closer.type != "COMMA":
                break
        return polynomials

    def parse_module_list(self, ctx: ParseContext | None = None) -> list[list[Polynomial]]:
        """Parse `( ( p11, ..., p1n ), ..., ( pm1, ..., pmn ) )`."""
        ctx = ctx or self.context
        rows: list[list[Polynomial]] = []
        tok = self.next()
        if tok.type != "LPAREN":
            self.push_back(tok)
            return rows
        logger.debug("module list")
        while True:
            tok = self.next()
            if tok.type == "COMMA":
                continue
            if tok.type == "RPAREN" or tok.is_eof():
                break
            if tok.type != "LPAREN":
                raise MalformedExpression(
                    f"Expected '(' to open a module row, got '{tok.value}'",
                    tok.line,
                    tok.col,
                )
            self.push_back(tok)
            row = self.parse_polynomial_list(ctx)
            logger.info("next vect = %s", row)
            rows.append(row)
        return rows

    def _parse_ring_header(self) -> ParseContext:
        selection = self.parse_coefficient_ring()
        logger.info("coeff = %s", type(selection.ring).__name__)
        variables = self.parse_variable_list()
        logger.info("vars = %s", list(variables))
        order = self.parse_term_order(len(variables))
        logger.info("tord = %r", order)
        poly_ring = PolynomialRing(selection.ring, variables, order)
        self.context = ParseContext(
            selection.ring, selection.kind, variables, order, poly_ring
        )
        return self.context

    def parse_polynomial_set(self) -> PolynomialList:
        """Parse `coeffRing varList termOrder polyList`."""
        ctx = self._parse_ring_header()
        polynomials = self.parse_polynomial_list(ctx)
        logger.info("s = %s", [str(p) for p in polynomials])
        return PolynomialList(ctx.poly_ring, polynomials)

    def parse_module_set(self) -> ModuleList:
        """Parse `coeffRing varList termOrder moduleList`."""
        ctx = self._parse_ring_header()
        rows = self.parse_module_list(ctx)
        logger.info("m = %s", [[str(p) for p in row] for row in rows])
        return ModuleList(ctx.poly_ring, rows)


def variable_names_from_parenthesized_list(text: str) -> tuple[str, ...]:
    """Names in `(n1, ..., nk)` or `n1 ... nk`; the parentheses are optional."""
    stripped = text.strip()
    if not stripped:
        return ()
    if stripped.startswith("("):
        stripped = stripped[1:]
    if stripped.endswith(")"):
        stripped = stripped[:-1]
    return tuple(stripped.replace(",", " ").split())


_EXPRESSION_PUNCTUATION = str.maketrans({ch: " " for ch in ",+-*/(){}[]^"})


def variable_names_from_expression(text: str) -> tuple[str, ...]:
    """Sorted, de-duplicated identifiers occurring in a polynomial expression."""
    names = set()
    for word in text.translate(_EXPRESSION_PUNCTUATION).split():
        i = 0
        while i < len(word) - 1 and word[i].isdigit():
            i += 1
        word = word[i:]
        if word and word[0].isascii() and word[0].isalpha():
            names.add(word)
    return tuple(sorted(names))


__all__ = [
    "CoefficientKind",
    "ParseContext",
    "Parser",
    "RingSelection",
    "Symbol",
    "coefficient_kind",
    "variable_names_from_expression",
    "variable_names_from_parenthesized_list",
]
