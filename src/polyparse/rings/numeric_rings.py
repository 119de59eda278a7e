"""
Scalar coefficient rings: rationals, integers, decimals and modular integers.

Every ring exposes the handle interface used by the polynomial parser:

    parse(text) -> element      raises LiteralParseFailure on malformed text
    zero() / one()              additive and multiplicative identities
    is_zero(element)
    format(element) -> str      text that parse() accepts back
    is_simple(element) -> bool  True if the formatted element may appear unbraced

Literal conventions shared by all rings here:
    - whitespace anywhere in the literal is ignored
    - `~` is accepted as a minus sign (`~3` is -3), for contexts where `-` is an operator

Classes:
    RationalRing: elements are `fractions.Fraction`.
    IntegerRing: elements are `int`.
    DecimalRing: elements are `decimal.Decimal`.
    ModInteger: element of Z/mZ.
    ModIntegerRing: Z/mZ for arbitrary-precision moduli.
    ModLongRing: Z/mZ for moduli below MOD_LONG_LIMIT.

Functions:
    modular_ring(modulus): Picks ModLongRing or ModIntegerRing for the modulus.
"""

from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any

from polyparse.polyparse_constants import MOD_LONG_LIMIT
from polyparse.polyparse_errors import InvalidRingDescriptor, LiteralParseFailure


def clean_literal(text: str) -> str:
    """Removes whitespace and maps `~` to `-`."""
    return "".join(text.split()).replace("~", "-")


def parse_fraction(text: str) -> Fraction:
    """Parses `p`, `p/q` or a decimal literal into a Fraction.

    Raises:
        LiteralParseFailure: If the text is not a rational literal.
    """
    literal = clean_literal(text)
    try:
        return Fraction(literal)
    except (ValueError, ZeroDivisionError) as exc:
        raise LiteralParseFailure(f"not a rational number: {text!r}") from exc


def format_fraction(value: Fraction) -> str:
    return str(value)


class RationalRing:
    """The field of rational numbers."""

    name = "Q"

    def parse(self, text: str) -> Fraction:
        return parse_fraction(text)

    def zero(self) -> Fraction:
        return Fraction(0)

    def one(self) -> Fraction:
        return Fraction(1)

    def is_zero(self, element: Fraction) -> bool:
        return element == 0

    def inverse(self, element: Fraction) -> Fraction:
        if element == 0:
            raise ZeroDivisionError("zero has no inverse")
        return 1 / element

    def format(self, element: Fraction) -> str:
        return format_fraction(element)

    def is_simple(self, element: Fraction) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return "RationalRing()"


class IntegerRing:
    """The ring of integers."""

    name = "Z"

    def parse(self, text: str) -> int:
        literal = clean_literal(text)
        try:
            return int(literal)
        except ValueError as exc:
            raise LiteralParseFailure(f"not an integer: {text!r}") from exc

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def is_zero(self, element: int) -> bool:
        return element == 0

    def format(self, element: int) -> str:
        return str(element)

    def is_simple(self, element: int) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return "IntegerRing()"


class DecimalRing:
    """Arbitrary-precision decimal numbers (finite values only)."""

    name = "D"

    def parse(self, text: str) -> Decimal:
        literal = clean_literal(text)
        try:
            if "/" in literal:
                num, den = literal.split("/", 1)
                value = Decimal(num) / Decimal(den)
            else:
                value = Decimal(literal)
        except (InvalidOperation, ArithmeticError, ValueError) as exc:
            raise LiteralParseFailure(f"not a decimal number: {text!r}") from exc
        if not value.is_finite():
            raise LiteralParseFailure(f"not a finite decimal number: {text!r}")
        return value

    def zero(self) -> Decimal:
        return Decimal(0)

    def one(self) -> Decimal:
        return Decimal(1)

    def is_zero(self, element: Decimal) -> bool:
        return element == 0

    def format(self, element: Decimal) -> str:
        # positional notation only: "1E+5" would scan as a word, an operator and a word
        return format(element, "f")

    def is_simple(self, element: Decimal) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return "DecimalRing()"


class ModInteger:
    """An element of Z/mZ, stored as its least non-negative residue."""

    __slots__ = ("value", "modulus")

    def __init__(self, value: int, modulus: int):
        self.value = value % modulus
        self.modulus = modulus

    def _coerce(self, other: Any) -> "ModInteger":
        if isinstance(other, ModInteger):
            if other.modulus != self.modulus:
                raise ValueError(
                    f"modulus mismatch: {self.modulus} vs {other.modulus}"
                )
            return other
        if isinstance(other, int):
            return ModInteger(other, self.modulus)
        return NotImplemented

    def __add__(self, other: Any) -> "ModInteger":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return ModInteger(self.value + other.value, self.modulus)

    __radd__ = __add__

    def __sub__(self, other: Any) -> "ModInteger":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return ModInteger(self.value - other.value, self.modulus)

    def __neg__(self) -> "ModInteger":
        return ModInteger(-self.value, self.modulus)

    def __mul__(self, other: Any) -> "ModInteger":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return ModInteger(self.value * other.value, self.modulus)

    __rmul__ = __mul__

    def __pow__(self, exponent: int) -> "ModInteger":
        return ModInteger(pow(self.value, exponent, self.modulus), self.modulus)

    def inverse(self) -> "ModInteger":
        try:
            return ModInteger(pow(self.value, -1, self.modulus), self.modulus)
        except ValueError as exc:
            raise ZeroDivisionError(
                f"{self.value} is not invertible modulo {self.modulus}"
            ) from exc

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ModInteger):
            return self.value == other.value and self.modulus == other.modulus
        if isinstance(other, int):
            return self.value == other % self.modulus
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.value, self.modulus))

    def __bool__(self) -> bool:
        return self.value != 0

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"ModInteger({self.value}, {self.modulus})"

    def __str__(self) -> str:
        return str(self.value)


class ModIntegerRing:
    """Z/mZ with an arbitrary-precision modulus.

    Literals are integers or `p/q` with `q` invertible modulo m.

    Attributes:
        modulus (int): The modulus m >= 2.
    """

    name = "Mod"

    def __init__(self, modulus: int):
        if modulus < 2:
            raise InvalidRingDescriptor(f"modulus must be at least 2, got {modulus}")
        self.modulus = modulus

    def parse(self, text: str) -> ModInteger:
        literal = clean_literal(text)
        try:
            if "/" in literal:
                num, den = literal.split("/", 1)
                return ModInteger(int(num), self.modulus) * ModInteger(
                    int(den), self.modulus
                ).inverse()
            return ModInteger(int(literal), self.modulus)
        except (ValueError, ZeroDivisionError) as exc:
            raise LiteralParseFailure(
                f"not an integer modulo {self.modulus}: {text!r}"
            ) from exc

    def zero(self) -> ModInteger:
        return ModInteger(0, self.modulus)

    def one(self) -> ModInteger:
        return ModInteger(1, self.modulus)

    def is_zero(self, element: ModInteger) -> bool:
        return element.value == 0

    def inverse(self, element: ModInteger) -> ModInteger:
        return element.inverse()

    def format(self, element: ModInteger) -> str:
        return str(element.value)

    def is_simple(self, element: ModInteger) -> bool:
        return True

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, ModIntegerRing) and self.modulus == other.modulus

    def __hash__(self) -> int:
        return hash(("Mod", self.modulus))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.modulus})"


class ModLongRing(ModIntegerRing):
    """Z/mZ for moduli that fit below MOD_LONG_LIMIT."""

    def __init__(self, modulus: int):
        if modulus >= MOD_LONG_LIMIT:
            raise InvalidRingDescriptor(
                f"modulus {modulus} too large for a word-sized ring"
            )
        super().__init__(modulus)


def modular_ring(modulus: int) -> ModIntegerRing:
    if modulus < MOD_LONG_LIMIT:
        return ModLongRing(modulus)
    return ModIntegerRing(modulus)


__all__ = [
    "DecimalRing",
    "IntegerRing",
    "ModInteger",
    "ModIntegerRing",
    "ModLongRing",
    "RationalRing",
    "clean_literal",
    "format_fraction",
    "modular_ring",
    "parse_fraction",
]
