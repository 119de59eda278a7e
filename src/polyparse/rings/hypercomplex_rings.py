"""
Complex, quaternion and octonion coefficient rings over the rationals.

Literal syntax:
    Complex      `re i im`               e.g. `3`, `1i2` (1+2i), `-1/2i~3`
    Quaternion   `a i b j c k d`         trailing parts may be omitted, e.g. `1i2j0k~1`
    Octonion     `q o q'`                two quaternion literals (Cayley-Dickson pair)

Components are rational literals. Outside a brace block `-` is an operator,
so negative components must be written with `~`.
"""

from fractions import Fraction
from typing import Any

from polyparse.polyparse_errors import LiteralParseFailure
from polyparse.rings.numeric_rings import clean_literal, parse_fraction


def _component(text: str, literal: str) -> Fraction:
    if text in ("", "+"):
        return Fraction(0)
    try:
        return parse_fraction(text)
    except LiteralParseFailure as exc:
        raise LiteralParseFailure(f"malformed component in {literal!r}") from exc


def _join(parts: list[tuple[str, Fraction]]) -> str:
    """Renders components, dropping trailing zero parts."""
    while len(parts) > 1 and parts[-1][1] == 0:
        parts.pop()
    text = str(parts[0][1])
    for sep, value in parts[1:]:
        text += f"{sep}{value}"
    return text


class Complex:
    """A complex number with rational real and imaginary parts."""

    __slots__ = ("re", "im")

    def __init__(self, re: Fraction | int = 0, im: Fraction | int = 0):
        self.re = Fraction(re)
        self.im = Fraction(im)

    def __add__(self, other: "Complex") -> "Complex":
        return Complex(self.re + other.re, self.im + other.im)

    def __sub__(self, other: "Complex") -> "Complex":
        return Complex(self.re - other.re, self.im - other.im)

    def __neg__(self) -> "Complex":
        return Complex(-self.re, -self.im)

    def __mul__(self, other: "Complex") -> "Complex":
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def __pow__(self, exponent: int) -> "Complex":
        result = Complex(1)
        for _ in range(exponent):
            result = result * self
        return result

    def conjugate(self) -> "Complex":
        return Complex(self.re, -self.im)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Complex):
            return NotImplemented
        return self.re == other.re and self.im == other.im

    def __hash__(self) -> int:
        return hash((self.re, self.im))

    def __bool__(self) -> bool:
        return bool(self.re or self.im)

    def __repr__(self) -> str:
        return f"Complex({self.re}, {self.im})"

    def __str__(self) -> str:
        return _join([("", self.re), ("i", self.im)])


class Quaternion:
    """A Hamilton quaternion a + b i + c j + d k with rational components."""

    __slots__ = ("a", "b", "c", "d")

    def __init__(self, a: Fraction | int = 0, b: Fraction | int = 0,
                 c: Fraction | int = 0, d: Fraction | int = 0):
        self.a = Fraction(a)
        self.b = Fraction(b)
        self.c = Fraction(c)
        self.d = Fraction(d)

    def components(self) -> tuple[Fraction, Fraction, Fraction, Fraction]:
        return (self.a, self.b, self.c, self.d)

    def __add__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(*(x + y for x, y in zip(self.components(), other.components())))

    def __sub__(self, other: "Quaternion") -> "Quaternion":
        return Quaternion(*(x - y for x, y in zip(self.components(), other.components())))

    def __neg__(self) -> "Quaternion":
        return Quaternion(-self.a, -self.b, -self.c, -self.d)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        a1, b1, c1, d1 = self.components()
        a2, b2, c2, d2 = other.components()
        return Quaternion(
            a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2,
            a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2,
            a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2,
            a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2,
        )

    def __pow__(self, exponent: int) -> "Quaternion":
        result = Quaternion(1)
        for _ in range(exponent):
            result = result * self
        return result

    def conjugate(self) -> "Quaternion":
        return Quaternion(self.a, -self.b, -self.c, -self.d)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return self.components() == other.components()

    def __hash__(self) -> int:
        return hash(self.components())

    def __bool__(self) -> bool:
        return any(self.components())

    def __repr__(self) -> str:
        return f"Quaternion({self.a}, {self.b}, {self.c}, {self.d})"

    def __str__(self) -> str:
        return _join([("", self.a), ("i", self.b), ("j", self.c), ("k", self.d)])


class Octonion:
    """An octonion as a Cayley-Dickson pair of quaternions."""

    __slots__ = ("left", "right")

    def __init__(self, left: Quaternion | None = None, right: Quaternion | None = None):
        self.left = left if left is not None else Quaternion()
        self.right = right if right is not None else Quaternion()

    def __add__(self, other: "Octonion") -> "Octonion":
        return Octonion(self.left + other.left, self.right + other.right)

    def __sub__(self, other: "Octonion") -> "Octonion":
        return Octonion(self.left - other.left, self.right - other.right)

    def __neg__(self) -> "Octonion":
        return Octonion(-self.left, -self.right)

    def __mul__(self, other: "Octonion") -> "Octonion":
        # (a, b)(c, d) = (ac - d*b, da + bc*)
        a, b = self.left, self.right
        c, d = other.left, other.right
        return Octonion(
            a * c - d.conjugate() * b,
            d * a + b * c.conjugate(),
        )

    def __pow__(self, exponent: int) -> "Octonion":
        result = Octonion(Quaternion(1))
        for _ in range(exponent):
            result = result * self
        return result

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Octonion):
            return NotImplemented
        return self.left == other.left and self.right == other.right

    def __hash__(self) -> int:
        return hash((self.left, self.right))

    def __bool__(self) -> bool:
        return bool(self.left) or bool(self.right)

    def __repr__(self) -> str:
        return f"Octonion({self.left!r}, {self.right!r})"

    def __str__(self) -> str:
        if not self.right:
            return str(self.left)
        return f"{self.left}o{self.right}"


def _split_parts(literal: str, separators: str) -> list[str]:
    """Splits `literal` at each separator in order; missing parts are empty."""
    parts = []
    rest = literal
    for sep in separators:
        if sep in rest:
            head, rest = rest.split(sep, 1)
            parts.append(head)
        else:
            parts.append(rest)
            rest = ""
            break
    else:
        parts.append(rest)
        rest = ""
    if rest:
        parts.append(rest)
    return parts + [""] * (len(separators) + 1 - len(parts))


class ComplexRing:
    name = "C"

    def parse(self, text: str) -> Complex:
        literal = clean_literal(text)
        if literal == "i":
            return Complex(0, 1)
        if not literal or literal.count("i") > 1:
            raise LiteralParseFailure(f"not a complex number: {text!r}")
        re, im = _split_parts(literal, "i")
        return Complex(_component(re, literal), _component(im, literal))

    def zero(self) -> Complex:
        return Complex(0)

    def one(self) -> Complex:
        return Complex(1)

    def is_zero(self, element: Complex) -> bool:
        return not element

    def format(self, element: Complex) -> str:
        return str(element)

    def is_simple(self, element: Complex) -> bool:
        return element.im == 0

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return "ComplexRing()"


class QuaternionRing:
    name = "Quat"

    def parse(self, text: str) -> Quaternion:
        literal = clean_literal(text)
        if not literal or any(literal.count(sep) > 1 for sep in "ijk"):
            raise LiteralParseFailure(f"not a quaternion: {text!r}")
        a, b, c, d = _split_parts(literal, "ijk")
        return Quaternion(*(_component(part, literal) for part in (a, b, c, d)))

    def zero(self) -> Quaternion:
        return Quaternion()

    def one(self) -> Quaternion:
        return Quaternion(1)

    def is_zero(self, element: Quaternion) -> bool:
        return not element

    def format(self, element: Quaternion) -> str:
        return str(element)

    def is_simple(self, element: Quaternion) -> bool:
        return not any((element.b, element.c, element.d))

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return "QuaternionRing()"


class OctonionRing:
    name = "Oct"

    def __init__(self) -> None:
        self.quaternions = QuaternionRing()

    def parse(self, text: str) -> Octonion:
        literal = clean_literal(text)
        if literal.count("o") > 1:
            raise LiteralParseFailure(f"not an octonion: {text!r}")
        left, right = _split_parts(literal, "o")
        if not left and not right:
            raise LiteralParseFailure(f"not an octonion: {text!r}")
        return Octonion(
            self.quaternions.parse(left) if left else Quaternion(),
            self.quaternions.parse(right) if right else Quaternion(),
        )

    def zero(self) -> Octonion:
        return Octonion()

    def one(self) -> Octonion:
        return Octonion(Quaternion(1))

    def is_zero(self, element: Octonion) -> bool:
        return not element

    def format(self, element: Octonion) -> str:
        return str(element)

    def is_simple(self, element: Octonion) -> bool:
        return not element.right and self.quaternions.is_simple(element.left)

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return "OctonionRing()"


__all__ = [
    "Complex",
    "ComplexRing",
    "Octonion",
    "OctonionRing",
    "Quaternion",
    "QuaternionRing",
]
