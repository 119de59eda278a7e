"""
Algebraic-number extension rings.

An `AlgebraicNumberRing` adjoins a root of a univariate minimal polynomial to a
base field (the rationals or a prime field). Elements are polynomials in the
extension variable, kept reduced modulo the minimal polynomial.

Example:
    >>> base = RationalRing()
    >>> ring = PolynomialRing(base, ("a",))
    >>> ext = AlgebraicNumberRing(base, "a", ring.parse("a^2 - 7"))
    >>> ext.parse("a^3")          # 7 a
"""

from typing import Any

from polyparse.polyparse_errors import InvalidRingDescriptor
from polyparse.polyparse_poly import Polynomial, PolynomialRing


class AlgebraicNumber:
    """An element of an AlgebraicNumberRing, stored as a reduced polynomial."""

    __slots__ = ("ring", "poly")

    def __init__(self, ring: "AlgebraicNumberRing", poly: Polynomial):
        self.ring = ring
        self.poly = ring.reduce(poly)

    def __add__(self, other: "AlgebraicNumber") -> "AlgebraicNumber":
        return AlgebraicNumber(self.ring, self.poly + other.poly)

    def __sub__(self, other: "AlgebraicNumber") -> "AlgebraicNumber":
        return AlgebraicNumber(self.ring, self.poly - other.poly)

    def __neg__(self) -> "AlgebraicNumber":
        return AlgebraicNumber(self.ring, -self.poly)

    def __mul__(self, other: "AlgebraicNumber") -> "AlgebraicNumber":
        return AlgebraicNumber(self.ring, self.poly * other.poly)

    def __pow__(self, exponent: int) -> "AlgebraicNumber":
        result = self.ring.one()
        base = self
        while exponent:
            if exponent & 1:
                result = result * base
            exponent >>= 1
            if exponent:
                base = base * base
        return result

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AlgebraicNumber):
            return NotImplemented
        return self.poly == other.poly

    def __hash__(self) -> int:
        return hash(tuple(self.poly.terms()))

    def __bool__(self) -> bool:
        return not self.poly.is_zero()

    def __repr__(self) -> str:
        return f"AlgebraicNumber({str(self.poly)!r})"

    def __str__(self) -> str:
        return str(self.poly)


class AlgebraicNumberRing:
    """Base field extended by a root of `modulus`.

    Args:
        base: Base coefficient ring; must provide `inverse()` (rationals or a prime field).
        variable: Name of the extension variable.
        modulus: Minimal polynomial, univariate in `variable` over `base`.

    Raises:
        InvalidRingDescriptor: If the modulus is constant or its leading coefficient
            is not invertible in the base ring.
    """

    name = "AN"

    def __init__(self, base: Any, variable: str, modulus: Polynomial):
        self.base = base
        self.variable = variable
        self.poly_ring = PolynomialRing(base, (variable,))
        self.modulus = Polynomial(self.poly_ring, dict(modulus.terms()))
        self.degree = self.modulus.degree()
        if self.degree < 1:
            raise InvalidRingDescriptor(
                f"Minimal polynomial {modulus} of {variable} must have degree >= 1"
            )
        try:
            self._lead_inverse = base.inverse(self.modulus.coefficient((self.degree,)))
        except ZeroDivisionError as exc:
            raise InvalidRingDescriptor(
                f"Leading coefficient of {modulus} is not invertible"
            ) from exc

    def reduce(self, poly: Polynomial) -> Polynomial:
        """Remainder of `poly` modulo the minimal polynomial."""
        rest = Polynomial(self.poly_ring, dict(poly.terms()))
        while rest.degree() >= self.degree:
            (top,), lead = next(rest.terms())
            factor = self.poly_ring.term(lead * self._lead_inverse, (top - self.degree,))
            rest = rest - factor * self.modulus
        return rest

    def generator(self) -> AlgebraicNumber:
        return AlgebraicNumber(self, self.poly_ring.monomial(0, 1))

    def parse(self, text: str) -> AlgebraicNumber:
        return AlgebraicNumber(self, self.poly_ring.parse(text))

    def zero(self) -> AlgebraicNumber:
        return AlgebraicNumber(self, self.poly_ring.zero())

    def one(self) -> AlgebraicNumber:
        return AlgebraicNumber(self, self.poly_ring.one())

    def is_zero(self, element: AlgebraicNumber) -> bool:
        return element.poly.is_zero()

    def format(self, element: AlgebraicNumber) -> str:
        return str(element.poly)

    def is_simple(self, element: AlgebraicNumber) -> bool:
        return self.poly_ring.is_simple(element.poly)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AlgebraicNumberRing):
            return False
        return (
            self.base == other.base
            and self.variable == other.variable
            and self.modulus == other.modulus
        )

    def __hash__(self) -> int:
        return hash((self.base, self.variable, self.degree))

    def __repr__(self) -> str:
        return f"AlgebraicNumberRing({self.base!r}, {self.variable!r}, {str(self.modulus)!r})"


__all__ = ["AlgebraicNumber", "AlgebraicNumberRing"]
