"""
Renders polyparse objects in the input grammar.

This module defines the `TextEmitter` class used by `Formatter` for the "text" target.
Output is canonical: parsing it with the same ring gives back an equal object.

Output conventions:
    - Polynomials: terms in descending term order joined by ` + ` and ` - `;
      monomials as `x^2 * y`; a coefficient whose text is a plain numeral precedes the
      monomial (`7/2 x^3`); any other coefficient is braced (`{1i2} x`); zero is `0`.
    - Rings: `coefficientRing (x,y) ORDER`, e.g. `Mod 7 (x,y) IGRLEX|1|`.
    - Coefficient rings: `Q`, `Z`, `D`, `C`, `Quat`, `Oct`, `Mod m`, `IntFunc (t)`,
      `AN[ m (a) ( a^2 - 7 ) ]`.
    - Term orders: keyword with optional split `|i|` or `[i,j]`, or `W((1,0),(0,1))`.
    - Polynomial lists: `ring ( p1, p2 )`; module lists: `ring ( ( p11, p12 ), ( p21, p22 ) )`.

Raises:
    - `TypeError`: If a coefficient ring has no text form.
"""

from typing import Any

from polyparse.polyparse_poly import (
    ExpVector,
    ModuleList,
    Polynomial,
    PolynomialList,
    PolynomialRing,
    TermOrder,
)
from polyparse.rings.algebraic_ring import AlgebraicNumberRing
from polyparse.rings.numeric_rings import ModIntegerRing


class TextEmitter:
    """Emits input-grammar text for polynomials, rings and lists.

    Attributes:
        lines (list[str]): Accumulated output lines.

    Methods:
        get_output(): Returns the emitted text.
        emit_polynomial(p), emit_ring(r), emit_term_order(o),
        emit_polynomial_list(pl), emit_module_list(ml): Append one line each.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def emit_polynomial(self, poly: Polynomial) -> None:
        self.lines.append(self.polynomial_text(poly))

    def emit_ring(self, ring: PolynomialRing) -> None:
        self.lines.append(self.ring_text(ring))

    def emit_term_order(self, order: TermOrder) -> None:
        self.lines.append(self.order_text(order))

    def emit_polynomial_list(self, plist: PolynomialList) -> None:
        body = ", ".join(self.polynomial_text(p) for p in plist.list)
        self.lines.append(f"{self.ring_text(plist.ring)} ( {body} )")

    def emit_module_list(self, mlist: ModuleList) -> None:
        rows = [
            "( " + ", ".join(self.polynomial_text(p) for p in row) + " )"
            for row in mlist.list or []
        ]
        self.lines.append(f"{self.ring_text(mlist.ring)} ( {', '.join(rows)} )")

    # ------------------------------------------------------------------

    def monomial_text(self, variables: tuple[str, ...], exponents: ExpVector) -> str:
        factors = []
        for name, e in zip(variables, exponents):
            if e == 1:
                factors.append(name)
            elif e > 1:
                factors.append(f"{name}^{e}")
        return " * ".join(factors)

    def term_text(
        self, ring: PolynomialRing, exponents: ExpVector, c: Any
    ) -> tuple[bool, str]:
        """
        Renders one term without its sign.

        Returns
        -------
        tuple[bool, str]
            Whether the term is negative, and the unsigned term text.
        """
        coefficients = ring.coefficients
        monomial = self.monomial_text(ring.variables, exponents)
        negative = False
        if coefficients.is_simple(c):
            text = coefficients.format(c)
            if text.startswith("-"):
                negative = True
                text = text[1:]
            if monomial and text == "1":
                return negative, monomial
        else:
            text = "{" + coefficients.format(c) + "}"
        if not monomial:
            return negative, text
        return negative, f"{text} {monomial}"

    def polynomial_text(self, poly: Polynomial) -> str:
        out = ""
        for exponents, c in poly.terms():
            negative, text = self.term_text(poly.ring, exponents, c)
            if not out:
                out = f"-{text}" if negative else text
            else:
                out += f" - {text}" if negative else f" + {text}"
        return out or "0"

    def order_text(self, order: TermOrder) -> str:
        if order.weights is not None:
            rows = ",".join(
                "(" + ",".join(str(w) for w in row) + ")" for row in order.weights
            )
            return f"W({rows})"
        if order.split is None:
            return order.kind
        if len(order.split) == 1:
            return f"{order.kind}|{order.split[0]}|"
        return f"{order.kind}[{','.join(str(s) for s in order.split)}]"

    def variables_text(self, variables: tuple[str, ...]) -> str:
        return "(" + ",".join(variables) + ")"

    def coefficient_ring_text(self, coefficients: Any) -> str:
        if isinstance(coefficients, ModIntegerRing):
            return f"Mod {coefficients.modulus}"
        if isinstance(coefficients, PolynomialRing):
            return f"IntFunc {self.variables_text(coefficients.variables)}"
        if isinstance(coefficients, AlgebraicNumberRing):
            base = ""
            if isinstance(coefficients.base, ModIntegerRing):
                base = f"{coefficients.base.modulus} "
            return (
                f"AN[ {base}{self.variables_text((coefficients.variable,))} "
                f"( {self.polynomial_text(coefficients.modulus)} ) ]"
            )
        name = getattr(coefficients, "name", None)
        if name is None:
            raise TypeError(f"No text form for coefficient ring {coefficients!r}")
        return str(name)

    def ring_text(self, ring: PolynomialRing) -> str:
        return (
            f"{self.coefficient_ring_text(ring.coefficients)} "
            f"{self.variables_text(ring.variables)} {self.order_text(ring.order)}"
        )
