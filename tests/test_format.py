from fractions import Fraction
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from polyparse.emitters.text_emitter import TextEmitter
from polyparse.polyparse_format import Formatter, format_text
from polyparse.polyparse_parser import Parser
from polyparse.polyparse_poly import Polynomial, PolynomialRing, TermOrder
from polyparse.rings.hypercomplex_rings import Complex, ComplexRing, QuaternionRing
from polyparse.rings.numeric_rings import DecimalRing, RationalRing, modular_ring


def parse(source: str, ring: PolynomialRing) -> Polynomial:
    return Parser(source, ring=ring).parse_polynomial()


@pytest.mark.parametrize(  # type: ignore[misc]
    "source, expected",
    [
        ("x^2 - 2*x*y + 7/2", "-2 x * y + x^2 + 7/2"),
        ("-x", "-x"),
        ("-1/2 y^3 + x", "-1/2 y^3 + x"),
        ("0", "0"),
        ("1", "1"),
        ("x*y^2", "x * y^2"),
    ],
)
def test_format_polynomial(source: str, expected: str, qxy: PolynomialRing) -> None:
    assert format_text(parse(source, qxy)) == expected
    assert str(parse(source, qxy)) == expected


def test_non_simple_coefficients_are_braced() -> None:
    ring = PolynomialRing(ComplexRing(), ("x",))
    poly = ring.monomial(0).scale(Complex(1, -2)) + ring.constant(Complex(3))
    assert format_text(poly) == "{1i-2} x + 3"
    assert parse(format_text(poly), ring) == poly


@pytest.mark.parametrize(  # type: ignore[misc]
    "order, expected",
    [
        (TermOrder(), "IGRLEX"),
        (TermOrder("INVLEX"), "INVLEX"),
        (TermOrder.block("LEX", 3, 1), "LEX|1|"),
        (TermOrder.block("GRLEX", 3, (1, 2)), "GRLEX[1,2]"),
        (TermOrder.weighted(((1, 0), (0, 1))), "W((1,0),(0,1))"),
    ],
)
def test_format_term_order(order: TermOrder, expected: str) -> None:
    assert format_text(order) == expected
    assert Parser(expected).parse_term_order(3 if order.split else 2) == order


@pytest.mark.parametrize(  # type: ignore[misc]
    "source, expected",
    [
        ("Q (x,y) G", "Q (x,y) IGRLEX"),
        ("Rat (x) L", "Q (x) INVLEX"),
        ("Z (x) LEX", "Z (x) LEX"),
        ("D (x) G", "D (x) IGRLEX"),
        ("Mod[7] (x,y) LEX|1|", "Mod 7 (x,y) LEX|1|"),
        ("C (z) G", "C (z) IGRLEX"),
        ("IntFunc (t) (x) G", "IntFunc (t) (x) IGRLEX"),
        ("AN[ (a) (a^2-7) ] (x) G", "AN[ (a) ( a^2 - 7 ) ] (x) IGRLEX"),
        ("AN[ 5 (a) (a^2-2) ] (x) G", "AN[ 5 (a) ( a^2 + 3 ) ] (x) IGRLEX"),
    ],
)
def test_format_ring(source: str, expected: str) -> None:
    ring = Parser(source + " ()").parse_polynomial_set().ring
    assert format_text(ring) == expected
    assert Parser(expected + " ()").parse_polynomial_set().ring == ring


def test_format_quaternion_ring() -> None:
    ring = PolynomialRing(QuaternionRing(), ("x",))
    assert format_text(ring) == "Quat (x) IGRLEX"


def test_format_polynomial_list() -> None:
    result = Parser("Q (x,y) L ( x + 1, y^2 )").parse_polynomial_set()
    text = format_text(result)
    assert text == "Q (x,y) INVLEX ( x + 1, y^2 )"
    assert Parser(text).parse_polynomial_set() == result


def test_format_module_list() -> None:
    result = Parser("Z (x) G ( ( x, 1 ), ( 2 ) )").parse_module_set()
    text = format_text(result)
    assert text == "Z (x) IGRLEX ( ( x, 1 ), ( 2, 0 ) )"
    assert Parser(text).parse_module_set() == result
    assert "rows=2" in repr(result)


def test_formatter_renders_several_objects(qxy: PolynomialRing) -> None:
    out = Formatter().format(qxy, parse("x + 1", qxy))
    assert out == "Q (x,y) IGRLEX\nx + 1"


def test_formatter_rejects_unknown_target() -> None:
    with pytest.raises(ValueError, match="Unknown format target"):
        Formatter("latex")


def test_formatter_rejects_plain_objects() -> None:
    with pytest.raises(TypeError, match="Cannot format object of type int"):
        Formatter().format(3)


class Opaque:
    format_kind = "opaque"


def test_formatter_missing_emitter_method() -> None:
    with pytest.raises(NotImplementedError, match="No emitter method for kind 'opaque'"):
        Formatter().format(Opaque())


def test_coefficient_ring_without_text_form() -> None:
    with pytest.raises(TypeError, match="No text form"):
        TextEmitter().coefficient_ring_text(object())


exponents = st.tuples(st.integers(0, 4), st.integers(0, 4))
rationals = st.fractions(min_value=-1000, max_value=1000, max_denominator=20)


@given(st.dictionaries(exponents, rationals, max_size=6))  # type: ignore[misc]
def test_rational_round_trip(term_map: dict[tuple[int, int], Fraction]) -> None:
    ring = PolynomialRing(RationalRing(), ("x", "y"))
    poly = Polynomial(ring, term_map)
    assert parse(format_text(poly), ring) == poly


@given(  # type: ignore[misc]
    st.dictionaries(
        exponents,
        st.tuples(st.integers(-5, 5), st.integers(-5, 5)).map(lambda t: Complex(*t)),
        max_size=4,
    )
)
def test_complex_round_trip(term_map: dict[tuple[int, int], Any]) -> None:
    ring = PolynomialRing(ComplexRing(), ("x", "y"), TermOrder("LEX"))
    poly = Polynomial(ring, term_map)
    assert parse(format_text(poly), ring) == poly


@given(st.dictionaries(exponents, st.integers(0, 10), max_size=5))  # type: ignore[misc]
def test_modular_round_trip(term_map: dict[tuple[int, int], int]) -> None:
    coefficients = modular_ring(11)
    ring = PolynomialRing(coefficients, ("x", "y"))
    poly = Polynomial(ring, {e: coefficients.parse(str(c)) for e, c in term_map.items()})
    assert parse(format_text(poly), ring) == poly


def test_decimal_and_nested_round_trips() -> None:
    ring = PolynomialRing(DecimalRing(), ("x",))
    poly = parse("-0.125 x^3 + 2.5", ring)
    assert format_text(poly) == "-0.125 x^3 + 2.5"
    assert parse(format_text(poly), ring) == poly

    inner = PolynomialRing(RationalRing(), ("t",), TermOrder("INVLEX"))
    outer = PolynomialRing(inner, ("x",))
    poly = parse("{t^2 - 1} x - 3 + t", outer)
    assert format_text(poly) == "{t^2 - 1} x + {t - 3}"
    assert parse(format_text(poly), outer) == poly


def test_algebraic_round_trip() -> None:
    source = "AN[ (a) ( a^2 - 7 ) ] (x) G ( {a + 1} x^2 - a^3 )"
    result = Parser(source).parse_polynomial_set()
    poly = result.list[0]
    assert format_text(poly) == "{a + 1} x^2 + {-7 a}"
    assert parse(format_text(poly), result.ring) == poly
