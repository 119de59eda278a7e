"""
Polynomial data model produced by the polyparse grammar.

Classes:
    TermOrder:
        Term-order descriptor: an order kind, an optional weight matrix and optional
        block split points. Provides the sort key used to list terms canonically.
    PolynomialRing:
        Immutable grouping of a coefficient ring, an ordered variable list and a term
        order. Factory for zero, one, monomials and constants; itself a coefficient-ring
        handle, so polynomial rings can serve as coefficients of other rings.
    Polynomial:
        Sparse mapping from exponent vectors (tuples of non-negative ints, one per
        variable) to non-zero coefficients. Zero is the empty mapping.
    PolynomialList:
        A ring together with an ordered list of polynomials (result of a polynomial set).
    ModuleList:
        A ring together with rows of polynomials padded to equal width (result of a
        module set).

Serialization:
    `Polynomial.to_dict()`, `PolynomialList.to_dict()` and `ModuleList.to_dict()` return
    plain dictionaries (see `PolynomialDict`) for JSON output or debugging.

Raises:
    InvalidRingDescriptor: When a ring or term order is inconsistent (duplicate
        variables, weight rows of the wrong length, split points out of range).
"""

from typing import Any, Callable, Iterator, TypedDict

from polyparse.polyparse_constants import DEFAULT_TERM_ORDER
from polyparse.polyparse_errors import (
    InvalidRingDescriptor,
    LiteralParseFailure,
    PolynomialParseError,
)

ExpVector = tuple[int, ...]

ORDER_KINDS = ("LEX", "INVLEX", "GRLEX", "IGRLEX", "REVILEX", "REVITDG", "WEIGHT")


def _lex(e: ExpVector) -> tuple[int, ...]:
    return e


def _invlex(e: ExpVector) -> tuple[int, ...]:
    return e[::-1]


def _grlex(e: ExpVector) -> tuple[Any, ...]:
    return (sum(e), e)


def _igrlex(e: ExpVector) -> tuple[Any, ...]:
    return (sum(e), e[::-1])


def _revilex(e: ExpVector) -> tuple[int, ...]:
    return tuple(-x for x in e)


def _revitdg(e: ExpVector) -> tuple[Any, ...]:
    return (sum(e), tuple(-x for x in e))


_BASE_KEYS: dict[str, Callable[[ExpVector], Any]] = {
    "LEX": _lex,
    "INVLEX": _invlex,
    "GRLEX": _grlex,
    "IGRLEX": _igrlex,
    "REVILEX": _revilex,
    "REVITDG": _revitdg,
}


class TermOrder:
    """Term-order descriptor.

    Larger `key()` values are larger monomials; terms are listed in descending order.

    Attributes:
        kind (str): One of ORDER_KINDS.
        weights (tuple[tuple[int, ...], ...] | None): Weight rows for `WEIGHT` orders.
        split (tuple[int, ...] | None): Block split points for elimination orders.
        nvars (int | None): Variable count a block order was built for.
    """

    format_kind = "term_order"

    def __init__(
        self,
        kind: str = DEFAULT_TERM_ORDER,
        weights: Any = None,
        split: Any = None,
        nvars: int | None = None,
    ):
        kind = kind.upper()
        if kind not in ORDER_KINDS:
            raise InvalidRingDescriptor(f"Unknown term order: {kind!r}")
        if kind == "WEIGHT":
            if not weights:
                raise InvalidRingDescriptor("Weight order needs at least one weight row")
            weights = tuple(tuple(int(w) for w in row) for row in weights)
            width = len(weights[0])
            if any(len(row) != width for row in weights):
                raise InvalidRingDescriptor(
                    f"Weight rows have different lengths: {weights}"
                )
        elif weights:
            raise InvalidRingDescriptor(f"Weights given for {kind} order")
        else:
            weights = None
        if split is not None:
            if isinstance(split, int):
                split = (split,)
            split = tuple(split)
            if list(split) != sorted(split) or any(s <= 0 for s in split):
                raise InvalidRingDescriptor(f"Invalid split index {split}")
            if nvars is not None and split[-1] > nvars:
                raise InvalidRingDescriptor(
                    f"Split index {split} exceeds {nvars} variables"
                )
        self.kind = kind
        self.weights = weights
        self.split = split
        self.nvars = nvars

    @classmethod
    def weighted(cls, weights: Any) -> "TermOrder":
        return cls("WEIGHT", weights=weights)

    @classmethod
    def block(cls, kind: str, nvars: int, split: int | tuple[int, ...]) -> "TermOrder":
        return cls(kind, split=split, nvars=nvars)

    def check(self, nvars: int) -> None:
        """Validates the order against a variable count.

        Raises:
            InvalidRingDescriptor: If a weight row or the split does not fit `nvars`.
        """
        if self.weights is not None:
            for row in self.weights:
                if len(row) != nvars:
                    raise InvalidRingDescriptor(
                        f"Weight row {row} has {len(row)} entries for {nvars} variables"
                    )
        if self.split is not None:
            if self.nvars is not None and self.nvars != nvars:
                raise InvalidRingDescriptor(
                    f"Block order built for {self.nvars} variables used with {nvars}"
                )
            if self.split[-1] > nvars:
                raise InvalidRingDescriptor(
                    f"Split index {self.split} exceeds {nvars} variables"
                )

    def _weight_key(self, e: ExpVector) -> tuple[Any, ...]:
        assert self.weights is not None  # for mypy
        degrees = tuple(sum(w * x for w, x in zip(row, e)) for row in self.weights)
        return (degrees, e[::-1])

    def key(self, e: ExpVector) -> Any:
        if self.kind == "WEIGHT":
            return self._weight_key(e)
        base = _BASE_KEYS[self.kind]
        if self.split is None:
            return base(e)
        bounds = (0,) + self.split + (len(e),)
        return tuple(base(e[lo:hi]) for lo, hi in zip(bounds, bounds[1:]))

    def compare(self, a: ExpVector, b: ExpVector) -> int:
        ka, kb = self.key(a), self.key(b)
        return (ka > kb) - (ka < kb)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TermOrder):
            return False
        return (
            self.kind == other.kind
            and self.weights == other.weights
            and self.split == other.split
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.weights, self.split))

    def __repr__(self) -> str:
        parts = [self.kind]
        if self.weights is not None:
            parts.append(f"weights={self.weights}")
        if self.split is not None:
            parts.append(f"split={self.split}")
        return f"TermOrder({', '.join(parts)})"


class PolynomialDict(TypedDict):
    """Serialized polynomial: variable names and (exponents, coefficient text) pairs."""

    variables: list[str]
    terms: list[tuple[list[int], str]]


class PolynomialRing:
    """Polynomial ring over a coefficient ring in named variables.

    Args:
        coefficients: Coefficient-ring handle (parse/zero/one/is_zero/format/is_simple).
        variables: Ordered, unique variable names.
        order: Term order; defaults to the default order.

    Raises:
        InvalidRingDescriptor: On duplicate variable names or an order that does not fit.
    """

    format_kind = "ring"

    def __init__(
        self,
        coefficients: Any,
        variables: tuple[str, ...] | list[str] = (),
        order: TermOrder | None = None,
    ):
        variables = tuple(variables)
        if len(set(variables)) != len(variables):
            raise InvalidRingDescriptor(f"Duplicate variable names in {variables}")
        order = order if order is not None else TermOrder()
        order.check(len(variables))
        self.coefficients = coefficients
        self.variables = variables
        self.order = order
        self._index = {name: i for i, name in enumerate(variables)}

    @property
    def nvars(self) -> int:
        return len(self.variables)

    def index_of(self, name: str) -> int | None:
        return self._index.get(name)

    def zero(self) -> "Polynomial":
        return Polynomial(self, {})

    def one(self) -> "Polynomial":
        return self.constant(self.coefficients.one())

    def constant(self, coefficient: Any) -> "Polynomial":
        return self.term(coefficient, (0,) * self.nvars)

    def term(self, coefficient: Any, exponents: ExpVector) -> "Polynomial":
        return Polynomial(self, {tuple(exponents): coefficient})

    def monomial(self, index: int, exponent: int = 1) -> "Polynomial":
        """The single-variable monomial `variables[index]^exponent`."""
        if exponent < 0:
            raise ValueError("exponents must be non-negative")
        exps = [0] * self.nvars
        exps[index] = exponent
        return self.term(self.coefficients.one(), tuple(exps))

    def parse(self, text: str) -> "Polynomial":
        """Parses `text` as a polynomial of this ring (coefficient-ring handle protocol).

        Raises:
            LiteralParseFailure: If the text is not a complete polynomial of this ring.
        """
        from polyparse.polyparse_parser import Parser

        try:
            return Parser(text, ring=self).parse_complete_polynomial()
        except LiteralParseFailure:
            raise
        except PolynomialParseError as exc:
            raise LiteralParseFailure(
                f"not a polynomial in {self.variables}: {text!r}"
            ) from exc

    def is_zero(self, element: "Polynomial") -> bool:
        return element.is_zero()

    def format(self, element: "Polynomial") -> str:
        return str(element)

    def is_simple(self, element: "Polynomial") -> bool:
        if element.is_zero():
            return True
        if not element.is_constant():
            return False
        return bool(self.coefficients.is_simple(element.constant_coefficient()))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PolynomialRing):
            return False
        return (
            self.coefficients == other.coefficients
            and self.variables == other.variables
            and self.order == other.order
        )

    def __hash__(self) -> int:
        return hash((self.coefficients, self.variables, self.order))

    def __repr__(self) -> str:
        return f"PolynomialRing({self.coefficients!r}, {self.variables}, {self.order!r})"

    def __str__(self) -> str:
        from polyparse.polyparse_format import format_text

        return format_text(self)


class Polynomial:
    """A polynomial of a PolynomialRing.

    Args:
        ring: The owning ring.
        terms: Mapping from exponent tuples to coefficients; zero coefficients are dropped.
    """

    format_kind = "polynomial"

    def __init__(self, ring: PolynomialRing, terms: dict[ExpVector, Any]):
        self.ring = ring
        is_zero = ring.coefficients.is_zero
        self._terms: dict[ExpVector, Any] = {
            e: c for e, c in terms.items() if not is_zero(c)
        }

    def _check(self, other: "Polynomial") -> None:
        if other.ring.nvars != self.ring.nvars:
            raise ValueError(
                f"polynomials from rings with {self.ring.nvars} and {other.ring.nvars} variables"
            )

    def __add__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check(other)
        terms = dict(self._terms)
        for e, c in other._terms.items():
            terms[e] = terms[e] + c if e in terms else c
        return Polynomial(self.ring, terms)

    def __neg__(self) -> "Polynomial":
        return Polynomial(self.ring, {e: -c for e, c in self._terms.items()})

    def __sub__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self + (-other)

    def __mul__(self, other: "Polynomial") -> "Polynomial":
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check(other)
        terms: dict[ExpVector, Any] = {}
        for e1, c1 in self._terms.items():
            for e2, c2 in other._terms.items():
                e = tuple(x + y for x, y in zip(e1, e2))
                c = c1 * c2
                terms[e] = terms[e] + c if e in terms else c
        return Polynomial(self.ring, terms)

    def scale(self, coefficient: Any) -> "Polynomial":
        """Multiplies every coefficient by `coefficient` from the right."""
        return Polynomial(
            self.ring, {e: c * coefficient for e, c in self._terms.items()}
        )

    def __pow__(self, exponent: int) -> "Polynomial":
        if exponent < 0:
            raise ValueError("negative exponents are not supported")
        result = self.ring.one()
        base = self
        while exponent:
            if exponent & 1:
                result = result * base
            exponent >>= 1
            if exponent:
                base = base * base
        return result

    def is_zero(self) -> bool:
        return not self._terms

    def is_constant(self) -> bool:
        return all(not any(e) for e in self._terms)

    def is_one(self) -> bool:
        return self == self.ring.one()

    def constant_coefficient(self) -> Any:
        return self._terms.get((0,) * self.ring.nvars, self.ring.coefficients.zero())

    def coefficient(self, exponents: ExpVector) -> Any:
        return self._terms.get(tuple(exponents), self.ring.coefficients.zero())

    def degree(self) -> int:
        """Total degree; -1 for the zero polynomial."""
        return max((sum(e) for e in self._terms), default=-1)

    def terms(self) -> Iterator[tuple[ExpVector, Any]]:
        """Yields (exponents, coefficient) pairs in descending term order."""
        key = self.ring.order.key
        for e in sorted(self._terms, key=key, reverse=True):
            yield e, self._terms[e]

    def leading_term(self) -> tuple[ExpVector, Any] | None:
        return next(self.terms(), None)

    def __len__(self) -> int:
        return len(self._terms)

    def __bool__(self) -> bool:
        return bool(self._terms)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.ring.nvars == other.ring.nvars and self._terms == other._terms

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> PolynomialDict:
        fmt = self.ring.coefficients.format
        return {
            "variables": list(self.ring.variables),
            "terms": [(list(e), fmt(c)) for e, c in self.terms()],
        }

    def __repr__(self) -> str:
        return f"Polynomial({str(self)!r}, variables={self.ring.variables})"

    def __str__(self) -> str:
        from polyparse.polyparse_format import format_text

        return format_text(self)


class PolynomialList:
    """A polynomial ring together with an ordered list of its polynomials."""

    format_kind = "polynomial_list"

    def __init__(self, ring: PolynomialRing, polynomials: list[Polynomial]):
        self.ring = ring
        self.list = list(polynomials)

    def __len__(self) -> int:
        return len(self.list)

    def __iter__(self) -> Iterator[Polynomial]:
        return iter(self.list)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PolynomialList):
            return False
        return self.ring == other.ring and self.list == other.list

    def to_dict(self) -> dict[str, Any]:
        return {
            "variables": list(self.ring.variables),
            "list": [p.to_dict() for p in self.list],
        }

    def __repr__(self) -> str:
        return f"PolynomialList({self.ring!r}, {self.list!r})"

    def __str__(self) -> str:
        from polyparse.polyparse_format import format_text

        return format_text(self)


class ModuleList:
    """A polynomial ring together with rows of polynomials.

    Rows that are None are dropped and shorter rows are padded with zero polynomials
    so that all rows have the same number of columns.

    Attributes:
        rows (int): Number of rows, -1 if undefined.
        cols (int): Number of columns, -1 if undefined.
    """

    format_kind = "module_list"

    def __init__(self, ring: PolynomialRing, rows: list[list[Polynomial]] | None):
        self.ring = ring
        self.list = self.pad_cols(ring, rows)
        if self.list is None:
            self.rows = -1
            self.cols = -1
        else:
            self.rows = len(self.list)
            self.cols = len(self.list[0]) if self.rows > 0 else -1

    @staticmethod
    def pad_cols(
        ring: PolynomialRing, rows: list[list[Polynomial]] | None
    ) -> list[list[Polynomial]] | None:
        if rows is None:
            return None
        kept = [list(row) for row in rows if row is not None]
        width = max((len(row) for row in kept), default=0)
        for row in kept:
            row.extend(ring.zero() for _ in range(width - len(row)))
        return kept

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ModuleList):
            return False
        return self.ring == other.ring and self.list == other.list

    def to_dict(self) -> dict[str, Any]:
        return {
            "variables": list(self.ring.variables),
            "rows": self.rows,
            "cols": self.cols,
            "list": [[p.to_dict() for p in row] for row in self.list or []],
        }

    def __repr__(self) -> str:
        return f"ModuleList({self.ring!r}, rows={self.rows}, cols={self.cols})"

    def __str__(self) -> str:
        from polyparse.polyparse_format import format_text

        return format_text(self)


__all__ = [
    "ExpVector",
    "ModuleList",
    "ORDER_KINDS",
    "Polynomial",
    "PolynomialDict",
    "PolynomialList",
    "PolynomialRing",
    "TermOrder",
]
