import os
from typing import Any

import pytest

from polyparse.polyparse_poly import PolynomialRing, TermOrder
from polyparse.rings.numeric_rings import RationalRing

# Start coverage in subprocesses when requested, without the collector teardown assertion
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


@pytest.fixture  # type: ignore[misc]
def qxy() -> PolynomialRing:
    """Rationals in x, y with the default order."""
    return PolynomialRing(RationalRing(), ("x", "y"), TermOrder())


@pytest.fixture  # type: ignore[misc]
def qxyz() -> PolynomialRing:
    return PolynomialRing(RationalRing(), ("x", "y", "z"), TermOrder())
