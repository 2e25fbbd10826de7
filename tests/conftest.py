"""Shared fixtures for the test suite.

The fake delegates here stand in for the math typesetter so renderer output
is predictable.  A few tests also run against the real latex2mathml delegate.
"""

import pytest
from click.testing import CliRunner

from mathconv.renderer import OutputFormat, VisualRenderer


class EchoDelegate:
    """Returns tagged markup that names the mode it was called with."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def convert(self, source, display_mode, output_format):
        self.calls.append((source, display_mode, output_format))
        if output_format == OutputFormat.MATHML:
            return f'<span class="wrap"><math display="block"><mi>{source}</mi></math></span>'
        mode = "display" if display_mode else "inline"
        return f'<span class="{mode}">{source}</span>'


class FailingDelegate:
    """Raises for any source listed in *bad*, or for everything when *bad* is None."""

    def __init__(self, bad=None) -> None:
        self.bad = bad

    def convert(self, source, display_mode, output_format):
        if self.bad is None or source in self.bad:
            raise ValueError(f"cannot typeset {source}")
        return EchoDelegate().convert(source, display_mode, output_format)


# ── CLI runner ─────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ── Renderers ──────────────────────────────────────────────────────────────


@pytest.fixture
def echo_delegate() -> EchoDelegate:
    return EchoDelegate()


@pytest.fixture
def echo_renderer(echo_delegate) -> VisualRenderer:
    return VisualRenderer(echo_delegate)


@pytest.fixture
def failing_renderer() -> VisualRenderer:
    return VisualRenderer(FailingDelegate())


@pytest.fixture
def absent_renderer() -> VisualRenderer:
    return VisualRenderer(None)
