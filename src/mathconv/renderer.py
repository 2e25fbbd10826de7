"""Visual math renderer adapter.

Wraps a single math-typesetting delegate behind :class:`VisualRenderer`.
The delegate is injected, so tests (and hosts without a typesetter) can pass
a fake or ``None``.  Whatever the delegate does, the adapter never raises:
a missing or failing delegate turns into an escaped, inert fallback.
"""

import html
import logging
from enum import Enum
from typing import Optional, Protocol

import latex2mathml.converter

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    HTML = "html"
    MATHML = "mathml"


class MathDelegate(Protocol):
    def convert(self, source: str, display_mode: bool, output_format: OutputFormat) -> str:
        """Typeset *source*; may raise on malformed input."""
        ...


class Latex2MathMLDelegate:
    """Delegate backed by latex2mathml.

    HTML output is the MathML element inside a ``<span>`` so browsers render
    it natively and stylesheets can tell display math from inline math.
    """

    def convert(self, source: str, display_mode: bool, output_format: OutputFormat) -> str:
        mathml = latex2mathml.converter.convert(
            source, display="block" if display_mode else "inline"
        )
        if output_format == OutputFormat.MATHML:
            return mathml
        css_class = "math-display" if display_mode else "math-inline"
        return f'<span class="math {css_class}">{mathml}</span>'


_DEFAULT = object()


def fallback_markup(source: str, display_mode: bool = False) -> str:
    """Escaped raw source in an inert wrapper: ``<pre>`` for display, ``<code>`` inline."""
    tag = "pre" if display_mode else "code"
    return f"<{tag}>{html.escape(source, quote=False)}</{tag}>"


class VisualRenderer:
    def __init__(self, delegate=_DEFAULT) -> None:
        self.delegate: Optional[MathDelegate] = (
            Latex2MathMLDelegate() if delegate is _DEFAULT else delegate
        )

    @property
    def available(self) -> bool:
        return self.delegate is not None

    def try_render(
        self,
        source: str,
        display_mode: bool = False,
        output_format: OutputFormat = OutputFormat.HTML,
    ) -> Optional[str]:
        """Return the delegate's markup, or ``None`` if it is absent or fails."""
        if self.delegate is None:
            logger.debug("No math delegate configured; skipping render")
            return None
        try:
            rendered = self.delegate.convert(source, display_mode, output_format)
        except Exception as e:
            logger.warning("Math render failed for %r: %s", source, e)
            return None
        if not isinstance(rendered, str):
            logger.warning("Math delegate returned %s for %r", type(rendered).__name__, source)
            return None
        return rendered

    def render(
        self,
        source: str,
        display_mode: bool = False,
        output_format: OutputFormat = OutputFormat.HTML,
    ) -> str:
        rendered = self.try_render(source, display_mode, output_format)
        if rendered is None:
            return fallback_markup(source, display_mode)
        return rendered
