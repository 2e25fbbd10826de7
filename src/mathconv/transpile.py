"""Convert one LaTeX math source into the notations other tools paste.

Conversion table
----------------
==========  ===========================  =============================
Target      Wrapping                     ``\\frac{a}{b}`` becomes
==========  ===========================  =============================
asciimath   none                         ``(a)/(b)``
typst       ``$...$``                    ``$(a) / (b)$``
mathml      raw ``<math>`` or ``""``     ``<math ...>...</math>``
html        delegate markup / fallback   ``<span class="math ...">``
latex       per :class:`LatexWrapping`   ``$$\\frac{a}{b}$$``
==========  ===========================  =============================

Every path is total: an empty string is the "MathML unavailable" sentinel,
not an error.
"""

import re
from enum import Enum
from typing import Optional

from mathconv.renderer import OutputFormat, VisualRenderer
from mathconv.rules import ASCIIMATH_RULES, TYPST_RULES, apply_rules


class NotationTarget(str, Enum):
    ASCIIMATH = "asciimath"
    TYPST = "typst"
    MATHML = "mathml"
    HTML = "html"
    LATEX = "latex"


class LatexWrapping(str, Enum):
    BARE = "bare"
    INLINE = "inline"
    DISPLAY = "display"
    BRACKET = "bracket"
    PAREN = "paren"
    EQUATION = "equation"


_WRAPPERS = {
    LatexWrapping.BARE: ("", ""),
    LatexWrapping.INLINE: ("$", "$"),
    LatexWrapping.DISPLAY: ("$$", "$$"),
    LatexWrapping.BRACKET: ("\\[", "\\]"),
    LatexWrapping.PAREN: ("\\(", "\\)"),
    LatexWrapping.EQUATION: ("\\begin{equation}\n", "\n\\end{equation}"),
}

# Greedy: from the first opening tag to the last closing tag.
_MATH_ELEMENT = re.compile(r"<math[\s>][\s\S]*</math>")


def to_asciimath(source: str) -> str:
    return apply_rules(source, ASCIIMATH_RULES)


def to_typst(source: str) -> str:
    return "$" + apply_rules(source, TYPST_RULES) + "$"


def to_mathml(source: str, renderer: Optional[VisualRenderer] = None) -> str:
    """Extract the ``<math>`` element the delegate produces, or ``""``."""
    renderer = renderer or VisualRenderer()
    rendered = renderer.try_render(source, display_mode=True, output_format=OutputFormat.MATHML)
    if not rendered:
        return ""
    m = _MATH_ELEMENT.search(rendered)
    return m.group(0) if m else ""


def wrap_latex(source: str, wrapping: LatexWrapping = LatexWrapping.DISPLAY) -> str:
    opening, closing = _WRAPPERS[LatexWrapping(wrapping)]
    return f"{opening}{source}{closing}"


def transpile(
    source: str,
    target: NotationTarget,
    renderer: Optional[VisualRenderer] = None,
    wrapping: LatexWrapping = LatexWrapping.DISPLAY,
) -> str:
    target = NotationTarget(target)
    if target == NotationTarget.ASCIIMATH:
        return to_asciimath(source)
    if target == NotationTarget.TYPST:
        return to_typst(source)
    if target == NotationTarget.MATHML:
        return to_mathml(source, renderer)
    if target == NotationTarget.HTML:
        return (renderer or VisualRenderer()).render(source, display_mode=True)
    return wrap_latex(source, wrapping)
