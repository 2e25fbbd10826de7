"""Render prose interleaved with ``$``/``$$`` math spans to HTML.

Segmentation
------------
Two passes over the document, block spans first:

1. ``$$ ... $$``  — shortest matching pair, may cross line breaks.
2. ``$ ... $``    — non-empty, never crosses a line break, only searched in
                    the prose left over by pass 1.

Running the block pass first is what keeps ``$$x$$`` from being read as two
empty inline spans.  Delimiters without a partner stay in the prose.

Rendering
---------
Math spans are typeset one at a time and parked behind placeholders while the
markdown-light rules (``#`` headings, ``**bold**``, line breaks) run over the
escaped prose.  A span that fails to typeset falls back to its escaped source
on its own; the rest of the document is unaffected.
"""

import html
import re
from dataclasses import dataclass
from typing import Optional, Union

from mathconv.renderer import VisualRenderer, fallback_markup

_BLOCK_MATH = re.compile(r"\$\$([\s\S]*?)\$\$")
_INLINE_MATH = re.compile(r"\$([^$\n]+?)\$")


# ── Segments ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ProseText:
    text: str

    @property
    def source(self) -> str:
        return self.text


@dataclass(frozen=True)
class BlockMath:
    text: str

    @property
    def source(self) -> str:
        return f"$${self.text}$$"


@dataclass(frozen=True)
class InlineMath:
    text: str

    @property
    def source(self) -> str:
        return f"${self.text}$"


Segment = Union[ProseText, BlockMath, InlineMath]


def _split(text: str, pattern: re.Pattern, math_cls) -> list:
    segments: list = []
    cursor = 0
    for m in pattern.finditer(text):
        if m.start() > cursor:
            segments.append(ProseText(text[cursor:m.start()]))
        segments.append(math_cls(m.group(1)))
        cursor = m.end()
    if cursor < len(text):
        segments.append(ProseText(text[cursor:]))
    return segments


def segment(doc: str) -> list[Segment]:
    """Split *doc* into prose, block-math and inline-math segments.

    Joining ``s.source`` over the result gives back *doc* exactly.
    """
    segments: list[Segment] = []
    for part in _split(doc, _BLOCK_MATH, BlockMath):
        if isinstance(part, ProseText):
            segments.extend(_split(part.text, _INLINE_MATH, InlineMath))
        else:
            segments.append(part)
    return segments


# ── Markdown-light ─────────────────────────────────────────────────────────────

_MARKDOWN_RULES = [
    (re.compile(r"^### (.+)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.+)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.+)$", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\n"), "<br/>"),
]

# Prose NULs are replaced before placeholders go in, so these cannot collide.
_PLACEHOLDER = "\x00{}\x00"
_PLACEHOLDER_RE = re.compile(r"\x00(\d+)\x00")


def _render_math(seg: Segment, renderer: VisualRenderer) -> str:
    display = isinstance(seg, BlockMath)
    tex = seg.text.strip()
    rendered = renderer.try_render(tex, display_mode=display)
    if rendered is None:
        return fallback_markup(tex, display_mode=display)
    if display:
        return f'<div class="math-block">{rendered}</div>'
    return rendered


def render_mixed(doc: str, renderer: Optional[VisualRenderer] = None) -> str:
    """Render a prose-plus-math document to an HTML fragment. Never raises."""
    renderer = renderer or VisualRenderer()
    parts: list[str] = []
    rendered_math: list[str] = []
    for seg in segment(doc):
        if isinstance(seg, ProseText):
            parts.append(html.escape(seg.text, quote=False).replace("\x00", "\ufffd"))
        else:
            parts.append(_PLACEHOLDER.format(len(rendered_math)))
            rendered_math.append(_render_math(seg, renderer))

    out = "".join(parts)
    for pattern, replacement in _MARKDOWN_RULES:
        out = pattern.sub(replacement, out)
    return _PLACEHOLDER_RE.sub(lambda m: rendered_math[int(m.group(1))], out)


# ── Plain text and delimiter normalisation ─────────────────────────────────────


def to_plain_text(doc: str) -> str:
    """Drop every math span and the ``#``/``*``/backtick markup, then strip."""
    text = _BLOCK_MATH.sub("", doc)
    text = _INLINE_MATH.sub("", text)
    return re.sub(r"[#*`]", "", text).strip()


def normalize_delimiters(text: str) -> str:
    """``\\[ ... \\]`` → ``$$ ... $$`` and ``\\( ... \\)`` → ``$ ... $``.

    Whitespace inside the delimiters is kept as is.
    """
    text = re.sub(r"\\\[(.*?)\\\]", r"$$\1$$", text, flags=re.DOTALL)
    return re.sub(r"\\\((.*?)\\\)", r"$\1$", text, flags=re.DOTALL)
