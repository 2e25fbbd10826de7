"""Ordered rewrite-rule tables for LaTeX → AsciiMath / Typst.

Each table is a list of ``(pattern, replacement)`` pairs applied with
``re.sub`` strictly in order.  A rule only ever sees the output of the rules
before it; nothing is re-scanned or backtracked.

Table order
-----------
1. ``\\frac{A}{B}``            →  ``(A)/(B)``  /  ``(A) / (B)``
2. ``\\sqrt{A}``               →  ``sqrt(A)``
3. ``\\left(`` ``\\right]`` …   →  bare brackets          (AsciiMath only)
4. ``^{A}`` then ``_{A}``      →  ``^(A)`` / ``_(A)``
5. Greek letters, operator names  →  bare word
6. Symbolic operators          →  target-specific spelling
7. Any remaining ``\\word``     →  deleted, braces kept as literal text

Groups are matched with ``[^}]*`` so a nested brace ends the group early.
That is a known limitation of the table approach, not something the rules
try to repair.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class RewriteRule:
    pattern: re.Pattern
    replacement: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(pattern: str, replacement: str) -> RewriteRule:
    return RewriteRule(re.compile(pattern), replacement)


# ── Shared vocabulary ─────────────────────────────────────────────────────────

GREEK_LETTERS = (
    "alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta",
    "iota", "kappa", "lambda", "mu", "nu", "xi", "pi", "rho", "sigma", "tau",
    "phi", "chi", "psi", "omega",
    "Gamma", "Delta", "Theta", "Lambda", "Xi", "Pi", "Sigma", "Phi", "Psi",
    "Omega",
)

OPERATOR_NAMES = (
    "sum", "prod", "int", "lim", "inf", "sup", "sin", "cos", "tan", "sinh",
    "cosh", "tanh", "log", "ln", "exp", "max", "min", "det",
)

# The lookahead stops ``\inf`` from eating the front of ``\infty``.
_GREEK = _rule(r"\\(%s)(?![a-zA-Z])" % "|".join(GREEK_LETTERS), r"\1")
_OPERATORS = _rule(r"\\(%s)(?![a-zA-Z])" % "|".join(OPERATOR_NAMES), r"\1")

_SQRT = _rule(r"\\sqrt\{([^}]*)\}", r"sqrt(\1)")
_SUPERSCRIPT = _rule(r"\^\{([^}]*)\}", r"^(\1)")
_SUBSCRIPT = _rule(r"_\{([^}]*)\}", r"_(\1)")
_FALLBACK = _rule(r"\\[a-zA-Z]+", "")


def _symbols(mapping: dict) -> list:
    return [_rule(r"\\%s(?![a-zA-Z])" % name, repl) for name, repl in mapping.items()]


# ── Tables ────────────────────────────────────────────────────────────────────

ASCIIMATH_RULES: list[RewriteRule] = [
    _rule(r"\\frac\{([^}]*)\}\{([^}]*)\}", r"(\1)/(\2)"),
    _SQRT,
    _rule(r"\\left\(", "("),
    _rule(r"\\right\)", ")"),
    _rule(r"\\left\[", "["),
    _rule(r"\\right\]", "]"),
    _SUPERSCRIPT,
    _SUBSCRIPT,
    _GREEK,
    _OPERATORS,
    *_symbols({
        "cdot": "*",
        "times": "xx",
        "div": "-:",
        "pm": "+-",
        "mp": "-+",
        "leq": "<=",
        "geq": ">=",
        "neq": "!=",
        "infty": "oo",
    }),
    _FALLBACK,
]

TYPST_RULES: list[RewriteRule] = [
    _rule(r"\\frac\{([^}]*)\}\{([^}]*)\}", r"(\1) / (\2)"),
    _SQRT,
    _SUPERSCRIPT,
    _SUBSCRIPT,
    _GREEK,
    _OPERATORS,
    *_symbols({
        "cdot": "dot",
        "times": "times",
        "div": "div",
        "pm": "plus.minus",
        "mp": "minus.plus",
        "leq": "<=",
        "geq": ">=",
        "neq": "!=",
        "infty": "infinity",
    }),
    _FALLBACK,
]


def apply_rules(source: str, rules: list[RewriteRule]) -> str:
    """Fold *source* through *rules* in table order."""
    for rule in rules:
        source = rule.apply(source)
    return source
