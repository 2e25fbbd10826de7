"""Configuration loading from environment variables and CLI flags."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mathconv.export import DEFAULT_LABEL
from mathconv.transpile import LatexWrapping

ENV_EXPORT_DIR = "MATHCONV_EXPORT_DIR"
ENV_EXPORT_LABEL = "MATHCONV_EXPORT_LABEL"
ENV_LATEX_WRAPPING = "MATHCONV_LATEX_WRAPPING"


def latex_wrapping_from_env(wrapping_override: Optional[str] = None) -> LatexWrapping:
    wrapping = wrapping_override or os.environ.get(ENV_LATEX_WRAPPING) or LatexWrapping.DISPLAY.value
    try:
        return LatexWrapping(wrapping)
    except ValueError:
        choices = ", ".join(w.value for w in LatexWrapping)
        raise RuntimeError(
            f"Unknown LaTeX wrapping {wrapping!r} in {ENV_LATEX_WRAPPING}. "
            f"Expected one of: {choices}."
        ) from None


@dataclass
class Config:
    export_dir: Path
    export_label: str
    latex_wrapping: LatexWrapping

    @classmethod
    def from_env(
        cls,
        export_dir_override: Optional[Path] = None,
        label_override: Optional[str] = None,
        wrapping_override: Optional[str] = None,
    ) -> "Config":
        export_dir = Path(export_dir_override or os.environ.get(ENV_EXPORT_DIR) or ".")
        if export_dir.exists() and not export_dir.is_dir():
            raise RuntimeError(
                f"Export path {export_dir} is not a directory. "
                f"Check {ENV_EXPORT_DIR} or --output-dir."
            )

        label = label_override or os.environ.get(ENV_EXPORT_LABEL) or DEFAULT_LABEL

        return cls(
            export_dir=export_dir,
            export_label=label,
            latex_wrapping=latex_wrapping_from_env(wrapping_override),
        )
