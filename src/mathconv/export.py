"""Word (.docx) export of recognition results.

The document is one title line, one timestamp line, an empty separator and
then one paragraph per input line.  Math is written as literal text in a
math font; it is not turned into an editable Word equation.
"""

import asyncio
import io
import logging
import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, RGBColor

logger = logging.getLogger(__name__)


class ExportMode(str, Enum):
    FORMULA = "formula"
    DOCUMENT = "document"
    OCR = "ocr"


TITLES = {
    ExportMode.FORMULA: "Formula Recognition Result",
    ExportMode.DOCUMENT: "Document Recognition Result",
    ExportMode.OCR: "OCR Recognition Result",
}

MATH_FONT = "Cambria Math"
TEXT_FONT = "Microsoft YaHei"
DEFAULT_LABEL = "recognition_result"
EXTENSION = "docx"

# (blob path, download filename) -> saved artifact path
Sink = Callable[[Path, str], Path]


def _add_run(paragraph, text: str, size: int, font: str, bold: bool = False,
             color: Optional[RGBColor] = None) -> None:
    run = paragraph.add_run(text)
    run.bold = bold
    run.font.size = Pt(size)
    run.font.name = font
    if color is not None:
        run.font.color.rgb = color


def build_document(content: str, mode: ExportMode, now: Optional[datetime] = None):
    """Lay out *content* as a python-docx ``Document``."""
    mode = ExportMode(mode)
    now = now or datetime.now()
    doc = Document()

    title = doc.add_paragraph()
    title.alignment = WD_ALIGN_PARAGRAPH.CENTER
    title.paragraph_format.space_after = Pt(15)
    _add_run(title, TITLES[mode], size=16, font=TEXT_FONT, bold=True)

    stamp = doc.add_paragraph()
    stamp.paragraph_format.space_after = Pt(10)
    _add_run(
        stamp,
        f"Recognized at: {now:%Y-%m-%d %H:%M:%S}",
        size=9,
        font=TEXT_FONT,
        color=RGBColor(0x88, 0x88, 0x88),
    )

    doc.add_paragraph().paragraph_format.space_after = Pt(10)

    body_font = MATH_FONT if mode == ExportMode.FORMULA else TEXT_FONT
    for line in content.split("\n"):
        para = doc.add_paragraph()
        para.paragraph_format.space_after = Pt(5)
        _add_run(para, line, size=12, font=body_font)

    return doc


def serialize_document(content: str, mode: ExportMode, now: Optional[datetime] = None) -> bytes:
    buf = io.BytesIO()
    build_document(content, mode, now).save(buf)
    return buf.getvalue()


def artifact_name(label: str, millis: int) -> str:
    return f"{label}_{millis}.{EXTENSION}"


# ── Temporary blob and sinks ───────────────────────────────────────────────────


@dataclass
class BlobHandle:
    """A serialized artifact parked in a temporary file until it is saved."""

    path: Path

    @classmethod
    def create(cls, data: bytes) -> "BlobHandle":
        fd, name = tempfile.mkstemp(prefix="mathconv_", suffix=f".{EXTENSION}")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
        except BaseException:
            os.unlink(name)
            raise
        return cls(path=Path(name))

    def release(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.debug("Released temporary blob %s", self.path)


def save_to_directory(directory: Path) -> Sink:
    """Sink that copies the blob into *directory* under its download name."""

    def save(blob_path: Path, filename: str) -> Path:
        target = Path(directory) / filename
        shutil.copyfile(blob_path, target)
        return target

    return save


async def export_document(
    content: str,
    mode: ExportMode,
    sink: Sink,
    label: str = DEFAULT_LABEL,
    clock: Callable[[], float] = time.time,
) -> Path:
    """Serialize *content*, hand the blob to *sink*, and always free the blob.

    Serialization and sink failures propagate to the awaiting caller.
    """
    data = await asyncio.to_thread(serialize_document, content, mode)
    filename = artifact_name(label, int(clock() * 1000))
    handle = BlobHandle.create(data)
    try:
        saved = await asyncio.to_thread(sink, handle.path, filename)
    finally:
        handle.release()
    logger.info("Exported %s (%d bytes)", saved, len(data))
    return saved
