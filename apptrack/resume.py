"""Read resume text from an uploaded file.

Supports PDF (via pdftotext or pypdf), DOCX (via stdlib zipfile) and TXT.
``extract_with_progress`` runs the extraction in a worker thread and reports
a simulated progress percentage while it waits.
"""
from __future__ import annotations

import re
import shutil
import subprocess
import zipfile
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable
from xml.etree import ElementTree

from apptrack.log import get_logger

log = get_logger(__name__)

SUPPORTED_SUFFIXES: tuple[str, ...] = (".pdf", ".docx", ".txt")


def extract_text(path: Path) -> str:
    """Return plain text from a PDF, DOCX, or TXT file."""
    suffix = path.suffix.lower()
    if suffix == ".txt":
        return path.read_text(encoding="utf-8", errors="ignore")
    if suffix == ".docx":
        return _extract_docx(path)
    if suffix == ".pdf":
        return _extract_pdf(path)
    raise ValueError(f"Unsupported resume format: {suffix}")


def _fix_spacing(text: str) -> str:
    """Re-insert spaces when PDF extraction merges words together."""
    if not text or len(text) < 50:
        return text
    space_ratio = text.count(" ") / len(text)
    if space_ratio > 0.08:
        return text

    log.debug("Low space ratio (%.2f%%) — applying spacing fix", space_ratio * 100)
    fixed = re.sub(r"([a-z])([A-Z])", r"\1 \2", text)
    fixed = re.sub(r"([a-zA-Z])(\d)", r"\1 \2", fixed)
    fixed = re.sub(r"(\d)([a-zA-Z])", r"\1 \2", fixed)
    fixed = re.sub(r"([.!?,;:])([A-Za-z])", r"\1 \2", fixed)
    return fixed


def _extract_pdf(path: Path) -> str:
    # Prefer pdftotext (better spacing) over pypdf
    if shutil.which("pdftotext"):
        result = subprocess.run(
            ["pdftotext", "-layout", str(path), "-"],
            capture_output=True,
            text=True,
            timeout=30,
        )
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout

    from pypdf import PdfReader

    reader = PdfReader(str(path))
    pages: list[str] = []
    for page in reader.pages:
        pages.append(_fix_spacing(page.extract_text() or ""))
    return "\n".join(pages)


def _extract_docx(path: Path) -> str:
    ns = "{http://schemas.openxmlformats.org/wordprocessingml/2006/main}"
    texts: list[str] = []
    with zipfile.ZipFile(path) as zf:
        with zf.open("word/document.xml") as f:
            tree = ElementTree.parse(f)
            for para in tree.iter(f"{ns}p"):
                parts = [node.text for node in para.iter(f"{ns}t") if node.text]
                if parts:
                    texts.append("".join(parts))
    return "\n".join(texts)


def extract_with_progress(
    path: Path,
    on_progress: Callable[[int], None],
    *,
    interval: float = 0.2,
    step: int = 10,
    max_ticks: int = 9,
) -> str:
    """Extract *path* in the background, ticking *on_progress* until done.

    Simulated progress stops after ``max_ticks`` ticks (never past 90) so a
    hung extraction cannot spin the indicator forever; 100 is reported only
    once the text is actually available. Extraction errors propagate.
    """
    ticks = 0
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(extract_text, path)
        while True:
            done, _ = wait([future], timeout=interval)
            if done:
                break
            if ticks < max_ticks:
                ticks += 1
                on_progress(min(90, ticks * step))
        text = future.result()
    on_progress(100)
    log.info("Extracted %d chars from %s", len(text), path.name)
    return text
