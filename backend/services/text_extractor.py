"""Document-to-text extraction for resumes and cover letters.

PDF goes through pdfplumber, DOCX through python-docx, and plain text is
read as UTF-8. Every failure (missing file, unsupported type, corrupt
document, no text) is raised as ExtractionFailure, which is fatal to the
analysis run.
"""

import io
import logging
import re
from pathlib import Path

import pdfplumber
from docx import Document

from models.schemas.extraction import ExtractionReport
from services.errors import ExtractionFailure

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".pdf", ".docx", ".txt"})

REPLACEMENT_CHARS = ("�", "ï¿½")
_SMART_QUOTES = str.maketrans({"“": '"', "”": '"', "‘": "'", "’": "'"})

_WORD_RE = re.compile(r"[A-Za-z][A-Za-z'-]*")
_CAPITALIZED_RE = re.compile(r"[A-Z][a-z]+")
_SECTION_WORD_RE = re.compile(r"\b(experience|education|skills|summary|objective)\b", re.IGNORECASE)
_SENTENCE_END_RE = re.compile(r"[.!?]+")
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_PHONE_RE = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?\(?\d{3,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{0,9}")
_URL_RE = re.compile(r"https?://\S+")


def _extract_pdf(content: bytes) -> str:
    with pdfplumber.open(io.BytesIO(content)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages)


def _extract_docx(content: bytes) -> str:
    doc = Document(io.BytesIO(content))
    return "\n".join(p.text for p in doc.paragraphs)


def _extract_txt(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


_EXTRACTORS = {
    ".pdf": _extract_pdf,
    ".docx": _extract_docx,
    ".txt": _extract_txt,
}


def _read_document(content: bytes, filename: str) -> str:
    """Raw text of an in-memory document, before any cleaning."""
    ext = Path(filename).suffix.lower()
    extractor = _EXTRACTORS.get(ext)
    if extractor is None:
        raise ExtractionFailure(f"Unsupported file type '{ext or filename}'", path=filename)
    if not content:
        raise ExtractionFailure("Document is empty", path=filename)

    try:
        return extractor(content)
    except Exception as e:
        logger.error("Failed to parse %s: %s", filename, e)
        raise ExtractionFailure(f"Could not read {ext[1:].upper()} document: {e}", path=filename) from e


def _read_path(path: Path) -> bytes:
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise ExtractionFailure(f"Unsupported file type '{path.suffix or path.name}'", path=str(path))
    try:
        return path.read_bytes()
    except OSError as e:
        raise ExtractionFailure(f"Could not open {path.name}: {e.strerror or e}", path=str(path)) from e


def extract_report_from_bytes(content: bytes, filename: str) -> ExtractionReport:
    """Extract text from an in-memory document along with its quality report.

    The extension of `filename` picks the parser. Raises ExtractionFailure.

    Diagnostics run on the raw text, so line breaks and encoding artifacts
    are still visible to them; the report's `text` is the cleaned version.
    """
    report = build_report(_read_document(content, filename))
    if not report.text:
        raise ExtractionFailure("No text could be extracted from the document", path=filename)

    logger.debug(
        "Extracted %d words from %s (quality %d)", report.word_count, filename, report.quality_score
    )
    return report


def extract_report(path: str | Path) -> ExtractionReport:
    """Same as extract_report_from_bytes for a document on disk."""
    path = Path(path)
    return extract_report_from_bytes(_read_path(path), path.name)


def clean_text(text: str) -> str:
    """Normalize extracted text into a single line of readable prose."""
    for artifact in REPLACEMENT_CHARS:
        text = text.replace(artifact, "")
    text = text.translate(_SMART_QUOTES)
    # Drop control characters but keep ordinary unicode letters
    text = "".join(ch for ch in text if ch.isprintable() or ch.isspace())
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"\s*([.,;:!?])(?=\s|$)\s*", r"\1 ", text)
    return text.strip()


def _word_count(text: str) -> int:
    return len(_WORD_RE.findall(text))


def assess_quality(text: str) -> int:
    """Extraction quality 0-100: penalizes short, garbled, or unstructured text."""
    score = 100
    words = _word_count(text)
    if words < 50:
        score -= 40
    elif words < 100:
        score -= 20

    bad_chars = sum(text.count(artifact) for artifact in REPLACEMENT_CHARS)
    score -= min(30, bad_chars * 2)

    if len(_CAPITALIZED_RE.findall(text)) < words * 0.3:
        score -= 15

    if not _SECTION_WORD_RE.search(text):
        score -= 15

    return max(0, min(100, score))


def detect_issues(text: str) -> list[str]:
    issues = []
    if len(text) < 100:
        issues.append("Text too short - may be image-based PDF")
    if any(artifact in text for artifact in REPLACEMENT_CHARS):
        issues.append("Character encoding problems detected")
    if _word_count(text) < 50:
        issues.append("Very few readable words found")
    if not re.search(r"[a-zA-Z]{3,}", text):
        issues.append("No meaningful words detected")
    if re.search(r"(.)\1{10,}", text):
        issues.append("Repetitive character patterns detected")
    return issues


def _syllables(word: str) -> int:
    word = word.lower()
    count = len(re.findall(r"[aeiouy]+", word))
    if word.endswith("e") and count > 1:
        count -= 1
    return max(1, count)


def _readability(words: list[str], sentences: int) -> float:
    """Flesch reading ease, clamped to 0-100."""
    if not words or sentences == 0:
        return 0.0
    syllables = sum(_syllables(w) for w in words)
    score = 206.835 - 1.015 * (len(words) / sentences) - 84.6 * (syllables / len(words))
    return max(0.0, min(100.0, round(score, 1)))


def extraction_stats(text: str) -> dict[str, float | int | bool]:
    words = _WORD_RE.findall(text)
    sentences = len(_SENTENCE_END_RE.findall(text))
    avg_len = round(sum(len(w) for w in words) / len(words), 1) if words else 0.0
    return {
        "total_chars": len(text),
        "word_count": len(words),
        "line_count": text.count("\n"),
        "sentence_count": sentences,
        "avg_word_length": avg_len,
        "readability_score": _readability(words, sentences),
        "has_email": bool(_EMAIL_RE.search(text)),
        "has_phone": bool(_PHONE_RE.search(text)),
        "has_urls": bool(_URL_RE.search(text)),
    }


def build_report(raw_text: str) -> ExtractionReport:
    """Quality diagnostics for raw extracted text, plus its cleaned form."""
    text = clean_text(raw_text)
    return ExtractionReport(
        text=text,
        word_count=_word_count(text),
        quality_score=assess_quality(raw_text),
        issues=detect_issues(raw_text),
        stats=extraction_stats(raw_text),
    )
