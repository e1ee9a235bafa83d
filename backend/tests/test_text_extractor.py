import io

import pytest
from docx import Document

from services import text_extractor
from services.errors import ExtractionFailure


def _docx_bytes(*paragraphs: str) -> bytes:
    doc = Document()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class TestExtractFromBytes:
    def test_txt(self):
        text = text_extractor.extract_report_from_bytes(b"Skills:\n  PHP,   MySQL\n", "resume.TXT").text
        assert text == "Skills: PHP, MySQL"

    def test_docx(self):
        content = _docx_bytes("Experience", "Backend developer at Acme")
        assert text_extractor.extract_report_from_bytes(content, "cv.docx").text == "Experience Backend developer at Acme"

    def test_unsupported_extension(self):
        with pytest.raises(ExtractionFailure, match="Unsupported"):
            text_extractor.extract_report_from_bytes(b"MZ...", "resume.exe")

    def test_empty_document(self):
        with pytest.raises(ExtractionFailure, match="empty"):
            text_extractor.extract_report_from_bytes(b"", "resume.txt")

    def test_corrupt_pdf(self):
        with pytest.raises(ExtractionFailure) as exc_info:
            text_extractor.extract_report_from_bytes(b"definitely not a pdf", "resume.pdf")
        assert exc_info.value.path == "resume.pdf"

    def test_whitespace_only_document(self):
        with pytest.raises(ExtractionFailure, match="No text"):
            text_extractor.extract_report_from_bytes(b"   \n\t ", "resume.txt")


class TestExtractFromPath:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "resume.txt"
        path.write_text("Education\nBachelor of Science", encoding="utf-8")
        assert text_extractor.extract_report(path).text == "Education Bachelor of Science"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ExtractionFailure, match="Could not open"):
            text_extractor.extract_report(tmp_path / "nope.pdf")

    def test_unsupported_type(self, tmp_path):
        path = tmp_path / "resume.rtf"
        path.write_text("text")
        with pytest.raises(ExtractionFailure, match="Unsupported"):
            text_extractor.extract_report(path)


def test_clean_text():
    raw = "“Hello”   world .  Next\x07 line�"
    assert text_extractor.clean_text(raw) == '"Hello" world. Next line'


def test_quality_and_issues_for_empty_text():
    assert text_extractor.assess_quality("") == 45
    assert text_extractor.detect_issues("") == [
        "Text too short - may be image-based PDF",
        "Very few readable words found",
        "No meaningful words detected",
    ]


def test_detects_encoding_and_repetition_issues():
    issues = text_extractor.detect_issues("Experience � ----------------- ")
    assert "Character encoding problems detected" in issues
    assert "Repetitive character patterns detected" in issues


def test_extraction_stats():
    stats = text_extractor.extraction_stats("Contact me at jane@example.com. Visit https://jane.dev now!")
    assert stats["has_email"] is True
    assert stats["has_urls"] is True
    assert stats["sentence_count"] >= 2
    assert 0 <= stats["readability_score"] <= 100


def test_build_report():
    report = text_extractor.build_report("Experience Education Skills")
    assert report.word_count == 3
    assert 0 <= report.quality_score <= 100
    assert report.stats["word_count"] == 3


class TestExtractionReport:
    def test_report_sees_line_breaks_before_cleaning(self):
        report = text_extractor.extract_report_from_bytes(b"a\nb\nc", "a.txt")
        assert report.text == "a b c"
        assert report.stats["line_count"] == 2

    def test_report_flags_encoding_artifacts_that_cleaning_removes(self):
        report = text_extractor.extract_report_from_bytes("Experience � skills".encode(), "cv.txt")
        assert "�" not in report.text
        assert "Character encoding problems detected" in report.issues

    def test_report_from_path(self, tmp_path):
        path = tmp_path / "resume.txt"
        path.write_text("Skills\nPHP\nMySQL", encoding="utf-8")
        report = text_extractor.extract_report(path)
        assert report.text == "Skills PHP MySQL"
        assert report.word_count == 3

    def test_report_failures_match_text_extraction(self):
        with pytest.raises(ExtractionFailure, match="No text"):
            text_extractor.extract_report_from_bytes(b"\n\n", "resume.txt")
