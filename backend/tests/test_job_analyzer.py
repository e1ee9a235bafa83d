"""Tests for the analysis orchestrator."""

import asyncio
import logging

import pytest

from models.schemas.analysis import AnalysisType, ApplicationInput, RecommendationCategory
from models.schemas.common import round_half_up
from models.schemas.sections import Section
from services import job_analyzer
from services.errors import AIServiceFailure, ExtractionFailure
from services.job_analyzer import AnalysisOrchestrator, PipelineState, basic_analysis

from conftest import SAMPLE_COVER_LETTER, SAMPLE_JD, SAMPLE_RESUME, FakeAIClient

SCENARIO_JD = "Looking for a PHP developer with MySQL and Docker experience, 3+ years required"
SCENARIO_RESUME = "PHP, MySQL, 5 years experience, Bachelor's in Computer Science"


class TestBasicAnalysis:
    @pytest.mark.scenario
    def test_php_mysql_docker_scenario(self):
        result = basic_analysis(SCENARIO_JD, SCENARIO_RESUME)
        assert {"php", "mysql"} <= set(result.keyword_analysis.matching)
        assert "docker" in result.keyword_analysis.missing
        assert result.resume_match_score > 0
        assert result.section_scores.education > 0
        assert result.analysis_type == AnalysisType.BASIC

    @pytest.mark.scenario
    def test_empty_resume_scenario(self):
        result = basic_analysis(SCENARIO_JD, "")
        assert all(score == 0 for _, score in result.section_scores.items())
        assert result.ats_score == 30
        assert result.resume_match_score == 0
        assert result.overall_score == 0
        assert len(result.recommendations) == 5

    def test_cover_letter_contributes(self):
        without = basic_analysis(SAMPLE_JD, SAMPLE_RESUME)
        with_letter = basic_analysis(SAMPLE_JD, SAMPLE_RESUME, SAMPLE_COVER_LETTER)
        assert with_letter.cover_letter_match_score > 0
        assert with_letter.overall_score > without.overall_score

    def test_empty_job_description(self):
        result = basic_analysis("", SAMPLE_RESUME)
        assert result.resume_match_score == 0
        assert result.keyword_analysis.density == 0
        assert result.section_scores.get(Section.EXPERIENCE) > 0


class TestOrchestrator:
    @pytest.mark.asyncio
    async def test_ai_disabled_uses_enhanced_basic(self):
        orchestrator = AnalysisOrchestrator(ai_enabled=False)
        result = await orchestrator.analyze(SAMPLE_JD, SAMPLE_RESUME)

        assert result.analysis_type == AnalysisType.BASIC_ENHANCED
        assert result.ai_confidence_level == 60
        assert orchestrator.state == PipelineState.COMPLETED
        assert orchestrator.history == [
            PipelineState.NOT_STARTED,
            PipelineState.EXTRACTING_TEXT,
            PipelineState.SCORING_BASIC,
            PipelineState.SKIPPING_AI,
            PipelineState.AGGREGATING,
            PipelineState.COMPLETED,
        ]
        messages = [entry.message for entry in orchestrator.log.entries]
        assert messages[0] == "Starting job analysis"
        assert messages[-1] == "Job analysis completed"
        assert orchestrator.log.entries[-1].data["analysis_type"] == "basic_enhanced"

    @pytest.mark.asyncio
    async def test_enabled_without_client_skips_ai(self):
        orchestrator = AnalysisOrchestrator(ai_enabled=True, ai_client=None)
        result = await orchestrator.analyze(SAMPLE_JD, SAMPLE_RESUME)
        assert result.analysis_type == AnalysisType.BASIC_ENHANCED
        assert PipelineState.SKIPPING_AI in orchestrator.history

    @pytest.mark.asyncio
    async def test_ai_success_blends(self, fake_ai_client):
        orchestrator = AnalysisOrchestrator(ai_enabled=True, ai_client=fake_ai_client)
        basic = basic_analysis(SAMPLE_JD, SAMPLE_RESUME, SAMPLE_COVER_LETTER)
        result = await orchestrator.analyze(SAMPLE_JD, SAMPLE_RESUME, SAMPLE_COVER_LETTER)

        assert result.analysis_type == AnalysisType.COMBINED
        assert result.overall_score == round_half_up(basic.overall_score * 0.3 + 90 * 0.7)
        assert result.ai_recommendation == RecommendationCategory.EXCELLENT_MATCH
        assert result.ai_confidence_level == 92
        assert "rest apis" in result.keyword_analysis.matching
        assert result.recommendations_by_type("cover_letter") == ["Mention the company by name"]
        assert PipelineState.ATTEMPTING_AI in orchestrator.history
        assert fake_ai_client.calls == [(SAMPLE_JD, SAMPLE_RESUME, SAMPLE_COVER_LETTER)]

    @pytest.mark.scenario
    @pytest.mark.asyncio
    async def test_ai_timeout_falls_back_with_warning(self, caplog):
        orchestrator = AnalysisOrchestrator(
            ai_enabled=True,
            ai_client=FakeAIClient(error=asyncio.TimeoutError()),
        )
        with caplog.at_level(logging.WARNING):
            result = await orchestrator.analyze(SCENARIO_JD, SCENARIO_RESUME)

        assert result.analysis_type == AnalysisType.BASIC_ENHANCED
        assert orchestrator.state == PipelineState.COMPLETED
        warnings = orchestrator.log.by_level("warning")
        assert len(warnings) == 1
        assert "falling back" in warnings[0].message
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    @pytest.mark.asyncio
    async def test_slow_ai_is_bounded_by_timeout(self):
        orchestrator = AnalysisOrchestrator(
            ai_enabled=True,
            ai_client=FakeAIClient(delay=5),
            ai_timeout=0.01,
        )
        result = await orchestrator.analyze(SAMPLE_JD, SAMPLE_RESUME)
        assert result.analysis_type == AnalysisType.BASIC_ENHANCED
        assert "timed out" in orchestrator.log.by_level("warning")[0].data["reason"]

    @pytest.mark.asyncio
    async def test_ai_service_failure_is_not_raised(self):
        client = FakeAIClient(error=AIServiceFailure("AI service returned HTTP 502"))
        orchestrator = AnalysisOrchestrator(ai_enabled=True, ai_client=client)
        result = await orchestrator.analyze(SAMPLE_JD, SAMPLE_RESUME)
        assert result.analysis_type == AnalysisType.BASIC_ENHANCED
        assert orchestrator.log.by_level("error") == []

    @pytest.mark.asyncio
    async def test_instances_are_single_use(self):
        orchestrator = AnalysisOrchestrator()
        await orchestrator.analyze(SAMPLE_JD, SAMPLE_RESUME)
        with pytest.raises(RuntimeError):
            await orchestrator.analyze(SAMPLE_JD, SAMPLE_RESUME)


class TestAnalyzeDocuments:
    @pytest.mark.asyncio
    async def test_extracts_then_scores(self, tmp_path):
        resume = tmp_path / "resume.txt"
        resume.write_text(SAMPLE_RESUME, encoding="utf-8")
        orchestrator = AnalysisOrchestrator()

        result = await orchestrator.analyze_documents(SAMPLE_JD, resume_path=resume)

        assert result.overall_score > 0
        extracted = [e for e in orchestrator.log.entries if e.message == "Extracted resume text"]
        assert extracted and extracted[0].data["word_count"] > 50

    @pytest.mark.asyncio
    async def test_extraction_failure_propagates(self, tmp_path):
        orchestrator = AnalysisOrchestrator()
        with pytest.raises(ExtractionFailure):
            await orchestrator.analyze_documents(SAMPLE_JD, resume_path=tmp_path / "missing.pdf")

        assert orchestrator.state == PipelineState.FAILED
        assert PipelineState.SCORING_BASIC not in orchestrator.history
        errors = orchestrator.log.by_level("error")
        assert errors[0].data["error_type"] == "ExtractionFailure"

    @pytest.mark.asyncio
    async def test_extractor_errors_become_extraction_failures(self):
        def broken_extractor(path):
            raise ValueError("bad xref table")

        orchestrator = AnalysisOrchestrator(text_extractor=broken_extractor)
        with pytest.raises(ExtractionFailure, match="bad xref table"):
            await orchestrator.analyze_documents(SAMPLE_JD, cover_letter_path="letter.pdf")
        assert orchestrator.state == PipelineState.FAILED


class TestAnalyzeUploads:
    @pytest.mark.asyncio
    async def test_extracts_uploads_then_scores(self):
        orchestrator = AnalysisOrchestrator()
        result = await orchestrator.analyze_uploads(
            SAMPLE_JD,
            resume=(SAMPLE_RESUME.encode(), "resume.txt"),
            cover_letter=(SAMPLE_COVER_LETTER.encode(), "letter.txt"),
        )

        assert result.cover_letter_match_score > 0
        assert set(orchestrator.extraction_reports) == {"resume", "cover_letter"}
        assert orchestrator.history[:3] == [
            PipelineState.NOT_STARTED,
            PipelineState.EXTRACTING_TEXT,
            PipelineState.SCORING_BASIC,
        ]
        messages = [e.message for e in orchestrator.log.entries]
        assert "Extracted cover letter text" in messages

    @pytest.mark.asyncio
    async def test_corrupt_upload_fails_the_run(self):
        orchestrator = AnalysisOrchestrator()
        with pytest.raises(ExtractionFailure):
            await orchestrator.analyze_uploads(SAMPLE_JD, resume=(b"not a pdf", "resume.pdf"))

        assert orchestrator.history == [
            PipelineState.NOT_STARTED,
            PipelineState.EXTRACTING_TEXT,
            PipelineState.FAILED,
        ]
        errors = orchestrator.log.by_level("error")
        assert errors[0].data["error_type"] == "ExtractionFailure"


@pytest.mark.asyncio
async def test_module_level_analyze():
    result = await job_analyzer.analyze(SAMPLE_JD, SAMPLE_RESUME, ai_enabled=False)
    assert result.analysis_type == AnalysisType.BASIC_ENHANCED


@pytest.mark.asyncio
async def test_module_level_analyze_with_client(fake_ai_client):
    result = await job_analyzer.analyze(SAMPLE_JD, SAMPLE_RESUME, ai_enabled=True, ai_client=fake_ai_client)
    assert result.analysis_type == AnalysisType.COMBINED


class TestAnalyzeBatch:
    @pytest.mark.asyncio
    async def test_runs_every_item(self):
        items = [
            ApplicationInput(job_description=SAMPLE_JD, resume_text=SAMPLE_RESUME, label="strong"),
            ApplicationInput(job_description=SAMPLE_JD, resume_text="", label="empty"),
        ]
        batch = await job_analyzer.analyze_batch(items, ai_enabled=False)

        assert batch.summary.total == 2
        assert batch.summary.successful == 2
        assert [r.label for r in batch.results] == ["strong", "empty"]
        assert batch.results[0].result.overall_score > batch.results[1].result.overall_score

    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_the_rest(self):
        calls = []

        def factory(ai_enabled, ai_client):
            calls.append(ai_enabled)
            if len(calls) == 2:
                raise RuntimeError("orchestrator unavailable")
            return AnalysisOrchestrator(ai_enabled=False)

        items = [ApplicationInput(job_description=SAMPLE_JD, resume_text=SAMPLE_RESUME)] * 3
        batch = await job_analyzer.analyze_batch(items, orchestrator_factory=factory)

        assert batch.summary.model_dump() == {"total": 3, "successful": 2, "failed": 1}
        failed = [r for r in batch.results if not r.success]
        assert failed[0].index == 1
        assert failed[0].error == "orchestrator unavailable"
