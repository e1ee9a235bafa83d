"""Analysis orchestrator: runs one job application through the scoring pipeline.

States:
    not_started -> extracting_text -> scoring_basic
        -> attempting_ai | skipping_ai -> aggregating -> completed
    any state -> failed (extraction failure or unexpected error)

Basic scoring:
    job description -> keyword_extractor.extract()        -> JobKeywordSet
    resume text     -> section_scorer.score_sections()    -> SectionScores
                    -> match_calculator.match_percentage() (resume, cover letter)
                    -> match_calculator.keyword_analysis() -> KeywordAnalysisResult
                    -> ats_scorer.ats_score()
                    -> score_aggregator.aggregate() / recommendations()

The AI service is optional. Its outcome is either blended in (combined) or,
on any failure, dropped in favour of the enhanced basic result
(basic_enhanced). AI failures are logged as warnings and never raised.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Sequence
from enum import Enum
from pathlib import Path

from config import settings
from models.schemas.analysis import (
    ApplicationInput,
    BasicAnalysisResult,
    BatchAnalysisResult,
    BatchItemResult,
    BatchSummary,
    CombinedAnalysisResult,
)
from models.schemas.extraction import ExtractionReport
from models.schemas.sections import SectionScores
from services import (
    ai_blender,
    ats_scorer,
    keyword_extractor,
    match_calculator,
    score_aggregator,
    section_scorer,
    text_extractor,
)
from services.ai_client import AIFailure, AIServiceClient, AISuccess, get_ai_client, request_analysis
from services.analysis_log import AnalysisLog
from services.errors import ExtractionFailure

logger = logging.getLogger(__name__)

Upload = tuple[bytes, str]  # (content, filename)
TextExtractor = Callable[[str | Path], ExtractionReport]
UploadExtractor = Callable[[bytes, str], ExtractionReport]


class PipelineState(str, Enum):
    NOT_STARTED = "not_started"
    EXTRACTING_TEXT = "extracting_text"
    SCORING_BASIC = "scoring_basic"
    ATTEMPTING_AI = "attempting_ai"
    SKIPPING_AI = "skipping_ai"
    AGGREGATING = "aggregating"
    COMPLETED = "completed"
    FAILED = "failed"


def basic_analysis(
    job_description: str,
    resume_text: str,
    cover_letter_text: str = "",
) -> BasicAnalysisResult:
    """Score an application with the local heuristics only. Pure."""
    keywords = keyword_extractor.extract(job_description)
    resume = resume_text.lower()
    cover_letter = cover_letter_text.lower()

    section_scores = section_scorer.score_sections(resume) if resume.strip() else SectionScores()
    resume_match = match_calculator.match_percentage(keywords, resume)
    cover_letter_match = match_calculator.match_percentage(keywords, cover_letter)
    keyword_analysis = match_calculator.keyword_analysis(keywords, resume, cover_letter)

    return BasicAnalysisResult(
        overall_score=score_aggregator.aggregate(section_scores, resume_match, cover_letter_match),
        ats_score=ats_scorer.ats_score(resume),
        resume_match_score=resume_match,
        cover_letter_match_score=cover_letter_match,
        section_scores=section_scores,
        keyword_analysis=keyword_analysis,
        recommendations=score_aggregator.recommendations(
            section_scores, keyword_analysis, resume_match, cover_letter_match
        ),
    )


class AnalysisOrchestrator:
    """Runs a single analysis. Instances are single-use; create one per run."""

    def __init__(
        self,
        ai_enabled: bool = False,
        ai_client: AIServiceClient | None = None,
        text_extractor: TextExtractor = text_extractor.extract_report,
        upload_extractor: UploadExtractor = text_extractor.extract_report_from_bytes,
        log: AnalysisLog | None = None,
        ai_timeout: float | None = None,
    ) -> None:
        self.ai_enabled = ai_enabled
        self.ai_client = ai_client
        self.text_extractor = text_extractor
        self.upload_extractor = upload_extractor
        self.log = log if log is not None else AnalysisLog()
        self.ai_timeout = ai_timeout
        self.history: list[PipelineState] = [PipelineState.NOT_STARTED]
        self.extraction_reports: dict[str, ExtractionReport] = {}
        self._started_at = 0.0

    @property
    def state(self) -> PipelineState:
        return self.history[-1]

    def _transition(self, state: PipelineState) -> None:
        logger.debug("Pipeline %s -> %s", self.state.value, state.value)
        self.history.append(state)

    def _elapsed(self) -> float:
        return round(time.perf_counter() - self._started_at, 3)

    def _begin(self, has_resume: bool, has_cover_letter: bool) -> None:
        if self.state != PipelineState.NOT_STARTED:
            raise RuntimeError("AnalysisOrchestrator instances are single-use")
        self._started_at = time.perf_counter()
        self.log.info(
            "Starting job analysis",
            has_resume=has_resume,
            has_cover_letter=has_cover_letter,
        )
        self._transition(PipelineState.EXTRACTING_TEXT)

    def _fail(self, error: BaseException) -> None:
        self._transition(PipelineState.FAILED)
        self.log.error(
            "Job analysis failed",
            error=str(error),
            error_type=type(error).__name__,
            duration=self._elapsed(),
        )

    async def analyze(
        self,
        job_description: str,
        resume_text: str = "",
        cover_letter_text: str = "",
    ) -> CombinedAnalysisResult:
        """Analyze already-extracted texts."""
        self._begin(bool(resume_text), bool(cover_letter_text))
        try:
            return await self._score(job_description, resume_text, cover_letter_text)
        except Exception as e:
            self._fail(e)
            raise

    async def analyze_documents(
        self,
        job_description: str,
        resume_path: str | Path | None = None,
        cover_letter_path: str | Path | None = None,
    ) -> CombinedAnalysisResult:
        """Extract text from the given documents, then analyze.

        Raises ExtractionFailure when a document cannot be read.
        """
        self._begin(resume_path is not None, cover_letter_path is not None)
        try:
            resume_text = cover_letter_text = ""
            if resume_path is not None:
                resume_text = self._extract("resume", str(resume_path), self.text_extractor, resume_path)
            if cover_letter_path is not None:
                cover_letter_text = self._extract(
                    "cover_letter", str(cover_letter_path), self.text_extractor, cover_letter_path
                )
            return await self._score(job_description, resume_text, cover_letter_text)
        except Exception as e:
            self._fail(e)
            raise

    async def analyze_uploads(
        self,
        job_description: str,
        resume: Upload | None = None,
        cover_letter: Upload | None = None,
    ) -> CombinedAnalysisResult:
        """Same as analyze_documents for in-memory (content, filename) uploads."""
        self._begin(resume is not None, cover_letter is not None)
        try:
            resume_text = cover_letter_text = ""
            if resume is not None:
                resume_text = self._extract("resume", resume[1], self.upload_extractor, *resume)
            if cover_letter is not None:
                cover_letter_text = self._extract(
                    "cover_letter", cover_letter[1], self.upload_extractor, *cover_letter
                )
            return await self._score(job_description, resume_text, cover_letter_text)
        except Exception as e:
            self._fail(e)
            raise

    def _extract(
        self,
        document: str,
        source: str,
        extractor: Callable[..., ExtractionReport],
        *args,
    ) -> str:
        label = document.replace("_", " ")
        try:
            report = extractor(*args)
        except ExtractionFailure:
            raise
        except Exception as e:
            raise ExtractionFailure(f"Could not extract {label} text: {e}", path=source) from e
        self.extraction_reports[document] = report
        self.log.info(
            f"Extracted {label} text",
            word_count=report.word_count,
            quality_score=report.quality_score,
            issues=report.issues,
        )
        return report.text

    async def _score(
        self,
        job_description: str,
        resume_text: str,
        cover_letter_text: str,
    ) -> CombinedAnalysisResult:
        self._transition(PipelineState.SCORING_BASIC)
        basic = basic_analysis(job_description, resume_text, cover_letter_text)

        outcome = None
        if self.ai_enabled and self.ai_client is not None:
            self._transition(PipelineState.ATTEMPTING_AI)
            outcome = await request_analysis(
                self.ai_client,
                job_description,
                resume_text,
                cover_letter_text,
                timeout=self.ai_timeout,
            )
        else:
            self._transition(PipelineState.SKIPPING_AI)
            reason = "disabled" if not self.ai_enabled else "not configured"
            self.log.info(f"AI analysis {reason}, using enhanced basic analysis")

        self._transition(PipelineState.AGGREGATING)
        match outcome:
            case AISuccess(result=ai_result):
                result = ai_blender.blend(basic, ai_result)
            case AIFailure(reason=reason, cause=cause):
                self.log.warning(
                    "AI analysis failed, falling back to enhanced basic analysis",
                    reason=reason,
                    cause=type(cause).__name__ if cause is not None else None,
                )
                result = ai_blender.enhance_basic(basic)
            case _:
                result = ai_blender.enhance_basic(basic)

        self._transition(PipelineState.COMPLETED)
        self.log.info(
            "Job analysis completed",
            overall_score=result.overall_score,
            analysis_type=result.analysis_type.value,
            duration=self._elapsed(),
        )
        return result


def build_orchestrator(
    ai_enabled: bool | None = None,
    ai_client: AIServiceClient | None = None,
) -> AnalysisOrchestrator:
    """Fresh orchestrator wired from settings; explicit arguments win."""
    if ai_enabled is None:
        ai_enabled = settings.ai_service_enabled
    if ai_enabled and ai_client is None:
        ai_client = get_ai_client()
    return AnalysisOrchestrator(ai_enabled=ai_enabled, ai_client=ai_client)


async def analyze(
    job_description: str,
    resume_text: str = "",
    cover_letter_text: str = "",
    ai_enabled: bool | None = None,
    ai_client: AIServiceClient | None = None,
) -> CombinedAnalysisResult:
    orchestrator = build_orchestrator(ai_enabled, ai_client)
    return await orchestrator.analyze(job_description, resume_text, cover_letter_text)


async def analyze_batch(
    items: Sequence[ApplicationInput],
    ai_enabled: bool | None = None,
    ai_client: AIServiceClient | None = None,
    orchestrator_factory: Callable[..., AnalysisOrchestrator] = build_orchestrator,
) -> BatchAnalysisResult:
    """Analyze many applications independently; one failure does not stop the rest."""

    async def run(index: int, item: ApplicationInput) -> BatchItemResult:
        try:
            orchestrator = orchestrator_factory(ai_enabled, ai_client)
            result = await orchestrator.analyze(
                item.job_description, item.resume_text, item.cover_letter_text
            )
        except Exception as e:
            logger.warning("Batch item %d failed: %s", index, e)
            return BatchItemResult(index=index, label=item.label, success=False, error=str(e))
        return BatchItemResult(index=index, label=item.label, success=True, result=result)

    results = await asyncio.gather(*(run(i, item) for i, item in enumerate(items)))
    successful = sum(1 for r in results if r.success)
    summary = BatchSummary(total=len(results), successful=successful, failed=len(results) - successful)
    logger.info(
        "Batch analysis finished: %d total, %d successful, %d failed",
        summary.total, summary.successful, summary.failed,
    )
    return BatchAnalysisResult(results=list(results), summary=summary)


