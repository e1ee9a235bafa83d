from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import OrchestratorFactory, get_ai_service_client, get_orchestrator_factory
from config import settings
from models.requests import BatchAnalyzeRequest, ParseJobRequest, QuickAnalyzeRequest
from models.responses import AIHealthResponse, AnalysisResponse, HealthResponse
from models.schemas.analysis import BatchAnalysisResult, CombinedAnalysisResult
from models.schemas.job_posting import ParsedJobDescription
from services import job_analyzer, job_parser, score_aggregator, text_extractor
from services.ai_client import AIServiceClient
from services.errors import ExtractionFailure
from services.job_analyzer import AnalysisOrchestrator, Upload

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _response(orchestrator: AnalysisOrchestrator, analysis: CombinedAnalysisResult) -> AnalysisResponse:
    return AnalysisResponse(
        analysis=analysis,
        grade=score_aggregator.letter_grade(analysis.overall_score),
        description=score_aggregator.score_description(analysis.overall_score),
        weakest_section=score_aggregator.weakest_section(analysis.section_scores),
        extraction=orchestrator.extraction_reports,
        logs=orchestrator.log.entries,
    )


def _check_job_description(job_description: str) -> None:
    if not job_description.strip():
        raise HTTPException(status_code=400, detail="Job description is required")
    if len(job_description) > settings.max_job_description_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Job description too long (max {settings.max_job_description_chars} chars)",
        )


async def _read_upload(upload: UploadFile, document: str) -> Upload:
    filename = upload.filename or ""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    if f".{ext}" not in text_extractor.SUPPORTED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported {document} file type. Accepted: PDF, DOCX, TXT",
        )

    content = await upload.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )
    return content, filename


@router.get("/health", response_model=HealthResponse)
async def health():
    configured = settings.ai_provider == "http" or bool(settings.gemini_api_key)
    return HealthResponse(
        status="ok",
        ai_enabled=settings.ai_service_enabled,
        ai_provider=settings.ai_provider,
        ai_configured=configured,
    )


@router.get("/ai/health", response_model=AIHealthResponse)
async def ai_health(client: AIServiceClient | None = Depends(get_ai_service_client)):
    if client is None:
        return AIHealthResponse(status="stopped", message="AI service is not configured")
    return AIHealthResponse(**await client.health())


@router.post("/analyze", response_model=AnalysisResponse)
@limiter.limit(settings.rate_limit)
async def analyze(
    request: Request,
    resume_file: UploadFile = File(...),
    job_description: str = Form(...),
    cover_letter_file: UploadFile | None = File(None),
    make_orchestrator: OrchestratorFactory = Depends(get_orchestrator_factory),
):
    _check_job_description(job_description)
    resume = await _read_upload(resume_file, "resume")
    cover_letter = None
    if cover_letter_file is not None and cover_letter_file.filename:
        cover_letter = await _read_upload(cover_letter_file, "cover letter")

    orchestrator = make_orchestrator()
    try:
        analysis = await orchestrator.analyze_uploads(job_description, resume, cover_letter)
    except ExtractionFailure as e:
        raise HTTPException(
            status_code=422,
            detail={
                "message": f"Could not read {e.path or 'document'}: {e}",
                "logs": [entry.model_dump(mode="json") for entry in orchestrator.log.entries],
            },
        ) from e
    return _response(orchestrator, analysis)


@router.post("/analyze/quick", response_model=AnalysisResponse)
@limiter.limit(settings.rate_limit)
async def analyze_quick(
    request: Request,
    body: QuickAnalyzeRequest,
    make_orchestrator: OrchestratorFactory = Depends(get_orchestrator_factory),
):
    _check_job_description(body.job_description)
    orchestrator = make_orchestrator(ai_enabled=body.ai_enabled)
    analysis = await orchestrator.analyze(
        body.job_description, body.resume_text, body.cover_letter_text
    )
    return _response(orchestrator, analysis)


@router.post("/analyze/batch", response_model=BatchAnalysisResult)
@limiter.limit(settings.rate_limit)
async def analyze_batch(
    request: Request,
    body: BatchAnalyzeRequest,
    make_orchestrator: OrchestratorFactory = Depends(get_orchestrator_factory),
):
    return await job_analyzer.analyze_batch(
        body.items,
        ai_enabled=body.ai_enabled,
        orchestrator_factory=make_orchestrator,
    )


@router.post("/job/parse", response_model=ParsedJobDescription)
async def parse_job(body: ParseJobRequest):
    return job_parser.parse_job_description(body.job_description)
