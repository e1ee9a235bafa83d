"""Error taxonomy for the analysis pipeline."""


class AnalysisError(Exception):
    """Base class for analysis pipeline errors."""


class ExtractionFailure(AnalysisError):
    """Text could not be obtained from a document. Fatal to the analysis run."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class AIServiceFailure(AnalysisError):
    """The AI service timed out, was unreachable, or returned an unusable response.

    Never fatal: the pipeline falls back to enhanced basic scoring.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
