"""Exception types raised by LearnMate."""


class LearnMateError(Exception):
    """Base class for all LearnMate errors."""


class ExtractionFailed(LearnMateError):
    """Text could not be extracted from a document. Not retried."""

    def __init__(self, document: str, message: str):
        self.document = document
        super().__init__(f"Failed to read {document}: {message}")


class UnsupportedFormat(ExtractionFailed):
    """The document type has no extractor."""

    def __init__(self, document: str):
        super().__init__(
            document,
            "unsupported file type. Only .txt, .md, .docx, and .pdf are supported.",
        )


class GenerationUnavailable(LearnMateError):
    """The generation service kept failing until the attempts ran out."""

    def __init__(self, attempts: int, last_error: Exception | None = None):
        self.attempts = attempts
        self.last_error = last_error
        message = f"Failed to generate content after {attempts} attempts"
        if last_error is not None:
            message += f": {last_error}"
        super().__init__(message)


class MalformedResponse(LearnMateError):
    """The service answered, but the content does not have the expected shape."""


class EmptyBatch(LearnMateError):
    """A quiz batch without questions was loaded."""


class InvalidOperation(LearnMateError):
    """A quiz operation was called in a state that does not allow it."""


class Busy(LearnMateError):
    """A generation request is in flight; the session cannot be mutated."""
