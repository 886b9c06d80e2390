# docqa/domain/errors.py


class DocQAError(Exception):
    """
    Base error. `kind` is a stable machine-readable code for API callers.
    """
    kind = "docqa_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"status": "error", "error": self.kind, "message": self.message}


class ExtractionError(DocQAError):
    """Raised when a document cannot be turned into text."""
    kind = "extraction_failed"


class GenerationError(DocQAError):
    """Raised by a generator on transport failure or a non-success upstream status."""
    kind = "generation_error"


class GenerationFailed(DocQAError):
    """Raised by the query service when the answer could not be generated."""
    kind = "generation_failed"
