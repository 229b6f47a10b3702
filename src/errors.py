"""Error taxonomy for the resume builder. All errors are recoverable within the session."""


class ResumeBuilderError(Exception):
    """Base class for session-level errors surfaced to the user."""


class GenerationFailed(ResumeBuilderError):
    """
    Raised when the text-generation service cannot produce a draft.

    Attributes:
        attempts: Number of attempts made before giving up.
        transient: Whether the last failure looked transient (retry may succeed later).
    """

    def __init__(self, message: str, attempts: int = 1, transient: bool = False):
        self.attempts = attempts
        self.transient = transient
        super().__init__(message)


class GenerationInProgress(ResumeBuilderError):
    """Raised when a generation is requested while another is outstanding."""


class ExportFailed(ResumeBuilderError):
    """Raised when the draft cannot be serialized to a text or PDF file."""


class InvalidIndex(ResumeBuilderError, LookupError):
    """Raised when a library entry id does not exist in the current library."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Library entry not found: {entry_id}")
