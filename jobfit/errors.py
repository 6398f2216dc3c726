from __future__ import annotations


class JobFitError(RuntimeError):
    """Base error. `code` is a stable machine-readable identifier."""

    code = "jobfit_error"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class ConfigurationFailure(JobFitError):
    code = "llm_unconfigured"


# Document intake


class DocumentError(JobFitError):
    pass


class ScannedOrEmptyDocument(DocumentError):
    code = "scanned_or_empty"


class UnsupportedDocument(DocumentError):
    code = "unsupported_document"


class DocumentTooLarge(DocumentError):
    code = "document_too_large"


# Delegate failures. Each concrete error is both a component failure
# (structuring / scoring) and a failure kind (parse / upstream).


class DelegateFailure(JobFitError):
    pass


class ParseFailure(DelegateFailure):
    pass


class UpstreamFailure(DelegateFailure):
    pass


class StructuringFailure(DelegateFailure):
    pass


class ScoringFailure(DelegateFailure):
    pass


class StructuringParseFailure(StructuringFailure, ParseFailure):
    code = "structuring_parse_error"


class StructuringUpstreamFailure(StructuringFailure, UpstreamFailure):
    code = "structuring_upstream_error"


class ScoringParseFailure(ScoringFailure, ParseFailure):
    code = "scoring_parse_error"


class ScoringUpstreamFailure(ScoringFailure, UpstreamFailure):
    code = "scoring_upstream_error"


# Validation


class DuplicateVersion(JobFitError):
    code = "duplicate_version"

    def __init__(self, file_name: str):
        super().__init__(f"A resume named '{file_name}' already exists.")
        self.file_name = file_name


class NotFound(JobFitError):
    code = "not_found"

    def __init__(self, kind: str, identifier: str | None, message: str | None = None):
        super().__init__(message or f"{kind} '{identifier}' not found.")
        self.kind = kind
        self.identifier = identifier


class NoActiveVersion(NotFound):
    def __init__(self, user_id: str):
        super().__init__(
            "active_resume",
            user_id,
            f"User '{user_id}' has no active resume version. Select one first.",
        )


class MissingJobDescription(JobFitError):
    code = "missing_job_description"

    def __init__(self, job_id: str):
        super().__init__(f"Job '{job_id}' has no job description to analyze.")
        self.job_id = job_id
