"""Error taxonomy for corpus loading.

Every error carries a stable ``code`` so the service layer can turn it
into a :class:`~postctl.services.result.ServiceError` without string
matching on messages.
"""

from __future__ import annotations


class CorpusError(Exception):
    """Base class for all corpus errors."""

    code = "CORPUS_ERROR"

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class UnreadableFileError(CorpusError):
    """A path exists in the input set but cannot be opened or decoded."""

    code = "UNREADABLE_FILE"


class MalformedDocumentError(CorpusError):
    """Front-matter delimiters or lines are malformed."""

    code = "MALFORMED_DOCUMENT"

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        line: int | None = None,
    ) -> None:
        super().__init__(message, path=path)
        self.line = line

    def __str__(self) -> str:
        text = super().__str__()
        if self.line is not None:
            return f"{text} (line {self.line})"
        return text


class EmptyInputError(CorpusError):
    """The input directory holds no candidate files."""

    code = "EMPTY_INPUT"


class SiteConfigError(CorpusError):
    """The site ``_config.yml`` could not be parsed."""

    code = "INVALID_SITE_CONFIG"
