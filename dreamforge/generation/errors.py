from typing import List, Optional


class ForgeError(Exception):
    """Base class for every failure raised by the generation pipeline."""


class ProviderError(ForgeError):
    """
    The generation service rejected or failed a request.
    `kind` is one of: transport, quota, policy, unknown.
    """
    RETRYABLE_KINDS = ("transport", "quota")

    def __init__(self, message: str, kind: str = "unknown"):
        super().__init__(message)
        self.kind = kind

    @property
    def retryable(self) -> bool:
        return self.kind in self.RETRYABLE_KINDS


class MalformedResponseError(ForgeError):
    """No parsing strategy could recover structured data from the response."""


class ValidationError(ForgeError):
    """Structured data was parsed but does not have the required shape."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class PatchMatchMiss(ForgeError):
    """A single edit could not be located in the artifact. Recoverable."""

    def __init__(self, search: str, reason: str = "search text not found"):
        preview = search[:60].replace("\n", "\\n")
        super().__init__(f"{reason}: '{preview}'")
        self.search = search
        self.reason = reason


class PhaseError(ForgeError):
    """A fatal failure of one pipeline phase, with a phase-qualified message."""

    def __init__(self, phase: str, prefix: str, cause: Exception):
        super().__init__(f"{prefix}{cause}")
        self.phase = phase
        self.cause = cause
