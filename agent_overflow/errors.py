"""Error kinds raised by the storage layers and reported by the tool handlers."""


class SolutionServiceError(Exception):
    """Base class for every error the service reports to callers."""


class ValidationError(SolutionServiceError):
    """Payload failed schema constraints."""


class AuthenticationError(SolutionServiceError):
    """A required credential was not supplied."""


class EmbeddingProviderError(SolutionServiceError):
    """The embedding provider call failed."""


class StorageWriteError(SolutionServiceError):
    """Persisting a solution failed."""


class StorageReadError(SolutionServiceError):
    """Searching stored solutions failed."""


def describe(exc: BaseException, default: str = "Unknown error") -> str:
    """Return the message of *exc*, or *default* when it has none."""
    message = str(exc)
    return message if message else default
