"""Exception hierarchy for provider and session failures.

Every I/O-boundary failure is a ``ProviderError`` carrying a message fit to
show the player (Catalan copy). The session state machine catches these at
the call site; nothing here is fatal to the process.

Tier 1 leaf module: stdlib only.
"""

CONNECTIVITY_MESSAGE = (
    "No es pot connectar amb el servidor. "
    "Comprova que el backend està en funcionament."
)
MALFORMED_MESSAGE = "Format de resposta incorrecte del servidor"
INVALID_REQUEST_MESSAGE = "Petició invàlida. Comprova les dades enviades."
DATASET_MESSAGE = "No s'han pogut carregar les dades del joc. Torna-ho a provar més tard."


class PronomsError(Exception):
    """Base for every error raised by this package."""


class ProviderError(PronomsError):
    """A sentence provider call failed.

    Attributes:
        message: Human-readable description, shown to the player as is.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConnectivityError(ProviderError):
    """The provider could not be reached at all."""

    def __init__(self, message: str = CONNECTIVITY_MESSAGE) -> None:
        super().__init__(message)


class ServerError(ProviderError):
    """The provider answered with a non-2xx status.

    Attributes:
        status_code: The HTTP status received.
    """

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or f"Error del servidor: {status_code}")


class MalformedResponseError(ProviderError):
    """The provider's payload was missing required fields or had wrong types."""

    def __init__(self, message: str = MALFORMED_MESSAGE) -> None:
        super().__init__(message)


class DatasetLoadError(ProviderError):
    """The local dataset could not be read, parsed, or was empty.

    Attributes:
        detail: Technical reason, for logs only.
    """

    def __init__(self, detail: str, message: str = DATASET_MESSAGE) -> None:
        self.detail = detail
        super().__init__(message)


class InvalidRequestError(PronomsError):
    """A local precondition was violated (e.g. submitting with no session).

    The state machine treats this as a silent no-op.
    """
