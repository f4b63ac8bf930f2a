"""Base sentence provider interface.

Defines the contract every provider (remote quiz service, local CSV dataset,
scripted mock) satisfies. Two operations are required; hints and solution
reveals are optional capabilities advertised by ``supports_hints`` and
``supports_solution``. The session state machine checks the flags and never
calls an operation a provider does not offer.

Tier 1 leaf — imports only stdlib, pronoms.schemas and pronoms.errors.
"""

from abc import ABC, abstractmethod

from pronoms.errors import InvalidRequestError
from pronoms.schemas import (
    AnswerRequest,
    AnswerResult,
    FirstItem,
    HintRequest,
    HintResult,
    Item,
    SessionSnapshot,
    Solution,
)


class SentenceProvider(ABC):
    """Abstract source of items, grading, and (optionally) hints.

    Attributes:
        issues_sessions: True if ``fetch_next`` returns a session id that
            every later call must carry. Without one the session counts as
            inactive and submissions are ignored.
        supports_hints: True if ``request_hint`` is implemented.
        supports_solution: True if ``reveal_solution`` is implemented.
    """

    issues_sessions: bool = False
    supports_hints: bool = False
    supports_solution: bool = False

    @abstractmethod
    async def fetch_next(self) -> FirstItem:
        """Starts a fresh session and returns its first item.

        Raises:
            ProviderError: On any I/O or payload failure.
        """

    @abstractmethod
    async def submit_answer(self, request: AnswerRequest) -> AnswerResult:
        """Grades an answer for the current item.

        Raises:
            ProviderError: On any I/O or payload failure.
        """

    async def request_hint(self, request: HintRequest) -> HintResult:
        """Returns the hint at ``request.hint_cursor``.

        Raises:
            InvalidRequestError: If the provider has no hints.
            ProviderError: On any I/O or payload failure.
        """
        raise InvalidRequestError(f"{type(self).__name__} does not offer hints")

    async def reveal_solution(self, item: Item) -> Solution:
        """Reveals the answer for item and picks the item to play next.

        Raises:
            InvalidRequestError: If the provider cannot reveal solutions.
        """
        raise InvalidRequestError(f"{type(self).__name__} does not reveal solutions")

    async def resume(self, snapshot: SessionSnapshot) -> bool:
        """Re-binds provider-side state to a restored snapshot.

        Returns:
            False if the provider cannot continue the snapshot's session, in
            which case the caller starts a fresh one.
        """
        return True

    async def aclose(self) -> None:
        """Releases network or file resources. No-op by default."""
