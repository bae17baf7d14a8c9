from __future__ import annotations


class UpstreamApiError(RuntimeError):
    """
    Raised when a request to the GlobalAPI or the SchnoseAPI fails.

    `error` holds the underlying exception (also chained as `__cause__`) when
    there is one; `status_code` and `body_snippet` are set when an HTTP
    response was received.
    """

    def __init__(
        self,
        message: str,
        *,
        error: BaseException | None = None,
        status_code: int | None = None,
        body_snippet: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error = error
        self.status_code = status_code
        self.body_snippet = body_snippet
