"""
Request state - loading/error bookkeeping around API calls.

Every domain view is built from these three objects:
- ApiRequest: runs a call, tracks `loading` and `error`, unwraps `{"data": ...}`
- ApiState: ApiRequest that also keeps the fetched `data`
- Mutation: ApiRequest for create/update/delete calls; the result is not kept
"""

from typing import Any, Callable, Optional

import structlog

from haulbase.core.errors import extract_error_message

logger = structlog.get_logger(component="request_state")


def unwrap_envelope(body: Any) -> Any:
    """Return `body["data"]` for `{success, data}` envelopes, else the body unchanged."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


class ApiRequest:
    """
    Loading and error state for one request at a time.

    Attributes:
        loading: True while a call is running
        error: Message of the last failure, or None
    """

    def __init__(self) -> None:
        self.loading = False
        self.error: Optional[str] = None
        self._attached = True

    @property
    def attached(self) -> bool:
        return self._attached

    def execute(self, call: Callable[[], Any]) -> Any:
        """
        Run `call` and return its unwrapped result.

        Args:
            call: Zero-argument callable performing the API request

        Returns:
            The response body, or its `data` member when it has one

        Raises:
            Whatever `call` raised, after the message is stored in `error`
        """
        if self._attached:
            self.loading = True
            self.error = None

        try:
            body = call()
        except Exception as e:
            if self._attached:
                self.error = extract_error_message(e)
                self.loading = False
            raise

        if self._attached:
            self.loading = False
        return unwrap_envelope(body)

    def clear_error(self) -> None:
        self.error = None

    def reset(self) -> None:
        self.loading = False
        self.error = None

    def detach(self) -> None:
        """Stop recording outcomes. Calls still return or raise as usual."""
        self._attached = False


class ApiState(ApiRequest):
    """
    Fetched data plus request state.

    `fetch` never raises: any failure, including a malformed response the
    fetcher cannot read, returns None and leaves the message in `error`, so
    callers render an error banner with a retry.
    """

    def __init__(self, fetcher: Callable[..., Any], initial_data: Any = None) -> None:
        super().__init__()
        self.fetcher = fetcher
        self.initial_data = initial_data
        self.data: Any = initial_data
        self._last_call: tuple[tuple[Any, ...], dict[str, Any]] = ((), {})

    def fetch(self, *args: Any, **kwargs: Any) -> Any:
        """Call the fetcher with the given arguments and store the result."""
        self._last_call = (args, kwargs)
        try:
            result = self.execute(lambda: self.fetcher(*args, **kwargs))
        except Exception as e:
            logger.debug("fetch_failed", error=str(e), error_type=type(e).__name__)
            return None

        if self._attached:
            self.data = result
        return result

    def refetch(self) -> Any:
        """Repeat the last fetch with the same arguments."""
        args, kwargs = self._last_call
        return self.fetch(*args, **kwargs)

    def set_data(self, value: Any) -> None:
        """
        Replace local data without a request.

        A callable receives the current data and returns the new data.
        """
        self.data = value(self.data) if callable(value) else value

    def clear(self) -> None:
        self.data = self.initial_data
        self.reset()


class Mutation(ApiRequest):
    """Request state for calls that change server data."""

    def mutate(
        self,
        call: Callable[[], Any],
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> Any:
        """
        Run a mutation and return its unwrapped result.

        Args:
            call: Zero-argument callable performing the request
            on_success: Called with the result
            on_error: Called with the exception before it is re-raised
        """
        try:
            result = self.execute(call)
        except Exception as e:
            if on_error is not None:
                on_error(e)
            raise

        if on_success is not None:
            on_success(result)
        return result
