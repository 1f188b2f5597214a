"""Retry utilities for file operations that may fail transiently.

File handles never retry on their own. Callers that expect contention (a file
briefly locked by another process, a directory being created) can wrap an
operation with retry_file_operation(), which uses tenacity and retries on the
returned Result rather than on exceptions.
"""

import logging
from collections.abc import Callable, Iterable

from tenacity import (
    RetryError,
    Retrying,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from filekeeper.domain.errors import ErrorKind, Result

logger = logging.getLogger(__name__)

# Kinds that may clear up on their own; the others describe a state that
# retrying cannot change.
TRANSIENT_KINDS = frozenset(
    {
        ErrorKind.FILE_COULD_NOT_BE_OPENED,
        ErrorKind.FILE_COULD_NOT_BE_CLOSED,
        ErrorKind.ERROR_WRITING_TO_FILE,
    }
)


def retry_file_operation(
    operation: Callable[[], Result],
    retry_on: Iterable[ErrorKind] = TRANSIENT_KINDS,
    max_attempts: int = 3,
    min_wait: float = 0.1,
    max_wait: float = 2.0,
) -> Result:
    """Call operation until it succeeds, fails permanently or attempts run out.

    Args:
        operation: Zero-argument callable returning a Result, e.g. ``f.open_read``
        retry_on: Error kinds that warrant another attempt
        max_attempts: Maximum number of calls
        min_wait: Minimum wait between attempts in seconds
        max_wait: Maximum wait between attempts in seconds

    Returns:
        Result of the last attempt

    Example:
        >>> f = File("shared.log")
        >>> result = retry_file_operation(lambda: f.append("line\\n"))
    """
    retryable = frozenset(retry_on)

    def _should_retry(result: Result) -> bool:
        return result.error in retryable

    def _log_attempt(retry_state) -> None:
        outcome = retry_state.outcome.result()
        logger.debug(
            f"Attempt {retry_state.attempt_number} of {max_attempts} failed: {outcome.message}"
        )

    retrying = Retrying(
        retry=retry_if_result(_should_retry),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=min_wait, min=min_wait, max=max_wait),
        after=_log_attempt,
    )

    try:
        return retrying(operation)
    except RetryError as e:
        result = e.last_attempt.result()
        logger.warning(f"Giving up after {max_attempts} attempts: {result.message}")
        return result
