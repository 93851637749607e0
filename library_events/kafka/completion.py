"""
Observability for completed sends.

Callbacks run on the producer's delivery thread, concurrently with other
in-flight publishes. They only emit log records.
"""

import logging
from concurrent.futures import CancelledError, Future
from typing import Callable, Optional

from .models import SendResult

logger = logging.getLogger(__name__)


class CompletionHandler:
    """Logs the outcome of each send attempt exactly once."""

    def on_success(self, key: Optional[int], value: str, result: SendResult) -> None:
        logger.info(
            f"Message sent successfully for the key: {key} and the value: {value}, "
            f"partition is {result.partition} (offset {result.offset})"
        )

    def on_failure(self, key: Optional[int], value: str, error: BaseException) -> None:
        logger.error(
            f"Error sending the message for the key: {key} and the value: {value}, "
            f"the exception is {error}",
            exc_info=(type(error), error, error.__traceback__),
        )

    def callback_for(self, key: Optional[int], value: str) -> Callable[["Future[SendResult]"], None]:
        """
        Build a done-callback routing a finished future to on_success or on_failure.

        Args:
            key: Record key
            value: Serialized record value

        Returns:
            Callable suitable for Future.add_done_callback
        """

        def _on_done(future: "Future[SendResult]") -> None:
            try:
                error = future.exception()
            except CancelledError as e:
                error = e
            if error is not None:
                self.on_failure(key, value, error)
            else:
                self.on_success(key, value, future.result())

        return _on_done
