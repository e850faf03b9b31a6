"""Waiting for asynchronous updates to be processed."""

from __future__ import annotations

import time
from enum import StrEnum
from typing import TYPE_CHECKING

from meilisearch_lite.client.exceptions import (
    MeilisearchRequestError,
    UpdateWaitCancelledError,
    UpdateWaitTimeoutError,
)
from meilisearch_lite.client.models import AsyncUpdate, UpdateStatus
from meilisearch_lite.observability.logging import get_logger


if TYPE_CHECKING:
    import threading

    from meilisearch_lite.client.updates import UpdatesAPI


__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "DEFAULT_WAIT_TIMEOUT",
    "FetchFailurePolicy",
    "wait_for_pending_update",
]


DEFAULT_WAIT_TIMEOUT = 5.0
DEFAULT_POLL_INTERVAL = 0.05


class FetchFailurePolicy(StrEnum):
    """What to do when fetching the update status fails during a wait.

    Attributes:
        UNKNOWN: Stop waiting and report ``UpdateStatus.UNKNOWN``.
        RAISE: Stop waiting and raise the fetch error.
        RETRY: Keep polling; only the deadline or cancellation ends the wait.
    """

    UNKNOWN = "unknown"
    RAISE = "raise"
    RETRY = "retry"


def wait_for_pending_update(  # noqa: PLR0913
    updates: UpdatesAPI,
    update: AsyncUpdate | int,
    *,
    timeout: float | None = DEFAULT_WAIT_TIMEOUT,
    interval: float = DEFAULT_POLL_INTERVAL,
    cancel_event: threading.Event | None = None,
    on_fetch_error: FetchFailurePolicy | str = FetchFailurePolicy.UNKNOWN,
) -> UpdateStatus:
    """Block until an update leaves the ``enqueued`` state.

    The deadline and the cancel event are checked before every poll, so an
    expired or cancelled wait never issues another request. A wait returns at
    the latest ``timeout + interval + one round trip`` after it started.

    Args:
        updates: Updates API of the index the update belongs to.
        update: The update handle or its identifier.
        timeout: Seconds to wait before giving up; None waits until the
            update is processed or ``cancel_event`` is set.
        interval: Seconds to sleep between polls (must be positive).
        cancel_event: Set it from another thread to stop waiting.
        on_fetch_error: How to react when a status fetch fails.

    Returns:
        The terminal status (``processed`` or ``failed``), or ``unknown``
        when a fetch failed under the UNKNOWN policy.

    Raises:
        UpdateWaitTimeoutError: The deadline passed first.
        UpdateWaitCancelledError: ``cancel_event`` was set.
        MeilisearchRequestError: A fetch failed under the RAISE policy.
        ValueError: ``interval`` is not positive.
    """
    if interval <= 0:
        msg = f"interval must be positive, got {interval}"
        raise ValueError(msg)

    policy = FetchFailurePolicy(on_fetch_error)
    update_id = update.update_id if isinstance(update, AsyncUpdate) else update
    index_uid = updates.index_uid
    deadline = None if timeout is None else time.monotonic() + timeout
    log = get_logger(__name__, index_uid=index_uid, update_id=update_id)

    polls = 0
    while True:
        if cancel_event is not None and cancel_event.is_set():
            log.debug("update_wait_cancelled", polls=polls)
            raise UpdateWaitCancelledError(index_uid=index_uid, update_id=update_id)
        if deadline is not None and time.monotonic() >= deadline:
            log.debug("update_wait_timed_out", polls=polls, timeout=timeout)
            raise UpdateWaitTimeoutError(
                index_uid=index_uid,
                update_id=update_id,
                timeout=timeout,  # type: ignore[arg-type]
            )

        polls += 1
        try:
            record = updates.get(update_id)
        except MeilisearchRequestError as exc:
            if policy is FetchFailurePolicy.RAISE:
                raise
            if policy is FetchFailurePolicy.UNKNOWN:
                log.info("update_status_unavailable", polls=polls, error=str(exc))
                return UpdateStatus.UNKNOWN
            log.warning("update_status_fetch_failed", polls=polls, error=str(exc))
        else:
            log.debug("update_polled", polls=polls, status=str(record.status))
            if record.status is not UpdateStatus.ENQUEUED:
                return record.status

        if cancel_event is not None:
            cancel_event.wait(interval)
        else:
            time.sleep(interval)
