"""Unit tests for waiting on asynchronous updates."""

from __future__ import annotations

import threading
import time
from typing import Any

import httpx
import pytest
import respx  # noqa: TC002

from meilisearch_lite.client import (
    AsyncUpdate,
    FetchFailurePolicy,
    MeilisearchClient,
    MeilisearchConnectionError,
    MeilisearchStatusCodeError,
    UpdateStatus,
    UpdateWaitCancelledError,
    UpdateWaitTimeoutError,
    wait_for_pending_update,
)
from meilisearch_lite.client.polling import DEFAULT_POLL_INTERVAL


BASE_URL = "http://meili.test:7700"
UPDATE_PATH = "/indexes/movies/updates/1"


def update_response(status: str) -> httpx.Response:
    return httpx.Response(200, json={"updateId": 1, "status": status})


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    """Record poll sleeps instead of sleeping."""
    recorded: list[float] = []
    monkeypatch.setattr(
        "meilisearch_lite.client.polling.time.sleep",
        recorded.append,
    )
    return recorded


class TestWaitForPendingUpdate:
    """Tests for the polling loop."""

    @pytest.mark.respx(base_url=BASE_URL)
    def test_returns_processed_after_enqueued_polls(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
        sleeps: list[float],
    ) -> None:
        """Test the loop polls until the update leaves enqueued."""
        route = respx_mock.get(UPDATE_PATH)
        route.side_effect = [
            update_response("enqueued"),
            update_response("enqueued"),
            update_response("enqueued"),
            update_response("processed"),
        ]

        status = client.default_wait_for_pending_update("movies", AsyncUpdate(update_id=1))

        assert status is UpdateStatus.PROCESSED
        assert route.call_count == 4
        assert sleeps == [DEFAULT_POLL_INTERVAL] * 3
        assert sum(sleeps) == pytest.approx(0.15)

    @pytest.mark.respx(base_url=BASE_URL)
    def test_returns_failed_status(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
        sleeps: list[float],
    ) -> None:
        """Test a failed update ends the wait without raising."""
        respx_mock.get(UPDATE_PATH).mock(return_value=update_response("failed"))

        status = client.wait_for_pending_update("movies", 1)

        assert status is UpdateStatus.FAILED
        assert sleeps == []

    @pytest.mark.respx(base_url=BASE_URL)
    def test_times_out(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test the deadline ends a wait on an update that stays enqueued."""
        route = respx_mock.get(UPDATE_PATH).mock(return_value=update_response("enqueued"))

        started = time.monotonic()
        with pytest.raises(UpdateWaitTimeoutError) as exc_info:
            client.wait_for_pending_update("movies", 1, timeout=0.15, interval=0.05)
        elapsed = time.monotonic() - started

        assert 3 <= route.call_count <= 4
        assert elapsed < 1.0
        assert exc_info.value.update_id == 1
        assert exc_info.value.index_uid == "movies"
        assert exc_info.value.timeout == 0.15

    def test_timeout_error_is_a_timeout_error(self) -> None:
        """Test callers can catch the builtin TimeoutError."""
        assert issubclass(UpdateWaitTimeoutError, TimeoutError)

    @pytest.mark.respx(base_url=BASE_URL)
    def test_zero_timeout_never_polls(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test an expired deadline is detected before the first poll."""
        with pytest.raises(UpdateWaitTimeoutError):
            client.wait_for_pending_update("movies", 1, timeout=0)

        assert not respx_mock.calls

    @pytest.mark.respx(base_url=BASE_URL)
    def test_cancel_before_start(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test a set cancel event stops the wait before any request."""
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(UpdateWaitCancelledError):
            client.wait_for_pending_update("movies", 1, cancel_event=cancel)

        assert not respx_mock.calls

    @pytest.mark.respx(base_url=BASE_URL)
    def test_cancel_from_another_thread(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test setting the event interrupts a wait without deadline."""
        respx_mock.get(UPDATE_PATH).mock(return_value=update_response("enqueued"))
        cancel = threading.Event()
        timer = threading.Timer(0.1, cancel.set)
        timer.start()

        try:
            with pytest.raises(UpdateWaitCancelledError) as exc_info:
                client.wait_for_pending_update(
                    "movies",
                    1,
                    timeout=None,
                    interval=0.02,
                    cancel_event=cancel,
                )
        finally:
            timer.cancel()

        assert exc_info.value.update_id == 1

    def test_interval_must_be_positive(self, client: MeilisearchClient) -> None:
        """Test a non-positive interval is rejected."""
        with pytest.raises(ValueError, match="interval must be positive"):
            client.wait_for_pending_update("movies", 1, interval=0)


class TestFetchFailurePolicies:
    """Tests for failed status fetches during a wait."""

    @pytest.mark.respx(base_url=BASE_URL)
    def test_unknown_policy_reports_unknown(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test the default policy ends the wait with unknown."""
        respx_mock.get(UPDATE_PATH).mock(return_value=httpx.Response(404))

        assert client.wait_for_pending_update("movies", 1) is UpdateStatus.UNKNOWN

    @pytest.mark.respx(base_url=BASE_URL)
    def test_raise_policy_propagates_error(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test the raise policy surfaces the fetch error."""
        respx_mock.get(UPDATE_PATH).mock(return_value=httpx.Response(404))

        with pytest.raises(MeilisearchStatusCodeError):
            client.wait_for_pending_update(
                "movies",
                1,
                on_fetch_error=FetchFailurePolicy.RAISE,
            )

    @pytest.mark.respx(base_url=BASE_URL)
    def test_retry_policy_keeps_polling(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
        sleeps: list[float],
    ) -> None:
        """Test the retry policy survives transient failures."""
        route = respx_mock.get(UPDATE_PATH)
        route.side_effect = [
            httpx.ConnectError("Connection refused"),
            update_response("enqueued"),
            update_response("processed"),
        ]

        status = client.wait_for_pending_update(
            "movies",
            1,
            on_fetch_error=FetchFailurePolicy.RETRY,
        )

        assert status is UpdateStatus.PROCESSED
        assert route.call_count == 3
        assert len(sleeps) == 2

    @pytest.mark.respx(base_url=BASE_URL)
    def test_client_default_policy(
        self,
        base_url: str,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test the client's policy applies when none is given per call."""
        respx_mock.get(UPDATE_PATH).mock(
            side_effect=httpx.ConnectError("Connection refused")
        )

        with (
            MeilisearchClient(
                base_url,
                fetch_failure_policy=FetchFailurePolicy.RAISE,
            ) as client,
            pytest.raises(MeilisearchConnectionError),
        ):
            client.wait_for_pending_update("movies", 1)

    @pytest.mark.respx(base_url=BASE_URL)
    def test_policy_accepts_string(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Test the module-level function accepts policy names."""
        respx_mock.get(UPDATE_PATH).mock(return_value=httpx.Response(500))

        with pytest.raises(MeilisearchStatusCodeError):
            wait_for_pending_update(client.updates("movies"), 1, on_fetch_error="raise")

    @pytest.mark.respx(base_url=BASE_URL)
    def test_waits_on_update_from_write(
        self,
        client: MeilisearchClient,
        respx_mock: respx.MockRouter,
        update_json: dict[str, Any],
    ) -> None:
        """Test the handle returned by a write can be waited on."""
        respx_mock.post("/indexes/movies/documents").mock(
            return_value=httpx.Response(202, json={"updateId": 1})
        )
        respx_mock.get(UPDATE_PATH).mock(return_value=httpx.Response(200, json=update_json))

        update = client.documents("movies").add_or_replace([{"id": 1}])

        assert client.default_wait_for_pending_update("movies", update) is (
            UpdateStatus.PROCESSED
        )
