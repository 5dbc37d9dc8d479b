"""Debounced, cached search loop behind one uniqueness widget."""

from __future__ import annotations

import asyncio
import enum
from typing import Any

import httpx
from pydantic import ValidationError

from uniqueness.client.view import ResultView
from uniqueness.config import ClientSettings
from uniqueness.domain.models import FrontendSettings, ResultRecord
from uniqueness.logging import logger

DEFAULT_DELAY_SECONDS = 0.5
DEFAULT_TIMEOUT_SECONDS = 5.0


class ControllerState(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    IN_FLIGHT = "in_flight"


class SearchController:
    """Decide when to query the search endpoint and merge answers into a view.

    Input callbacks are synchronous and must be called from inside a running
    event loop. Only one debounce timer is armed at a time; arming cancels
    the previous one. Requests that already left are not cancelled, but each
    carries a sequence number and only the latest one is applied.

    In cumulative mode (``prepend_results``) unseen rows are prepended and
    rows already shown are skipped, and an input string that already found
    results is never searched again. In replace mode each answer replaces
    the list.
    """

    def __init__(
        self,
        settings: FrontendSettings,
        http_client: httpx.AsyncClient,
        view: ResultView | None = None,
        *,
        delay: float = DEFAULT_DELAY_SECONDS,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.settings = settings
        self.view = view or ResultView()
        if settings.description:
            self.view.description = settings.description
        self.delay = delay
        self.timeout = timeout
        self._client = http_client
        self._timer: asyncio.TimerHandle | None = None
        self._requests: set[asyncio.Task[None]] = set()
        self._sequence = 0
        self._title_value = ""
        self._idle = asyncio.Event()
        self._idle.set()
        self.search_cache: set[str] = set()
        self.list_cache: dict[str, ResultRecord] = {}

    @property
    def state(self) -> ControllerState:
        if self._timer is not None:
            return ControllerState.PENDING
        if self._requests:
            return ControllerState.IN_FLIGHT
        return ControllerState.IDLE

    def on_title_input(self, value: str) -> None:
        self._title_value = value
        if not value:
            if not self.settings.prepend_results:
                self.clear()
        elif len(value) >= self.settings.min_characters:
            self.search("title", value)

    def on_tags_blur(self, value: str) -> None:
        if value and len(value) >= self.settings.min_characters:
            self.search("tags", value)

    def search(self, element: str, search_string: str) -> None:
        if self.settings.prepend_results and search_string in self.search_cache:
            return
        loop = asyncio.get_running_loop()
        self._cancel_timer()
        self._timer = loop.call_later(self.delay, self._fire, element, search_string)
        self._refresh_state()

    def clear(self) -> None:
        """Empty the list now and drop any pending or outstanding query."""

        self._cancel_timer()
        self._sequence += 1
        self.view.clear()
        self.view.clear_searching()
        self._refresh_state()

    async def wait_idle(self) -> None:
        await self._idle.wait()

    async def close(self) -> None:
        self._cancel_timer()
        self._sequence += 1
        pending = list(self._requests)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._requests.clear()
        self.search_cache.clear()
        self.list_cache.clear()
        self._refresh_state()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, element: str, search_string: str) -> None:
        self._timer = None
        self._sequence += 1
        self.view.mark_searching(self.settings.searching_string)
        task = asyncio.get_running_loop().create_task(
            self._run_query(self._sequence, element, search_string)
        )
        self._requests.add(task)
        task.add_done_callback(self._request_done)
        self._refresh_state()

    def _request_done(self, task: asyncio.Task[None]) -> None:
        self._requests.discard(task)
        self._refresh_state()

    def _refresh_state(self) -> None:
        if self.state is ControllerState.IDLE:
            self._idle.set()
        else:
            self._idle.clear()

    async def _run_query(self, sequence: int, element: str, search_string: str) -> None:
        params: dict[str, Any] = self.settings.scope_params()
        params[element] = search_string
        try:
            response = await asyncio.wait_for(
                self._client.get(self.settings.url, params=params, timeout=self.timeout),
                self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError, asyncio.TimeoutError) as exc:
            if sequence == self._sequence:
                logger.warning("uniqueness_query_failed", element=element, error=str(exc))
                self.view.clear_searching()
            return

        if sequence != self._sequence:
            logger.debug("stale_response_discarded", sequence=sequence, latest=self._sequence)
            return
        records = _parse_records(payload)
        self._apply(records)
        if records:
            self.search_cache.add(search_string)

    def _apply(self, records: list[ResultRecord]) -> None:
        self.view.clear_searching()
        if self.settings.prepend_results:
            expand = self._merge(records) > 0
        else:
            self.view.set_description_visible(bool(records))
            if not records:
                self.view.clear()
                if self._title_value:
                    self.view.show_notice(self.settings.no_results_string)
                return
            expand = self.view.replace(records) > 0
        if expand:
            self.view.auto_expand()

    def _merge(self, records: list[ResultRecord]) -> int:
        fresh: list[ResultRecord] = []
        for record in records:
            if record.more:
                continue
            key = record.cache_key
            if key in self.list_cache:
                continue
            self.list_cache[key] = record
            fresh.append(record)
        return self.view.prepend(fresh)


def create_controller(
    settings: FrontendSettings,
    http_client: httpx.AsyncClient,
    view: ResultView | None = None,
    *,
    client_settings: ClientSettings | None = None,
) -> SearchController:
    """Build a controller with the configured debounce delay and timeout."""

    client_settings = client_settings or ClientSettings()
    return SearchController(
        settings,
        http_client,
        view,
        delay=client_settings.debounce_seconds,
        timeout=client_settings.request_timeout_seconds,
    )


def _parse_records(payload: Any) -> list[ResultRecord]:
    if isinstance(payload, dict):
        payload = list(payload.values())
    if not isinstance(payload, list):
        return []
    records: list[ResultRecord] = []
    for row in payload:
        try:
            records.append(ResultRecord.model_validate(row))
        except ValidationError as exc:
            logger.warning("uniqueness_invalid_record", error=str(exc))
    return records


__all__ = ["ControllerState", "SearchController", "create_controller"]
