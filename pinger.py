"""
Self-ping loop that keeps an idle-suspending host (e.g. Render free tier)
from putting the service to sleep.

Every `interval` seconds the pinger GETs its own public /ping URL. A failed
call is logged and counted; it never stops the loop or reaches request
handling.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

logger = logging.getLogger(__name__)


class LivenessPinger:
    def __init__(
        self,
        url: str,
        interval: float,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("Ping interval must be positive.")
        self.url = url
        self.interval = interval
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._task: asyncio.Task | None = None
        self.ticks = 0
        self.failures = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return None
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info("auto_ping_started url=%s interval=%ss", self.url, self.interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def tick(self) -> bool:
        """
        Send one ping. Returns True on a 2xx response, False otherwise.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

        self.ticks += 1
        try:
            resp = await self._client.get(self.url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            self.failures += 1
            logger.warning("auto_ping_failed url=%s error=%s", self.url, exc)
            return False

        logger.info("auto_ping_sent url=%s status=%s", self.url, resp.status_code)
        return True

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.tick()
            except Exception:
                self.failures += 1
                logger.exception("auto_ping_unexpected_error url=%s", self.url)
