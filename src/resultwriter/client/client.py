"""ResultWriter Python SDK — Async and sync clients for the ResultWriter REST API.

Usage::

    # Async
    async with AsyncResultWriterClient("http://localhost:8983") as client:
        page = await client.select("solar", template="results")

    # Sync (wraps async client internally)
    client = ResultWriterClient("http://localhost:8983")
    page = client.select("solar", template="results", wrap="cb")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar, cast

import httpx

_T = TypeVar("_T")

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Response types (plain dicts, independent of the server models)
# ═══════════════════════════════════════════════════════════════════════════════

RenderedResponse = dict[str, Any]
"""Rendered body with ``text``, ``content_type``, and ``status_code`` keys."""


def _select_params(
    q: str | None,
    *,
    writer: str | None,
    template: str | None,
    wrap: str | None,
    response_type: str | None,
    content_type: str | None,
    start: int | None,
    rows: int | None,
    extra: dict[str, Any],
) -> dict[str, str]:
    """Build query parameters; ``wrap=""`` is kept because it still enables wrapping."""
    params: dict[str, str] = {}
    if q is not None:
        params["q"] = q
    if writer is not None:
        params["wt"] = writer
    if template is not None:
        params["template"] = template
    if wrap is not None:
        params["wrap"] = wrap
    if response_type is not None:
        params["responseType"] = response_type
    if content_type is not None:
        params["contentType"] = content_type
    if start is not None:
        params["start"] = str(start)
    if rows is not None:
        params["rows"] = str(rows)
    params.update({k: str(v) for k, v in extra.items()})
    return params


# ═══════════════════════════════════════════════════════════════════════════════
# Async client
# ═══════════════════════════════════════════════════════════════════════════════


class AsyncResultWriterClient:
    """Async Python client for the ResultWriter API.

    Args:
        base_url: ResultWriter server URL, e.g. ``"http://localhost:8983"``.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8983",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            **httpx_kwargs,
        )

    async def __aenter__(self) -> AsyncResultWriterClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # ── Health ──

    async def health(self) -> dict[str, Any]:
        """Check server health."""
        resp = await self._client.get("/v1/health")
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    async def store_health(self) -> dict[str, Any]:
        """Check result store health."""
        resp = await self._client.get("/v1/health/store")
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())

    # ── Select ──

    async def select(
        self,
        q: str | None = None,
        *,
        writer: str | None = None,
        template: str | None = None,
        wrap: str | None = None,
        response_type: str | None = None,
        content_type: str | None = None,
        start: int | None = None,
        rows: int | None = None,
        **params: Any,
    ) -> RenderedResponse:
        """Run a query and return the rendered body.

        Args:
            q: Query string (``None`` matches everything).
            writer: Writer name (``wt``); server default when None.
            template: Template name for the template writer.
            wrap: Callback name; an empty string still wraps.
            response_type: Structured response type for the template.
            content_type: Content-type override.
            start: Offset of the first result.
            rows: Maximum number of results.
            **params: Additional query parameters.

        Returns:
            Dict with ``text``, ``content_type``, and ``status_code``.
        """
        query = _select_params(
            q,
            writer=writer,
            template=template,
            wrap=wrap,
            response_type=response_type,
            content_type=content_type,
            start=start,
            rows=rows,
            extra=params,
        )
        resp = await self._client.get("/v1/select", params=query)
        resp.raise_for_status()
        return {
            "text": resp.text,
            "content_type": resp.headers.get("content-type", ""),
            "status_code": resp.status_code,
        }

    async def select_json(self, q: str | None = None, **params: Any) -> dict[str, Any]:
        """Run a query through the ``json`` writer and decode the body."""
        params["wt"] = "json"
        params.pop("writer", None)
        if q is not None:
            params["q"] = q
        resp = await self._client.get("/v1/select", params={k: str(v) for k, v in params.items()})
        resp.raise_for_status()
        return cast(dict[str, Any], resp.json())


# ═══════════════════════════════════════════════════════════════════════════════
# Sync client (wraps AsyncResultWriterClient)
# ═══════════════════════════════════════════════════════════════════════════════


class ResultWriterClient:
    """Synchronous Python client for the ResultWriter API.

    Wraps :class:`AsyncResultWriterClient` using ``asyncio.run``.

    Args:
        base_url: ResultWriter server URL.
        timeout: Request timeout in seconds.
        **httpx_kwargs: Additional keyword arguments passed to ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8983",
        *,
        timeout: float = 30.0,
        **httpx_kwargs: Any,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._httpx_kwargs = httpx_kwargs

    def _run(self, coro: Coroutine[Any, Any, _T]) -> _T:
        """Run an async coroutine synchronously."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            # Already inside an event loop (e.g. Jupyter); run in a worker thread
            import concurrent.futures

            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                return pool.submit(asyncio.run, coro).result()
        return asyncio.run(coro)

    def _make_client(self) -> AsyncResultWriterClient:
        return AsyncResultWriterClient(
            self._base_url,
            timeout=self._timeout,
            **self._httpx_kwargs,
        )

    def health(self) -> dict[str, Any]:
        """Check server health."""

        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.health()

        return self._run(_call())

    def store_health(self) -> dict[str, Any]:
        """Check result store health."""

        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.store_health()

        return self._run(_call())

    def select(self, q: str | None = None, **kwargs: Any) -> RenderedResponse:
        """Run a query and return the rendered body (see ``AsyncResultWriterClient.select``)."""

        async def _call() -> RenderedResponse:
            async with self._make_client() as c:
                return await c.select(q, **kwargs)

        return self._run(_call())

    def select_json(self, q: str | None = None, **params: Any) -> dict[str, Any]:
        """Run a query through the ``json`` writer and decode the body."""

        async def _call() -> dict[str, Any]:
            async with self._make_client() as c:
                return await c.select_json(q, **params)

        return self._run(_call())
