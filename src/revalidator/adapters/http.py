"""HTTP adapter for a remote revalidation endpoint."""

from __future__ import annotations

from typing import Any, cast


class AsyncHttpAdapter:
    """Async adapter that asks a remote site to purge paths and tags.

    The remote side exposes ``/v1/revalidate/path`` and
    ``/v1/revalidate/tag`` and authenticates with a bearer token.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str,
        timeout: float = 30.0,
    ) -> None:
        import httpx

        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
        )

    async def _request(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        """Make a POST request to the revalidation API."""
        response = await self._client.post(endpoint, json=body)
        if not response.is_success:
            try:
                error = response.json().get("error", "Request failed")
            except Exception:
                error = f"HTTP {response.status_code}"
            raise RuntimeError(error)
        if not response.content:
            return {}
        return cast(dict[str, Any], response.json())

    async def invalidate_path(self, path: str) -> None:
        """Purge a rendered page."""
        await self._request("/v1/revalidate/path", {"path": path})

    async def invalidate_tag(self, tag: str, *, immediate: bool = True) -> None:
        """Purge tagged data; non-immediate lets the remote serve stale once."""
        await self._request(
            "/v1/revalidate/tag", {"tag": tag, "immediate": immediate}
        )

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
