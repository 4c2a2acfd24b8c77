# stylejit/runtime/fetch.py
"""One-time stylesheet load for the runtime (HTTP via httpx, or a local file)."""

from __future__ import annotations

from pathlib import Path

import httpx

from stylejit.errors import FetchError


def is_url(path: str) -> bool:
    return path.startswith(("http://", "https://"))


async def fetch_stylesheet(
    css_path: str,
    *,
    base_url: str | None = None,
    timeout: float = 10.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    Return the stylesheet text.

    Absolute http(s) URLs, or any path when *base_url* is set, go over HTTP;
    anything else is read from disk.  Raises FetchError on failure.
    """
    if not (is_url(css_path) or base_url):
        try:
            return Path(css_path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(f"Failed to read {css_path}: {exc}") from exc

    try:
        async with httpx.AsyncClient(
            base_url=base_url or "",
            timeout=timeout,
            transport=transport,
        ) as client:
            resp = await client.get(css_path)
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch {css_path}: {exc}") from exc

    if not resp.is_success:
        raise FetchError(
            f"Failed to fetch {css_path}: {resp.status_code}",
            status_code=resp.status_code,
        )
    return resp.text
