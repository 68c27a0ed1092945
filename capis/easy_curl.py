"""Perform the HTTP request that a metadata description asks for."""

from __future__ import annotations

from dataclasses import dataclass, field

import requests

from capis import log
from capis.metadata import Cookie, Metadata, Method, Param

DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"
_BODY_METHODS = (Method.POST, Method.PUT)
_HTTP_VERSIONS = {9: "0.9", 10: "1.0", 11: "1.1", 20: "2", 30: "3"}


class RequestError(RuntimeError):
    """Raised when the HTTP request could not be performed."""


@dataclass
class Response:
    """What came back from a request."""

    status_code: int = 0
    headers: str = ""
    body: bytes = b""
    set_cookies: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")


def resolve_url(metadata: Metadata) -> str:
    """Return the explicit URL, or build one from scheme, host and path."""
    if metadata.url:
        return metadata.url
    scheme = "https" if metadata.secure else "http"
    return f"{scheme}://{metadata.host}{metadata.path}"


def query_string(params: list[Param]) -> str:
    """Join parameters as ``key=value`` pairs separated by ``&``."""
    return "&".join(f"{p.key}={p.value}" for p in params)


def request_url(metadata: Metadata) -> str:
    """Return the URL to request, with GET parameters appended."""
    url = resolve_url(metadata)
    if metadata.method is not Method.GET or not metadata.params:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query_string(metadata.params)}"


def _cookie_entry(cookie: Cookie) -> str:
    parts = [f"{cookie.name}={cookie.value}"]
    if cookie.domain:
        parts.append(f"Domain={cookie.domain}")
    if cookie.path:
        parts.append(f"Path={cookie.path}")
    if cookie.expires:
        parts.append(f"Expires={cookie.expires}")
    if cookie.secure:
        parts.append("Secure")
    if cookie.http_only:
        parts.append("HttpOnly")
    return "; ".join(parts)


def cookie_header(cookies: list[Cookie]) -> str:
    """Render cookies, with their attributes, as one Cookie header value."""
    return "; ".join(_cookie_entry(c) for c in cookies)


def request_headers(metadata: Metadata) -> dict[str, str]:
    """Return the headers to send, adding defaults the request needs."""
    headers = {h.key: h.value for h in metadata.headers}
    has_content_type = any(key.lower() == "content-type" for key in headers)
    if not has_content_type and metadata.method in _BODY_METHODS:
        headers["Content-Type"] = DEFAULT_CONTENT_TYPE
    if metadata.cookies:
        headers["Cookie"] = cookie_header(metadata.cookies)
    return headers


def request_body(metadata: Metadata) -> str | None:
    """Return the form body for POST and PUT, or None for other methods."""
    if metadata.method not in _BODY_METHODS:
        return None
    return query_string(metadata.params)


def _header_pairs(reply: requests.Response) -> list[tuple[str, str]]:
    raw_headers = getattr(reply.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "iteritems"):
        return list(raw_headers.iteritems())
    return list(reply.headers.items())


def _status_line(reply: requests.Response) -> str:
    version = _HTTP_VERSIONS.get(getattr(reply.raw, "version", 11), "1.1")
    return f"HTTP/{version} {reply.status_code} {reply.reason or ''}".rstrip()


def _collect(reply: requests.Response) -> Response:
    blocks: list[str] = []
    set_cookies: list[str] = []
    for hop in [*reply.history, reply]:
        pairs = _header_pairs(hop)
        lines = [_status_line(hop), *(f"{k}: {v}" for k, v in pairs)]
        blocks.append("\r\n".join(lines) + "\r\n\r\n")
        set_cookies.extend(
            f"{k}: {v}".split("\r")[0].split("\n")[0]
            for k, v in pairs
            if k.lower() == "set-cookie"
        )
    return Response(
        status_code=reply.status_code,
        headers="".join(blocks),
        body=reply.content,
        set_cookies=set_cookies,
    )


def do_easy_curl(metadata: Metadata, verbose: bool = False) -> Response:
    """Send the request described by ``metadata`` and return the response.

    Raises RequestError if the request could not be completed.
    """
    url = resolve_url(metadata)
    log.info(f"Preparing request: {url}")

    final_url = request_url(metadata)
    if final_url != url:
        log.info(f"GET request with params: {final_url}")

    if not metadata.secure:
        log.warn("SSL verification disabled - security risk")

    headers = request_headers(metadata)
    body = request_body(metadata)
    timeout = metadata.timeout / 1000 if metadata.timeout > 0 else None

    if verbose:
        log.info(f"> {metadata.method.value} {final_url}")
        for key, value in headers.items():
            log.info(f"> {key}: {value}")
        if body:
            log.info(f"> {body}")

    try:
        reply = requests.request(
            metadata.method.value,
            final_url,
            headers=headers,
            data=body,
            timeout=timeout,
            verify=metadata.secure,
            allow_redirects=True,
        )
    except requests.RequestException as exc:
        log.error(f"Request failed: {exc}")
        raise RequestError(str(exc)) from exc

    response = _collect(reply)
    log.info(f"Request successful - Status Code: {response.status_code}")
    log.info(
        "========== RESPONSE HEADERS ==========\n" + (response.headers or "(empty)")
    )
    log.info("========== RESPONSE BODY =============\n" + (response.text or "(empty)"))
    for line in response.set_cookies:
        log.info(f"Set-Cookie: {line.split(':', 1)[1].strip()}")
    return response