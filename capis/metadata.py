"""Request description loaded from a YAML file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Method(Enum):
    """HTTP methods a request description may name."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Header:
    """One request header."""

    key: str
    value: str


@dataclass(frozen=True)
class Param:
    """One request parameter."""

    key: str
    value: str


@dataclass(frozen=True)
class Cookie:
    """A cookie to send with the request."""

    name: str
    value: str
    domain: str = ""
    path: str = "/"
    expires: str = ""
    http_only: bool = False
    secure: bool = False


@dataclass
class Metadata:
    """Everything needed to perform one HTTP request."""

    method: Method = Method.GET
    host: str = "localhost"
    path: str = "/"
    url: str = ""
    timeout: int = 0
    secure: bool = True
    headers: list[Header] = field(default_factory=list)
    params: list[Param] = field(default_factory=list)
    cookies: list[Cookie] = field(default_factory=list)


def parse_method(name: str) -> Method:
    """Return the method with exactly this name, or GET if none matches."""
    try:
        return Method(name)
    except ValueError:
        return Method.GET


def format_metadata(metadata: Metadata | None) -> str:
    """Render a human-readable description of the metadata."""
    if metadata is None:
        return "Metadata is NULL\n"

    lines = [
        f"Method: {metadata.method.value}",
        f"Host: {metadata.host}",
        f"Path: {metadata.path}",
        f"URL: {metadata.url}",
        f"Timeout: {metadata.timeout}",
        f"Secure: {'true' if metadata.secure else 'false'}",
        "Headers:",
    ]
    lines += [f"  {h.key}: {h.value}" for h in metadata.headers] or ["  (none)"]
    lines.append("Params:")
    lines += [f"  {p.key}: {p.value}" for p in metadata.params] or ["  (none)"]
    lines.append("Cookies:")
    lines += [
        f"  name={c.name}; value={c.value}; domain={c.domain}; path={c.path}"
        for c in metadata.cookies
    ] or ["  (none)"]
    return "\n".join(lines) + "\n"


def print_metadata(metadata: Metadata | None) -> None:
    """Print the metadata description to standard output."""
    print(format_metadata(metadata), end="")