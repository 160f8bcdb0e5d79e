"""
Credential validation against a Directus instance.

A credential set is valid when GET <url>/users/me accepts its token. Every
failure, HTTP or transport, comes back as a ValidationResult with
success=False; nothing here raises to the caller.
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
import socket
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from concurrent.futures import Executor, ThreadPoolExecutor

from directus_auth import __version__
from directus_auth.models import Credentials, UserInfo, ValidationResult

logger = logging.getLogger(__name__)

USERS_ME_PATH = "/users/me"

_HTTP_MESSAGES: dict[int, str] = {
    401: "Unauthorized - Invalid or expired token",
    403: "Forbidden - Token lacks required permissions",
    404: "Not found - Check if the URL is correct",
}

CONNECTION_REFUSED = "Connection refused - Server may be down"
HOST_NOT_FOUND = "Host not found - Check the URL"
TIMED_OUT = "Connection timed out"
SSL_ERROR = "SSL certificate error"
INVALID_TOKEN = "Invalid token - contains illegal characters"

# Fallback when the transport gives us nothing structured to go on.
_MESSAGE_PATTERNS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("econnrefused", "connection refused"), CONNECTION_REFUSED),
    (("enotfound", "name or service not known", "nodename nor servname",
      "getaddrinfo failed"), HOST_NOT_FOUND),
    (("etimedout", "timed out"), TIMED_OUT),
    (("certificate",), SSL_ERROR),
)


def token_error(token: str) -> str | None:
    """Reason the token cannot be sent as an HTTP header value, if any."""
    try:
        token.encode("latin-1")
    except UnicodeEncodeError:
        return INVALID_TOKEN
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in token):
        return INVALID_TOKEN
    return None


def users_me_endpoint(base_url: str) -> str:
    return base_url.rstrip("/") + USERS_ME_PATH


def http_status_message(status: int) -> str:
    return _HTTP_MESSAGES.get(status, f"HTTP {status}")


def describe_transport_error(exc: BaseException) -> str:
    """Map a network-level failure to a human-readable message."""
    cause: BaseException = exc
    if isinstance(exc, urllib.error.URLError) and isinstance(exc.reason, BaseException):
        cause = exc.reason

    if isinstance(cause, ConnectionRefusedError):
        return CONNECTION_REFUSED
    if isinstance(cause, socket.gaierror):
        return HOST_NOT_FOUND
    if isinstance(cause, TimeoutError):
        return TIMED_OUT
    if isinstance(cause, ssl.SSLError):
        return SSL_ERROR

    text = str(exc.reason) if isinstance(exc, urllib.error.URLError) else str(exc)
    lowered = text.lower()
    for needles, message in _MESSAGE_PATTERNS:
        if any(n in lowered for n in needles):
            return message
    return text or type(exc).__name__


def _get_users_me(endpoint: str, token: str, timeout: float | None) -> tuple[int, bytes]:
    """Blocking GET; returns (status, body) for any HTTP response."""
    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": f"directus-auth/{__version__}",
    }
    req = urllib.request.Request(endpoint, headers=headers, method="GET")
    kwargs = {} if timeout is None else {"timeout": timeout}
    try:
        with urllib.request.urlopen(req, **kwargs) as resp:
            return resp.status, resp.read()
    except urllib.error.HTTPError as exc:
        exc.close()
        return exc.code, b""


def _redact(text: str, token: str) -> str:
    return text.replace(token, "****") if token else text


def _parse_user(body: bytes) -> UserInfo:
    payload = json.loads(body)
    user = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(user, dict) or "id" not in user:
        raise ValueError("response has no 'data' user object")
    return UserInfo(
        id=str(user["id"]),
        email=str(user.get("email") or ""),
        first_name=user.get("first_name"),
        last_name=user.get("last_name"),
    )


async def validate_credentials(
    name: str,
    credentials: Credentials,
    *,
    timeout: float | None = None,
    executor: Executor | None = None,
) -> ValidationResult:
    """
    Check one credential set against its /users/me endpoint.

    The blocking request runs on `executor`, or the loop's default one.
    """
    endpoint = users_me_endpoint(credentials.url)
    logger.debug("Validating %r against %s", name, endpoint)

    problem = token_error(credentials.token)
    if problem is not None:
        logger.warning("Validation of %r skipped: %s", name, problem)
        return ValidationResult(name=name, success=False, message=problem)

    loop = asyncio.get_running_loop()
    try:
        status, body = await loop.run_in_executor(
            executor, functools.partial(_get_users_me, endpoint, credentials.token, timeout)
        )
    except Exception as exc:
        message = _redact(describe_transport_error(exc), credentials.token)
        logger.warning("Validation of %r failed: %s (%s)", name, message, type(exc).__name__)
        return ValidationResult(name=name, success=False, message=message)

    if not 200 <= status < 300:
        message = http_status_message(status)
        logger.warning("Validation of %r rejected: %s", name, message)
        return ValidationResult(name=name, success=False, message=message)

    try:
        user = _parse_user(body)
    except (ValueError, AttributeError) as exc:
        logger.warning("Validation of %r returned an unexpected body: %s", name, exc)
        return ValidationResult(name=name, success=False, message=f"Unexpected response - {exc}")

    logger.info("Credentials %r valid for user %s", name, user.id)
    return ValidationResult(name=name, success=True, message="Valid", user=user)


async def validate_all_credentials(
    credentials: Mapping[str, Credentials],
    *,
    timeout: float | None = None,
) -> list[ValidationResult]:
    """Validate every set concurrently; results follow the mapping's order."""
    if not credentials:
        return []
    # One worker per set so no request waits for a free thread.
    with ThreadPoolExecutor(max_workers=len(credentials), thread_name_prefix="validate") as pool:
        results = await asyncio.gather(
            *(
                validate_credentials(name, creds, timeout=timeout, executor=pool)
                for name, creds in credentials.items()
            )
        )
    return list(results)
