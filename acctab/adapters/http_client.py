"""Shared HTTP transport utilities for REST adapters.

This module provides a thin wrapper around ``requests.Session`` so adapter
implementations share timeout policy, retry behavior, API-key header
construction and status-code checking.

Dependencies:
    - ``requests`` for network I/O.
    - ``acctab.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by :class:`acctab.adapters.account_rest.AccountRestAdapter`.
    - Used only inside adapter layer methods; use cases interact through ports.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from acctab.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    build_error_message,
    extract_error_code,
    extract_error_hint,
    parse_error_payload,
)

LOGGER = logging.getLogger(__name__)


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Shared requests wrapper with API-key headers and retry loops.

    Only timeouts and connection failures are retried. Callers decide what a
    non-2xx response means, usually through :meth:`ensure_ok`.
    """

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
            ApiError: For any other ``requests`` failure.
        """
        return self._send(
            "GET",
            url,
            params=params,
            headers=self._headers(),
            timeout=timeout or self.cfg.request_timeout_s,
        )

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Any] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a JSON POST request with the same retry policy as :meth:`get`."""
        return self._send(
            "POST",
            url,
            data=None if json_body is None else json.dumps(json_body),
            headers=self._headers(json_body=json_body is not None),
            timeout=timeout or self.cfg.request_timeout_s,
        )

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        context = f"{method} {url}"
        send = self.session.get if method == "GET" else self.session.post
        attempts = max(1, self.cfg.retries + 1)
        for attempt in range(1, attempts + 1):
            try:
                return send(url, **kwargs)
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                LOGGER.debug("%s failed (attempt %d/%d): %s", context, attempt, attempts, exc)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        raise ApiTimeoutError(f"Timeout contacting {url}", context=context)

    @staticmethod
    def ensure_ok(resp: requests.Response, ctx: str) -> None:
        """Raise a typed :class:`ApiError` for any non-2xx response."""
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        code = extract_error_code(payload)
        hint = extract_error_hint(payload)
        if 400 <= status < 500:
            raise ApiClientError(
                message,
                status=status,
                code=code,
                hint=hint,
                payload=payload,
                context=ctx,
            )
        if 500 <= status < 600:
            raise ApiServerError(
                message,
                status=status,
                payload=payload,
                context=ctx,
            )
        raise ApiError(message, status=status, payload=payload, context=ctx)

    @staticmethod
    def json_any(resp: requests.Response, ctx: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            txt = (getattr(resp, "text", "") or "")[:400]
            raise ApiError(f"Invalid JSON response: {txt}", status=resp.status_code, context=ctx) from exc
