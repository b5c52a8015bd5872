from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter

from hlsrec.exceptions import StreamError


DEFAULT_TIMEOUT = 20.0


class HTTPSession(requests.Session):
    """
    A :class:`requests.Session` with a default timeout and wrapped exceptions.

    Every request raises the exception class passed via the ``exception`` keyword (default :class:`StreamError`)
    instead of the various :mod:`requests` exceptions, and non-success status codes are treated as errors
    unless ``raise_for_status=False`` is passed.
    """

    def __init__(self):
        super().__init__()

        self.timeout = DEFAULT_TIMEOUT
        self.mount("http://", HTTPAdapter())
        self.mount("https://", HTTPAdapter())

    def request(self, method, url, *args, **kwargs):
        acceptable_status = kwargs.pop("acceptable_status", [])
        exception = kwargs.pop("exception", StreamError)
        raise_for_status = kwargs.pop("raise_for_status", True)
        timeout = kwargs.pop("timeout", self.timeout)

        try:
            res = super().request(
                method,
                url,
                *args,
                timeout=timeout,
                **kwargs,
            )
            if raise_for_status and res.status_code not in acceptable_status:
                res.raise_for_status()
        except requests.RequestException as rerr:
            err = exception(f"Unable to open URL: {url} ({rerr})")
            err.err = rerr  # type: ignore[attr-defined]
            raise err from rerr

        return res

    def get_bytes(self, url: str, **kwargs: Any) -> bytes:
        """Fetch the whole response body of a GET request"""
        res = self.get(url, **kwargs)
        try:
            return res.content
        finally:
            res.close()


__all__ = ["HTTPSession", "DEFAULT_TIMEOUT"]
