from __future__ import annotations


class BizMetricsError(Exception):
    """Base class for errors raised by the bizmetrics package."""


class InvalidParameterError(BizMetricsError, ValueError):
    """A calculator input that cannot produce a defined result."""


class DataStoreError(BizMetricsError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ChatUpstreamError(BizMetricsError):
    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.status = status
