"""Logical call and attempt context passed to observers."""

from dataclasses import dataclass, field
import time
import uuid

from .request_builder import PreparedRequest, RequestSpec


@dataclass(frozen=True)
class RequestContext:
    """One logical call: the same for every physical attempt.

    Attributes:
        spec: The logical request
        prepared: Built request (URL includes credentials)
        request_id: Unique identifier, also used as log correlation ID

    Example:
        >>> ctx = RequestContext(spec, build_request(config, spec))
        >>> ctx.method, ctx.path
        ('GET', '/boards/abc')
    """

    spec: RequestSpec
    prepared: PreparedRequest
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    @property
    def method(self) -> str:
        return self.spec.method

    @property
    def path(self) -> str:
        return self.spec.path

    @property
    def url(self) -> str:
        return str(self.prepared.url)


@dataclass(frozen=True)
class Attempt:
    """One physical try. ``number`` is 1-based."""

    number: int
    started_at: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started_at) * 1000
