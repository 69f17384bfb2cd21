from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from collections.abc import Iterable
from math import ceil
from threading import Lock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


DEFAULT_LIMITED_PATHS = ("/card/me", "/stats/me")


class SlidingWindowLimiter:
    """Request timestamps per client key, kept only while inside the window.

    A key whose timestamps have all expired is dropped, and every key is swept
    at most once per window, so memory stays proportional to the clients seen
    during the last window.
    """

    def __init__(self, max_requests: int, window_seconds: float) -> None:
        self.max_requests = max(1, max_requests)
        self.window_seconds = max(1.0, float(window_seconds))
        self._hits: dict[str, deque[float]] = {}
        self._next_sweep = 0.0
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._hits)

    def hit(self, client_key: str, now: float) -> int | None:
        """Record a request, or return the Retry-After seconds when over the limit."""

        cutoff = now - self.window_seconds
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(cutoff)
                self._next_sweep = now + self.window_seconds

            hits = self._hits.get(client_key)
            if hits is not None:
                while hits and hits[0] <= cutoff:
                    hits.popleft()

            if hits and len(hits) >= self.max_requests:
                return max(1, ceil(hits[0] - cutoff))

            if not hits:
                hits = self._hits[client_key] = deque()
            hits.append(now)
            return None

    def _sweep(self, cutoff: float) -> None:
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]


class GitHubFetchRateLimitMiddleware(BaseHTTPMiddleware):
    """Limit GET requests to the routes that call GitHub, per client address."""

    def __init__(
        self,
        app,
        requests_per_window: int = 30,
        window_seconds: int = 60,
        limited_paths: Iterable[str] = DEFAULT_LIMITED_PATHS,
        trust_forwarded_for: bool = True,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(requests_per_window, window_seconds)
        self.limited_paths = frozenset(limited_paths)
        self.trust_forwarded_for = trust_forwarded_for
        self._clock = clock

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or request.url.path not in self.limited_paths:
            return await call_next(request)

        retry_after = self.limiter.hit(self.client_key(request), self._clock())
        if retry_after is not None:
            return JSONResponse(
                status_code=429,
                content={"detail": "Too Many Requests"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def client_key(self, request: Request) -> str:
        if self.trust_forwarded_for:
            # First entry is the original client behind the proxy chain.
            forwarded_for = request.headers.get("x-forwarded-for", "")
            first_hop = forwarded_for.split(",")[0].strip()
            if first_hop:
                return first_hop

        if request.client and request.client.host:
            return request.client.host
        return "unknown"
