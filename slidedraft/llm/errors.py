class InvocationError(Exception):
    """Base exception for failures of the generation backend itself."""


class BackendUnavailable(InvocationError):
    """Connection refused, timeout or other transport failure."""


class AuthError(InvocationError):
    """401/403 rejected API key."""


class ModelNotFound(InvocationError):
    """404 unknown model or endpoint."""


class RateLimited(InvocationError):
    """429 rate limit exceeded."""


class ServerError(InvocationError):
    """5xx backend error, including out-of-memory while loading a model."""


class BadRequest(InvocationError):
    """Other 4xx: the backend refused the request as malformed."""


class EmptyGeneration(InvocationError):
    """The backend answered but returned no continuation at all."""


def raise_for_status(status_code: int, message: str = "", payload: dict | None = None):
    detail = message or ""
    if payload:
        err = payload.get("error")
        if isinstance(err, dict):
            err = err.get("message") or ""
        if err:
            detail = f"{detail} {err}".strip()

    if status_code in (401, 403):
        raise AuthError(detail)
    if status_code == 404:
        raise ModelNotFound(detail)
    if status_code == 429:
        raise RateLimited(detail)
    if 500 <= status_code < 600:
        raise ServerError(detail)
    if 400 <= status_code < 500:
        raise BadRequest(detail)
