import httpx

from ..errors import UpstreamRequestError

_JSON_NAMES = {dict: "object", list: "array"}


def error_payload(r: httpx.Response):
    try:
        return r.json()
    except ValueError:
        return r.text or None


def raise_for_status(r: httpx.Response, service: str) -> None:
    """``Response.raise_for_status`` that keeps the upstream body on the error."""
    try:
        r.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise UpstreamRequestError(
            f"{service} request failed: {e.response.status_code} {e.request.method} {e.request.url}",
            status_code=e.response.status_code,
            payload=error_payload(r),
        ) from e


def transport_error(e: httpx.RequestError, service: str) -> UpstreamRequestError:
    return UpstreamRequestError(f"{service} request failed: {e}")


def json_body(r: httpx.Response, service: str, expected: type = dict):
    """Decoded JSON body, or UpstreamRequestError when it is not JSON of the ``expected`` type."""
    try:
        data = r.json()
    except ValueError as e:
        raise UpstreamRequestError(
            f"{service} returned a response that is not JSON", status_code=r.status_code,
            payload=r.text or None,
        ) from e
    if not isinstance(data, expected):
        raise UpstreamRequestError(
            f"{service} returned an unexpected response: expected a JSON {_JSON_NAMES.get(expected, expected.__name__)}",
            status_code=r.status_code,
        )
    return data


def json_object(data, key: str, service: str) -> dict:
    """``data[key]`` when it is an object; an empty or missing value gives ``{}``."""
    value = data.get(key)
    if value in (None, {}):
        return {}
    if not isinstance(value, dict):
        raise UpstreamRequestError(
            f"{service} returned an unexpected response: {key!r} is not an object"
        )
    return value
