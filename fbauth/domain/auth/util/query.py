"""Query string construction for Facebook endpoints."""

from collections.abc import Mapping

SEPARATOR = "&"


def build_query(params: Mapping[str, str], skip: str | None = None) -> str:
    """Join params into ``key=value&key=value`` in insertion order.

    Values are NOT percent-encoded. Facebook is sent the configured values
    verbatim (redirect_uri and scope included), so callers must pass values
    that are already safe to put in a URL.

    Args:
        params: Ordered key/value pairs.
        skip: Key to leave out, e.g. ``client_secret`` for the browser-facing URL.

    Returns:
        The query string without a leading ``?`` or trailing separator.
    """
    query = ""
    for key, value in params.items():
        if key == skip:
            continue
        query += f"{key}={value}{SEPARATOR}"

    if query.endswith(SEPARATOR):
        query = query[: -len(SEPARATOR)]
    return query
