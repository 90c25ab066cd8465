"""Parsing of the query string Facebook appends to the redirect URI."""

from dataclasses import dataclass, field
from urllib.parse import unquote_plus

# Facebook percent-encodes these reserved characters inside the code and
# nothing else. The escapes are disjoint three-character sequences and no
# replacement produces another escape, so table order does not matter.
CODE_ESCAPES: dict[str, str] = {
    "%24": "$",
    "%26": "&",
    "%2B": "+",
    "%2C": ",",
    "%2F": "/",
    "%3A": ":",
    "%3B": ";",
    "%3D": "=",
    "%3F": "?",
    "%40": "@",
}


def decode_code(raw: str) -> str:
    """Undo Facebook's encoding of an authorization code.

    Only the escapes in ``CODE_ESCAPES`` are reversed; anything else, other
    percent-escapes included, is returned untouched. This is not general
    URL decoding: ``+`` stays ``+`` and ``%20`` stays ``%20``.
    """
    for escape, char in CODE_ESCAPES.items():
        raw = raw.replace(escape, char)
    return raw


def split_query(query: str) -> dict[str, str]:
    """Split a raw query string into still-encoded key/value pairs.

    A leading ``?`` is ignored. The first occurrence of a key wins; a segment
    without ``=`` maps to an empty value.
    """
    pairs: dict[str, str] = {}
    for segment in query.removeprefix("?").split("&"):
        if not segment:
            continue
        key, _, value = segment.partition("=")
        pairs.setdefault(key, value)
    return pairs


@dataclass(frozen=True)
class CallbackParams:
    """Parameters of one inbound request to the flow endpoint."""

    raw: dict[str, str] = field(default_factory=dict)

    @classmethod
    def parse(cls, query: str | None) -> "CallbackParams":
        return cls(raw=split_query(query or ""))

    @property
    def is_empty(self) -> bool:
        """No parameters at all: the flow is starting."""
        return not self.raw

    @property
    def raw_code(self) -> str | None:
        """The code exactly as it appeared in the URL."""
        return self.raw.get("code")

    @property
    def code(self) -> str | None:
        raw_code = self.raw_code
        if raw_code is None:
            return None
        return decode_code(raw_code)

    @property
    def state(self) -> str | None:
        return self._readable("state")

    @property
    def error(self) -> str | None:
        return self._readable("error")

    @property
    def error_reason(self) -> str | None:
        return self._readable("error_reason")

    @property
    def error_description(self) -> str | None:
        return self._readable("error_description")

    @property
    def has_error(self) -> bool:
        return "error" in self.raw

    def _readable(self, key: str) -> str | None:
        # Free-text parameters are form-encoded ("Permissions+error.")
        value = self.raw.get(key)
        return unquote_plus(value) if value is not None else None
