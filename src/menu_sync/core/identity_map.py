"""Persisted association between page IDs and menu item IDs."""

import json
from collections.abc import Iterator, Mapping


class IdentityMapError(ValueError):
    """Raised when a serialized identity map cannot be decoded."""


class IdentityMap:
    """Map page id -> menu item id.

    At most one menu item per page. The first association recorded for a
    page wins; there is no removal, so entries for deleted or unpublished
    pages simply stay behind.
    """

    def __init__(self, entries: Mapping[int, int] | None = None) -> None:
        self._entries: dict[int, int] = {}
        for source_id, derived_id in (entries or {}).items():
            self.insert(source_id, derived_id)

    def lookup(self, source_id: int | None) -> int | None:
        """Return the menu item id for a page, or None if unmapped."""
        if source_id is None:
            return None
        return self._entries.get(source_id)

    def insert(self, source_id: int, derived_id: int) -> bool:
        """Record an association. Returns False if the page was already mapped."""
        if source_id in self._entries:
            return False
        self._entries[source_id] = derived_id
        return True

    def items(self) -> Iterator[tuple[int, int]]:
        return iter(self._entries.items())

    def copy(self) -> "IdentityMap":
        return IdentityMap(self._entries)

    def serialize(self) -> bytes:
        """Encode as a flat JSON object of string keys to integer values."""
        data = {str(k): v for k, v in sorted(self._entries.items())}
        return json.dumps(data, separators=(",", ":")).encode("utf-8")

    @classmethod
    def deserialize(cls, raw: bytes | str) -> "IdentityMap":
        """Decode the output of serialize()."""
        try:
            data = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            msg = f"Identity map is not valid JSON: {e}"
            raise IdentityMapError(msg) from e
        if not isinstance(data, dict):
            msg = f"Identity map must be a JSON object, got {type(data).__name__}"
            raise IdentityMapError(msg)

        entries: dict[int, int] = {}
        for key, value in data.items():
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"Identity map value for {key!r} is not an integer: {value!r}"
                raise IdentityMapError(msg)
            try:
                source_id = int(key)
            except ValueError as e:
                msg = f"Identity map key is not an integer: {key!r}"
                raise IdentityMapError(msg) from e
            # serialize() only writes canonical keys.
            if str(source_id) != key:
                msg = f"Identity map key is not in canonical form: {key!r}"
                raise IdentityMapError(msg)
            entries[source_id] = value
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IdentityMap):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"IdentityMap({self._entries!r})"
