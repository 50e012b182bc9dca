from collections.abc import Iterator, Mapping

DEFAULT_HEADERS: Mapping[str, str] = {"Content-Type": "application/json"}


class HeaderStore(Mapping[str, str]):
    """HTTP headers sent with every call made by a client.

    The store starts out with ``Content-Type: application/json`` and is then
    changed in place by the owner. Every call takes a copy with ``snapshot()``
    when it starts, so later changes only affect later calls.

    No locking is done: callers mutating the store while calls are in flight
    must serialize that themselves.
    """

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._headers: dict[str, str] = dict(DEFAULT_HEADERS)
        if initial is not None:
            self._headers.update(initial)

    def __getitem__(self, name: str) -> str:
        return self._headers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"HeaderStore({self._headers!r})"

    def set(self, name: str, value: str | None):
        """Sets a header which will be sent with the next calls.

        A ``None`` value removes the header instead; removing a header that
        isn't there does nothing.
        """
        if value is None:
            self._headers.pop(name, None)
            return
        self._headers[name] = value

    def remove(self, name: str):
        self.set(name, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._headers)
