"""
Borrowed, read-only view over a contiguous run of tokens.

ArgSpan keeps a reference to the caller's token sequence plus a [start, stop)
window; it never copies the tokens. The view is only as long-lived as the
sequence it borrows from: mutating the underlying sequence is visible through
the view.
"""
from collections.abc import Sequence


class ArgSpan(Sequence):
    """
    non-owning window over a suffix (or any contiguous run) of a token sequence.

    - ArgSpan() is the empty view.
    - ArgSpan(tokens, start) views tokens[start:].
    - ArgSpan(tokens, start, stop) views tokens[start:stop].

    equality holds against any non-string sequence carrying the same tokens in
    the same order, so `span == ["a", "b"]` reads naturally in callers.
    """
    __slots__ = ("_tokens", "_start", "_stop")

    def __init__(self, tokens=(), start=0, stop=None, /):
        if isinstance(tokens, str) or not isinstance(tokens, Sequence):
            raise TypeError("ArgSpan() argument must be a sequence of tokens")
        start, stop, _ = slice(start, stop).indices(len(tokens))
        self._tokens = tokens
        self._start = start
        self._stop = max(start, stop)

    def __len__(self):
        return self._stop - self._start

    def __getitem__(self, index, /):
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            if step != 1:
                raise ValueError("ArgSpan only supports contiguous slices")
            return ArgSpan(self._tokens, self._start + start, self._start + max(start, stop))
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("ArgSpan index out of range")
        return self._tokens[self._start + index]

    def __iter__(self):
        for index in range(self._start, self._stop):
            yield self._tokens[index]

    def __eq__(self, other, /):
        if isinstance(other, str) or not isinstance(other, Sequence):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    __hash__ = None

    def __repr__(self):
        return f"ArgSpan({list(self)!r})"

    def __rich_repr__(self):
        yield from self

    def size(self):
        return len(self)

    def empty(self):
        return not len(self)

    def front(self):
        """
        first token of the view (IndexError when empty).
        """
        return self[0]

    def back(self):
        """
        last token of the view (IndexError when empty).
        """
        return self[-1]


__all__ = ("ArgSpan",)
