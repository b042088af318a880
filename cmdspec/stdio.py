"""how a child's standard stream is connected

>>> Stdio.Piped
Stdio.Piped
>>> Stdio.from_jso('Null') is Stdio.Null
True
>>> {Stdio.Inherit, Stdio.Inherit, Stdio.Null} == {Stdio.Null, Stdio.Inherit}
True
"""

__all__ = 'Stdio', 'get_stdio'

from enum import Enum
from .fd import FD
from .pipe import Pipe


class Stdio(Enum):
    Piped = 'Piped'
    """a new pipe is arranged between the parent and the child"""
    Inherit = 'Inherit'
    """the child shares the parent's corresponding stream"""
    Null = 'Null'
    """the stream is connected to the null device"""

    def __repr__(self):
        return f'{type(self).__name__}.{self.name}'

    def to_jso(self):
        return self.value

    @classmethod
    def from_jso(cls, jso):
        """
        >>> Stdio.from_jso('Closed')
        Traceback (most recent call last):
        ...
        ValueError: unknown stream disposition: 'Closed'
        """
        try:
            return cls(jso)
        except ValueError:
            raise ValueError(f'unknown stream disposition: {jso!r}') from None

    def open(self, child_fd):
        """realise the disposition for the child's stream number child_fd

        Returns (child end, parent file): the child end is passed to the
        launcher and closed by the parent afterwards, the parent file is what
        the live handle exposes (only for Piped).

        >>> Stdio.Inherit.open(0)
        (None, None)
        >>> child, parent = Stdio.Null.open(1); parent
        >>> child.close()
        >>> child, parent = Stdio.Piped.open(1)
        >>> parent.readable()
        True
        >>> child.close(); parent.close()
        """
        if self is Stdio.Inherit:
            return None, None
        if self is Stdio.Null:
            return FD.devnull('rb' if child_fd == 0 else 'wb'), None
        return Pipe().ends(child_reads=child_fd == 0)


def get_stdio(value):
    """accept a Stdio, its name or None

    >>> get_stdio('Inherit'), get_stdio(None), get_stdio(Stdio.Piped)
    (Stdio.Inherit, None, Stdio.Piped)
    """
    if value is None or isinstance(value, Stdio):
        return value
    return Stdio.from_jso(value)
