__all__ = 'Pipe',

import os
from .fd import FD


class Pipe:
    """wrapper around os.pipe

    >>> p = Pipe()
    >>> p.write(b'hello')
    5
    >>> p.read()
    b'hello'

    Both ends are created non-inheritable, so a child only ever sees the end
    explicitly handed to it.
    """
    def __init__(self):
        self.fds = tuple(
            FD(fd, f'{rw}b')
            for fd, rw in zip(os.pipe(), 'rw')
        )

    @property
    def read_fd(self):
        return self.fds[0]

    @property
    def write_fd(self):
        return self.fds[1]

    def ends(self, child_reads):
        """split the pipe into (child end, parent file)

        The parent end is opened as a file object and owns its descriptor.

        >>> child, parent = Pipe().ends(child_reads=True)
        >>> child.mode, parent.mode
        ('rb', 'wb')
        >>> child.close(); parent.close()
        """
        if child_reads:
            return self.read_fd, self.write_fd.open()
        return self.write_fd, self.read_fd.open()

    def close(self, invalid_ok=True):
        for fd in self.fds:
            fd.close(invalid_ok)

    def write(self, data):
        """open the write FD, feed it some data and close it"""
        with self.write_fd.open() as file:
            return file.write(data)

    def read(self):
        """open the read FD and read until every writer is gone"""
        with self.read_fd.open() as file:
            return file.read()

    def __repr__(self):
        return f'{type(self).__name__}()<{self.read_fd}, {self.write_fd}>'
