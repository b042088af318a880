__all__ = 'FD',

import os
from errno import EBADF


class FD:
    """file descriptor wrapper

    A glorified integer with a close() method.

    >>> from os import pipe
    >>> r, w = pipe()
    >>> rfd, wfd = FD(r, 'rb'), FD(w, 'wb')
    >>> with wfd.open() as file: file.write(b'test')
    ...
    4
    >>> with rfd.open() as file: file.read()
    ...
    b'test'

    Closing is idempotent by default, which makes cleanup after a failed
    launch straightforward:

    >>> rfd.close(); rfd.close(); rfd.closed
    True
    """
    def __init__(self, fd, mode='rb'):
        self.fd = int(fd)
        self.mode = mode

    @classmethod
    def devnull(cls, mode='r+b'):
        """open the null device

        >>> with FD.devnull('rb').open() as file: file.read()
        ...
        b''
        """
        return cls(os.open(os.devnull, os.O_RDWR), mode)

    def fileno(self):
        return self.fd

    def open(self):
        """wrap the descriptor in a file object, which then owns it"""
        return open(self.fd, self.mode, buffering=0 if 'r' not in self.mode else -1)

    def close(self, invalid_ok=True):
        try:
            os.close(self.fd)
        except OSError as e:
            if not invalid_ok or e.errno != EBADF:
                raise

    @property
    def closed(self):
        try:
            os.fstat(self.fd)
        except OSError as e:
            if e.errno != EBADF:
                raise
            return True
        else:
            return False

    def __repr__(self):
        return f'{type(self).__name__}({self.fd}, {repr(self.mode)})'

    def __int__(self):
        return self.fd
