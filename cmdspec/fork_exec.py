"""low-level module for spawning and waiting for processes with os.fork and os.exec

It only contains two functions, spawn() and wait()


>>> import os
>>> from tempfile import TemporaryDirectory
>>> with TemporaryDirectory() as dir:
...     with open(f'{dir}/file', 'wb') as file:
...         wait(spawn(['sh', '-c', 'echo $GREETING'], {'GREETING': 'hi'}, streams=(None, file)))
...     with open(f'{dir}/file') as file:
...         print(file.read(), end='')
...
0
hi

Failing to launch raises the child's error in the parent:

>>> spawn(['/nonexistent/program'])  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
...
FileNotFoundError: [Errno 2] No such file or directory
"""

__all__ = 'spawn', 'wait'

import os
import signal
from ast import literal_eval
import builtins

from .posix_wait import wait
from .pipe import Pipe


def spawn(argv, env=None, cwd=None, streams=()):
    """spawn a process and return its pid

    Same arguments as cmdspec.subprocess.spawn(). Returns only once the
    child has either exec'd or failed to.

    If the fork itself fails, nothing is left open:

    >>> import errno
    >>> from unittest import mock
    >>> pipes = []
    >>> def recording_pipe():
    ...     pipes.append(Pipe())
    ...     return pipes[-1]
    ...
    >>> no_memory = OSError(errno.ENOMEM, 'Cannot allocate memory')
    >>> with mock.patch('cmdspec.fork_exec.Pipe', recording_pipe), mock.patch('os.fork', side_effect=no_memory):
    ...     spawn(['true'])
    Traceback (most recent call last):
    ...
    OSError: [Errno 12] Cannot allocate memory
    >>> [fd.closed for fd in pipes[0].fds]
    [True, True]
    """
    launch_pipe = Pipe()

    try:
        pid = os.fork()
    except OSError:
        launch_pipe.close()
        raise
    if pid:
        launch_pipe.write_fd.close()
        error = launch_pipe.read()
        if error:
            os.waitpid(pid, 0)
            name, argstr = error.decode().split('\n', maxsplit=1)
            raise getattr(builtins, name)(*literal_eval(argstr))
        return pid

    try:
        for name in 'SIGPIPE', 'SIGXFZ', 'SIGXFSZ':
            sig = getattr(signal, name, None)
            if sig is not None:
                signal.signal(sig, signal.SIG_DFL)

        fds = [None if stream is None else stream.fileno() for stream in streams]
        for i, fd in enumerate(fds):
            if fd is not None:
                os.dup2(fd, i)
        for fd in set(fds):
            if fd is not None and fd > 2:
                os.close(fd)

        launch_pipe.read_fd.close()
        if cwd is not None:
            os.chdir(cwd)
        if env is None:
            os.execvp(argv[0], argv)
        else:
            os.execvpe(argv[0], argv, env)
    except BaseException as e:
        if isinstance(e, OSError):
            name, args = 'OSError', (e.errno, e.strerror, e.filename)
        else:
            name, args = type(e).__name__, e.args
        if not hasattr(builtins, name):
            name, args = 'RuntimeError', (f'failed to launch process: {e!r}',)
        launch_pipe.write('\n'.join((name, repr(args))).encode())
    finally:
        os._exit(127)
