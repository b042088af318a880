__all__ = (
    'Child', 'Output', 'OutputError',
    'get_backend', 'change_default_backend',
)

import os
import errno
import logging
from signal import Signals, SIGKILL, SIGTERM

from .stdio import Stdio
from .thread import Thread

logger = logging.getLogger(__name__)


def get_signal(sig: Signals | int | str) -> Signals:
    if isinstance(sig, str):
        sig = sig.upper()
        return Signals[sig if sig.startswith('SIG') else f'SIG{sig}']
    return Signals(sig)


def get_backend(name=None):
    """look up a backend by name

    A backend is any namespace with spawn(argv, env, cwd, streams) returning a
    pid and wait(pid) returning a subprocess-style return code.

    >>> get_backend('posix_spawn')
    Traceback (most recent call last):
    ...
    ValueError: unknown backend: 'posix_spawn'
    """
    if name == 'subprocess':
        from . import subprocess as backend
        return backend
    if name == 'fork_exec':
        from . import fork_exec as backend
        return backend
    if name == 'default':
        return get_backend.default
    raise ValueError(f'unknown backend: {name!r}')


if 'CMDSPEC_BACKEND' in os.environ:
    get_backend.default = get_backend(os.environ['CMDSPEC_BACKEND'])
else:
    get_backend.default = get_backend('subprocess')
logger.debug('default backend: %s', get_backend.default.__name__)


def change_default_backend(name_or_namespace):
    """change the backend used when none is given explicitly

    >>> previous = get_backend('default')
    >>> change_default_backend('fork_exec').__name__
    'cmdspec.fork_exec'
    >>> change_default_backend(previous) is previous
    True
    """
    if isinstance(name_or_namespace, str):
        get_backend.default = get_backend(name_or_namespace)
    else:
        name_or_namespace.spawn
        name_or_namespace.wait
        get_backend.default = name_or_namespace
    logger.debug('default backend: %s', get_backend.default.__name__)
    return get_backend.default


class Child:
    """a live process, the handle returned by Command.spawn()

    stdin:  writable binary file if stdin is Piped, else None
    stdout: readable binary file if stdout is Piped, else None
    stderr: readable binary file if stderr is Piped, else None

    The caller owns the process and should eventually wait() on it:

    >>> from cmdspec import Command
    >>> child = Command('tr', ['a-z', 'A-Z'], stdin='Piped', stdout='Piped').spawn()
    >>> child.stdin.write(b'abc')
    3
    >>> child.wait_with_output()
    Output(argv=['tr', 'a-z', 'A-Z'], status=0, stdout=b'ABC', stderr=b'')

    Used as a context manager, it closes its streams and waits on exit:

    >>> with Command('sleep', ['10']).spawn() as child:
    ...     child.kill()
    ...
    >>> child.returncode
    -15

    Strings the operating system cannot take, such as ones with an embedded
    NUL, fail at launch like any other OS error:

    >>> Command('echo', ['a\\0b']).status()
    Traceback (most recent call last):
    ...
    OSError: [Errno 22] embedded null byte
    """
    def __init__(self, launch, backend='default'):
        """spawn the process described by a Launch whose streams are all set

        Raises OSError if the process cannot be created; nothing is left open
        in that case.
        """
        self.argv = launch.argv
        self.returncode = None
        self.backend = get_backend(backend) if isinstance(backend, str) else backend

        ends = []
        try:
            for child_fd, stream in enumerate(launch.streams):
                ends.append((stream or Stdio.Inherit).open(child_fd))
            self.stdin, self.stdout, self.stderr = (parent for _, parent in ends)
            try:
                self.pid = self.backend.spawn(
                    self.argv,
                    launch.environment(os.environ),
                    launch.cwd,
                    tuple(child for child, _ in ends),
                )
            except ValueError as e:
                raise OSError(errno.EINVAL, str(e)) from e
        except BaseException:
            for _, parent in ends:
                if parent is not None:
                    parent.close()
            raise
        finally:
            for child, _ in ends:
                if child is not None:
                    child.close()
        logger.debug('spawned %d: %r', self.pid, self.argv)

    @property
    def streams(self):
        return self.stdin, self.stdout, self.stderr

    def close_streams(self):
        """close the parent's ends of every piped stream"""
        for stream in self.streams:
            if stream is not None:
                stream.close()

    def wait(self):
        """close stdin, wait for the process to exit and return its status

        Negative statuses are the signals that killed the process. Waiting
        again returns the same status.
        """
        if self.stdin is not None:
            self.stdin.close()
        if self.returncode is None:
            self.returncode = self.backend.wait(self.pid)
            logger.debug('reaped %d: %d', self.pid, self.returncode)
        return self.returncode

    def wait_with_output(self):
        """wait for the process, collecting everything left on stdout and stderr

        stderr is drained on a separate thread so that neither pipe can fill
        up while the other is read. Streams that are not piped read as b''.
        """
        if self.stdin is not None:
            self.stdin.close()
        reader = None if self.stderr is None else Thread(self.stderr.read).start()
        try:
            stdout = b'' if self.stdout is None else self.stdout.read()
        finally:
            stderr = b'' if reader is None else reader.join()
            self.close_streams()
        return Output(self.argv, self.wait(), stdout, stderr)

    def kill(self, sig: Signals | int | str = SIGTERM, dead_okay: bool | None = None):
        """convenience for os.kill(self.pid, signal)

        sig can be an integer or the signal name, case insensitive, with or
        without the 'SIG' prefix

        dead_okay=False raises ProcessLookupError if the process is dead; by
        default dead_okay=True for SIGTERM and SIGKILL and False otherwise
        """
        sig = get_signal(sig)
        if dead_okay is None:
            dead_okay = sig == SIGTERM or sig == SIGKILL
        if self.returncode is not None:
            if not dead_okay:
                raise ProcessLookupError(f'process {self.pid} was already reaped')
            return
        try:
            os.kill(self.pid, sig)
        except ProcessLookupError:
            if not dead_okay:
                raise

    def __repr__(self):
        return f'{type(self).__name__}(argv={self.argv!r}, pid={self.pid})'

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.close_streams()
        self.wait()


class OutputBase:
    def __init__(self, argv, status, stdout=b'', stderr=b''):
        self.argv = argv
        self.status = status
        self.stdout = stdout
        self.stderr = stderr

    @property
    def success(self):
        return self.status == 0

    def __repr__(self):
        param_str = ', '.join(
            f'{n}={repr(a)}'
            for n, a in vars(self).items()
            if a is not None
        )
        return f'{type(self).__name__}({param_str})'

    def __str__(self):
        return repr(self)

    def __iter__(self):
        return iter(vars(self).values())

    def __eq__(self, other):
        if not isinstance(other, OutputBase):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None


class Output(OutputBase):
    """the result of running a process to completion with captured output"""
    def check(self):
        """raise an error if status != 0

        >>> from cmdspec import Command
        >>> Command('sh', ['-c', 'echo no >&2; exit 2']).output().check()
        Traceback (most recent call last):
        ...
        cmdspec.process.OutputError: Output(argv=['sh', '-c', 'echo no >&2; exit 2'], status=2, stdout=b'', stderr=b'no\\n')
        """
        if self.status != 0:
            raise OutputError(*self)
        return self


class OutputError(OutputBase, Exception):
    """an Output as an error, raised by Output.check() if status != 0"""
    __hash__ = Exception.__hash__

    def __str__(self):
        return repr(Output(*self))


def spawn(launch, backend='default'):
    """start the process, inheriting every stream left unset"""
    return Child(launch.with_defaults(Stdio.Inherit, Stdio.Inherit, Stdio.Inherit), backend)


def output(launch, backend='default'):
    """run the process to completion, piping unset stdout and stderr

    An unset stdin reads from the null device so the child cannot wait on a
    terminal.

    >>> from cmdspec import Command
    >>> Command('echo', ['hello']).output().stdout
    b'hello\\n'
    """
    child = Child(launch.with_defaults(Stdio.Null, Stdio.Piped, Stdio.Piped), backend)
    return child.wait_with_output()


def status(launch, backend='default'):
    """run the process to completion, inheriting every stream left unset

    Any stream explicitly set to Piped is closed in the parent before waiting,
    so the child sees end-of-file or a broken pipe instead of blocking.

    >>> from cmdspec import Command
    >>> Command('cat', stdin='Piped').status()
    0
    """
    child = Child(launch.with_defaults(Stdio.Inherit, Stdio.Inherit, Stdio.Inherit), backend)
    child.close_streams()
    return child.wait()
