r"""cmdspec - process invocations as plain values

A Command describes a process without starting it. It can be copied,
compared and serialized:

>>> cmd = Command('sh', ['-c', 'echo "$GREETING, $NAME"']).env('GREETING', 'hello')
>>> cmd.copy() == cmd
True
>>> Command.from_json(cmd.to_json()) == cmd
True

and only becomes a process in one of three ways. spawn() starts it and
returns a live handle, output() runs it to completion and captures stdout and
stderr, status() runs it to completion and returns the exit status:

>>> cmd.copy().env('NAME', 'world').output().stdout
b'hello, world\n'
>>> cmd.env_remove('NAME').output().stdout
b'hello, \n'
>>> cmd.status()
0

The environment has three states per variable: not mentioned (inherited),
removed (never reaches the child, even if inherited) and set. Clearing it
also stops inheritance:

>>> Command('env').env_clear().env('K', 'V').output().stdout
b'K=V\n'

What would be handed to the operating system can be checked without
launching anything, see cmdspec.launch:

>>> Command('ls', ['-a']).env_remove('HOME').launch()
Launch('ls', args=('-a',), env_remove=('HOME',))

There are two backends, 'subprocess' (the default) and 'fork_exec'. The
default comes from the CMDSPEC_BACKEND environment variable, or can be
changed with change_default_backend(). Every entry point also takes a
backend argument:

>>> Command('sh', ['-c', 'exit 3']).status(backend='fork_exec')
3

Failures to launch are OSErrors, straight from the operating system:

>>> Command('/nonexistent/program').status()  # doctest: +IGNORE_EXCEPTION_DETAIL
Traceback (most recent call last):
...
FileNotFoundError: [Errno 2] No such file or directory

Commands also work with funcpipes, see cmdspec.util:

>>> cmd | output | check | get.stdout
b'hello, \n'
"""

from .stdio import Stdio  # noqa: F401
from .command import Command  # noqa: F401
from .launch import Launch, convert  # noqa: F401
from .process import *  # noqa: F401 F403
from .util import *  # noqa: F401 F403
