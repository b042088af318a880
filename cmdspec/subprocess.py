"""low-level module for spawning and waiting for processes with subprocess.Popen

It only contains two functions, spawn() and wait()


>>> import os
>>> from tempfile import TemporaryDirectory
>>> with TemporaryDirectory() as dir:
...     with open(f'{dir}/file', 'wb') as file:
...         wait(spawn(['pwd'], cwd=dir, streams=(None, file)))
...     with open(f'{dir}/file') as file:
...         file.read() == os.path.realpath(dir) + '\\n'
...
0
True
"""

__all__ = 'spawn', 'wait'

from subprocess import Popen

spawned = {}


def spawn(argv, env=None, cwd=None, streams=()):
    """spawn a process and return its pid

    env:     complete environment of the child, None to inherit the parent's
    cwd:     working directory of the child, None to inherit the parent's
    streams: (stdin, stdout, stderr), each None to inherit or something with
             a fileno() method
    """
    stdin, stdout, stderr = tuple(streams) + (None,) * (3 - len(streams))
    popen = Popen(argv, env=env, cwd=cwd, stdin=stdin, stdout=stdout, stderr=stderr)
    spawned[popen.pid] = popen
    return popen.pid


def wait(pid):
    """wait on a pid to complete

    >>> wait(spawn(['sh', '-c', 'kill -9 $$']))
    -9
    """
    if pid in spawned:
        return spawned.pop(pid).wait()
    from .posix_wait import wait
    return wait(pid)
