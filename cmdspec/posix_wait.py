__all__ = 'wait', 'returncode'

import os


def returncode(status):
    """convert a raw wait status into a subprocess-style return code

    Negative values are signal numbers.
    """
    if os.WIFSIGNALED(status):
        return -os.WTERMSIG(status)
    if os.WIFEXITED(status):
        return os.WEXITSTATUS(status)
    if os.WIFSTOPPED(status):
        return -os.WSTOPSIG(status)
    raise RuntimeError(f'weird exit status: {hex(status)}')


def wait(pid):
    """wait on a pid to complete

    >>> from cmdspec.fork_exec import spawn
    >>> wait(spawn(['sh', '-c', 'exit 3']))
    3
    """
    pid_, status = os.waitpid(pid, 0)
    if pid_ != pid:
        raise RuntimeError(f'pid is {pid_}, expected {pid}')
    return returncode(status)
