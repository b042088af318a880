r"""pipeline helpers built on funcpipes

>>> cmd('echo', ['hi']) | output | check | get.stdout
b'hi\n'
>>> cmd('false') | status
1
>>> run('sh', ['-c', 'echo $X'], environment={'X': 'x'}) | get.stdout
b'x\n'

Spawned children can be waited on later:

>>> children = [cmd('sh', ['-c', f'exit {i}']) | spawn for i in range(3)]
>>> [child | wait for child in children]
[0, 1, 2]
"""

__all__ = (
    'to', 'get',
    'cmd', 'spawn', 'output', 'status', 'run',
    'wait', 'check',
)

from funcpipes import Pipe, to, get
from .command import Command


@Pipe
def cmd(*args, **kwargs):
    """creates a Command, see help(Command)"""
    return Command(*args, **kwargs)


@Pipe
def spawn(command, backend='default'):
    """alias for command.spawn()"""
    return command.spawn(backend)


@Pipe
def output(command, backend='default'):
    """alias for command.output()"""
    return command.output(backend)


@Pipe
def status(command, backend='default'):
    """alias for command.status()"""
    return command.status(backend)


wait = to.wait
check = to.check
run = cmd & output
