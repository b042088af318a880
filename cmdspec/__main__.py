from doctest import testmod
from . import fd, pipe, thread, posix_wait, subprocess, fork_exec
from . import stdio, launch, command, process, util
import cmdspec

from .process import change_default_backend, get_backend

print('checking backends...')
for mod in posix_wait, subprocess, fork_exec:
    print(f'\t{mod.__name__}...')
    testmod(mod)
print()

for backend in 'subprocess', 'fork_exec':
    change_default_backend(backend)
    print(f'with backend {get_backend.default.__name__}...')
    for mod in fd, pipe, thread, stdio, launch, command, process, util, cmdspec:
        print(f'\t{mod.__name__}...')
        testmod(mod)
    print()
