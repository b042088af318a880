from doctest import testmod

import pytest

import cmdspec
from cmdspec import fd, pipe, thread, posix_wait, subprocess, fork_exec
from cmdspec import stdio, launch, command, process, util
from cmdspec.process import change_default_backend, get_backend

BACKEND_MODULES = posix_wait, subprocess, fork_exec
MODULES = fd, pipe, thread, stdio, launch, command, process, util, cmdspec


@pytest.fixture
def backend(request):
    previous = get_backend('default')
    yield change_default_backend(request.param)
    change_default_backend(previous)


@pytest.mark.parametrize('mod', BACKEND_MODULES, ids=lambda mod: mod.__name__)
def test_backend_doctests(mod):
    failed, attempted = testmod(mod)
    assert attempted > 0
    assert failed == 0


@pytest.mark.parametrize('backend', ['subprocess', 'fork_exec'], indirect=True)
@pytest.mark.parametrize('mod', MODULES, ids=lambda mod: mod.__name__)
def test_doctests(backend, mod):
    failed, attempted = testmod(mod)
    assert attempted > 0
    assert failed == 0
