"""a cloneable, comparable, serializable description of a process to launch

>>> cmd = Command('printf', ['%s\\n', 'hello']).env('LANG', 'C')
>>> cmd
Command('printf', arguments=['%s\\n', 'hello'], environment={'LANG': 'C'})
>>> cmd.output()
Output(argv=['printf', '%s\\n', 'hello'], status=0, stdout=b'hello\\n', stderr=b'')

Commands are plain values: copies compare equal and are independent.

>>> other = cmd.copy()
>>> other == cmd
True
>>> other.add_arg('world'); other == cmd
False
>>> cmd.arguments
['%s\\n', 'hello']
"""

__all__ = 'Command',

import os
import json
from pathlib import Path

from .stdio import Stdio, get_stdio
from .launch import convert
from . import process


def native(value):
    """normalize a str, bytes or path-like into an OS-native str

    Undecodable bytes survive as surrogate escapes.

    >>> native(b'caf\\xc3\\xa9'), native(b'\\xff')
    ('café', '\\udcff')
    """
    return os.fsdecode(value)


class Command:
    """a process builder

    Equivalent to what subprocess.Popen is told about a process, but kept as
    data: it can be copied, compared and serialized, and only becomes a
    process when spawn(), output() or status() is called.

    name:                the program to run, looked up in PATH if it has no slash
    arguments:           arguments passed to the program, in order
    inherit_environment: whether the child starts from the parent's environment
    environment:         variable -> value, or -> None to keep an inherited
                         variable away from the child
    current_dir:         working directory of the child, None for the parent's
    stdin, stdout, stderr: a Stdio, or None for the default of the entry point

    Every mutation exists in two styles: in-place setters (add_arg(),
    set_env(), ...) which return None, and chainable methods (arg(), env(),
    ...) which apply the setter and return the command itself.
    """
    FIELDS = (
        'name', 'arguments', 'inherit_environment', 'environment',
        'current_dir', 'stdin', 'stdout', 'stderr',
    )

    def __init__(
        self,
        name, arguments=(),
        *,
        inherit_environment=True, environment=None, current_dir=None,
        stdin=None, stdout=None, stderr=None,
    ):
        self.name = native(name)
        self.arguments = []
        self.inherit_environment = bool(inherit_environment)
        self.environment = {}
        self.current_dir = None
        self.stdin = self.stdout = self.stderr = None

        self.add_args(arguments)
        for key, value in dict(environment or {}).items():
            if value is None:
                self.remove_env(key)
            else:
                self.set_env(key, value)
        if current_dir is not None:
            self.set_current_dir(current_dir)
        self.set_stdin(stdin)
        self.set_stdout(stdout)
        self.set_stderr(stderr)

    # setters

    def add_arg(self, arg):
        """append one argument"""
        self.arguments.append(native(arg))

    def add_args(self, args):
        """append several arguments, preserving their order

        >>> cmd = Command('echo'); cmd.add_args(['a', 'b']); cmd.add_args(('a',))
        >>> cmd.arguments
        ['a', 'b', 'a']

        A single string is not a sequence of arguments:

        >>> cmd.add_args('hi')
        Traceback (most recent call last):
        ...
        TypeError: expected a sequence of arguments, got str
        >>> Command('echo', b'hi')
        Traceback (most recent call last):
        ...
        TypeError: expected a sequence of arguments, got bytes
        """
        if isinstance(args, (str, bytes)):
            raise TypeError(f'expected a sequence of arguments, got {type(args).__name__}')
        self.arguments.extend(native(arg) for arg in args)

    def set_env(self, key, value):
        """insert or overwrite an environment variable"""
        self.environment[native(key)] = native(value)

    def set_envs(self, variables):
        """insert or overwrite several variables, from a mapping or pairs"""
        if hasattr(variables, 'items'):
            variables = variables.items()
        for key, value in variables:
            self.set_env(key, value)

    def remove_env(self, key):
        """keep key out of the child's environment

        This only records the removal: it overrides an earlier set_env() of
        the same key, and it only has an effect on a variable the child would
        otherwise inherit.

        >>> cmd = Command('env'); cmd.set_env('A', '1'); cmd.remove_env('A')
        >>> cmd.environment
        {'A': None}
        """
        self.environment[native(key)] = None

    def clear_env(self):
        """forget every variable and stop inheriting the parent's environment

        >>> cmd = Command('env', environment={'A': '1', 'B': None})
        >>> cmd.clear_env(); cmd.set_env('K', 'V')
        >>> cmd.inherit_environment, cmd.environment
        (False, {'K': 'V'})
        """
        self.environment.clear()
        self.inherit_environment = False

    def no_inherit_env(self):
        """stop inheriting the parent's environment, keeping explicit variables

        >>> cmd = Command('env', environment={'A': '1'}); cmd.no_inherit_env()
        >>> cmd.inherit_environment, cmd.environment
        (False, {'A': '1'})
        """
        self.inherit_environment = False

    def set_current_dir(self, path):
        self.current_dir = Path(native(path))

    def set_stdin(self, stdin):
        self.stdin = get_stdio(stdin)

    def set_stdout(self, stdout):
        self.stdout = get_stdio(stdout)

    def set_stderr(self, stderr):
        self.stderr = get_stdio(stderr)

    # builders

    def arg(self, arg):
        """chainable add_arg()

        >>> Command('echo').arg('a').arg('a').arguments
        ['a', 'a']
        """
        self.add_arg(arg)
        return self

    def args(self, args):
        self.add_args(args)
        return self

    def env(self, key, value):
        self.set_env(key, value)
        return self

    def envs(self, variables):
        self.set_envs(variables)
        return self

    def env_remove(self, key):
        self.remove_env(key)
        return self

    def env_clear(self):
        self.clear_env()
        return self

    def env_no_inherit(self):
        self.no_inherit_env()
        return self

    def cwd(self, path):
        """chainable set_current_dir()

        >>> from tempfile import TemporaryDirectory
        >>> with TemporaryDirectory() as dir:
        ...     out = Command('pwd').cwd(dir).output().stdout
        ...     out == os.fsencode(os.path.realpath(dir)) + b'\\n'
        ...
        True
        """
        self.set_current_dir(path)
        return self

    def with_stdin(self, stdin):
        self.set_stdin(stdin)
        return self

    def with_stdout(self, stdout):
        self.set_stdout(stdout)
        return self

    def with_stderr(self, stderr):
        self.set_stderr(stderr)
        return self

    # value semantics

    def copy(self):
        """an independent, equal command"""
        return type(self).from_jso(self.to_jso())

    __copy__ = copy

    def key(self):
        """a hashable snapshot of the command, equal exactly when the commands are

        Commands themselves are mutable and therefore unhashable; use this for
        caching.

        >>> a = Command('env', environment={'A': '1', 'B': None})
        >>> b = Command('env').env_remove('B').env('A', '1')
        >>> a == b, a.key() == b.key(), hash(a.key()) == hash(b.key())
        (True, True, True)
        """
        return (
            self.name,
            tuple(self.arguments),
            self.inherit_environment,
            frozenset(self.environment.items()),
            self.current_dir,
            self.stdin, self.stdout, self.stderr,
        )

    def __eq__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return self.key() == other.key()

    __hash__ = None

    def __repr__(self):
        defaults = vars(type(self)(self.name))
        param_str = ''.join(
            f', {n}={repr(a)}'
            for n, a in vars(self).items()
            if n != 'name' and a != defaults[n]
        )
        return f'{type(self).__name__}({repr(self.name)}{param_str})'

    # serialization

    def to_jso(self):
        """the command as JSON-compatible data

        >>> Command('ls', ['-l']).cwd('/tmp').with_stdout('Null').to_jso()  # doctest: +NORMALIZE_WHITESPACE
        {'name': 'ls', 'arguments': ['-l'], 'inherit_environment': True,
         'environment': {}, 'current_dir': '/tmp',
         'stdin': None, 'stdout': 'Null', 'stderr': None}
        """
        return {
            'name': self.name,
            'arguments': list(self.arguments),
            'inherit_environment': self.inherit_environment,
            'environment': dict(self.environment),
            'current_dir': None if self.current_dir is None else os.fspath(self.current_dir),
            'stdin': None if self.stdin is None else self.stdin.to_jso(),
            'stdout': None if self.stdout is None else self.stdout.to_jso(),
            'stderr': None if self.stderr is None else self.stderr.to_jso(),
        }

    @classmethod
    def from_jso(cls, jso):
        """inverse of to_jso(); absent optional fields take their defaults

        >>> Command.from_jso({'name': 'ls', 'stdin': 'Piped'})
        Command('ls', stdin=Stdio.Piped)
        >>> Command.from_jso({'name': 'ls', 'argv': []})
        Traceback (most recent call last):
        ...
        ValueError: unknown command fields: argv
        >>> Command.from_jso({'arguments': []})
        Traceback (most recent call last):
        ...
        ValueError: command has no name

        Fields of the wrong shape are rejected rather than coerced:

        >>> Command.from_jso({'name': 'echo', 'arguments': 'abc'})
        Traceback (most recent call last):
        ...
        ValueError: arguments must be a list of strings, got 'abc'
        >>> Command.from_jso({'name': 'echo', 'inherit_environment': 'false'})
        Traceback (most recent call last):
        ...
        ValueError: inherit_environment must be a boolean, got 'false'
        >>> Command.from_jso({'name': 'env', 'environment': {'A': 1}})
        Traceback (most recent call last):
        ...
        ValueError: environment must map strings to strings or null, got {'A': 1}
        >>> Command.from_jso({'name': 'pwd', 'current_dir': ['/tmp']})
        Traceback (most recent call last):
        ...
        ValueError: current_dir must be a string or null, got ['/tmp']
        >>> Command.from_jso({'name': 5})
        Traceback (most recent call last):
        ...
        ValueError: name must be a string, got 5
        """
        if not isinstance(jso, dict):
            raise ValueError(f'expected a command object, got {type(jso).__name__}')
        unknown = set(jso) - set(cls.FIELDS)
        if unknown:
            raise ValueError(f'unknown command fields: {", ".join(sorted(unknown))}')
        if 'name' not in jso:
            raise ValueError('command has no name')

        fields = dict(jso)
        name = fields.pop('name')
        arguments = fields.pop('arguments', [])
        inherit_environment = fields.get('inherit_environment', True)
        environment = fields.get('environment')
        current_dir = fields.get('current_dir')
        checks = (
            ('name', name, 'be a string', isinstance(name, str)),
            (
                'arguments', arguments, 'be a list of strings',
                isinstance(arguments, list) and all(isinstance(arg, str) for arg in arguments),
            ),
            (
                'inherit_environment', inherit_environment, 'be a boolean',
                isinstance(inherit_environment, bool),
            ),
            (
                'environment', environment, 'map strings to strings or null',
                environment is None or isinstance(environment, dict) and all(
                    isinstance(key, str) and (value is None or isinstance(value, str))
                    for key, value in environment.items()
                ),
            ),
            (
                'current_dir', current_dir, 'be a string or null',
                current_dir is None or isinstance(current_dir, str),
            ),
        )
        for field, value, shape, ok in checks:
            if not ok:
                raise ValueError(f'{field} must {shape}, got {value!r}')
        return cls(name, arguments, **fields)

    def to_json(self, **kwargs):
        """serialize with json.dumps(); kwargs are passed on"""
        return json.dumps(self.to_jso(), **kwargs)

    @classmethod
    def from_json(cls, text):
        r"""
        >>> cmd = Command(b'\xff', [b'\xfe']).env_remove('A').with_stderr(Stdio.Inherit)
        >>> Command.from_json(cmd.to_json()) == cmd
        True
        """
        return cls.from_jso(json.loads(text))

    # execution

    def launch(self):
        """the native launcher configuration, see cmdspec.launch.convert()"""
        return convert(self)

    def spawn(self, backend='default'):
        """start the process and return a live Child handle

        Unset streams are inherited.

        >>> child = Command('sh', ['-c', 'exit 4']).spawn()
        >>> child.wait()
        4
        """
        return process.spawn(self.launch(), backend)

    def output(self, backend='default'):
        """run to completion, capturing stdout and stderr

        Unset stdout and stderr are piped, unset stdin reads from the null device.

        >>> Command('sh', ['-c', 'cat; echo oops >&2']).output()
        Output(argv=['sh', '-c', 'cat; echo oops >&2'], status=0, stdout=b'', stderr=b'oops\\n')
        """
        return process.output(self.launch(), backend)

    def status(self, backend='default'):
        """run to completion and return only the exit status

        Unset streams are inherited.

        >>> Command('true').status(), Command('false').status()
        (0, 1)
        """
        return process.status(self.launch(), backend)
