"""conversion of a Command into the configuration a native launcher needs

convert() never touches the operating system: the parent environment is only
consulted when Launch.environment() is given one, so every step can be checked
against a fake:

>>> from cmdspec import Command
>>> parent = {'HOME': '/home/me', 'LANG': 'en_US', 'SECRET': 'xyz'}

Soft removals only matter while inheriting, and set variables override
inherited ones:

>>> launch = convert(Command('env').env_remove('SECRET').env('LANG', 'C'))
>>> launch
Launch('env', env_remove=('SECRET',), envs={'LANG': 'C'})
>>> launch.environment(parent)
{'HOME': '/home/me', 'LANG': 'C'}

Without inheritance, only variables with a value reach the child:

>>> launch = convert(Command('env').env_remove('SECRET').env('LANG', 'C').env_no_inherit())
>>> launch
Launch('env', env_clear=True, envs={'LANG': 'C'})
>>> launch.environment(parent)
{'LANG': 'C'}

An untouched environment is left to the launcher to inherit:

>>> convert(Command('env')).environment(parent) is None
True

as are the streams, so a fresh Command is launched with no customization at
all:

>>> convert(Command('env')) == Launch('env')
True
"""

__all__ = 'Launch', 'convert'


class Launch:
    """the recorded calls on a native process launcher

    program:    what to execute
    args:       arguments after the program name
    env_clear:  start the child from an empty environment
    env_remove: inherited variables to drop
    envs:       variables to set, on top of whatever is inherited
    cwd:        working directory, None for the parent's
    stdin, stdout, stderr: Stdio, or None for the entry point's default
    """
    STREAMS = 'stdin', 'stdout', 'stderr'

    def __init__(
        self, program, args=(),
        *,
        env_clear=False, env_remove=(), envs=None, cwd=None,
        stdin=None, stdout=None, stderr=None,
    ):
        self.program = program
        self.args = tuple(args)
        self.env_clear = env_clear
        self.env_remove = tuple(env_remove)
        self.envs = dict(envs or {})
        self.cwd = cwd
        self.stdin = stdin
        self.stdout = stdout
        self.stderr = stderr

    @property
    def argv(self):
        return [self.program, *self.args]

    @property
    def streams(self):
        return self.stdin, self.stdout, self.stderr

    def environment(self, parent):
        """apply the recorded environment calls to the parent environment

        parent is any mapping, normally os.environ. Returns None if the
        environment is not customized at all, otherwise a new dict.
        """
        if not (self.env_clear or self.env_remove or self.envs):
            return None
        env = {} if self.env_clear else dict(parent)
        for key in self.env_remove:
            env.pop(key, None)
        env.update(self.envs)
        return env

    def with_defaults(self, stdin=None, stdout=None, stderr=None):
        """copy with unset streams replaced by the given defaults

        >>> from cmdspec import Stdio
        >>> Launch('cat', stdout=Stdio.Null).with_defaults(*[Stdio.Piped] * 3).streams
        (Stdio.Piped, Stdio.Null, Stdio.Piped)
        """
        defaults = stdin, stdout, stderr
        return type(self)(
            self.program, self.args,
            env_clear=self.env_clear, env_remove=self.env_remove, envs=self.envs, cwd=self.cwd,
            **{
                name: default if stream is None else stream
                for name, stream, default in zip(self.STREAMS, self.streams, defaults)
            },
        )

    def __eq__(self, other):
        if not isinstance(other, Launch):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    def __repr__(self):
        defaults = vars(type(self)('', ()))
        param_str = ''.join(
            f', {n}={repr(a)}'
            for n, a in vars(self).items()
            if n != 'program' and a != defaults[n]
        )
        return f'{type(self).__name__}({repr(self.program)}{param_str})'


def convert(command):
    """map a Command onto native launcher calls

    >>> from cmdspec import Command, Stdio
    >>> convert(Command('ls', ['-l', '-a', '-l']).cwd('/tmp').with_stdout(Stdio.Null))
    Launch('ls', args=('-l', '-a', '-l'), cwd=PosixPath('/tmp'), stdout=Stdio.Null)
    """
    launch = Launch(command.name)
    if command.inherit_environment:
        launch.env_remove = tuple(
            key for key, value in command.environment.items() if value is None
        )
    else:
        launch.env_clear = True
    launch.envs = {
        key: value for key, value in command.environment.items() if value is not None
    }
    launch.args = tuple(command.arguments)
    if command.current_dir is not None:
        launch.cwd = command.current_dir
    for name in Launch.STREAMS:
        stream = getattr(command, name)
        if stream is not None:
            setattr(launch, name, stream)
    return launch
