import io

import pytest

from textconsole.config import ConsoleConfig
from textconsole.console import ConsoleBuilder
from textconsole.interface import StreamCLI


class Calls:
    """Records handler invocations."""

    def __init__(self):
        self.seen = []

    def recorder(self, name):
        def handler(*args):
            self.seen.append((name, args))
        return handler

    def count(self, name):
        return sum(1 for n, _ in self.seen if n == name)


@pytest.fixture
def calls():
    return Calls()


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def make_console(output):
    """Build a console fed from `lines` and writing into `output`."""

    def _make(builder: ConsoleBuilder, lines: str = "", config: ConsoleConfig | None = None):
        return builder.build(
            line_source=StreamCLI(io.StringIO(lines)),
            output=output,
            config=config or ConsoleConfig(),
        )

    return _make
