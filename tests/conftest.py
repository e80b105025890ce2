import os
import struct
import sys

import pytest

from tw import term


class FakeProvider(term.GeometryProvider):
    """Provider replaying a scripted sequence of geometries.

    A geometry may be an OSError instance, which is raised instead. The last entry repeats.
    """

    name = "fake"

    def __init__(self, *sizes):
        self.sizes = list(sizes)
        self.fds = []

    def query(self, fd):
        self.fds.append(fd)
        size = self.sizes.pop(0) if len(self.sizes) > 1 else self.sizes[0]
        if isinstance(size, OSError):
            raise size
        return size


@pytest.fixture(autouse=True)
def fresh_provider(monkeypatch):
    monkeypatch.delenv("TWTERM_PROVIDER", raising=False)
    old_provider = term.set_provider(None)
    yield
    term.set_provider(old_provider)


@pytest.fixture
def fake_provider():
    """Returns the class of scripted providers, to be instantiated with geometries."""
    return FakeProvider


@pytest.fixture
def pty_fds():
    if sys.platform == "win32":
        pytest.skip("pseudo-terminals are POSIX only")
    master_fd, slave_fd = os.openpty()
    yield master_fd, slave_fd
    os.close(master_fd)
    os.close(slave_fd)


@pytest.fixture
def set_winsize():
    """Returns a function that sets the geometry of a pseudo-terminal."""

    def set_winsize(fd, rows, columns):
        import fcntl
        import termios

        fcntl.ioctl(fd, termios.TIOCSWINSZ, struct.pack("HHHH", rows, columns, 0, 0))

    return set_winsize


@pytest.fixture
def stdout_to():
    """Returns a function that points file descriptor 1 at another descriptor until teardown."""
    saved_fd = os.dup(term.STDOUT_FILENO)

    def redirect(fd):
        sys.stdout.flush()
        os.dup2(fd, term.STDOUT_FILENO)

    yield redirect

    sys.stdout.flush()
    os.dup2(saved_fd, term.STDOUT_FILENO)
    os.close(saved_fd)
