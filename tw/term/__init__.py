"""Querying the geometry of the terminal attached to the process.

The main function is :func:`query_terminal_width`, which asks the operating system for the number
of character columns of the terminal attached to standard output:

.. code-block:: python

   from tw import term

   n_cols = term.query_terminal_width()

The query never fails visibly. If standard output is redirected to a file or a pipe, or if the
process has no controlling terminal, the function returns 0 and it is up to the caller to apply a
default width. Use :func:`probe_terminal_size` instead if you need to tell "0 columns" and "query
failed" apart.

The device query itself is carried out by a :class:`GeometryProvider`. On POSIX systems it is an
``ioctl(TIOCGWINSZ)`` call, on Windows it is the console API. The provider is picked at runtime
from :data:`sys.platform`, or from environment variable ``TWTERM_PROVIDER`` if set.
"""

import os
import struct
import sys
from contextlib import contextmanager

from tw import tp
from tw.traceback import LogicError

if tp.TYPE_CHECKING:
    from tw import logg


__all__ = [
    "STDIN_FILENO",
    "STDOUT_FILENO",
    "STDERR_FILENO",
    "TerminalSize",
    "EMPTY_SIZE",
    "TerminalQueryError",
    "GeometryProvider",
    "PosixProvider",
    "WindowsProvider",
    "default_provider",
    "get_provider",
    "set_provider",
    "use_provider",
    "probe_terminal_size",
    "query_terminal_size",
    "query_terminal_width",
]


STDIN_FILENO = 0
STDOUT_FILENO = 1
STDERR_FILENO = 2


class TerminalSize(tp.NamedTuple):
    """Geometry of a terminal, laid out like the kernel's ``struct winsize``.

    All fields are unsigned 16-bit integers. An all-zero record means the geometry is unknown.
    """

    rows: int
    columns: int
    xpixels: int = 0
    ypixels: int = 0


EMPTY_SIZE = TerminalSize(0, 0, 0, 0)


class TerminalQueryError(LogicError):
    """Raised by :func:`probe_terminal_size` when the device query fails."""


# -----------------------------------------------------------------------------
# providers
# -----------------------------------------------------------------------------


class GeometryProvider:
    """Source of terminal geometry.

    Subclasses implement :func:`query`, which must either return a freshly queried
    :class:`TerminalSize` or raise :class:`OSError`. A provider must not cache geometry between
    calls.
    """

    name = "abstract"

    def query(self, fd: int) -> TerminalSize:
        """Queries the geometry of the terminal attached to a file descriptor.

        Parameters
        ----------
        fd : int
            the file descriptor

        Returns
        -------
        TerminalSize
            the current geometry

        Raises
        ------
        OSError
            if the file descriptor is not attached to a terminal or the query fails otherwise
        """
        raise NotImplementedError

    def __repr__(self):
        return "{}()".format(type(self).__name__)


class PosixProvider(GeometryProvider):
    """Queries the terminal driver via ``ioctl(fd, TIOCGWINSZ)``."""

    name = "posix"

    _winsize = struct.Struct("HHHH")  # ws_row, ws_col, ws_xpixel, ws_ypixel

    def query(self, fd: int) -> TerminalSize:
        import fcntl
        import termios

        buf = fcntl.ioctl(fd, termios.TIOCGWINSZ, bytes(self._winsize.size))
        return TerminalSize._make(self._winsize.unpack(buf))


class WindowsProvider(GeometryProvider):
    """Queries the Windows console via ``GetConsoleScreenBufferInfo``.

    The console handle is the OS handle behind the file descriptor (``msvcrt.get_osfhandle``), so
    any descriptor works, not only the three standard ones.

    The reported size is that of the visible window, not of the whole screen buffer. Pixel fields
    are always 0.
    """

    name = "windows"

    # CONSOLE_SCREEN_BUFFER_INFO: dwSize, dwCursorPosition, wAttributes, srWindow,
    # dwMaximumWindowSize
    _csbi = struct.Struct("hhhhHhhhhhh")

    def query(self, fd: int) -> TerminalSize:
        import ctypes
        import msvcrt

        handle = msvcrt.get_osfhandle(fd)
        buf = ctypes.create_string_buffer(self._csbi.size)
        if not ctypes.windll.kernel32.GetConsoleScreenBufferInfo(handle, buf):
            raise ctypes.WinError()

        left, top, right, bottom = self._csbi.unpack(buf.raw)[5:9]
        return TerminalSize(rows=bottom - top + 1, columns=right - left + 1)


_providers = {
    PosixProvider.name: PosixProvider,
    WindowsProvider.name: WindowsProvider,
}


def default_provider() -> GeometryProvider:
    """Makes the provider suitable for the running platform.

    Environment variable ``TWTERM_PROVIDER`` takes precedence over :data:`sys.platform`. Its value
    must be one of 'posix' and 'windows'.
    """
    name = os.environ.get("TWTERM_PROVIDER", "").strip().lower()
    if not name:
        name = "windows" if sys.platform == "win32" else "posix"

    if name not in _providers:
        raise ValueError(
            "Unknown terminal geometry provider '{}' from TWTERM_PROVIDER. Expected one of {}.".format(
                name, sorted(_providers)
            )
        )
    return _providers[name]()


_provider = None


def get_provider() -> GeometryProvider:
    """Returns the active provider, making the default one on first use."""
    global _provider
    if _provider is None:
        _provider = default_provider()
    return _provider


def set_provider(provider: tp.Optional[GeometryProvider]) -> tp.Optional[GeometryProvider]:
    """Replaces the active provider.

    Parameters
    ----------
    provider : GeometryProvider, optional
        the new provider. Anything with a callable `query` attribute is accepted. If None is
        given, the default provider is made again on next use.

    Returns
    -------
    GeometryProvider or None
        the provider previously active, or None if none was made yet
    """
    global _provider
    if provider is not None and not callable(getattr(provider, "query", None)):
        raise ValueError(
            "Expected a GeometryProvider, got an instance of '{}'.".format(
                type(provider).__name__
            )
        )
    old_provider = _provider
    _provider = provider
    return old_provider


@contextmanager
def use_provider(provider: GeometryProvider):
    """Context manager that makes a provider active within a with statement.

    >>> from tw import term
    >>> with term.use_provider(term.PosixProvider()):
    ...     n_cols = term.query_terminal_width()

    """
    old_provider = set_provider(provider)
    try:
        yield provider
    finally:
        set_provider(old_provider)


# -----------------------------------------------------------------------------
# queries
# -----------------------------------------------------------------------------


def probe_terminal_size(fd: int = STDOUT_FILENO) -> TerminalSize:
    """Queries the terminal geometry, raising an error if the query fails.

    Parameters
    ----------
    fd : int
        the file descriptor whose terminal is queried. Default is standard output.

    Returns
    -------
    TerminalSize
        the current geometry

    Raises
    ------
    TerminalQueryError
        if the file descriptor is not attached to a terminal, or if the platform query fails
    """
    provider = get_provider()
    try:
        return provider.query(fd)
    except OSError as e:
        provider_name = getattr(provider, "name", type(provider).__name__)
        raise TerminalQueryError(
            "Unable to query the size of the terminal attached to file descriptor {}.".format(fd),
            debug={"fd": fd, "provider": provider_name},
            causing_error=e,
        ) from e


def query_terminal_size(
    fd: int = STDOUT_FILENO,
    logger: tp.Optional["logg.IndentedLoggerAdapter"] = None,
) -> TerminalSize:
    """Queries the terminal geometry, returning :data:`EMPTY_SIZE` if the query fails.

    Parameters
    ----------
    fd : int
        the file descriptor whose terminal is queried. Default is standard output.
    logger : tw.logg.IndentedLoggerAdapter, optional
        logger for debugging purposes

    Returns
    -------
    TerminalSize
        the current geometry, all zeros if unknown
    """
    try:
        return probe_terminal_size(fd)
    except TerminalQueryError as e:
        if logger:
            logger.debug(
                "Terminal size unknown for file descriptor {}: {}".format(fd, e.causing_error)
            )
        return EMPTY_SIZE


def query_terminal_width(
    fd: int = STDOUT_FILENO,
    logger: tp.Optional["logg.IndentedLoggerAdapter"] = None,
) -> int:
    """Returns the number of character columns of the terminal attached to standard output.

    The terminal is queried afresh on every call. The function does not raise when the query
    fails; it returns 0 instead.

    Parameters
    ----------
    fd : int
        the file descriptor whose terminal is queried. Default is standard output.
    logger : tw.logg.IndentedLoggerAdapter, optional
        logger for debugging purposes

    Returns
    -------
    int
        number of columns, between 0 and 65535. 0 means unknown.
    """
    return query_terminal_size(fd, logger=logger).columns
