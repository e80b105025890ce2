"""Customised logging.

This module extends Python's package `logging`_. Instead of:

.. code-block:: python

   import logging

You do:

.. code-block:: python

   from tw import logg

   logger = logg.make_logger("myapp")
   n_cols = term.query_terminal_width(logger=logger)

It will import the logging package plus a coloured, indented logger adapter whose console lines
are cut to the width of the terminal that standard error is attached to.

We use acronym `logg` instead of `log` to avoid naming conflict with the mathematical `log`
function.

.. _logging:
   https://docs.python.org/3/library/logging.html
"""

from logging import *
from colorama import Fore
from colorama import init as _colorama_init

_colorama_init()

from tw import shutil, term, tp


__all__ = ["IndentedLoggerAdapter", "make_logger"]


class IndentedFilter(Filter):
    """Stamps the adapter's current indent on every record."""

    def __init__(self, indented_logger_adapter):
        super().__init__()
        self.parent = indented_logger_adapter

    def filter(self, record):
        record.indent = self.parent.indent
        return True


class IndentedLoggerAdapter(LoggerAdapter):
    """Logger with indenting capability.

    Each level has its own colour. Multi-line messages are broken into one record per line so
    that every line gets indented.
    """

    _level_colours = {
        CRITICAL: Fore.LIGHTRED_EX,
        ERROR: Fore.LIGHTMAGENTA_EX,
        WARNING: Fore.LIGHTYELLOW_EX,
        INFO: Fore.LIGHTWHITE_EX,
        DEBUG: Fore.LIGHTBLUE_EX,
    }

    def __init__(self, logger, extra=None):
        super().__init__(logger, extra)
        self.indent = 0
        self.logger.addFilter(IndentedFilter(self))

    def process(self, msg: str, kwargs):
        return ("  " * self.indent + msg, kwargs)

    def inc(self):
        self.indent += 1

    def dec(self):
        self.indent -= 1

    def log(self, level, msg: tp.Union[str, bytes], *args, **kwargs):
        if not isinstance(msg, (str, bytes)):
            msg = str(msg)
        if isinstance(msg, bytes):
            msg = msg.decode()
        colour = self._level_colours.get(level, "")
        for m in msg.split("\n"):
            super().log(level, colour + m, *args, **kwargs)

    def critical(self, msg, *args, **kwargs):
        self.log(CRITICAL, msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self.log(ERROR, msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self.log(WARNING, msg, *args, **kwargs)

    warn = warning

    def info(self, msg, *args, **kwargs):
        self.log(INFO, msg, *args, **kwargs)

    def debug(self, msg, *args, **kwargs):
        self.log(DEBUG, msg, *args, **kwargs)


def _console_formatter():
    """Makes a console formatter whose message column fits the terminal behind standard error."""

    # 13 = len("Mon 12:34:56 ")
    n_cols = shutil.stty_size(fd=term.STDERR_FILENO)[1]
    column_length = max(n_cols - 13, 20)
    log_lvl_length = min(max(int(column_length * 0.03), 1), 8)
    s1 = "{}.{}s ".format(log_lvl_length, log_lvl_length)
    column_length -= log_lvl_length
    s5 = "-{}.{}s".format(column_length, column_length)

    fmt_str = (
        Fore.CYAN
        + "%(asctime)s "
        + Fore.LIGHTGREEN_EX
        + "%(levelname)"
        + s1
        + Fore.LIGHTWHITE_EX
        + "%(message)"
        + s5
        + Fore.RESET
    )
    formatter = Formatter(fmt_str)
    formatter.default_time_format = "%a %H:%M:%S"
    return formatter


class _StdFilter(Filter):
    def __init__(self, max_indent=None, name=""):
        super().__init__(name=name)
        self.max_indent = max_indent

    def filter(self, record):
        if self.max_indent is None:
            return True
        return getattr(record, "indent", 0) <= self.max_indent


_adapters = {}


def make_logger(logger_name, max_indent=10):
    """Make a singleton logger.

    :Parameters:
        logger_name : str
            name of the logger
        max_indent : int
            max number of indents. Default to 10.

    The generated logger has a standard error stream handler thresholding at DEBUG and further at
    `max_indent`. Its messages are cut to the width of the terminal at the time the logger is
    made. Calling the function again with the same name returns the same logger.
    """
    if logger_name in _adapters:
        return _adapters[logger_name]

    base_logger = getLogger(logger_name)
    base_logger.setLevel(1)  # capture everything but let the handlers decide

    std_handler = StreamHandler()
    std_handler.setLevel(DEBUG)
    std_handler.addFilter(_StdFilter(max_indent=max_indent))
    std_handler.setFormatter(_console_formatter())
    base_logger.addHandler(std_handler)

    adapter = IndentedLoggerAdapter(base_logger)
    _adapters[logger_name] = adapter
    return adapter
