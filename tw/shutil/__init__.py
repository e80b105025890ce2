"""Additional `shutil`_ stuff related to the terminal.

Instead of:

.. code-block:: python

   import shutil

You do:

.. code-block:: python

   from tw import shutil

It will import shutil plus the additional stuff implemented here. Unlike
:func:`shutil.get_terminal_size`, the functions here always ask the terminal driver and ignore
environment variables `COLUMNS` and `LINES`.

.. _shutil:
   https://docs.python.org/3/library/shutil.html
"""


from shutil import *

from tw import term


__all__ = ["stty_imgres", "stty_size"]


def stty_size(fallback=(72, 128), fd=term.STDOUT_FILENO):
    """Gets the terminal size.

    Returns the Linux-compatible console's number of rows and number of characters per
    row, for the terminal attached to file descriptor `fd`. Any dimension the terminal does not
    report is taken from `fallback`, which defaults to (72, 128)."""

    res = term.query_terminal_size(fd)
    return (res.rows or fallback[0], res.columns or fallback[1])


def stty_imgres(fallback=(128, 72), fd=term.STDOUT_FILENO):
    """Gets the terminal resolution.

    Returns the Linux-compatible console's number of letters per row and the number of
    rows. Any dimension the terminal does not report is taken from `fallback`, which defaults to
    (128, 72)."""

    res = term.query_terminal_size(fd)
    return [res.columns or fallback[0], res.rows or fallback[1]]
