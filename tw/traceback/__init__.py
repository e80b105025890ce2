"""Additional utitlities dealing with traceback.

Instead of:

.. code-block:: python

   import traceback

You do:

.. code-block:: python

   from tw import traceback

It will import the traceback package plus :class:`LogicError`, the base of the errors raised
in the `tw` namespace.

.. _traceback:
   https://docs.python.org/3/library/traceback.html
"""

import traceback as _tb
from traceback import *


__all__ = ["LogicError"]


class LogicError(RuntimeError):
    """An error defined by a message and a debugging dictionary.

    Parameters
    ----------
    msg : str
        the message
    debug : dict, optional
        mapping of names to values that help locate the problem, printed one per line after the
        message
    causing_error : BaseException, optional
        the error that caused this error
    causing_traceback : list, optional
        the traceback of the causing error, as a list of lines without the carriage return
        symbol. If not provided, it is taken from the causing error itself.
    """

    def __init__(self, msg, debug=None, causing_error=None, causing_traceback=None):
        super().__init__(msg, debug or {}, causing_error, causing_traceback)

    @property
    def msg(self):
        return self.args[0]

    @property
    def debug(self):
        return self.args[1]

    @property
    def causing_error(self):
        return self.args[2]

    def __str__(self):
        l_lines = []

        causing_error = self.args[2]
        if causing_error:
            l_lines.append(f"With {type(causing_error).__name__}" + " {")

            causing_traceback = self.args[3]
            if causing_traceback is None:
                causing_traceback = causing_error.__traceback__
                if causing_traceback:
                    causing_traceback = _tb.format_tb(causing_traceback)
                    causing_traceback = "".join(causing_traceback).split("\n")
            if causing_traceback:
                l_lines.append("  Traceback:")
                for line in causing_traceback:
                    l_lines.append("  " + line)

            for line in str(causing_error).split("\n"):
                l_lines.append("  " + line)

            l_lines.append("} " + f"{type(causing_error).__name__}")

        l_lines.append(f"{self.args[0]}")

        debug = self.args[1]
        if debug:
            l_lines.append("Where:")
            for k, v in debug.items():
                l_lines.append(f"  {k}: {v}")

        return "\n".join(l_lines)
