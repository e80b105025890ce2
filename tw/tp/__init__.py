"""Alias for Python package `typing`_.

Modules in the `tw` namespace annotate with:

.. code-block:: python

   from tw import tp

which is the same as ``import typing as tp``.

.. _typing:
   https://docs.python.org/3/library/typing.html
"""

from typing import *

import typing as _tp

for key in _tp.__dict__:
    if key == "__doc__":
        continue
    globals()[key] = _tp.__dict__[key]
