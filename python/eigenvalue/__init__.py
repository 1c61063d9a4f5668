"""
eigenvalue shell package.

An interactive ``Ev>`` prompt that dispatches ``/command`` lines to
registered handlers, completes command names and arguments on Tab and keeps
a persistent, de-duplicated command history.  Use ``python -m eigenvalue``
or the ``eigenvalue`` console script to launch it.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .cli import main  # noqa: E402

__all__ = ["main"]
