# -*- coding: utf-8 -*-
#
# This file is part of `abcparse`, a library for the ABC music notation format
#
# Copyright © 2019-2020 by Wilbert Berendsen <info@wilbertberendsen.nl>
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
The per-job :class:`Context`.

A Context bundles everything the scanner, parser and semantic analyzer share
while processing one document: the :class:`Options`, the counter that hands
out unique ids to tokens and nodes, and the :class:`Diagnostics` list that
collects errors and warnings.

Nothing is stored at module level; to process documents independently, just
use a Context for each of them::

    >>> from abcparse.context import Context
    >>> c = Context()
    >>> c.next_id(), c.next_id()
    (0, 1)
    >>> Context(first_id=100).next_id()
    100

"""

import collections
import logging


logger = logging.getLogger(__name__)


ERROR = "error"
WARNING = "warning"


#: A single message reported during scanning, parsing or analysis.
Diagnostic = collections.namedtuple("Diagnostic", "severity message location")
Diagnostic.severity.__doc__ = "Either ``'error'`` or ``'warning'``."
Diagnostic.message.__doc__ = "The message text."
Diagnostic.location.__doc__ = "The :class:`~abcparse.tokens.Location`, or None."


class Options:
    """A dictionary-like object that accesses keys as attributes.

    Accessing a non-existent option name returns None. Adding another
    Options object returns a new Options instance with updated contents::

        >>> o = Options(first_id=10)
        >>> (o + Options(chord_rhythm_warning=False)).chord_rhythm_warning
        False
        >>> o.unknown is None
        True

    """
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)

    def __repr__(self):
        fields = " ".join("{}={!r}".format(name, value) for name, value in vars(self).items())
        return "<{}{}>".format(type(self).__name__, " " + fields if fields else "")

    def __getattr__(self, name):
        return None

    def __eq__(self, other):
        if isinstance(other, Options):
            return vars(self) == vars(other)
        return NotImplemented

    def __contains__(self, name):
        return name in self.__dict__

    def __add__(self, other):
        d = dict(vars(self))
        d.update(vars(other))
        return type(self)(**d)


#: The default options of a Context.
DEFAULT_OPTIONS = Options(
    first_id = 0,
    chord_rhythm_warning = True,
    log_diagnostics = True,
)


class Diagnostics(list):
    """An append-only list of :class:`Diagnostic` tuples, in reporting order."""
    __slots__ = ('log',)

    def __init__(self, log=True):
        super().__init__()
        self.log = log

    def report(self, severity, message, location=None):
        """Append a Diagnostic and return it."""
        d = Diagnostic(severity, message, location)
        list.append(self, d)
        if self.log:
            if location:
                logger.debug("%s at %d:%d: %s", severity, location.line, location.offset, message)
            else:
                logger.debug("%s: %s", severity, message)
        return d

    def errors(self):
        """Return the list of errors."""
        return [d for d in self if d.severity == ERROR]

    def warnings(self):
        """Return the list of warnings."""
        return [d for d in self if d.severity == WARNING]

    def messages(self):
        """Return the list of message texts, handy for testing."""
        return [d.message for d in self]


def location(where):
    """Return the Location of a Token, a node or a Location.

    For nodes, the location of the first token is used. Returns None if
    nothing can be found.

    """
    if where is None:
        return None
    try:
        return where.location
    except AttributeError:
        pass
    if isinstance(where, tuple) and len(where) == 2:
        return where
    return None


class Context:
    """Holds the options, the id counter and the diagnostics of one job.

    Keyword arguments override the :data:`DEFAULT_OPTIONS`.

    """
    def __init__(self, **options):
        self.options = DEFAULT_OPTIONS + Options(**options)
        self._next_id = self.options.first_id
        self.diagnostics = Diagnostics(bool(self.options.log_diagnostics))

    def __repr__(self):
        return "<{} next_id={} diagnostics={}>".format(
            type(self).__name__, self._next_id, len(self.diagnostics))

    def next_id(self):
        """Return a new unique id, ids increase monotonically."""
        i = self._next_id
        self._next_id += 1
        return i

    def error(self, message, where=None):
        """Report an error at ``where`` (a Token, node or Location)."""
        return self.diagnostics.report(ERROR, message, location(where))

    def warning(self, message, where=None):
        """Report a warning at ``where`` (a Token, node or Location)."""
        return self.diagnostics.report(WARNING, message, location(where))
