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
The semantic analyzer.

The :class:`SemanticAnalyzer` turns :class:`~abcparse.dom.abc.Directive` and
:class:`~abcparse.dom.abc.InfoLine` nodes into a :class:`SemanticResult`: a
type name and normalized data, consisting of dicts, lists, strings, numbers
and booleans. Invalid lines result in None, and problems are reported to the
:class:`~abcparse.context.Context`.

The results are stored by node id; the tree itself is never changed::

    >>> from abcparse import parse
    >>> from abcparse.context import Context
    >>> from abcparse.semantic import SemanticAnalyzer
    >>> c = Context()
    >>> tree = parse("%%percmap C acoustic-snare\\n", c)
    >>> s = SemanticAnalyzer(c)
    >>> s.analyze_tree(tree)
    >>> s.get(tree[0][0].id)
    SemanticResult(type='percmap', data={'note': 'C', 'sound': 38, 'noteHead': None})

"""

from ..dom import abc as dom
from . import directive, infoline
from .util import SemanticResult


__all__ = ['SemanticAnalyzer', 'SemanticResult']


class SemanticAnalyzer:
    """Analyzes directives and info lines, reporting to a Context.

    Results are cached by node id until :meth:`clear` is called.

    """
    def __init__(self, context):
        self.context = context
        self._results = {}

    def __repr__(self):
        return "<{} ({} results)>".format(type(self).__name__, len(self._results))

    def analyze(self, node):
        """Return the SemanticResult for the Directive or InfoLine node, or None.

        A node is only analyzed once: a second call returns the cached result
        without reporting the diagnostics again. Raises TypeError for other
        nodes.

        """
        if isinstance(node, dom.Directive):
            handler = directive.analyze
        elif isinstance(node, dom.InfoLine):
            handler = infoline.analyze
        else:
            raise TypeError("can't analyze {!r}".format(node))
        try:
            return self._results[node.id]
        except KeyError:
            pass
        result = handler(self.context, node)
        self._results[node.id] = result
        return result

    def analyze_tree(self, tree):
        """Analyze all directives and info lines in the tree, in document order."""
        for node in tree // (dom.Directive, dom.InfoLine):
            self.analyze(node)

    def get(self, node_id):
        """Return the stored result for the node id, None if not available."""
        return self._results.get(node_id)

    def results(self):
        """Return a dictionary mapping node ids to results."""
        return dict(self._results)

    def clear(self):
        """Forget all results."""
        self._results.clear()
