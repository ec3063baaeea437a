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
The abcparse module.

Reads ABC music notation in three stages: the scanner splits the text in
tokens, the parser builds a tree of tunes, and the semantic analyzer
interprets the info lines and stylesheet directives.

Use one :class:`~abcparse.context.Context` for all the stages of a job, it
collects the diagnostics::

    >>> import abcparse
    >>> from abcparse.context import Context
    >>> c = Context()
    >>> tree = abcparse.parse("X:1\\nL:1/0\\nK:G\\nGABc|\\n", c)
    >>> a = abcparse.analyze(tree, c)
    >>> c.diagnostics.messages()
    ['Invalid note length format']

On first import, our own language definitions are added to the registry.

"""

from .context import Context
from .pkginfo import version, version_string
from .registry import find


__all__ = ('analyze', 'find', 'parse', 'scan', 'version', 'version_string')


def scan(text, context=None):
    """Return the list of :class:`~abcparse.tokens.Token` for ``text``."""
    from .scanner import scan
    return scan(text, context)


def parse(text, context=None):
    """Scan and parse ``text``, return the :class:`~abcparse.dom.abc.FileStructure`."""
    from .parser import Parser
    from .scanner import scan
    context = context or Context()
    return Parser(context).parse(scan(text, context))


def analyze(tree, context=None):
    """Return a :class:`~abcparse.semantic.SemanticAnalyzer` that has
    analyzed all directives and info lines in the tree.

    """
    from .semantic import SemanticAnalyzer
    analyzer = SemanticAnalyzer(context or Context())
    analyzer.analyze_tree(tree)
    return analyzer
