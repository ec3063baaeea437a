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
This module defines the :class:`Expr` class, the base class of all nodes in
the ABC syntax tree.

An Expr is a :class:`~abcparse.node.Node`, so it is a list of child nodes. It
has a unique ``id``, handed out by the :class:`~abcparse.context.Context`
that was used while parsing, and an ``origin``: the tuple of tokens that
belong to the node itself and not to one of its children.

A node is constructed by the :class:`~abcparse.parser.Parser`, but you can
also create one manually, specifying the children, the id, the origin and
other attributes in the constructor::

    >>> from abcparse.dom import abc
    >>> abc.Tune(abc.TuneHeader(), abc.TuneBody())
    <abc.Tune (2 children)>

"""

import reprlib

from ..node import Node


class ExprType(type):
    """Metaclass for Expr.

    This meta class automatically adds an empty ``__slots__`` attribute if it
    is not defined in the class body.

    """
    def __new__(cls, name, bases, namespace):
        if '__slots__' not in namespace:
            namespace['__slots__'] = ()
        return type.__new__(cls, name, bases, namespace)


class Expr(Node, metaclass=ExprType):
    """Base class for all node types.

    Child nodes can be specified directly as arguments to the constructor.
    The keyword arguments ``id`` and ``origin`` set the id and the tokens of
    the node; other keyword arguments set attributes, which must be named in
    the ``__slots__`` of the subclass. Attributes that are not given get the
    value from the ``_defaults`` mapping of the class.

    """
    __slots__ = ('id', 'origin')

    _defaults = {}

    def __init__(self, *children, id=None, origin=(), **attrs):
        super().__init__(*children)
        self.id = id
        self.origin = tuple(origin)
        for attribute, value in self._defaults.items():
            if attribute not in attrs:
                setattr(self, attribute, value)
        for attribute, value in attrs.items():
            setattr(self, attribute, value)

    def __repr__(self):
        def result():
            cls = self.__class__
            mod = cls.__module__.split('.')[-1]
            yield "{}.{}".format(mod, cls.__name__)
            text = self.write()
            if text:
                yield reprlib.repr(text)
            if len(self):
                yield "({} child{})".format(len(self), '' if len(self) == 1 else 'ren')
            loc = self.location
            if loc:
                yield "@{}:{}".format(loc.line, loc.offset)
        return "<{}>".format(" ".join(result()))

    def body_equals(self, other):
        """Compare the kinds and texts of our own tokens."""
        return [(t.kind, t.lexeme) for t in self.origin] == \
               [(t.kind, t.lexeme) for t in other.origin]

    def tokens(self):
        """Return the list of all tokens of this node and its descendants,
        in document order.

        """
        tokens = list(self.origin)
        for n in self.descendants():
            tokens.extend(n.origin)
        tokens.sort(key=lambda t: t.id)
        return tokens

    def write(self):
        """Return the source text of this node and its descendants."""
        return ''.join(t.lexeme for t in self.tokens())

    def token(self, *kinds):
        """Return the first own token with one of the specified kinds, or None."""
        for t in self.origin:
            if t.kind in kinds:
                return t

    def own(self, *kinds):
        """Return the list of own tokens with one of the specified kinds."""
        return [t for t in self.origin if t.kind in kinds]

    @property
    def location(self):
        """The Location of the first token, or None if there are no tokens."""
        tokens = self.tokens()
        if tokens:
            return tokens[0].location
