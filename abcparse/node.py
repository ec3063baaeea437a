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
This module defines a :class:`Node` class, to build simple tree structures
based on Python lists.

The syntax tree of an ABC document (see :mod:`abcparse.dom`) is built of
Node subclasses.

"""

import itertools
import weakref


DUMP_STYLES = {
    "ascii":   (" | ", "   ", " |-", " `-"),
    "round":   (" │ ", "   ", " ├╴", " ╰╴"),
    "square":  (" │ ", "   ", " ├╴", " └╴"),
}

DUMP_STYLE_DEFAULT = "round"


_NO_PARENT = lambda: None


class Node(list):
    """Node implements a simple tree type, based on Python :class:`list`.

    A node can have child nodes and a :attr:`parent`. The parent is referred to
    with a weak reference, so a node tree does not contain circular references.
    Keep a reference to the root node, otherwise the tree is garbage
    collected.

    Iterating over a node yields the child nodes. Unlike Python's list, a node
    always evaluates to True, even if there are no children.

    Node defines five query operators: ``/``, ``//``, ``<<``, ``>`` and
    ``<``. All of them expect a Node (sub)class, a tuple of classes or a node
    instance as argument:

    * ``node / Note`` iterates over the children that are a Note;

    * ``node // Note`` iterates over all descendants in document order;

    * ``node << Tune`` iterates over the ancestors;

    * ``node > BarLine`` iterates :meth:`forward` from the node, starting
      with the right sibling;

    * ``node < BarLine`` iterates :meth:`backward` from the node, starting
      with the left sibling.

    The ``^`` operator iterates over the children that are *not* an instance
    of the specified class(es).

    If a node instance is given, :meth:`body_equals` must return True for the
    compared nodes.

    """

    __slots__ = ('__weakref__', '_parent')

    def __repr__(self):
        c = "child" if len(self) == 1 else "children"
        return '<{} ({} {})>'.format(type(self).__name__, len(self), c)

    def __bool__(self):
        """Always True."""
        return True

    def __init__(self, *children):
        self._parent = _NO_PARENT
        if children:
            list.extend(self, children)
            for node in self:
                node._parent = weakref.ref(self)

    @property
    def parent(self):
        """The parent Node or None; uses a weak reference."""
        return self._parent()

    @parent.setter
    def parent(self, node):
        self._parent = _NO_PARENT if node is None else weakref.ref(node)

    @parent.deleter
    def parent(self):
        self._parent = _NO_PARENT

    __hash__ = object.__hash__

    def __eq__(self, other):
        """Identity compare to make Node.index robust and "faster"."""
        return self is other

    def __ne__(self, other):
        return self is not other

    def _select(self, other, source, invert=False):
        """Return an iterator filtering ``source`` on ``other``, or NotImplemented."""
        if isinstance(other, Node):
            predicate = lambda node: type(node) is type(other) and node.body_equals(other)
        elif isinstance(other, (tuple, type)):
            predicate = lambda node: isinstance(node, other)
        else:
            return NotImplemented
        return (itertools.filterfalse if invert else filter)(predicate, source)

    def __lshift__(self, cls):
        """Iterate over the ancestors that inherit the specified class(es)."""
        return self._select(cls, self.ancestors())

    def __gt__(self, cls):
        """Iterate over the following nodes that inherit the specified class(es)."""
        return self._select(cls, self.forward())

    def __lt__(self, cls):
        """Iterate over the preceding nodes that inherit the specified class(es)."""
        return self._select(cls, self.backward())

    def __truediv__(self, cls):
        """Iterate over children that inherit the specified class(es)."""
        return self._select(cls, self)

    def __floordiv__(self, cls):
        """Iterate over descendants inheriting the specified class(es), in document order."""
        return self._select(cls, self.descendants())

    def __xor__(self, cls):
        """Iterate over children that do not inherit the specified class(es)."""
        return self._select(cls, self, True)

    def root(self):
        """Return the root node."""
        root = self
        for root in self.ancestors():
            pass
        return root

    def trail(self):
        """Return the list of indices of the node and its ancestors in their
        parents.

        The node's own index is at the end. Comparing two trails tells which
        node comes first in the document.

        """
        n = self
        trail = []
        for p in self.ancestors():
            trail.append(p.index(n))
            n = p
        return trail[::-1]

    def append(self, node):
        """Append node to this node; the parent is set to this node."""
        node._parent = weakref.ref(self)
        list.append(self, node)

    def extend(self, nodes):
        """Append nodes to this node; the parent is set to this node."""
        index = len(self)
        list.extend(self, nodes)
        for node in self[index:]:
            node._parent = weakref.ref(self)

    def insert(self, index, node):
        """Insert node in this node; the parent is set to this node."""
        node._parent = weakref.ref(self)
        list.insert(self, index, node)

    def __setitem__(self, k, new):
        """Set self[k] to the node(s) in ``new``; the parent is set to this Node."""
        if isinstance(k, slice):
            new = tuple(new)
            for node in new:
                node._parent = weakref.ref(self)
        else:
            new._parent = weakref.ref(self)
        list.__setitem__(self, k, new)

    def equals(self, other):
        """Return True if we and other are equivalent.

        This is the case when we and the other have the same class, the same
        amount of children, :meth:`body_equals` returns True, and finally for
        all the children this method returns True.

        """
        return type(self) is type(other) and len(self) == len(other) and \
            self.body_equals(other) and \
            all(a.equals(b) for a, b in zip(self, other))

    def body_equals(self, other):
        """Implement this to add more :meth:`equals` tests, before all the
        children are compared.

        The default implementation returns True.

        """
        return True

    def is_last(self):
        """Return True if this is the last node. Fails if no parent."""
        return self.parent[-1] is self

    def ancestors(self):
        """Yield the parent, then the parent's parent, etcetera."""
        n = self.parent
        while n:
            yield n
            n = n.parent

    def descendants(self, reverse=False):
        """Iterate over all the descendants of this node.

        If ``reverse`` is set to True, yields all descendants in backward
        direction.

        When you :meth:`~generator.send` False to this generator, child nodes
        of the just yielded node will not be yielded.

        """
        iterate = reversed if reverse else iter
        stack = []
        gen = iterate(self)
        while True:
            for n in gen:
                if (yield n) is not False and len(n):
                    stack.append(gen)
                    gen = iterate(n)
                    break
            else:
                if stack:
                    gen = stack.pop()
                else:
                    break

    def right_siblings(self):
        """Iterate over the right siblings of this node."""
        p = self.parent
        if p:
            i = p.index(self)
            yield from p[i+1:]

    def left_siblings(self):
        """Iterate backwards over the left siblings of this node."""
        p = self.parent
        if p:
            i = p.index(self)
            yield from reversed(p[:i])

    def forward(self, upto=None):
        """Iterate forward from this Node, starting with the right sibling.

        If you specify an ancestor node ``upto``, will not go outside that
        node.

        """
        node = self
        while node.parent and node is not upto:
            for n in node.right_siblings():
                if (yield n) is not False and len(n):
                    yield from n.descendants()
            node = node.parent

    def backward(self, upto=None):
        """Iterate backward from this Node, starting with the left sibling.

        If you specify an ancestor node ``upto``, will not go outside that
        node.

        """
        node = self
        while node.parent and node is not upto:
            for n in node.left_siblings():
                if (yield n) is not False and len(n):
                    yield from n.descendants(reverse=True)
            node = node.parent

    def depth(self):
        """Return the number of ancestors."""
        return sum(1 for n in self.ancestors())

    def dump(self, file=None, style=None, depth=0):
        """Display a graphical representation of the node and its contents.

        The file object defaults to stdout, and the style to "round". You can
        choose any style that's in the ``DUMP_STYLES`` dictionary.

        """
        i = 2
        d = DUMP_STYLES[style or DUMP_STYLE_DEFAULT]
        prefix = []
        node = self
        for _ in range(depth):
            prefix.append(d[i + int(node.is_last())])
            node = node.parent
            i = 0
        print(''.join(reversed(prefix)) + repr(self), file=file)
        for n in self:
            n.dump(file, style, depth + 1)
