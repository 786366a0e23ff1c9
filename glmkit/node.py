# -*- coding: utf-8 -*-
#
# This file is part of `glmkit`, a library for GridLAB-D `.glm` feeder models
#
# Copyright © 2026 by the glmkit authors
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
This module defines the :class:`Node` class, the tree type every entry of a
glm document builds on.

A Node is a Python :class:`list` of child nodes with a weak reference to its
parent. The document owns its entries, an object owns its own entries; the
parent reference never keeps anything alive.

Every method that changes the list of children calls :meth:`Node.changed`,
so that derived data (like the lookup index of a document) can be
invalidated.

"""

import weakref


DUMP_STYLES = {
    "ascii":   (" | ", "   ", " |-", " `-"),
    "round":   (" │ ", "   ", " ├╴", " ╰╴"),
}

DUMP_STYLE_DEFAULT = "round"


_NO_PARENT = lambda: None


class Node(list):
    """Node implements a simple tree type, based on Python :class:`list`.

    A node can have child nodes and a :attr:`parent`. The parent is referred
    to with a weak reference, so you need to keep a reference to the root node
    (normally a :class:`~glmkit.dom.glm.Document`) yourself.

    Adding nodes to a node sets the parent of the nodes. Removing nodes does
    not unset the parent of the removed nodes, and adding nodes does not
    remove them from their previous parent.

    Iterating over a node yields the child nodes. Unlike Python's list, a
    node always evaluates to True, even if there are no children, and nodes
    compare by identity, so ``node.parent.index(node)`` is always correct.

    Two query operators are supported, both expecting a Node subclass or a
    tuple of classes:

    * ``node / Object`` iterates over the children that are an Object::

        for obj in document / Object:
            print(obj.cls)

    * ``node // Object`` iterates over all descendants in document order,
      so this also finds nested objects.

    """

    __slots__ = ('__weakref__', '_parent')

    def __repr__(self):
        c = "child" if len(self) == 1 else "children"
        return '<{} ({} {})>'.format(type(self).__name__, len(self), c)

    def __bool__(self):
        """Always True."""
        return True

    def __init__(self, *children):
        """Constructor.

        If children are given they are appended to the list, and their parent
        is set to this node.

        """
        self._parent = _NO_PARENT
        if children:
            list.extend(self, children)
            for node in self:
                node._parent = weakref.ref(self)

    __hash__ = object.__hash__

    def __eq__(self, other):
        """Identity compare to make Node.index and Node.remove robust."""
        return self is other

    def __ne__(self, other):
        return self is not other

    @property
    def parent(self):
        """The parent Node or None; uses a weak reference."""
        return self._parent()

    @parent.setter
    def parent(self, node):
        self._parent = _NO_PARENT if node is None else weakref.ref(node)

    def changed(self):
        """Called whenever this node or one of its children is modified.

        The default implementation forwards the call to the parent, so that
        the root node finally hears about every modification below it.

        """
        parent = self.parent
        if parent is not None:
            parent.changed()

    ## list methods that keep the parent and notify changes

    def append(self, node):
        """Append node to this node; the parent is set to this node."""
        node._parent = weakref.ref(self)
        list.append(self, node)
        self.changed()

    def extend(self, nodes):
        """Append nodes to this node; the parent is set to this node."""
        index = len(self)
        list.extend(self, nodes)
        for node in self[index:]:
            node._parent = weakref.ref(self)
        self.changed()

    def insert(self, index, node):
        """Insert node in this node; the parent is set to this node."""
        node._parent = weakref.ref(self)
        list.insert(self, index, node)
        self.changed()

    def __setitem__(self, k, new):
        """Set self[k] to the node(s) in ``new``; the parent is set to this Node."""
        if isinstance(k, slice):
            new = tuple(new)
            for node in new:
                node._parent = weakref.ref(self)
        else:
            new._parent = weakref.ref(self)
        list.__setitem__(self, k, new)
        self.changed()

    def __delitem__(self, k):
        list.__delitem__(self, k)
        self.changed()

    def pop(self, index=-1):
        node = list.pop(self, index)
        self.changed()
        return node

    def remove(self, node):
        """Remove the node (compared by identity)."""
        list.remove(self, node)
        self.changed()

    def clear(self):
        list.clear(self)
        self.changed()

    def replace_with(self, node):
        """Replace this node in its parent with another node.

        Fails if called on the root node.

        """
        index = self.parent.index(self)
        self.parent[index] = node

    ## tree navigation

    def root(self):
        """Return the root node."""
        root = self
        for root in self.ancestors():
            pass
        return root

    def is_root(self):
        """Return True if this node has no parent."""
        return self.parent is None

    def ancestors(self):
        """Yield the parent, then the parent's parent, etcetera."""
        n = self.parent
        while n is not None:
            yield n
            n = n.parent

    def depth(self):
        """Return the number of ancestors."""
        return sum(1 for n in self.ancestors())

    def descendants(self):
        """Iterate over all the descendants of this node, in document order."""
        stack = []
        gen = iter(self)
        while True:
            for n in gen:
                yield n
                if len(n):
                    stack.append(gen)
                    gen = iter(n)
                    break
            else:
                if stack:
                    gen = stack.pop()
                else:
                    break

    def __truediv__(self, cls):
        """Iterate over children that inherit the specified class(es)."""
        if isinstance(cls, (tuple, type)):
            return (n for n in self if isinstance(n, cls))
        return NotImplemented

    def __floordiv__(self, cls):
        """Iterate over descendants inheriting the specified class(es), in document order."""
        if isinstance(cls, (tuple, type)):
            return (n for n in self.descendants() if isinstance(n, cls))
        return NotImplemented

    ## comparison and debugging

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

    def dump(self, file=None, style=None, depth=0):
        """Display a graphical representation of the node and its contents.

        The file object defaults to stdout, and the style to "round".

        """
        d = DUMP_STYLES[style or DUMP_STYLE_DEFAULT]
        prefix = []
        node = self
        i = 2
        for _ in range(depth):
            prefix.append(d[i + int(node.parent[-1] is node)])
            node = node.parent
            i = 0
        print(''.join(reversed(prefix)) + repr(self), file=file)
        for n in self:
            n.dump(file, style, depth + 1)

