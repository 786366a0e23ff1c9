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
The Element, the base type of all entries in a glm document.

Every element writes itself as whole lines. An element can have a head line
and a tail line, and its children are written between them, one level deeper
if :meth:`~Element.indent_children` returns True.

"""

from ..config import get_config
from ..node import Node


class Element(Node):
    """Base class for all glm entries.

    Subclasses implement :meth:`write_head` and/or :meth:`write_tail` to
    return the text of their head and tail line (without indentation).

    """
    __slots__ = ()

    def __repr__(self):
        def result():
            # class name with last part module prepended
            cls = self.__class__
            mod = cls.__module__.split('.')[-1]
            yield "{}.{}".format(mod, cls.__name__)
            head = self.repr_head()
            if head is not None:
                yield head
            if len(self):
                yield "({} child{})".format(len(self), '' if len(self) == 1 else 'ren')
        return "<{}>".format(" ".join(result()))

    def write_head(self):
        """Return the head line of this element, or None.

        The default implementation returns None.

        """
        return None

    def write_tail(self):
        """Return the tail line of this element, or None.

        The default implementation returns None.

        """
        return None

    def repr_head(self):
        """Return a short description of this element for its repr()."""
        return self.write_head()

    def indent_children(self):
        """Return True if the children must be written one level deeper.

        The default implementation returns False.

        """
        return False

    def write_lines(self, depth=0, indent=None):
        """Yield the lines of this element and all its children.

        ``depth`` is the nesting level of this element, ``indent`` the
        string used for one level of indentation; by default it has the
        number of spaces configured in ``format.indent_width``. The lines are
        yielded without newline.

        """
        if indent is None:
            indent = ' ' * get_config().format.indent_width
        prefix = indent * depth
        head = self.write_head()
        if head is not None:
            yield prefix + head
        child_depth = depth + 1 if self.indent_children() else depth
        for n in self:
            yield from n.write_lines(child_depth, indent)
        tail = self.write_tail()
        if tail is not None:
            yield prefix + tail

    def serialize(self, depth=0, indent=None):
        """Return the text of this element, every line ending with a newline."""
        return ''.join(line + '\n' for line in self.write_lines(depth, indent))
