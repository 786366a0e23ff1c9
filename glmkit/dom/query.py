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
Finding objects in a document by property value.

Feeder models are linked by name: a ``parent``, ``from`` or ``to`` property
holds the ``name`` of another object. The :class:`Index` maps a few of these
properties to the objects that have them, so that following links does not
need a walk over the whole document every time.

"""

import collections

from ..config import INDEXED_PROPERTIES, get_config
from ..errors import ArityError


__all__ = ('INDEXED_PROPERTIES', 'Index', 'find_by')


class Index:
    """Maps (property, value) to the objects that have that value, in
    document order.

    All objects of the document are indexed, nested objects included. The
    covered properties default to the ``index.properties`` configuration
    value, normally :data:`INDEXED_PROPERTIES`.

    """
    def __init__(self, document, properties=None):
        if properties is None:
            properties = get_config().index.properties
        self.properties = tuple(properties)
        self._count = 0
        self._map = collections.defaultdict(list)
        for obj in document.all_objects():
            self._count += 1
            for prop in self.properties:
                value = obj.get(prop)
                if value is not None:
                    self._map[prop, value].append(obj)

    def __len__(self):
        """The number of indexed objects."""
        return self._count

    def covers(self, prop):
        """Return True if the property is indexed."""
        return prop in self.properties

    def lookup(self, prop, value):
        """Return a new list of the objects where ``prop`` equals ``value``."""
        return list(self._map.get((prop, value), ()))


def find_by(document, prop, value, count=None):
    """Return the objects in document that have ``prop`` set to ``value``.

    Objects are returned in document order, nested objects included. For an
    indexed property the document's index is used, otherwise all objects are
    scanned.

    If ``count`` is given, :class:`~glmkit.errors.ArityError` is raised when
    a different number of objects is found. If ``count`` is 1, the single
    object is returned instead of a list.

    """
    value = str(value)
    index = document.lookup_index()
    if index.covers(prop):
        result = index.lookup(prop, value)
    else:
        result = [obj for obj in document.all_objects() if obj.get(prop) == value]
    if count is not None and len(result) != count:
        raise ArityError(prop, value, len(result), count)
    if count == 1:
        return result[0]
    return result
