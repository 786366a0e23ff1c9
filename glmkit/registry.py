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
Registry of :class:`~glmkit.dom.glm.Object` subclasses by GLM class name.

When an object is read or created with :meth:`Object.new()
<glmkit.dom.glm.Object.new>`, the subclass registered for its GLM class is
instantiated, so that objects of a certain class can carry extra methods::

    from glmkit import registry
    from glmkit.dom.glm import Object

    @registry.register('triplex_meter')
    class TriplexMeter(Object):
        __slots__ = ()

        def nominal(self):
            return float(self['nominal_voltage'])

When adding classes to glmkit itself please register them in a module that
:mod:`glmkit` imports, like :mod:`glmkit.powerflow`.

"""

__all__ = ['object_type', 'register', 'registered']


_types = {}


def register(class_name):
    """Return a class decorator that registers an Object subclass for
    ``class_name``.

    A later registration for the same name replaces the earlier one.

    """
    def decorator(cls):
        _types[class_name] = cls
        return cls
    return decorator


def object_type(class_name):
    """Return the Object subclass registered for ``class_name``, or
    :class:`~glmkit.dom.glm.Object` itself."""
    try:
        return _types[class_name]
    except KeyError:
        from .dom.glm import Object
        return Object


def registered():
    """Return a new dict mapping the registered class names to their type."""
    return dict(_types)
