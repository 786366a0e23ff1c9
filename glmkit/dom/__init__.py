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
This module defines a DOM (Document Object Model) for GridLAB-D model files.

A glm document is a sequence of raw lines and objects. Objects are kept as a
tree of nodes (properties, comments, blank lines and nested objects), all
other lines are kept verbatim, so a document that is read and written again
without modifications gives back the same objects, and the same text outside
them.

This DOM is used in two ways:

1. Reading an existing model (see :mod:`~glmkit.dom.read`), finding objects
   (see :mod:`~glmkit.dom.query`), modifying it (see :mod:`~glmkit.dom.edit`)
   and writing it back.

2. Building objects from scratch with :meth:`Object.new()
   <glmkit.dom.glm.Object.new>` and adding them to a document.

"""
