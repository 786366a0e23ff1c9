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
The glmkit module.

On first import, the object types for the bundled GridLAB-D classes are
added to the registry.

"""

import logging
import os.path

from .pkginfo import version, version_string
from .errors import GlmError, ParseError
from .dom.glm import Document, Object
from .dom import read


__all__ = ('Document', 'GlmError', 'Object', 'ParseError', 'load', 'parse',
           'version', 'version_string')


logging.getLogger(__name__).addHandler(logging.NullHandler())


def parse(filename, encoding='utf-8'):
    """Read ``filename`` and return a :class:`~glmkit.dom.glm.Document`.

    Raises :class:`OSError` if the file can't be read and
    :class:`~glmkit.errors.ParseError` if it is not a valid model.

    """
    return read.glm_file(os.path.abspath(filename), encoding)


load = parse


## register bundled object types here
from . import powerflow
