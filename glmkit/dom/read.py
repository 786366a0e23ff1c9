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
Simple helper functions to build DOM elements reading from text.

Example::

    >>> from glmkit.dom import read
    >>> doc = read.glm_document('''\\
    ... clock {
    ...   timezone PST+8PDT;
    ... }
    ... object recorder:7 {
    ...   name rec1;
    ... };
    ... ''')
    >>> doc.dump()
    <glm.Document (4 children)>
     ├╴<glm.Text 'clock {'>
     ├╴<glm.Text '  timezone PST+8PDT;'>
     ├╴<glm.Text '}'>
     ╰╴<glm.Object recorder:7 'rec1' (1 child)>
        ╰╴<glm.Property name='rec1'>

All functions raise :class:`~glmkit.errors.ParseError` on malformed input,
with the line number of the offending line filled in.

"""

import logging
import re

from parce.transform import Transformer

from ..errors import ParseError
from ..lang import glm as lang
from .glm import Object


logger = logging.getLogger(__name__)


_transformer = Transformer()

_declaration_re = re.compile(lang.DECLARATION)
_closing_re = re.compile(lang.CLOSING)
_blank_re = re.compile(lang.BLANK)
_comment_re = re.compile(lang.COMMENT)


def glm_document(text):
    """Return a :class:`.glm.Document` from the text."""
    try:
        return _transformer.transform_text(lang.Glm.root, text)
    except ParseError as e:
        if e.pos is not None and e.lineno is None:
            e.lineno = text.count('\n', 0, e.pos) + 1
        raise


def glm_object(source):
    """Return the first :class:`.glm.Object` from text or a text stream.

    A stream must be positioned at the start of an object declaration line.
    Exactly the lines of that object (nested objects included) are read, so
    the stream is left just after the closing line of the object.

    """
    text = source if isinstance(source, str) else object_text(source)
    for obj in glm_document(text) / Object:
        obj.parent = None
        return obj
    raise ParseError("no object found")


def object_text(stream):
    """Read and return the lines of one object from a text stream."""
    lines = []
    depth = 0
    for line in iter(stream.readline, ''):
        lines.append(line)
        if depth and _closing_re.match(line):
            depth -= 1
        elif depth and (_blank_re.match(line) or _comment_re.match(line)):
            pass
        elif _declaration_re.match(line):
            depth += 1
        elif not depth:
            raise ParseError("malformed object declaration", line.rstrip('\r\n'))
        if not depth:
            break
    return ''.join(lines)


def glm_file(file, encoding='utf-8'):
    """Return a :class:`.glm.Document` read from a filename or text stream."""
    if hasattr(file, 'read'):
        text = file.read()
        name = getattr(file, 'name', '<stream>')
    else:
        with open(file, encoding=encoding) as f:
            text = f.read()
        name = file
    logger.info("parsing %s", name)
    doc = glm_document(text)
    logger.info("read %d objects from %s", len(doc.all_objects()), name)
    return doc
