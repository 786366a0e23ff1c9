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
Functions that modify the top level of a document.

"""

import datetime
import logging
import os
import re

from ..config import get_config
from ..errors import SignError
from ..pkginfo import version_string
from .glm import Object, Text


logger = logging.getLogger(__name__)


NO_COMMANDS = "[no commands given]"


def _is_content(node):
    """Return True for an entry that is not a blank or comment line."""
    return not isinstance(node, Text) or not (node.is_blank() or node.is_comment())


def sign(document, source=None, destination=None, commands=None):
    """Insert a signature comment block before the first real content.

    The block tells which tool and version produced the document, from which
    source to which destination, who did it and when, and which commands
    were run. It is followed by a blank line. Leading comments (like a
    license header) stay above the signature.

    Raises :class:`~glmkit.errors.SignError` if the document only contains
    blank and comment lines.

    """
    for index, node in enumerate(document):
        if _is_content(node):
            break
    else:
        raise SignError("couldn't find any non-blank, non-comment lines in the document")
    user = os.environ.get('USERNAME') or os.environ.get('USER') or 'unknown'
    now = datetime.datetime.now().astimezone().strftime('%Y-%m-%d %H:%M:%S %z')
    document.insert(index,
        "// Wrangled by {} {} from {} to {}".format(
            get_config().sign.tool, version_string, source, destination),
        "// by {} at {}".format(user, now),
        "// Wrangler commands: " + (' '.join(commands) if commands else NO_COMMANDS),
        "",
    )
    logger.debug("signed document at entry %d", index)


def remove_classes(document, *classes):
    """Remove the top-level objects of the specified GLM classes.

    Returns the number of removed objects.

    """
    removed = [n for n in document / Object if n.cls in classes]
    for n in removed:
        document.remove(n)
    logger.info("removed %d objects of class %s", len(removed), ', '.join(classes))
    return len(removed)


def remove_extra_blanks(document):
    """Collapse runs of blank top-level lines into one blank line."""
    previous_blank = False
    for node in list(document):
        blank = isinstance(node, Text) and node.is_blank()
        if blank and previous_blank:
            document.remove(node)
        previous_blank = blank


def substitute(document, pattern, repl, count=0):
    """Substitute regular expression ``pattern`` with ``repl`` in the raw
    top-level lines.

    This is the way to change things that are not objects, like the settings
    in a ``clock`` block. ``count`` limits the substitutions per line, as with
    :func:`re.sub`. Returns the total number of substitutions.

    """
    regex = re.compile(pattern)
    total = 0
    for node in document / Text:
        line, n = regex.subn(repl, node.line, count)
        if n:
            node.line = line
            total += n
    logger.info("substituted %r in %d places", pattern, total)
    return total
