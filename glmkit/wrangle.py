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
Wrangling: read a model, run named transforms on it, sign it and write it.

A transform is a function that takes a :class:`~glmkit.dom.glm.Document` as
its first argument. It is made available under a name with the
:func:`transform` decorator::

    from glmkit import wrangle

    @wrangle.transform('full_year_clock')
    def full_year_clock(document, year=2009):
        ...

after which it can be given as a command, like ``"full_year_clock(2010)"``.

"""

import ast
import glob
import logging
import os
import re

from .dom import edit, read
from .dom.glm import Document
from .errors import GlmError


logger = logging.getLogger(__name__)


EXT = '.glm'

_transforms = {}


def transform(name):
    """Return a decorator that registers a function as transform ``name``."""
    def decorator(func):
        _transforms[name] = func
        return func
    return decorator


def find_transform(name):
    """Return the transform registered as ``name``; raise GlmError if unknown."""
    try:
        return _transforms[name]
    except KeyError:
        raise GlmError("unknown command: {}".format(name)) from None


transform('remove_classes')(edit.remove_classes)
transform('remove_extra_blanks')(edit.remove_extra_blanks)
transform('substitute')(edit.substitute)


def parse_command(text):
    """Parse a command like ``"remove_classes('player', 'recorder')"``.

    Returns a tuple (name, args). The arguments must be Python literals. A
    bare name is a command without arguments.

    """
    try:
        node = ast.parse(text.strip(), mode='eval').body
    except SyntaxError as e:
        raise GlmError("invalid command: {}".format(text)) from e
    if isinstance(node, ast.Name):
        return node.id, ()
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and not node.keywords:
        try:
            args = tuple(ast.literal_eval(arg) for arg in node.args)
        except ValueError as e:
            raise GlmError("command arguments must be literals: {}".format(text)) from e
        return node.func.id, args
    raise GlmError("invalid command: {}".format(text))


class Wrangler:
    """Runs commands on one model file.

    The steps are :meth:`parse`, :meth:`run`, :meth:`sign` and
    :meth:`write`; :meth:`process` does them all. Commands are strings (see
    :func:`parse_command`).

    """
    def __init__(self, infile=None, outfile=None, commands=()):
        self.infile = infile
        self.outfile = outfile
        self.commands = list(commands)
        self.document = None

    def parse(self):
        """Read the input file; without input file start with an empty document."""
        if self.infile is None:
            self.document = Document()
        else:
            self.document = read.glm_file(self.infile)
        return self.document

    def run(self):
        """Execute the commands in order."""
        if not self.commands:
            logger.info("no commands given")
        for command in self.commands:
            name, args = parse_command(command)
            func = find_transform(name)
            logger.info("executing command: %s", command)
            func(self.document, *args)

    def sign(self):
        edit.sign(self.document, self.infile, self.outfile, self.commands)

    def write(self):
        logger.info("writing %s", os.path.basename(self.outfile))
        self.document.write(self.outfile)

    def process(self):
        self.parse()
        self.run()
        self.sign()
        self.write()
        return self.document


def process(infile, outfile, commands=()):
    """Parse infile, run the commands, sign and write to outfile.

    Any error aborts before the output file is opened. Returns the document.

    """
    logger.info("processing %s", os.path.basename(infile))
    return Wrangler(infile, outfile, commands).process()


def output_name(filename, file_sub=''):
    """Return the output base name for the input ``filename``.

    Without ``/``, ``file_sub`` is inserted before the extension. In the form
    ``pattern/replacement`` the first match of the regular expression is
    replaced. Anything else keeps the name.

    """
    basename = os.path.basename(filename)
    parts = file_sub.split('/')
    if len(parts) == 1:
        if basename.endswith(EXT):
            basename = basename[:-len(EXT)]
        return basename + parts[0] + EXT
    elif len(parts) == 2:
        return re.sub(parts[0], parts[1], basename, count=1)
    return basename


def batch(inpath, outpath, file_sub='', commands=()):
    """Process all the model files in directory inpath, writing them to
    outpath, named as :func:`output_name` specifies.

    Returns the list of written file names.

    """
    infiles = sorted(glob.glob(os.path.join(inpath, '*' + EXT)))
    logger.info("batch processing %d files", len(infiles))
    written = []
    for infile in infiles:
        outfile = os.path.join(outpath, output_name(infile, file_sub))
        process(infile, outfile, commands)
        written.append(outfile)
    return written
