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
Exceptions raised by glmkit.

All of them inherit :class:`GlmError`, so a caller that runs a complete
parse/transform/write cycle can catch that one class. None of these errors
is recovered from inside glmkit: a failure aborts the whole operation.

"""


class GlmError(Exception):
    """Base class for all glmkit errors."""


class ParseError(GlmError):
    """Raised when the reader hits text it does not understand.

    The offending ``line`` (verbatim, without newline), its position ``pos``
    in the text and its 1-based ``lineno`` are kept as attributes when known.
    The reader fills in ``lineno`` from ``pos`` before the error leaves it.

    """
    def __init__(self, message, line=None, pos=None, lineno=None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.pos = pos
        self.lineno = lineno

    def __str__(self):
        message = self.message
        if self.line is not None:
            message = "{}: '{}'".format(message, self.line)
        if self.lineno is not None:
            message = "line {}: {}".format(self.lineno, message)
        return message


class ArityError(GlmError):
    """Raised when a query finds a different number of objects than asserted."""
    def __init__(self, prop, value, found, expected):
        super().__init__(
            "expected {} object(s) with {} {!r}, found {}".format(
                expected, prop, value, found))
        self.found = found
        self.expected = expected


class UpstreamError(GlmError):
    """Raised when the upstream object of a node can't be determined."""


class NoUpstreamError(UpstreamError):
    """No upstream object could be found."""


class AmbiguousUpstreamError(UpstreamError):
    """More than one upstream object was found, but only one was requested."""


class SignError(GlmError):
    """Raised when a document has no content to put a signature before."""


class ClassChangeError(GlmError, AttributeError):
    """Raised on an attempt to change the GLM class of an existing object."""


class PropertyError(GlmError, ValueError):
    """Raised when a property key or value would not survive a write/read cycle."""
