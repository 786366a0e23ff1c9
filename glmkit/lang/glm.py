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
GLM language and transformation definition.

The language is line oriented: every token is one complete line of the
source, including its newline. Outside objects every line is a raw text
token. A line that declares an object starts a ``block`` context, which ends
with the line containing the closing brace.

"""

import re

from parce import Language, lexicon
from parce.transform import Transform
import parce.action as a

from glmkit import registry
from glmkit.dom import glm
from glmkit.errors import ParseError


# An object declaration line: optional word, the keyword and an opening brace
DECLARATION = r'[ \t]*(?:\w+[ \t]+)?object\b[^;\n]*\{[^\n]*\n?'
CLOSING = r'[ \t]*\}[^\n]*\n?'
BLANK = r'[ \t\r]*\n|[ \t]+\Z'
COMMENT = r'[ \t]*//[^\n]*\n?'
PROPERTY = r'[ \t]*[\w.]+[ \t]+[^;\n]+;[^\n]*\n?'
LINE = r'[^\n]*\n|[^\n]+'


class Glm(Language):
    """GridLAB-D model (.glm) language definition."""
    @lexicon
    def root(cls):
        yield DECLARATION, a.Keyword, cls.block
        yield LINE, a.Text

    @lexicon(consume=True)
    def block(cls):
        """The lines of an object, up to and including its closing line."""
        yield CLOSING, a.Delimiter.Brace, -1
        yield BLANK, a.Whitespace
        yield COMMENT, a.Comment
        yield DECLARATION, a.Keyword, cls.block
        yield PROPERTY, a.Name.Attribute
        yield LINE, a.Text


_declaration_re = re.compile(r'\s*(?:(\w+)\s+)?object\s+(\w+)(?::(\d*))?\s*\{(.*)$')
_property_re = re.compile(r'\s*([\w.]+)\s+([^;]+);(.*)$')
_closing_re = re.compile(r'\s*\}\s*(;?)(.*)$')


def _line(token):
    """The text of a token without its line ending."""
    return token.text.rstrip('\r\n')


class GlmTransform(Transform):
    """Transform a GLM parce tree to a :class:`~glmkit.dom.glm.Document`."""
    def root(self, items):
        entries = []
        for i in items:
            if i.is_token:
                entries.append(glm.Text(_line(i)))
            else:
                entries.append(i.obj)
        return glm.Document(*entries)

    def block(self, items):
        """Create an Object; the first item is the declaration line."""
        head = items[0]
        m = _declaration_re.match(_line(head))
        if not m:
            raise ParseError("malformed object declaration", _line(head), head.pos)
        ident, cls, num, trailing = m.groups()
        tail = items[-1] if len(items) > 1 else None
        if tail is None or not tail.is_token or tail.action != a.Delimiter.Brace:
            raise ParseError("unexpected end of input, object is not closed", _line(head), head.pos)
        entries = [self.entry(i) for i in items[1:-1]]
        semicolon, tail_trailing = _closing_re.match(_line(tail)).groups()
        return registry.object_type(cls)(
            cls, *entries, id=ident, num=num, semicolon=bool(semicolon),
            trailing=trailing.rstrip(), tail_trailing=tail_trailing.rstrip())

    def entry(self, item):
        """Return the element for an item inside an object."""
        if not item.is_token:
            return item.obj
        if item.action == a.Whitespace:
            return glm.Blank()
        elif item.action == a.Comment:
            return glm.Comment(_line(item).strip())
        elif item.action == a.Name.Attribute:
            key, value, trailing = _property_re.match(_line(item)).groups()
            if key in glm.HEADER_KEYS:
                raise ParseError("reserved property name", _line(item), item.pos)
            if not value.strip():
                raise ParseError("empty property value", _line(item), item.pos)
            return glm.Property(key, value.strip(), trailing.rstrip())
        raise ParseError("object property parser hit a line it doesn't understand",
                         _line(item), item.pos)
