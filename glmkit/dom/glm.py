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
Elements of a glm document.

A :class:`Document` is an ordered sequence of top-level entries: raw
:class:`Text` lines (directives, comments, blank lines, anything that is not
an object) and :class:`Object` blocks. An Object in turn contains its own
entries: :class:`Property`, :class:`Blank`, :class:`Comment` and nested
Objects, in source order.

An Object also behaves as a mapping from property name to value::

    >>> obj = Object('recorder', Property('interval', '60'))
    >>> obj['interval']
    '60'
    >>> obj['file'] = 'volts.csv'
    >>> print(obj.serialize(), end='')
    object recorder {
      interval 60;
      file volts.csv;
    };

The keys ``class``, ``id`` and ``num`` address the declaration line of the
object: ``obj['class']`` is the GLM class (which can't be changed),
``obj['id']`` the optional bareword before ``object`` and ``obj['num']`` the
digits after ``class:``.

"""

import collections
import logging
import re

from .. import registry
from ..config import get_config
from ..errors import (
    AmbiguousUpstreamError, ClassChangeError, GlmError, NoUpstreamError,
    PropertyError, UpstreamError)
from . import query
from .element import Element


logger = logging.getLogger(__name__)


#: Keys that address the declaration line of an object, not a property.
HEADER_KEYS = ('class', 'id', 'num')

_KEY_RE = re.compile(r'[\w.]+\Z')
_ID_RE = re.compile(r'\w+\Z')
_NUM_RE = re.compile(r'\d*\Z')


def check_key(key):
    """Raise PropertyError if key can't be used as a property name."""
    if not isinstance(key, str) or not _KEY_RE.match(key):
        raise PropertyError("invalid property name: {!r}".format(key))
    if key in HEADER_KEYS:
        raise PropertyError("{!r} is not a property but part of the object declaration".format(key))


def check_value(key, value):
    """Return value as a string; raise PropertyError if it can't be written."""
    text = str(value).strip()
    if not text:
        raise PropertyError("empty value for property {!r}".format(key))
    if ';' in text or '\n' in text or '\r' in text:
        raise PropertyError("value for property {!r} must be one line without ';': {!r}".format(key, text))
    return text


class Text(Element):
    """A raw line of a document outside any object, kept verbatim."""
    __slots__ = ('_line',)

    def __init__(self, line=''):
        super().__init__()
        self._line = line

    @property
    def line(self):
        """The text of the line (without newline)."""
        return self._line

    @line.setter
    def line(self, line):
        self._line = line
        self.changed()

    def is_blank(self):
        """Return True if the line contains only whitespace."""
        return not self._line.strip()

    def is_comment(self):
        """Return True if the line is a ``//`` comment."""
        return self._line.lstrip().startswith('//')

    def write_lines(self, depth=0, indent=None):
        """Yield the line verbatim, whatever the depth."""
        yield self._line

    def repr_head(self):
        return repr(self._line)

    def body_equals(self, other):
        return self._line == other._line


class Blank(Element):
    """An empty line inside an object."""
    __slots__ = ()

    def write_lines(self, depth=0, indent=None):
        yield ''


class Comment(Element):
    """A ``//`` comment line inside an object.

    The text is stored stripped, including the ``//``, and written at the
    indentation of the object's properties.

    """
    __slots__ = ('_text',)

    def __init__(self, text):
        super().__init__()
        self._text = text

    @property
    def text(self):
        return self._text

    @text.setter
    def text(self, text):
        self._text = text
        self.changed()

    def write_head(self):
        return self._text

    def repr_head(self):
        return repr(self._text)

    def body_equals(self, other):
        return self._text == other._text


class Property(Element):
    """A ``key value;`` line inside an object.

    Text after the semicolon is kept as the read-only ``trailing`` text and
    written back unchanged.

    """
    __slots__ = ('_key', '_value', '_trailing')

    def __init__(self, key, value, trailing=None):
        super().__init__()
        check_key(key)
        self._key = key
        self._value = check_value(key, value)
        self._trailing = trailing or None

    @property
    def key(self):
        """The property name."""
        return self._key

    @property
    def value(self):
        """The property value, a string."""
        return self._value

    @value.setter
    def value(self, value):
        self._value = check_value(self._key, value)
        self.changed()

    @property
    def trailing(self):
        """The text after the semicolon, or None."""
        return self._trailing

    def write_head(self):
        return '{} {};{}'.format(self._key, self._value, self._trailing or '')

    def repr_head(self):
        return '{}={!r}'.format(self._key, self._value)

    def body_equals(self, other):
        return (self._key == other._key and self._value == other._value
                and self._trailing == other._trailing)


class Object(Element):
    """A GLM object block, with properties, comments, blank lines and nested
    objects as children.

    ``cls`` is the GLM class, which can't be changed after creation. ``id``
    is the optional word in front of ``object``, ``num`` the digits after the
    colon behind the class name (an empty string for a bare colon), both None
    when absent. ``semicolon`` tells whether the closing brace is followed by
    a ``;``; if not given, the ``format.semicolon`` configuration value is
    used. ``trailing`` is text found after the opening brace, ``tail_trailing``
    text after the closing brace (and its semicolon), both kept verbatim.

    Use :meth:`new` to create an object from a mapping; that method picks the
    subclass registered for the GLM class in :mod:`glmkit.registry`.

    """
    __slots__ = ('_cls', '_id', '_num', 'semicolon', '_trailing', '_tail_trailing')

    def __init__(self, cls, *entries, id=None, num=None, semicolon=None, trailing=None,
                 tail_trailing=None):
        if not cls:
            raise GlmError("object created without a class")
        super().__init__(*entries)
        self._cls = cls
        self._id = self._check_id(id)
        self._num = self._check_num(num)
        self.semicolon = get_config().format.semicolon if semicolon is None else semicolon
        self._trailing = trailing or None
        self._tail_trailing = tail_trailing or None

    @classmethod
    def new(cls, properties):
        """Create an object from a mapping that contains at least ``class``.

        The ``id`` and ``num`` keys set the declaration, all other keys become
        properties, in the order of the mapping.

        """
        properties = dict(properties)
        class_name = properties.pop('class', None)
        if not class_name:
            raise GlmError("object created without a class, properties: {!r}".format(properties))
        obj = registry.object_type(class_name)(class_name)
        for key, value in properties.items():
            obj[key] = value
        return obj

    @staticmethod
    def _check_id(id):
        if id is not None and not _ID_RE.match(id):
            raise PropertyError("invalid object id: {!r}".format(id))
        return id

    @staticmethod
    def _check_num(num):
        if num is not None:
            num = str(num)
            if not _NUM_RE.match(num):
                raise PropertyError("invalid object number: {!r}".format(num))
        return num

    @property
    def cls(self):
        """The GLM class of this object, read-only."""
        return self._cls

    @cls.setter
    def cls(self, value):
        raise ClassChangeError("can't change the class of {!r} to {!r}".format(self, value))

    @property
    def id(self):
        return self._id

    @id.setter
    def id(self, id):
        self._id = self._check_id(id)
        self.changed()

    @property
    def num(self):
        return self._num

    @num.setter
    def num(self, num):
        self._num = self._check_num(num)
        self.changed()

    @property
    def trailing(self):
        """The text after the opening brace, or None."""
        return self._trailing

    @property
    def tail_trailing(self):
        """The text after the closing brace and semicolon, or None."""
        return self._tail_trailing

    ## mapping access

    def _property(self, key):
        """Return the Property entry for key, or None."""
        for p in self / Property:
            if p.key == key:
                return p

    def __getitem__(self, key):
        if not isinstance(key, str):
            return super().__getitem__(key)
        if key == 'class':
            return self._cls
        if key in ('id', 'num'):
            value = getattr(self, key)
        else:
            p = self._property(key)
            value = p.value if p else None
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key, value):
        if not isinstance(key, str):
            return super().__setitem__(key, value)
        if key == 'class':
            raise ClassChangeError("can't change the class of {!r} to {!r}".format(self, value))
        elif key in ('id', 'num'):
            setattr(self, key, value)
        else:
            p = self._property(key)
            if p:
                p.value = value
            else:
                self.append(Property(key, value))

    def __delitem__(self, key):
        if not isinstance(key, str):
            return super().__delitem__(key)
        if key == 'class':
            raise ClassChangeError("can't delete the class of {!r}".format(self))
        elif key in ('id', 'num'):
            if getattr(self, key) is None:
                raise KeyError(key)
            setattr(self, key, None)
        else:
            p = self._property(key)
            if p is None:
                raise KeyError(key)
            self.remove(p)

    def __contains__(self, key):
        if not isinstance(key, str):
            return super().__contains__(key)
        if key == 'class':
            return True
        if key in ('id', 'num'):
            return getattr(self, key) is not None
        return self._property(key) is not None

    def get(self, key, default=None):
        """Return the value for key, or default."""
        try:
            return self[key]
        except KeyError:
            return default

    def keys(self):
        """Return the property names, in order."""
        return [p.key for p in self / Property]

    def items(self):
        """Return (name, value) tuples for all properties, in order."""
        return [(p.key, p.value) for p in self / Property]

    def properties(self):
        """Return a new dict with the properties."""
        return dict(self.items())

    ## structure

    def children(self):
        """Return the nested objects, in order."""
        return list(self / Object)

    nested = property(children, doc="The nested objects, in order.")

    @property
    def nesting_parent(self):
        """The Object this object is nested in, or None."""
        parent = self.parent
        return parent if isinstance(parent, Object) else None

    def document(self):
        """Return the Document this object is part of, or None."""
        root = self.root()
        return root if isinstance(root, Document) else None

    def _require_document(self):
        doc = self.document()
        if doc is None:
            raise GlmError("{!r} is not part of a document".format(self))
        return doc

    def add_nested(self, properties):
        """Create an object using :meth:`new`, append it as a nested object
        and return it."""
        obj = Object.new(properties)
        self.append(obj)
        return obj

    def annotate(self, text):
        """Set the comment at the start of this object.

        An existing comment in the first entry is replaced, otherwise a new
        comment is inserted. ``//`` is prepended if the text does not start
        with it.

        """
        text = text.strip()
        if not text.startswith('//'):
            text = '// ' + text
        if len(self) and isinstance(self[0], Comment):
            self[0].text = text
        else:
            self.insert(0, Comment(text))

    ## topology

    def upstream(self, allow_multiple=False):
        """Return the upstream object.

        This is the object this object is nested in; otherwise the object
        named by the ``parent`` or (if absent) ``from`` property; otherwise
        the object(s) whose ``to`` property names this object.

        Raises :class:`NoUpstreamError` if nothing is found, and
        :class:`AmbiguousUpstreamError` if more than one object is found
        while ``allow_multiple`` is False. If ``allow_multiple`` is True, a
        list is returned.

        """
        parent = self.nesting_parent
        if parent is not None:
            found = [parent]
        else:
            doc = self._require_document()
            named = self.get('parent') or self.get('from')
            if named is not None:
                found = doc.find_by('name', named)
            elif 'name' in self:
                found = doc.find_by('to', self['name'])
            else:
                found = []
        if not found:
            raise NoUpstreamError("can't find upstream object for {!r}".format(self))
        if allow_multiple:
            return found
        if len(found) > 1:
            raise AmbiguousUpstreamError(
                "found {} upstream objects for {!r}".format(len(found), self))
        return found[0]

    def downstream(self):
        """Return the downstream objects.

        These are the nested objects, then the objects that name this object
        in their ``parent`` property, then those naming it in their ``from``
        property, and finally the object named by our ``to`` property. Each
        object is listed once.

        """
        found = self.children()
        doc = self._require_document()
        name = self.get('name')
        if name is not None:
            found.extend(doc.find_by('parent', name))
            found.extend(doc.find_by('from', name))
        to = self.get('to')
        if to is not None:
            found.extend(doc.find_by('name', to))
        result, seen = [], set()
        for node in found:
            if id(node) not in seen:
                seen.add(id(node))
                result.append(node)
        return result

    def first_upstream(self, cls):
        """Follow the upstream chain and return the first object of GLM class
        ``cls``.

        Raises :class:`UpstreamError` if the chain ends or loops.

        """
        visited = {id(self)}
        node = self
        while True:
            node = node.upstream()
            if node.cls == cls:
                return node
            if id(node) in visited:
                raise UpstreamError("upstream chain of {!r} loops at {!r}".format(self, node))
            visited.add(id(node))

    def first_downstream(self, cls):
        """Return the objects of GLM class ``cls`` first met going downstream.

        The search is breadth-first; a branch is not followed beyond its first
        matching object, nor into an object already on the branch.

        """
        result = []
        queue = collections.deque((n, (self,)) for n in self.downstream())
        while queue:
            node, path = queue.popleft()
            if node.cls == cls:
                result.append(node)
            elif not any(node is n for n in path):
                path += (node,)
                queue.extend((n, path) for n in node.downstream())
        return result

    ## writing

    def write_head(self):
        head = 'object ' + self._cls
        if self._num is not None:
            head += ':' + self._num
        head += ' {'
        if self._id:
            head = self._id + ' ' + head
        if self._trailing:
            head += self._trailing
        return head

    def write_tail(self):
        tail = '};' if self.semicolon else '}'
        if self._tail_trailing:
            tail += self._tail_trailing
        return tail

    def repr_head(self):
        head = self._cls if self._num is None else '{}:{}'.format(self._cls, self._num)
        name = self.get('name')
        if name is not None:
            head += ' ' + repr(name)
        return head

    def indent_children(self):
        return True

    def body_equals(self, other):
        return (self._cls == other._cls and self._id == other._id
                and self._num == other._num and self.semicolon == other.semicolon
                and self._trailing == other._trailing
                and self._tail_trailing == other._tail_trailing)


def entry(node):
    """Return node; a string is converted to a :class:`Text` line."""
    if isinstance(node, str):
        return Text(node)
    return node


class Document(Element):
    """A whole glm file: raw :class:`Text` lines and :class:`Object` blocks.

    The document keeps a lookup index over its objects, rebuilt on the first
    query after any modification anywhere in the document.

    """
    __slots__ = ('_generation', '_index', '_index_generation')

    def __init__(self, *entries):
        self._generation = 0
        self._index = None
        self._index_generation = None
        super().__init__(*map(entry, entries))

    @classmethod
    def from_lines(cls, lines):
        """Create a document from strings (raw lines) and objects."""
        return cls(*lines)

    def changed(self):
        self._generation += 1

    ## modifying, strings are accepted as raw lines

    def append(self, node):
        super().append(entry(node))

    def extend(self, nodes):
        super().extend(map(entry, nodes))

    def insert(self, index, *nodes):
        """Insert one or more entries at index."""
        if index < 0:
            index = max(0, len(self) + index)
        for offset, node in enumerate(nodes):
            super().insert(index + offset, entry(node))

    def insert_before(self, reference, *nodes):
        """Insert entries before the reference entry."""
        self.insert(self.index(reference), *nodes)

    def insert_after(self, reference, *nodes):
        """Insert entries after the reference entry."""
        self.insert(self.index(reference) + 1, *nodes)

    ## objects and queries

    def objects(self):
        """Return the top-level objects."""
        return list(self / Object)

    def all_objects(self):
        """Return all objects, nested objects included, in document order."""
        return list(self // Object)

    def lookup_index(self):
        """Return the lookup :class:`~.query.Index`, rebuilt if the document
        changed since it was last built."""
        if self._index is None or self._index_generation != self._generation:
            self._index = query.Index(self)
            self._index_generation = self._generation
            logger.debug("rebuilt index of %d objects", len(self._index))
        return self._index

    def find_by(self, prop, value, count=None):
        """Return the objects whose property ``prop`` equals ``value``.

        See :func:`.query.find_by`.

        """
        return query.find_by(self, prop, value, count)

    def find_by_name(self, value, count=None):
        return self.find_by('name', value, count)

    def find_by_class(self, value, count=None):
        return self.find_by('class', value, count)

    def find_by_parent(self, value, count=None):
        return self.find_by('parent', value, count)

    def find_by_from(self, value, count=None):
        return self.find_by('from', value, count)

    def find_by_to(self, value, count=None):
        return self.find_by('to', value, count)

    ## writing

    def write(self, filename, encoding='utf-8'):
        """Write the document to a file.

        The text is generated before the file is opened, so an existing file
        is left alone when writing fails.

        """
        text = self.serialize()
        with open(filename, 'w', encoding=encoding) as f:
            f.write(text)
        logger.info("wrote %d objects to %s", len(self.all_objects()), filename)

