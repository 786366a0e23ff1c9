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
Test modifying documents and objects.
"""

### find glmkit
import sys
sys.path.insert(0, '.')

import pytest

from glmkit import config
from glmkit.dom import edit, glm, read
from glmkit.errors import ClassChangeError, GlmError, PropertyError, SignError
from glmkit.pkginfo import version_string


model = """\
// model header
// by someone

clock {
  timezone PST+8PDT;
}


object node {
  name n1;
  object meter {
    name m1;
  };
}
object recorder {
  parent n1;
};
"""


def test_sign(monkeypatch):
    monkeypatch.setenv('USER', 'tester')
    monkeypatch.delenv('USERNAME', raising=False)
    d = read.glm_document(model)
    edit.sign(d, 'in.glm', 'out.glm', ["remove_classes('recorder')", 'remove_extra_blanks'])
    assert d[0].line == "// model header"
    assert d[3].line == "// Wrangled by glmkit {} from in.glm to out.glm".format(version_string)
    assert d[4].line.startswith("// by tester at ")
    assert d[5].line == "// Wrangler commands: remove_classes('recorder') remove_extra_blanks"
    assert d[6].line == ""
    assert d[7].line == "clock {"
    assert d.serialize().startswith(
        "// model header\n// by someone\n\n// Wrangled by glmkit ")


def test_sign_no_commands(monkeypatch):
    monkeypatch.setenv('GLMKIT_TOOL', 'mytool')
    config.reset_config()
    d = glm.Document(glm.Object.new({'class': 'node', 'name': 'n1'}))
    edit.sign(d)
    assert d[0].line.startswith("// Wrangled by mytool ")
    assert d[2].line == "// Wrangler commands: " + edit.NO_COMMANDS
    assert isinstance(d[4], glm.Object)


def test_sign_without_content():
    with pytest.raises(SignError):
        edit.sign(read.glm_document("// only a comment\n\n"))
    with pytest.raises(SignError):
        edit.sign(glm.Document())


def test_remove():
    d = read.glm_document(model)
    assert edit.remove_classes(d, 'recorder', 'meter') == 1
    assert [o.cls for o in d.all_objects()] == ['node', 'meter']
    edit.remove_extra_blanks(d)
    assert d.serialize() == (
        "// model header\n// by someone\n\nclock {\n  timezone PST+8PDT;\n}\n\n"
        "object node {\n  name n1;\n  object meter {\n    name m1;\n  };\n}\n")


def test_substitute():
    d = read.glm_document(model)
    assert edit.substitute(d, r'timezone \S+;', 'timezone EST+5EDT;') == 1
    assert d[4].line == "  timezone EST+5EDT;"
    # objects are left alone
    assert edit.substitute(d, r'n1', 'n2') == 0
    assert d.find_by_name('n1', 1)


def test_class_immutable():
    obj = glm.Object('node', glm.Property('name', 'n1'))
    with pytest.raises(ClassChangeError):
        obj['class'] = 'meter'
    with pytest.raises(ClassChangeError):
        obj.cls = 'meter'
    with pytest.raises(AttributeError):
        del obj['class']
    assert obj.cls == 'node'
    assert obj['class'] == 'node'
    assert 'class' in obj
    assert obj.keys() == ['name']
    with pytest.raises(GlmError):
        glm.Object('')


def test_mapping():
    obj = glm.Object('node')
    obj['name'] = 'n1'
    obj['phases'] = 'ABC'
    obj['nominal_voltage'] = 7200
    obj['phases'] = 'AB'
    assert obj.items() == [('name', 'n1'), ('phases', 'AB'), ('nominal_voltage', '7200')]
    assert obj.properties() == {'name': 'n1', 'phases': 'AB', 'nominal_voltage': '7200'}
    assert obj.get('bustype') is None
    assert obj.get('bustype', 'PQ') == 'PQ'
    with pytest.raises(KeyError):
        obj['bustype']
    del obj['phases']
    assert 'phases' not in obj
    with pytest.raises(KeyError):
        del obj['phases']
    # integer indexes address the entries
    assert obj[0].key == 'name'
    assert len(obj) == 2

    assert 'id' not in obj
    with pytest.raises(KeyError):
        obj['id']
    obj['id'] = 'spam'
    obj['num'] = 7
    assert obj['num'] == '7'
    assert obj.write_head() == "spam object node:7 {"
    del obj['num']
    assert obj.num is None
    assert obj.write_head() == "spam object node {"


def test_property_errors():
    obj = glm.Object('node')
    for key, value in (
        ('bad key', '1'),
        ('name', 'a;b'),
        ('name', '   '),
        ('name', 'a\nb'),
    ):
        with pytest.raises(PropertyError):
            obj[key] = value
    assert len(obj) == 0
    with pytest.raises(PropertyError):
        glm.Property('class', 'meter')
    with pytest.raises(PropertyError):
        obj['id'] = 'two words'
    with pytest.raises(ValueError):
        obj['num'] = 'x1'


def test_new():
    obj = glm.Object.new({'class': 'node', 'id': 'spam', 'num': 3, 'name': 'n1'})
    assert obj.cls == 'node'
    assert obj.id == 'spam'
    assert obj.num == '3'
    assert obj.keys() == ['name']
    assert obj.semicolon
    with pytest.raises(GlmError):
        glm.Object.new({'name': 'n1'})

    meter = obj.add_nested({'class': 'meter', 'name': 'm1'})
    assert meter.nesting_parent is obj
    assert obj.nested == [meter]
    assert obj.serialize() == (
        "spam object node:3 {\n"
        "  name n1;\n"
        "  object meter {\n"
        "    name m1;\n"
        "  };\n"
        "};\n")
    assert obj.serialize(indent='\t') == (
        "spam object node:3 {\n"
        "\tname n1;\n"
        "\tobject meter {\n"
        "\t\tname m1;\n"
        "\t};\n"
        "};\n")


def test_annotate():
    d = read.glm_document(model)
    obj = d.find_by_name('n1', 1)
    obj.annotate('checked')
    assert isinstance(obj[0], glm.Comment)
    assert obj[0].text == "// checked"
    obj.annotate('// checked twice')
    assert obj[0].text == "// checked twice"
    assert len(obj) == 3
    assert obj.serialize().startswith("object node {\n  // checked twice\n  name n1;\n")


def test_document_insert():
    d = read.glm_document(model)
    node = d.find_by_name('n1', 1)
    d.insert_before(node, "// the node", "")
    d.insert_after(node, "// end of the node")
    i = d.index(node)
    assert d[i - 2].line == "// the node"
    assert d[i - 1].line == ""
    assert d[i + 1].line == "// end of the node"
    d.insert(0, "// first")
    d.append("// last")
    assert d[0].line == "// first"
    assert d[-1].line == "// last"
    d.insert(-1, "// before last")
    assert d[-2].line == "// before last"
    d2 = glm.Document.from_lines(["// a", glm.Object.new({'class': 'node', 'name': 'x'}), ""])
    assert d2.serialize() == "// a\nobject node {\n  name x;\n};\n\n"



if __name__ == "__main__" and 'test_main' in globals():
    test_main()
