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
Test the wrangling pipeline and the command line.
"""

### find glmkit
import sys
sys.path.insert(0, '.')

import os

import pytest

from glmkit import cli, wrangle
from glmkit.dom import read
from glmkit.errors import GlmError


model = """\
// test model

clock {
  timezone PST+8PDT;
}



object node {
  name n1;
}
object recorder {
  parent n1;
  interval 60;
};
"""


def write_model(path, text=model):
    path.write_text(text)
    return str(path)


def test_parse_command():
    assert wrangle.parse_command("remove_extra_blanks") == ('remove_extra_blanks', ())
    assert wrangle.parse_command("remove_classes('player', 'recorder')") == \
        ('remove_classes', ('player', 'recorder'))
    assert wrangle.parse_command(" substitute('a', 'b', 1) ") == ('substitute', ('a', 'b', 1))
    for text in ("remove_classes(", "remove_classes(x)", "a.b()", "f(count=1)", "1 + 2"):
        with pytest.raises(GlmError):
            wrangle.parse_command(text)


def test_process(tmp_path, monkeypatch):
    monkeypatch.setenv('USER', 'tester')
    monkeypatch.delenv('USERNAME', raising=False)
    infile = write_model(tmp_path / "in.glm")
    outfile = str(tmp_path / "out.glm")
    d = wrangle.process(infile, outfile, ["remove_classes('recorder')", "remove_extra_blanks"])
    assert d.find_by_class('recorder') == []
    text = open(outfile).read()
    assert text.startswith("// test model\n\n// Wrangled by glmkit ")
    assert "// by tester at " in text
    assert "// Wrangler commands: remove_classes('recorder') remove_extra_blanks\n\nclock {" in text
    assert text.endswith("}\n\nobject node {\n  name n1;\n}\n")
    assert len(read.glm_document(text).all_objects()) == 1


def test_custom_transform(tmp_path):
    @wrangle.transform('set_interval')
    def set_interval(document, interval):
        for rec in document.find_by_class('recorder'):
            rec['interval'] = interval

    try:
        assert wrangle.find_transform('set_interval') is set_interval
        infile = write_model(tmp_path / "in.glm")
        outfile = str(tmp_path / "out.glm")
        wrangle.process(infile, outfile, ["set_interval(300)"])
        assert "  interval 300;\n" in open(outfile).read()
    finally:
        wrangle._transforms.pop('set_interval')


def test_failure_writes_nothing(tmp_path):
    infile = write_model(tmp_path / "in.glm")
    outfile = tmp_path / "out.glm"
    with pytest.raises(GlmError):
        wrangle.process(infile, str(outfile), ["no_such_command"])
    assert not outfile.exists()

    badfile = write_model(tmp_path / "bad.glm", "object node {\n  bad line\n}\n")
    with pytest.raises(GlmError):
        wrangle.process(badfile, str(outfile))
    assert not outfile.exists()


def test_empty_document(tmp_path):
    w = wrangle.Wrangler(None, str(tmp_path / "out.glm"))
    assert len(w.parse()) == 0
    w.run()
    with pytest.raises(GlmError):
        w.sign()


def test_output_name():
    assert wrangle.output_name("/data/feeder.glm") == "feeder.glm"
    assert wrangle.output_name("/data/feeder.glm", "_solar") == "feeder_solar.glm"
    assert wrangle.output_name("/data/R1-12.47-1.glm", r"^R1/R2") == "R2-12.47-1.glm"
    assert wrangle.output_name("feeder.glm", "a/b/c") == "feeder.glm"


def test_batch(tmp_path):
    indir = tmp_path / "in"
    outdir = tmp_path / "out"
    indir.mkdir()
    outdir.mkdir()
    write_model(indir / "a.glm")
    write_model(indir / "b.glm")
    (indir / "notes.txt").write_text("not a model")
    written = wrangle.batch(str(indir), str(outdir), "_new", ["remove_extra_blanks"])
    assert [os.path.basename(f) for f in written] == ["a_new.glm", "b_new.glm"]
    assert sorted(os.listdir(outdir)) == ["a_new.glm", "b_new.glm"]


def test_cli(tmp_path, capsys):
    infile = write_model(tmp_path / "in.glm")
    outfile = tmp_path / "out.glm"
    assert cli.main(["-q", infile, str(outfile), "remove_extra_blanks"]) == 0
    assert "Wrangler commands: remove_extra_blanks" in outfile.read_text()

    assert cli.main(["-q", str(tmp_path / "missing.glm"), str(outfile)]) == 1
    assert "error: " in capsys.readouterr().err

    assert cli.main(["-q", infile, str(outfile), "bogus"]) == 1
    assert "unknown command: bogus" in capsys.readouterr().err

    indir = tmp_path / "batch"
    indir.mkdir()
    write_model(indir / "x.glm")
    assert cli.main(["-q", "--batch", "--rename", "x/y", str(indir), str(tmp_path)]) == 0
    assert (tmp_path / "y.glm").exists()



if __name__ == "__main__" and 'test_main' in globals():
    test_main()
