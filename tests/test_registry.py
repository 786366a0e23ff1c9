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
Test the object type registry and the bundled powerflow types.
"""

### find glmkit
import sys
sys.path.insert(0, '.')

import pytest

from glmkit import powerflow, registry
from glmkit.dom import glm, read
from glmkit.errors import GlmError


configs = """\
object transformer_configuration {
  name xfmr_config_A_50;
  connect_type SINGLE_PHASE;
  install_type POLETOP;
  primary_voltage 7200 V;
  secondary_voltage 120 V;
  powerA_rating 50.0;
  resistance 0.006;
  reactance 0.008;
}
object transformer_configuration {
  name xfmr_config_A_25;
  connect_type SINGLE_PHASE;
  install_type POLETOP;
  primary_voltage 7400 V;
  secondary_voltage 120 V;
  powerA_rating 25.0;
}
object transformer_configuration {
  name load_config_3ph;
  connect_type WYE_WYE;
  install_type PADMOUNT;
  primary_voltage 7200;
  secondary_voltage 277;
  power_rating 300;
  powerA_rating 100;
  powerB_rating 100;
  powerC_rating 100;
}
object transformer_configuration {
  name unrated;
}
"""


def test_main():
    d = read.glm_document(configs)
    a50, a25, load, unrated = d.objects()
    assert all(isinstance(c, powerflow.TransformerConfiguration) for c in d.objects())
    assert registry.object_type('transformer_configuration') is powerflow.TransformerConfiguration
    assert registry.object_type('node') is glm.Object

    assert a50.rating() == 50.0
    assert a50.phases() == "A"
    assert a50.phase_count() == 1
    assert a50.per_phase_rating() == 50.0
    assert a50.standard_size() == 50
    assert a50.is_real()
    assert a50.impedance() == pytest.approx(0.01)

    assert load.rating() == 300.0
    assert load.phases() == "ABC"
    assert load.per_phase_rating() == 100.0
    assert load.standard_size() == 100
    assert not load.is_real()
    assert load.impedance() == 0.0

    # primary voltages differ less than 300 V
    assert a50.similar_to(a25)
    assert not a50.similar_to(load)
    a25['primary_voltage'] = '7600 V'
    assert not a50.similar_to(a25)

    with pytest.raises(GlmError):
        unrated.rating()
    with pytest.raises(GlmError):
        unrated.per_phase_rating()


def test_standard_size():
    c = glm.Object.new({'class': 'transformer_configuration', 'name': 'c', 'powerB_rating': '166.7'})
    assert isinstance(c, powerflow.TransformerConfiguration)
    assert c.phases() == "B"
    assert c.standard_size() is None
    c['powerB_rating'] = '175.4'
    assert c.standard_size() == 175


def test_number():
    assert powerflow.number('50.0 kVA') == 50.0
    assert powerflow.number('-1.5e3') == -1500.0
    assert powerflow.number('.5') == 0.5
    assert powerflow.number('ABC') == 0.0
    assert powerflow.number(None) == 0.0


def test_register():
    @registry.register('test_class')
    class TestClass(glm.Object):
        __slots__ = ()

        def double(self):
            return 2 * int(self['value'])

    try:
        d = read.glm_document("object test_class {\n  value 21;\n}\n")
        assert isinstance(d[0], TestClass)
        assert d[0].double() == 42
        assert glm.Object.new({'class': 'test_class', 'value': 1}).double() == 2
        assert registry.registered()['test_class'] is TestClass
    finally:
        registry._types.pop('test_class')
    assert registry.object_type('test_class') is glm.Object



if __name__ == "__main__" and 'test_main' in globals():
    test_main()
