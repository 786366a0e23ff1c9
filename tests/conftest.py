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
Run every test with the default configuration.
"""

### find glmkit
import sys
sys.path.insert(0, '.')

import pytest

from glmkit import config


@pytest.fixture(autouse=True)
def default_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for name in ("GLMKIT_INDENT_WIDTH", "GLMKIT_SEMICOLON",
                 "GLMKIT_INDEX_PROPERTIES", "GLMKIT_TOOL"):
        monkeypatch.delenv(name, raising=False)
    config.reset_config()
    yield
    config.reset_config()
