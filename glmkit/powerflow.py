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
Object types for classes of the GridLAB-D powerflow module.

Importing :mod:`glmkit` registers these, so every ``transformer_configuration``
that is read or created is a :class:`TransformerConfiguration`.

"""

import math
import re

from . import registry
from .dom.glm import Object
from .errors import GlmError


PHASES = "ABC"

# Standard single-phase transformer sizes in kVA (after IEEE Std
# C57.12.20-2011), with 5 added at the low end, 175 and 337.5 instead of 167
# and 333, and 750 and 1000 added at the high end.
STD_KVA_1PH = (5, 10, 15, 25, 37.5, 50, 75, 100, 175, 250, 337.5, 500, 750, 1000)

_NUMBER_RE = re.compile(r'\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)')


def number(value):
    """Return the number at the start of a property value, or 0.0.

    Units or other text after the number are ignored, so ``"50.0 kVA"``
    gives 50.0. None also gives 0.0.

    """
    m = _NUMBER_RE.match(value or '')
    return float(m.group(1)) if m else 0.0


@registry.register('transformer_configuration')
class TransformerConfiguration(Object):
    """A ``transformer_configuration`` object."""
    __slots__ = ()

    def rating(self):
        """Return the overall rating in kVA.

        This is ``power_rating`` if set, otherwise the sum of the per-phase
        ratings. Raises GlmError if no rating can be found.

        """
        if 'power_rating' in self:
            r = number(self['power_rating'])
        else:
            r = sum(number(self.get('power{}_rating'.format(ph))) for ph in PHASES)
        if r == 0:
            raise GlmError("can't find a rating for {}".format(self.get('name')))
        return r

    def per_phase_rating(self):
        """Return the rating divided over the rated phases."""
        count = self.phase_count()
        if not count:
            raise GlmError("no rated phases for {}".format(self.get('name')))
        return self.rating() / count

    def phases(self):
        """Return the phases with a non-zero rating, like ``"AC"``."""
        return ''.join(ph for ph in PHASES
            if number(self.get('power{}_rating'.format(ph))) != 0)

    def phase_count(self):
        return len(self.phases())

    def similar_to(self, other):
        """Return True if other is similar in all important ways except rating.

        The connect type, install type and secondary voltage must be equal,
        the primary voltages may differ 300 V at most (12.47kV and 12.5kV are
        interchangeable), and the same phases must be rated.

        """
        for prop in ('connect_type', 'install_type', 'secondary_voltage'):
            if self.get(prop) != other.get(prop):
                return False
        if abs(int(number(self.get('primary_voltage')))
               - int(number(other.get('primary_voltage')))) > 300:
            return False
        return self.phases() == other.phases()

    def is_real(self):
        """Return False for the configurations that only serve parts of
        commercial loads (they have "load" in their name)."""
        return 'load' not in self.get('name', '')

    def standard_size(self):
        """Return the standard size matching the per-phase rating, or None.

        The match is loose (within 1 kVA).

        """
        r = self.per_phase_rating()
        for std in STD_KVA_1PH:
            if abs(std - r) <= 1:
                return std

    def impedance(self):
        """Return the magnitude of resistance + j reactance."""
        return math.hypot(number(self.get('resistance')), number(self.get('reactance')))
