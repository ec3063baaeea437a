# -*- coding: utf-8 -*-
#
# This file is part of `abcparse`, a library for the ABC music notation format
#
# Copyright © 2019-2020 by Wilbert Berendsen <info@wilbertberendsen.nl>
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
Test abcparse.key.
"""

### find abcparse
import sys
sys.path.insert(0, '.')

from abcparse.key import *
from abcparse.semantic.infoline import key_signature


def test_main():
    assert accidentals(0) == [0, 0, 0, 0, 0, 0, 0]
    assert accidentals(4) == [0, 0, 0, 0.5, 0, 0, 0]          # G major
    assert accidentals(3) == [0, 0, 0, 0, 0, 0, -0.5]         # F major
    assert accidentals(5, 0, alterations(5)) == [0, 0, 0, 0, 0, 0, 0]   # A minor

    assert mode_name("Dor") == "dorian"
    assert mode_name("AEOLIAN") == "minor"
    assert mode_name("ion") == "major"

    assert key_accidentals("g") == [{'note': 'f', 'acc': 'sharp'}]
    assert key_accidentals("E", "flat") == [
        {'note': 'b', 'acc': 'flat'}, {'note': 'e', 'acc': 'flat'}, {'note': 'a', 'acc': 'flat'}]
    assert key_accidentals("D", "", "dorian") == []
    assert key_accidentals("E", "", "phrygian") == []
    assert key_accidentals("F", "", "lydian") == []
    assert len(key_accidentals("C", "sharp")) == 7
    assert len(key_accidentals("C", "flat")) == 7


def test_key_signature():
    sig = key_signature("C#m")
    assert (sig['root'], sig['acc'], sig['mode']) == ('C', 'sharp', 'minor')
    sig = key_signature("_Bmaj")
    assert (sig['root'], sig['acc'], sig['mode']) == ('B', 'flat', 'major')
    assert key_signature("bb")['root'] == 'B'
    assert key_signature("F")['accidentals'] == [{'note': 'b', 'acc': 'flat'}]
    assert key_signature("Gblues") is None
    assert key_signature("none")['accidentals'] == []


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
