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
Functions to deal with ABC's note lengths.

In ABC, the length of a note is a multiple of the unit note length set with
the ``L:`` field. The multiplier is written after the note: ``a2`` is twice,
``a/`` half, ``a//`` a quarter and ``a3/2`` one and a half unit length.

Here a length is a :class:`~fractions.Fraction` multiplier of the unit note
length.

"""

import fractions
import re


_rhythm_re = re.compile(r'(\d*)(/*)(\d*)$')


def rhythm(numerator=None, separator=None, denominator=None):
    """Return the Fraction for the three parts of a written rhythm.

    All arguments are strings or None::

        >>> rhythm('3')
        Fraction(3, 1)
        >>> rhythm(None, '//')
        Fraction(1, 4)
        >>> rhythm('3', '/', '2')
        Fraction(3, 2)

    """
    numer = int(numerator) if numerator else 1
    if denominator:
        denom = int(denominator)
    elif separator:
        denom = 2 ** len(separator)
    else:
        denom = 1
    return fractions.Fraction(numer, denom)


def broken(marker):
    """Return the two factors for a broken rhythm marker (``>`` or ``<``).

    The first factor is for the note before the marker, the second for the
    note after it::

        >>> broken('>')
        (Fraction(3, 2), Fraction(1, 2))
        >>> broken('<<')
        (Fraction(1, 4), Fraction(7, 4))

    """
    short = fractions.Fraction(1, 2 ** len(marker))
    long = 2 - short
    if marker[0] == '>':
        return long, short
    return short, long


def to_string(value):
    """Return the shortest ABC rhythm notation for the Fraction value.

        >>> to_string(1)
        ''
        >>> to_string(fractions.Fraction(1, 2))
        '/'
        >>> to_string(fractions.Fraction(3, 8))
        '3/8'

    """
    value = fractions.Fraction(value)
    numer = '' if value.numerator == 1 else format(value.numerator)
    if value.denominator == 1:
        return numer
    elif value.denominator == 2:
        return numer + '/'
    return '{}/{}'.format(numer, value.denominator)


def from_string(text):
    """Convert an ABC rhythm string (e.g. ``'3/2'``) to a Fraction.

    Raises a ValueError if the text is not a valid rhythm.

    """
    m = _rhythm_re.match(text)
    if not m:
        raise ValueError("not a valid rhythm: {!r}".format(text))
    return rhythm(*m.groups())
