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
Functions to deal with key signatures.

ABC writes a key signature as a root note, an optional accidental and an
optional mode, e.g. ``C#m``, ``Bbmaj`` or ``^f minor``. The functions here
compute the accidentals such a key signature puts on the staff.

Alterations are in whole tones, so a sharp is 0.5 and a flat -0.5, like the
steps in :data:`MAJOR_SCALE`.

"""

#: The pitches of the "white keys" in whole tones, starting at C.
MAJOR_SCALE = (0, 1, 2, 2.5, 3.5, 4.5, 5.5)

#: The note names, in the order of the scale.
NOTE_NAMES = "cdefgab"

#: The order in which sharps and flats are written in a key signature.
SHARPS_ORDER = "fcgdaeb"
FLATS_ORDER = "beadgcf"

#: The names of the alterations.
ACCIDENTAL_NAMES = {
    1: 'dblsharp',
    0.5: 'sharp',
    0: 'natural',
    -0.5: 'flat',
    -1: 'dblflat',
}

#: The offset of the modes to the default major scale.
mode_offset = {
    'major': 0,
    'dorian': 1,
    'phrygian': 2,
    'lydian': 3,
    'mixolydian': 4,
    'minor': 5,
    'locrian': 6,
}

#: The accepted mode names and abbreviations, mapped to the mode.
MODES = {
    'major': 'major', 'maj': 'major', 'ionian': 'major', 'ion': 'major',
    'minor': 'minor', 'min': 'minor', 'm': 'minor', 'aeolian': 'minor', 'aeo': 'minor',
    'dorian': 'dorian', 'dor': 'dorian',
    'phrygian': 'phrygian', 'phr': 'phrygian',
    'lydian': 'lydian', 'lyd': 'lydian',
    'mixolydian': 'mixolydian', 'mix': 'mixolydian',
    'locrian': 'locrian', 'loc': 'locrian',
}


def _int(value):
    """Return int if val is integer."""
    i = int(value)
    return i if value == i else value


def mode_name(text):
    """Return the mode for the (possibly abbreviated) mode name, or None.

    The name is case insensitive::

        >>> mode_name("Mix")
        'mixolydian'
        >>> mode_name("m")
        'minor'
        >>> mode_name("blues") is None
        True

    """
    return MODES.get(text.lower())


def alterations(offset, scale=None):
    """Return the list of alterations for the specified offset.

    The ``offset`` is the number of steps to shift the scale. The pitches
    in the scale from that offset are compared with the pitches from the
    beginning, and the difference for every step is returned. For example::

        >>> alterations(0)
        [0, 0, 0, 0, 0, 0, 0]
        >>> alterations(1)
        [0, 0, -0.5, 0, 0, 0, -0.5]

    The second call lists the accidentals for C dorian.

    """
    scale = scale or MAJOR_SCALE
    l = len(scale)
    offset %= l
    alter = scale[offset] - scale[0]
    return [_int(scale[step % l] + step // l * 6 - scale[orig] - alter)
                for step, orig in enumerate(range(l), offset)]


def accidentals(note, alter=0, mode=None, scale=None):
    """Return the list of 7 alterations for the specified key signature.

    The ``note`` is a note from 0..6; the ``alter`` is the alteration of that
    note in whole tones, and the ``mode``, if given, is a list of 7
    alterations describing the mode. By default the major mode is used::

        >>> accidentals(1)                            # D major
        [0.5, 0, 0, 0.5, 0, 0, 0]
        >>> accidentals(1, 0, alterations(5))         # D minor
        [0, 0, 0, 0, 0, 0, -0.5]
        >>> accidentals(5, -0.5)                      # A-flat major
        [0, -0.5, -0.5, 0, 0, -0.5, -0.5]

    """
    scale = scale or MAJOR_SCALE
    if mode is None:
        mode = alterations(0, scale)
    note %= len(scale)
    steps = alterations(note, scale)
    accs = [_int(m - s + alter) for m, s in zip(mode, steps)]
    return accs[-note:] + accs[:-note]  # rotate so C is always at start


def key_accidentals(root, acc="", mode="major"):
    """Return the accidentals of a key signature as a list of dicts.

    ``root`` is a note name, ``acc`` ``"sharp"``, ``"flat"`` or empty, and
    ``mode`` one of the names in :data:`mode_offset`. Each dict has a
    ``note`` (lower case) and an ``acc`` (a name from
    :data:`ACCIDENTAL_NAMES`). Sharps come first, in the order they are
    written on the staff, then the flats::

        >>> key_accidentals("C", "sharp", "minor")
        [{'note': 'f', 'acc': 'sharp'}, {'note': 'c', 'acc': 'sharp'}, \
{'note': 'g', 'acc': 'sharp'}, {'note': 'd', 'acc': 'sharp'}]

    """
    note = NOTE_NAMES.index(root.lower())
    alter = {'sharp': 0.5, 'flat': -0.5}.get(acc, 0)
    accs = accidentals(note, alter, alterations(mode_offset[mode]))
    result = []
    for order, sign in ((SHARPS_ORDER, 1), (FLATS_ORDER, -1)):
        for n in order:
            a = accs[NOTE_NAMES.index(n)]
            if a * sign > 0:
                result.append({'note': n, 'acc': ACCIDENTAL_NAMES[a]})
    return result
