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
Vocabularies used by the semantic handlers.
"""

#: The General MIDI percussion sounds, starting at key 35.
DRUM_SOUND_NAMES = (
    "acoustic-bass-drum",
    "bass-drum-1",
    "side-stick",
    "acoustic-snare",
    "hand-clap",
    "electric-snare",
    "low-floor-tom",
    "closed-hi-hat",
    "high-floor-tom",
    "pedal-hi-hat",
    "low-tom",
    "open-hi-hat",
    "low-mid-tom",
    "hi-mid-tom",
    "crash-cymbal-1",
    "high-tom",
    "ride-cymbal-1",
    "chinese-cymbal",
    "ride-bell",
    "tambourine",
    "splash-cymbal",
    "cowbell",
    "crash-cymbal-2",
    "vibraslap",
    "ride-cymbal-2",
    "hi-bongo",
    "low-bongo",
    "mute-hi-conga",
    "open-hi-conga",
    "low-conga",
    "high-timbale",
    "low-timbale",
    "high-agogo",
    "low-agogo",
    "cabasa",
    "maracas",
    "short-whistle",
    "long-whistle",
    "short-guiro",
    "long-guiro",
    "claves",
    "hi-wood-block",
    "low-wood-block",
    "mute-cuica",
    "open-cuica",
    "mute-triangle",
    "open-triangle",
)

#: The MIDI key of the first drum sound.
FIRST_DRUM_SOUND = 35

#: The clefs and their vertical position.
CLEFS = {
    'treble': 0,
    'treble+8': 0,
    'treble-8': 0,
    'bass': -12,
    'bass+8': -12,
    'bass-8': -12,
    'alto': -6,
    'alto+8': -6,
    'alto-8': -6,
    'tenor': -8,
    'tenor+8': -8,
    'tenor-8': -8,
    'perc': 0,
    'none': 0,
}

#: Positions for the position directives.
POSITIONS = ('auto', 'above', 'below', 'hidden')

#: Font modifier keywords.
FONT_MODIFIERS = ('bold', 'italic', 'underline')

#: Words that mark a font as UTF-8 and are ignored.
UTF8_MARKERS = ('utf', 'utf8', 'utf-8')
