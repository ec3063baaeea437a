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
Test the analysis of the info lines and inline fields.
"""

### find abcparse
import sys
sys.path.insert(0, '.')

from abcparse import parse
from abcparse.context import Context
from abcparse.dom import abc as dom
from abcparse.key import key_accidentals
from abcparse.semantic import SemanticAnalyzer


def check(text, cls=dom.InfoLine):
    """Return (result, messages) for the first info line of type cls in text."""
    c = Context()
    tree = parse(text + "\n", c)
    del c.diagnostics[:]
    return SemanticAnalyzer(c).analyze(next(tree // cls)), c.diagnostics.messages()


def data(text, cls=dom.InfoLine):
    result = check(text, cls)[0]
    return result.data if result else None


def test_key():
    result, messages = check("K:^f minor clef=treble transpose=-12")
    assert result.type == "key"
    assert not messages
    sig = result.data['keySignature']
    assert (sig['root'], sig['acc'], sig['mode']) == ('F', 'sharp', 'minor')
    assert sig['accidentals'] == key_accidentals('F', 'sharp', 'minor')
    assert result.data['clef'] == {'type': 'treble', 'verticalPos': 0, 'transpose': -12}

    sig = data("K:C#m")['keySignature']
    assert (sig['root'], sig['acc'], sig['mode']) == ('C', 'sharp', 'minor')
    assert [a['note'] for a in sig['accidentals']] == ['f', 'c', 'g', 'd']

    sig = data("K:Bb")['keySignature']
    assert sig['accidentals'] == [{'note': 'b', 'acc': 'flat'}, {'note': 'e', 'acc': 'flat'}]
    assert data("K:D Dorian")['keySignature']['mode'] == 'dorian'
    assert data("K:D Dorian")['keySignature']['accidentals'] == []
    assert data("K:Amix")['keySignature']['mode'] == 'mixolydian'
    assert data("K:G")['keySignature']['accidentals'] == [{'note': 'f', 'acc': 'sharp'}]

    # no modifiers, no clef
    assert 'clef' not in data("K:G")


def test_key_special():
    sig = data("K:Hp")['keySignature']
    assert sig['accidentals'] == [
        {'note': 'f', 'acc': 'sharp'},
        {'note': 'c', 'acc': 'sharp'},
        {'note': 'g', 'acc': 'natural'},
    ]
    assert data("K:HP")['keySignature']['accidentals'] == []
    assert data("K:none")['keySignature']['root'] == 'none'
    assert data("K:NONE")['keySignature']['root'] == 'none'


def test_key_modifiers():
    assert data("K:G clef=bass")['clef'] == {'type': 'bass', 'verticalPos': -12}
    assert data("K:G bass")['clef']['type'] == 'bass'
    assert data("K:G clef=treble-8")['clef']['type'] == 'treble-8'
    assert data("K:G clef=weird")['clef']['type'] == 'treble'
    assert data("K:G stafflines=4")['clef'] == {'type': 'treble', 'verticalPos': 0, 'stafflines': 4}
    assert data("K:G staffscale=0.8")['clef']['staffscale'] == 0.8
    assert data("K:D exp ^f _b")['keySignature']['accidentals'] == [
        {'note': 'f', 'acc': 'sharp'}, {'note': 'b', 'acc': 'flat'}]
    assert data("K:D =c")['keySignature']['accidentals'] == [
        {'note': 'f', 'acc': 'sharp'}, {'note': 'c', 'acc': 'natural'}]
    result, messages = check("K:G foo")
    assert result is not None
    assert messages == ["Unknown key modifier: foo"]
    result, messages = check("K:")
    assert result is None
    assert messages == ["Key info line requires a key signature"]


def test_meter():
    assert data("M:C") == {'type': 'common_time', 'value': [{'numerator': 4, 'denominator': 4}]}
    assert data("M:C|") == {'type': 'cut_time', 'value': [{'numerator': 2, 'denominator': 2}]}
    assert data("M:6/8") == {'type': 'specified', 'value': [{'numerator': 6, 'denominator': 8}]}
    assert data("M:(2+3)/8") == {'type': 'specified', 'value': [{'numerator': 5, 'denominator': 8}]}
    assert data("M:2+3/8") == {'type': 'specified', 'value': [{'numerator': 5, 'denominator': 8}]}
    assert data("M:none") == {'type': 'none'}
    result, messages = check("M:waltz")
    assert result is None
    assert messages == ["Invalid meter format"]


def test_note_length():
    result = check("L:1/8")[0]
    assert result.type == "note_length"
    assert result.data == {'numerator': 1, 'denominator': 8}
    assert check("L:1/0") == (None, ["Invalid note length format"])
    assert check("L:8") == (None, ["Invalid note length format"])


def test_tempo():
    assert data('Q:"Allegro" 1/4=120 "con brio"') == {
        'preString': 'Allegro', 'duration': [1, 4], 'bpm': 120, 'postString': 'con brio'}
    assert data("Q:120") == {'bpm': 120}
    assert data("Q:3/8=40") == {'duration': [3, 8], 'bpm': 40}
    assert check("Q:")[0] is None


def test_voice():
    result = check('V:T1 name="Tenor" clef=treble-8 transpose=-2 stem=up')[0]
    assert result.type == "voice"
    assert result.data == {'id': 'T1', 'properties': {
        'name': 'Tenor', 'clef': 'treble-8', 'transpose': -2, 'stems': 'up'}}
    assert data("V:1 bass") == {'id': '1', 'properties': {'clef': 'bass'}}
    result, messages = check("V:1 foo=bar")
    assert result.data == {'id': '1', 'properties': {}}
    assert messages == ["Unknown voice property: foo"]
    assert check("V:") == (None, ["Voice info line requires a voice ID"])


def test_reference_number():
    result = check("X:12\nK:C")[0]
    assert result == ("reference_number", 12)
    assert check("X:abc\nK:C") == (None, ["Reference number (X:) must be a number"])


def test_text_fields():
    assert check("T:Speed the Plough")[0] == ("title", "Speed the Plough")
    assert check("C:Trad.")[0] == ("composer", "Trad.")
    assert check("Z:abc-transcription")[0].type == "transcription"
    # no handler for w: lines
    c = Context()
    tree = parse("X:1\nK:C\nabc\nw:la la la\n", c)
    words = next(n for n in tree // dom.InfoLine if n.letter == "w")
    assert SemanticAnalyzer(c).analyze(words) is None
    assert not c.diagnostics


def test_inline_fields():
    text = "X:1\nK:C\nabc [M:3/4] def [K:D] g|\n"
    assert data(text, dom.InlineField) == {'type': 'specified', 'value': [{'numerator': 3, 'denominator': 4}]}
    c = Context()
    tree = parse(text, c)
    s = SemanticAnalyzer(c)
    key = [s.analyze(n) for n in tree // dom.InlineField][1]
    assert key.type == "key"
    assert key.data['keySignature']['root'] == 'D'


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
