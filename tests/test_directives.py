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
Test the analysis of the stylesheet directives.
"""

### find abcparse
import sys
sys.path.insert(0, '.')

from abcparse import parse
from abcparse.context import Context
from abcparse.semantic import SemanticAnalyzer
from abcparse.semantic.constants import DRUM_SOUND_NAMES
from abcparse.semantic.directive import DIRECTIVES


def check(text):
    """Return (data, messages) for the first directive in text.

    The data is None if the directive is invalid.

    """
    c = Context()
    tree = parse(text + "\n", c)
    del c.diagnostics[:]
    result = SemanticAnalyzer(c).analyze(tree[0][0])
    return (result.data if result else None), c.diagnostics.messages()


def test_midi():
    assert check("%%midi beat 4 1 2 3") == ({'command': 'beat', 'params': [4, 1, 2, 3]}, [])
    assert check("%%MIDI Program 1 20")[0] == {'command': 'program', 'params': [1, 20]}
    assert check("%%midi expand 3/4") == ({'command': 'expand', 'params': [{'numerator': 3, 'denominator': 4}]}, [])
    data, messages = check("%%midi expand 3")
    assert data is None
    assert messages == ["MIDI command 'expand' expects fraction parameter (e.g., 3/4)"]
    assert check("%%midi expand 3 4")[0] is None
    assert check("%%midi transpose -12")[0] == {'command': 'transpose', 'params': [-12]}
    assert check("%%midi gchord fzcz")[0] == {'command': 'gchord', 'params': ['fzcz']}
    assert check("%%midi c 3")[0] == {'command': 'c', 'params': [3]}
    assert check("%%midi drum dddd 76 77 77 77")[0] == {'command': 'drum', 'params': ['dddd', 76, 77, 77, 77]}
    assert check("%%midi drum dddd")[0] is None
    assert check("%%midi portamento on 20")[0] == {'command': 'portamento', 'params': ['on', 20]}
    assert check("%%midi portamento 20 on")[0] is None
    assert check("%%midi portamento up 20")[0] is None
    assert check("%%midi drummap ^g 42")[0] == {'command': 'drummap', 'params': ['^g', 42]}
    assert check("%%midi drummap g")[0] is None

    data, messages = check("%%midi droneon 1")
    assert data == {'command': 'droneon', 'params': []}
    assert messages == ["MIDI command 'droneon' expects no parameters"]

    data, messages = check("%%midi flurble 1")
    assert data is None
    assert messages == ["Unknown MIDI command: flurble"]


def test_midi_arity():
    for command, count in (('ratio', 2), ('beat', 4), ('drone', 5), ('channel', 1)):
        args = " ".join(["1"] * count)
        assert check("%%midi {} {}".format(command, args))[0]['params'] == [1] * count
        data, messages = check("%%midi {} {}".format(command, " ".join(["1"] * (count - 1))))
        assert data is None and messages
        data, messages = check("%%midi {} {}".format(command, " ".join(["1"] * (count + 1))))
        assert data is None and messages


def test_midi_octave_clamping():
    for octave in range(-4, 7):
        data, messages = check("%%midi bassprog 33 octave={}".format(octave))
        assert data == {'command': 'bassprog', 'params': [33, max(-1, min(3, octave))]}
        assert bool(messages) == (not -1 <= octave <= 3)
    assert check("%%midi chordprog 20")[0] == {'command': 'chordprog', 'params': [20]}
    data, messages = check("%%midi chordprog 20 octave=5")
    assert messages == ["Octave value must be between -1 and 3 (got 5, clamping to 3)"]


def test_percmap():
    assert check("%%percmap C acoustic-snare") == ({'note': 'C', 'sound': 38, 'noteHead': None}, [])
    for i, name in enumerate(DRUM_SOUND_NAMES):
        assert check("%%percmap D " + name)[0]['sound'] == i + 35
    assert check("%%percmap D Side-Stick")[0]['sound'] == 37
    assert check("%%percmap ^g 42 x")[0] == {'note': '^g', 'sound': 42, 'noteHead': 'x'}
    assert check("%%percmap g 35")[0]['sound'] == 35
    assert check("%%percmap g 81")[0]['sound'] == 81
    data, messages = check("%%percmap g 82")
    assert data is None
    assert messages == ["MIDI percussion sound must be between 35 and 81 (got 82)"]
    assert check("%%percmap g 34")[0] is None
    data, messages = check("%%percmap g cowbel")
    assert data is None
    assert messages == ["Unknown drum sound name: cowbel"]
    assert check("%%percmap g")[0] is None


def test_fonts():
    data, messages = check('%%titlefont "Times New Roman" 12 italic')
    assert data == {'face': 'Times New Roman', 'size': 12, 'weight': 'normal',
                    'style': 'italic', 'decoration': 'none'}
    assert not messages
    assert check("%%gchordfont Helvetica-Bold 10 bold box")[0] == {
        'face': 'Helvetica-Bold', 'size': 10, 'weight': 'bold', 'style': 'normal',
        'decoration': 'none', 'box': True}
    assert check("%%vocalfont * 13")[0] == {'size': 13}
    assert check("%%annotationfont 9 box")[0] == {'size': 9, 'box': True}

    data, messages = check("%%tempofont Times 12 box")
    assert 'box' not in data
    assert messages == ['Font type "tempofont" does not support "box" parameter']

    data, messages = check("%%titlefont *")
    assert data is None
    assert messages == ["Expected font size number after *"]

    assert check("%%setfont-1 Arial 14")[0] == {'number': 1, 'font': {
        'face': 'Arial', 'size': 14, 'weight': 'normal', 'style': 'normal', 'decoration': 'none'}}
    assert check("%%setfont-9 Arial 14")[0]['number'] == 9
    assert check("%%setfont-10 Arial 14") == (None, [])
    assert check("%%setfont-0 Arial 14") == (None, [])


def test_simple_directives():
    assert check("%%landscape") == (True, [])
    assert check("%%landscape 1") == (True, ['Directive "landscape" expects no parameters, but got 1'])
    assert check("%%papersize A4") == ("A4", [])
    assert check("%%papersize")[0] is None
    assert check("%%graceslurs false") == (False, [])
    assert check("%%graceslurs 1") == (True, [])
    assert check("%%graceslurs maybe")[0] is None
    assert check("%%scale 0.75") == (0.75, [])
    assert check("%%barsperstaff 4") == (4, [])
    data, messages = check("%%barsperstaff 0")
    assert data is None
    assert messages == ['Directive "barsperstaff": Number 0 is below minimum 1']
    assert check("%%measurenb 0") == (0, [])
    assert check("%%stretchlast") == (1, [])
    assert check("%%stretchlast false") == (0, [])
    assert check("%%stretchlast 0.5") == (0.5, [])
    data, messages = check("%%stretchlast 2")
    assert data is None
    assert messages == ["stretchlast value must be between 0 and 1 (received 2)"]
    assert check("%%vocal Above") == ("above", [])
    data, messages = check("%%vocal sideways")
    assert data is None
    assert messages == ['Invalid position "sideways", expected one of: auto, above, below, hidden']
    assert check("%%pagewidth 21cm") == ({'value': 21, 'unit': 'cm'}, [])
    assert check("%%indent 1.5in") == ({'value': 1.5, 'unit': 'in'}, [])
    assert check("%%staffsep 40") == ({'value': 40}, [])
    assert check("%%sep 10 20 100") == ({'above': 10, 'below': 20, 'length': 100}, [])
    assert check("%%sep") == ({}, [])
    assert check("%%newpage") == (None, [])
    assert check("%%newpage 3") == (3, [])
    assert check("%%text Some text here") == ("Some text here", [])
    assert check("%%abc-creator abcm2ps 8.14")[0] == "abcm2ps 8.14"
    data, messages = check("%%text")
    assert data is None
    assert messages == ['Directive "text" expects a text parameter']
    assert check("%%begintext\nline one\nline two\n%%endtext")[0] == "line one\nline two"
    assert check("%%BeginText\nfoo, bar\n%%EndText") == ("foo, bar", [])
    assert check("%%TEXT Hello, world!") == ("Hello, world!", [])
    assert check("%%unknowndirective 1 2 3") == (None, [])


def test_header_footer():
    assert check("%%header A\tB\tC") == ({'left': 'A', 'center': 'B', 'right': 'C'}, [])
    assert check('%%footer "A\tB"') == ({'left': 'A', 'center': 'B', 'right': ''}, [])
    assert check("%%header page $P") == ({'left': 'page $P', 'center': '', 'right': ''}, [])
    assert check("%%HEADER A\tB\tC") == ({'left': 'A', 'center': 'B', 'right': 'C'}, [])
    assert check("%%header \tCenter\tRight") == ({'left': '', 'center': 'Center', 'right': 'Right'}, [])
    data, messages = check("%%header A\tB\tC\tD\tE")
    assert data == {'left': 'A', 'center': 'B', 'right': 'C'}
    assert messages == ["Too many tabs in header: 5 sections found (expected 1-3)"]
    data, messages = check("%%footer")
    assert data is None
    assert messages == ['Directive "footer" expects a text parameter']


def test_deco():
    data, messages = check("%%deco fp 6 pf 20 2 2 fp")
    assert data == {'name': 'fp', 'definition': '6 pf 20 2 2 fp'}
    assert messages == ["Decoration redefinition is parsed but not fully implemented"]
    assert check("%%deco my-deco")[0] == {'name': 'my-deco', 'definition': None}
    assert check("%%deco")[0] is None


def test_score():
    data, messages = check("%%score (S A) | T")
    assert not messages
    assert data['voiceAssignments'] == {
        'S': {'staffNum': 0, 'index': 0},
        'A': {'staffNum': 0, 'index': 1},
        'T': {'staffNum': 1, 'index': 0},
    }
    assert data['staves'] == [
        {'index': 0, 'numVoices': 2, 'connectBarLines': 'start'},
        {'index': 1, 'numVoices': 1, 'connectBarLines': 'end'},
    ]

    data, messages = check("%%score [S A] {RH LH}")
    assert [s.get('bracket') for s in data['staves']] == ['start', 'end', None, None]
    assert [s.get('brace') for s in data['staves']] == [None, None, 'start', 'end']

    data, messages = check("%%staves 1 2 3")
    assert [s['connectBarLines'] for s in data['staves']] == ['start', 'continue', 'continue']

    data, messages = check("%%score ((S A) T)")
    assert messages == [
        "Cannot nest parentheses in score/staves directive",
        "Unexpected close parenthesis in score/staves directive",
    ]
    data, messages = check("%%score [S A")
    assert messages == ["Unclosed bracket in score/staves directive"]
    assert check("%%score")[0] is None


def test_table():
    assert "setfont-5" in DIRECTIVES
    assert "setfont-10" not in DIRECTIVES
    assert all(name == name.lower() for name in DIRECTIVES)


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
