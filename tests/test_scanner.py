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
Test the scanner.
"""

### find abcparse
import sys
sys.path.insert(0, '.')

from abcparse.context import Context
from abcparse.scanner import scan
from abcparse.tokens import TT


TEXT = r'''%abc-2.1
%%titlefont "Times New Roman" 12 italic
%%midi program 1 20

X:1
T:Speed the Plough
M:4/4
L:1/8
Q:"Allegro" 1/4=120
K:G clef=treble
|:GABc dedB|dedB dedB|[CEG]2 {/g}a (3efg [K:D] f2|1 "Am"A4 z4:|2 !fermata!G8|]
w:some words % a comment

X:2
T:Second
K:C#m
V:1 name="Soprano"
c>d e/f/ y ~g2 &\
a2 "unterminated
'''


def test_roundtrip():
    tokens = scan(TEXT)
    assert ''.join(t.lexeme for t in tokens) == TEXT
    assert tokens[-1].kind is TT.EOF
    assert tokens[-1].lexeme == ""
    assert all(t.lexeme for t in tokens[:-1])


def test_ids_and_positions():
    c = Context(first_id=100)
    tokens = scan("X:1\nK:G\nab|\n", c)
    assert [t.id for t in tokens] == list(range(100, 100 + len(tokens)))
    a = next(t for t in tokens if t.kind is TT.NOTE_LETTER)
    assert a.lexeme == "a"
    assert (a.line, a.offset) == (2, 0)
    bar = next(t for t in tokens if t.kind is TT.BARLINE)
    assert bar.location == (2, 2)
    assert bar.end == 3


def test_key_signature():
    tokens = scan("X:1\nK:C#m\n")
    keys = [t for t in tokens if t.kind is TT.KEY_SIGNATURE]
    assert len(keys) == 1
    assert keys[0].lexeme == "C#m"
    assert not any(t.kind is TT.NOTE_LETTER for t in tokens)

    tokens = scan("X:1\nK:Bb mix clef=bass\n")
    assert [t.lexeme for t in tokens if t.kind is TT.KEY_SIGNATURE] == ["Bb"]
    assert [t.lexeme for t in tokens if t.kind is TT.IDENTIFIER] == ["mix", "clef", "bass"]


def test_notes():
    tokens = scan("X:1\nK:C\n^c'3/2>\n")
    kinds = [t.kind for t in tokens if t.line == 2 and t.kind is not TT.EOL]
    assert kinds == [TT.ACCIDENTAL, TT.NOTE_LETTER, TT.OCTAVE,
                     TT.RHY_NUMER, TT.RHY_SEP, TT.RHY_DENOM, TT.RHY_BRKN]


def test_directive():
    tokens = scan("%%pagewidth 21cm\n")
    assert [t.kind for t in tokens] == [
        TT.STYLESHEET_DIRECTIVE, TT.IDENTIFIER, TT.WS, TT.NUMBER,
        TT.MEASUREMENT_UNIT, TT.EOL, TT.EOF]


def test_lexical_errors():
    c = Context()
    tokens = scan('X:1\nK:C\nab "unterminated\n', c)
    assert ''.join(t.lexeme for t in tokens) == 'X:1\nK:C\nab "unterminated\n'
    assert [t.lexeme for t in tokens if t.kind is TT.INVALID] == ['"unterminated']
    assert c.diagnostics.messages() == ["Unterminated string"]
    assert c.diagnostics.errors()[0].location == (2, 3)

    c = Context()
    scan("X:1\nhello\nK:C\n", c)
    assert c.diagnostics.messages() == ["Invalid token 'hello'"]


def test_chord_rhythm_warning():
    c = Context()
    scan("X:1\nK:C\n[C2E2G2] [CEG]2\n", c)
    assert len(c.diagnostics.warnings()) == 1
    assert c.diagnostics.warnings()[0].message.startswith("Rhythm inside a chord")

    c = Context(chord_rhythm_warning=False)
    scan("X:1\nK:C\n[C2E2G2]\n", c)
    assert not c.diagnostics


def test_no_stem():
    tokens = scan("X:1\nK:C\nc0 c02 c'0\n")
    line = [(t.kind, t.lexeme) for t in tokens if t.line == 2 and t.kind not in (TT.WS, TT.EOL)]
    assert line == [
        (TT.NOTE_LETTER, "c"), (TT.NO_STEM, "0"),
        (TT.NOTE_LETTER, "c"), (TT.NO_STEM, "0"), (TT.RHY_NUMER, "2"),
        (TT.NOTE_LETTER, "c"), (TT.OCTAVE, "'"), (TT.RHY_NUMER, "0"),
    ]


def test_dotted_slur():
    tokens = scan("X:1\nK:C\n.(ab) .c\n")
    line = [(t.kind, t.lexeme) for t in tokens if t.line == 2 and t.kind not in (TT.WS, TT.EOL)]
    assert line == [
        (TT.DOTTED_SLUR, ".("), (TT.NOTE_LETTER, "a"), (TT.NOTE_LETTER, "b"),
        (TT.SLUR, ")"), (TT.DECORATION, "."), (TT.NOTE_LETTER, "c"),
    ]


def test_decoration_without_note():
    c = Context()
    tokens = scan("X:1\nK:C\n~ G\n", c)
    assert not any(t.kind is TT.DECORATION for t in tokens)
    assert [t.lexeme for t in tokens if t.kind is TT.INVALID] == ["~"]
    assert c.diagnostics.messages() == ["Invalid token '~'"]
    assert c.diagnostics.errors()[0].location == (2, 0)

    c = Context()
    tokens = scan("X:1\nK:C\n~G\n", c)
    assert [t.lexeme for t in tokens if t.kind is TT.DECORATION] == ["~"]
    assert not c.diagnostics


def test_escaped_quote():
    c = Context()
    tokens = scan('X:1\nK:C\n"a\\"b"c\n', c)
    assert [t.lexeme for t in tokens if t.kind is TT.ANNOTATION] == ['"a\\"b"']
    assert not c.diagnostics


def test_text_directives_ignore_case():
    tokens = scan("%%BeginText\nfoo, bar\n%%EndText\n%%HEADER A\tB\n")
    assert [t.lexeme for t in tokens if t.kind is TT.FREE_TXT] == ["\nfoo, bar\n", "A\tB"]
    assert not any(t.kind is TT.INVALID for t in tokens)


def test_key_signature_bagpipe():
    assert [t.lexeme for t in scan("X:1\nK:Hp\n") if t.kind is TT.KEY_SIGNATURE] == ["Hp"]
    assert [t.lexeme for t in scan("X:1\nK:NONE\n") if t.kind is TT.KEY_SIGNATURE] == ["NONE"]
    assert not any(t.kind is TT.KEY_SIGNATURE for t in scan("X:1\nK:hp\n"))


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
