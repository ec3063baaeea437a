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
The scanner turns ABC source text into a list of :class:`~abcparse.tokens.Token`.

The lexing itself is done by *parce*, using the :class:`~abcparse.lang.abc.Abc`
language definition. The scanner flattens the parce tree, maps the actions to
:class:`~abcparse.tokens.TT` kinds, computes line and offset for every token
and reports lexical problems to the :class:`~abcparse.context.Context`.

Text parce did not cover is emitted as an INVALID token, so joining the lexemes
of all tokens always gives back the source text::

    >>> from abcparse.scanner import scan
    >>> tokens = scan("X:1\\nK:C#m\\nabc|\\n")
    >>> ''.join(t.lexeme for t in tokens) == "X:1\\nK:C#m\\nabc|\\n"
    True
    >>> [t.lexeme for t in tokens if t.kind.name == "KEY_SIGNATURE"]
    ['C#m']

The last token is always a zero-length EOF token.

"""

import bisect

import parce

from .context import Context
from .lang import abc
from .tokens import TT, Token


#: Maps the parce actions of the Abc language to token kinds.
ACTIONS = {
    abc.Whitespace: TT.WS,
    abc.Newline: TT.EOL,
    abc.SectionBreak: TT.SCT_BRK,
    abc.Comment: TT.COMMENT,
    abc.Invalid: TT.INVALID,
    abc.UnterminatedString: TT.INVALID,
    abc.FreeText: TT.FREE_TXT,
    abc.InfoString: TT.INFO_STR,
    abc.InfoHeader: TT.INF_HDR,
    abc.DirectiveStart: TT.STYLESHEET_DIRECTIVE,
    abc.DirectiveName: TT.IDENTIFIER,

    abc.Accidental: TT.ACCIDENTAL,
    abc.NoteLetter: TT.NOTE_LETTER,
    abc.NoStem: TT.NO_STEM,
    abc.Octave: TT.OCTAVE,
    abc.Rest: TT.REST,
    abc.RhythmNumerator: TT.RHY_NUMER,
    abc.RhythmSeparator: TT.RHY_SEP,
    abc.RhythmDenominator: TT.RHY_DENOM,
    abc.BrokenRhythm: TT.RHY_BRKN,
    abc.Tie: TT.TIE,

    abc.Barline: TT.BARLINE,
    abc.RepeatNumber: TT.REPEAT_NUMBER,
    abc.RepeatComma: TT.REPEAT_COMMA,
    abc.RepeatDash: TT.REPEAT_DASH,
    abc.RepeatX: TT.REPEAT_X,

    abc.ChordStart: TT.CHRD_LEFT_BRKT,
    abc.ChordEnd: TT.CHRD_RIGHT_BRKT,
    abc.GraceStart: TT.GRC_GRP_LEFT_BRACE,
    abc.GraceEnd: TT.GRC_GRP_RGHT_BRACE,
    abc.GraceSlash: TT.GRC_GRP_SLSH,
    abc.TupletStart: TT.TUPLET_LPAREN,
    abc.TupletP: TT.TUPLET_P,
    abc.TupletColon: TT.TUPLET_COLON,
    abc.TupletQ: TT.TUPLET_Q,
    abc.TupletR: TT.TUPLET_R,

    abc.Slur: TT.SLUR,
    abc.DottedSlur: TT.DOTTED_SLUR,
    abc.Decoration: TT.DECORATION,
    abc.Symbol: TT.SYMBOL,
    abc.Annotation: TT.ANNOTATION,
    abc.InlineFieldStart: TT.INLN_FLD_LFT_BRKT,
    abc.InlineFieldEnd: TT.INLN_FLD_RGT_BRKT,
    abc.VoiceOverlay: TT.VOICE_OVRLAY,
    abc.YSpacer: TT.Y_SPC,
    abc.Backtick: TT.BCKTCK_SPC,
    abc.SystemBreak: TT.SYSTEM_BREAK,
    abc.LineContinuation: TT.LINE_CONT,
    abc.EscapedChar: TT.ESCAPED_CHAR,
    abc.ReservedChar: TT.RESERVED_CHAR,

    abc.Identifier: TT.IDENTIFIER,
    abc.Number: TT.NUMBER,
    abc.Equals: TT.EQL,
    abc.Slash: TT.SLASH,
    abc.Minus: TT.MINUS,
    abc.Plus: TT.PLUS,
    abc.ParenOpen: TT.LPAREN,
    abc.ParenClose: TT.RPAREN,
    abc.BraceOpen: TT.LBRACE,
    abc.BraceClose: TT.RBRACE,
    abc.BracketOpen: TT.LBRACKET,
    abc.BracketClose: TT.RBRACKET,
    abc.Pipe: TT.PIPE,
    abc.Asterisk: TT.ASTERISK,
    abc.KeySignature: TT.KEY_SIGNATURE,
    abc.SpecialLiteral: TT.SPECIAL_LITERAL,
    abc.Unit: TT.MEASUREMENT_UNIT,
}

#: Rhythm token kinds that trigger the chord rhythm warning.
RHYTHM = frozenset((TT.RHY_NUMER, TT.RHY_SEP, TT.RHY_DENOM, TT.RHY_BRKN))


def lex(text):
    """Yield (pos, text, kind, action) tuples for ``text``, without gaps.

    Text not covered by a parce token, or a token with an action that is
    not known, gets the INVALID kind.

    """
    pos = 0
    for t in parce.root(abc.Abc.root, text).tokens():
        if not t.text:
            continue
        if t.pos > pos:
            yield pos, text[pos:t.pos], TT.INVALID, None
        yield t.pos, t.text, ACTIONS.get(t.action, TT.INVALID), t.action
        pos = t.end
    if pos < len(text):
        yield pos, text[pos:], TT.INVALID, None


def scan(text, context=None):
    """Scan ``text`` and return the list of tokens.

    Diagnostics are reported to the ``context``; a new
    :class:`~abcparse.context.Context` is created if None is given. Scanning
    never fails; unknown text becomes INVALID tokens.

    """
    if context is None:
        context = Context()
    line_starts = [0]
    line_starts.extend(i + 1 for i, c in enumerate(text) if c == '\n')

    def token(kind, lexeme, pos):
        line = bisect.bisect_right(line_starts, pos) - 1
        return Token(kind, lexeme, context.next_id(), line, pos - line_starts[line])

    tokens = []
    in_chord = False
    chord_warned = False
    warn = context.options.chord_rhythm_warning
    for pos, lexeme, kind, action in lex(text):
        t = token(kind, lexeme, pos)
        tokens.append(t)
        if kind is TT.INVALID:
            if action is abc.UnterminatedString:
                context.error("Unterminated string", t)
            else:
                context.error("Invalid token {!r}".format(lexeme), t)
        elif kind is TT.CHRD_LEFT_BRKT:
            in_chord, chord_warned = True, False
        elif kind in (TT.CHRD_RIGHT_BRKT, TT.EOL, TT.SCT_BRK, TT.BARLINE):
            in_chord = False
        elif kind in RHYTHM and in_chord and warn and not chord_warned:
            context.warning("Rhythm inside a chord: "
                "put the rhythm after the closing bracket instead", t)
            chord_warned = True
    tokens.append(token(TT.EOF, "", len(text)))
    return tokens
