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
The parser builds the :mod:`~abcparse.dom.abc` tree from a list of tokens.

It is a recursive descent parser, working on an immutable :class:`Cursor`.
Every parse method gets a cursor and returns a tuple (node, cursor), where the
returned cursor points at the first token after the node.

Every token ends up in exactly one node, so writing the tree gives back the
source text::

    >>> from abcparse import parse
    >>> tree = parse("X:1\\nK:G\\nGABc dedB|\\n")
    >>> tree.write() == "X:1\\nK:G\\nGABc dedB|\\n"
    True
    >>> tree.tunes[0].body.systems[0]
    <abc.System 'GABc dedB|\\n' (5 children) @2:0>

Problems are reported to the :class:`~abcparse.context.Context`; the parser
skips to the next bar line, line end or info line and continues.

"""

import collections

from .context import Context
from .dom import abc as dom
from .tokens import TT, Token


#: Tokens where recovery after an error stops.
BOUNDARY = frozenset((TT.BARLINE, TT.EOL, TT.INF_HDR, TT.SCT_BRK, TT.EOF))

#: Tokens that end an info line or a directive.
LINE_END = frozenset((TT.EOL, TT.SCT_BRK, TT.EOF, TT.STYLESHEET_DIRECTIVE, TT.INF_HDR))

#: Tokens that are not part of the values of an info line or directive.
NOT_A_VALUE = frozenset((TT.WS, TT.COMMENT, TT.INVALID))

#: Tokens that can start a note.
NOTE_START = frozenset((TT.ACCIDENTAL, TT.NOTE_LETTER))

#: Tokens that can be the key of a KV pair.
KEY = frozenset((TT.IDENTIFIER, TT.NUMBER))

#: Simple elements consisting of one token.
SIMPLE = {
    TT.WS: dom.Whitespace,
    TT.EOL: dom.Newline,
    TT.COMMENT: dom.Comment,
    TT.SCT_BRK: dom.SectionBreak,
    TT.FREE_TXT: dom.FreeText,
    TT.ANNOTATION: dom.Annotation,
    TT.DECORATION: dom.Decoration,
    TT.SYMBOL: dom.Symbol,
    TT.SLUR: dom.Slur,
    TT.DOTTED_SLUR: dom.Slur,
    TT.BCKTCK_SPC: dom.BacktickSpace,
    TT.VOICE_OVRLAY: dom.VoiceOverlay,
    TT.LINE_CONT: dom.LineContinuation,
    TT.SYSTEM_BREAK: dom.SystemBreak,
    TT.ESCAPED_CHAR: dom.EscapedChar,
    TT.RESERVED_CHAR: dom.ReservedChar,
    TT.INVALID: dom.ErrorExpr,
}


class Cursor(collections.namedtuple("Cursor", "tokens index")):
    """An immutable position in a tuple of tokens.

    The last token must be the EOF token; peeking beyond it returns the EOF
    token again. All methods return a new value and never change the cursor.

    """
    __slots__ = ()

    def peek(self, offset=0):
        """Return the token at ``offset`` from the current position."""
        i = self.index + offset
        if i < len(self.tokens):
            return self.tokens[i]
        return self.tokens[-1]

    def advance(self, count=1):
        """Return a new Cursor, ``count`` tokens further."""
        return type(self)(self.tokens, min(self.index + count, len(self.tokens) - 1))

    def take(self):
        """Return a tuple (token, cursor) with the current token and the next cursor."""
        return self.peek(), self.advance()

    def check(self, *kinds):
        """Return True if the current token has one of the kinds."""
        return self.peek().kind in kinds

    def at_end(self):
        """Return True if the current token is the EOF token."""
        return self.peek().kind is TT.EOF

    def skip(self, *kinds):
        """Return a tuple (tokens, cursor), skipping the tokens with the kinds."""
        tokens = []
        c = self
        while c.check(*kinds) and not c.at_end():
            t, c = c.take()
            tokens.append(t)
        return tokens, c

    def upto(self, other):
        """Return the tokens from here up to the other cursor."""
        return self.tokens[self.index:other.index]


class Parser:
    """Builds a :class:`~abcparse.dom.abc.FileStructure` from tokens.

    All nodes get their ids from the ``context``, and all problems are
    reported to it.

    """
    def __init__(self, context=None):
        self.context = context or Context()

    def factory(self, cls, origin=(), *children, **attrs):
        """Create a node of type ``cls`` with a new id."""
        return cls(*children, id=self.context.next_id(), origin=origin, **attrs)

    def parse(self, tokens):
        """Parse the tokens and return the FileStructure.

        An EOF token is appended if the last token is not one.

        """
        tokens = tuple(tokens)
        if not tokens or tokens[-1].kind is not TT.EOF:
            if tokens:
                last = tokens[-1]
                line = last.line + last.lexeme.count('\n')
                tokens += (Token(TT.EOF, "", self.context.next_id(), line, last.end),)
            else:
                tokens = (Token(TT.EOF, "", self.context.next_id(), 0, 0),)
        node, cursor = self.parse_file(Cursor(tokens, 0))
        return node

    def parse_file(self, cursor):
        """Parse the file header, the tunes and the text between them."""
        header = []
        while not cursor.at_end() and not self.is_tune_start(cursor):
            node, cursor = self.parse_file_item(cursor)
            header.append(node)
        children = [self.factory(dom.FileHeader, (), *header)] if header else []
        while not cursor.at_end():
            if self.is_tune_start(cursor):
                node, cursor = self.parse_tune(cursor)
            else:
                node, cursor = self.parse_file_item(cursor)
            children.append(node)
        eof, cursor = cursor.take()
        return self.factory(dom.FileStructure, (eof,), *children), cursor

    def is_tune_start(self, cursor):
        """Return True if the cursor is at an ``X:`` info line."""
        t = cursor.peek()
        return t.kind is TT.INF_HDR and t.lexeme == "X:"

    def parse_file_item(self, cursor):
        """Parse an element outside a tune."""
        t = cursor.peek()
        if t.kind is TT.INF_HDR:
            return self.parse_info_line(cursor)
        elif t.kind is TT.STYLESHEET_DIRECTIVE:
            return self.parse_directive(cursor)
        elif t.kind in SIMPLE:
            return self.factory(SIMPLE[t.kind], (t,)), cursor.advance()
        self.context.error("parser: unexpected token", t)
        return self.factory(dom.ErrorExpr, (t,)), cursor.advance()

    ## tunes
    def parse_tune(self, cursor):
        """Parse a tune, the cursor is at the ``X:`` line."""
        start = cursor.peek()
        header, cursor, has_key = self.parse_tune_header(cursor)
        children = [header]
        if has_key:
            body, cursor = self.parse_tune_body(cursor)
            if len(body):
                children.append(body)
        else:
            self.context.warning("Tune header has no K: line", start)
        return self.factory(dom.Tune, (), *children), cursor

    def parse_tune_header(self, cursor):
        """Parse the tune header, return (node, cursor, has_key).

        The header ends after the ``K:`` line (including its line end), at a
        section break or at the next tune.

        """
        items = []
        has_key = False
        while not cursor.check(TT.SCT_BRK, TT.EOF):
            if items and self.is_tune_start(cursor):
                break
            t = cursor.peek()
            if t.kind is TT.INF_HDR:
                node, cursor = self.parse_info_line(cursor)
                items.append(node)
                if node.letter == "K":
                    has_key = True
                    if cursor.check(TT.EOL):
                        t, cursor = cursor.take()
                        items.append(self.factory(dom.Newline, (t,)))
                    break
            else:
                node, cursor = self.parse_file_item(cursor)
                items.append(node)
        return self.factory(dom.TuneHeader, (), *items), cursor, has_key

    def parse_tune_body(self, cursor):
        """Parse the music up to a section break, the next tune or the end."""
        items = []
        while not cursor.check(TT.SCT_BRK, TT.EOF) and not self.is_tune_start(cursor):
            node, cursor = self.parse_body_item(cursor)
            items.append(node)
        systems = self.systems(self.beams(items))
        return self.factory(dom.TuneBody, (), *systems), cursor

    def parse_body_item(self, cursor):
        """Parse one element of music."""
        t = cursor.peek()
        kind = t.kind
        if kind in NOTE_START:
            return self.parse_note(cursor)
        elif kind is TT.TIE:
            if cursor.peek(1).kind in NOTE_START:
                return self.parse_note(cursor)
            return self.factory(dom.Tie, (t,)), cursor.advance()
        elif kind is TT.REST:
            return self.parse_rest(cursor)
        elif kind is TT.CHRD_LEFT_BRKT:
            return self.parse_chord(cursor)
        elif kind is TT.GRC_GRP_LEFT_BRACE:
            return self.parse_grace_group(cursor)
        elif kind is TT.TUPLET_LPAREN:
            return self.parse_tuplet(cursor)
        elif kind is TT.BARLINE:
            return self.parse_barline(cursor)
        elif kind is TT.INLN_FLD_LFT_BRKT:
            return self.parse_inline_field(cursor)
        elif kind is TT.INF_HDR:
            return self.parse_info_line(cursor)
        elif kind is TT.STYLESHEET_DIRECTIVE:
            return self.parse_directive(cursor)
        elif kind is TT.Y_SPC:
            c = cursor.advance()
            rhythm, c = self.parse_rhythm(c)
            return self.factory(dom.YSpacer, (t,), *filter(None, (rhythm,))), c
        elif kind in SIMPLE:
            return self.factory(SIMPLE[kind], (t,)), cursor.advance()
        return self.recover(cursor, "parser: unexpected token")

    def recover(self, cursor, message):
        """Report an error and return an ErrorExpr with the tokens up to a boundary.

        At least one token is consumed.

        """
        self.context.error(message, cursor.peek())
        t, c = cursor.take()
        tokens = [t]
        while not c.check(*BOUNDARY):
            t, c = c.take()
            tokens.append(t)
        return self.factory(dom.ErrorExpr, tokens), c

    ## music
    def parse_pitch(self, cursor):
        """Parse a pitch, the cursor is at an accidental or a note letter."""
        origin = []
        c = cursor
        if c.check(TT.ACCIDENTAL):
            t, c = c.take()
            origin.append(t)
        if not c.check(TT.NOTE_LETTER):
            return None, cursor
        t, c = c.take()
        origin.append(t)
        for kind in (TT.NO_STEM, TT.OCTAVE):
            if c.check(kind):
                t, c = c.take()
                origin.append(t)
        return self.factory(dom.Pitch, origin), c

    def parse_rhythm(self, cursor):
        """Parse an optional rhythm, return (None, cursor) if there is none."""
        origin = []
        for kind in (TT.RHY_NUMER, TT.RHY_SEP, TT.RHY_DENOM, TT.RHY_BRKN):
            if cursor.check(kind):
                t, cursor = cursor.take()
                origin.append(t)
        if origin:
            return self.factory(dom.Rhythm, origin), cursor
        return None, cursor

    def parse_note(self, cursor):
        """Parse a note with an optional leading tie, rhythm and tie."""
        start = cursor
        origin = []
        if cursor.check(TT.TIE):
            t, cursor = cursor.take()
            origin.append(t)
        pitch, cursor = self.parse_pitch(cursor)
        if pitch is None:
            return self.recover(start, "Expected a note letter")
        rhythm, cursor = self.parse_rhythm(cursor)
        if cursor.check(TT.TIE):
            t, cursor = cursor.take()
            origin.append(t)
        children = [pitch, rhythm] if rhythm else [pitch]
        return self.factory(dom.Note, origin, *children), cursor

    def parse_rest(self, cursor):
        """Parse a rest or a multi-measure rest."""
        t, c = cursor.take()
        rhythm, c = self.parse_rhythm(c)
        children = [rhythm] if rhythm else []
        if t.lexeme in "ZX":
            if rhythm and (rhythm.separator or rhythm.denominator or rhythm.broken):
                self.context.error("Multi-measure rest should only have a numerator for length", t)
            return self.factory(dom.MultiMeasureRest, (t,), *children), c
        return self.factory(dom.Rest, (t,), *children), c

    def parse_chord(self, cursor):
        """Parse a chord, the cursor is at the ``[``."""
        t, c = cursor.take()
        origin = [t]
        children = []
        while True:
            if c.check(*NOTE_START):
                node, c = self.parse_note(c)
            elif c.check(TT.ANNOTATION, TT.WS):
                t, c = c.take()
                node = self.factory(SIMPLE[t.kind], (t,))
            elif c.check(TT.CHRD_RIGHT_BRKT):
                t, c = c.take()
                origin.append(t)
                break
            else:
                return self.recover(cursor, "Unterminated chord - expected ']'")
            children.append(node)
        if not any(isinstance(n, (dom.Note, dom.Annotation)) for n in children):
            self.context.error("Expected note or annotation in chord", cursor.peek())
        rhythm, c = self.parse_rhythm(c)
        if rhythm:
            children.append(rhythm)
        if c.check(TT.TIE):
            t, c = c.take()
            origin.append(t)
        return self.factory(dom.Chord, origin, *children), c

    def parse_grace_group(self, cursor):
        """Parse a grace group, the cursor is at the ``{``."""
        t, c = cursor.take()
        origin = [t]
        children = []
        if c.check(TT.GRC_GRP_SLSH):
            t, c = c.take()
            origin.append(t)
        while True:
            if c.check(*NOTE_START):
                node, c = self.parse_note(c)
            elif c.check(TT.WS):
                t, c = c.take()
                node = self.factory(dom.Whitespace, (t,))
            elif c.check(TT.GRC_GRP_RGHT_BRACE):
                t, c = c.take()
                origin.append(t)
                break
            else:
                return self.recover(cursor, "Unterminated grace group - expected '}'")
            children.append(node)
        if not any(isinstance(n, dom.Note) for n in children):
            self.context.error("Expected grace note", cursor.peek())
        return self.factory(dom.GraceGroup, origin, *children), c

    def parse_tuplet(self, cursor):
        """Parse a tuplet ``(p``, ``(p:q`` or ``(p:q:r``."""
        t, c = cursor.take()
        origin = [t]
        if not c.check(TT.TUPLET_P):
            return self.recover(cursor, "Expected number after tuplet opening")
        values = {}
        for kind, name in ((TT.TUPLET_P, 'p'), (TT.TUPLET_COLON, None), (TT.TUPLET_Q, 'q'),
                           (TT.TUPLET_COLON, None), (TT.TUPLET_R, 'r')):
            if c.check(kind):
                t, c = c.take()
                origin.append(t)
                if name:
                    values[name] = int(t.lexeme)
        return self.factory(dom.Tuplet, origin, **values), c

    def parse_barline(self, cursor):
        """Parse a bar line with optional repeat ending numbers."""
        t, c = cursor.take()
        origin = [t]
        while c.check(TT.REPEAT_NUMBER, TT.REPEAT_COMMA, TT.REPEAT_DASH, TT.REPEAT_X):
            t, c = c.take()
            origin.append(t)
        return self.factory(dom.BarLine, origin), c

    def parse_inline_field(self, cursor):
        """Parse an inline field like ``[K:G]``."""
        t, c = cursor.take()
        origin = [t]
        if not c.check(TT.INF_HDR):
            return self.recover(cursor, "Unterminated inline field - expected ']'")
        t, c = c.take()
        origin.append(t)
        tokens, values, children, c = self.parse_values(c, LINE_END | {TT.INLN_FLD_RGT_BRKT})
        origin.extend(tokens)
        if not c.check(TT.INLN_FLD_RGT_BRKT):
            return self.recover(cursor, "Unterminated inline field - expected ']'")
        t, c = c.take()
        origin.append(t)
        return self.factory(dom.InlineField, origin, *children, values=values), c

    ## info lines and directives
    def parse_info_line(self, cursor):
        """Parse an info line, the cursor is at the header token."""
        t, c = cursor.take()
        tokens, values, children, c = self.parse_values(c, LINE_END)
        return self.factory(dom.InfoLine, [t] + tokens, *children, values=values), c

    def parse_directive(self, cursor):
        """Parse a directive, the cursor is at the ``%%``."""
        t, c = cursor.take()
        origin = [t]
        if c.check(TT.IDENTIFIER):
            t, c = c.take()
            origin.append(t)
        else:
            self.context.error("Expected directive name", t)
        tokens, values, children, c = self.parse_values(c, LINE_END)
        origin.extend(tokens)
        return self.factory(dom.Directive, origin, *children, values=values), c

    def parse_values(self, cursor, until):
        """Parse values up to a token with one of the kinds in ``until``.

        Returns a tuple (tokens, values, children, cursor). The tokens are the
        loose tokens (that become part of the origin of the line), the values
        are tokens and nodes in order, and the children are the nodes.

        """
        tokens, values, children = [], [], []
        c = cursor
        while not c.check(*until):
            if c.check(*NOT_A_VALUE):
                t, c = c.take()
                tokens.append(t)
                continue
            value, c = self.parse_item(c, until)
            values.append(value)
            if isinstance(value, Token):
                tokens.append(value)
            else:
                children.append(value)
        return tokens, tuple(values), children, c

    def parse_item(self, cursor, until):
        """Parse a value or a KV pair."""
        key, c = self.parse_value(cursor)
        if isinstance(key, dom.Rational) or (isinstance(key, Token) and key.kind in KEY):
            ws1, c1 = c.skip(TT.WS)
            if c1.check(TT.EQL):
                eql, c1 = c1.take()
                ws2, c1 = c1.skip(TT.WS)
                sign = None
                if c1.check(TT.MINUS, TT.PLUS):
                    sign, c1 = c1.take()
                if not c1.check(*until) and not c1.check(*NOT_A_VALUE):
                    value, c1 = self.parse_value(c1)
                    origin = [n for n in (key, *ws1, eql, *ws2, sign, value)
                              if isinstance(n, Token)]
                    children = [n for n in (key, value) if isinstance(n, dom.Expr)]
                    return self.factory(dom.KV, origin, *children,
                                        key=key, value=value, sign=sign), c1
        return key, c

    def parse_value(self, cursor):
        """Parse a Rational, Measurement, Pitch or a single token."""
        t = cursor.peek()
        if t.kind is TT.NUMBER:
            if cursor.peek(1).kind is TT.SLASH and cursor.peek(2).kind is TT.NUMBER:
                return self.factory(dom.Rational, cursor.tokens[cursor.index:cursor.index+3]), cursor.advance(3)
            elif cursor.peek(1).kind is TT.MEASUREMENT_UNIT:
                return self.factory(dom.Measurement, cursor.tokens[cursor.index:cursor.index+2]), cursor.advance(2)
        elif t.kind is TT.NOTE_LETTER or (t.kind is TT.ACCIDENTAL and cursor.peek(1).kind is TT.NOTE_LETTER):
            return self.parse_pitch(cursor)
        return cursor.take()

    ## beams and systems
    def beams(self, items):
        """Group runs of notes, chords and rests in Beam nodes.

        A run starts at a beamable element and ends at the last beamable
        element before something that is not beamable nor attachable. Runs
        with only one beamable element are not wrapped.

        """
        result = []
        i = 0
        while i < len(items):
            if isinstance(items[i], dom.BEAMABLE):
                last = i
                count = 0
                for j in range(i, len(items)):
                    if isinstance(items[j], dom.BEAMABLE):
                        last = j
                        count += 1
                    elif not isinstance(items[j], dom.ATTACHABLE):
                        break
                if count > 1:
                    result.append(self.factory(dom.Beam, (), *items[i:last+1]))
                    i = last + 1
                    continue
            result.append(items[i])
            i += 1
        return result

    def systems(self, items):
        """Divide the items in System nodes.

        Without voices, every line with music is a system, unless it ends with
        a line continuation. With voices, a new system starts when a voice
        appears that was already present in the current system. Lines without
        music join the next system, or the last one at the end.

        """
        has_voices = any(self.voice_id(n) is not None for n in items)
        systems = []
        current = []
        voices = set()
        music = continued = False

        def close():
            nonlocal current, music
            systems.append(self.factory(dom.System, (), *current))
            current = []
            music = False

        for node in items:
            if has_voices:
                voice = self.voice_id(node)
                if voice is not None:
                    if voice in voices and music:
                        close()
                        voices = set()
                    voices.add(voice)
            current.append(node)
            if not isinstance(node, dom.NON_MUSIC):
                music = True
                continued = isinstance(node, dom.LineContinuation)
            if isinstance(node, dom.Newline) and not has_voices:
                if music and not continued:
                    close()
                continued = False
        if current:
            if music or not systems:
                close()
            else:
                systems[-1].extend(current)
        return systems

    @staticmethod
    def voice_id(node):
        """Return the voice id if the node is a ``V:`` line or field, else None."""
        if isinstance(node, dom.InfoLine) and node.letter == "V" and node.values:
            v = node.values[0]
            return v.lexeme if isinstance(v, Token) else v.write()
