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
All node types of the ABC syntax tree.

The tree of a document looks like this::

    FileStructure
     ├╴FileHeader               lines before the first tune
     ├╴Tune
     │  ├╴TuneHeader            X: ... K:
     │  ╰╴TuneBody
     │     ├╴System
     │     │  ├╴Beam
     │     │  │  ├╴Note
     │     │  │  │  ├╴Pitch
     │     │  │  │  ╰╴Rhythm
     │     │  │  ╰╴...
     │     │  ├╴Whitespace
     │     │  ├╴BarLine
     │     │  ╰╴...
     │     ╰╴System
     ╰╴SectionBreak             text between tunes

Directives (``%%name ...``) and info lines (``T:...``) may appear at all
levels. Their values are in the ``values`` attribute, a tuple of tokens and
value nodes (:class:`KV`, :class:`Rational`, :class:`Measurement` and
:class:`Pitch`).

"""

from .. import duration
from ..tokens import TT
from .element import Expr


## containers

class FileStructure(Expr):
    """The root node of a document; its origin is the EOF token."""

    @property
    def tunes(self):
        """The list of tunes."""
        return list(self / Tune)


class FileHeader(Expr):
    """The lines before the first tune."""


class Tune(Expr):
    """A tune, with a header and, if the header had a ``K:`` line, a body."""

    @property
    def header(self):
        """The TuneHeader."""
        for n in self / TuneHeader:
            return n

    @property
    def body(self):
        """The TuneBody, or None."""
        for n in self / TuneBody:
            return n


class TuneHeader(Expr):
    """The lines from ``X:`` up to and including the ``K:`` line."""


class TuneBody(Expr):
    """The music of a tune, divided in systems."""

    @property
    def systems(self):
        """The list of systems."""
        return list(self / System)


class System(Expr):
    """One line of music, or a group of lines for all voices."""


class Beam(Expr):
    """Notes, chords and rests written without whitespace between them."""


## inert text

class Whitespace(Expr):
    """Horizontal whitespace."""


class Newline(Expr):
    """A line ending."""


class SectionBreak(Expr):
    """One or more blank lines, ending a tune."""


class Comment(Expr):
    """A ``%`` comment."""


class FreeText(Expr):
    """Text outside tunes, or the text of a text directive."""


class ErrorExpr(Expr):
    """Tokens that could not be parsed."""


## music

class Pitch(Expr):
    """An optional accidental, a note letter and an optional octave mark."""

    @property
    def accidental(self):
        """The accidental (``^``, ``^^``, ``_``, ``__``, ``=``) or None."""
        t = self.token(TT.ACCIDENTAL)
        return t.lexeme if t else None

    @property
    def letter(self):
        """The note letter, as written."""
        t = self.token(TT.NOTE_LETTER)
        return t.lexeme if t else None

    @property
    def octave(self):
        """The octave marks (``'`` and ``,``), empty if none."""
        t = self.token(TT.OCTAVE)
        return t.lexeme if t else ""

    @property
    def no_stem(self):
        """True if the note has a ``0`` no-stem marker."""
        return self.token(TT.NO_STEM) is not None

    def octave_number(self):
        """Return the octave: 0 for ``C``..``B``, 1 for ``c``..``b``, etc."""
        o = 1 if self.letter.islower() else 0
        return o + self.octave.count("'") - self.octave.count(",")


class Rhythm(Expr):
    """The length of a note, rest or chord, and a broken rhythm marker."""

    def _lexeme(self, kind):
        t = self.token(kind)
        return t.lexeme if t else None

    @property
    def numerator(self):
        return self._lexeme(TT.RHY_NUMER)

    @property
    def separator(self):
        return self._lexeme(TT.RHY_SEP)

    @property
    def denominator(self):
        return self._lexeme(TT.RHY_DENOM)

    @property
    def broken(self):
        """The broken rhythm marker (``>``, ``<<``, ...) or None."""
        return self._lexeme(TT.RHY_BRKN)

    def multiplier(self):
        """Return the length as a Fraction of the unit note length."""
        return duration.rhythm(self.numerator, self.separator, self.denominator)


class _Rhythmic(Expr):
    """Mixin for elements that can have a Rhythm child."""

    @property
    def rhythm(self):
        """The Rhythm child, or None."""
        for n in self / Rhythm:
            return n

    def multiplier(self):
        """Return the written length, a Fraction of the unit note length."""
        r = self.rhythm
        return r.multiplier() if r else duration.rhythm()


class Note(_Rhythmic):
    """A note: a Pitch child and an optional Rhythm child.

    The tie tokens belong to the note itself.

    """
    @property
    def pitch(self):
        """The Pitch child."""
        for n in self / Pitch:
            return n

    @property
    def tie(self):
        """The tie token after the note, or None."""
        first = self.pitch.origin[0].id
        for t in self.own(TT.TIE):
            if t.id > first:
                return t

    @property
    def leading_tie(self):
        """The tie token before the note, or None."""
        first = self.pitch.origin[0].id
        for t in self.own(TT.TIE):
            if t.id < first:
                return t


class Rest(_Rhythmic):
    """A rest, ``z`` or the invisible ``x``."""

    @property
    def invisible(self):
        return self.origin[0].lexeme in 'xX'


class MultiMeasureRest(_Rhythmic):
    """A multi-measure rest, ``Z`` or ``X``."""

    @property
    def measures(self):
        """The number of measures."""
        r = self.rhythm
        return int(r.numerator) if r and r.numerator else 1


class Chord(_Rhythmic):
    """Notes between ``[`` and ``]``; the rhythm after ``]`` is the Rhythm child."""

    @property
    def notes(self):
        return list(self / Note)

    @property
    def tie(self):
        """The tie token after the chord, or None."""
        return self.token(TT.TIE)


class BarLine(Expr):
    """A bar line, with optional repeat ending numbers."""

    @property
    def bar(self):
        """The bar line text."""
        return self.origin[0].lexeme

    @property
    def endings(self):
        """The list of repeat ending numbers, ranges expanded.

        For example ``|1,3-5`` gives ``[1, 3, 4, 5]``.

        """
        numbers = []
        dash = False
        for t in self.origin[1:]:
            if t.kind is TT.REPEAT_NUMBER:
                n = int(t.lexeme)
                if dash and numbers:
                    numbers.extend(range(numbers[-1] + 1, n + 1))
                else:
                    numbers.append(n)
                dash = False
            elif t.kind is TT.REPEAT_DASH:
                dash = True
        return numbers


class GraceGroup(Expr):
    """Grace notes between ``{`` and ``}``."""

    @property
    def acciaccatura(self):
        """True if the group starts with a slash."""
        return self.token(TT.GRC_GRP_SLSH) is not None

    @property
    def notes(self):
        return list(self / Note)


class Tuplet(Expr):
    """A tuplet: put ``p`` notes into the time of ``q`` for the next ``r`` notes.

    ``q`` and ``r`` are None if not written.

    """
    __slots__ = ('p', 'q', 'r')
    _defaults = {'p': None, 'q': None, 'r': None}


class Annotation(Expr):
    """A quoted string: a chord symbol or annotation."""

    @property
    def text(self):
        """The text without the quotes."""
        return self.origin[0].lexeme[1:-1]


class Decoration(Expr):
    """Decoration characters like ``~`` or ``.`` before a note."""


class Symbol(Expr):
    """A ``!symbol!`` or ``+symbol+`` decoration."""

    @property
    def name(self):
        return self.origin[0].lexeme[1:-1]


class Slur(Expr):
    """A slur start or end, or a dotted slur start."""


class Tie(Expr):
    """A tie that is not attached to a note."""


class YSpacer(_Rhythmic):
    """The ``y`` spacer."""


class BacktickSpace(Expr):
    """A back-tick, separating beamed notes for readability."""


class VoiceOverlay(Expr):
    """The ``&`` voice overlay operator."""


class LineContinuation(Expr):
    """A backslash at the end of a line."""


class SystemBreak(Expr):
    """The ``$`` forced system break."""


class EscapedChar(Expr):
    """A backslash-escaped character."""


class ReservedChar(Expr):
    """A character reserved for future use."""


## info lines, directives and their values

class Rational(Expr):
    """A fraction written as ``NUMBER/NUMBER``."""

    @property
    def numerator(self):
        return int(float(self.origin[0].lexeme))

    @property
    def denominator(self):
        return int(float(self.origin[-1].lexeme))


class Measurement(Expr):
    """A number with a unit, like ``1.5cm``."""

    @property
    def value(self):
        text = self.origin[0].lexeme
        return float(text) if '.' in text else int(text)

    @property
    def unit(self):
        return self.origin[-1].lexeme


class KV(Expr):
    """A ``key=value`` pair.

    The ``key`` and ``value`` attributes are tokens or value nodes; the
    ``sign`` is a ``+`` or ``-`` token before the value, or None.

    """
    __slots__ = ('key', 'value', 'sign')
    _defaults = {'key': None, 'value': None, 'sign': None}

    def key_text(self):
        """Return the text of the key, lower case for identifiers."""
        if isinstance(self.key, Expr):
            return self.key.write()
        return self.key.lexeme.lower()

    def value_text(self):
        """Return the text of the value, including the sign."""
        text = self.value.write() if isinstance(self.value, Expr) else self.value.lexeme
        if self.sign:
            text = self.sign.lexeme + text
        return text


class InfoLine(Expr):
    """A ``Letter:`` header line.

    ``values`` is the tuple of value tokens and nodes after the header,
    whitespace and comments excluded.

    """
    __slots__ = ('values',)
    _defaults = {'values': ()}

    @property
    def header(self):
        """The header token, like ``K:``."""
        return self.token(TT.INF_HDR)

    @property
    def letter(self):
        """The header letter."""
        return self.header.lexeme[0]


class InlineField(InfoLine):
    """An info field in music, like ``[K:G]``."""


class Directive(Expr):
    """A ``%%`` stylesheet directive.

    ``values`` is the tuple of argument tokens and nodes after the name,
    whitespace and comments excluded.

    """
    __slots__ = ('values',)
    _defaults = {'values': ()}

    @property
    def key(self):
        """The name token."""
        return self.token(TT.IDENTIFIER)

    @property
    def name(self):
        """The directive name, as written."""
        return self.key.lexeme


#: Elements that can be grouped in a Beam.
BEAMABLE = (Note, Chord, Rest)

#: Elements that stay in a Beam when they are between beamable elements.
ATTACHABLE = (GraceGroup, Decoration, Annotation, Symbol, Slur, Tie, YSpacer, Tuplet)

#: Elements that are not music, for the division in systems.
NON_MUSIC = (Whitespace, Newline, Comment, Directive, InfoLine)


def durations(nodes):
    """Yield (node, Fraction) tuples for the notes, chords and rests in nodes.

    Beams are entered. The length is the written multiplier of the unit note
    length, adjusted for broken rhythm markers. A broken rhythm marker that
    is the last thing before a bar line has no effect.

    """
    pending = None
    for node in nodes:
        if isinstance(node, Beam):
            for n in node:
                if isinstance(n, BEAMABLE):
                    pending = yield from _broken(n, pending)
        elif isinstance(node, BEAMABLE):
            pending = yield from _broken(node, pending)
        elif isinstance(node, BarLine):
            pending = None


def _broken(node, pending):
    """Yield (node, length) and return the factor for the next note."""
    length = node.multiplier()
    if pending is not None:
        length *= pending
        pending = None
    r = node.rhythm
    if r and r.broken:
        first, pending = duration.broken(r.broken)
        length *= first
    yield node, length
    return pending
