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
ABC language definition.

The ``root`` lexicon handles the file header and the text between tunes. An
``X:`` line starts a tune and switches to the ``tune_header`` lexicon; a
``K:`` line ends the header and switches to the ``tune_body`` lexicon, that
stays active until a blank line (a section break), a new ``X:`` line or the
end of the document.

Every header letter selects its own lexicon for the rest of the line, and so
do ``%%`` stylesheet directives.

All actions are named in this module, the :mod:`abcparse.scanner` maps them to
the :class:`~abcparse.tokens.TT` token kinds.

"""

import re

from parce import Language, lexicon, default_action, default_target
from parce.rule import bygroup
import parce.action as a


# structure
Whitespace = a.Whitespace
Newline = a.Whitespace.Newline
SectionBreak = a.Whitespace.SectionBreak
Comment = a.Comment
Invalid = a.Invalid
UnterminatedString = a.Invalid.String
FreeText = a.Text
InfoString = a.Text.Info
InfoHeader = a.Keyword.Field
DirectiveStart = a.Keyword.Directive
DirectiveName = a.Name.Directive

# notes, rests and rhythm
Accidental = a.Text.Music.Pitch.Accidental
NoteLetter = a.Text.Music.Pitch
NoStem = a.Text.Music.Pitch.NoStem
Octave = a.Text.Music.Pitch.Octave
Rest = a.Text.Music.Rest
RhythmNumerator = a.Number.Duration.Numerator
RhythmSeparator = a.Number.Duration.Separator
RhythmDenominator = a.Number.Duration.Denominator
BrokenRhythm = a.Number.Duration.Broken
Tie = a.Text.Music.Tie

# bars and repeats
Barline = a.Delimiter.Separator.Bar
RepeatNumber = a.Number.Repeat
RepeatComma = a.Delimiter.Repeat.Comma
RepeatDash = a.Delimiter.Repeat.Dash
RepeatX = a.Delimiter.Repeat.Times

# chords, grace notes and tuplets
ChordStart = a.Delimiter.Bracket.Chord.Start
ChordEnd = a.Delimiter.Bracket.Chord.End
GraceStart = a.Delimiter.Brace.Grace.Start
GraceEnd = a.Delimiter.Brace.Grace.End
GraceSlash = a.Delimiter.Grace.Slash
TupletStart = a.Delimiter.Tuplet.Start
TupletP = a.Number.Tuplet.P
TupletColon = a.Delimiter.Tuplet.Colon
TupletQ = a.Number.Tuplet.Q
TupletR = a.Number.Tuplet.R

# other music code
Slur = a.Delimiter.Slur
DottedSlur = a.Delimiter.Slur.Dotted
Decoration = a.Name.Decoration
Symbol = a.Name.Symbol
Annotation = a.String
InlineFieldStart = a.Delimiter.Bracket.Field.Start
InlineFieldEnd = a.Delimiter.Bracket.Field.End
VoiceOverlay = a.Delimiter.VoiceOverlay
YSpacer = a.Text.Music.Spacer
Backtick = a.Text.Music.Spacer.Backtick
SystemBreak = a.Delimiter.SystemBreak
LineContinuation = a.Escape.LineContinuation
EscapedChar = a.Escape
ReservedChar = a.Character.Reserved

# values in info lines and directives
Identifier = a.Name
Number = a.Number
Equals = a.Operator.Assignment
Slash = a.Operator.Slash
Minus = a.Operator.Minus
Plus = a.Operator.Plus
ParenOpen = a.Delimiter.Parenthesis.Start
ParenClose = a.Delimiter.Parenthesis.End
BraceOpen = a.Delimiter.Brace.Start
BraceClose = a.Delimiter.Brace.End
BracketOpen = a.Delimiter.Bracket.Start
BracketClose = a.Delimiter.Bracket.End
Pipe = a.Delimiter.Pipe
Asterisk = a.Operator.Asterisk
KeySignature = a.Literal.KeySignature
SpecialLiteral = a.Literal.Special
Unit = a.Name.Unit


SECTION_BREAK = r'\r?\n(?:[ \t]*\r?\n)+'
NEWLINE = r'\r?\n'
STRING = r'"(?:\\.|[^"\\\r\n])*"'
UNTERMINATED_STRING = r'"(?:\\.|[^"\\\r\n])*'
COMMENT = r'%[^\r\n]*'

KEY_SIGNATURE = (
    r"(?:[\^_=]?[A-Ga-g][#b]?"
    r"(?i:maj(?:or)?|min(?:or)?|mix(?:olydian)?|m|dor(?:ian)?|phr(?:ygian)?"
    r"|lyd(?:ian)?|loc(?:rian)?|ion(?:ian)?|aeo(?:lian)?)?"
    r"|HP|Hp|(?i:none))(?=[=\s%\]|]|$)")

NOTE = r"(\^\^|__|[\^_=])?([A-Ga-g])(0?)([,']*)(\d*)(/*)(\d*)(<+|>+)?(-?)"
NOTE_ACTIONS = (Accidental, NoteLetter, NoStem, Octave,
    RhythmNumerator, RhythmSeparator, RhythmDenominator, BrokenRhythm, Tie)

BARLINE = r'\[\|\]|:*\[\|:*|:*\|[\]\|]?:*|:{2,}'

IDENTIFIER = r'[a-zA-Z](?:-(?=[a-zA-Z_])|[a-zA-Z0-9_])*(?:[+-]8(?![0-9]))?'


class Abc(Language):
    """ABC music notation."""

    @lexicon(re_flags=re.MULTILINE)
    def root(cls):
        """The file header and the text between tunes."""
        yield SECTION_BREAK, SectionBreak
        yield NEWLINE, Newline
        yield r'^X:', InfoHeader, cls.tune_header, cls.info_values
        yield r'^K:', InfoHeader, cls.key_line
        yield from cls.info_fields()
        yield from cls.directives()
        yield COMMENT, Comment
        yield r'^[ \t]+$', Whitespace
        yield r'[^\r\n]+', FreeText

    @lexicon(re_flags=re.MULTILINE)
    def tune_header(cls):
        """The tune header, from ``X:`` upto and including ``K:``."""
        yield SECTION_BREAK, SectionBreak, -1
        yield NEWLINE, Newline
        yield r'^X:', InfoHeader, cls.info_values
        yield r'^K:', InfoHeader, -1, cls.tune_body, cls.key_line
        yield from cls.info_fields()
        yield from cls.directives()
        yield COMMENT, Comment
        yield r'[ \t]+', Whitespace
        yield r'[^\r\n]+', Invalid

    @lexicon(re_flags=re.MULTILINE)
    def tune_body(cls):
        """Music code."""
        yield SECTION_BREAK, SectionBreak, -1
        yield NEWLINE, Newline
        yield r'^X:', InfoHeader, -1, cls.tune_header, cls.info_values
        yield r'^K:', InfoHeader, cls.key_line
        yield from cls.info_fields()
        yield from cls.directives()
        yield COMMENT, Comment
        yield STRING, Annotation
        yield UNTERMINATED_STRING, UnterminatedString
        yield from cls.inline_fields()
        yield r'\[(?=\d)', Barline, cls.repeat_ending
        yield r'(?:' + BARLINE + r')(?=\d)', Barline, cls.repeat_ending
        yield BARLINE, Barline
        yield r'(\()(\d+)(?:(:)(\d*)(?:(:)(\d*))?)?', \
            bygroup(TupletStart, TupletP, TupletColon, TupletQ, TupletColon, TupletR)
        yield r'\.\(', DottedSlur
        yield r'[()]', Slur
        yield r'[~.HLMOPSTuv]+(?=[\^=_]*[a-gA-GzZxX])', Decoration
        yield r'![^!\r\n]*!', Symbol
        yield r'\+[^+\r\n]*\+', Symbol
        yield r'\{', GraceStart, cls.grace_group
        yield r'\[', ChordStart, cls.chord
        yield NOTE, bygroup(*NOTE_ACTIONS)
        yield r'([zZxX])(\d*)(/*)(\d*)(<+|>+)?', \
            bygroup(Rest, RhythmNumerator, RhythmSeparator, RhythmDenominator, BrokenRhythm)
        yield r'(y)(\d*)(/*)(\d*)', \
            bygroup(YSpacer, RhythmNumerator, RhythmSeparator, RhythmDenominator)
        yield r'-', Tie
        yield r'&', VoiceOverlay
        yield r'`', Backtick
        yield r'\$', SystemBreak
        yield r'\\(?=[ \t]*(?:%[^\r\n]*)?(?:\r?\n|$))', LineContinuation
        yield r'\\[^\r\n]', EscapedChar
        yield r'[#*;?@]', ReservedChar
        yield r'[ \t]+', Whitespace
        yield default_action, Invalid

    @classmethod
    def info_fields(cls):
        """Info lines other than ``X:`` and ``K:``, at the start of a line."""
        yield r'^M:', InfoHeader, cls.meter_line
        yield r'^[LQV]:', InfoHeader, cls.info_values
        yield r'^[A-Za-z+]:', InfoHeader, cls.text_line

    @classmethod
    def directives(cls):
        """Stylesheet directives, at the start of a line."""
        yield r'^(%%)((?i:begintext))\b([\s\S]*?)(?:^(%%)((?i:endtext))\b|\Z)', \
            bygroup(DirectiveStart, DirectiveName, FreeText, DirectiveStart, DirectiveName)
        yield r'^(%%)((?i:text|center))\b([ \t]*)([^\r\n]*)', \
            bygroup(DirectiveStart, DirectiveName, Whitespace, FreeText)
        # a tab right after the name starts an empty left section
        yield r'^(%%)((?i:header|footer))\b( *)([^\r\n]*)', \
            bygroup(DirectiveStart, DirectiveName, Whitespace, FreeText)
        yield r'^(%%)([A-Za-z][\w-]*)', bygroup(DirectiveStart, DirectiveName), cls.directive

    @classmethod
    def inline_fields(cls):
        """Inline fields like ``[K:D]`` in music code."""
        yield r'(\[)(K:)', bygroup(InlineFieldStart, InfoHeader), cls.inline_field, cls.key_line
        yield r'(\[)(M:)', bygroup(InlineFieldStart, InfoHeader), cls.inline_field, cls.meter_line
        yield r'(\[)([LQVX]:)', bygroup(InlineFieldStart, InfoHeader), cls.inline_field, cls.info_values
        yield r'(\[)([A-Za-z+]:)', bygroup(InlineFieldStart, InfoHeader), cls.inline_field, cls.inline_text

    @lexicon
    def inline_field(cls):
        yield r'\]', InlineFieldEnd, -1
        yield default_target, -1

    @lexicon
    def repeat_ending(cls):
        """Numbers of a repeat ending like ``|1,3`` or ``[2-4``."""
        yield r'\d+', RepeatNumber
        yield r',(?=\d)', RepeatComma
        yield r'-(?=\d)', RepeatDash
        yield r'x(?=\d)', RepeatX
        yield default_target, -1

    @lexicon
    def grace_group(cls):
        """Grace notes between ``{`` and ``}``."""
        yield r'(?<=\{)/', GraceSlash
        yield r'\}', GraceEnd, -1
        yield NOTE, bygroup(*NOTE_ACTIONS)
        yield r'[ \t]+', Whitespace
        yield default_target, -1

    @lexicon
    def chord(cls):
        """Notes between ``[`` and ``]``, the closing bracket can have a rhythm."""
        yield r'(\])(\d*)(/*)(\d*)(<+|>+)?(-?)', \
            bygroup(ChordEnd, RhythmNumerator, RhythmSeparator, RhythmDenominator, BrokenRhythm, Tie), -1
        yield NOTE, bygroup(*NOTE_ACTIONS)
        yield STRING, Annotation
        yield r'[ \t]+', Whitespace
        yield default_target, -1

    # -------------- info lines ---------------------
    @classmethod
    def common_values(cls):
        """Values in info lines and inline fields."""
        yield r'[ \t]+', Whitespace
        yield COMMENT, Comment
        yield STRING, Annotation
        yield UNTERMINATED_STRING, UnterminatedString
        yield r"[A-Ga-g][,']+(?![\w])", Identifier
        yield IDENTIFIER, Identifier
        yield r'(?:[1-9][0-9]*|0)(?:\.[0-9]+)?', Number
        yield r'=', Equals
        yield r'-', Minus
        yield r'\+', Plus
        yield r'/', Slash
        yield r'\(', ParenOpen
        yield r'\)', ParenClose
        yield r'[^\s%\]]', Invalid
        yield default_target, -1

    @lexicon(re_flags=re.MULTILINE)
    def info_values(cls):
        """Values of ``L:``, ``Q:``, ``V:`` and ``X:`` fields."""
        yield from cls.common_values()

    @lexicon(re_flags=re.MULTILINE)
    def meter_line(cls):
        """Values of the ``M:`` field."""
        yield r'C\|?(?![\w|])', SpecialLiteral
        yield from cls.common_values()

    @lexicon(re_flags=re.MULTILINE)
    def key_line(cls):
        """The ``K:`` field: the key signature first."""
        yield r'[ \t]+', Whitespace
        yield KEY_SIGNATURE, KeySignature, -1, cls.key_modifiers
        yield default_target, -1, cls.key_modifiers

    @lexicon(re_flags=re.MULTILINE)
    def key_modifiers(cls):
        """Mode names, clef and other modifiers after the key signature."""
        yield r"(?:\^\^|__|[\^_=])[A-Ga-g](?![\w])", Identifier
        yield from cls.common_values()

    @lexicon
    def text_line(cls):
        """Info lines with free text, like ``T:`` or ``w:``."""
        yield r'[ \t]+', Whitespace
        yield r'(?:\\.|[^%\\\r\n])+', InfoString
        yield COMMENT, Comment
        yield default_target, -1

    @lexicon
    def inline_text(cls):
        yield r'(?:\\.|[^%\\\r\n\]])+', InfoString
        yield default_target, -1

    # -------------- directives ---------------------
    @lexicon(re_flags=re.MULTILINE)
    def directive(cls):
        """The arguments of a ``%%`` stylesheet directive."""
        yield r'[ \t]+', Whitespace
        yield COMMENT, Comment
        yield r'(-?(?:\d+(?:\.\d*)?|\.\d+))(pt|in|cm|mm)(?![A-Za-z])', bygroup(Number, Unit)
        yield r"(?<![\w-])(\^\^|__|[\^_=])?([A-Ga-g])([,']*)(?=[ \t%]|\r?\n|$)", \
            bygroup(Accidental, NoteLetter, Octave)
        yield r'[\^_](?=[ \t])', Accidental
        yield r'\(', ParenOpen
        yield r'\)', ParenClose
        yield r'\{', BraceOpen
        yield r'\}', BraceClose
        yield r'\[', BracketOpen
        yield r'\]', BracketClose
        yield r'\|', Pipe
        yield r'[A-Za-z][A-Za-z0-9_\-]*', Identifier
        yield STRING, Annotation
        yield UNTERMINATED_STRING, UnterminatedString
        yield r'-?(?:\d+(?:\.\d+)?|\.\d+)', Number
        yield r'=', Equals
        yield r'/', Slash
        yield r'\*', Asterisk
        yield r'-', Minus
        yield r'\+', Plus
        yield r'[^\s%]', Invalid
        yield default_target, -1
