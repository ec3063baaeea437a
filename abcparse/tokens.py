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
The token kinds and the immutable :class:`Token` the scanner emits.

A Token has a :class:`TT` kind, the exact source text (lexeme), a unique id
and its position: the 0-based line and the 0-based offset in that line.

"""

import collections
import enum


#: A position in the source text.
Location = collections.namedtuple("Location", "line offset")
Location.line.__doc__ = "The line number (0-based)."
Location.offset.__doc__ = "The offset in the line (0-based)."


class TT(enum.Enum):
    """All token kinds."""
    # structure
    WS = "whitespace"
    EOL = "end of line"
    EOF = "end of file"
    COMMENT = "comment"
    SCT_BRK = "section break"
    INVALID = "invalid"
    FREE_TXT = "free text"
    INFO_STR = "info string"
    INF_HDR = "info line header"
    STYLESHEET_DIRECTIVE = "stylesheet directive"

    # notes, rests and rhythm
    ACCIDENTAL = "accidental"
    NOTE_LETTER = "note letter"
    NO_STEM = "no stem"
    OCTAVE = "octave"
    REST = "rest"
    RHY_NUMER = "rhythm numerator"
    RHY_SEP = "rhythm separator"
    RHY_DENOM = "rhythm denominator"
    RHY_BRKN = "broken rhythm"
    TIE = "tie"

    # bars and repeats
    BARLINE = "barline"
    REPEAT_NUMBER = "repeat number"
    REPEAT_COMMA = "repeat comma"
    REPEAT_DASH = "repeat dash"
    REPEAT_X = "repeat x"

    # chords and grace notes
    CHRD_LEFT_BRKT = "chord left bracket"
    CHRD_RIGHT_BRKT = "chord right bracket"
    GRC_GRP_LEFT_BRACE = "grace group left brace"
    GRC_GRP_RGHT_BRACE = "grace group right brace"
    GRC_GRP_SLSH = "grace group slash"

    # tuplets
    TUPLET_LPAREN = "tuplet left parenthesis"
    TUPLET_P = "tuplet p"
    TUPLET_COLON = "tuplet colon"
    TUPLET_Q = "tuplet q"
    TUPLET_R = "tuplet r"

    # other music code
    SLUR = "slur"
    DOTTED_SLUR = "dotted slur"
    DECORATION = "decoration"
    SYMBOL = "symbol"
    ANNOTATION = "annotation"
    INLN_FLD_LFT_BRKT = "inline field left bracket"
    INLN_FLD_RGT_BRKT = "inline field right bracket"
    VOICE_OVRLAY = "voice overlay"
    Y_SPC = "y spacer"
    BCKTCK_SPC = "backtick spacer"
    SYSTEM_BREAK = "system break"
    LINE_CONT = "line continuation"
    ESCAPED_CHAR = "escaped character"
    RESERVED_CHAR = "reserved character"

    # values in info lines and directives
    IDENTIFIER = "identifier"
    NUMBER = "number"
    EQL = "equals sign"
    SLASH = "slash"
    MINUS = "minus"
    PLUS = "plus"
    LPAREN = "left parenthesis"
    RPAREN = "right parenthesis"
    LBRACE = "left brace"
    RBRACE = "right brace"
    LBRACKET = "left bracket"
    RBRACKET = "right bracket"
    PIPE = "pipe"
    ASTERISK = "asterisk"
    KEY_SIGNATURE = "key signature"
    SPECIAL_LITERAL = "special literal"
    MEASUREMENT_UNIT = "measurement unit"


#: Token kinds that carry no musical meaning.
INERT = frozenset((TT.WS, TT.EOL, TT.COMMENT))


class Token(collections.namedtuple("Token", "kind lexeme id line offset")):
    """An immutable lexical token.

    ``kind`` is a :class:`TT` member, ``lexeme`` the exact text from the
    source, ``id`` the unique id handed out by the
    :class:`~abcparse.context.Context`, and ``line`` and ``offset`` the
    position of the first character.

    """
    __slots__ = ()

    def __repr__(self):
        return "<Token {} {!r} @{}:{}>".format(self.kind.name, self.lexeme, self.line, self.offset)

    @property
    def location(self):
        """The :class:`Location` of this token."""
        return Location(self.line, self.offset)

    @property
    def end(self):
        """The offset just after this token, on its last line."""
        if '\n' in self.lexeme:
            return len(self.lexeme) - self.lexeme.rindex('\n') - 1
        return self.offset + len(self.lexeme)

    def is_inert(self):
        """Return True for whitespace, line ends and comments."""
        return self.kind in INERT
