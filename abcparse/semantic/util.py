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
Helper functions for the semantic handlers.

The values of a directive or info line are a mix of tokens and value nodes;
these functions make it easy to test and convert them.

"""

import collections

from ..dom import abc as dom
from ..tokens import Token


#: The result of analyzing a directive or info line.
SemanticResult = collections.namedtuple("SemanticResult", "type data")
SemanticResult.type.__doc__ = "The type name, like 'midi' or 'key'."
SemanticResult.data.__doc__ = "The normalized data: dicts, lists, strings, numbers and booleans."


def is_token(value, *kinds):
    """Return True if value is a Token, with one of the kinds if given."""
    return isinstance(value, Token) and (not kinds or value.kind in kinds)


def number(text):
    """Return the number in text as an int if it is integral, else a float.

        >>> number("12")
        12
        >>> number("0.5")
        0.5
        >>> number("3.0")
        3

    Raises ValueError if the text is not a number.

    """
    f = float(text)
    i = int(f)
    return i if i == f else f


def integer(text):
    """Return the integer value of text, truncating a fractional part."""
    return int(float(text))


def text(value):
    """Return the source text of a token or node."""
    if isinstance(value, Token):
        return value.lexeme
    return value.write()


def unquote(s):
    """Remove matching surrounding double or single quotes."""
    if len(s) >= 2 and s[0] == s[-1] and s[0] in '"\'':
        return s[1:-1]
    return s


def kv_integer(kv):
    """Return the signed integer value of a KV node, or None."""
    if is_token(kv.value):
        try:
            value = integer(kv.value.lexeme)
        except ValueError:
            return None
        if kv.sign and kv.sign.lexeme == '-':
            value = -value
        return value


def kv_number(kv):
    """Return the signed number value of a KV node, or None."""
    if is_token(kv.value):
        try:
            value = number(kv.value.lexeme)
        except ValueError:
            return None
        if kv.sign and kv.sign.lexeme == '-':
            value = -value
        return value

