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
Handlers for the font directives, like ``%%titlefont`` and ``%%setfont-1``.

A font is written in one of three formats:

1. ``* <size> [box]``: keep the current face, change the size;
2. ``<size> [box]``: the same;
3. ``<face> [utf8] [size] [bold|italic|underline...] [box]``: a full definition.

The result data is a dict with ``weight``, ``style`` and ``decoration`` (only
for the full definition), and ``face``, ``size`` and ``box`` if set.

"""

from ..tokens import TT
from .constants import FONT_MODIFIERS, UTF8_MARKERS
from .util import SemanticResult, is_token, number, unquote


def font(context, directive, box=True):
    """Handle a font directive; ``box`` tells whether the box keyword is allowed."""
    values = directive.values
    if not values:
        context.error('Directive "{}" requires font parameters'.format(directive.name), directive)
        return None
    first = values[0]
    if is_token(first, TT.ASTERISK):
        if len(values) == 1:
            context.error("Expected font size number after *", directive)
            return None
        data = size_only(context, directive, values[1:], box)
    elif is_token(first, TT.NUMBER) and not (len(values) > 1
            and is_token(values[1], TT.IDENTIFIER) and values[1].lexeme.lower() in FONT_MODIFIERS):
        data = size_only(context, directive, values, box)
    else:
        data = full_font(context, directive, values, box)
    if data is not None:
        return SemanticResult(directive.name.lower(), data)


def size_only(context, directive, values, box):
    """Parse ``<size> [box]``, return the data dict or None."""
    size = values[0]
    if not is_token(size, TT.NUMBER):
        context.error("Expected number for font size", directive)
        return None
    data = {'size': number(size.lexeme)}
    if len(values) > 1:
        t = values[1]
        if is_token(t, TT.IDENTIFIER) and t.lexeme.lower() == "box":
            if box:
                data['box'] = True
            else:
                _no_box(context, directive)
        if len(values) > 2:
            context.warning("Extra parameters in font definition", directive)
    return data


def _no_box(context, directive):
    context.warning('Font type "{}" does not support "box" parameter'.format(directive.name), directive)


def _is_face(token, hyphen_last):
    """Return True if the token belongs to the face name."""
    word = token.lexeme.lower()
    return hyphen_last or (word not in UTF8_MARKERS and token.kind is not TT.NUMBER
                           and word not in FONT_MODIFIERS and word != "box")


def full_font(context, directive, values, box):
    """Parse a full font definition, return the data dict or None."""
    face = []
    size = None
    weight = style = "normal"
    decoration = "none"
    has_box = False

    tokens = []
    for v in values:
        if is_token(v):
            tokens.append(v)
        else:
            context.warning("Unexpected non-token value in font directive", directive)

    i = 0
    # face, hyphens join words
    hyphen_last = False
    while i < len(tokens) and _is_face(tokens[i], hyphen_last):
        t = tokens[i]
        if face and t.lexeme == "-":
            hyphen_last = True
            face[-1] += t.lexeme
        elif hyphen_last:
            hyphen_last = False
            face[-1] += t.lexeme
        else:
            face.append(t.lexeme)
        i += 1
    if i < len(tokens) and tokens[i].lexeme.lower() in UTF8_MARKERS:
        i += 1
    # size
    if i < len(tokens) and tokens[i].kind is TT.NUMBER:
        size = number(tokens[i].lexeme)
        i += 1
    # modifiers
    while i < len(tokens) and tokens[i].lexeme.lower() in FONT_MODIFIERS:
        word = tokens[i].lexeme.lower()
        if word == "bold":
            weight = "bold"
        elif word == "italic":
            style = "italic"
        else:
            decoration = "underline"
        i += 1
    if i < len(tokens) and tokens[i].lexeme.lower() == "box":
        if box:
            has_box = True
        else:
            _no_box(context, directive)
        i += 1
    if i < len(tokens):
        context.warning("Extra tokens", directive)

    data = {'weight': weight, 'style': style, 'decoration': decoration}
    face = unquote(" ".join(face))
    if face:
        data['face'] = face
    if size is not None:
        data['size'] = size
    if has_box:
        data['box'] = True
    if not (face or size or has_box) and weight == style == "normal" and decoration == "none":
        context.error("Font directive has no meaningful parameters", directive)
        return None
    return data


def setfont(context, directive, slot):
    """Handle ``%%setfont-N``, with N the ``slot`` (1..9)."""
    if not directive.values:
        context.error('Directive "{}" requires font parameters'.format(directive.name), directive)
        return None
    data = full_font(context, directive, directive.values, False)
    if data is not None:
        return SemanticResult("setfont", {'number': slot, 'font': data})
