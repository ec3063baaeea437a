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
Handlers for the info lines and inline fields, like ``K:G`` or ``[M:3/4]``.

The :data:`INFO_LINES` table maps the header letter to a handler, which is
called with the :class:`~abcparse.context.Context` and the
:class:`~abcparse.dom.abc.InfoLine` node::

    >>> from abcparse import parse, analyze
    >>> from abcparse.dom.abc import InfoLine
    >>> tree = parse("X:1\\nT:Speed the Plough\\nM:C|\\nK:G\\n")
    >>> a = analyze(tree)
    >>> [a.analyze(n).type for n in tree.tunes[0].header / InfoLine]
    ['reference_number', 'title', 'meter', 'key']

"""

import functools
import re

from .. import key
from ..dom import abc as dom
from ..tokens import TT
from .constants import CLEFS
from .util import SemanticResult, is_token, kv_integer, kv_number, text, unquote


_key_re = re.compile(r'([\^_=]?)([A-Ga-g])([#b]?)(.*)$')
_explicit_re = re.compile(r'(\^\^|__|[\^_=])([A-Ga-g])$')

_key_acc = {'^': 'sharp', '#': 'sharp', '_': 'flat', 'b': 'flat'}
_explicit_acc = {'^': 'sharp', '^^': 'dblsharp', '_': 'flat', '__': 'dblflat', '=': 'natural'}

#: The special key signature of the highland bagpipe.
HIGHLAND_PIPES = [
    {'note': 'f', 'acc': 'sharp'},
    {'note': 'c', 'acc': 'sharp'},
    {'note': 'g', 'acc': 'natural'},
]


def key_signature(lexeme):
    """Return a dict for a compact key signature token like ``C#m``.

    Returns None if the text is not a valid key signature::

        >>> key_signature("Bbdor")['mode']
        'dorian'

    """
    if lexeme in ("HP", "Hp"):
        accidentals = HIGHLAND_PIPES[:] if lexeme == "Hp" else []
        return {'root': lexeme, 'acc': "", 'mode': "", 'accidentals': accidentals}
    elif lexeme.lower() == "none":
        return {'root': "none", 'acc': "", 'mode': "", 'accidentals': []}
    m = _key_re.match(lexeme)
    if not m:
        return None
    prefix, root, suffix, mode = m.groups()
    mode = key.mode_name(mode) if mode else "major"
    if mode is None:
        return None
    acc = _key_acc.get(prefix or suffix, "")
    return {
        'root': root.upper(),
        'acc': acc,
        'mode': mode,
        'accidentals': key.key_accidentals(root, acc, mode),
    }


def _clef(data):
    """Return the clef dict in data, creating a treble clef if needed."""
    return data.setdefault('clef', {'type': 'treble', 'verticalPos': CLEFS['treble']})


def _set_clef(data, name):
    name = name.lower()
    _clef(data).update(type=name if name in CLEFS else 'treble', verticalPos=CLEFS.get(name, 0))


def key_line(context, line):
    """``K:`` the key signature, with an optional clef and modifiers."""
    values = line.values
    if not values:
        context.error("Key info line requires a key signature", line)
        return None
    first = values[0]
    rest = values[1:]
    if is_token(first, TT.KEY_SIGNATURE):
        sig = key_signature(first.lexeme)
        if sig is None:
            context.error("Invalid key signature: {}".format(first.lexeme), first)
            return None
        # legacy form, the mode written separately: K:^f minor
        if (sig['mode'] == "major" and rest and is_token(rest[0], TT.IDENTIFIER)
                and sig['root'] not in ("HP", "Hp", "none")
                and not _key_re.match(first.lexeme).group(4)
                and key.mode_name(rest[0].lexeme)):
            mode = key.mode_name(rest[0].lexeme)
            sig['mode'] = mode
            sig['accidentals'] = key.key_accidentals(sig['root'], sig['acc'], mode)
            rest = rest[1:]
    else:
        # only modifiers, like K:clef=bass
        sig = key_signature("C")
        rest = values

    data = {'keySignature': sig}
    explicit = []
    exp = False
    for value in rest:
        if isinstance(value, dom.KV):
            key_modifier(context, data, value)
        elif is_token(value, TT.IDENTIFIER):
            word = value.lexeme
            m = _explicit_re.match(word)
            if word.lower() in CLEFS:
                _set_clef(data, word)
            elif m:
                explicit.append({'note': m.group(2).lower(), 'acc': _explicit_acc[m.group(1)]})
            elif word.lower() == "exp":
                exp = True
            else:
                context.warning("Unknown key modifier: {}".format(word), value)
        else:
            context.warning("Unknown key modifier: {}".format(text(value)), value)
    if exp:
        sig['accidentals'] = explicit
    elif explicit:
        notes = [a['note'] for a in explicit]
        sig['accidentals'] = [a for a in sig['accidentals'] if a['note'] not in notes] + explicit
    return SemanticResult("key", data)


def key_modifier(context, data, kv):
    """Handle one ``name=value`` modifier of a K: line."""
    name = kv.key_text()
    if name == "clef":
        _set_clef(data, kv.value_text())
    elif name in ("transpose", "stafflines"):
        value = kv_integer(kv)
        if value is None:
            context.warning("Invalid {} value: {}".format(name, kv.value_text()), kv)
        else:
            _clef(data)[name] = value
    elif name == "staffscale":
        value = kv_number(kv)
        if value is None:
            context.warning("Invalid staffscale value: {}".format(kv.value_text()), kv)
        else:
            _clef(data)[name] = value
    elif name in ("style", "middle", "m"):
        _clef(data)["middle" if name == "m" else name] = kv.value_text()
    else:
        context.warning("Unknown key modifier: {}".format(name), kv)


def _meter_terms(values):
    """Yield (numerator, denominator) tuples from the values of an M: line.

    Raises ValueError if the values do not form a meter.

    """
    i = 0
    while i < len(values):
        v = values[i]
        if isinstance(v, dom.Rational):
            yield v.numerator, v.denominator
            i += 1
        elif is_token(v, TT.LPAREN):
            # (2+3)/8
            total = 0
            i += 1
            while i < len(values) and is_token(values[i], TT.NUMBER):
                total += int(values[i].lexeme)
                i += 1
                if i < len(values) and is_token(values[i], TT.PLUS):
                    i += 1
            if not (i + 2 < len(values) and is_token(values[i], TT.RPAREN)
                    and is_token(values[i+1], TT.SLASH) and is_token(values[i+2], TT.NUMBER)):
                raise ValueError
            yield total, int(values[i+2].lexeme)
            i += 3
        elif is_token(v, TT.NUMBER):
            # 2+3/8
            total = 0
            while i < len(values) and is_token(values[i], TT.NUMBER):
                total += int(values[i].lexeme)
                i += 1
                if not (i < len(values) and is_token(values[i], TT.PLUS)):
                    raise ValueError
                i += 1
            if i < len(values) and isinstance(values[i], dom.Rational):
                yield total + values[i].numerator, values[i].denominator
                i += 1
            else:
                raise ValueError
        else:
            raise ValueError


def meter(context, line):
    """``M:`` the time signature."""
    values = line.values
    if len(values) == 1 and is_token(values[0], TT.SPECIAL_LITERAL):
        if values[0].lexeme == "C":
            return SemanticResult("meter", {'type': 'common_time', 'value': [{'numerator': 4, 'denominator': 4}]})
        return SemanticResult("meter", {'type': 'cut_time', 'value': [{'numerator': 2, 'denominator': 2}]})
    elif len(values) == 1 and is_token(values[0], TT.IDENTIFIER) and values[0].lexeme.lower() == "none":
        return SemanticResult("meter", {'type': 'none'})
    try:
        terms = list(_meter_terms(values))
    except ValueError:
        terms = None
    if not terms:
        context.error("Invalid meter format", line)
        return None
    return SemanticResult("meter", {
        'type': 'specified',
        'value': [{'numerator': n, 'denominator': d} for n, d in terms],
    })


def note_length(context, line):
    """``L:`` the unit note length."""
    values = line.values
    if (len(values) == 1 and isinstance(values[0], dom.Rational)
            and values[0].numerator > 0 and values[0].denominator > 0):
        r = values[0]
        return SemanticResult("note_length", {'numerator': r.numerator, 'denominator': r.denominator})
    context.error("Invalid note length format", line)
    return None


def tempo(context, line):
    """``Q:`` the tempo, like ``Q:"Allegro" 1/4=120``."""
    data = {}
    for value in line.values:
        if is_token(value, TT.ANNOTATION):
            name = 'postString' if ('bpm' in data or 'duration' in data) else 'preString'
            data[name] = unquote(value.lexeme)
        elif isinstance(value, dom.KV) and isinstance(value.key, dom.Rational):
            data['duration'] = [value.key.numerator, value.key.denominator]
            bpm = kv_integer(value)
            if bpm is None:
                context.warning("Invalid tempo: {}".format(value.value_text()), value)
            else:
                data['bpm'] = bpm
        elif is_token(value, TT.NUMBER) and 'bpm' not in data:
            data['bpm'] = int(float(value.lexeme))
        elif isinstance(value, dom.Rational) and 'duration' not in data:
            data['duration'] = [value.numerator, value.denominator]
        else:
            context.warning("Unexpected value in tempo: {}".format(text(value)), value)
    if not data:
        context.error("Tempo info line requires a value", line)
        return None
    return SemanticResult("tempo", data)


#: Aliases of voice properties.
VOICE_ALIASES = {
    'm': 'middle',
    'stem': 'stems',
    'spc': 'space',
    'brk': 'bracket',
    'brc': 'brace',
}

#: Voice properties and their value conversion.
VOICE_PROPERTIES = {
    'name': lambda kv: unquote(kv.value_text()),
    'clef': lambda kv: kv.value_text().lower(),
    'transpose': kv_integer,
    'octave': kv_integer,
    'middle': lambda kv: kv.value_text(),
    'stafflines': kv_integer,
    'staffscale': kv_number,
    'perc': lambda kv: kv.value_text(),
    'instrument': kv_integer,
    'merge': lambda kv: kv.value_text(),
    'stems': lambda kv: kv.value_text(),
    'gchord': lambda kv: kv.value_text(),
    'space': kv_number,
    'bracket': lambda kv: kv.value_text(),
    'brace': lambda kv: kv.value_text(),
}


def voice(context, line):
    """``V:`` a voice id and properties, like ``V:T1 clef=treble name="Tenor"``."""
    values = line.values
    if not values or not (is_token(values[0], TT.IDENTIFIER, TT.NUMBER)
                          or isinstance(values[0], dom.Pitch)):
        context.error("Voice info line requires a voice ID", line)
        return None
    properties = {}
    for value in values[1:]:
        if isinstance(value, dom.KV):
            name = value.key_text()
            name = VOICE_ALIASES.get(name, name)
            try:
                convert = VOICE_PROPERTIES[name]
            except KeyError:
                context.warning("Unknown voice property: {}".format(name), value)
                continue
            result = convert(value)
            if result is None:
                context.warning("Invalid value for voice property {}: {}".format(
                    name, value.value_text()), value)
            else:
                properties[name] = result
        elif is_token(value, TT.IDENTIFIER) and value.lexeme.lower() in CLEFS:
            properties['clef'] = value.lexeme.lower()
        else:
            context.warning("Unknown voice property: {}".format(text(value)), value)
    return SemanticResult("voice", {'id': text(values[0]), 'properties': properties})


def reference_number(context, line):
    """``X:`` the reference number of a tune."""
    values = line.values
    if len(values) == 1 and is_token(values[0], TT.NUMBER) and values[0].lexeme.isdigit():
        return SemanticResult("reference_number", int(values[0].lexeme))
    context.error("Reference number (X:) must be a number", line)
    return None


def text_line(context, line, name):
    """A free text line like ``T:`` or ``C:``."""
    return SemanticResult(name, " ".join(text(v) for v in line.values).strip())


#: The free text fields.
TEXT_FIELDS = {
    'T': 'title',
    'C': 'composer',
    'O': 'origin',
    'R': 'rhythm',
    'B': 'book',
    'S': 'source',
    'D': 'discography',
    'N': 'notes',
    'Z': 'transcription',
    'H': 'history',
    'A': 'author',
}


#: Maps the header letter to the handler.
INFO_LINES = {
    'K': key_line,
    'M': meter,
    'L': note_length,
    'Q': tempo,
    'V': voice,
    'X': reference_number,
}
INFO_LINES.update((letter, functools.partial(text_line, name=name))
                  for letter, name in TEXT_FIELDS.items())


def analyze(context, line):
    """Return the SemanticResult for the InfoLine (or InlineField), or None.

    Letters without a handler return None without a diagnostic.

    """
    if line.header is None:
        return None
    handler = INFO_LINES.get(line.letter)
    if handler:
        return handler(context, line)
