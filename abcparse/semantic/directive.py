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
Handlers for the ``%%`` stylesheet directives.

Every handler is called with the :class:`~abcparse.context.Context` and the
:class:`~abcparse.dom.abc.Directive` node, and returns a
:class:`~abcparse.semantic.util.SemanticResult` or None. Problems are
reported to the context.

The :data:`DIRECTIVES` table maps the lower-case directive names to their
handler; :func:`analyze` looks up the handler for a directive::

    >>> from abcparse import parse, analyze
    >>> tree = parse("%%scale 0.75\\n%%vocal above\\n")
    >>> a = analyze(tree)
    >>> a.analyze(tree[0][0])
    SemanticResult(type='scale', data=0.75)

"""

import functools

from ..dom import abc as dom
from ..tokens import TT
from . import font, midi, score
from .constants import DRUM_SOUND_NAMES, FIRST_DRUM_SOUND, POSITIONS
from .util import SemanticResult, integer, is_token, number, text, unquote


def flag(context, directive):
    """A directive without parameters, like ``%%landscape``."""
    if directive.values:
        context.warning('Directive "{}" expects no parameters, but got {}'.format(
            directive.name, len(directive.values)), directive)
    return SemanticResult(directive.name.lower(), True)


def _extra(context, directive):
    if len(directive.values) > 1:
        context.warning('Directive "{}" expects only one parameter, '
            'ignoring extra parameters'.format(directive.name), directive)


def identifier(context, directive):
    """A directive with one identifier, like ``%%papersize A4``."""
    if not directive.values:
        context.error('Directive "{}" expects an identifier parameter'.format(directive.name), directive)
        return None
    value = directive.values[0]
    if not (is_token(value, TT.IDENTIFIER) or isinstance(value, dom.Pitch)):
        context.error('Directive "{}" expects an identifier'.format(directive.name), directive)
        return None
    _extra(context, directive)
    return SemanticResult(directive.name.lower(), text(value))


def boolean(context, directive):
    """A directive with ``true``, ``false``, ``1`` or ``0``."""
    if not directive.values:
        context.error('Directive "{}" expects a boolean parameter'.format(directive.name), directive)
        return None
    value = directive.values[0]
    result = None
    if is_token(value, TT.IDENTIFIER):
        result = {'true': True, 'false': False}.get(value.lexeme.lower())
    elif is_token(value, TT.NUMBER):
        result = {'1': True, '0': False}.get(value.lexeme)
    if result is None:
        context.error('Directive "{}" expects a boolean (true/false/0/1)'.format(directive.name), directive)
        return None
    _extra(context, directive)
    return SemanticResult(directive.name.lower(), result)


def numeric(context, directive, minimum=None):
    """A directive with one number, optionally with a minimum."""
    if not directive.values:
        context.error('Directive "{}" expects a number parameter'.format(directive.name), directive)
        return None
    value = directive.values[0]
    if not is_token(value, TT.NUMBER):
        context.error('Directive "{}" expects a number'.format(directive.name), directive)
        return None
    n = number(value.lexeme)
    if minimum is not None and n < minimum:
        context.error('Directive "{}": Number {} is below minimum {}'.format(
            directive.name, n, minimum), directive)
        return None
    _extra(context, directive)
    return SemanticResult(directive.name.lower(), n)


def stretchlast(context, directive):
    """``%%stretchlast [true|false|<number>]``, the number between 0 and 1."""
    if not directive.values:
        return SemanticResult("stretchlast", 1)
    value = directive.values[0]
    if is_token(value, TT.IDENTIFIER) and value.lexeme.lower() in ('true', 'false'):
        result = 1 if value.lexeme.lower() == 'true' else 0
    elif is_token(value, TT.NUMBER):
        result = number(value.lexeme)
        if not 0 <= result <= 1:
            context.error("stretchlast value must be between 0 and 1 "
                "(received {})".format(result), directive)
            return None
    else:
        context.error('Directive "stretchlast" expects a number or true/false', directive)
        return None
    _extra(context, directive)
    return SemanticResult("stretchlast", result)


def position(context, directive):
    """A position directive like ``%%vocal above``."""
    if not directive.values:
        context.error('Directive "{}" expects a position parameter'.format(directive.name), directive)
        return None
    value = directive.values[0]
    if not is_token(value, TT.IDENTIFIER) or value.lexeme.lower() not in POSITIONS:
        context.error('Invalid position "{}", expected one of: {}'.format(
            text(value), ", ".join(POSITIONS)), directive)
        return None
    _extra(context, directive)
    return SemanticResult(directive.name.lower(), value.lexeme.lower())


def measurement(context, directive):
    """A length like ``%%pagewidth 21cm``; without a unit only the value is set."""
    if not directive.values:
        context.error('Directive "{}" expects a measurement parameter'.format(directive.name), directive)
        return None
    value = directive.values[0]
    if isinstance(value, dom.Measurement):
        data = {'value': value.value, 'unit': value.unit}
    elif is_token(value, TT.NUMBER):
        data = {'value': number(value.lexeme)}
    else:
        context.error('Directive "{}" expects a measurement (number with optional unit)'.format(
            directive.name), directive)
        return None
    _extra(context, directive)
    return SemanticResult(directive.name.lower(), data)


def sep(context, directive):
    """``%%sep [above [below [length]]]``."""
    data = {}
    values = directive.values
    for name, value in zip(('above', 'below', 'length'), values):
        if isinstance(value, dom.Measurement):
            data[name] = value.value
        elif is_token(value, TT.NUMBER):
            data[name] = number(value.lexeme)
        else:
            context.warning('Directive "sep" expects number parameters', directive)
    if len(values) > 3:
        context.warning('Directive "sep" expects at most 3 parameters', directive)
    return SemanticResult("sep", data)


def text_directive(context, directive):
    """A directive with free text, like ``%%text`` or ``%%abc-creator``."""
    if not directive.values:
        context.error('Directive "{}" expects a text parameter'.format(directive.name), directive)
        return None
    return SemanticResult(directive.name.lower(), " ".join(text(v) for v in directive.values))


def begintext(context, directive):
    """The block of text between ``%%begintext`` and ``%%endtext``."""
    t = directive.token(TT.FREE_TXT)
    return SemanticResult("begintext", t.lexeme.strip('\r\n') if t else "")


def newpage(context, directive):
    """``%%newpage [number]``; the data is None without a page number."""
    if not directive.values:
        return SemanticResult("newpage", None)
    value = directive.values[0]
    if not is_token(value, TT.NUMBER):
        context.error('Directive "newpage" expects a page number', directive)
        return None
    _extra(context, directive)
    return SemanticResult("newpage", integer(value.lexeme))


def header_footer(context, directive):
    """``%%header`` and ``%%footer``: up to three sections separated by tabs."""
    name = directive.name.lower()
    if not directive.values:
        context.error('Directive "{}" expects a text parameter'.format(name), directive)
        return None
    sections = unquote(" ".join(text(v) for v in directive.values)).split("\t")
    if len(sections) > 3:
        context.warning("Too many tabs in {}: {} sections found (expected 1-3)".format(
            name, len(sections)), directive)
        del sections[3:]
    sections += [""] * (3 - len(sections))
    return SemanticResult(name, dict(zip(('left', 'center', 'right'), sections)))


def percmap(context, directive):
    """``%%percmap <note> <sound> [notehead]``.

    The sound is a General MIDI percussion number or one of the names in
    :data:`~abcparse.semantic.constants.DRUM_SOUND_NAMES`.

    """
    values = directive.values
    if not 2 <= len(values) <= 3:
        context.error('Directive "percmap" expects 2 or 3 parameters: note, sound and '
            'optionally a note head', directive)
        return None
    note, sound = text(values[0]), values[1]
    last = FIRST_DRUM_SOUND + len(DRUM_SOUND_NAMES) - 1
    if is_token(sound, TT.NUMBER):
        n = integer(sound.lexeme)
        if not FIRST_DRUM_SOUND <= n <= last:
            context.error("MIDI percussion sound must be between {} and {} (got {})".format(
                FIRST_DRUM_SOUND, last, n), directive)
            return None
    else:
        name = text(sound).lower()
        try:
            n = DRUM_SOUND_NAMES.index(name) + FIRST_DRUM_SOUND
        except ValueError:
            context.error("Unknown drum sound name: {}".format(name), directive)
            return None
    head = text(values[2]) if len(values) == 3 else None
    return SemanticResult("percmap", {'note': note, 'sound': n, 'noteHead': head})


def deco(context, directive):
    """``%%deco <name> [definition]``; the definition is kept as text."""
    values = directive.values
    if not values or not is_token(values[0], TT.IDENTIFIER):
        context.error('Directive "deco" expects a decoration name', directive)
        return None
    definition = " ".join(text(v) for v in values[1:]) or None
    context.warning("Decoration redefinition is parsed but not fully implemented", directive)
    return SemanticResult("deco", {'name': values[0].lexeme, 'definition': definition})


def _table():
    """Return the directive table."""
    p = functools.partial
    groups = (
        (font.font, """
            titlefont gchordfont composerfont subtitlefont voicefont partsfont
            textfont annotationfont historyfont infofont measurefont
            barlabelfont barnumberfont barnumfont"""),
        (p(font.font, box=False), """
            tempofont footerfont headerfont tripletfont vocalfont repeatfont
            wordsfont tablabelfont tabnumberfont tabgracefont"""),
        (flag, """
            bagpipes flatbeams jazzchords accentabove germanalphabet landscape
            titlecaps titleleft measurebox continueall endtext beginps endps
            font nobarcheck"""),
        (identifier, "papersize map playtempo auquality continuous voicecolor"),
        (boolean, "graceslurs staffnonote printtempo partsbox freegchord"),
        (numeric, "linethickness voicescale scale fontboxpadding"),
        (p(numeric, minimum=1), "barsperstaff setbarnb"),
        (p(numeric, minimum=0), "measurenb barnumbers"),
        (stretchlast, "stretchlast"),
        (position, "vocal dynamic gchord ornament volume"),
        (measurement, """
            botmargin botspace composerspace indent leftmargin linesep
            musicspace partsspace pageheight pagewidth rightmargin
            stafftopmargin staffsep staffwidth subtitlespace sysstaffsep
            systemsep textspace titlespace topmargin topspace vocalspace
            wordsspace vskip"""),
        (sep, "sep"),
        (text_directive, """
            text center abc-copyright abc-creator abc-edited-by abc-version
            abc-charset"""),
        (begintext, "begintext"),
        (newpage, "newpage"),
        (score.score, "staves score"),
        (header_footer, "header footer"),
        (midi.midi, "midi"),
        (percmap, "percmap"),
        (deco, "deco"),
    )
    table = {name: handler for handler, names in groups for name in names.split()}
    for slot in range(1, 10):
        table["setfont-{}".format(slot)] = p(font.setfont, slot=slot)
    return table


#: Maps the lower-case directive names to their handler.
DIRECTIVES = _table()


def analyze(context, directive):
    """Return the SemanticResult for the Directive, or None.

    Unknown directives return None without a diagnostic.

    """
    if directive.key is None:
        return None
    handler = DIRECTIVES.get(directive.name.lower())
    if handler:
        return handler(context, directive)
