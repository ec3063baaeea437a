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
The ``%%midi`` directive.

The first value is the command, the others are its parameters. Every command
has a fixed parameter signature; :data:`COMMANDS` maps each command name to
the function that checks and converts its parameters.

The result data is ``{'command': name, 'params': [...]}``::

    >>> from abcparse import parse, analyze
    >>> tree = parse("%%midi beat 4 1 2 3\\n")
    >>> analyze(tree).analyze(tree[0][0]).data
    {'command': 'beat', 'params': [4, 1, 2, 3]}

"""

import functools

from ..dom import abc as dom
from ..tokens import TT
from .util import SemanticResult, integer, is_token, text


class ParamError(Exception):
    """Raised by a parameter parser; the message is reported as an error."""


def _int(value, message):
    """Return the int value of a NUMBER token or raise ParamError."""
    if not is_token(value, TT.NUMBER):
        raise ParamError(message)
    return integer(value.lexeme)


def _is_string(value):
    """Return True for a word: an identifier, a string or a pitch."""
    return isinstance(value, dom.Pitch) or (is_token(value) and value.kind is not TT.NUMBER)


def no_params(context, directive, command, params):
    if params:
        context.warning("MIDI command '{}' expects no parameters".format(command), directive)
    return []


def one_string(context, directive, command, params):
    if len(params) != 1:
        raise ParamError("MIDI command '{}' expects one string parameter".format(command))
    if not _is_string(params[0]):
        raise ParamError("MIDI command '{}' expects string parameter".format(command))
    return [text(params[0])]


def integers(context, directive, command, params, count):
    names = {1: 'one', 2: 'two', 4: 'four', 5: 'five'}
    if len(params) != count:
        if count == 1:
            raise ParamError("MIDI command '{}' expects one integer parameter".format(command))
        raise ParamError("MIDI command '{}' expects {} parameters".format(command, names[count]))
    if count == 1:
        message = "MIDI command '{}' expects integer parameter".format(command)
    else:
        message = "MIDI command '{}' expects {} integer parameters".format(command, names[count])
    return [_int(p, message) for p in params]


def portamento(context, directive, command, params):
    if len(params) != 2:
        raise ParamError("MIDI command '{}' expects two parameters".format(command))
    message = "MIDI command '{}' expects one string and one integer parameter".format(command)
    switch, value = params
    if not is_token(switch, TT.IDENTIFIER):
        raise ParamError(message)
    if switch.lexeme.lower() not in ('on', 'off'):
        raise ParamError("MIDI command '{}' expects 'on' or 'off' as first parameter".format(command))
    return [switch.lexeme, _int(value, message)]


def program(context, directive, command, params):
    if len(params) not in (1, 2):
        raise ParamError("MIDI command '{}' expects one or two parameters".format(command))
    message = "MIDI command '{}' expects integer parameter".format(command)
    return [_int(p, message) for p in params]


def fraction(context, directive, command, params):
    if len(params) != 1 or not isinstance(params[0], dom.Rational):
        raise ParamError("MIDI command '{}' expects fraction parameter (e.g., 3/4)".format(command))
    r = params[0]
    return [{'numerator': r.numerator, 'denominator': r.denominator}]


def prog_octave(context, directive, command, params):
    """``bassprog`` and ``chordprog``: a program and an optional ``octave=N``.

    The octave is clamped to -1..3; an error is reported, but the result is
    still returned.

    """
    if len(params) not in (1, 2):
        raise ParamError("MIDI command '{}' expects one or two parameters".format(command))
    result = [_int(params[0], "MIDI command '{}' expects integer program number".format(command))]
    if len(params) == 2:
        kv = params[1]
        message = "MIDI command '{}' expects octave=N format".format(command)
        if not (isinstance(kv, dom.KV) and is_token(kv.key, TT.IDENTIFIER)
                and kv.key.lexeme.lower() == "octave" and is_token(kv.value, TT.NUMBER)):
            raise ParamError(message)
        octave = integer(kv.value.lexeme)
        if kv.sign and kv.sign.lexeme == '-':
            octave = -octave
        bounded = max(-1, min(3, octave))
        if bounded != octave:
            context.error("Octave value must be between -1 and 3 "
                "(got {}, clamping to {})".format(octave, bounded), directive)
        result.append(bounded)
    return result


def drummap(context, directive, command, params):
    """``drummap <[accidental]note> <number>``; a separate accidental is joined to the note."""
    message = "MIDI drummap expects note name and MIDI number"
    if len(params) == 2:
        note, value = params
        if is_token(note, TT.NUMBER):
            raise ParamError(message)
        return [text(note), _int(value, message)]
    elif len(params) == 3:
        acc, note, value = params
        if not is_token(acc) or is_token(note, TT.NUMBER):
            raise ParamError(message)
        return [acc.lexeme + text(note), _int(value, message)]
    raise ParamError("MIDI drummap expects two or three parameters: note and MIDI number")


def string_integers(context, directive, command, params):
    """``drum`` and ``chordname``: a string followed by one or more integers."""
    if len(params) < 2:
        raise ParamError("MIDI command '{}' expects string parameter "
            "and at least one integer parameter".format(command))
    name = params[0]
    if not _is_string(name):
        raise ParamError("MIDI command '{}' expects string parameter".format(command))
    message = "MIDI command '{}' expects integer parameters after string".format(command)
    return [text(name)] + [_int(p, message) for p in params[1:]]


def _commands():
    """Return the command table."""
    signatures = (
        (no_params, (
            "nobarlines", "barlines", "beataccents", "nobeataccents", "droneon",
            "droneoff", "drumon", "drumoff", "fermatafixed", "fermataproportional",
            "gchordon", "gchordoff", "controlcombo", "temperamentnormal", "noportamento")),
        (one_string, ("gchord", "ptstress", "beatstring")),
        (functools.partial(integers, count=1), (
            "bassvol", "chordvol", "c", "channel", "beatmod", "deltaloudness",
            "drumbars", "gracedivider", "makechordchannels", "randomchordattack",
            "chordattack", "stressmodel", "transpose", "rtranspose", "vol", "volinc",
            "gchordbars")),
        (functools.partial(integers, count=2), (
            "ratio", "snt", "bendvelocity", "pitchbend", "control", "temperamentlinear")),
        (functools.partial(integers, count=4), ("beat",)),
        (functools.partial(integers, count=5), ("drone",)),
        (portamento, ("portamento",)),
        (program, ("program",)),
        (fraction, ("expand", "grace", "trim")),
        (prog_octave, ("bassprog", "chordprog")),
        (drummap, ("drummap",)),
        (string_integers, ("drum", "chordname")),
    )
    return {name: func for func, names in signatures for name in names}


#: Maps every MIDI command to its parameter parser.
COMMANDS = _commands()


def command_name(value):
    """Return the lower-case command name of the first value, or None."""
    if is_token(value, TT.IDENTIFIER):
        return value.lexeme.lower()
    elif isinstance(value, dom.Pitch) and not value.accidental and not value.octave:
        # single-letter commands like "c" are scanned as a pitch
        return value.letter.lower()


def midi(context, directive):
    """Handle the ``%%midi`` directive."""
    if not directive.values:
        context.error("MIDI directive requires a command", directive)
        return None
    command = command_name(directive.values[0])
    if command is None:
        context.error("MIDI directive requires a command name", directive)
        return None
    try:
        parse_params = COMMANDS[command]
    except KeyError:
        context.error("Unknown MIDI command: {}".format(command), directive)
        return None
    try:
        params = parse_params(context, directive, command, directive.values[1:])
    except ParamError as e:
        context.error(str(e), directive)
        return None
    return SemanticResult("midi", {'command': command, 'params': params})
