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
The ``%%score`` and ``%%staves`` directives.

Both list voice ids, grouped with ``()`` (voices on one staff), ``[]`` (a
bracket), ``{}`` (a brace), and separated by ``|`` to connect bar lines
between staves. With ``%%staves`` bar lines are connected between all staves.

The result data is a dict with ``staves``, a list of dicts describing each
staff, and ``voiceAssignments``, mapping every voice id to its staff number
and its index on that staff::

    >>> from abcparse import parse, analyze
    >>> tree = parse("%%score (S A) | T\\n")
    >>> analyze(tree).analyze(tree[0][0]).data['voiceAssignments']
    {'S': {'staffNum': 0, 'index': 0}, 'A': {'staffNum': 0, 'index': 1}, 'T': {'staffNum': 1, 'index': 0}}

"""

from ..dom import abc as dom
from ..tokens import TT
from .util import SemanticResult, is_token, text


#: Grouping tokens.
OPENING = {TT.LPAREN: 'paren', TT.LBRACKET: 'bracket', TT.LBRACE: 'brace'}
CLOSING = {TT.RPAREN: 'paren', TT.RBRACKET: 'bracket', TT.RBRACE: 'brace'}

#: Token kinds that can be a voice id.
VOICE_ID = frozenset((TT.IDENTIFIER, TT.NUMBER))

_NAMES = {'paren': "parentheses", 'bracket': "brackets", 'brace': "braces"}
_CLOSE_NAMES = {'paren': "parenthesis", 'bracket': "bracket", 'brace': "brace"}


class Staves:
    """Collects the staves while reading a score or staves directive.

    ``open`` is the set of groupings currently open, and ``just_opened`` the
    set of groupings opened right before the current voice.

    """
    def __init__(self):
        self.staves = []
        self.assignments = {}
        self.open = set()
        self.just_opened = set()
        self.continue_bar = False
        self.last_voice = None

    def add_voice(self, voice, new_staff, bracket, brace):
        """Add a voice; ``bracket`` and ``brace`` are None, "start" or "continue"."""
        if new_staff or not self.staves:
            self.staves.append({'index': len(self.staves), 'numVoices': 0})
        staff = self.staves[-1]
        if bracket and 'bracket' not in staff:
            staff['bracket'] = bracket
        if brace and 'brace' not in staff:
            staff['brace'] = brace
        if self.continue_bar:
            staff['connectBarLines'] = "end"
            self.continue_bar = False
        if voice not in self.assignments:
            self.assignments[voice] = {'staffNum': staff['index'], 'index': staff['numVoices']}
            staff['numVoices'] += 1

    def add_continue_bar(self):
        """Connect the bar lines of the current staff with the next one."""
        if not self.staves:
            return
        staff = self.staves[-1]
        previous = self.staves[-2].get('connectBarLines') if len(self.staves) > 1 else None
        staff['connectBarLines'] = "continue" if previous in ("start", "continue") else "start"
        self.continue_bar = True

    def end_group(self, name):
        """Mark the end of a bracket or brace on the staff of the last voice."""
        if self.last_voice in self.assignments:
            staff = self.staves[self.assignments[self.last_voice]['staffNum']]
            staff[name] = "end"

    def data(self):
        return {'staves': self.staves, 'voiceAssignments': self.assignments}


def voice_id(value):
    """Return the voice id of a value, or None."""
    if isinstance(value, dom.Pitch):
        return text(value)
    elif is_token(value, *VOICE_ID):
        return value.lexeme


def score(context, directive):
    """Handle ``%%score`` and ``%%staves``."""
    name = directive.name.lower()
    connect_all = name == "staves"
    if not directive.values:
        context.error('Directive "{}" requires at least one voice ID'.format(name), directive)
        return None
    s = Staves()
    for value in directive.values:
        if is_token(value) and value.kind in OPENING:
            group = OPENING[value.kind]
            if group in s.open:
                context.error("Cannot nest {} in score/staves directive".format(_NAMES[group]), value)
            else:
                s.open.add(group)
                s.just_opened.add(group)
        elif is_token(value) and value.kind in CLOSING:
            group = CLOSING[value.kind]
            if group not in s.open:
                context.error("Unexpected close {} in score/staves directive".format(
                    _CLOSE_NAMES[group]), value)
            else:
                s.open.discard(group)
                if group != 'paren':
                    s.end_group(group)
        elif is_token(value, TT.PIPE):
            s.add_continue_bar()
        else:
            voice = voice_id(value)
            if voice is None:
                context.error("Score/staves directive should only contain "
                    "voice IDs and grouping symbols", value)
                continue
            new_staff = 'paren' not in s.open or 'paren' in s.just_opened
            bracket = brace = None
            if 'bracket' in s.open:
                bracket = "start" if 'bracket' in s.just_opened else "continue"
            if 'brace' in s.open:
                brace = "start" if 'brace' in s.just_opened else "continue"
            s.add_voice(voice, new_staff, bracket, brace)
            s.just_opened.clear()
            s.last_voice = voice
            if connect_all:
                s.add_continue_bar()
    for group in ('paren', 'bracket', 'brace'):
        if group in s.open:
            context.error("Unclosed {} in score/staves directive".format(
                _CLOSE_NAMES[group]), directive)
    return SemanticResult(name, s.data())
