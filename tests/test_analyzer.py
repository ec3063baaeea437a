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
Test the semantic analyzer, the context and the module level functions.
"""

import logging

### find abcparse
import sys
sys.path.insert(0, '.')

import abcparse
from abcparse.context import Context, Options
from abcparse.dom import abc as dom
from abcparse.semantic import SemanticAnalyzer, SemanticResult


TEXT = """\
%%midi beat 4 1 2 3
%%midi expand 3/4
%%midi expand 3
%%percmap C acoustic-snare
K:^f minor clef=treble transpose=-12
%%titlefont "Times New Roman" 12 italic
%%setfont-10 Arial 14
"""


def test_scenarios():
    c = Context()
    tree = abcparse.parse(TEXT, c)
    assert not c.diagnostics
    a = abcparse.analyze(tree, c)
    lines = list(tree // (dom.Directive, dom.InfoLine))
    results = [a.get(n.id) for n in lines]

    assert results[0] == ("midi", {'command': 'beat', 'params': [4, 1, 2, 3]})
    assert results[1] == ("midi", {'command': 'expand', 'params': [{'numerator': 3, 'denominator': 4}]})
    assert results[2] is None
    assert results[3] == ("percmap", {'note': 'C', 'sound': 38, 'noteHead': None})
    key = results[4].data
    assert key['keySignature']['root'] == 'F'
    assert key['keySignature']['acc'] == 'sharp'
    assert key['keySignature']['mode'] == 'minor'
    assert key['clef']['type'] == 'treble'
    assert key['clef']['transpose'] == -12
    font = results[5].data
    assert font['face'] == "Times New Roman"
    assert font['size'] == 12
    assert font['weight'] == "normal"
    assert font['style'] == "italic"
    assert results[6] is None

    # only the invalid expand reported an error
    assert c.diagnostics.messages() == ["MIDI command 'expand' expects fraction parameter (e.g., 3/4)"]
    assert c.diagnostics[0].location == (2, 0)


def test_cache():
    c = Context()
    tree = abcparse.parse("%%midi expand 3\n%%scale 2\n", c)
    s = SemanticAnalyzer(c)
    directive = tree[0][0]
    assert s.analyze(directive) is None
    assert s.analyze(directive) is None
    assert len(c.diagnostics) == 1      # not analyzed twice

    r1 = s.analyze(tree[0][2])
    assert r1 == SemanticResult("scale", 2)
    assert s.analyze(tree[0][2]) is r1
    assert s.get(tree[0][2].id) is r1
    assert len(s.results()) == 2
    s.clear()
    assert s.get(tree[0][2].id) is None
    assert s.analyze(tree[0][2]) == r1
    # the tree is not changed
    assert tree.write() == "%%midi expand 3\n%%scale 2\n"

    try:
        s.analyze(tree[0][1])
    except TypeError:
        pass
    else:
        assert False, "TypeError expected"


def test_independent_contexts():
    c1, c2 = Context(), Context(first_id=1000)
    t1 = abcparse.parse("%%scale 2\n", c1)
    t2 = abcparse.parse("%%scale 2\n", c2)
    assert t1[0][0].id < 1000 <= t2[0][0].id
    assert abcparse.parse("%%scale 2\n", Context()).equals(t1)
    abcparse.analyze(t2, c2)
    assert not c1.diagnostics and not c2.diagnostics


def test_scan():
    tokens = abcparse.scan("X:1\nK:G\n")
    assert tokens[-1].kind.name == "EOF"


def test_options():
    o = Options(a=1)
    assert o.a == 1
    assert o.b is None
    assert (o + Options(b=2)) == Options(a=1, b=2)
    c = Context(chord_rhythm_warning=False)
    assert c.options.chord_rhythm_warning is False
    assert c.options.first_id == 0


def test_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger="abcparse.context"):
        abcparse.analyze(abcparse.parse("%%midi foo\n"))
    assert "Unknown MIDI command: foo" in caplog.text

    caplog.clear()
    with caplog.at_level(logging.DEBUG, logger="abcparse.context"):
        c = Context(log_diagnostics=False)
        abcparse.analyze(abcparse.parse("%%midi foo\n", c), c)
    assert c.diagnostics.messages() == ["Unknown MIDI command: foo"]
    assert not caplog.records


def test_registry():
    from abcparse.lang.abc import Abc
    assert abcparse.find("abc") is Abc.root
    assert abcparse.find(filename="tune.abc") is Abc.root


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
