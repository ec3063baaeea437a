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
Test the node module.
"""

import io

### find abcparse
import sys
sys.path.insert(0, '.')

from abcparse.node import Node


class N1(Node):
    pass


class N2(Node):
    pass


class N3(Node):
    pass


class M1(N1):
    pass


class M2(N2):
    pass


class M3(N3):
    pass


tree = \
N1(
    N2(
        N3(),
        M3(),
        N2(),
        M1(),
    ),
    N1(
        M2(),
    ),
)


def test_main():
    assert next(tree//M3) is tree[0][1]
    assert len(list(tree/N2)) == 1
    assert sum(1 for _ in tree//N2) == 3     # M2 inherits from N2 :-)
    assert len(list(tree[0] ^ N3)) == 2
    assert next(tree[1][0] << N1) is tree[1]
    assert tree[1][0].root() is tree
    assert tree[0][3].trail() == [0, 3]
    assert tree[1][0].depth() == 2
    assert tree[0][3].is_last()
    assert list(tree[0][1] > N2) == [tree[0][2], tree[1][0]]
    assert list(tree[0][2] < N3) == [tree[0][1], tree[0][0]]
    assert tree.equals(tree)
    assert not tree.equals(tree[0])
    assert bool(N1())


def test_modify():
    n = N1()
    n.append(N2())
    n.extend([N3(), M3()])
    n.insert(0, M1())
    assert [type(c) for c in n] == [M1, N2, N3, M3]
    assert all(c.parent is n for c in n)
    n[1:3] = [M2()]
    assert [type(c) for c in n] == [M1, M2, M3]
    assert n[1].parent is n
    del n[0].parent
    assert n[0].parent is None


def test_dump():
    f = io.StringIO()
    tree.dump(f, "ascii")
    lines = f.getvalue().splitlines()
    assert len(lines) == 8
    assert lines[0] == "<N1 (2 children)>"
    assert lines[1] == " |-<N2 (4 children)>"


if __name__ == "__main__" and 'test_main' in globals():
    test_main()
