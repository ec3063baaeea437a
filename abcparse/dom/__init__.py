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
This module defines a DOM (Document Object Model) for ABC source files.

The ABC DOM is a simple tree structure: a file contains tunes, a tune has a
header and a body, the body is divided in systems, and a system contains the
musical elements, some of which are grouped in beams.

Every node keeps the tokens it directly consists of in its ``origin``
attribute, and all tokens of the document are present in the tree exactly
once. So writing the tokens of the root node gives back the original text.

The node types are in :mod:`abcparse.dom.abc`, the base class is in
:mod:`abcparse.dom.element`.

"""
