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
Meta-information about the abcparse package.

This information is used by the install script, and also for the
command ``abcparse.version()``.

"""

## these variables are also used by the install script

#: name of the package
name = "abcparse"

#: the current version
version = (0, 1, 0)
version_suffix = ""

#: the current version as a string
version_string = "{}.{}.{}".format(*version) + version_suffix

#: short description
description = "Scanner, parser and semantic analyzer for ABC music notation"

#: long description
long_description = \
    "abcparse reads ABC music notation into a syntax tree that writes back " \
    "the exact source text, and interprets the info lines and stylesheet " \
    "directives, reporting problems as diagnostics."

#: maintainer name
maintainer = "Wilbert Berendsen"

#: maintainer email
maintainer_email = "info@frescobaldi.org"

#: license
license = "GPL v3"
