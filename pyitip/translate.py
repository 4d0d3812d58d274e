# -*- coding: utf-8 -*-
# Copyright 2010-2013 Kolab Systems AG (http://www.kolabsys.com)
#
# Jeroen van Meeuwen (Kolab Systems) <vanmeeuwen a kolabsys.com>
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import gettext

from pyitip.constants import domain

N_ = lambda x: x

current = gettext.translation(domain, fallback=True)

_translations = {}

def _(x):
    return current.gettext(x)

def getTranslation(lang):
    """
        Return the (cached) translation for a language, for example the
        locale of a calendar user, without touching the process-wide
        current translation.
    """
    if lang is None:
        return current

    if lang not in _translations:
        _translations[lang] = gettext.translation(
                domain,
                languages=_expand_lang(lang),
                fallback=True
            )

    return _translations[lang]

def _expand_lang(lang):
    if not len(lang.split('.')) > 1 and not lang.endswith('.UTF-8'):
        lang = "%s.UTF-8" % (lang)

    langs = []
    for l in gettext._expand_lang(lang):
        if l not in langs:
            langs.append(l)

    return langs
