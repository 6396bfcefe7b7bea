# Copyright 2016 Google Inc. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Per-script word lists used as samples for word rendering diffs.

Lists live in a directory as `<Script>.txt` or brotli-compressed
`<Script>.txt.br` files, one word per line, named by the Unicode script
property's long name (e.g. `Latin.txt`, `Canadian_Aboriginal.txt.br`).
"""

import logging
import os

import brotli
from fontTools import unicodedata

logger = logging.getLogger('typediff')

BUNDLED_DIR = os.path.join(os.path.dirname(__file__), 'data', 'wordlists')


class WordLists(object):
    """Word lists looked up in directory first, then in the bundled ones."""

    def __init__(self, directory=None):
        self.directories = [BUNDLED_DIR]
        if directory:
            self.directories.insert(0, directory)
        self._lists = {}

    def get(self, script):
        """Return the words for a script name, or None if there is no list."""

        if script not in self._lists:
            self._lists[script] = self._load(script)
        return self._lists[script]

    def available(self):
        scripts = set()
        for directory in self.directories:
            if not os.path.isdir(directory):
                continue
            for filename in os.listdir(directory):
                if filename.endswith('.txt'):
                    scripts.add(filename[:-len('.txt')])
                elif filename.endswith('.txt.br'):
                    scripts.add(filename[:-len('.txt.br')])
        return sorted(scripts)

    def _load(self, script):
        for directory in self.directories:
            path = os.path.join(directory, script + '.txt')
            if os.path.isfile(path):
                with open(path, 'rb') as f:
                    data = f.read()
            elif os.path.isfile(path + '.br'):
                with open(path + '.br', 'rb') as f:
                    data = brotli.decompress(f.read())
            else:
                continue
            logger.debug('Loaded %s word list from %s', script, directory)
            words = data.decode('utf-8').splitlines()
            return [word.strip() for word in words if word.strip()]
        return None


def script_tag(script):
    """Return the ISO 15924 code for a script name, e.g. 'Latin' -> 'Latn'."""

    try:
        return unicodedata.script_code(script)
    except KeyError:
        return None


def script_direction(script):
    """Return 'rtl' or 'ltr', the horizontal direction of a script."""

    code = script_tag(script)
    if code is None:
        return 'ltr'
    return unicodedata.script_horizontal_direction(code, 'LTR').lower()
