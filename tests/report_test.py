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



import unittest

from typediff.report import to_text
from typediff.value import ABSENT


class TablesReportTest(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(to_text({}), '')
        self.assertEqual(to_text({'tables': {}, 'words': {}}), '')

    def test_fields(self):
        diff = {'tables': {'hhea': {'ascent': [800, 900]},
                           'head': {'flags': {'bit': [True, False]}}}}
        self.assertEqual(to_text(diff), '\n'.join([
            '# hhea',
            'ascent: 800 => 900',
            '',
            '# head',
            'flags:',
            '  bit: true => false',
        ]))

    def test_table_absent(self):
        diff = {'tables': {'GPOS': [{'Version': 1}, ABSENT],
                           'kern': [ABSENT, [0, 1]]}}
        self.assertEqual(to_text(diff), '\n'.join([
            '# GPOS',
            'Table was present in LHS but absent in RHS',
            '',
            '# kern',
            'Table was present in RHS but absent in LHS',
        ]))

    def test_table_absent_verbose(self):
        diff = {'tables': {'GPOS': [{'Version': 1}, ABSENT]}}
        self.assertEqual(to_text(diff, succinct=False), '\n'.join([
            '# GPOS',
            'LHS had: {"Version":1}',
            'RHS had: <absent>',
        ]))

    def test_succinct_fields(self):
        diff = {'tables': {'name': {'1': {'3/1/0x0409': ['Sans', None]}}}}
        self.assertEqual(to_text(diff),
                         '# name\n1:\n  3/1/0x0409: "Sans" => <absent>')
        self.assertEqual(to_text(diff, succinct=False),
                         '# name\n1:\n  3/1/0x0409: "Sans" => null')

    def test_error(self):
        diff = {'tables': {'GSUB': {'error': 'LHS: Could not parse GSUB'}}}
        self.assertEqual(to_text(diff),
                         '# GSUB\nLHS: Could not parse GSUB')


class RendersReportTest(unittest.TestCase):
    def test_glyphs(self):
        diff = {'glyphs': {
            'missing': [{'string': 'A', 'unicode': 'U+0041',
                         'name': 'LATIN CAPITAL LETTER A', 'percent': 100.0,
                         'category': 'missing'}],
            'new': [],
            'modified': [{'string': 'a', 'unicode': 'U+0061',
                          'name': 'LATIN SMALL LETTER A', 'percent': 12.5,
                          'category': 'modified'}],
        }}
        self.assertEqual(to_text(diff), '\n'.join([
            '# Glyphs',
            '',
            'Missing glyphs:',
            '  - A (U+0041: LATIN CAPITAL LETTER A) 100.000%',
            '',
            'Modified glyphs:',
            '  - a (U+0061: LATIN SMALL LETTER A) 12.500%',
        ]))

    def test_glyph_errors(self):
        diff = {'glyphs': {
            'missing': [], 'new': [], 'modified': [],
            'errors': [{'string': 'A', 'unicode': 'U+0041',
                        'name': 'LATIN CAPITAL LETTER A',
                        'error': 'RHS: ValueError: bad outline'}],
        }}
        self.assertEqual(to_text(diff), '\n'.join([
            '# Glyphs',
            '',
            'Glyphs that failed to render:',
            '  - A (U+0041: LATIN CAPITAL LETTER A) '
            'RHS: ValueError: bad outline',
        ]))

    def test_no_glyph_changes(self):
        diff = {'glyphs': {'missing': [], 'new': [], 'modified': []}}
        self.assertEqual(to_text(diff), '')

    def test_words(self):
        diff = {'words': {'Latin': [{'word': 'ab', 'percent': 3.25}]}}
        self.assertEqual(to_text(diff), '\n'.join([
            '# Words',
            '',
            '## Latin',
            '  - ab (3.250%)',
        ]))

    def test_word_errors(self):
        diff = {'words': {'Latin': [
            {'word': 'AB', 'error': 'LHS: ValueError: bad outline'},
            {'word': 'ab', 'percent': 1.0}]}}
        self.assertEqual(to_text(diff), '\n'.join([
            '# Words',
            '',
            '## Latin',
            '  - AB (LHS: ValueError: bad outline)',
            '  - ab (1.000%)',
        ]))


if __name__ == '__main__':
    unittest.main()
