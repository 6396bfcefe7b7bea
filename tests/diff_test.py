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



import os
import shutil
import tempfile
import unittest

from typediff.config import Settings
from typediff.dfont import DFont
from typediff.diff import DiffFonts, diff_fonts, diff_glyphs, diff_words
from typediff.errors import ConfigurationError
from typediff.wordlists import WordLists
from dfont_test import (
    DEFAULT_GLYPHS, font_bytes, make_dfont, make_font, make_variable_dfont)

WIDE_A_GLYPHS = [
    (name, codepoint, [(50, 0, 550, 500)] if name == 'a' else rects)
    for name, codepoint, rects in DEFAULT_GLYPHS]

UNENCODED_A_GLYPHS = [
    (name, None if name == 'A' else codepoint, rects)
    for name, codepoint, rects in DEFAULT_GLYPHS]

# the stem of b one pixel (25 units at size 40) thicker
BOLDER_B_GLYPHS = [
    (name, codepoint,
     [(50, 0, 175, 750), (150, 0, 450, 100)] if name == 'b' else rects)
    for name, codepoint, rects in DEFAULT_GLYPHS]


def break_outline(dfont, gid):
    """Make drawing one glyph of dfont raise."""

    outline = dfont.outline

    def failing_outline(requested):
        if requested == gid:
            raise ValueError('bad outline')
        return outline(requested)

    dfont.outline = failing_outline
    return dfont


class DiffTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        with open(os.path.join(self.tmpdir, 'Latin.txt'), 'w') as f:
            f.write('AB\nab\nAZ\n')
        self.wordlists = WordLists(self.tmpdir)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)


class IdenticalFontsTest(DiffTestCase):
    def test_no_differences(self):
        data = font_bytes(make_font())
        diff = diff_fonts(DFont(data), DFont(data),
                          wordlists=self.wordlists)
        self.assertEqual(diff, {
            'tables': {},
            'glyphs': {'missing': [], 'new': [], 'modified': []},
            'words': {},
        })


class TablesTest(DiffTestCase):
    def test_changed_ascent(self):
        diff = DiffFonts(make_dfont(), make_dfont(ascent=900)).tables()
        self.assertEqual(diff, {'hhea': {'ascent': [800, 900]}})

    def test_only_requested_sections(self):
        settings = Settings(glyphs=False, words=False)
        diff = diff_fonts(make_dfont(), make_dfont(ascent=900), settings)
        self.assertEqual(list(diff), ['tables'])


class GlyphsTest(DiffTestCase):
    def test_missing(self):
        diff = diff_glyphs(make_dfont(),
                           make_dfont(glyphs=UNENCODED_A_GLYPHS))
        self.assertEqual(diff['new'], [])
        self.assertEqual(diff['modified'], [])
        self.assertEqual(diff['missing'], [{
            'string': 'A',
            'unicode': 'U+0041',
            'name': 'LATIN CAPITAL LETTER A',
            'percent': 100.0,
            'category': 'missing',
        }])

    def test_new(self):
        diff = diff_glyphs(make_dfont(glyphs=UNENCODED_A_GLYPHS),
                           make_dfont())
        self.assertEqual([g['unicode'] for g in diff['new']], ['U+0041'])
        self.assertEqual(diff['missing'], [])

    def test_modified(self):
        diff = diff_glyphs(make_dfont(), make_dfont(glyphs=WIDE_A_GLYPHS))
        self.assertEqual([g['unicode'] for g in diff['modified']],
                         ['U+0061'])
        self.assertGreater(diff['modified'][0]['percent'], 0)

    def test_threshold(self):
        settings = Settings(threshold=100.0)
        diff = diff_glyphs(make_dfont(glyphs=UNENCODED_A_GLYPHS),
                           make_dfont(glyphs=WIDE_A_GLYPHS), settings)
        self.assertEqual(diff['modified'], [])
        self.assertEqual([g['unicode'] for g in diff['new']], ['U+0041'])

    def test_render_path(self):
        render_path = os.path.join(self.tmpdir, 'renders')
        settings = Settings(render_path=render_path)
        diff_glyphs(make_dfont(), make_dfont(glyphs=WIDE_A_GLYPHS), settings)
        self.assertEqual(os.listdir(render_path), ['U+0061.png'])


class WordsTest(DiffTestCase):
    def test_modified_word(self):
        diff = diff_words(make_dfont(), make_dfont(glyphs=WIDE_A_GLYPHS),
                          wordlists=self.wordlists)
        self.assertEqual(list(diff), ['Latin'])
        self.assertEqual([entry['word'] for entry in diff['Latin']], ['ab'])
        self.assertGreater(diff['Latin'][0]['percent'], 0)

    def test_one_pixel_stroke_change(self):
        diff = diff_words(make_dfont(), make_dfont(glyphs=BOLDER_B_GLYPHS),
                          wordlists=self.wordlists)
        self.assertEqual(list(diff), ['Latin'])
        self.assertEqual(len(diff['Latin']), 1)
        self.assertEqual(diff['Latin'][0]['word'], 'ab')
        self.assertGreater(diff['Latin'][0]['percent'], 0)

    def test_unrenderable_words_skipped(self):
        # 'AB' is only renderable in the first font
        diff = diff_words(make_dfont(), make_dfont(glyphs=UNENCODED_A_GLYPHS),
                          wordlists=self.wordlists)
        self.assertEqual(diff, {})

    def test_scripts_without_lists(self):
        empty = tempfile.mkdtemp()
        try:
            with open(os.path.join(empty, 'Latin.txt'), 'w') as f:
                f.write('\n')
            diff = diff_words(make_dfont(), make_dfont(glyphs=WIDE_A_GLYPHS),
                              wordlists=WordLists(empty))
        finally:
            shutil.rmtree(empty)
        self.assertEqual(diff, {})



class RenderErrorTest(DiffTestCase):
    def test_glyph_error_is_not_missing(self):
        diff = diff_glyphs(make_dfont(), break_outline(make_dfont(), 2))
        self.assertEqual(diff['missing'], [])
        self.assertEqual(diff['new'], [])
        self.assertEqual(diff['modified'], [])
        self.assertEqual(len(diff['errors']), 1)
        error = diff['errors'][0]
        self.assertEqual(error['unicode'], 'U+0041')
        self.assertEqual(error['error'], 'RHS: ValueError: bad outline')
        self.assertNotIn('percent', error)

    def test_error_on_both_sides(self):
        diff = diff_glyphs(break_outline(make_dfont(), 2),
                           break_outline(make_dfont(), 2))
        self.assertEqual(diff['errors'][0]['error'],
                         'LHS: ValueError: bad outline; '
                         'RHS: ValueError: bad outline')

    def test_word_error(self):
        diff = diff_words(break_outline(make_dfont(), 2), make_dfont(),
                          wordlists=self.wordlists)
        self.assertEqual(diff, {'Latin': [
            {'word': 'AB', 'error': 'LHS: ValueError: bad outline'}]})


class LocationTest(DiffTestCase):
    def test_location_on_static_font(self):
        with self.assertRaises(ConfigurationError):
            DiffFonts(make_dfont(), make_dfont(),
                      Settings(location='wght=700'))

    def test_instance(self):
        font_a = make_variable_dfont()
        font_b = make_variable_dfont()
        DiffFonts(font_a, font_b, Settings(instance='Bold'))
        self.assertEqual(font_a.location, {'wght': 700})
        self.assertEqual(font_b.location, {'wght': 700})


if __name__ == '__main__':
    unittest.main()
