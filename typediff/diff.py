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


"""Drive the table, glyph and word diffs over two fonts.

The result is one value tree:

    {
        "tables": <jsondiff tree of all tables>,
        "glyphs": {"missing": [...], "new": [...], "modified": [...]},
        "words": {<script name>: [{"word": ..., "percent": ...}, ...]},
    }

Table tags and codepoints are visited in sorted order and words in word-list
order, so the output is stable from run to run. A codepoint or word whose
rendering raised is recorded with an "error" message instead of a percent
(glyph errors under an extra "errors" list) and is never classified.
"""

import functools
import logging
import os
import time

from typediff import compare, ttj
from typediff.config import Settings
from typediff.renderer import OutlineCache, Renderer
from typediff.wordlists import WordLists, script_direction, script_tag

logger = logging.getLogger('typediff')

SURROGATES = range(0xD800, 0xE000)


def timer(method):
    @functools.wraps(method)
    def timed(*args, **kw):
        ts = time.time()
        result = method(*args, **kw)
        te = time.time()
        logger.info('%r  %2.2f ms', method.__name__, (te - ts) * 1000)
        return result
    return timed


def prepare_fonts(font_a, font_b, settings):
    """Move both fonts to the configured location or named instance.

    Raises ConfigurationError if either font can't be placed there.
    """

    if settings.location:
        font_a.set_location(settings.location)
        font_b.set_location(settings.location)
    elif settings.instance:
        font_a.set_instance(settings.instance)
        font_b.set_instance(settings.instance)


def _render(renderer, text):
    """Return (render, error message) for text in one font."""

    try:
        return renderer.render_string(text), None
    except Exception as e:
        logger.warning('%s: could not render %r: %s',
                       renderer.dfont.name, text, e)
        return None, '%s: %s' % (type(e).__name__, e)


def _render_pair(renderer_a, renderer_b, text):
    """Render text in both fonts.

    Returns (render_a, render_b, error); error names the side(s) that raised
    and is None when both renders went through.
    """

    render_a, error_a = _render(renderer_a, text)
    render_b, error_b = _render(renderer_b, text)
    errors = []
    if error_a:
        errors.append('LHS: %s' % error_a)
    if error_b:
        errors.append('RHS: %s' % error_b)
    return render_a, render_b, '; '.join(errors) or None


def _save_render(settings, filename, render_a, render_b):
    if not settings.render_path:
        return
    if not os.path.exists(settings.render_path):
        os.makedirs(settings.render_path)
    compare.save_comparison(
        render_a[1], render_b[1], os.path.join(settings.render_path, filename))


@timer
def diff_tables(font_a, font_b):
    return ttj.table_diff(font_a, font_b)


@timer
def diff_glyphs(font_a, font_b, settings=None):
    """Render every codepoint of either font and classify the differences.

    Codepoints whose rendering raised are listed under 'errors', which is
    only present when there are any.
    """

    settings = settings or Settings()
    renderer_a = Renderer(font_a, settings.font_size)
    renderer_b = Renderer(font_b, settings.font_size)
    result = {category: [] for category in compare.CATEGORIES}

    for codepoint in sorted(font_a.codepoints | font_b.codepoints):
        if codepoint in SURROGATES:
            continue
        render_a, render_b, error = _render_pair(
            renderer_a, renderer_b, chr(codepoint))
        if error:
            result.setdefault(compare.ERRORS, []).append(
                compare.glyph_error_entry(codepoint, error))
            continue
        outcome = compare.classify(render_a, render_b, settings.threshold)
        if outcome is None:
            continue
        category, percent = outcome
        result[category].append(
            compare.glyph_entry(codepoint, category, percent))
        if category == compare.MODIFIED:
            _save_render(settings, 'U+%04X.png' % codepoint,
                         render_a, render_b)

    logger.info('%d missing, %d new, %d modified glyphs, %d errors',
                len(result[compare.MISSING]), len(result[compare.NEW]),
                len(result[compare.MODIFIED]),
                len(result.get(compare.ERRORS, [])))
    return result


@timer
def diff_words(font_a, font_b, settings=None, wordlists=None):
    """Render the word lists of every script either font supports."""

    settings = settings or Settings()
    if wordlists is None:
        wordlists = WordLists(settings.wordlist_dir)
    cache_a = OutlineCache(font_a)
    cache_b = OutlineCache(font_b)
    result = {}

    scripts = font_a.supported_scripts() | font_b.supported_scripts()
    for script in sorted(scripts):
        words = wordlists.get(script)
        if not words:
            logger.debug('No word list for %s', script)
            continue
        direction = script_direction(script)
        tag = script_tag(script)
        renderer_a = Renderer(font_a, settings.font_size, direction, tag,
                              cache=cache_a)
        renderer_b = Renderer(font_b, settings.font_size, direction, tag,
                              cache=cache_b)

        entries = []
        for index, word in enumerate(words):
            render_a, render_b, error = _render_pair(
                renderer_a, renderer_b, word)
            if error:
                entries.append(compare.word_error_entry(word, error))
                continue
            if render_a is None or render_b is None:
                continue
            percent = compare.percent_difference(render_a[1], render_b[1])
            if percent <= settings.threshold:
                continue
            entries.append(compare.word_entry(word, percent))
            _save_render(settings, '%s-%d.png' % (script, index),
                         render_a, render_b)
        logger.info('%s: %d of %d words differ', script, len(entries),
                    len(words))
        if entries:
            result[script] = entries
    return result


class DiffFonts(object):
    """Diff two DFonts according to settings.

    Applies the configured location or instance on construction, so
    configuration errors surface before any diffing starts.
    """

    def __init__(self, font_a, font_b, settings=None, wordlists=None):
        self.font_a = font_a
        self.font_b = font_b
        self.settings = settings or Settings()
        self.wordlists = wordlists
        prepare_fonts(font_a, font_b, self.settings)
        self._data = {}

    def tables(self):
        self._data['tables'] = diff_tables(self.font_a, self.font_b)
        return self._data['tables']

    def glyphs(self):
        self._data['glyphs'] = diff_glyphs(
            self.font_a, self.font_b, self.settings)
        return self._data['glyphs']

    def words(self):
        self._data['words'] = diff_words(
            self.font_a, self.font_b, self.settings, self.wordlists)
        return self._data['words']

    def run(self):
        if self.settings.tables:
            self.tables()
        if self.settings.glyphs:
            self.glyphs()
        if self.settings.words:
            self.words()
        return self.to_value()

    def to_value(self):
        return {key: self._data[key] for key in ('tables', 'glyphs', 'words')
                if key in self._data}


def diff_fonts(font_a, font_b, settings=None, wordlists=None):
    return DiffFonts(font_a, font_b, settings, wordlists).run()
