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


"""Score and classify pairs of renders of the same sample string."""

import numpy as np
from fontTools import unicodedata
from PIL import Image

MISSING = 'missing'
NEW = 'new'
MODIFIED = 'modified'
CATEGORIES = (MISSING, NEW, MODIFIED)
# samples whose rendering raised, kept apart from the categories
ERRORS = 'errors'


def percent_difference(img_a, img_b):
    """Return the percentage of differing pixels between two bitmaps.

    The bitmaps are aligned at their top left corners and compared over the
    union of their extents. Pixels covered by only one of them count as
    different, so a change in size is never ignored.
    """

    data_a = np.asarray(img_a, dtype=np.int16)
    data_b = np.asarray(img_b, dtype=np.int16)
    height_a, width_a = data_a.shape
    height_b, width_b = data_b.shape

    total = max(width_a, width_b) * max(height_a, height_b)
    if not total:
        return 0.0
    height, width = min(height_a, height_b), min(width_a, width_b)
    overlap = data_a[:height, :width] != data_b[:height, :width]
    differing = int(np.count_nonzero(overlap)) + total - width * height
    return differing * 100.0 / total


def classify(render_a, render_b, threshold=0.0):
    """Return (category, percent) for two renders, or None.

    Renders are (trace, image) pairs or None when the font cannot render the
    sample. Nothing is reported when neither font renders it, or when both do
    and the difference does not exceed threshold.
    """

    if render_a is None and render_b is None:
        return None
    if render_a is None:
        return NEW, 100.0
    if render_b is None:
        return MISSING, 100.0
    percent = percent_difference(render_a[1], render_b[1])
    if percent <= threshold:
        return None
    return MODIFIED, percent


def _char_fields(codepoint):
    char = chr(codepoint)
    return {
        'string': char,
        'unicode': 'U+%04X' % codepoint,
        'name': unicodedata.name(char, ''),
    }


def glyph_entry(codepoint, category, percent):
    entry = _char_fields(codepoint)
    entry['percent'] = percent
    entry['category'] = category
    return entry


def glyph_error_entry(codepoint, message):
    entry = _char_fields(codepoint)
    entry['error'] = message
    return entry


def word_entry(word, percent):
    return {'word': word, 'percent': percent}


def word_error_entry(word, message):
    return {'word': word, 'error': message}


def save_comparison(img_a, img_b, path):
    """Save an overlay of two renders: A in red, B in green, both in white."""

    data_a = np.asarray(img_a, dtype=np.uint8)
    data_b = np.asarray(img_b, dtype=np.uint8)
    height = max(data_a.shape[0], data_b.shape[0])
    width = max(data_a.shape[1], data_b.shape[1])
    rgb = np.zeros((height, width, 3), dtype=np.uint8)
    rgb[:data_a.shape[0], :data_a.shape[1], 0] = data_a
    rgb[:data_b.shape[0], :data_b.shape[1], 1] = data_b
    rgb[:, :, 2] = np.minimum(rgb[:, :, 0], rgb[:, :, 1])
    Image.fromarray(rgb).save(path)
