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


"""Thin wrapper around harfbuzz shaping."""

import collections

import uharfbuzz as hb

NOTDEF = 0

GlyphPosition = collections.namedtuple(
    'GlyphPosition',
    ['gid', 'x_offset', 'y_offset', 'x_advance', 'y_advance'])


def shape(hb_font, direction, script, text, features=None):
    """Shape text and return a list of GlyphPosition in visual order.

    direction is 'ltr', 'rtl', 'ttb' or 'btt'; script an ISO 15924 tag such
    as 'Latn'. Either may be None to let harfbuzz guess from the text.
    """

    buf = hb.Buffer()
    buf.add_str(text)
    if direction:
        buf.direction = direction
    if script:
        buf.script = script
    buf.guess_segment_properties()
    hb.shape(hb_font, buf, features or {})
    return [
        GlyphPosition(info.codepoint, pos.x_offset, pos.y_offset,
                      pos.x_advance, pos.y_advance)
        for info, pos in zip(buf.glyph_infos, buf.glyph_positions)]
