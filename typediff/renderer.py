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


"""Shape strings and rasterize them into grayscale bitmaps.

A Renderer is bound to one font, size, direction and script. render_string
returns None whenever the font cannot represent the input (a codepoint missing
from the cmap, or shaping producing .notdef); comparing such renders would
only compare placeholder boxes.

Glyphs are rasterized with FreeType at a hard 0.5 coverage threshold and
added into the canvas with saturation, so overlapping strokes stay visible.
"""

import logging

import numpy as np
from fontTools.misc.transform import Transform
from fontTools.pens.freetypePen import FreeTypePen
from fontTools.pens.recordingPen import replayRecording
from PIL import Image

from typediff.shaping import NOTDEF, shape

logger = logging.getLogger('typediff')

COVERAGE_THRESHOLD = 0.5
LINE_HEIGHT = 1.2


class OutlineCache(object):
    """Outlines of one font by glyph id, filled on first use.

    Owned by whoever renders with it; not safe to share between threads.
    """

    def __init__(self, dfont):
        self.dfont = dfont
        self._outlines = {}

    def get(self, gid):
        if gid not in self._outlines:
            self._outlines[gid] = self.dfont.outline(gid)
        return self._outlines[gid]

    def __contains__(self, gid):
        return gid in self._outlines

    def __len__(self):
        return len(self._outlines)


class Renderer(object):

    def __init__(self, dfont, font_size=40, direction=None, script=None,
                 cache=None):
        if cache is not None and cache.dfont is not dfont:
            raise ValueError('outline cache belongs to a different font')
        self.dfont = dfont
        self.codepoints = dfont.codepoints
        self.scale = font_size
        self.direction = direction
        self.script = script
        self.hb_font = dfont.hb_font()
        self.factor = font_size / dfont.height_unscaled()
        self.ascender = dfont.ascender()
        self.cache = cache if cache is not None else OutlineCache(dfont)

    def render_string(self, text):
        """Return (trace, image) for text, or None if it can't be rendered.

        The trace lists the shaped glyphs as 'gid=<id>,position=<x>,<y>'
        joined by '|'. The image is a PIL image in mode 'L'.
        """

        if any(ord(char) not in self.codepoints for char in text):
            return None

        positions = shape(self.hb_font, self.direction, self.script, text)
        if not positions:
            return None
        if any(position.gid == NOTDEF for position in positions):
            return None

        # the pen starts at the side bearing of the first spacing glyph, so
        # leading marks have room to the left of it
        cursor = 0.0
        for position in positions:
            if position.x_advance > 0:
                outline = self.cache.get(position.gid)
                cursor = (outline.lsb if outline else 0) * self.factor
                break

        placed = []
        trace = []
        for position in positions:
            x = cursor + position.x_offset * self.factor
            y = position.y_offset * self.factor
            placed.append((position.gid, x, y))
            trace.append('gid=%d,position=%d,%d' % (
                position.gid, position.x_offset, position.y_offset))
            cursor += position.x_advance * self.factor

        width = max(int(self._right_edge(*placed[-1])), 1)
        height = int(self.scale * LINE_HEIGHT)

        canvas = np.zeros((height, width), dtype=np.uint16)
        for gid, x, y in placed:
            outline = self.cache.get(gid)
            if outline is None or not outline.commands:
                continue
            coverage = self._rasterize(outline, x, y, width, height)
            canvas += np.where(coverage >= COVERAGE_THRESHOLD, 255, 0).astype(
                np.uint16)
            np.minimum(canvas, 255, out=canvas)

        trace = '|'.join(trace)
        logger.debug('%s: %r -> %s', self.dfont.name, text, trace)
        return trace, Image.fromarray(canvas.astype(np.uint8))

    def _right_edge(self, gid, x, y):
        outline = self.cache.get(gid)
        if outline is None:
            return x
        edge = outline.advance
        if outline.bounds:
            edge = max(edge, outline.bounds[2])
        return x + edge * self.factor

    def _rasterize(self, outline, x, y, width, height):
        """Return the coverage of one glyph on a width x height canvas."""

        pen = FreeTypePen(None)
        replayRecording(outline.commands, pen)
        # FreeType's bitmap origin is the bottom left corner
        baseline = height - self.ascender * self.factor + y
        transform = Transform(self.factor, 0, 0, self.factor, x, baseline)
        return pen.array(width=width, height=height, transform=transform)
