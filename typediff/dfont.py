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


"""Font handle used by the table and rendering diffs.

DFont wraps the binary of one font together with the design-space location it
is compared at. It answers the questions the diff engines ask of a font:
which codepoints and scripts it supports, which axes and named instances it
has, what a glyph's outline looks like, and how to shape text with it.
"""

import collections
import io
import logging
import struct

import uharfbuzz as hb
from fontTools import unicodedata
from fontTools.pens.boundsPen import BoundsPen
from fontTools.pens.recordingPen import DecomposingRecordingPen
from fontTools.ttLib import TTFont, TTLibError
from fontTools.varLib import instancer

from typediff.errors import ConfigurationError, FontLoadError

logger = logging.getLogger('typediff')

COLOR_TABLES = ('SVG ', 'COLR', 'CBDT')

Outline = collections.namedtuple(
    'Outline', ['commands', 'advance', 'lsb', 'bounds'])


class DFont(object):
    """A font binary plus the location it is diffed at."""

    def __init__(self, data, location=None, name=None):
        self.backing = bytes(data)
        self.name = name or '<memory>'
        try:
            self.ttfont = TTFont(io.BytesIO(self.backing))
            cmap = self.ttfont.getBestCmap() or {}
        except (TTLibError, struct.error, ValueError, KeyError) as e:
            raise FontLoadError('Could not parse %s: %s' % (self.name, e))
        self.codepoints = set(cmap)
        self.location = {}
        self._glyph_set = None
        if location:
            self._apply_location(dict(location))

    @classmethod
    def from_path(cls, path, location=None):
        try:
            with open(path, 'rb') as f:
                data = f.read()
        except (IOError, OSError) as e:
            raise FontLoadError('Could not open %s: %s' % (path, e))
        return cls(data, location=location, name=path)

    def is_variable(self):
        return 'fvar' in self.ttfont

    def is_color(self):
        return any(tag in self.ttfont for tag in COLOR_TABLES)

    def _name_table(self):
        """Return the name table, or None if it is missing or unreadable."""

        if 'name' not in self.ttfont:
            return None
        try:
            return self.ttfont['name']
        except Exception as e:
            logger.warning('%s: could not decode name table: %s',
                           self.name, e)
            self.ttfont.tables.pop('name', None)
            return None

    def family_name(self):
        name_table = self._name_table()
        if name_table is None:
            return 'Unknown'
        return name_table.getBestFamilyName() or 'Unknown'

    def style_name(self):
        name_table = self._name_table()
        if name_table is None:
            return 'Regular'
        return name_table.getBestSubFamilyName() or 'Regular'

    def axes(self):
        """Return {axis tag: (min, default, max)}."""

        if not self.is_variable():
            return {}
        return collections.OrderedDict(
            (axis.axisTag, (axis.minValue, axis.defaultValue, axis.maxValue))
            for axis in self.ttfont['fvar'].axes)

    def named_instances(self):
        """Return {instance name: {axis tag: value}} from fvar."""

        if not self.is_variable():
            return {}
        name_table = self._name_table()
        instances = collections.OrderedDict()
        for instance in self.ttfont['fvar'].instances:
            name = None
            if name_table is not None:
                name = name_table.getDebugName(instance.subfamilyNameID)
            if name is None:
                name = 'instance%d' % len(instances)
            instances[name] = dict(instance.coordinates)
        return instances

    def set_location(self, text):
        """Set the location from a string like 'wght=700,wdth=80'."""

        location = {}
        for setting in text.split(','):
            setting = setting.strip()
            if not setting:
                continue
            if '=' not in setting:
                raise ConfigurationError(
                    'Bad location setting "%s", expected axis=value' % setting)
            axis, value = setting.split('=', 1)
            try:
                location[axis.strip()] = float(value)
            except ValueError:
                raise ConfigurationError(
                    'Bad value "%s" for axis %s' % (value, axis))
        self._apply_location(location)

    def set_instance(self, instance_name):
        instances = self.named_instances()
        if instance_name not in instances:
            raise ConfigurationError(
                'No instance "%s" in %s (have: %s)' % (
                    instance_name, self.name,
                    ', '.join(instances) or 'none'))
        self._apply_location(instances[instance_name])

    def _apply_location(self, location):
        if location and not self.is_variable():
            raise ConfigurationError(
                '%s is not a variable font, cannot set a location' % self.name)
        axes = self.axes()
        for tag, value in location.items():
            if tag not in axes:
                raise ConfigurationError(
                    'No axis "%s" in %s' % (tag, self.name))
            minimum, _, maximum = axes[tag]
            if not minimum <= value <= maximum:
                raise ConfigurationError(
                    'Value %g for axis %s outside of range %g..%g' % (
                        value, tag, minimum, maximum))
        self.location = location
        self._glyph_set = None
        logger.debug('%s: location %s', self.name, location)

    def supported_scripts(self):
        """Return Unicode script names (e.g. 'Latin') of mapped codepoints."""

        scripts = set()
        for codepoint in self.codepoints:
            code = unicodedata.script(chr(codepoint))
            scripts.add(unicodedata.script_name(code, default=code))
        return scripts

    def glyph_set(self):
        if self._glyph_set is None:
            if self.location:
                self._glyph_set = self.ttfont.getGlyphSet(
                    location=self.location)
            else:
                self._glyph_set = self.ttfont.getGlyphSet()
        return self._glyph_set

    def glyph_name(self, gid):
        return self.ttfont.getGlyphName(gid)

    def outline(self, gid):
        """Return the Outline for a glyph id, or None if there is no glyph."""

        glyph_set = self.glyph_set()
        name = self.glyph_name(gid)
        if name not in glyph_set:
            return None
        glyph = glyph_set[name]
        pen = DecomposingRecordingPen(glyph_set)
        glyph.draw(pen)
        bounds_pen = BoundsPen(glyph_set)
        pen.replay(bounds_pen)
        lsb = getattr(glyph, 'lsb', None)
        if lsb is None:
            lsb = bounds_pen.bounds[0] if bounds_pen.bounds else 0
        return Outline(pen.value, glyph.width, lsb, bounds_pen.bounds)

    def ascender(self):
        if 'hhea' in self.ttfont:
            return self.ttfont['hhea'].ascent
        return self.ttfont['head'].unitsPerEm * 0.8

    def descender(self):
        if 'hhea' in self.ttfont:
            return self.ttfont['hhea'].descent
        return -self.ttfont['head'].unitsPerEm * 0.2

    def height_unscaled(self):
        height = self.ascender() - self.descender()
        return height or self.ttfont['head'].unitsPerEm

    def hb_font(self):
        """Return a fresh harfbuzz font at this location."""

        font = hb.Font(hb.Face(hb.Blob(self.backing)))
        if self.location:
            font.set_variations(self.location)
        return font

    def tables_font(self):
        """Return the TTFont whose tables are diffed.

        For a variable font with a location this is a static instance at that
        location, otherwise the font itself.
        """

        if not (self.location and self.is_variable()):
            return self.ttfont
        font = TTFont(io.BytesIO(self.backing))
        try:
            return instancer.instantiateVariableFont(
                font, dict(self.location), inplace=True)
        except (ValueError, TTLibError) as e:
            raise ConfigurationError(
                'Could not instance %s at %s: %s' % (
                    self.name, self.location, e))
