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


"""Decode font tables into value trees, and the `ttj` command.

Every table of the font's table directory is walked attribute by attribute
into plain values so two fonts can be compared with jsondiff. Tables are
decoded independently: one that fails to parse becomes a DecodeFailure and
does not affect the others.
"""

import argparse
import array
import collections.abc
import logging
import sys

from fontTools.ttLib import TTFont
from fontTools.ttLib.tables.DefaultTable import DefaultTable
from fontTools.ttLib.tables._g_l_y_f import GlyphCoordinates

from typediff import jsondiff
from typediff.dfont import DFont
from typediff.errors import TypediffError
from typediff.value import ABSENT, DecodeFailure, to_json

logger = logging.getLogger('typediff')

# attributes that are bookkeeping of the decoder rather than font data
SKIPPED_ATTRIBUTES = frozenset(['reader', 'ttFont'])

# fields derived from the whole binary that differ whenever anything does
DERIVED_FIELDS = {
    'head': frozenset(['checkSumAdjustment']),
}


def font_to_value(dfont):
    """Return {table tag: value} for all tables of a DFont."""

    ttfont = dfont.tables_font()
    result = {}
    for tag in sorted(tag for tag in ttfont.keys() if tag != 'GlyphOrder'):
        result[str(tag)] = table_to_value(ttfont, tag)
    # a name table that failed to decode stays a DecodeFailure
    if isinstance(result.get('name'), dict):
        result['name'] = name_table_to_value(ttfont)
    return result


def table_diff(font_a, font_b):
    return jsondiff.diff(font_to_value(font_a), font_to_value(font_b))


def table_to_value(ttfont, tag):
    try:
        table = ttfont[tag]
        if hasattr(table, 'ensureDecompiled'):
            table.ensureDecompiled(recurse=True)
        if type(table) is DefaultTable:
            return list(table.data)
        if tag == 'glyf':
            return {name: _serialize(table[name], set())
                    for name in table.keys()}
        value = _serialize(table, set())
    except Exception as e:
        logger.warning('Could not decode %s table: %s', tag, e)
        # drop the half decoded table so later lookups fail the same way
        ttfont.tables.pop(tag, None)
        return DecodeFailure('Could not parse %s: %s' % (tag, e))
    for field in DERIVED_FIELDS.get(tag, ()):
        value.pop(field, None)
    return value


def name_table_to_value(ttfont):
    """Return {name id: {platform/encoding/language: string}}.

    Returns ABSENT if the font has no name table.
    """

    if 'name' not in ttfont:
        return ABSENT
    records = ttfont['name'].names
    result = {}
    for name_id in sorted(set(record.nameID for record in records)):
        localized = {}
        for record in records:
            if record.nameID != name_id:
                continue
            try:
                string = record.toUnicode()
            except UnicodeDecodeError:
                continue
            key = '%d/%d/0x%04X' % (
                record.platformID, record.platEncID, record.langID)
            localized[key] = string
        if localized:
            result[str(name_id)] = localized
    return result


def _serialize(obj, seen):
    if obj is None or isinstance(obj, bool):
        return obj
    if isinstance(obj, int):
        return int(obj)
    if isinstance(obj, float):
        return float(obj)
    if isinstance(obj, str):
        return str(obj)
    if isinstance(obj, (bytes, bytearray)):
        return list(obj)
    if isinstance(obj, GlyphCoordinates):
        return [[x, y] for x, y in obj]
    if isinstance(obj, array.array):
        return obj.tolist()
    if isinstance(obj, collections.abc.Mapping):
        return {str(k): _serialize(v, seen) for k, v in obj.items()}
    if isinstance(obj, (set, frozenset)):
        return [_serialize(v, seen) for v in sorted(obj, key=repr)]
    if isinstance(obj, (list, tuple)):
        return [_serialize(v, seen) for v in obj]
    if hasattr(obj, '__dict__'):
        if id(obj) in seen:
            return None
        seen.add(id(obj))
        result = {}
        for key, value in vars(obj).items():
            if key.startswith('_') or key in SKIPPED_ATTRIBUTES:
                continue
            if isinstance(value, TTFont):
                continue
            result[key] = _serialize(value, seen)
        seen.discard(id(obj))
        return result
    return str(obj)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Dump a font file to JSON.')
    parser.add_argument('font', help='font file to dump')
    parser.add_argument('--location',
                        help='location in design space, e.g. wght=700')
    parser.add_argument('--verbose', default='WARNING')
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.verbose.upper()))

    try:
        dfont = DFont.from_path(args.font)
        if args.location:
            dfont.set_location(args.location)
        value = font_to_value(dfont)
    except TypediffError as e:
        print('Error: %s' % e, file=sys.stderr)
        return 1
    print(to_json(value))
    return 0


if __name__ == '__main__':
    sys.exit(main())
