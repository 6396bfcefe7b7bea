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


"""Plain text and JSON renderings of a diff value tree."""

from typediff import jsondiff
from typediff.value import is_something


def to_text(diff, succinct=True):
    """Return a human readable report of a diff value tree."""

    report = []
    tables = diff.get('tables') or {}
    for table_name, table_diff in tables.items():
        report.append('')
        report.append('# %s' % table_name)
        if jsondiff.is_leaf_pair(table_diff):
            left, right = table_diff
            if succinct and is_something(left) and not is_something(right):
                report.append('Table was present in LHS but absent in RHS')
            elif succinct and is_something(right) and not is_something(left):
                report.append('Table was present in RHS but absent in LHS')
            else:
                report.append('LHS had: %s' % jsondiff.format_value(left))
                report.append('RHS had: %s' % jsondiff.format_value(right))
        elif jsondiff.is_error(table_diff):
            report.append(table_diff['error'])
        elif isinstance(table_diff, dict):
            _add_fields(report, table_diff, 0, succinct)
        else:
            report.append('Unexpected diff format: %s' % table_diff)

    glyphs = diff.get('glyphs')
    if glyphs and any(glyphs.get(category) for category in glyphs):
        report.append('')
        report.append('# Glyphs')
        for category, title in (('missing', 'Missing glyphs:'),
                                ('new', 'New glyphs:'),
                                ('modified', 'Modified glyphs:'),
                                ('errors', 'Glyphs that failed to render:')):
            if not glyphs.get(category):
                continue
            report.append('')
            report.append(title)
            for glyph in glyphs[category]:
                if 'error' in glyph:
                    detail = glyph['error']
                else:
                    detail = '%.3f%%' % glyph['percent']
                report.append('  - %s (%s: %s) %s' % (
                    glyph['string'], glyph['unicode'], glyph['name'], detail))

    words = diff.get('words')
    if words:
        report.append('')
        report.append('# Words')
        for script, entries in words.items():
            report.append('')
            report.append('## %s' % script)
            for entry in entries:
                if 'error' in entry:
                    report.append('  - %s (%s)' % (
                        entry['word'], entry['error']))
                else:
                    report.append('  - %s (%.3f%%)' % (
                        entry['word'], entry['percent']))

    return '\n'.join(report).lstrip('\n')


def _add_fields(report, fields, indent, succinct):
    for field, node in fields.items():
        prefix = '  ' * indent
        if field == 'error' and isinstance(node, str):
            report.append('%s%s' % (prefix, node))
        elif jsondiff.is_leaf_pair(node):
            left, right = jsondiff.succinct_pair(node[0], node[1], succinct)
            report.append('%s%s: %s => %s' % (prefix, field, left, right))
        elif isinstance(node, dict):
            report.append('%s%s:' % (prefix, field))
            _add_fields(report, node, indent + 1, succinct)