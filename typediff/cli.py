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


"""Provides the command-line utility `typediff`.

Compares two versions of a font: the decoded contents of their tables, the
rendering of every encoded glyph, and the rendering of word lists for every
script the fonts support. Prints a text report, or JSON with --json.
"""

import argparse
import logging
import sys

from typediff import report
from typediff.config import Settings
from typediff.dfont import DFont
from typediff.diff import DiffFonts
from typediff.errors import TypediffError
from typediff.value import to_json

logger = logging.getLogger('typediff')


def _add_toggle(parser, name, help_text):
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--%s' % name, dest=name, action='store_true',
                       default=None, help='%s [default]' % help_text)
    group.add_argument('--no-%s' % name, dest=name, action='store_false',
                       default=None, help="don't %s" % help_text)


def _build_parser():
    parser = argparse.ArgumentParser(
        description='Find regressions between two versions of a font.')
    parser.add_argument('font1', help='the first (old) font file')
    parser.add_argument('font2', help='the second (new) font file')
    _add_toggle(parser, 'tables', 'show diffs in font tables')
    _add_toggle(parser, 'glyphs', 'show diffs in glyph images')
    _add_toggle(parser, 'words', 'show diffs in word images')
    _add_toggle(parser, 'succinct',
                'report entries absent in one font as just absent')
    parser.add_argument('--json', action='store_true',
                        help='print the diff as JSON')
    location = parser.add_mutually_exclusive_group()
    location.add_argument('--location',
                          help='location in design space, in the form '
                          'axis=123,other=456')
    location.add_argument('--instance', help='named instance to compare')
    parser.add_argument('--font-size', type=float,
                        help='size to render samples at (default 40)')
    parser.add_argument('--threshold', type=float,
                        help='minimal percentage of differing pixels to '
                        'report (default 0)')
    parser.add_argument('--wordlists', dest='wordlist_dir',
                        help='directory of <Script>.txt word lists, used '
                        'before the bundled ones')
    parser.add_argument('--render-path', help='if provided, saves comparison '
                        'renderings of modified glyphs and words here')
    parser.add_argument('--config', help='file of <name> = <value> settings')
    parser.add_argument('--verbose', default='WARNING')
    return parser


def _settings_from_args(args):
    overrides = {}
    for key in Settings.DEFAULTS:
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    if args.config:
        return Settings.from_file(args.config, **overrides)
    return Settings(**overrides)


def main(argv=None):
    args = _build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.verbose.upper()))

    try:
        settings = _settings_from_args(args)
        font_a = DFont.from_path(args.font1)
        font_b = DFont.from_path(args.font2)
        logger.info('Comparing %s %s with %s %s', font_a.family_name(),
                    font_a.style_name(), font_b.family_name(),
                    font_b.style_name())
        diff = DiffFonts(font_a, font_b, settings).run()
    except TypediffError as e:
        print('Error: %s' % e, file=sys.stderr)
        return 1

    if args.json:
        print(to_json(diff))
    else:
        text = report.to_text(diff, succinct=settings.succinct)
        if text:
            print(text)
    return 0


if __name__ == '__main__':
    sys.exit(main())
