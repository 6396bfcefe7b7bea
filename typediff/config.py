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


"""Settings for a comparison run.

Settings are passed explicitly to the code that needs them. They can be read
from a config file made of lines of the form <name> = <value>; blank lines and
lines starting with '#' are ignored.
"""

from typediff.errors import ConfigurationError


def _parse_bool(value):
    lowered = value.strip().lower()
    if lowered in ('1', 'true', 'yes', 'on'):
        return True
    if lowered in ('0', 'false', 'no', 'off'):
        return False
    raise ValueError('not a boolean: %s' % value)


def _parse_optional(value):
    value = value.strip()
    return value or None


class Settings(object):

    DEFAULTS = dict(
        font_size=40.0,
        tables=True,
        glyphs=True,
        words=True,
        succinct=True,
        location=None,
        instance=None,
        wordlist_dir=None,
        threshold=0.0,
        render_path=None,
    )

    PARSERS = dict(
        font_size=float,
        tables=_parse_bool,
        glyphs=_parse_bool,
        words=_parse_bool,
        succinct=_parse_bool,
        location=_parse_optional,
        instance=_parse_optional,
        wordlist_dir=_parse_optional,
        threshold=float,
        render_path=_parse_optional,
    )

    def __init__(self, **kwargs):
        for key, value in self.DEFAULTS.items():
            setattr(self, key, value)
        self.update(**kwargs)

    def update(self, **kwargs):
        for key, value in kwargs.items():
            if key not in self.DEFAULTS:
                raise ConfigurationError('Unknown setting "%s"' % key)
            setattr(self, key, value)
        self.validate()

    def validate(self):
        if self.location and self.instance:
            raise ConfigurationError(
                'Only one of location and instance can be set')
        if self.font_size <= 0:
            raise ConfigurationError(
                'font_size must be positive, got %s' % self.font_size)
        if self.threshold < 0:
            raise ConfigurationError(
                'threshold can not be negative, got %s' % self.threshold)

    @classmethod
    def from_file(cls, path, **overrides):
        """Read settings from path; keyword arguments take precedence."""

        values = {}
        try:
            with open(path) as f:
                lines = f.readlines()
        except (IOError, OSError) as e:
            raise ConfigurationError('Could not read %s: %s' % (path, e))
        for lineno, line in enumerate(lines, 1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            if '=' not in line:
                raise ConfigurationError(
                    '%s:%d: expected <name> = <value>' % (path, lineno))
            key, value = line.split('=', 1)
            key = key.strip()
            if key not in cls.PARSERS:
                raise ConfigurationError(
                    '%s:%d: unknown setting "%s"' % (path, lineno, key))
            try:
                values[key] = cls.PARSERS[key](value)
            except ValueError as e:
                raise ConfigurationError('%s:%d: %s' % (path, lineno, e))
        values.update(overrides)
        return cls(**values)

    def __repr__(self):
        return 'Settings(%s)' % ', '.join(
            '%s=%r' % (key, getattr(self, key)) for key in self.DEFAULTS)
