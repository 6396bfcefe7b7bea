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


"""The value tree shared by decoded font tables and diff results.

A value is one of None, bool, int, float, str, a list of values or a dict
mapping str to values. Dicts keep insertion order. Two markers complete the
set: ABSENT stands for a key missing from an object, and DecodeFailure stands
for a table or field that could not be decoded.
"""

import collections.abc
import json
import math


class _Absent(object):
    """A key that is not present in an object."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(_Absent, cls).__new__(cls)
        return cls._instance

    def __repr__(self):
        return '<absent>'

    def __bool__(self):
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


ABSENT = _Absent()

# how ABSENT is written out, distinct from null
ABSENT_LABEL = '<absent>'


class DecodeFailure(object):
    """Placeholder for data that failed to decode on one side."""

    def __init__(self, message):
        self.message = message

    def __repr__(self):
        return 'DecodeFailure(%r)' % self.message

    def __eq__(self, other):
        # failures never compare equal, not even to themselves
        return False

    def __ne__(self, other):
        return True

    __hash__ = object.__hash__


_SCALARS = (bool, int, float, str)


def to_value(obj):
    """Normalize obj into the closed set of value types.

    Tuples, sets and other sequences become lists, bytes become lists of
    ints, mapping keys become strings. Raises TypeError for anything that
    has no value representation.
    """

    if obj is None or obj is ABSENT or isinstance(obj, DecodeFailure):
        return obj
    if isinstance(obj, _SCALARS):
        return obj
    if isinstance(obj, collections.abc.Mapping):
        return {str(k): to_value(v) for k, v in obj.items()}
    if isinstance(obj, (bytes, bytearray)):
        return list(obj)
    if isinstance(obj, (set, frozenset)):
        return [to_value(v) for v in sorted(obj, key=repr)]
    if isinstance(obj, collections.abc.Iterable):
        return [to_value(v) for v in obj]
    raise TypeError('no value representation for %r' % type(obj).__name__)


def is_something(value):
    """Return whether value is meaningfully present.

    None, ABSENT, failures and empty strings, lists and dicts are not.
    Numbers and booleans always are.
    """

    if value is None or value is ABSENT or isinstance(value, DecodeFailure):
        return False
    if isinstance(value, (str, list, dict)):
        return len(value) > 0
    return True


def values_equal(a, b):
    """Deep structural equality over value trees.

    Unlike ==, this keeps booleans and numbers apart and compares dicts key by
    key regardless of insertion order.
    """

    if isinstance(a, DecodeFailure) or isinstance(b, DecodeFailure):
        return False
    if a is ABSENT or b is ABSENT:
        return a is b
    if a is None or b is None:
        return a is b
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        if isinstance(a, float) and isinstance(b, float) and \
                math.isnan(a) and math.isnan(b):
            return True
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(
            values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(values_equal(a[k], b[k]) for k in a)
    return False


def _json_default(obj):
    if obj is ABSENT:
        return ABSENT_LABEL
    if isinstance(obj, DecodeFailure):
        return {'error': obj.message}
    raise TypeError('%r is not JSON serializable' % obj)


def to_json(value, indent=2):
    """Serialize a value tree.

    ABSENT is written as the string "<absent>" so that a key missing on one
    side stays distinguishable from a null value.
    """

    return json.dumps(
        value, indent=indent, ensure_ascii=False,
        default=_json_default)

