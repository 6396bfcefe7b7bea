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


"""Structural diff of value trees.

`diff` compares two value trees and returns a diff tree built from three kinds
of node:

* a nested dict holding only the keys whose children differ,
* a leaf pair `[left, right]` for anything that is not compared key by key
  (scalars, lists, or an object against a non-object),
* an error leaf `{"error": message}` where one side failed to decode.

An empty dict means "no difference". Lists are never diffed element by
element: one changed element surfaces the whole list on both sides.
"""

from typediff.value import (
    ABSENT, ABSENT_LABEL, DecodeFailure, is_something, values_equal)


def diff(left, right):
    """Return the diff tree between two value trees."""

    if isinstance(left, DecodeFailure) or isinstance(right, DecodeFailure):
        return {'error': _failure_message(left, right)}

    if isinstance(left, dict) and isinstance(right, dict):
        result = {}
        for key in _union_keys(left, right):
            child = diff(left.get(key, ABSENT), right.get(key, ABSENT))
            if _has_difference(child):
                result[key] = child
        return result

    if values_equal(left, right):
        return {}
    return [left, right]


def _union_keys(left, right):
    keys = list(left)
    keys.extend(k for k in right if k not in left)
    return keys


def _has_difference(node):
    return not (isinstance(node, dict) and not node)


def _failure_message(left, right):
    messages = []
    if isinstance(left, DecodeFailure):
        messages.append('LHS: %s' % left.message)
    if isinstance(right, DecodeFailure):
        messages.append('RHS: %s' % right.message)
    return '; '.join(messages)


def is_leaf_pair(node):
    return isinstance(node, list) and len(node) == 2


def is_error(node):
    return isinstance(node, dict) and list(node) == ['error'] and \
        isinstance(node['error'], str)


def format_value(value):
    if value is ABSENT:
        return ABSENT_LABEL
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return '"%s"' % value
    if isinstance(value, list):
        return '[%s]' % ','.join(format_value(v) for v in value)
    if isinstance(value, dict):
        return '{%s}' % ','.join(
            '"%s":%s' % (k, format_value(v)) for k, v in value.items())
    return str(value)


def succinct_pair(left, right, succinct=True):
    """Return display strings for a leaf pair.

    In succinct mode, when exactly one side is something the other side is
    shown as absent rather than as its (null or empty) value.
    """

    if succinct and is_something(left) and not is_something(right):
        return format_value(left), ABSENT_LABEL
    if succinct and is_something(right) and not is_something(left):
        return ABSENT_LABEL, format_value(right)
    return format_value(left), format_value(right)
