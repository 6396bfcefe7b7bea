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


"""Exceptions that end a comparison run.

Per-item problems (a table that fails to decode, a string a font cannot
render) are recorded in the diff output instead of raised.
"""


class TypediffError(Exception):
    pass


class FontLoadError(TypediffError):
    """A font binary could not be read or parsed."""


class ConfigurationError(TypediffError):
    """Invalid settings, location or named instance."""
