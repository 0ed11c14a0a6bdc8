# Copyright 2026 TIER IV, inc.
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


from __future__ import annotations

from typing import Any, List, Optional

import yaml

from ..models.document import SourceMap


def json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def join_path(base: Optional[str], token: Any) -> str:
    if not base:
        return f"/{json_pointer_escape(str(token))}"
    return f"{base}/{json_pointer_escape(str(token))}"


def _build_source_map(root: Optional[yaml.Node]) -> SourceMap:
    """Map JSON-pointer-like paths of one composed document to 1-based line/column."""
    source_map: SourceMap = {}
    if root is None:
        return source_map

    def _record(path: str, node) -> None:
        mark = getattr(node, "start_mark", None)
        if mark is None:
            return
        # PyYAML uses 0-based line/column
        source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

    active = set()

    def _walk(node, path: str) -> None:
        _record(path, node)
        # An alias may point back at one of its own ancestors
        if id(node) in active:
            return
        active.add(id(node))

        if isinstance(node, yaml.nodes.MappingNode):
            for key_node, value_node in node.value:
                key = getattr(key_node, "value", None)
                if key is None:
                    continue
                _walk(value_node, join_path(path, key))
        elif isinstance(node, yaml.nodes.SequenceNode):
            for idx, item_node in enumerate(node.value):
                _walk(item_node, join_path(path, idx))

        active.discard(id(node))

    _walk(root, "")
    return source_map


def build_source_maps(content: str) -> List[SourceMap]:
    """Build one source map per ``---``-separated document of ``content``.

    This uses PyYAML's node tree (yaml.compose_all) so we can track locations
    without changing the data shapes returned by safe_load_all. Returns an
    empty list when composing fails; parse errors are reported elsewhere.
    """
    try:
        roots = list(yaml.compose_all(content, Loader=yaml.SafeLoader))
    except yaml.YAMLError:
        return []
    return [_build_source_map(root) for root in roots]

