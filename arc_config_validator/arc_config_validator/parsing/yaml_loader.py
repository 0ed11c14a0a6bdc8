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

"""Manifest discovery and YAML decoding."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from ..config import ValidatorConfig, validator_config
from ..exceptions import EnvironmentFailure, ManifestDecodeError
from ..models.document import Document, ManifestKind, SourceFile, SourceMap
from .source_location import build_source_maps

logger = logging.getLogger(__name__)

EMBEDDED_SUFFIXES = (".yaml", ".yml")

DecodedDocument = Tuple[Any, SourceMap]
Decoder = Callable[[str], List[DecodedDocument]]


def decode_yaml(content: str) -> List[DecodedDocument]:
    """Decode every ``---``-separated document of ``content``.

    Raises:
        ManifestDecodeError: If the content is not well-formed YAML
    """
    try:
        documents = list(yaml.safe_load_all(content))
    except yaml.YAMLError as exc:
        raise ManifestDecodeError(f"Failed to parse YAML content: {exc}") from exc

    source_maps = build_source_maps(content)
    if len(source_maps) != len(documents):
        source_maps = [{} for _ in documents]
    return list(zip(documents, source_maps))


def decode_embedded(data: Any) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """Decode YAML payloads embedded in a ConfigMap ``data`` mapping."""
    embedded: Dict[str, Any] = {}
    errors: Dict[str, str] = {}
    if not isinstance(data, dict):
        return embedded, errors

    for key, value in data.items():
        if not isinstance(key, str) or not key.endswith(EMBEDDED_SUFFIXES):
            continue
        if not isinstance(value, str):
            continue
        try:
            embedded[key] = yaml.safe_load(value)
        except yaml.YAMLError as exc:
            errors[key] = str(exc)
    return embedded, errors


class YamlLoader:
    """Locates manifest files and parses them into documents."""

    def __init__(self, config: Optional[ValidatorConfig] = None):
        """Initialize the loader.

        Args:
            config: Validator configuration. If None, uses global config.
        """
        self.config = config if config is not None else validator_config
        self.extensions = tuple(ext.lower() for ext in self.config.extensions)
        self._decoders: Dict[str, Decoder] = {
            ".yaml": decode_yaml,
            ".yml": decode_yaml,
        }

    def register_decoder(self, extension: str, decoder: Decoder):
        self._decoders[extension.lower()] = decoder

    def has_decoder(self, path: Union[str, Path]) -> bool:
        return Path(path).suffix.lower() in self._decoders

    def discover(self, root_dir: Union[str, Path]) -> List[Path]:
        """Find every manifest file under ``root_dir``.

        Returns:
            Sorted list of file paths, empty when nothing matches

        Raises:
            EnvironmentFailure: If ``root_dir`` is not an existing directory
        """
        root = Path(root_dir)
        if not root.exists():
            raise EnvironmentFailure(f"Directory not found: {root}")
        if not root.is_dir():
            raise EnvironmentFailure(f"Path is not a directory: {root}")

        logger.debug(f"Searching for manifest files in: {root}")
        files = [
            path for path in root.rglob("*")
            if path.is_file() and path.suffix.lower() in self.extensions
        ]
        return sorted(set(files))

    def read(self, path: Union[str, Path]) -> SourceFile:
        """Read a file as UTF-8 text, keeping its line endings.

        Raises:
            ManifestDecodeError: If the file cannot be read or is not UTF-8
        """
        path = Path(path)
        try:
            content = path.read_bytes().decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestDecodeError(f"File is not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise ManifestDecodeError(f"Failed to read file {path}: {exc}") from exc
        return SourceFile(path=path, text=content)

    def parse(self, path: Union[str, Path]) -> List[Document]:
        """Parse a manifest file into one document per YAML document.

        A decode failure gives a single document with ``parse_error`` set.

        Raises:
            EnvironmentFailure: If no decoder is registered for the file type
        """
        path = Path(path)
        decoder = self._decoders.get(path.suffix.lower())
        if decoder is None:
            raise EnvironmentFailure(f"No decoder available for '{path.suffix}' files: {path}")

        logger.debug(f"Loading manifest file: {path}")
        try:
            source = self.read(path)
        except ManifestDecodeError as exc:
            return [Document(path=path, source=SourceFile(path=path, text=""), parse_error=str(exc))]

        try:
            decoded = decoder(source.text)
        except ManifestDecodeError as exc:
            return [Document(path=path, source=source, parse_error=str(exc))]

        if not decoded:
            # Empty file: one empty document so file-level rules still run
            return [Document(path=path, source=source)]

        multi = len(decoded) > 1
        documents = []
        for idx, (raw, source_map) in enumerate(decoded):
            documents.append(self._build_document(path, source, raw, source_map, idx if multi else None))
        return documents

    @staticmethod
    def _build_document(
        path: Path,
        source: SourceFile,
        raw: Any,
        source_map: SourceMap,
        index: Optional[int],
    ) -> Document:
        kind = None
        embedded: Dict[str, Any] = {}
        embedded_errors: Dict[str, str] = {}
        if isinstance(raw, dict):
            if isinstance(raw.get("kind"), str):
                kind = raw["kind"]
            if kind == ManifestKind.CONFIG_MAP:
                embedded, embedded_errors = decode_embedded(raw.get("data"))

        return Document(
            path=path,
            source=source,
            index=index,
            kind=kind,
            raw=raw,
            source_map=source_map,
            embedded=embedded,
            embedded_errors=embedded_errors,
        )
