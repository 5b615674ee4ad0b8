"""Template sources.

A source turns template references into ``Template`` objects. The bundled
``FileTemplateSource`` understands local YAML files, directories of YAML
files and ``http(s)://`` URLs pointing at a YAML document.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Protocol

import requests
import yaml
from pydantic import ValidationError

from xrun.errors import TemplateLoadError
from xrun.template.model import Template
from xrun.utils.logging import get_logger

YAML_SUFFIXES = (".yaml", ".yml")


class TemplateSource(Protocol):
    """Anything able to produce templates from a list of references."""

    def load(self, refs: Iterable[str]) -> List[Template]:
        ...


class FileTemplateSource:
    """Loads templates from YAML files, directories or HTTP URLs.

    Templates keep the order of ``refs`` and, inside a directory, the sorted
    order of file names, because the first matching template wins.
    """

    def __init__(self, timeout: float = 10.0):
        """Initialize the source.

        Args:
            timeout: Timeout in seconds for HTTP references
        """
        self.timeout = timeout
        self.logger = get_logger("xrun.template.loader")

    def load(self, refs: Iterable[str]) -> List[Template]:
        """Load all templates referenced by ``refs``.

        Raises:
            TemplateLoadError: If a reference cannot be read or decoded
        """
        templates: List[Template] = []
        for ref in refs:
            for name, content in self._read(ref):
                templates.extend(self._decode(name, content))
        return templates

    def _read(self, ref: str) -> List[tuple]:
        if ref.startswith(("http://", "https://")):
            return [(ref, self._download(ref))]

        path = Path(ref).expanduser()
        if path.is_dir():
            files = sorted(p for p in path.iterdir() if p.suffix in YAML_SUFFIXES)
            return [(str(p), p.read_text(encoding="utf-8")) for p in files]
        if path.is_file():
            return [(str(path), path.read_text(encoding="utf-8"))]

        raise TemplateLoadError(f"template source {ref!r} does not exist")

    def _download(self, url: str) -> str:
        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TemplateLoadError(f"while downloading templates from {url}: {e}") from e
        return response.text

    def _decode(self, name: str, content: str) -> List[Template]:
        try:
            data: Dict[str, Any] = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise TemplateLoadError(f"while decoding {name}: {e}") from e

        if not isinstance(data, dict):
            raise TemplateLoadError(f"{name}: expected a mapping with a 'templates' key")

        try:
            templates = [Template.model_validate(item) for item in data.get("templates") or []]
        except ValidationError as e:
            raise TemplateLoadError(f"{name}: invalid template definition: {e}") from e

        for tpl in templates:
            self.logger.debug(
                "Command template",
                source=name,
                trigger=tpl.trigger.command.prefix or tpl.trigger.command.regex,
                type=tpl.type,
            )
        return templates
