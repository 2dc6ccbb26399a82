import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from luaudoc.spec import DocumentAdapter

log = logging.getLogger(__name__)


class YamlAdapter(DocumentAdapter):
    """
    Reads a top-level YAML mapping, such as a type sidecar.

    Anything that is not a readable mapping loads as `{}`; null values are
    dropped so that an empty entry means "unknown" rather than "None".
    """

    def load(self, path: Path) -> Dict[str, Any]:
        if not path.is_file():
            return {}

        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            log.warning("Ignoring unreadable YAML document %s: %s", path, e)
            return {}

        if not isinstance(content, dict):
            if content is not None:
                log.warning("Ignoring %s: top level is not a mapping", path)
            return {}

        return {str(k): v for k, v in content.items() if v is not None}
