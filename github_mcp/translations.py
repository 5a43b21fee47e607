"""
Description overrides.

Tool descriptions are looked up by key (e.g. TOOL_GET_ME_DESCRIPTION) so a
deployment can reword them without code changes. Lookup order:
environment variable GITHUB_MCP_<KEY>, then the overrides file, then the
built-in default.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

ENV_PREFIX = "GITHUB_MCP_"


class TranslationHelper:
    def __init__(self, overrides: Optional[Dict[str, str]] = None):
        self._overrides = dict(overrides or {})
        self._used: Dict[str, str] = {}

    @classmethod
    def from_file(cls, path: Union[str, Path, None]) -> "TranslationHelper":
        if not path:
            return cls()
        path = Path(path)
        if not path.exists():
            logger.warning(f"Translations file not found: {path}")
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Translations file must hold a JSON object: {path}")
        logger.info(f"Loaded {len(data)} description overrides from {path}")
        return cls({str(k).upper(): str(v) for k, v in data.items()})

    def __call__(self, key: str, default: str) -> str:
        key = key.upper()
        value = os.getenv(ENV_PREFIX + key) or self._overrides.get(key) or default
        self._used[key] = value
        return value

    def dump(self) -> Dict[str, str]:
        """Every key resolved so far, with the value in effect."""
        return dict(sorted(self._used.items()))


def null_translation() -> TranslationHelper:
    return TranslationHelper()
