import logging
import os
from typing import Any
from typing import Dict
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

TRAILING_SEGMENT_POLICIES = ("discard", "error")

DEFAULTS: Dict[str, Any] = {
    "trailing_segment_policy": "discard",
    "quote_aware_attributes": True,
    "encoding": "utf-8-sig",
}


class ParserConfig:
    """Parser options, optionally loaded from a YAML file.

    Expected layout::

        parser:
          trailing_segment_policy: discard   # or "error"
          quote_aware_attributes: true
          encoding: utf-8-sig
    """

    def __init__(self, config_path: Optional[str] = None, **overrides: Any):
        """Load options from ``config_path`` (if given) and apply keyword overrides.

        Args:
            config_path: Path to a YAML file. None or a missing file means defaults.
            overrides: Option values that take precedence over the file.
        """
        self.config_path = config_path
        self._yaml_config: Dict[str, Any] = {}
        self.load_config()
        for key, value in overrides.items():
            if key not in DEFAULTS:
                raise ValueError(f"Unknown parser option: {key}")
            setattr(self, key, value)
        self._validate()

    def load_config(self) -> None:
        """Load options from the YAML file and fill defaults."""
        if self.config_path and os.path.exists(self.config_path):
            with open(self.config_path, "r", encoding="utf-8") as file:
                try:
                    self._yaml_config = yaml.safe_load(file) or {}
                except yaml.YAMLError as exc:
                    raise ValueError(f"Parser config {self.config_path} is not valid YAML: {exc}") from exc
            logger.info(f"Loaded parser config from {self.config_path}")
        elif self.config_path:
            logger.warning(f"Parser config {self.config_path} not found, using defaults")

        if not isinstance(self._yaml_config, dict):
            raise ValueError("Parser config must be a YAML mapping")
        section = self._yaml_config.get("parser", {}) or {}
        if not isinstance(section, dict):
            raise ValueError("parser section must be a mapping")

        self.trailing_segment_policy = section.get("trailing_segment_policy", DEFAULTS["trailing_segment_policy"])
        self.quote_aware_attributes = section.get("quote_aware_attributes", DEFAULTS["quote_aware_attributes"])
        self.encoding = section.get("encoding", DEFAULTS["encoding"])

    def _validate(self) -> None:
        if self.trailing_segment_policy not in TRAILING_SEGMENT_POLICIES:
            raise ValueError(
                f"parser.trailing_segment_policy must be one of {TRAILING_SEGMENT_POLICIES}, "
                f"got {self.trailing_segment_policy!r}"
            )
        if not isinstance(self.quote_aware_attributes, bool):
            raise ValueError("parser.quote_aware_attributes must be a boolean")
        if not isinstance(self.encoding, str) or not self.encoding:
            raise ValueError("parser.encoding must be a non-empty string")

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, key) for key in DEFAULTS}

    def __repr__(self) -> str:
        return f"ParserConfig({self.to_dict()})"
