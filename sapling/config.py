"""
Extension configuration.

Example:

    from sapling import ConfigBuilder

    config = (
        ConfigBuilder()
        .set_debug_mode(True)
        .set_automatic_translations(False)
        .set_description_keys({"sapling.help.command.home": "Teleports you home"})
    )
    extension.load(config)
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from .errors import ConfigurationError

DESCRIPTION_KEY_PREFIX = "sapling.help."


@dataclass
class ConfigField:
    """Defines one configuration field."""

    type: Type
    default: Any = None
    description: str = ""
    key_prefix: Optional[str] = None  # Required prefix for dict keys

    def validate(self, value: Any) -> tuple[bool, str]:
        """Validate a value for this field."""
        # bool is an int subclass, check it strictly
        if self.type is bool and not isinstance(value, bool):
            return False, "Invalid type. Expected bool"
        if not isinstance(value, self.type):
            return False, f"Invalid type. Expected {self.type.__name__}"

        if self.key_prefix is not None and isinstance(value, dict):
            for key, text in value.items():
                if not isinstance(key, str) or not key.startswith(self.key_prefix):
                    return False, f"Key '{key}' must start with '{self.key_prefix}'"
                if not isinstance(text, str):
                    return False, f"Value of '{key}' must be a string"

        return True, ""

    def initial(self) -> Any:
        """Fresh default value (containers are copied)."""
        if isinstance(self.default, (dict, list)):
            return type(self.default)(self.default)
        return self.default


class ConfigBuilder:
    """Fluent configuration handed to ``SaplingExtension.load``."""

    fields: Dict[str, ConfigField] = {
        'automatic_translations': ConfigField(
            bool, default=True, description="Translate help entries automatically"),
        'debug_mode': ConfigField(
            bool, default=False, description="Echo every inbound event to chat"),
        'description_keys': ConfigField(
            dict, default={}, description="Help descriptions by translation key",
            key_prefix=DESCRIPTION_KEY_PREFIX),
    }

    def __init__(self):
        self.automatic_translations: bool = self.fields['automatic_translations'].initial()
        self.debug_mode: bool = self.fields['debug_mode'].initial()
        self.description_keys: Dict[str, str] = self.fields['description_keys'].initial()

    def _set(self, name: str, value: Any) -> 'ConfigBuilder':
        valid, error = self.fields[name].validate(value)
        if not valid:
            raise ConfigurationError(f"Config '{name}': {error}")
        setattr(self, name, value)
        return self

    def set_automatic_translations(self, value: bool) -> 'ConfigBuilder':
        return self._set('automatic_translations', value)

    def set_debug_mode(self, value: bool) -> 'ConfigBuilder':
        return self._set('debug_mode', value)

    def set_description_keys(self, description_keys: Dict[str, str]) -> 'ConfigBuilder':
        """
        Set help descriptions.

        Keys look like ``sapling.help.command.<name>`` or
        ``sapling.help.feature.<name>``.
        """
        return self._set('description_keys', dict(description_keys))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'automaticTranslations': self.automatic_translations,
            'debugMode': self.debug_mode,
            'descriptionKeys': dict(self.description_keys),
        }

    def get_schema(self) -> Dict[str, Dict]:
        """Field schema, for host-side tooling."""
        return {
            name: {
                "type": f.type.__name__,
                "default": f.default,
                "description": f.description,
            }
            for name, f in self.fields.items()
        }
