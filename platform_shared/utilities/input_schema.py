"""
Validation of actor input against its input schema.

Standard JSON Schema rules are checked by a ``jsonschema`` validator built
by the caller; on top of that the platform-specific schema extensions are
enforced:

- ``nullable`` properties accept None;
- ``editor: proxy`` objects must describe a usable proxy configuration;
- ``patternKey`` / ``patternValue`` constrain keys and values of
  ``keyValue`` / ``stringList`` arrays and of objects.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence

from jsonschema import ValidationError

from ..consts import PROXY_URL_REGEX
from .messages import m

logger = logging.getLogger(__name__)

# Keys of the proxy editor value
USE_PLATFORM_PROXY = "useApifyProxy"
PROXY_URLS = "proxyUrls"
PROXY_GROUPS = "apifyProxyGroups"


@dataclass(frozen=True)
class InputError:
    """One validation problem of a single input field."""
    field_key: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"fieldKey": self.field_key, "message": self.message}


@dataclass
class ProxyOptions:
    """
    What the user has access to, used to validate proxy editor fields.
    """
    # User has at least one proxy group usable in automatic mode
    has_auto_proxy_groups: bool = False
    available_proxy_groups: List[str] = field(default_factory=list)
    # Group ID -> message explaining why it cannot be used
    disabled_proxy_groups: Dict[str, str] = field(default_factory=dict)


def validate_input_using_validator(
    validator: Any,
    input_schema: Mapping[str, Any],
    input_data: Mapping[str, Any],
    proxy_options: Optional[ProxyOptions] = None,
) -> List[InputError]:
    """
    Validates input with a JSON Schema validator and the platform extensions.

    Args:
        validator: jsonschema validator instance created for input_schema
        input_schema: Input schema (object with "properties" and "required")
        input_data: Input object to validate
        proxy_options: Proxy group availability; proxy group checks are skipped without it

    Returns:
        Found errors, empty if the input is valid
    """
    properties: Mapping[str, Any] = input_schema.get("properties", {})
    required: Sequence[str] = input_schema.get("required", [])

    errors: List[InputError] = []
    for error in validator.iter_errors(input_data):
        errors.extend(_map_schema_error(error, properties, input_data))

    for property_name, definition in properties.items():
        field_errors = _validate_property(
            property_name,
            definition,
            input_data.get(property_name) if isinstance(input_data, Mapping) else None,
            property_name in required,
            proxy_options,
        )
        if field_errors:
            errors.append(InputError(property_name, ", ".join(field_errors)))

    logger.debug("Input validation found %d errors", len(errors))
    return errors


# -------------------- Schema errors --------------------

def _field_key(error: ValidationError) -> str:
    path = [str(part) for part in error.absolute_path]
    return path[-1] if path else ""


def _map_schema_error(
    error: ValidationError,
    properties: Mapping[str, Any],
    input_data: Mapping[str, Any],
) -> Iterator[InputError]:
    if error.validator == "type":
        field_key = _field_key(error)
        # null is fine for nullable properties
        if (
            properties.get(field_key, {}).get("nullable")
            and isinstance(input_data, Mapping)
            and field_key in input_data
            and input_data[field_key] is None
        ):
            return
        yield InputError(field_key, m("inputSchema.validation.generic", fieldKey=field_key, message=error.message))

    elif error.validator == "required":
        for missing in _missing_properties(error):
            yield InputError(missing, m("inputSchema.validation.required", fieldKey=missing))

    elif error.validator == "additionalProperties":
        for extra in _additional_properties(error):
            yield InputError(extra, m("inputSchema.validation.additionalProperty", fieldKey=extra))

    else:
        field_key = _field_key(error)
        yield InputError(field_key, m("inputSchema.validation.generic", fieldKey=field_key, message=error.message))


def _missing_properties(error: ValidationError) -> List[str]:
    """Property names a "required" error is about (jsonschema reports them one per error)."""
    instance = error.instance if isinstance(error.instance, Mapping) else {}
    missing = [name for name in error.validator_value if name not in instance]
    reported = [name for name in missing if error.message == f"{name!r} is a required property"]
    return reported or missing[:1]


def _additional_properties(error: ValidationError) -> List[str]:
    """Property names an "additionalProperties" error is about."""
    instance = error.instance if isinstance(error.instance, Mapping) else {}
    declared = error.schema.get("properties", {})
    patterns = [re.compile(p) for p in error.schema.get("patternProperties", {})]
    return [
        name for name in instance
        if name not in declared and not any(p.search(name) for p in patterns)
    ]


# -------------------- Platform extensions --------------------

def _validate_property(
    property_name: str,
    definition: Mapping[str, Any],
    value: Any,
    is_required: bool,
    proxy_options: Optional[ProxyOptions],
) -> List[str]:
    field_errors: List[str] = []
    value_type = definition.get("type")
    editor = definition.get("editor")
    pattern_key = definition.get("patternKey")
    pattern_value = definition.get("patternValue")

    if value_type == "object" and editor == "proxy":
        field_errors.extend(validate_proxy_field(property_name, value, is_required, proxy_options))

    if value_type == "array" and isinstance(value, list) and value:
        if pattern_key and editor == "keyValue":
            invalid = _invalid_indexes(value, pattern_key, lambda item: item.get("key") if isinstance(item, Mapping) else None)
            if invalid:
                field_errors.append(m(
                    "inputSchema.validation.arrayKeysInvalid",
                    fieldKey=property_name, invalidIndexes=",".join(invalid), pattern=pattern_key,
                ))
        if pattern_value and editor == "keyValue":
            invalid = _invalid_indexes(value, pattern_value, lambda item: item.get("value") if isinstance(item, Mapping) else None)
            if invalid:
                field_errors.append(m(
                    "inputSchema.validation.arrayValuesInvalid",
                    fieldKey=property_name, invalidIndexes=",".join(invalid), pattern=pattern_value,
                ))
        elif pattern_value and editor == "stringList":
            invalid = _invalid_indexes(value, pattern_value, lambda item: item)
            if invalid:
                field_errors.append(m(
                    "inputSchema.validation.arrayValuesInvalid",
                    fieldKey=property_name, invalidIndexes=",".join(invalid), pattern=pattern_value,
                ))

    if value_type == "object" and isinstance(value, Mapping) and value:
        if pattern_key:
            check = re.compile(pattern_key)
            invalid_keys = [key for key in value if not check.search(key)]
            if invalid_keys:
                field_errors.append(m(
                    "inputSchema.validation.objectKeysInvalid",
                    fieldKey=property_name, invalidKeys=",".join(invalid_keys), pattern=pattern_key,
                ))
        if pattern_value:
            check = re.compile(pattern_value)
            invalid_keys = [
                key for key, item in value.items()
                if not isinstance(item, str) or not check.search(item)
            ]
            if invalid_keys:
                field_errors.append(m(
                    "inputSchema.validation.objectValuesInvalid",
                    fieldKey=property_name, invalidKeys=",".join(invalid_keys), pattern=pattern_value,
                ))

    return field_errors


def _invalid_indexes(items: List[Any], pattern: str, extract: Callable[[Any], Any]) -> List[str]:
    check = re.compile(pattern)
    invalid: List[str] = []
    for index, item in enumerate(items):
        candidate = extract(item)
        if not isinstance(candidate, str) or not check.search(candidate):
            invalid.append(str(index))
    return invalid


def validate_proxy_field(
    field_key: str,
    value: Any,
    is_required: bool = False,
    proxy_options: Optional[ProxyOptions] = None,
) -> List[str]:
    """
    Validates a field configured with the proxy editor.

    Returns:
        Error messages for the field
    """
    if is_required:
        # null is reported by the schema validator already
        if value is None:
            return []
        if not value:
            return [m("inputSchema.validation.required", fieldKey=field_key)]
        if not isinstance(value, Mapping):
            return []

        proxy_urls = value.get(PROXY_URLS)
        if not value.get(USE_PLATFORM_PROXY) and (not isinstance(proxy_urls, list) or not proxy_urls):
            return [m("inputSchema.validation.proxyRequired", fieldKey=field_key)]

    # Not required, so a missing value is valid
    if not value or not isinstance(value, Mapping):
        return []

    field_errors: List[str] = []
    use_platform_proxy = value.get(USE_PLATFORM_PROXY)
    proxy_urls = value.get(PROXY_URLS)

    if not use_platform_proxy and isinstance(proxy_urls, list):
        invalid_url = None
        for url in proxy_urls:
            url = str(url).strip()
            if not PROXY_URL_REGEX.match(url):
                invalid_url = url
        if invalid_url is not None:
            field_errors.append(m("inputSchema.validation.customProxyInvalid", invalidUrl=invalid_url))

    # Remaining checks concern the platform proxy and need to know what the user may use
    if not use_platform_proxy or proxy_options is None:
        return field_errors

    selected_groups = value.get(PROXY_GROUPS) or []

    # Automatic mode: some group usable in this mode must be available
    if not selected_groups and not proxy_options.has_auto_proxy_groups:
        field_errors.append(m("inputSchema.validation.noAvailableAutoProxy"))
        return field_errors

    available = set(proxy_options.available_proxy_groups)
    unavailable = [group for group in selected_groups if group not in available]
    if unavailable:
        field_errors.append(m(
            "inputSchema.validation.proxyGroupsNotAvailable",
            fieldKey=field_key, groups=", ".join(unavailable),
        ))

    for group in selected_groups:
        blocked_message = proxy_options.disabled_proxy_groups.get(group)
        if blocked_message:
            field_errors.append(blocked_message)

    return field_errors


__all__ = [
    "InputError",
    "ProxyOptions",
    "validate_input_using_validator",
    "validate_proxy_field",
]
