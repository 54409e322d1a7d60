from .input_schema import InputError, ProxyOptions, validate_input_using_validator, validate_proxy_field
from .markdown import decrease_heads_level, set_nofollow_links
from .messages import m
from .mongo_keys import (
    escape_for_bson,
    escape_property_name,
    is_bad_for_mongo,
    unescape_from_bson,
    unescape_property_name,
)
from .text import (
    build_or_version_number_int_to_str,
    date_to_string,
    get_ordinal_suffix,
    get_public_crawler_nice_path,
    slugify,
    truncate,
)
from .urls import normalize_url, parse_url

__all__ = [
    "InputError",
    "ProxyOptions",
    "validate_input_using_validator",
    "validate_proxy_field",
    "decrease_heads_level",
    "set_nofollow_links",
    "m",
    "escape_for_bson",
    "escape_property_name",
    "is_bad_for_mongo",
    "unescape_from_bson",
    "unescape_property_name",
    "build_or_version_number_int_to_str",
    "date_to_string",
    "get_ordinal_suffix",
    "get_public_crawler_nice_path",
    "slugify",
    "truncate",
    "normalize_url",
    "parse_url",
]
