import pytest
from jsonschema import Draft7Validator


@pytest.fixture
def webhook_context():
    """Context as passed to webhook payload templates at dispatch time."""
    return {
        "userId": "some-user-id",
        "eventData": {
            "status": 200,
            "body": "hello-world",
            "messages": [1, 2, 3],
        },
    }


@pytest.fixture
def input_schema():
    """Input schema using the platform editors and pattern extensions."""
    return {
        "title": "Test input",
        "type": "object",
        "schemaVersion": 1,
        "properties": {
            "name": {"title": "Name", "type": "string"},
            "count": {"title": "Count", "type": "integer", "nullable": True},
            "proxy": {"title": "Proxy", "type": "object", "editor": "proxy"},
            "headers": {
                "title": "Headers",
                "type": "array",
                "editor": "keyValue",
                "patternKey": "^[a-z]+$",
                "patternValue": "^[0-9]+$",
            },
            "urls": {
                "title": "URLs",
                "type": "array",
                "editor": "stringList",
                "patternValue": "^https?://",
            },
            "labels": {
                "title": "Labels",
                "type": "object",
                "patternKey": "^[a-z]+$",
                "patternValue": "^[A-Z]+$",
            },
        },
        "required": ["name"],
        "additionalProperties": False,
    }


@pytest.fixture
def validator(input_schema):
    return Draft7Validator(input_schema)
