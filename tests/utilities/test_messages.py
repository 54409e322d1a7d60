import pytest

from platform_shared.utilities.messages import m


class TestMessages:

    def test_message_with_params(self):
        assert m("inputSchema.validation.required", fieldKey="url") == "Field input.url is required"

    def test_message_without_params(self):
        assert m("inputSchema.validation.noAvailableAutoProxy").startswith("Currently you do not have access")

    @pytest.mark.parametrize("key", ["inputSchema.validation.unknown", "inputSchema.validation", "nope"])
    def test_unknown_key(self, key):
        with pytest.raises(KeyError):
            m(key)
