"""Tests for the capability backfill edit."""

import pytest

from blocksync.blocks.patch import add_capability, set_version
from blocksync.blocks.store import parse_block
from blocksync.runtime.errors import BlockPatchError

_OPUS = "anthropic.claude-3-opus-20240229-v1:0"


class TestAddCapability:
    def test_inserts_after_roles(self, make_block) -> None:
        before = make_block("Claude 3 Opus", _OPUS, capabilities=False)
        after = add_capability(before, "tool_use", "1.0.4")
        assert after == make_block("Claude 3 Opus", _OPUS, version="1.0.4")

    def test_inserts_before_completion_options(self, make_block) -> None:
        before = make_block("Claude 3 Opus", _OPUS, capabilities=False, context_length=200000)
        after = add_capability(before, "tool_use", "1.0.4")
        assert after == make_block(
            "Claude 3 Opus", _OPUS, version="1.0.4", context_length=200000
        )

    def test_preserves_other_content(self) -> None:
        before = (
            "# hand-maintained\n"
            "name: Custom\n"
            "version: 0.9.0\n"
            "schema: v1\n"
            "\n"
            "models:\n"
            "  - name: Custom\n"
            "    provider: bedrock\n"
            "    model: anthropic.custom-v1:0   # pinned\n"
            "    roles:\n"
            "      - chat\n"
            "\n"
            "    requestOptions:\n"
            "      timeout: 30\n"
        )
        after = add_capability(before, "tool_use", "0.9.1")
        assert after == (
            "# hand-maintained\n"
            "name: Custom\n"
            "version: 0.9.1\n"
            "schema: v1\n"
            "\n"
            "models:\n"
            "  - name: Custom\n"
            "    provider: bedrock\n"
            "    model: anthropic.custom-v1:0   # pinned\n"
            "    roles:\n"
            "      - chat\n"
            "    capabilities:\n"
            "      - tool_use\n"
            "\n"
            "    requestOptions:\n"
            "      timeout: 30\n"
        )

    def test_appends_to_existing_list(self, make_block) -> None:
        before = make_block("Opus", _OPUS, capabilities=False) + "    capabilities:\n      - image_input\n"
        after = add_capability(before, "tool_use", "1.0.4")
        assert after.endswith("    capabilities:\n      - image_input\n      - tool_use\n")
        (model,) = parse_block(after).models
        assert model.capabilities == ["image_input", "tool_use"]

    def test_flow_style_list(self, make_block) -> None:
        before = make_block("Opus", _OPUS, capabilities=False) + "    capabilities: [image_input]\n"
        after = add_capability(before, "tool_use", "1.0.4")
        (model,) = parse_block(after).models
        assert model.capabilities == ["image_input", "tool_use"]

    def test_roles_at_key_indent(self) -> None:
        before = (
            "name: X\n"
            "version: 1.0.0\n"
            "schema: v1\n"
            "models:\n"
            "- name: X\n"
            "  provider: bedrock\n"
            "  model: x\n"
            "  roles:\n"
            "  - chat\n"
            "  - edit\n"
        )
        after = add_capability(before, "tool_use", "1.0.1")
        assert after.endswith("  - edit\n  capabilities:\n    - tool_use\n")
        (model,) = parse_block(after).models
        assert model.roles == ["chat", "edit"]
        assert model.capabilities == ["tool_use"]

    def test_multiple_entries_only_lacking_ones(self) -> None:
        before = (
            "name: Pair\n"
            "version: 1.0.0\n"
            "schema: v1\n"
            "models:\n"
            "  - name: A\n"
            "    provider: bedrock\n"
            "    model: a\n"
            "    roles:\n"
            "      - chat\n"
            "  - name: B\n"
            "    provider: bedrock\n"
            "    model: b\n"
            "    roles:\n"
            "      - chat\n"
            "    capabilities:\n"
            "      - tool_use\n"
            "  - name: C\n"
            "    provider: bedrock\n"
            "    model: c\n"
        )
        after = add_capability(before, "tool_use", "1.0.1")
        doc = parse_block(after)
        assert [m.capabilities for m in doc.models] == [["tool_use"]] * 3
        assert after.count("tool_use") == 3

    def test_no_roles_appends_to_entry(self) -> None:
        before = (
            "name: X\nversion: 1.0.0\nschema: v1\nmodels:\n"
            "  - name: X\n    provider: bedrock\n    model: x\n"
        )
        after = add_capability(before, "tool_use", "1.0.1")
        assert after.endswith("    model: x\n    capabilities:\n      - tool_use\n")

    def test_already_present_only_bumps_version(self, make_block) -> None:
        before = make_block("Opus", _OPUS)
        after = add_capability(before, "tool_use", "1.0.4")
        assert after == make_block("Opus", _OPUS, version="1.0.4")

    def test_unparseable_block(self) -> None:
        with pytest.raises(BlockPatchError, match="cannot parse"):
            add_capability("name: [oops\n", "tool_use", "1.0.0")

    def test_keeps_crlf_line_endings(self, make_block) -> None:
        before = make_block("Claude 3 Opus", _OPUS, capabilities=False).replace("\n", "\r\n")
        after = add_capability(before, "tool_use", "1.0.4")
        expected = make_block("Claude 3 Opus", _OPUS, version="1.0.4").replace("\n", "\r\n")
        assert after == expected

    def test_keeps_version_comment(self, make_block) -> None:
        before = make_block("Opus", _OPUS, capabilities=False).replace(
            "version: 1.0.3\n", "version: 1.0.3  # bumped by sync\n"
        )
        after = add_capability(before, "tool_use", "1.0.4")
        assert "version: 1.0.4  # bumped by sync\n" in after
        assert parse_block(after).version == "1.0.4"


class TestSetVersion:
    def test_replaces_existing(self) -> None:
        assert set_version(["name: A", "version: 1.0.0"], "1.0.1") == ["name: A", "version: 1.0.1"]

    def test_inserted_after_name(self) -> None:
        assert set_version(["name: A", "schema: v1"], "1.0.1") == [
            "name: A",
            "version: 1.0.1",
            "schema: v1",
        ]

    def test_nested_version_untouched(self) -> None:
        lines = ["name: A", "models:", "  - version: 9"]
        assert set_version(lines, "1.0.1")[1] == "version: 1.0.1"

    def test_keeps_trailing_comment(self) -> None:
        assert set_version(["version: 1.0.0 # release"], "1.0.1") == ["version: 1.0.1 # release"]

    def test_quoted_value(self) -> None:
        assert set_version(['version: "1.0.0"  # q'], "1.0.1") == ["version: 1.0.1  # q"]
