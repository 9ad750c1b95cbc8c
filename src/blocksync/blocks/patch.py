"""Line-level edits of existing block files.

The capability backfill must keep a block's content verbatim apart from the
two things it changes (the top-level ``version:`` line and the capability
list), so the edit works on text lines rather than re-dumping parsed YAML.
The parsed document decides *which* model entries need the capability; the
text is only used to find *where* to put it.
"""

from __future__ import annotations

import re
from typing import Any

import yaml

from blocksync.blocks.store import parse_block
from blocksync.runtime.errors import BlockPatchError

_VERSION_RE = re.compile(r"""^version:\s*(?P<value>"[^"]*"|'[^']*'|[^\s#]*)(?P<rest>.*)$""")
_NAME_RE = re.compile(r"^name:.*$")
_MODELS_RE = re.compile(r"^models:\s*(#.*)?$")
_ITEM_RE = re.compile(r"^(?P<indent> *)-(?P<gap> +)\S")
_KEY_RE = re.compile(r"^(?P<key>[A-Za-z_][\w-]*):(?P<rest>.*)$")


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _is_structural(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


def set_version(lines: list[str], version: str) -> list[str]:
    """Set the top-level ``version:`` value, inserting one after ``name:`` if absent.

    Anything after the old value on that line (a trailing comment) is kept.
    """
    out = list(lines)
    for i, line in enumerate(out):
        match = _VERSION_RE.match(line)
        if match:
            rest = match.group("rest")
            if rest and not rest[0].isspace():
                rest = f" {rest}"
            out[i] = f"version: {version}{rest}"
            return out
    for i, line in enumerate(out):
        if _NAME_RE.match(line):
            out.insert(i + 1, f"version: {version}")
            return out
    out.insert(0, f"version: {version}")
    return out


def _entry_spans(lines: list[str]) -> tuple[list[tuple[int, int]], int]:
    """Line spans ``[start, end)`` of each ``models`` item, plus the key indent."""
    start = next((i for i, line in enumerate(lines) if _MODELS_RE.match(line)), None)
    if start is None:
        raise BlockPatchError("block has no top-level 'models' list")

    # The section ends at the next top-level key.
    end = len(lines)
    for i in range(start + 1, len(lines)):
        line = lines[i]
        if _is_structural(line) and _indent(line) == 0 and not line.startswith("-"):
            end = i
            break

    starts: list[int] = []
    item_indent: int | None = None
    key_indent = 0
    for i in range(start + 1, end):
        match = _ITEM_RE.match(lines[i])
        if match is None:
            continue
        indent = len(match.group("indent"))
        if item_indent is None:
            item_indent = indent
            key_indent = indent + 1 + len(match.group("gap"))
        if indent == item_indent:
            starts.append(i)

    spans: list[tuple[int, int]] = []
    for n, first in enumerate(starts):
        last = starts[n + 1] if n + 1 < len(starts) else end
        # Trailing blank and comment lines belong to whatever follows.
        while last > first + 1 and not _is_structural(lines[last - 1]):
            last -= 1
        spans.append((first, last))
    return spans, key_indent


def _find_key(lines: list[str], span: tuple[int, int], key_indent: int, key: str) -> int | None:
    first, last = span
    for i in range(first, last):
        line = lines[i]
        # The first line carries its key after the item dash.
        if i > first and _indent(line) != key_indent:
            continue
        match = _KEY_RE.match(line[key_indent:])
        if match and match.group("key") == key:
            return i
    return None


def _value_end(lines: list[str], key_line: int, last: int, key_indent: int) -> int:
    """Index one past the last line belonging to the value of the key at *key_line*."""
    end = key_line + 1
    for i in range(key_line + 1, last):
        line = lines[i]
        if not _is_structural(line):
            continue
        indent = _indent(line)
        if indent < key_indent:
            break
        if indent == key_indent and not line.lstrip(" ").startswith("- "):
            break
        end = i + 1
    return end


def _inline_rest(line: str, key_indent: int) -> str:
    match = _KEY_RE.match(line[key_indent:])
    assert match is not None
    return match.group("rest").split(" #", 1)[0].strip()


def _add_to_entry(
    lines: list[str], span: tuple[int, int], key_indent: int, capability: str
) -> None:
    first, last = span
    pad = " " * key_indent

    cap_line = _find_key(lines, span, key_indent, "capabilities")
    if cap_line is not None:
        rest = _inline_rest(lines[cap_line], key_indent)
        if rest:
            # Flow or scalar value, e.g. `capabilities: [image_input]`
            value: Any = yaml.safe_load(rest)
            if isinstance(value, list):
                items = [str(v) for v in value]
            else:
                items = [] if value is None else [str(value)]
            items.append(capability)
            lines[cap_line] = lines[cap_line][:key_indent] + "capabilities:"
            lines[cap_line + 1 : cap_line + 1] = [f"{pad}  - {item}" for item in items]
            return

        end = _value_end(lines, cap_line, last, key_indent)
        item_lines = [
            i for i in range(cap_line + 1, end) if lines[i].lstrip(" ").startswith("- ")
        ]
        item_pad = " " * _indent(lines[item_lines[-1]]) if item_lines else f"{pad}  "
        lines.insert(end, f"{item_pad}- {capability}")
        return

    roles_line = _find_key(lines, span, key_indent, "roles")
    at = last if roles_line is None else _value_end(lines, roles_line, last, key_indent)
    lines[at:at] = [f"{pad}capabilities:", f"{pad}  - {capability}"]


def add_capability(text: str, capability: str, version: str) -> str:
    """Return *text* with *capability* on every model entry and ``version`` set.

    Raises:
        BlockPatchError: If the block cannot be parsed, has an unexpected
            layout, or the edited text does not validate.
    """
    try:
        document = parse_block(text)
    except (yaml.YAMLError, ValueError) as exc:
        raise BlockPatchError(f"cannot parse block: {exc}") from exc

    newline = "\r\n" if "\r\n" in text else "\n"
    lines = set_version(text.splitlines(), version)
    spans, key_indent = _entry_spans(lines)
    if len(spans) != len(document.models):
        raise BlockPatchError(
            f"found {len(spans)} model entries in text, expected {len(document.models)}"
        )

    # Bottom-up so insertions do not shift the spans still to be edited.
    for span, model in reversed(list(zip(spans, document.models))):
        if not model.has_capability(capability):
            _add_to_entry(lines, span, key_indent, capability)

    patched = newline.join(lines)
    if text.endswith("\n"):
        patched += newline

    try:
        result = parse_block(patched)
    except (yaml.YAMLError, ValueError) as exc:
        raise BlockPatchError(f"edited block does not validate: {exc}") from exc
    if result.version != version or any(
        not m.has_capability(capability) for m in result.models
    ):
        raise BlockPatchError("edited block is missing the capability or version")
    return patched
