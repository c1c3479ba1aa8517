"""Loading tile asset definitions and frame images from disk."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

U32_MAX = 2**32 - 1

_NUMBER = re.compile(r"[+-]?\d+(\.\d+)?([eE][+-]?\d+)?")
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ESCAPES = {'"': '"', "\\": "\\", "/": "/", "n": "\n", "t": "\t", "r": "\r", "0": "\0"}


class AssetError(Exception):
    """Raised when an asset directory or definition is invalid."""


@dataclass(frozen=True)
class AnimationDef:
    """Frame timing for an animated tile."""

    frame_time_ms: int
    looped: bool


@dataclass(frozen=True)
class TileDef:
    """The contents of a tile's ``tile.ron`` definition file."""

    name: str
    tint: tuple[int, int, int, int]
    animation: AnimationDef | None = None


@dataclass
class TileAsset:
    """A tile definition together with its sorted frame image paths."""

    name: str
    tint: tuple[int, int, int, int]
    frames: list[Path] = field(default_factory=list)
    animation: AnimationDef | None = None


class _RonParser:
    """A small reader for the subset of RON used by tile definitions."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def fail(self, message: str) -> AssetError:
        return AssetError(f"Invalid tile definition at offset {self.pos}: {message}")

    def skip(self) -> None:
        while self.pos < len(self.text):
            if self.text[self.pos].isspace():
                self.pos += 1
            elif self.text.startswith("//", self.pos):
                end = self.text.find("\n", self.pos)
                self.pos = len(self.text) if end == -1 else end + 1
            elif self.text.startswith("/*", self.pos):
                end = self.text.find("*/", self.pos + 2)
                if end == -1:
                    raise self.fail("unterminated comment")
                self.pos = end + 2
            else:
                break

    def peek(self) -> str:
        self.skip()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise self.fail(f"expected {char!r}")
        self.pos += 1

    def parse(self) -> Any:
        value = self.value()
        if self.peek():
            raise self.fail("trailing characters")
        return value

    def value(self) -> Any:
        char = self.peek()
        if not char:
            raise self.fail("unexpected end of input")
        if char == '"':
            return self.string()
        if char in "([":
            return self.compound()
        if char in "+-" or char.isdigit():
            return self.number()
        match = _IDENT.match(self.text, self.pos)
        if match is None:
            raise self.fail(f"unexpected character {char!r}")
        self.pos = match.end()
        ident = match.group()
        if ident == "true":
            return True
        if ident == "false":
            return False
        if ident == "None":
            return None
        if ident == "Some":
            self.expect("(")
            inner = self.value()
            if self.peek() == ",":
                self.pos += 1
            self.expect(")")
            return inner
        if self.peek() == "(":
            return self.compound()
        raise self.fail(f"unexpected identifier {ident!r}")

    def string(self) -> str:
        self.pos += 1
        parts: list[str] = []
        while True:
            if self.pos >= len(self.text):
                raise self.fail("unterminated string")
            char = self.text[self.pos]
            self.pos += 1
            if char == '"':
                return "".join(parts)
            if char != "\\":
                parts.append(char)
                continue
            if self.pos >= len(self.text):
                raise self.fail("unterminated escape")
            escape = self.text[self.pos]
            self.pos += 1
            if escape == "u":
                digits = self.text[self.pos : self.pos + 4]
                if len(digits) != 4 or not all(c in "0123456789abcdefABCDEF" for c in digits):
                    raise self.fail("invalid unicode escape")
                parts.append(chr(int(digits, 16)))
                self.pos += 4
            elif escape in _ESCAPES:
                parts.append(_ESCAPES[escape])
            else:
                raise self.fail(f"invalid escape {escape!r}")

    def number(self) -> int | float:
        match = _NUMBER.match(self.text, self.pos)
        if match is None:
            raise self.fail("invalid number")
        self.pos = match.end()
        literal = match.group()
        if match.group(1) or match.group(2):
            return float(literal)
        return int(literal)

    def _field_name(self) -> str | None:
        start = self.pos
        match = _IDENT.match(self.text, self.pos)
        if match is not None:
            self.pos = match.end()
            if self.peek() == ":":
                self.pos += 1
                return match.group()
        self.pos = start
        return None

    def compound(self) -> Any:
        opener = self.text[self.pos]
        closer = ")" if opener == "(" else "]"
        self.pos += 1
        self.skip()
        is_struct = opener == "(" and self._field_name() is not None
        if is_struct:
            self.pos -= 0
        fields: dict[str, Any] = {}
        items: list[Any] = []
        first = True
        while self.peek() != closer:
            if not self.peek():
                raise self.fail(f"expected {closer!r}")
            if not first:
                self.expect(",")
                if self.peek() == closer:
                    break
            if is_struct:
                if first:
                    # The first field name was already consumed while probing.
                    name = self._last_name
                else:
                    self.skip()
                    name = self._field_name()
                    if name is None:
                        raise self.fail("expected field name")
                if name in fields:
                    raise self.fail(f"duplicate field `{name}`")
                fields[name] = self.value()
            else:
                items.append(self.value())
            first = False
        self.pos += 1
        return fields if is_struct else items

    @property
    def _last_name(self) -> str:
        # Re-read the field name that precedes the current position.
        match = re.search(r"([A-Za-z_][A-Za-z0-9_]*)\s*:\s*$", self.text[: self.pos])
        if match is None:
            raise self.fail("expected field name")
        return match.group(1)


def _require(fields: dict[str, Any], name: str) -> Any:
    try:
        return fields[name]
    except KeyError:
        raise AssetError(f"missing field `{name}`") from None


def _parse_animation(value: Any) -> AnimationDef | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise AssetError("`animation` must be a struct")
    frame_time = _require(value, "frame_time_ms")
    looped = _require(value, "looped")
    if isinstance(frame_time, bool) or not isinstance(frame_time, int):
        raise AssetError("`frame_time_ms` must be an integer")
    if not 0 <= frame_time <= U32_MAX:
        raise AssetError(f"`frame_time_ms` out of range: {frame_time}")
    if not isinstance(looped, bool):
        raise AssetError("`looped` must be a boolean")
    return AnimationDef(frame_time, looped)


def parse_tile_def(text: str) -> TileDef:
    """Parse the RON text of a ``tile.ron`` file into a TileDef."""
    value = _RonParser(text).parse()
    if not isinstance(value, dict):
        raise AssetError("tile definition must be a struct")
    name = _require(value, "name")
    if not isinstance(name, str):
        raise AssetError("`name` must be a string")
    tint = _require(value, "tint")
    if not isinstance(tint, list) or len(tint) != 4:
        raise AssetError("`tint` must hold exactly 4 values")
    for channel in tint:
        if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
            raise AssetError(f"`tint` channel out of range: {channel!r}")
    animation = _parse_animation(value.get("animation"))
    return TileDef(name, (tint[0], tint[1], tint[2], tint[3]), animation)


def load_blocks(path: str | Path) -> list[TileAsset]:
    """Load every tile asset found in the immediate subdirectories of ``path``."""
    root = Path(path)
    try:
        entries = sorted(root.iterdir())
    except OSError as error:
        raise AssetError(str(error)) from error

    assets: list[TileAsset] = []
    for entry in entries:
        if not entry.is_dir():
            continue
        try:
            text = (entry / "tile.ron").read_text(encoding="utf-8")
        except OSError as error:
            raise AssetError(str(error)) from error
        assets.append(load_block(entry, parse_tile_def(text)))
    return assets


def load_block(directory: str | Path, definition: TileDef) -> TileAsset:
    """Collect the PNG frames of one tile directory into a TileAsset."""
    directory = Path(directory)
    if not directory.is_dir():
        raise AssetError("Error in load_block: provided dir is not a directory!")

    frames: list[Path] = []
    try:
        entries = list(directory.iterdir())
    except OSError as error:
        raise AssetError(str(error)) from error

    for entry in entries:
        suffix = entry.suffix
        if not suffix:
            raise AssetError(f"No file extension found for file: {entry}")
        extension = suffix[1:]
        if extension == "ron":
            continue
        if extension != "png":
            raise AssetError(f"Extension invalid: {extension!r}")
        frames.append(entry)

    if not frames:
        raise AssetError(f"No texture images provided for directory: {directory}")

    frames.sort()
    return TileAsset(
        name=definition.name,
        tint=definition.tint,
        frames=frames,
        animation=definition.animation,
    )