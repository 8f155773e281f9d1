from __future__ import annotations

import json

from profile_saves.domain.models import DocumentTree


class JsonCodecError(ValueError):
    pass


class JsonCodec:
    def __init__(self, indent: str | int | None = "\t") -> None:
        self.indent = indent

    def encode(self, tree: DocumentTree) -> str:
        try:
            return json.dumps(tree, ensure_ascii=False, indent=self.indent, sort_keys=True)
        except (TypeError, ValueError) as exc:
            raise JsonCodecError(f"cannot encode profile: {exc}") from exc

    def decode(self, text: str) -> DocumentTree:
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise JsonCodecError(f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}") from exc
        if not isinstance(data, dict):
            raise JsonCodecError(f"profile root must be an object, got {type(data).__name__}")
        return data

    def encode_bytes(self, tree: DocumentTree) -> bytes:
        return self.encode(tree).encode("utf-8")

    def decode_bytes(self, raw: bytes) -> DocumentTree:
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise JsonCodecError(f"profile is not valid UTF-8: {exc}") from exc
        return self.decode(text)
