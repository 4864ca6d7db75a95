"""Sparse update payload for documents."""

from dataclasses import dataclass, fields
from typing import Any, Mapping


class _Unset:
    """Marker for a patch field that was not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class DocumentPatch:
    """Fields a document owner may change through update_document.

    A field left as UNSET is not touched. A field set to None clears the
    value (only the nullable fields content, cover_image and icon accept it).
    """

    title: Any = UNSET
    content: Any = UNSET
    cover_image: Any = UNSET
    icon: Any = UNSET
    is_published: Any = UNSET

    # Wire names used by RPC callers
    ARGUMENT_NAMES = {
        "title": "title",
        "content": "content",
        "coverImage": "cover_image",
        "icon": "icon",
        "isPublished": "is_published",
    }

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "DocumentPatch":
        """Build a patch from RPC arguments, ignoring keys that are not patchable."""
        values = {
            attr: arguments[name]
            for name, attr in cls.ARGUMENT_NAMES.items()
            if name in arguments
        }
        return cls(**values)

    def changes(self) -> dict[str, Any]:
        """Return only the supplied fields, keyed by model attribute name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.changes()
