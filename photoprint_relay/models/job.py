"""
Print Job Model
===============

One print request, alive only while the request is being served.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class MediaKind(Enum):
    """Image encodings accepted from clients."""

    PNG = 'png'
    JPEG = 'jpg'

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def from_mime_type(cls, mime_type: Optional[str]) -> 'MediaKind':
        """``image/jpeg`` is JPEG, everything else is treated as PNG."""
        if mime_type == 'image/jpeg':
            return cls.JPEG
        return cls.PNG


@dataclass(frozen=True)
class PageSize:
    """Template page size hint, in inches."""

    width_inch: float
    height_inch: float

    @property
    def is_strip(self) -> bool:
        """Narrow template cut from larger stock, e.g. a 2x6 photo strip."""
        return self.width_inch * 2 <= self.height_inch

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['PageSize']:
        """Parse ``{widthInch, heightInch}``; anything unusable yields None."""
        if not isinstance(data, dict):
            return None
        try:
            width = float(data['widthInch'])
            height = float(data['heightInch'])
        except (KeyError, TypeError, ValueError):
            return None
        if width <= 0 or height <= 0:
            return None
        return cls(width_inch=width, height_inch=height)


@dataclass
class PrintJob:
    """Print job as received from a client."""

    payload: bytes
    copies: int = 1
    media_kind: MediaKind = MediaKind.PNG
    requested_printer: Optional[str] = None
    restricted_mode: bool = False
    target_page_size: Optional[PageSize] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if not isinstance(self.copies, int) or isinstance(self.copies, bool) or self.copies < 1:
            raise ValueError('copies must be a positive integer')

    def to_dict(self) -> Dict[str, Any]:
        """Summary for logs; never includes the payload."""
        return {
            'id': self.id,
            'copies': self.copies,
            'media_kind': self.media_kind.name,
            'requested_printer': self.requested_printer,
            'restricted_mode': self.restricted_mode,
            'payload_bytes': len(self.payload),
            'target_page_size': (
                {'width_inch': self.target_page_size.width_inch,
                 'height_inch': self.target_page_size.height_inch}
                if self.target_page_size else None
            ),
        }
