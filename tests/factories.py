"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

import base64
from typing import Optional
from uuid import uuid4


# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

# 1x1 GIF
GIF_BYTES = base64.b64decode("R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7")

_ASF_HEADER = bytes.fromhex("3026b2758e66cf11a6d900aa0062ce6c") + bytes(14)
_ASF_STREAM_PROPERTIES = bytes.fromhex("9107dcb7b7a9cf118ee600c00c205365") + bytes(8)
_OGG_PAGE = b"OggS\x00\x02" + bytes(20) + b"\x01\x1e"

# Smallest content each supported format is recognised by:
# (id, content, stored MIME type, stored extension)
SIGNATURE_SAMPLES = [
    ("jpeg", bytes.fromhex("ffd8ffe000104a46494600010100000100010000ffdb"), "image/jpeg", "jpg"),
    ("png", PNG_BYTES, "image/png", "png"),
    ("gif", GIF_BYTES, "image/gif", "gif"),
    ("webp", bytes.fromhex("52494646240000005745425056503820180000003001009d012a0100010002003425a4000370"), "image/webp", "webp"),
    ("svg", b'<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"></svg>', "image/svg+xml", "svg"),
    ("bmp", bytes.fromhex("424d3a000000000000003600000028000000"), "image/bmp", "bmp"),
    ("tiff", bytes.fromhex("49492a000800000000000000"), "image/tiff", "tif"),
    ("eps", b"%!PS-Adobe-3.0 EPSF-3.0\n%%BoundingBox: 0 0 1 1\n", "application/postscript", "eps"),
    ("webm", bytes.fromhex("1a45dfa39f4286810142f7810142f2810442f381084282847765626d42878102"), "video/webm", "webm"),
    ("mkv", bytes.fromhex("1a45dfa3a34286810142f7810142f2810442f381084282886d6174726f736b614287810442858102"), "video/x-matroska", "mkv"),
    ("flv", bytes.fromhex("464c5601050000000900000000"), "video/x-flv", "flv"),
    ("ogv", _OGG_PAGE + b"\x80theora" + bytes(34), "video/ogg", "ogv"),
    ("oga", _OGG_PAGE + b"\x01vorbis" + bytes(22), "audio/ogg", "oga"),
    ("mov", bytes.fromhex("0000001466747970717420200000000071742020"), "video/quicktime", "mov"),
    ("mp4", bytes.fromhex("000000206674797069736f6d0000020069736f6d69736f32617663316d703431"), "video/mp4", "mp4"),
    ("avi", bytes.fromhex("5249464624000000415649204c495354"), "video/x-msvideo", "avi"),
    ("wmv", _ASF_HEADER + _ASF_STREAM_PROPERTIES + bytes.fromhex("c0ef19bc4d5bcf11a8fd00805f5c442b"), "video/x-ms-wmv", "wmv"),
    ("pdf", b"%PDF-1.4\n%%EOF\n", "application/pdf", "pdf"),
    ("aac", bytes.fromhex("fff15080043ffcde"), "audio/aac", "aac"),
    ("mp3", bytes.fromhex("494433040000000000000000fffb9064"), "audio/mpeg", "mp3"),
    ("wav", bytes.fromhex("524946462400000057415645666d7420"), "audio/wav", "wav"),
    ("flac", bytes.fromhex("664c61430000002210001000"), "audio/flac", "flac"),
    ("wma", _ASF_HEADER + _ASF_STREAM_PROPERTIES + bytes.fromhex("409e69f84d5bcf11a8fd00805f5c442b"), "audio/x-ms-wma", "wma"),
    ("txt", b"hello world\n", "text/plain", "txt"),
    ("doc", bytes.fromhex("d0cf11e0a1b11ae1000000000000000000000000000000003e000300feff0900"), "application/msword", "doc"),
    ("glb", bytes.fromhex("676c54460200000050000000"), "model/gltf-binary", "glb"),
]


class ImageSourceFactory:
    """
    Factory for image source strings.

    Usage:
        data_uri = ImageSourceFactory.data_uri()
        raw = ImageSourceFactory.base64()
        url = ImageSourceFactory.url()
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def base64(cls, content: bytes = PNG_BYTES) -> str:
        """Bare base64 string."""
        return base64.b64encode(content).decode("ascii")

    @classmethod
    def data_uri(cls, content: bytes = PNG_BYTES, mime_type: str = "image/png") -> str:
        """data:<mime>;base64,<payload> string."""
        return f"data:{mime_type};base64,{cls.base64(content)}"

    @classmethod
    def url(cls, path: Optional[str] = None) -> str:
        """Remote image URL."""
        path = path or f"images/{cls._next_counter()}.png"
        return f"https://cdn.example.com/{path}"


class ReferenceRowFactory:
    """
    Factory for reference table rows as the store returns them.

    Usage:
        tax = ReferenceRowFactory.tax(name="Reduced rate", tax_rate=7.0)
        category = ReferenceRowFactory.category(parent_id="root-id")
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def _row(cls, id: Optional[str], **fields) -> dict:
        return {
            "id": id or uuid4().hex,
            "created_at": "2025-12-05T10:00:00Z",
            "updated_at": None,
            **fields,
        }

    @classmethod
    def tax(cls, id: Optional[str] = None, name: str = "Standard rate", tax_rate: float = 19.0) -> dict:
        return cls._row(id, name=name, tax_rate=tax_rate)

    @classmethod
    def manufacturer(cls, id: Optional[str] = None, name: Optional[str] = None, media_id: Optional[str] = None) -> dict:
        return cls._row(id, name=name or f"Manufacturer {cls._next_counter()}", media_id=media_id)

    @classmethod
    def category(cls, id: Optional[str] = None, name: Optional[str] = None, parent_id: Optional[str] = None) -> dict:
        return cls._row(id, name=name or f"Category {cls._next_counter()}", parent_id=parent_id)

    @classmethod
    def property_group(cls, id: Optional[str] = None, name: Optional[str] = None) -> dict:
        name = name or f"Property {cls._next_counter()}"
        return cls._row(id, name=name, description=name, filterable=True, position=0)

    @classmethod
    def property_option(cls, group_id: str, id: Optional[str] = None, name: Optional[str] = None) -> dict:
        return cls._row(
            id,
            group_id=group_id,
            name=name or f"Option {cls._next_counter()}",
            type="text",
            position=0,
        )

    @classmethod
    def sales_channel(cls, id: Optional[str] = None, name: str = "Storefront") -> dict:
        return cls._row(id, name=name, active=True)

    @classmethod
    def payment_method(cls, name: str, active: bool = True, id: Optional[str] = None) -> dict:
        return cls._row(id, name=name, active=active)
