"""
Media ingestion constants.

MIME type → extension table, data URI detection and the thumbnail
configuration applied to media folders created by the toolkit.
"""

import re

# =============================================================================
# MIME TYPES
# =============================================================================

# Supported MIME types and the file extension stored for each.
# Anything not listed here is rejected as unsupported.
MIME_EXTENSION_MAP: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
    "image/tiff": "tif",
    "application/postscript": "eps",
    "image/x-eps": "eps",
    "video/webm": "webm",
    "video/x-matroska": "mkv",
    "video/x-flv": "flv",
    "video/ogg": "ogv",
    "audio/ogg": "oga",
    "video/quicktime": "mov",
    "video/mp4": "mp4",
    "video/x-msvideo": "avi",
    "video/x-ms-wmv": "wmv",
    "application/pdf": "pdf",
    "audio/aac": "aac",
    "audio/mpeg": "mp3",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/flac": "flac",
    "audio/x-flac": "flac",
    "audio/x-ms-wma": "wma",
    "text/plain": "txt",
    "application/msword": "doc",
    "model/gltf-binary": "glb",
}

# Sniffer names for types listed above under another name
MIME_TYPE_ALIASES: dict[str, str] = {
    "image/x-ms-bmp": "image/bmp",
    "audio/wave": "audio/wav",
    "video/avi": "video/x-msvideo",
}

# Used when sniffing cannot read the file or only nameless signatures match
DEFAULT_MIME_TYPE = "image/jpeg"

# Reported for content with no recognised signature
UNKNOWN_MIME_TYPE = "application/octet-stream"

# Printable UTF-8 content with no recognised signature
TEXT_MIME_TYPE = "text/plain"
TEXT_WHITESPACE = "\t\n\r\f\v"

# Bytes read from the start of a file for container and text checks
SNIFF_HEAD_SIZE = 4096

# data:<type>/<subtype>;base64, prefix of inline data
DATA_URI_PATTERN = re.compile(r"^data:[\w.+-]+/[\w.+-]+;base64,")

# Sources with these schemes are always fetched, never decoded
URL_SCHEMES = ("http://", "https://")

# Prefix for temporary files holding media bytes before upload
TEMP_FILE_PREFIX = "sw_media"


# =============================================================================
# CONTAINER SIGNATURES
# =============================================================================
# The container alone does not decide the type; the codec or payload does.

GLTF_BINARY_SIGNATURE = b"glTF"

OGG_SIGNATURE = b"OggS"
OGG_VIDEO_MARKERS = (b"\x80theora", b"\x01video")

ASF_HEADER_GUID = bytes.fromhex("3026b2758e66cf11a6d900aa0062ce6c")
ASF_VIDEO_MEDIA_GUID = bytes.fromhex("c0ef19bc4d5bcf11a8fd00805f5c442b")


# =============================================================================
# MEDIA FOLDER CONFIGURATION
# =============================================================================
# Fixed at folder creation, never updated afterwards.

THUMBNAIL_SIZES: list[dict[str, int]] = [
    {"width": 500, "height": 500},
]

THUMBNAIL_QUALITY = 80

MEDIA_FOLDER_LEVEL = 1


# =============================================================================
# PRODUCT VISIBILITY
# =============================================================================

# Platform constant: product visible in listings, search and direct links
VISIBILITY_ALL = 30
