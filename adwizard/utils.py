import base64
import binascii
from pathlib import Path

import requests

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"


def to_data_uri(data: bytes, mime_type: str = "image/png") -> str:
    """Encode bytes as a base64 data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def from_data_uri(uri: str) -> bytes:
    """Decode a base64 data URI.

    Example: "data:image/png;base64,iVBOR..." -> b"\\x89PNG..."
    """
    header, sep, payload = uri.partition(",")
    if not sep or not header.startswith("data:") or ";base64" not in header:
        raise ValueError("Not a base64 data URI")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}")


def read_source_bytes(source: bytes | str | Path) -> bytes:
    """Read image bytes from raw bytes, a data URI, an http(s) URL or a file path."""
    if isinstance(source, bytes):
        return source

    if isinstance(source, Path):
        return source.read_bytes()

    if source.startswith("data:"):
        return from_data_uri(source)

    if source.startswith(("http://", "https://")):
        try:
            response = requests.get(source, headers={"User-Agent": USER_AGENT}, timeout=30)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            raise RuntimeError(f"Failed to download image from {source}: {e}")

    return Path(source).read_bytes()
