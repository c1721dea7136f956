"""
Content-type detection from the leading bytes of a payload.

Follows the signature table of the WHATWG MIME sniffing standard: only the
first 512 bytes are considered and the result is always a valid MIME type,
falling back to ``application/octet-stream``.
"""
SNIFF_LEN = 512

PDF = "application/pdf"
OCTET_STREAM = "application/octet-stream"
TEXT_PLAIN = "text/plain; charset=utf-8"

_WHITESPACE = b"\t\n\x0c\r "

_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P", b"<!--",
)

# (prefix, mime type)
_EXACT_SIGNATURES = (
    (b"%PDF-", PDF),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", TEXT_PLAIN),
    (b"\x00\x00\x01\x00", "image/x-icon"),
    (b"\x00\x00\x02\x00", "image/x-icon"),
    (b"BM", "image/bmp"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"PK\x03\x04", "application/zip"),
    (b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    (b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    (b"\x00asm", "application/wasm"),
    (b"OggS\x00", "application/ogg"),
    (b"fLaC", "audio/flac"),
    (b"ID3", "audio/mpeg"),
)


def _is_tag_terminator(byte: int) -> bool:
    return byte in (0x20, 0x3E)  # ' ' or '>'


def _sniff_markup(data: bytes) -> str | None:
    body = data.lstrip(_WHITESPACE)
    if body[:5] == b"<?xml":
        return "text/xml; charset=utf-8"
    upper = body.upper()
    for tag in _HTML_TAGS:
        if upper.startswith(tag) and len(body) > len(tag) and _is_tag_terminator(body[len(tag)]):
            return "text/html; charset=utf-8"
    return None


def _is_binary(data: bytes) -> bool:
    for byte in data:
        if byte <= 0x08 or byte == 0x0B or 0x0E <= byte <= 0x1A or 0x1C <= byte <= 0x1F:
            return True
    return False


def detect_content_type(data: bytes) -> str:
    head = bytes(data[:SNIFF_LEN])

    markup = _sniff_markup(head)
    if markup:
        return markup

    for prefix, mime in _EXACT_SIGNATURES:
        if head.startswith(prefix):
            return mime

    if head[:4] == b"RIFF" and head[8:14] == b"WEBPVP":
        return "image/webp"
    if head[4:8] == b"ftyp" and head[8:11] in (b"mp4", b"iso", b"M4V", b"avc"):
        return "video/mp4"

    if not _is_binary(head):
        return TEXT_PLAIN
    return OCTET_STREAM
