"""STOMP 1.2 frame codec.

Frames travel as WebSocket text messages. A single message may carry
several frames, and bare EOLs between frames are heart-beats.
"""

import re
from dataclasses import dataclass, field

from ..errors import TransportConnectionError

NULL = b"\x00"

# Frames whose headers are never escaped (STOMP 1.2, "Value Encoding")
_RAW_HEADER_COMMANDS = {"CONNECT", "CONNECTED"}

_ESCAPES = {"\\": "\\\\", "\r": "\\r", "\n": "\\n", ":": "\\c"}
_UNESCAPES = {"\\": "\\", "r": "\r", "n": "\n", "c": ":"}
_ESCAPE_SEQUENCE = re.compile(r"\\(.?)")


class StompProtocolError(TransportConnectionError):
    """A frame could not be decoded."""


def escape_header(value: str) -> str:
    """Escape a header key or value for transmission."""
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def unescape_header(value: str) -> str:
    """Reverse `escape_header`.

    Raises:
        StompProtocolError: On an undefined escape sequence
    """
    def _replace(match: re.Match[str]) -> str:
        try:
            return _UNESCAPES[match.group(1)]
        except KeyError:
            raise StompProtocolError(
                f"Invalid header escape sequence: {match.group(0)!r}"
            ) from None

    return _ESCAPE_SEQUENCE.sub(_replace, value)


@dataclass
class StompFrame:
    """A single STOMP frame."""

    command: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    def encode(self) -> str:
        """Serialize the frame, adding content-length for non-empty bodies."""
        headers = dict(self.headers)
        if self.body and "content-length" not in headers:
            headers["content-length"] = str(len(self.body.encode("utf-8")))

        raw = self.command in _RAW_HEADER_COMMANDS
        lines = [self.command]
        for key, value in headers.items():
            if raw:
                lines.append(f"{key}:{value}")
            else:
                lines.append(f"{escape_header(key)}:{escape_header(value)}")

        return "\n".join(lines) + "\n\n" + self.body + "\x00"


def _find_header_end(raw: bytes, start: int) -> tuple[int, int]:
    """Locate the blank line ending a frame's headers.

    Returns:
        (index of the blank line, length of the separator)
    """
    lf = raw.find(b"\n\n", start)
    crlf = raw.find(b"\r\n\r\n", start)
    if crlf != -1 and (lf == -1 or crlf < lf):
        return crlf, 4
    if lf == -1:
        raise StompProtocolError("Incomplete frame: missing header terminator")
    return lf, 2


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise StompProtocolError(f"Frame is not valid UTF-8: {e}") from None


def parse_frames(data: str | bytes) -> list[StompFrame]:
    """Decode every frame contained in one transport message.

    Args:
        data: Raw WebSocket message

    Returns:
        Decoded frames in arrival order (heart-beats yield nothing)

    Raises:
        StompProtocolError: If the message is not well-formed
    """
    raw = data.encode("utf-8") if isinstance(data, str) else data
    frames: list[StompFrame] = []
    pos = 0

    while pos < len(raw):
        if raw[pos:pos + 1] in (b"\n", b"\r"):
            pos += 1
            continue

        head_end, sep_len = _find_header_end(raw, pos)
        lines = _decode(raw[pos:head_end]).replace("\r\n", "\n").split("\n")
        command = lines[0]
        raw_headers = command in _RAW_HEADER_COMMANDS

        headers: dict[str, str] = {}
        for line in lines[1:]:
            key, sep, value = line.partition(":")
            if not sep:
                raise StompProtocolError(f"Malformed header line: {line!r}")
            if not raw_headers:
                key, value = unescape_header(key), unescape_header(value)
            # Repeated headers: the first occurrence wins
            headers.setdefault(key, value)

        body_start = head_end + sep_len
        if "content-length" in headers:
            try:
                length = int(headers["content-length"])
            except ValueError:
                raise StompProtocolError(
                    f"Invalid content-length: {headers['content-length']!r}"
                ) from None
            body_end = body_start + length
            if raw[body_end:body_end + 1] != NULL:
                raise StompProtocolError("Frame body does not match content-length")
        else:
            body_end = raw.find(NULL, body_start)
            if body_end == -1:
                raise StompProtocolError("Incomplete frame: missing NULL terminator")

        frames.append(StompFrame(
            command=command,
            headers=headers,
            body=_decode(raw[body_start:body_end]),
        ))
        pos = body_end + 1

    return frames
