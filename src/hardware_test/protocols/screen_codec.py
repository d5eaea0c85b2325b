"""
Display Panel Command Codec

Frame layout::

    +------+--------+------------------------------------------+------+
    | 0xEE | length | 0xEE | cmd id | text (GBK) ... | 0xFF     | 0xFC |
    +------+--------+------------------------------------------+------+

``length`` is the byte length of the inner frame minus one. The
trailing 0xFC is a constant and is not covered by any checksum.
"""

FRAME_START = 0xEE
INNER_END = 0xFF
FRAME_END = 0xFC

TEXT_ENCODING = "gbk"

CLEAR_COMMAND_ID = 0x00
CLEAR_COMMAND_TEXT = 't0.txt=""'


def encode_text(text: str) -> bytes:
    """
    Encode command text; ASCII passes through unchanged.

    Raises:
        UnicodeEncodeError: for characters outside GBK, such as emoji
    """
    return text.encode(TEXT_ENCODING)


def _command_id(cmd_id: int | str) -> int:
    if isinstance(cmd_id, str):
        raw = bytes.fromhex(cmd_id)
        if len(raw) != 1:
            raise ValueError(f"command id must be one byte: {cmd_id!r}")
        return raw[0]
    if not 0 <= cmd_id <= 0xFF:
        raise ValueError(f"command id out of range: {cmd_id}")
    return cmd_id


def build_inner_frame(cmd_id: int | str, text: str) -> bytes:
    """``0xEE, cmd id, text..., 0xFF``"""
    return bytes([FRAME_START, _command_id(cmd_id)]) + encode_text(text) + bytes([INNER_END])


def build_screen_frame(cmd_id: int | str, text: str) -> bytes:
    """
    Build a complete display command.

    Args:
        cmd_id: Command id as an int or a two-digit hex string ("00")
        text: Command text, e.g. 't0.txt="hello"'

    Raises:
        ValueError: if the inner frame is too long for the length byte
        UnicodeEncodeError: if the text has characters GBK cannot encode
    """
    inner = build_inner_frame(cmd_id, text)
    length = len(inner) - 1
    if length > 0xFF:
        raise ValueError(f"screen command too long: {len(inner)} bytes")
    return bytes([FRAME_START, length]) + inner + bytes([FRAME_END])


def clear_command() -> bytes:
    """Trivial text-clear command used to probe the panel."""
    return build_screen_frame(CLEAR_COMMAND_ID, CLEAR_COMMAND_TEXT)
