"""
Checksum Algorithms

XOR-8 for the lock board and CRC-16/CCITT-FALSE for the RFID reader.
Both operate on raw bytes in transmission order.
"""

CRC16_CCITT_POLY = 0x1021
CRC16_CCITT_INIT = 0xFFFF


def xor_checksum(data: bytes) -> int:
    """
    Running XOR of every byte.

    Examples:
        >>> xor_checksum(bytes([0x80, 0x03, 0x01]))
        130
        >>> xor_checksum(b"")
        0
    """
    checksum = 0
    for byte in data:
        checksum ^= byte
    return checksum


def crc16_ccitt_false(data: bytes) -> int:
    """
    CRC-16/CCITT-FALSE: poly 0x1021, init 0xFFFF, MSB first, no final XOR.

    Examples:
        >>> hex(crc16_ccitt_false(b"123456789"))
        '0x29b1'
    """
    crc = CRC16_CCITT_INIT
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ CRC16_CCITT_POLY) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return crc
