#
# base58.py
# Original source: git://github.com/joric/brutus.git
# which was forked from git://github.com/samrushing/caesure.git
#
# Distributed under the MIT/X11 software license, see the accompanying
# file COPYING or http://www.opensource.org/licenses/mit-license.php.
#

"""
Base58 and Base58Check
**********************

Text encoding used for serialized extended keys.
The checksum is the first 4 bytes of the double SHA256 of the payload.
"""

from binascii import hexlify, unhexlify
from typing import List

from .common import hash256
from .errors import InvalidChecksumError, InvalidEncodingError

b58_digits: str = '123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz'

CHECKSUM_SIZE = 4


def encode(b: bytes) -> str:
    """Encode bytes to a base58-encoded string"""

    # Convert big-endian bytes to integer
    n: int = int('0x0' + hexlify(b).decode('utf8'), 16)

    # Divide that integer into base58
    temp: List[str] = []
    while n > 0:
        n, r = divmod(n, 58)
        temp.append(b58_digits[r])
    res: str = ''.join(temp[::-1])

    # Encode leading zeros as base58 zeros
    pad: int = 0
    for c in b:
        if c == 0:
            pad += 1
        else:
            break
    return b58_digits[0] * pad + res


def decode(s: str) -> bytes:
    """Decode a base58-encoding string, returning bytes"""
    if not s:
        return b''

    # Convert the string to an integer
    n: int = 0
    for c in s:
        if c not in b58_digits:
            raise InvalidEncodingError('Character %r is not a valid base58 character' % c)
        n = n * 58 + b58_digits.index(c)

    # Convert the integer to bytes
    h: str = '%x' % n if n else ''
    if len(h) % 2:
        h = '0' + h
    res = unhexlify(h.encode('utf8'))

    # Add padding back
    pad = 0
    for c in s:
        if c == b58_digits[0]:
            pad += 1
        else:
            break
    return b'\x00' * pad + res


def encode_check(b: bytes) -> str:
    """Encode bytes with a trailing 4 byte checksum to a base58-encoded string"""
    return encode(b + hash256(b)[0:CHECKSUM_SIZE])


def decode_check(s: str) -> bytes:
    """Decode a base58check string, verify and strip its checksum"""
    data = decode(s)
    if len(data) < CHECKSUM_SIZE:
        raise InvalidChecksumError("Base58check data is too short to contain a checksum")
    payload, checksum = data[:-CHECKSUM_SIZE], data[-CHECKSUM_SIZE:]
    if hash256(payload)[0:CHECKSUM_SIZE] != checksum:
        raise InvalidChecksumError("Base58check checksum mismatch")
    return payload
