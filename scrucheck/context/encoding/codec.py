#!/usr/bin/env python3
"""
Fixed-width identifier text codec

Identifiers are 128-bit unsigned integers written as a fixed number of
digits in base 32 or base 36, most significant digit first:
- SCRU128:    25 digits, 0-9a-z
- SCRU128_V1: 26 digits, 0-9a-v

Because the text is zero-padded to a fixed width, byte-wise comparison of two
well-formed tokens agrees with numeric comparison of their values.
"""

from functools import lru_cache
from typing import List, Union

from scrucheck.errors import MalformedTokenError
from scrucheck.models import IdFormat, Identifier, MAX_ID_VALUE
from scrucheck.protocols import DecoderProtocol

INVALID = 0xFF


def build_decode_table(alphabet: str, case_insensitive: bool = True) -> bytes:
    """
    Build a 256-entry table mapping a byte to its digit value

    Args:
        alphabet: Digit symbols, index = digit value
        case_insensitive: Map upper and lower case letters to the same value

    Returns:
        256 bytes; INVALID (0xFF) marks bytes outside the alphabet

    Examples:
        >>> table = build_decode_table("0123456789abcdefghijklmnopqrstuv")
        >>> table[ord('v')], table[ord('V')], table[ord('w')]
        (31, 31, 255)
    """
    table = bytearray([INVALID] * 256)
    for value, symbol in enumerate(alphabet):
        table[ord(symbol)] = value
        if case_insensitive:
            table[ord(symbol.upper())] = value
            table[ord(symbol.lower())] = value
    return bytes(table)


class TokenDecoder(DecoderProtocol):
    """Decode fixed-width tokens of one IdFormat"""

    def __init__(self, fmt: IdFormat):
        self._format = fmt
        self._table = build_decode_table(fmt.alphabet, fmt.case_insensitive)

    @property
    def format(self) -> IdFormat:
        return self._format

    def decode(self, token: Union[bytes, str]) -> Identifier:
        """
        Decode a token into an Identifier

        Args:
            token: Token text, bytes or ASCII str, without line terminator

        Returns:
            Identifier with raw text, integer value and fields

        Raises:
            MalformedTokenError: wrong length, invalid digit or value above 128 bits
        """
        if isinstance(token, str):
            try:
                token = token.encode('ascii')
            except UnicodeEncodeError:
                raise MalformedTokenError("invalid string representation", token.encode('utf-8', 'replace')) from None

        fmt = self._format
        if len(token) != fmt.width:
            raise MalformedTokenError("invalid string representation", token)

        table = self._table
        radix = fmt.radix
        value = 0
        for byte in token:
            digit = table[byte]
            if digit == INVALID:
                raise MalformedTokenError("invalid string representation", token)
            value = value * radix + digit
            if value > MAX_ID_VALUE:
                raise MalformedTokenError("invalid string representation", token)

        return Identifier(raw_text=bytes(token), raw_int=value, fields=fmt.unpack(value))


@lru_cache(maxsize=None)
def get_decoder(fmt: IdFormat) -> TokenDecoder:
    """Shared decoder per format (decode tables are built once)"""
    return TokenDecoder(fmt)


def decode(token: Union[bytes, str], fmt: IdFormat) -> Identifier:
    """Decode one token in the given format, see TokenDecoder.decode"""
    return get_decoder(fmt).decode(token)


def encode(value: int, fmt: IdFormat) -> bytes:
    """
    Encode a 128-bit integer as canonical (lowercase, zero-padded) token text

    Args:
        value: Integer in [0, 2**128)
        fmt: Target format

    Returns:
        Token bytes of exactly fmt.width digits

    Examples:
        >>> from scrucheck.context.formats import SCRU128
        >>> encode(0, SCRU128)
        b'0000000000000000000000000'
        >>> encode(2**128 - 1, SCRU128)
        b'f5lxx1zz5pnorynqglhzmsp33'
    """
    if value < 0 or value > MAX_ID_VALUE:
        raise ValueError(f"Value out of 128-bit range: {value}")

    digits: List[str] = []
    for _ in range(fmt.width):
        value, digit = divmod(value, fmt.radix)
        digits.append(fmt.alphabet[digit])
    return "".join(reversed(digits)).encode('ascii')


def encode_fields(fmt: IdFormat, **values: int) -> bytes:
    """Encode an identifier from its field values (omitted fields are zero)"""
    return encode(fmt.pack(**values), fmt)
