"""
Encoding: identifier text codec.
"""

from scrucheck.context.encoding.codec import (
    TokenDecoder,
    build_decode_table,
    decode,
    encode,
    encode_fields,
    get_decoder,
)

__all__ = [
    'TokenDecoder',
    'build_decode_table',
    'decode',
    'encode',
    'encode_fields',
    'get_decoder',
]
