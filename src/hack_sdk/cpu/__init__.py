"""
Hack SDK CPU Package
====================

This package contains the Hack instruction set definitions: the comp,
dest and jump encoding tables and the helpers that turn mnemonics and
resolved addresses into 16-character machine words.

Modules:
    hack: Encoding tables, word format constants and encoder functions.

Usage:
    from hack_sdk.cpu import (
        COMP_TABLE,
        encode_compute,
        encode_address,
    )
"""

from hack_sdk.cpu.hack import (
    # Word format
    WORD_SIZE,
    COMPUTE_PREFIX,
    MAX_ADDRESS,
    # Encoding tables
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    # Encoders
    encode_comp,
    encode_dest,
    encode_jump,
    encode_compute,
    encode_address,
    # Constants
    is_constant,
    parse_constant,
)

__all__ = [
    "WORD_SIZE",
    "COMPUTE_PREFIX",
    "MAX_ADDRESS",
    "COMP_TABLE",
    "DEST_TABLE",
    "JUMP_TABLE",
    "encode_comp",
    "encode_dest",
    "encode_jump",
    "encode_compute",
    "encode_address",
    "is_constant",
    "parse_constant",
]
