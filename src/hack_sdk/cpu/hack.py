"""
Hack Instruction Set Definition
===============================

This module defines the Hack instruction encoding: the three mnemonic
tables used by compute instructions and the 15-bit address format used by
address instructions.

Instruction Formats
-------------------
The Hack CPU has exactly two instruction formats, both 16 bits wide and
written out as strings of '0'/'1' characters:

1. **Address instruction** (@value)
   ```
   0vvv vvvv vvvv vvvv
   ```
   The leading 0 selects the format, leaving 15 bits for the value
   (0-32767).

2. **Compute instruction** (dest=comp;jump)
   ```
   111a cccc ccdd djjj
   ```
   - 111: opcode prefix
   - a cccccc: 7-bit comp code; a=0 reads A, a=1 reads M
   - ddd: destination bits (A, D, M)
   - jjj: jump condition bits (<0, =0, >0)

Absent dest and jump fields are keyed by None in their tables.

Reference
---------
- The Elements of Computing Systems, chapter 6 (Nisan & Schocken)
"""

from typing import Optional

from hack_sdk.errors import InvalidNumericOperandError, UnknownMnemonicError


# =============================================================================
# Word Format Constants
# =============================================================================

WORD_SIZE = 16
COMPUTE_PREFIX = "111"
MAX_ADDRESS = 0x7FFF  # 15-bit address field


# =============================================================================
# Comp Table
# =============================================================================
# Key: comp mnemonic as written in source
# Value: 7-bit code "acccccc"
# =============================================================================

COMP_TABLE: dict[str, str] = {
    # a=0: operate on A
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",

    # a=1: same ALU functions with M in place of A
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
}


# =============================================================================
# Dest Table
# =============================================================================
# Bit order is A, D, M.
# =============================================================================

DEST_TABLE: dict[Optional[str], str] = {
    None:  "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
}


# =============================================================================
# Jump Table
# =============================================================================

JUMP_TABLE: dict[Optional[str], str] = {
    None:  "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
}


# =============================================================================
# Lookup Functions
# =============================================================================

def _valid(table: dict) -> list[str]:
    """Printable list of a table's mnemonics for error hints."""
    return [key if key is not None else "(none)" for key in table]


def encode_comp(mnemonic: str) -> str:
    """
    Look up the 7-bit code of a comp mnemonic.

    Raises:
        UnknownMnemonicError: If the mnemonic is not in COMP_TABLE
    """
    code = COMP_TABLE.get(mnemonic)
    if code is None:
        raise UnknownMnemonicError("comp", mnemonic, valid_mnemonics=_valid(COMP_TABLE))
    return code


def encode_dest(mnemonic: Optional[str]) -> str:
    """
    Look up the 3-bit code of a dest mnemonic (None for no destination).

    Raises:
        UnknownMnemonicError: If the mnemonic is not in DEST_TABLE
    """
    code = DEST_TABLE.get(mnemonic)
    if code is None:
        raise UnknownMnemonicError("dest", mnemonic, valid_mnemonics=_valid(DEST_TABLE))
    return code


def encode_jump(mnemonic: Optional[str]) -> str:
    """
    Look up the 3-bit code of a jump mnemonic (None for no jump).

    Raises:
        UnknownMnemonicError: If the mnemonic is not in JUMP_TABLE
    """
    code = JUMP_TABLE.get(mnemonic)
    if code is None:
        raise UnknownMnemonicError("jump", mnemonic, valid_mnemonics=_valid(JUMP_TABLE))
    return code


def encode_compute(dest: Optional[str], comp: str, jump: Optional[str]) -> str:
    """
    Encode a compute instruction into a 16-character word.

    The fields are validated comp first, then dest, then jump, so the
    error for a line with several bad fields is deterministic.

    Args:
        dest: Destination mnemonic, or None
        comp: Computation mnemonic
        jump: Jump mnemonic, or None

    Returns:
        "111" + comp(7) + dest(3) + jump(3)
    """
    comp_bits = encode_comp(comp)
    dest_bits = encode_dest(dest)
    jump_bits = encode_jump(jump)
    return COMPUTE_PREFIX + comp_bits + dest_bits + jump_bits


def is_constant(text: str) -> bool:
    """Return True if text is a plain decimal constant (digits only)."""
    return text.isascii() and text.isdigit()


def parse_constant(text: str) -> int:
    """
    Parse the decimal operand of an address instruction.

    Raises:
        InvalidNumericOperandError: If text is not all digits or exceeds 32767
    """
    if not is_constant(text):
        raise InvalidNumericOperandError(text, "not a non-negative decimal integer")
    value = int(text)
    if value > MAX_ADDRESS:
        raise InvalidNumericOperandError(text, f"value exceeds {MAX_ADDRESS}")
    return value


def encode_address(value: int) -> str:
    """
    Encode a resolved address as a 16-character zero-padded binary word.

    Raises:
        InvalidNumericOperandError: If value is outside 0..32767
    """
    if not 0 <= value <= MAX_ADDRESS:
        raise InvalidNumericOperandError(str(value), f"value must be in 0..{MAX_ADDRESS}")
    return format(value, f"0{WORD_SIZE}b")
