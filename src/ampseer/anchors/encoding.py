# ================================================================================
# 2-bit anchor encoding
#
# An anchor is a fixed-length window of nucleotides packed into an int,
# A=0, C=1, G=2, T=3, first base in the most significant bits.
# ================================================================================

from __future__ import annotations

Anchor = int

_BASE_TO_DIGIT = str.maketrans("ACGTacgt", "01230123")
_COMPLEMENT = str.maketrans("ACGTacgt", "TGCAtgca")
_DIGIT_TO_BASE = "ACGT"
_VALID_BASES = frozenset("ACGTacgt")


class InvalidNucleotideError(ValueError):
    """Raised when a sequence window contains a base other than A, C, G or T."""


def _check_bases(sequence: str) -> None:
    if not sequence or not _VALID_BASES.issuperset(sequence):
        raise InvalidNucleotideError(f"Invalid DNA sequence: {sequence!r}")


def encode_anchor(sequence: str) -> Anchor:
    """
    Pack a nucleotide string into a 2-bit integer.

    Args:
        sequence (str): Bases from {A, C, G, T}, any case.

    Returns:
        int: The packed anchor.

    Raises:
        InvalidNucleotideError: If the sequence is empty or holds any other base.
    """
    _check_bases(sequence)
    return int(sequence.translate(_BASE_TO_DIGIT), 4)


def decode_anchor(anchor: Anchor, length: int = 16) -> str:
    """Unpack a 2-bit anchor back into its nucleotide string."""
    bases = []
    for _ in range(length):
        bases.append(_DIGIT_TO_BASE[anchor & 0b11])
        anchor >>= 2
    return "".join(reversed(bases))


def reverse_complement_anchor(anchor: Anchor, length: int = 16) -> Anchor:
    """
    Reverse complement a packed anchor without going through text.

    Complementing a 2-bit base is 3 - base, so reading the bases out
    from the low end and pushing their complements builds the reverse
    complement directly.
    """
    result = 0
    for _ in range(length):
        result = (result << 2) | (3 - (anchor & 0b11))
        anchor >>= 2
    return result


def reverse_complement(sequence: str) -> str:
    """
    Returns the reverse complement of a DNA sequence.

    Args:
        sequence (str): DNA sequence string (A, T, G, C)

    Returns:
        str: Reverse complement of the input DNA sequence
    """
    _check_bases(sequence)
    return sequence.translate(_COMPLEMENT)[::-1].upper()


def leading_anchor(sequence: str, length: int = 16) -> Anchor:
    """Encode the first *length* bases of *sequence*."""
    return encode_anchor(sequence[:length])


def trailing_anchor(sequence: str, length: int = 16) -> Anchor:
    """Encode the last *length* bases of *sequence*."""
    return encode_anchor(sequence[-length:])
