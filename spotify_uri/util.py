import binascii
import math
import re
import typing
import urllib.parse

_HEX_LOWER = re.compile(r"[0-9a-f]*")
_UNSIGNED = re.compile(r"\+?[0-9]+")

# Every printable ASCII character except ':', '+' and '%'. Space stays in
# the safe set because url_encode turns it into '+' afterwards.
_URL_SAFE = "".join(
    chr(c) for c in range(0x20, 0x7f) if chr(c) not in ":+%")


def bytes_to_hex(buffer: bytes) -> str:
    """
    Convert bytes to lowercase hex
    Args:
        buffer: Bytes to convert
    Returns:
        hex
    """
    return binascii.hexlify(buffer).decode()


def hex_to_bytes(s: str) -> bytes:
    """
    Strictly decode lowercase hex; uppercase digits are rejected
    Args:
        s: Hex string of even length
    Returns:
        bytes
    """
    match = _HEX_LOWER.match(s)
    if match.end() != len(s):
        raise ValueError("invalid symbol at {}".format(match.end()))
    if len(s) % 2 != 0:
        raise ValueError("invalid length at {}".format(len(s) - 1))
    return binascii.unhexlify(s)


def parse_unsigned(s: str, bits: int) -> int:
    """
    Parse a decimal unsigned integer that must fit in the given bit width
    """
    if s == "":
        raise ValueError("cannot parse integer from empty string")
    if _UNSIGNED.fullmatch(s) is None:
        raise ValueError("invalid digit found in string")
    value = int(s)
    if value >= 1 << bits:
        raise ValueError("number too large to fit in target type")
    return value


def url_decode(s: str) -> str:
    """
    Decode a free-text URI segment.

    '+' becomes a space before percent-decoding, so an encoded plus
    ("%2B") survives as a literal '+'. The decoded bytes must be UTF-8.
    Raises:
        UnicodeDecodeError: the decoded bytes are not valid UTF-8
    """
    unquoted = urllib.parse.unquote_to_bytes(s.replace("+", " "))
    return unquoted.decode("utf-8")


def url_encode(s: str) -> str:
    """
    Encode free text for a URI segment; inverse of url_decode
    Raises:
        UnicodeEncodeError: s holds a lone surrogate
    """
    return urllib.parse.quote(s, safe=_URL_SAFE).replace(" ", "+")


class Base62:
    standard_base = 256
    target_base = 62
    alphabet: bytes
    lookup: typing.List[int]

    def __init__(self, alphabet: bytes):
        if len(alphabet) != self.target_base:
            raise ValueError("Base62 alphabet must have {} characters".format(
                self.target_base))
        self.alphabet = alphabet
        self.create_lookup_table()

    @staticmethod
    def create_instance_with_inverted_character_set():
        return Base62(Base62.CharacterSets.inverted)

    def encode(self, message: bytes, length: int = -1) -> bytes:
        if length == -1:
            length = self.estimate_output_length(len(message),
                                                 self.standard_base,
                                                 self.target_base)
        number = int.from_bytes(message, "big")
        digits = self.convert(number, self.target_base, length)
        return self.translate(digits, self.alphabet)

    def decode(self, encoded: bytes, length: int = -1) -> bytes:
        if length == -1:
            length = self.estimate_output_length(len(encoded),
                                                 self.target_base,
                                                 self.standard_base)
        number = 0
        for index in self.translate_back(encoded):
            number = number * self.target_base + index
        return bytes(self.convert(number, self.standard_base, length))

    def translate(self, indices: typing.Iterable[int],
                  dictionary: bytes) -> bytes:
        return bytes(dictionary[index] for index in indices)

    def translate_back(self, encoded: bytes) -> typing.List[int]:
        indices = []
        for position, b in enumerate(encoded):
            index = self.lookup[b]
            if index == -1:
                raise Base62.DecodeError(
                    "Invalid character '{}' at position {}".format(
                        chr(b) if b < 0x80 else "\\x{:02x}".format(b),
                        position))
            indices.append(index)
        return indices

    def convert(self, number: int, target_base: int,
                length: int) -> typing.List[int]:
        if number >= target_base**length:
            raise Base62.DecodeError(
                "Decoded number cannot fit into {} digits of base {}".format(
                    length, target_base))
        digits = [0] * length
        for i in range(length - 1, -1, -1):
            number, digits[i] = divmod(number, target_base)
        return digits

    def estimate_output_length(self, input_length: int, source_base: int,
                               target_base: int) -> int:
        return int(
            math.ceil((math.log(source_base) / math.log(target_base)) *
                      input_length))

    def create_lookup_table(self):
        self.lookup = [-1] * 256
        for i, c in enumerate(self.alphabet):
            self.lookup[c] = i

    class CharacterSets:
        inverted = b'0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'

    class DecodeError(ValueError):
        pass
