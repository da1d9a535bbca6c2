# filename: huffman_bits.py

from bitarray import bitarray
from bitarray.util import ba2int, int2ba

from huffman_errors import CorruptPaddingError, CorruptPayloadError, TruncatedStreamError

# Bits are packed most-significant-bit first on both sides
ENDIAN = "big"
MAX_PADDING = 7


class BitPacker:
    """Collects a logical bit sequence and turns it into whole bytes."""

    def __init__(self):
        self.bits = bitarray(endian=ENDIAN)

    def __len__(self):
        return len(self.bits)

    def write_bit(self, bit):
        self.bits.append(bit)

    def write_byte(self, value):
        self.bits.extend(int2ba(value, length=8, endian=ENDIAN))

    def write_bits(self, bits):
        self.bits.extend(bits)

    def encode(self, codes, data):
        # Concatenate the code of every input byte, in input order
        self.bits.encode(codes, data)

    def align(self):
        # Zero-fill up to the next byte boundary, returns the number of bits added
        return self.bits.fill()

    def getvalue(self):
        return self.bits.tobytes()


class BitUnpacker:
    """Reads bits back out of a byte buffer, keeping track of the position."""

    def __init__(self, data):
        self.bits = bitarray(endian=ENDIAN)
        self.bits.frombytes(data)
        self.position = 0

    def remaining(self):
        return len(self.bits) - self.position

    def read_bit(self):
        if self.position >= len(self.bits):
            raise EOFError("bit stream exhausted")
        bit = self.bits[self.position]
        self.position += 1
        return bit

    def read_byte(self):
        if self.remaining() < 8:
            raise EOFError("bit stream exhausted")
        value = ba2int(self.bits[self.position:self.position + 8])
        self.position += 8
        return value

    def align(self):
        self.position += -self.position % 8

    def read_payload(self):
        """Read the pad-count byte and the packed payload that follows it.

        Returns the logical payload bits with the padding removed. The
        padding region must hold only zero bits, as written by BitPacker.
        """
        try:
            pad_count = self.read_byte()
        except EOFError as exc:
            raise TruncatedStreamError("missing pad-count byte after the tree") from exc

        payload = self.bits[self.position:]
        self.position = len(self.bits)
        if not payload:
            raise TruncatedStreamError("no payload bytes after the pad-count byte")

        if pad_count > MAX_PADDING or pad_count > len(payload):
            raise CorruptPaddingError(
                f"pad count {pad_count} is invalid for a payload of {len(payload)} bits")

        if pad_count:
            if payload[-pad_count:].any():
                raise CorruptPayloadError("non-zero bits in the payload padding")
            del payload[-pad_count:]
        return payload
