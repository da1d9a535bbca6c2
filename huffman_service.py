# filename: huffman_service.py

import logging
from dataclasses import dataclass

from huffman_bits import BitPacker, BitUnpacker
from huffman_core import HuffmanLogic
from huffman_errors import CorruptPayloadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompressionResult:
    data: bytes
    input_size: int
    node_count: int
    leaf_count: int
    max_depth: int

    @property
    def output_size(self):
        return len(self.data)

    @property
    def ratio(self):
        # Percent saved, negative when the artifact is larger than the input
        return 100.0 * (1.0 - self.output_size / self.input_size)


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def compress(self, data):
        return self.compress_with_stats(data).data

    def compress_with_stats(self, data):
        freqs = self.logic.count_frequencies(data)
        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)
        shape = self.logic.measure_tree(tree)

        # The tree region is zero-filled so the pad-count byte starts on a byte boundary
        header = BitPacker()
        self.logic.serialize_tree(tree, header)
        header.align()

        payload = BitPacker()
        payload.encode(codes, data)
        padding = payload.align()

        compressed = header.getvalue() + bytes([padding]) + payload.getvalue()
        logger.debug(
            "compressed %d bytes to %d (tree %d bytes, %d padding bits, %d nodes, depth %d)",
            len(data), len(compressed), len(header) // 8, padding,
            shape.node_count, shape.max_depth)
        return CompressionResult(
            data=compressed,
            input_size=len(data),
            node_count=shape.node_count,
            leaf_count=shape.leaf_count,
            max_depth=shape.max_depth,
        )

    def decompress(self, data):
        reader = BitUnpacker(data)
        root = self.logic.deserialize_tree(reader)
        reader.align()
        bits = reader.read_payload()

        decoded = bytearray()
        node = root
        for position, bit in enumerate(bits):
            node = node.right if bit else node.left
            if node is None:
                raise CorruptPayloadError(f"payload bit {position} leads to a missing branch")
            if node.is_leaf:
                decoded.append(node.symbol)
                node = root

        if node is not root:
            raise CorruptPayloadError("payload ends in the middle of a code")

        logger.debug("decompressed %d bytes to %d", len(data), len(decoded))
        return bytes(decoded)


_service = HuffmanService()


def compress(data):
    return _service.compress(data)


def decompress(data):
    return _service.decompress(data)
