# filename: huffman_core.py

import heapq
import itertools
import logging
from collections import Counter, namedtuple

from bitarray import bitarray, frozenbitarray

from huffman_bits import ENDIAN
from huffman_errors import CorruptTreeError, EmptyInputError, TruncatedTreeError

logger = logging.getLogger(__name__)

# No tree over 256 symbols has a leaf deeper than this
MAX_TREE_DEPTH = 255

TreeShape = namedtuple("TreeShape", ["node_count", "leaf_count", "max_depth"])


class HuffmanNode:
    is_leaf = False

    def __init__(self, weight, rank):
        # weight: summed frequency of the leaves below, only used while building
        self.weight = weight
        # rank: orders nodes of equal weight, leaves by byte value and
        # internal nodes by creation order, leaves first
        self.rank = rank

    def __lt__(self, other):
        return (self.weight, self.rank) < (other.weight, other.rank)


class HuffmanLeaf(HuffmanNode):
    is_leaf = True

    def __init__(self, symbol, weight=0):
        super().__init__(weight, (0, symbol))
        self.symbol = symbol

    def __repr__(self):
        return f"HuffmanLeaf({self.symbol!r})"


class HuffmanInternal(HuffmanNode):
    def __init__(self, left, right, weight=0, serial=0):
        super().__init__(weight, (1, serial))
        self.left = left
        # None only under the synthesized root of a single-symbol tree
        self.right = right

    def __repr__(self):
        return f"HuffmanInternal({self.left!r}, {self.right!r})"


class HuffmanLogic:
    def count_frequencies(self, data):
        if not data:
            raise EmptyInputError("cannot compress an empty input")
        # Frequency analysis of the input byte data
        return Counter(data)

    def build_tree(self, freqs):
        if not freqs:
            raise EmptyInputError("cannot build a tree from an empty frequency table")

        # Build a priority queue for leaf nodes
        priority_queue = [HuffmanLeaf(symbol, count) for symbol, count in freqs.items()]
        heapq.heapify(priority_queue)

        if len(priority_queue) == 1:
            # A lone leaf would get the empty code, hang it left of a synthetic root
            leaf = priority_queue[0]
            return HuffmanInternal(leaf, None, leaf.weight)

        # Iteratively merge nodes to form the binary tree
        serials = itertools.count()
        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)
            right = heapq.heappop(priority_queue)
            merged = HuffmanInternal(left, right, left.weight + right.weight, next(serials))
            heapq.heappush(priority_queue, merged)

        root = priority_queue[0]
        logger.debug("built tree over %d symbols, total weight %d", len(freqs), root.weight)
        return root

    def generate_codes(self, root):
        codes = {}
        path = bitarray(endian=ENDIAN)
        to_visit = [(root, 0, None)]
        while to_visit:
            node, depth, bit = to_visit.pop()
            # Rewind the shared path to the parent, then take this branch
            del path[max(depth - 1, 0):]
            if bit is not None:
                path.append(bit)

            if node.is_leaf:
                codes[node.symbol] = frozenbitarray(path)
                continue

            if node.right is not None:
                to_visit.append((node.right, depth + 1, 1))
            to_visit.append((node.left, depth + 1, 0))
        return codes

    def measure_tree(self, root):
        node_count = leaf_count = max_depth = 0
        to_visit = [(root, 0)]
        while to_visit:
            node, depth = to_visit.pop()
            node_count += 1
            if node.is_leaf:
                leaf_count += 1
                max_depth = max(max_depth, depth)
                continue
            for child in (node.left, node.right):
                if child is not None:
                    to_visit.append((child, depth + 1))
        return TreeShape(node_count, leaf_count, max_depth)

    def serialize_tree(self, root, packer):
        """Write the tree in preorder: ``1`` + 8-bit symbol per leaf, ``0`` per internal node.

        The synthesized root of a single-symbol tree is written as its lone
        leaf; deserialize_tree puts the root back.
        """
        if not root.is_leaf and root.right is None:
            root = root.left
        self._write_node(root, packer)

    def _write_node(self, node, packer):
        if node.is_leaf:
            packer.write_bit(1)
            packer.write_byte(node.symbol)
            return
        packer.write_bit(0)
        self._write_node(node.left, packer)
        self._write_node(node.right, packer)

    def deserialize_tree(self, reader):
        try:
            root = self._read_node(reader, 0)
        except EOFError as exc:
            raise TruncatedTreeError(
                f"tree data ran out after {reader.position} bits") from exc

        if root.is_leaf:
            return HuffmanInternal(root, None)
        return root

    def _read_node(self, reader, depth):
        if depth > MAX_TREE_DEPTH:
            raise CorruptTreeError(f"tree nests deeper than {MAX_TREE_DEPTH} levels")
        if reader.read_bit():
            return HuffmanLeaf(reader.read_byte())
        left = self._read_node(reader, depth + 1)
        right = self._read_node(reader, depth + 1)
        return HuffmanInternal(left, right)
