# filename: huffman_core.py

import heapq
from collections import Counter

# Characters below this code point are ordered by code point before the
# frequency sort; the rest keep their order of first appearance.
EXTENDED_ASCII = 256

DEFAULT_CHUNK_SIZE = 8192


class HuffmanNode:
    def __init__(self, char, freq, left=None, right=None):
        if freq < 0:
            raise ValueError(f"frequency must be >= 0, got {freq}")
        if char is None:
            if left is None or right is None:
                raise ValueError("internal node needs two children")
            if freq != left.freq + right.freq:
                raise ValueError("internal node frequency must equal the sum of its children")
        elif left is not None or right is not None:
            raise ValueError("leaf node cannot have children")
        self.char = char
        self.freq = freq
        self.left = left
        self.right = right
        self.code = ""

    @property
    def is_leaf(self):
        return self.char is not None

    def set_code(self, code):
        if self.code and self.code != code:
            raise ValueError(f"code for {self.char!r} already assigned: {self.code}")
        self.code = code

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode({self.char!r}, {self.freq})"
        return f"HuffmanNode(None, {self.freq})"


class HuffmanLogic:
    def count_frequencies(self, stream, chunk_size=DEFAULT_CHUNK_SIZE):
        """Count every character read from a text stream."""
        freqs = Counter()
        for chunk in iter(lambda: stream.read(chunk_size), ""):
            freqs.update(chunk)
        return freqs

    def sorted_leaves(self, freqs):
        """
        Build one leaf per character, ascending by frequency.

        Ties keep the pre-order: characters below EXTENDED_ASCII by code
        point, then the others in the order they were first counted.
        """
        low = sorted(char for char in freqs if ord(char) < EXTENDED_ASCII)
        high = [char for char in freqs if ord(char) >= EXTENDED_ASCII]
        leaves = [HuffmanNode(char, freqs[char]) for char in low + high if freqs[char] > 0]
        # list.sort is stable
        leaves.sort(key=lambda node: node.freq)
        return leaves

    def merge_nodes(self, first, second):
        # On equal frequencies the second node takes the left slot.
        if first.freq < second.freq:
            return HuffmanNode(None, first.freq + second.freq, first, second)
        return HuffmanNode(None, first.freq + second.freq, second, first)

    def build_tree(self, leaves):
        if not leaves:
            return None

        # A merged node gets a larger sequence number than every node already
        # queued, so it sorts after all nodes of equal frequency.
        priority_queue = [(node.freq, seq, node) for seq, node in enumerate(leaves)]
        heapq.heapify(priority_queue)
        seq = len(priority_queue)

        # Iteratively merge the two lowest nodes until the root remains
        while len(priority_queue) > 1:
            _, _, first = heapq.heappop(priority_queue)
            _, _, second = heapq.heappop(priority_queue)
            merged = self.merge_nodes(first, second)
            heapq.heappush(priority_queue, (merged.freq, seq, merged))
            seq += 1

        return priority_queue[0][2]

    def iter_leaves(self, node):
        """Yield (leaf, path) pairs, left subtree before right."""
        if node is None:
            return
        stack = [(node, "")]
        while stack:
            current, path = stack.pop()
            if current.is_leaf:
                yield current, path
                continue
            stack.append((current.right, path + "1"))
            stack.append((current.left, path + "0"))

    def generate_codes(self, node):
        codes = {}
        for leaf, path in self.iter_leaves(node):
            # a lone root leaf still needs a one-bit code
            leaf.set_code(path or "0")
            codes[leaf.char] = leaf.code
        return codes

    def leaf_report(self, node):
        return [(leaf.char, leaf.freq, leaf.code) for leaf, _ in self.iter_leaves(node)]
