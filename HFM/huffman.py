from __future__ import annotations
from bisect import bisect_left
from dataclasses import dataclass
from typing import List, Optional, Tuple

from blocks import block_key

Code = Tuple[int, int]  # (code_int, code_len), MSB = first decision from root


class InternalConsistencyError(RuntimeError):
    """A block the encoder counted has no code, or the body size disagrees with the plan."""


@dataclass
class Node:
    freq: int = 0
    value: Optional[bytes] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def is_empty(self) -> bool:
        # root of a tree built from zero blocks
        return self.is_leaf() and self.value is None


def _pop_smallest(nodes: List[Node]) -> Node:
    # first strictly-smallest wins; pop() keeps the order of the rest
    best = 0
    for i in range(1, len(nodes)):
        if nodes[i].freq < nodes[best].freq:
            best = i
    return nodes.pop(best)


def build_tree(freqs: List[Tuple[bytes, int]]) -> Node:
    """
    freqs: (block value, count) in first-appearance order.
    Merges the two rarest nodes until one is left; the first one removed
    becomes the left child and the merged node goes to the end of the list.
    """
    nodes = [Node(freq=f, value=v) for v, f in freqs]
    if len(nodes) == 0:
        return Node()
    while len(nodes) > 1:
        a = _pop_smallest(nodes)
        b = _pop_smallest(nodes)
        nodes.append(Node(freq=a.freq + b.freq, left=a, right=b))
    return nodes[0]


def count_nodes(node: Node) -> int:
    if node.is_leaf():
        return 0 if node.value is None else 1
    return 1 + count_nodes(node.left) + count_nodes(node.right)


def build_codebook(node: Node, code: int = 0, depth: int = 0,
                   out: Optional[List[Tuple[bytes, Code]]] = None) -> Tuple[List[Tuple[bytes, Code]], int]:
    """
    Depth-first walk, left before right.
    Returns ([(value, (code, len)), ...], body_bits) where
    body_bits = sum(freq * len) over all leaves.
    """
    if out is None:
        out = []
    if node.is_leaf():
        if node.value is None:
            return out, 0
        out.append((node.value, (code, depth)))
        return out, node.freq * depth
    _, bits_l = build_codebook(node.left, code << 1, depth + 1, out)
    _, bits_r = build_codebook(node.right, (code << 1) | 1, depth + 1, out)
    return out, bits_l + bits_r


class CodeTable:
    """Code table sorted by block ordering, searched with bisect."""

    def __init__(self, entries: List[Tuple[bytes, Code]]):
        self.entries = sorted(entries, key=lambda e: block_key(e[0]))
        self._keys = [block_key(v) for v, _ in self.entries]

    @classmethod
    def from_tree(cls, root: Node) -> Tuple["CodeTable", int]:
        entries, body_bits = build_codebook(root)
        return cls(entries), body_bits

    def __len__(self):
        return len(self.entries)

    def lookup(self, value: bytes) -> Code:
        k = block_key(value)
        i = bisect_left(self._keys, k)
        if i < len(self._keys) and self._keys[i] == k:
            return self.entries[i][1]
        raise InternalConsistencyError(f"block {value.hex()} missing from code table ({len(self.entries)} entries)")

    def as_dict(self):
        return {v: c for v, c in self.entries}
