from bitpack import BitWriter, BitReader, MalformedContainerError
from huffman import Node, count_nodes

# Container layout (bit-level, MSB-first, no byte alignment between fields):
#   tree       pre-order: leaf = '1' + value bytes, internal = '0' + left + right
#   nblocks    u32
#   body       one code per block, in input order
COUNT_BITS = 32
MAX_BLOCKS = (1 << COUNT_BITS) - 1

LEAF = 1
INTERNAL = 0


def tree_bits(root: Node, block_size: int) -> int:
    """Exact serialized size of a tree: one marker per node plus leaf payloads."""
    n = count_nodes(root)
    leaves = (n + 1) // 2 if n else 0
    return n + leaves * 8 * block_size


def header_bits(root: Node, block_size: int) -> int:
    return tree_bits(root, block_size) + COUNT_BITS


def write_tree(bw: BitWriter, node: Node):
    if node.is_leaf():
        if node.value is None:
            raise ValueError("cannot serialize an empty tree")
        bw.write_bit(LEAF)
        bw.write_bytes(node.value)
    else:
        bw.write_bit(INTERNAL)
        write_tree(bw, node.left)
        write_tree(bw, node.right)


def read_tree(br: BitReader, block_size: int) -> Node:
    """
    Inverse of write_tree. Uses an explicit stack of internal nodes still
    waiting for a child, so a corrupt run of '0' markers ends in
    MalformedContainerError rather than deep recursion.
    Decoded trees carry no counts: leaves get weight 1 and internal nodes
    the sum of their children.
    """
    pending = []
    while True:
        if br.read_bit("tree marker") == INTERNAL:
            node = Node()
            if pending:
                _attach(pending[-1], node)
            pending.append(node)
            continue

        node = Node(freq=1, value=br.read_bytes(block_size, "leaf value"))
        if not pending:
            return node
        _attach(pending[-1], node)
        while pending[-1].right is not None:
            done = pending.pop()
            done.freq = done.left.freq + done.right.freq
            if not pending:
                return done


def _attach(parent: Node, child: Node):
    if parent.left is None:
        parent.left = child
    else:
        parent.right = child


def write_header(bw: BitWriter, root: Node, nblocks: int):
    if not (0 <= nblocks <= MAX_BLOCKS):
        raise ValueError(f"{nblocks} blocks do not fit the {COUNT_BITS}-bit count field")
    write_tree(bw, root)
    bw.write_code(nblocks, COUNT_BITS)


def read_header(br: BitReader, block_size: int):
    root = read_tree(br, block_size)
    nblocks = br.read_code(COUNT_BITS, "block count")
    if not root.is_leaf() and nblocks > br.bits_left():
        raise MalformedContainerError(
            f"Malformed stream: {nblocks} blocks declared but only {br.bits_left()} body bits present")
    return root, nblocks
