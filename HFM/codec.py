from blocks import split_blocks, block_frequencies, check_block_size
from huffman import build_tree, CodeTable, InternalConsistencyError
from bitpack import BitWriter, BitReader
from bitstream import write_header, read_header, header_bits


def encode_blocks(data: bytes, block_size: int = 1):
    """
    Returns:
      packed: container bytes (tree | u32 block count | one code per block)
      meta: dict (freqs, codes, nblocks, pad) describing what was written
    Input is zero-padded to a multiple of block_size first.
    Empty input gives an empty container.
    """
    block_size = check_block_size(block_size)
    blocks = split_blocks(data, block_size)
    nb = blocks.shape[0]
    meta = {"freqs": [], "codes": {}, "nblocks": nb, "pad": nb * block_size - len(data)}
    if nb == 0:
        return b"", meta

    # 1) Count blocks and build the tree
    freqs = block_frequencies(blocks)
    root = build_tree(freqs)

    # 2) Codes + exact output size
    table, body_bits = CodeTable.from_tree(root)
    total_bits = header_bits(root, block_size) + body_bits

    # 3) Header, then body in input order
    bw = BitWriter()
    write_header(bw, root, nb)
    body_start = bw.bit_length
    for row in blocks:
        code, L = table.lookup(row.tobytes())
        bw.write_code(code, L)

    if bw.bit_length - body_start != body_bits or bw.bit_length != total_bits:
        raise InternalConsistencyError(
            f"body size mismatch: planned {body_bits} bits, wrote {bw.bit_length - body_start}")

    meta["freqs"] = freqs
    meta["codes"] = table.as_dict()
    return bw.finish(), meta


def encode(data: bytes, block_size: int = 1) -> bytes:
    return encode_blocks(data, block_size)[0]


def decode(data: bytes, block_size: int = 1) -> bytes:
    """
    Inverse of encode for the same block_size. Padding bytes added by
    encode are kept. Raises MalformedContainerError on truncated or
    inconsistent input.
    """
    block_size = check_block_size(block_size)
    if len(data) == 0:
        return b""

    br = BitReader(data)
    root, nb = read_header(br, block_size)

    out = bytearray()
    if root.is_leaf():
        # single distinct block: zero bits per block
        out.extend(root.value * nb)
        return bytes(out)

    for _ in range(nb):
        node = root
        while not node.is_leaf():
            node = node.right if br.read_bit("block code") else node.left
        out.extend(node.value)
    return bytes(out)
