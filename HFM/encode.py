import argparse
import os
from codec import encode_blocks
from metrics import compression_ratio, block_entropy, mean_code_length

SUFFIX = ".hfm"


def default_output(path: str) -> str:
    return path + SUFFIX


def main(argv=None):
    ap = argparse.ArgumentParser(description="Compress a file with block Huffman coding")
    ap.add_argument("--input", required=True, help="file to compress")
    ap.add_argument("--output", help="path to .hfm (default: input + .hfm)")
    ap.add_argument("--block", type=int, default=1, help="block size in bytes (default 1)")
    args = ap.parse_args(argv)
    if args.block < 1:
        ap.error("--block must be >= 1")

    with open(args.input, "rb") as f:
        data = f.read()

    packed, meta = encode_blocks(data, block_size=args.block)

    output = args.output or default_output(args.input)
    os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
    with open(output, "wb") as f:
        f.write(packed)

    freqs, codes, nblocks = meta["freqs"], meta["codes"], meta["nblocks"]

    print(f"[encode] wrote {output}")
    print(f"[encode] {len(data)}B -> {len(packed)}B")
    print(f"[encode] block={args.block}, blocks={nblocks}, distinct={len(freqs)}")
    print(f"[encode] entropy={block_entropy(freqs):.3f} bits/block, "
          f"mean code={mean_code_length(freqs, codes):.3f} bits/block, "
          f"ratio={compression_ratio(len(data), len(packed)):.3f}")


if __name__ == "__main__":
    main()
