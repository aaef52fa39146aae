import argparse
import os
from codec import decode
from encode import SUFFIX


def default_output(path: str) -> str:
    # same file name when there is no suffix to strip
    if path.endswith(SUFFIX):
        return path[:-len(SUFFIX)]
    return path


def main(argv=None):
    ap = argparse.ArgumentParser(description="Decompress a .hfm file")
    ap.add_argument("--input", required=True, help="path to .hfm")
    ap.add_argument("--output", help="output path (default: input without .hfm)")
    ap.add_argument("--block", type=int, default=1, help="block size used when encoding (default 1)")
    args = ap.parse_args(argv)
    if args.block < 1:
        ap.error("--block must be >= 1")

    with open(args.input, "rb") as f:
        packed = f.read()

    data = decode(packed, block_size=args.block)

    output = args.output or default_output(args.input)
    os.makedirs(os.path.dirname(output) or ".", exist_ok=True)
    with open(output, "wb") as f:
        f.write(data)

    print(f"[decode] wrote {output}")
    print(f"[decode] {len(packed)}B -> {len(data)}B")


if __name__ == "__main__":
    main()
