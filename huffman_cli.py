#!/usr/bin/env python3
"""
Command-line front end for the Huffman codec.

Without a mode it shows the interactive menu and prompts for file names:
    huffman-codec

With a mode it runs a single operation:
    huffman-codec compress notes.txt notes.huf
    huffman-codec decompress notes.huf notes.txt
"""
import argparse
import logging
import os
import sys
import time

from huffman_errors import CodecError, FileAccessError
from huffman_service import HuffmanService

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def read_file(path):
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileAccessError(f"cannot open input file: {path}") from e


def write_file(path, data):
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise FileAccessError(f"cannot open output file: {path}") from e


def run_compress(service, input_path, output_path, verbose=True):
    t0 = time.time()
    data = read_file(input_path)
    result = service.compress_with_stats(data)
    write_file(output_path, result.data)
    elapsed_ms = (time.time() - t0) * 1000

    if verbose:
        print("\nCompression Stats:")
        print(f"   Input Size        : {result.input_size / 1024:.2f} KB")
        print(f"   Compressed Size   : {result.output_size / 1024:.2f} KB")
        print(f"   Compression Ratio : {result.ratio:.2f} %")
        print(f"   Huffman Tree Nodes: {result.node_count}, Max Depth: {result.max_depth}")
        print(f"   Time Taken        : {elapsed_ms:.0f} ms\n")
    return result


def run_decompress(service, input_path, output_path, verbose=True):
    t0 = time.time()
    data = read_file(input_path)
    decoded = service.decompress(data)
    write_file(output_path, decoded)
    elapsed_ms = (time.time() - t0) * 1000

    if verbose:
        print("\nDecompression Stats:")
        print(f"   Compressed Size : {len(data) / 1024:.2f} KB")
        print(f"   Output Size     : {len(decoded) / 1024:.2f} KB")
        print(f"   Time Taken      : {elapsed_ms:.0f} ms\n")
    return decoded


def prompt_menu():
    """Show the menu and return ``(mode, input_path, output_path)``.

    Returns None when the user picks exit, raises ValueError on anything else.
    """
    print("=== HUFFMAN COMPRESSION TOOL ===")
    print("1. Compress a file")
    print("2. Decompress a file")
    print("3. Exit")
    choice = input("Enter your choice (1-3): ").strip()

    if choice == "1":
        print("\n=== COMPRESSION MODE ===")
        input_path = input("Enter input file name: ").strip()
        output_path = input("Enter output compressed file name: ").strip()
        return "compress", input_path, output_path
    if choice == "2":
        print("\n=== DECOMPRESSION MODE ===")
        input_path = input("Enter compressed file name: ").strip()
        output_path = input("Enter output decompressed file name: ").strip()
        return "decompress", input_path, output_path
    if choice == "3":
        print("Goodbye!")
        return None
    raise ValueError(f"invalid menu choice: {choice!r}")


def build_parser():
    parser = argparse.ArgumentParser(description="Compress or decompress files with Huffman coding")
    parser.add_argument("mode", nargs="?", choices=("compress", "decompress"),
                        help="operation to run; omit for the interactive menu")
    parser.add_argument("input", nargs="?", help="input file path")
    parser.add_argument("output", nargs="?", help="output file path")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="do not print size and timing statistics")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS,
                        default=os.environ.get("HUFFMAN_LOG_LEVEL", "WARNING").upper(),
                        help="logging level (default: $HUFFMAN_LOG_LEVEL or WARNING)")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    if args.mode is None:
        try:
            selection = prompt_menu()
        except ValueError as e:
            logger.warning("%s", e)
            print("Invalid choice!")
            return 1
        if selection is None:
            return 0
        mode, input_path, output_path = selection
    else:
        if args.input is None or args.output is None:
            parser.error(f"{args.mode} needs an input and an output path")
        mode, input_path, output_path = args.mode, args.input, args.output

    service = HuffmanService()
    verbose = not args.quiet
    try:
        if mode == "compress":
            print("\nCompressing...")
            run_compress(service, input_path, output_path, verbose)
            print("Compression completed!")
        else:
            print("\nDecompressing...")
            run_decompress(service, input_path, output_path, verbose)
            print("Decompression completed!")
    except CodecError as e:
        logger.error("%s of %s failed: %s", mode, input_path, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
