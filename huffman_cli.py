#!/usr/bin/env python3
"""
Command-line entry point for the Huffman text encoder.

Builds a Huffman code from the character frequencies of an encoding file
and writes the code of every character of an input file, as '0'/'1'
characters, to an output file.

Run with:
    huffman-encode inputFile encodingFile outputFile
"""
import argparse
import sys

from huffman_service import HuffmanService


def build_parser():
    parser = argparse.ArgumentParser(
        prog="huffman-encode",
        description="Encode a file with a Huffman code generated from another file",
    )
    parser.add_argument("input_file", metavar="inputFile", help="File to encode")
    parser.add_argument(
        "encoding_file",
        metavar="encodingFile",
        help="File whose character frequencies define the Huffman code",
    )
    parser.add_argument(
        "output_file",
        metavar="outputFile",
        help="Empty or not yet existing file to write the encoding to",
    )
    return parser


def main(argv=None):
    """Main entry point; returns the process exit status."""
    args = build_parser().parse_args(argv)
    result = HuffmanService().encode(args.input_file, args.encoding_file, args.output_file)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
