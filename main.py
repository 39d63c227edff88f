import sys
from argparse import ArgumentParser

import commands
from chunk_error import ChunkError

__version__ = "0.1.0"


def build_parser():
    parser = ArgumentParser(
        prog="pngme", description="Hide, find and remove messages in PNG files."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser("encode", help="hide a message in a PNG file")
    encode.add_argument("file_path", help="path or http(s) URL of the png file")
    encode.add_argument("chunk_type", help="4 letter chunk type, e.g. RuSt")
    encode.add_argument("message", help="message to hide in the png")
    encode.add_argument("output_path", nargs="?", help="where to write the result")

    decode = subparsers.add_parser("decode", help="find a message in a PNG file")
    decode.add_argument("file_path", help="path or http(s) URL of the png file")
    decode.add_argument("chunk_type", help="4 letter chunk type, e.g. RuSt")

    remove = subparsers.add_parser("remove", help="remove a message from a PNG file")
    remove.add_argument("file_path", help="path of the png file")
    remove.add_argument("chunk_type", help="4 letter chunk type, e.g. RuSt")

    show = subparsers.add_parser("print", help="print the chunks of a PNG file")
    show.add_argument("file_path", help="path or http(s) URL of the png file")

    return parser


def run(args):
    if args.command == "encode":
        print(
            commands.encode(
                args.file_path, args.chunk_type, args.message, args.output_path
            )
        )
    elif args.command == "decode":
        for message in commands.decode(args.file_path, args.chunk_type):
            print(message)
    elif args.command == "remove":
        print(commands.remove(args.file_path, args.chunk_type))
    elif args.command == "print":
        for line in commands.print_png(args.file_path):
            print(line)


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except (ChunkError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
