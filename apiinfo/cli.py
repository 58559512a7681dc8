#!/usr/bin/env python3
"""
apiinfo CLI

Dumps the editor's remote API description as YAML.

Usage:
    apiinfo                              # nvim --api-info > api_info.yml
    apiinfo -o docs/api.yml
    apiinfo --nvim /opt/nvim/bin/nvim
    apiinfo -i api_info.mpack --stdout   # convert a saved payload
    apiinfo -- ./my-editor --dump-api    # any command printing MessagePack

Options:
    -o, --output FILE    Output file (default: api_info.yml)
    -i, --input FILE     Read MessagePack from FILE ('-' for stdin) instead of running nvim
    --nvim PATH          Editor binary to run with --api-info
    --timeout SECONDS    Kill the command after this long (default: wait forever)
    --stdout             Print YAML to stdout instead of writing a file
    --summary            Print version and counts (to stderr with --stdout)
    -q, --quiet          Suppress status lines
"""

import argparse
import sys

from .core import DEFAULT_COMMAND, DEFAULT_OUTPUT, ApiInfoConverter
from .errors import ConversionError, InputError, ModelError
from .model import ApiInfo


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)

    command = None
    if "--" in argv:
        split = argv.index("--")
        command = argv[split + 1:]
        argv = argv[:split]

    parser = _build_parser()
    args = parser.parse_args(argv)

    if command is not None and not command:
        parser.error("expected a command after '--'")
    if command is not None and (args.nvim or args.input):
        parser.error("a command after '--' cannot be combined with --nvim or --input")
    if args.nvim and args.input:
        parser.error("--nvim and --input are mutually exclusive")

    if args.nvim:
        command = [args.nvim, DEFAULT_COMMAND[1]]

    verbose = not (args.quiet or args.stdout)
    engine = ApiInfoConverter(command=command, timeout=args.timeout, verbose=verbose)
    output_path = None if args.stdout else args.output

    try:
        if args.input:
            data = _read_input(args.input)
        else:
            data = engine.fetch()
        document = engine.decode(data)
        yaml_text = engine.convert_document(document, output_path)
    except ConversionError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    if args.stdout:
        sys.stdout.write(yaml_text)

    if args.summary:
        try:
            # Keep piped YAML on stdout parseable
            stream = sys.stderr if args.stdout else sys.stdout
            _show_summary(ApiInfo.from_document(document), stream)
        except ModelError as e:
            print(f"[ERROR] summary: {e}", file=sys.stderr)
            sys.exit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apiinfo",
        usage="%(prog)s [options] [-- command ...]",
        description=(
            "Editor API Description to YAML\n\n"
            "Runs `nvim --api-info`, decodes the MessagePack it prints and\n"
            "writes the same document as YAML."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  apiinfo                               # writes api_info.yml\n"
            "  apiinfo -o docs/api.yml\n"
            "  apiinfo --nvim /opt/nvim/bin/nvim --summary\n"
            "  nvim --api-info | apiinfo -i - --stdout\n"
            "  apiinfo -- ./my-editor --dump-api\n"
        ),
    )

    parser.add_argument(
        "-o", "--output",
        default=DEFAULT_OUTPUT,
        help=f"Output file (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "-i", "--input",
        default=None,
        metavar="FILE",
        help="Read MessagePack from FILE ('-' for stdin) instead of running the editor",
    )
    parser.add_argument(
        "--nvim",
        default=None,
        metavar="PATH",
        help="Editor binary to run with --api-info (default: nvim)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Kill the command after this many seconds (default: no timeout)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print YAML to stdout instead of writing a file",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print version and counts of the API description (to stderr with --stdout)",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress status lines",
    )
    return parser


def _read_input(source: str) -> bytes:
    """Read a saved payload from a file or stdin."""
    if source == "-":
        return sys.stdin.buffer.read()
    try:
        with open(source, "rb") as f:
            return f.read()
    except OSError as e:
        raise InputError(f"cannot read {source}: {e.strerror or e}") from e


def _show_summary(api: ApiInfo, stream):
    """Display the headline facts of an API description."""
    summary = api.summary()
    print(f"\nAPI {summary['version']} (level {summary['api_level']}, "
          f"compatible with {summary['api_compatible']})", file=stream)
    print("-" * 40, file=stream)
    print(f"  Functions:    {summary['functions']} ({summary['deprecated_functions']} deprecated)", file=stream)
    print(f"  UI events:    {summary['ui_events']}", file=stream)
    print(f"  UI options:   {summary['ui_options']}", file=stream)
    print(f"  Types:        {', '.join(summary['types']) or '-'}", file=stream)
    print(f"  Error types:  {', '.join(summary['error_types']) or '-'}", file=stream)
    print(file=stream)


if __name__ == "__main__":
    main()
