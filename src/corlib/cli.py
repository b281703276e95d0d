"""corlib CLI: list the runtime's API surface and check call-site references."""

from __future__ import annotations

import json
import sys

from .surface import check_reference, surface


USAGE: str = """\
corlib [OPTIONS] COMMAND [FILE]

Inspect the runtime's API surface.

Commands:
  surface            List every exported type and member
  check FILE         Check "Type.Member" references (one per line, '#' comments;
                     FILE may be - for stdin)

Options:
  --json             Emit machine-readable output (surface)
  --allow-unported   Do not fail on references to unported members
  --help             Show this help message
"""

COMMANDS = ("surface", "check")


def read_references(source: str) -> list[str]:
    """Non-blank lines with '#' comments removed."""
    refs: list[str] = []
    for line in source.split("\n"):
        ref = line.split("#", 1)[0].strip()
        if ref:
            refs.append(ref)
    return refs


def cmd_surface(as_json: bool) -> int:
    members = surface()
    if as_json:
        data = [
            {"type": m.type_name, "member": m.name, "kind": m.kind, "status": m.status}
            for m in members
        ]
        print(json.dumps(data, indent=2))
        return 0
    for m in members:
        print(m.status + " " + m.reference)
    return 0


def cmd_check(filepath: str, allow_unported: bool) -> int:
    if filepath == "-":
        source = sys.stdin.read()
    else:
        try:
            with open(filepath, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            print("corlib: " + filepath + ": No such file or directory", file=sys.stderr)
            return 1
        except OSError as e:
            print("corlib: " + filepath + ": " + str(e), file=sys.stderr)
            return 1
        try:
            source = raw.decode("utf-8")
        except ValueError:
            print("corlib: " + filepath + ": invalid utf-8", file=sys.stderr)
            return 1
    failed = False
    for ref in read_references(source):
        status = check_reference(ref)
        print(status + " " + ref)
        if status == "missing" or (status == "unported" and not allow_unported):
            failed = True
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    command = ""
    filepath = ""
    as_json = False
    allow_unported = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--json":
            as_json = True
            i += 1
        elif arg == "--allow-unported":
            allow_unported = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("corlib: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        elif command == "":
            if arg not in COMMANDS:
                print("corlib: unknown command '" + arg + "'", file=sys.stderr)
                return 2
            command = arg
            i += 1
        elif command == "check" and filepath == "":
            filepath = arg
            i += 1
        else:
            print("corlib: unexpected argument '" + arg + "'", file=sys.stderr)
            return 2
    if command == "":
        print("corlib: missing command", file=sys.stderr)
        return 2
    if command == "surface":
        return cmd_surface(as_json)
    if filepath == "":
        print("corlib: missing file argument", file=sys.stderr)
        return 2
    return cmd_check(filepath, allow_unported)


if __name__ == "__main__":
    sys.exit(main())
