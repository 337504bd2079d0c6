#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from bloatbuster.commands import render_script
from bloatbuster.database import load_database
from bloatbuster.errors import DatabaseError, DetectionError
from bloatbuster.log import logger, setup_logging
from bloatbuster.session import DetectionSession

def read_input(path: Optional[str]) -> str:
    if not path:
        return ""
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8-sig") as f:
        return f.read()

def print_commands(data: Optional[str], text: str) -> int:
    try:
        session = DetectionSession(load_database(data))
        session.detect(text)
    except DatabaseError as e:
        print(str(e), file=sys.stderr)
        return 1
    except DetectionError as e:
        print(str(e), file=sys.stderr)
        return 2
    sys.stdout.write(render_script(session.commands))
    return 0

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Classify Android packages and build removal commands.")
    ap.add_argument("--data", default=None, help="package database JSON (default: bundled)")
    ap.add_argument("--input", default=None, help="package list file, '-' for stdin")
    ap.add_argument("--print-commands", action="store_true", help="no UI: print commands for the default selection")
    ap.add_argument("--log-level", default="WARNING")
    ap.add_argument("--log-file", default=None)
    args = ap.parse_args(argv)

    try:
        text = read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read package list {args.input}: {e}", file=sys.stderr)
        return 1

    if args.print_commands:
        setup_logging(args.log_level, log_file=args.log_file)
        return print_commands(args.data, text)

    from textual.logging import TextualHandler
    from bloatbuster.ui_app import BloatBusterApp

    setup_logging(args.log_level, log_file=args.log_file, handler=TextualHandler())
    try:
        app = BloatBusterApp(data_path=args.data, initial_text=text)
    except DatabaseError as e:
        logger.error("%s", e)
        print(str(e), file=sys.stderr)
        return 1
    app.run()
    return 0

if __name__ == "__main__":
    sys.exit(main())
