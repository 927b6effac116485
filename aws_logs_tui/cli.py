from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

import curses

from aws_logs_tui import __version__
from aws_logs_tui.aws_config import create_lambda_client, load_config
from aws_logs_tui.errors import ConfigurationError, RetrievalError
from aws_logs_tui.lambda_client import LambdaClient
from aws_logs_tui.models import FunctionCatalog
from aws_logs_tui.selection import SelectionState
from aws_logs_tui.tui import run_app


def print_report(catalog: FunctionCatalog) -> None:
    # Scripts parse this; keep the format stable.
    sys.stdout.write(f"Found [{len(catalog)}] functions:\n")
    for name in catalog.names():
        sys.stdout.write(name + "\n")
    sys.stdout.flush()


def _prepare_curses_term_for_tui() -> None:
    """
    Best-effort terminal preflight before starting curses.

    Remote hosts often lack terminfo entries for newer $TERM values
    (e.g. "xterm-kitty", "wezterm"); fall back to a common one that works.
    """
    current_term = (os.environ.get("TERM") or "").strip()
    candidates: List[str] = []
    if current_term:
        candidates.append(current_term)
    candidates.extend(["xterm-256color", "xterm", "screen-256color", "screen", "vt100", "linux"])

    seen = set()
    for t in candidates:
        if t in seen:
            continue
        seen.add(t)
        try:
            curses.setupterm(term=t, fd=sys.stdout.fileno())
        except (curses.error, OSError, ValueError):
            continue
        if t != current_term:
            os.environ["TERM"] = t
        return


def _run_tui(catalog: FunctionCatalog) -> SelectionState:
    _prepare_curses_term_for_tui()
    # Keep lone ESC (quit) responsive.
    os.environ.setdefault("ESCDELAY", "25")
    return curses.wrapper(run_app, catalog)


def fetch_catalog(profile: Optional[str], region: Optional[str]) -> FunctionCatalog:
    session = load_config(profile, region)
    client = LambdaClient(create_lambda_client(session))
    return client.get_all_functions()


def cmd_browse(profile: Optional[str], region: Optional[str]) -> int:
    try:
        catalog = fetch_catalog(profile, region)
    except (ConfigurationError, RetrievalError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_report(catalog)

    try:
        _run_tui(catalog)
    except curses.error as e:
        term = os.environ.get("TERM")
        msg = str(e) or "curses error"
        print(f"Error: failed to initialize terminal UI: {msg}", file=sys.stderr)
        if term:
            print(f"Tip: your TERM is {term!r}. If this system lacks terminfo for it, try:", file=sys.stderr)
        else:
            print("Tip: TERM is not set. Try:", file=sys.stderr)
        print("  TERM=xterm-256color aws-logs-tui", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        return 130
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="aws-logs-tui",
        description="Browse AWS Lambda functions in the terminal.",
    )
    parser.add_argument("-p", "--profile", dest="profile", default=None, help="AWS profile to use.")
    parser.add_argument("-r", "--region", dest="region", default=None, help="AWS region to use.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)
    return cmd_browse(args.profile, args.region)
