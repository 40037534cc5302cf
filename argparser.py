# argparser.py - command-line options for the myshell program
import argparse
import os

DEFAULT_PROMPT = "$ "


def default_history_file():
    return os.environ.get("MYSHELL_HISTFILE") or os.path.expanduser("~/.myshell_history")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="myshell",
        description="A small interactive command shell.")

    parser.add_argument("script", nargs="?", default=None,
                        help="run the lines of this file instead of reading stdin")
    parser.add_argument("--prompt", default=DEFAULT_PROMPT,
                        help="prompt printed before each line (default: %(default)r)")
    parser.add_argument("--history-file", default=default_history_file(),
                        help="where interactive history is kept")
    parser.add_argument("--no-history", action="store_true",
                        help="keep interactive history in memory only")
    parser.add_argument("--trace", action="store_true",
                        default=os.environ.get("MYSHELL_TRACE") == "1",
                        help="print each resolved command to stderr before running it")

    return parser
