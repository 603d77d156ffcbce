import argparse
import logging
import sys

from cub.commands import map_command
from cub.config import LOG_FORMAT, get_log_level
from cub.errors import CubError

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Cub CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init command
    subparsers.add_parser("init", help="Initialize a new cub repository")

    # add command
    add_parser = subparsers.add_parser("add", help="Add a file to staging")
    add_parser.add_argument("path", help="Path of the file to add")

    # commit command
    commit_parser = subparsers.add_parser("commit", help="Commit staged changes")
    commit_parser.add_argument("message", nargs="?", help="Commit message")
    commit_parser.add_argument("-m", "--message", dest="message_opt", help="Commit message")

    # log command
    subparsers.add_parser("log", help="Show commit logs")

    # show command
    show_parser = subparsers.add_parser("show", help="Show the changes introduced by a commit")
    show_parser.add_argument("commit_hash", help="Commit hash to show")

    # status command
    subparsers.add_parser("status", help="Show HEAD and the staged files")

    args = parser.parse_args(argv)
    if args.command == "commit":
        args.message = args.message_opt if args.message_opt is not None else args.message
        if args.message is None:
            parser.error("commit requires a message")

    logging.basicConfig(level=get_log_level(args.verbose), format=LOG_FORMAT)

    try:
        map_command(args.command)(args)
    except CubError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
