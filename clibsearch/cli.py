# clibsearch/cli.py
import argparse
import logging
import sys

from rich.console import Console
from rich.markup import escape

from clibsearch import __version__
from clibsearch.config import Options, debug_from_env, registry_from_env
from clibsearch.matcher import normalize_terms
from clibsearch.search import search

console = Console(stderr=True)


class RichParser(argparse.ArgumentParser):
    def error(self, message):
        console.print(f"[bold red]Error:[/] {escape(message)}\n", highlight=False)
        self.print_usage(sys.stderr)
        sys.exit(2)


def parse_args(argv=None):
    parser = RichParser(
        prog="clib-search",
        usage="%(prog)s [options] [query ...]",
        description="Search the clib package registry",
        allow_abbrev=False,
    )

    parser.add_argument("query", nargs="*", help="Terms matched against name, description, repo and url")

    parser.add_argument(
        "-n", "--no-color", action="store_true", help="don't colorize output"
    )
    parser.add_argument(
        "-c", "--skip-cache", action="store_true", help="skip the search cache"
    )
    parser.add_argument(
        "-j", "--json", action="store_true", help="generate a serialized JSON output"
    )
    parser.add_argument(
        "-r", "--registry", metavar="URL", default=None,
        help="registry wiki page to search (GitHub or GitLab)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="print debug information"
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser.parse_args(argv)


def build_options(args) -> Options:
    return Options(
        terms=normalize_terms(args.query),
        color=not args.no_color,
        cache=not args.skip_cache,
        json=args.json,
        verbose=args.verbose or debug_from_env(),
        registry_url=args.registry or registry_from_env(),
    )


def main(argv=None):
    options = build_options(parse_args(argv))
    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    search(options)
    return 0


if __name__ == "__main__":
    sys.exit(main())
