"""getver command line.

    getver [flags] URL

Exit codes: 0 results printed; 1 no results, bad arguments or not enough
results for -u; 2 no results in --number mode.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import load_settings
from .exceptions import CrawlDepthError, GetverException, NotEnoughResultsError
from .logging_utils import configure_logging
from .versioning import find_version_candidates, select_result, sort_descending

logger = logging.getLogger('getver.cli')

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_NUMBERED_RESULTS = 2

DESCRIPTION = 'Crawls a given URL and tries to find the version number.'


def build_parser(version_string: str) -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        prog='getver',
        description=DESCRIPTION,
        epilog='Example: getver golang.org',
    )
    parser.add_argument('url', nargs='?', help='Site to examine')
    parser.add_argument('-u', dest='selection', type=int, default=None, metavar='N',
                        help='Use a specific result')
    parser.add_argument('-n', dest='retrieve', type=int, default=1, metavar='N',
                        help='Retrieve more results (the default is 1)')
    parser.add_argument('-d', dest='depth', type=int, default=settings.crawl_depth, metavar='N',
                        help=f'Crawl depth (the default is {settings.crawl_depth})')
    parser.add_argument('-t', dest='timeout', type=int, default=settings.timeout_ms, metavar='N',
                        help=f'Timeout per request, in milliseconds (the default is {settings.timeout_ms})')
    parser.add_argument('--nostrip', action='store_true', help="Don't strip away letters")
    parser.add_argument('--sort', action='store_true', help='Sort the results in descending order')
    parser.add_argument('--number', action='store_true', help='Number the results')
    parser.add_argument('--version', action='version', version=version_string,
                        help='Application name and version')
    parser.add_argument('--log-level', default=None, help='Logging level (default: WARNING)')
    return parser


def format_results(results: List[str], numbered: bool = False) -> str:
    if numbered:
        return ''.join(f'{i}: {word}\n' for i, word in enumerate(results, start=1))
    return ''.join(f'{word}\n' for word in results)


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    version_string = f'getver {settings.version}'
    parser = build_parser(version_string)
    args = parser.parse_args(argv)
    configure_logging(default_level='WARNING', level_name=args.log_level)

    retrieve = args.retrieve
    if args.selection is not None:
        # Retrieve just enough results for the selection
        retrieve = args.selection + 1

    if args.depth > settings.max_depth:
        print(CrawlDepthError(args.depth, settings.max_depth).message)
        return EXIT_FAILURE

    if not args.url:
        print('Needs an URL as the first argument.')
        print('Example: getver golang.org')
        return EXIT_FAILURE

    try:
        results = find_version_candidates(
            args.url,
            max_results=retrieve,
            crawl_depth=args.depth,
            timeout=args.timeout / 1000.0,
            keep_letters=args.nostrip,
            max_workers=settings.max_workers,
            max_pages=settings.page_limit,
            max_words=settings.max_words,
        )
    except GetverException as exc:
        print(exc.message)
        return EXIT_FAILURE

    if args.sort:
        results = sort_descending(results)

    selection = args.selection
    if selection is not None and selection > 0:
        try:
            print(select_result(results, selection))
        except NotEnoughResultsError as exc:
            print(exc.message)
            return EXIT_FAILURE
        return EXIT_OK
    if selection is not None and selection >= len(results):
        print(NotEnoughResultsError(selection, len(results)).message)
        return EXIT_FAILURE
    # -u 0 with results falls through to the listing below

    if not results:
        return EXIT_NO_NUMBERED_RESULTS if args.number else EXIT_FAILURE
    sys.stdout.write(format_results(results, numbered=args.number))
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
