"""Command-line interface for tokenum."""
import sys
import logging

import click

from . import __version__
from .core.analyzer import TokenAnalyzer
from .core.errors import TokenumError
from .core.models import Config
from .core.params import validate_parameters
from .core.tokenizer import SUPPORTED_ENCODINGS, make_tokenizer
from .utils.console import THEMES, ConsoleManager


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbose flag."""
    level = logging.DEBUG if verbose else logging.WARNING
    format_string = '[%(levelname)s] %(message)s'

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=[logging.StreamHandler(sys.stderr)]
    )


ENCODING_HELP = "encoding, support: " + ", ".join(
    f"{name}({models})" for name, models in SUPPORTED_ENCODINGS.items()
) + ", default: o200k_base"


@click.command()
@click.option('--files', '-f', help='Files to count tokens for, e.g. file1,file2,file3')
@click.option('--string', '-s', help='String to count tokens for')
@click.option('--path', '-p', help='Recursively traverse all files along the specified path')
@click.option('--encoding', '-e', help=ENCODING_HELP)
@click.option('--max-size', '-m',
              help='Files larger than this are not tokenized, units b, k, m, g '
                   '(e.g. 26b, 78k, 98m, 4g); 0b, 0k, 0m, 0g for unlimited, default: 10m')
@click.option('--min-token', '-t', type=click.IntRange(min=0),
              help='Files with fewer tokens are omitted from the tree, default: 0')
@click.option('--max-token', '-T', type=click.IntRange(min=0),
              help='Files with more tokens are omitted from the tree, 0 means unlimited, default: 0')
@click.option('--only-valid', '-d', is_flag=True,
              help='Omit invalid files (binary, too large, empty, invalid UTF-8) from the output')
@click.option('--progress', is_flag=True, help='Show a progress bar on stderr while walking')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging on stderr')
@click.option('--theme', type=click.Choice(sorted(THEMES)), default='manhattan',
              help='Terminal color theme for status lines')
@click.version_option(version=__version__, prog_name='tokenum')
def main(files: str, string: str, path: str, encoding: str, max_size: str,
         min_token: int, max_token: int, only_valid: bool, progress: bool,
         verbose: bool, theme: str) -> None:
    """
    Count tokens for files, a string, or a whole directory tree.

    At least one of -f, -s, -p is required.

    Examples:

        tokenum -s "hello world"

        tokenum -f README.md,setup.py -e cl100k_base

        tokenum -p . -m 1m -t 100 -d
    """
    console = ConsoleManager(theme=theme)

    setup_logging(verbose)

    try:
        config = Config()
        parameters = validate_parameters(
            files=files,
            string=string,
            path=path,
            encoding=encoding,
            max_size=max_size,
            min_token=min_token,
            max_token=max_token,
            only_valid=only_valid,
            config=config
        )

        tokenizer = make_tokenizer(parameters.encoding)
        analyzer = TokenAnalyzer(tokenizer, parameters, config=config, progress=progress)

        for block in analyzer.run():
            console.print_report(block)

    except TokenumError as e:
        console.print_error(str(e))
        if verbose:
            console.print_exception()
        sys.exit(1)

    except KeyboardInterrupt:
        console.print_warning("Interrupted")
        sys.exit(1)


if __name__ == '__main__':
    main()
