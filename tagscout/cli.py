"""tagscout CLI - main entry point and command registration hub."""

import click

from tagscout import __version__
from tagscout.config_runtime import load_runtime_config
from tagscout.engine import LanguageProbe, LineCountEngine, TagFileWriter
from tagscout.environment import sanitize_environment
from tagscout.interactive import InteractiveServer
from tagscout.options import ScanOptions
from tagscout.orchestrator import RunOrchestrator
from tagscout.utils.constants import PROGRAM_NAME
from tagscout.utils.diagnostics import fatal
from tagscout.utils.error_handler import handle_exceptions
from tagscout.utils.exit_codes import ExitCodes
from tagscout.utils.logging import set_console_level
from tagscout.walker.config import LISTER_AUTO, LISTER_GLOB, LISTER_SCANDIR
from tagscout.walker.listing import DirectoryLister, select_lister


@click.group()
@click.version_option(version=__version__, prog_name=PROGRAM_NAME)
@click.help_option("-h", "--help")
def cli():
    """tagscout - enumerate source files and drive a tag engine over them

    \b
    QUICK START:
      tagscout scan -R                     # Tag everything below the current directory
      tagscout scan src/ lib/util.c        # Tag explicit paths
      git ls-files | tagscout scan -L -    # Tag a list read from stdin
      tagscout interactive                 # JSON request loop on stdin/stdout"""
    sanitize_environment()


def _load_options(root: str, verbose: bool) -> ScanOptions:
    options = ScanOptions.from_config(load_runtime_config(root))
    if verbose:
        options.verbose = True
        set_console_level("INFO")
    return options


def _lister(options: ScanOptions) -> DirectoryLister:
    try:
        return select_lister(options.lister)
    except ValueError as e:
        fatal(str(e))


@click.command(
    context_settings={"allow_interspersed_args": False, "ignore_unknown_options": True}
)
@handle_exceptions
@click.option("--root", default=".", help="Directory holding .tagscout/config.json")
@click.option("-R", "--recurse/--no-recurse", default=None, help="Recurse into directories")
@click.option("--links/--no-links", default=None, help="Follow symbolic links")
@click.option("--maxdepth", type=click.IntRange(min=1), default=None, help="Maximum recursion depth")
@click.option("--exclude", multiple=True, help="Exclude glob pattern, or @FILE of patterns")
@click.option("--exclude-exception", multiple=True, help="Re-admit paths matching this pattern")
@click.option("-L", "--file-list", default=None, help="Read input paths from FILE ('-' for stdin)")
@click.option("--filter", "filter_mode", is_flag=True, help="Read paths from stdin, one per line")
@click.option("--filter-terminator", default=None, help="String written after each filter entry")
@click.option("-f", "-o", "--tag-file", default=None, help="Output tag file ('-' for stdout)")
@click.option("-a", "--append/--no-append", default=None, help="Append to the existing tag file")
@click.option("--sort/--no-sort", default=None, help="Sort the tag file")
@click.option("--totals", is_flag=True, help="Print statistics to stderr")
@click.option("--print-language", is_flag=True, help="Print the detected language of each input")
@click.option(
    "--lister",
    type=click.Choice([LISTER_AUTO, LISTER_SCANDIR, LISTER_GLOB]),
    default=None,
    help="Directory listing strategy",
)
@click.option("-V", "--verbose", is_flag=True, help="Report skipped and excluded paths")
@click.argument("inputs", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def scan(
    ctx,
    root,
    recurse,
    links,
    maxdepth,
    exclude,
    exclude_exception,
    file_list,
    filter_mode,
    filter_terminator,
    tag_file,
    append,
    sort,
    totals,
    print_language,
    lister,
    verbose,
    inputs,
):
    """Generate tags for files, directories, a list file or a filter stream.

    Inputs may be interleaved with per-input overrides, which apply to
    every input after them:

    \b
      tagscout scan -R src/ --exclude=*.min.js web/ --recurse=no docs/
      tagscout scan -- -file-with-leading-dash.c

    Overrides accepted between inputs (and as lines of a list file):
    --recurse[=yes|no], --links=yes|no, --exclude=PATTERN|@FILE,
    --exclude-exception=PATTERN|@FILE, --maxdepth=N, --verbose[=yes|no].

    \b
    The =yes|no forms are only read between inputs.
    Before the first input use --no-recurse, --no-links.

    Without inputs, -R scans the current directory."""
    options = _load_options(root, verbose)

    if recurse is not None:
        options.recurse = recurse
    if links is not None:
        options.follow_links = links
    if maxdepth is not None:
        options.max_recursion_depth = maxdepth
    for pattern in exclude:
        options.exclusion.add_pattern(pattern)
    for pattern in exclude_exception:
        options.exclusion.add_exception(pattern)
    if file_list is not None:
        options.file_list = file_list
    options.filter = filter_mode
    if filter_terminator is not None:
        options.filter_terminator = filter_terminator
    if tag_file is not None:
        options.tag_file = tag_file
    if append is not None:
        options.append = append
    if sort is not None:
        options.sorted = sort
    options.print_totals = options.print_totals or totals
    options.print_language = print_language
    if lister is not None:
        options.lister = lister

    writer = TagFileWriter(options.tag_file, append=options.append, sort=options.sorted)
    engine = LanguageProbe() if print_language else LineCountEngine()
    orchestrator = RunOrchestrator(engine, writer, lister=_lister(options))

    orchestrator.run_batch(list(inputs), options)

    if print_language and not engine.all_recognized:
        ctx.exit(ExitCodes.LANGUAGE_UNKNOWN)


@click.command()
@handle_exceptions
@click.option("--root", default=".", help="Directory holding .tagscout/config.json")
@click.option("-f", "-o", "--tag-file", default="-", help="Output tag file ('-' for stdout)")
@click.option("--links/--no-links", default=None, help="Follow symbolic links")
@click.option("-V", "--verbose", is_flag=True, help="Report skipped and excluded paths")
def interactive(root, tag_file, links, verbose):
    """Serve generate-tags requests read as JSON lines from stdin.

    \b
    Requests:
      {"command": "generate-tags", "filename": "src/a.c"}
      {"command": "generate-tags", "filename": "unsaved.c", "size": 42}

    With "size", exactly that many raw bytes follow the request line and are
    tagged as the content of "filename"; the file on disk is never read.
    Each request is answered with {"_type": "completed", ...}. The session
    ends at end of input, or on the first malformed request."""
    options = _load_options(root, verbose)
    if links is not None:
        options.follow_links = links
    options.tag_file = tag_file

    writer = TagFileWriter(options.tag_file, append=options.append, sort=options.sorted)
    server = InteractiveServer(options, LineCountEngine(), writer, lister=_lister(options))
    server.serve()


cli.add_command(scan)
cli.add_command(interactive)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
