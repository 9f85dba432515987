"""
ignore-filter command line interface

Prints the candidate paths that survive an ignore file, one per line.
Candidates come from the positional arguments, or from whitespace-separated
words on stdin when none are given.
"""

import argparse
import sys
from typing import IO, List, Optional

from . import __version__
from .config import FilterConfig
from .constants import SUPPORTED_SYNTAXES
from .errors import ConfigError, IgnoreFilterError, PatternError, ReadError
from .file_loader import IgnoreFileLoader
from .filter import IgnoreFilter
from .utils import configure_logging, get_logger

logger = get_logger(__name__)


def read_candidates(stream: IO) -> List[str]:
    """Split a text stream into whitespace-delimited candidate paths"""
    return [word for line in stream for word in line.split()]


class IgnoreFilterCLI:
    """Main ignore-filter CLI implementation"""

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command line arguments"""
        self.parser = argparse.ArgumentParser(
            prog='ignore-filter',
            description='Filter paths through a .dockerignore-style ignore file',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self.get_usage_examples()
        )
        self.parser.add_argument('-f', '--ignore-file', required=True, metavar='FILE',
            help='Ignore file to parse and test against')
        self.parser.add_argument('paths', nargs='*', metavar='PATH',
            help='Paths to test (default: whitespace-separated words from stdin)')
        self.parser.add_argument('--syntax', choices=SUPPORTED_SYNTAXES,
            help='Pattern dialect (default: dockerignore)')
        self.parser.add_argument('-j', '--workers', type=int, metavar='N',
            help='Evaluate paths with N threads')
        mode = self.parser.add_mutually_exclusive_group()
        mode.add_argument('--explain', action='store_true',
            help='Print the verdict and deciding pattern for every path')
        mode.add_argument('--check', action='store_true',
            help='Validate the ignore file and report warnings')
        self.parser.add_argument('--log-level', metavar='LEVEL',
            help='Logging level (TRACE, DEBUG, INFO, WARNING, ERROR)')
        self.parser.add_argument('--log-file', metavar='FILE',
            help='Also write log records to a rotating log file')
        self.parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
        return self.parser.parse_args(argv)

    def get_usage_examples(self) -> str:
        """Get usage examples for help text"""
        return """
Examples:
  ignore-filter -f .dockerignore src/main.py build/out.o
  git ls-files | ignore-filter -f .dockerignore
  ignore-filter -f .gitignore --syntax gitignore --explain a.log
  ignore-filter -f .dockerignore --check
  ignore-filter -f .dockerignore --log-level DEBUG --log-file filter.log a.tmp

Environment Variables:
  IGNOREFILTER_SYNTAX       Default pattern dialect
  IGNOREFILTER_WORKERS      Default thread count
  IGNOREFILTER_LOG_LEVEL    Logging level (falls back to LOG_LEVEL)
"""

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point"""
        args = self.parse_args(argv)

        try:
            config = FilterConfig.from_env().with_overrides(
                syntax=args.syntax,
                workers=args.workers,
                log_level=args.log_level,
            )
        except ConfigError as e:
            self.parser.error(str(e))

        configure_logging(config.log_level, log_file=args.log_file)

        if args.check:
            command = 'check'
        elif args.explain:
            command = 'explain'
        else:
            command = 'filter'
        handler = getattr(self, f'cmd_{command}')

        try:
            return handler(args, config)
        except PatternError as e:
            print(f"Error: invalid pattern in {args.ignore_file}: {e}", file=sys.stderr)
            return 1
        except IgnoreFilterError as e:
            print(f"Error filtering paths: {e}", file=sys.stderr)
            return 1

    def _candidates(self, args: argparse.Namespace) -> List[str]:
        if args.paths:
            return list(args.paths)
        try:
            return read_candidates(sys.stdin)
        except UnicodeDecodeError as e:
            raise ReadError(f"Error reading paths from stdin: {e}") from e

    def cmd_filter(self, args: argparse.Namespace, config: FilterConfig) -> int:
        ignore_filter = IgnoreFilter.from_file(args.ignore_file, syntax=config.syntax)
        for path in ignore_filter.filter(self._candidates(args), workers=config.workers):
            print(path)
        return 0

    def cmd_explain(self, args: argparse.Namespace, config: FilterConfig) -> int:
        ignore_filter = IgnoreFilter.from_file(args.ignore_file, syntax=config.syntax)
        for path in self._candidates(args):
            result = ignore_filter.explain(path)
            verdict = 'excluded' if result.excluded else 'included'
            print(f"{verdict}\t{path}\t{result.matched_pattern or '-'}")
        return 0

    def cmd_check(self, args: argparse.Namespace, config: FilterConfig) -> int:
        info = IgnoreFileLoader().load_file(args.ignore_file)
        if not info.exists:
            print(f"{info.path}: not found (nothing will be excluded)", file=sys.stderr)
            return 0

        for warning in info.warnings:
            print(f"{info.path}:{warning.line}: warning: {warning.message} ({warning.pattern})",
                  file=sys.stderr)

        # Raises PatternError, reported by run()
        IgnoreFilter(info.patterns, syntax=config.syntax, source=info.path)

        stats = info.stats
        print(
            f"{info.path}: {stats['pattern_lines']} patterns, {stats['comment_lines']} comments, "
            f"{stats['empty_lines']} blank lines, {len(info.warnings)} warnings",
            file=sys.stderr
        )
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    return IgnoreFilterCLI().run(argv)


if __name__ == '__main__':
    sys.exit(main())
