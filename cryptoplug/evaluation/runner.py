#!/usr/bin/env python3
"""
Command line runner for the cryptoplug provider.

Usage:
    python -m cryptoplug.evaluation.runner features
    python -m cryptoplug.evaluation.runner digest NAME FILE
    python -m cryptoplug.evaluation.runner benchmark [--quick] [--iterations N]
"""

import argparse
import logging
import sys
from pathlib import Path

from ..catalogue import CATALOGUE, DigestDescriptor
from ..config import ConfigError, ProviderConfig
from ..errors import ProviderError
from ..provider import Provider
from .benchmark import run_comprehensive_benchmark
from .results import new_run_root, write_data, write_summary
from .sysinfo import capture_system_info

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(prog='cryptoplug-eval', description='cryptoplug provider tools')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Sub-commands')

    subparsers.add_parser('features', help='List supported algorithm names')

    digest_parser = subparsers.add_parser('digest', help='Print the hex digest of a file')
    digest_parser.add_argument('algorithm', help='Digest name, e.g. sha256')
    digest_parser.add_argument('file', type=Path, help='File to hash')

    bench_parser = subparsers.add_parser('benchmark', help='Benchmark every supported algorithm')
    bench_parser.add_argument('--quick', action='store_true',
                              help='Run with reduced parameters for quick testing')
    bench_parser.add_argument('--iterations', type=int, default=None,
                              help='Iterations per message size (default: from configuration)')
    bench_parser.add_argument('--output-dir', type=str, default=None,
                              help='Output directory (default: new timestamped folder under benchmark_results)')
    bench_parser.add_argument('--format', choices=['csv', 'json', 'both'], default='both',
                              help='Output format for data files')

    return parser


def digest_file(provider: Provider, algorithm: str, path: Path) -> str:
    """
    Hash a file in chunks.

    Raises:
        ProviderError: If ``algorithm`` is not a supported digest
    """
    if not isinstance(CATALOGUE.get(algorithm), DigestDescriptor):
        raise ProviderError(f"{algorithm} is not a supported digest")
    context = provider.create_context(algorithm)

    with context, open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            context.update(chunk)
        return context.final().hex()


def run_benchmark(provider: Provider, args) -> Path:
    if args.output_dir:
        output_root = Path(args.output_dir)
        output_root.mkdir(parents=True, exist_ok=True)
    else:
        output_root = new_run_root("benchmark_results")

    sysinfo = capture_system_info()
    results = run_comprehensive_benchmark(provider, quick=args.quick, iterations=args.iterations)

    write_data(output_root, "results", results['raw_results'], args.format)
    write_data(output_root, "sysinfo", sysinfo, 'json')
    write_summary(output_root, "benchmark", {
        'system_info': sysinfo,
        'summary': results['summary']
    })
    return output_root


def main(argv=None) -> int:
    """Main entry point for the runner."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = ProviderConfig.from_env()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level_number,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if not args.command:
        parser.print_help()
        return 1

    provider = Provider(config)

    try:
        if args.command == 'features':
            for name in provider.features():
                print(name)

        elif args.command == 'digest':
            print(f"{digest_file(provider, args.algorithm, args.file)}  {args.file}")

        elif args.command == 'benchmark':
            output_root = run_benchmark(provider, args)
            print(f"Results saved to: {output_root}")
            print(f"Summary: {output_root / 'SUMMARY.md'}")

        return 0

    except (ProviderError, OSError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
