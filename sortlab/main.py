import argparse
import logging
import sys
from pathlib import Path

from sortlab import bench
from sortlab.demo import run_demo
from sortlab.interactive import run_session

logger = logging.getLogger(__name__)

fmt = '%(name)s %(asctime)s.%(msecs)03d %(message)s', '%I:%M:%S'


def configure_logging(verbose=False):
    package_logger = logging.getLogger("sortlab")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not package_logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(*fmt))
        package_logger.addHandler(stream_handler)
    for handler in package_logger.handlers:
        handler.setLevel(package_logger.level)


def build_parser():
    parser = argparse.ArgumentParser(prog="sortlab", description="Stable merge sort demo and benchmark")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    commands = parser.add_subparsers(dest="command")

    demo = commands.add_parser("demo", help="Run the batch demonstration")
    demo.add_argument("--seed", type=int, default=None, help="Seed for the random performance data")

    interactive = commands.add_parser("interactive", help="Sort integers typed on stdin")
    interactive.add_argument("--no-descending", dest="descending", action="store_false",
                             help="Skip the second, descending sort")

    bench_cmd = commands.add_parser("bench", help="Time merge sort against list.sort")
    bench_cmd.add_argument("--max-size", type=int, default=bench.DEFAULT_MAX_SIZE, help="Largest array size")
    bench_cmd.add_argument("--step", type=int, default=bench.DEFAULT_STEP, help="Distance between array sizes")
    bench_cmd.add_argument("--reps", type=int, default=bench.DEFAULT_REPS, help="Repetitions per size (best is kept)")
    bench_cmd.add_argument("--dataset", action="append", choices=sorted(bench.DATASETS),
                           help="Dataset to run; repeatable (default: all)")
    bench_cmd.add_argument("--workers", type=int, default=None, help="Worker processes")
    bench_cmd.add_argument("--seed", type=int, default=None, help="Seed for the generated datasets")
    bench_cmd.add_argument("--output-dir", type=Path, default=None,
                           help="Save plots here instead of showing them")
    return parser


def run(args):
    command = args.command or "demo"
    logger.debug("running %s", command)

    if command == "demo":
        run_demo(seed=getattr(args, "seed", None))
    elif command == "interactive":
        run_session(descending_pass=args.descending)
    elif command == "bench":
        if args.output_dir is not None:
            args.output_dir.mkdir(parents=True, exist_ok=True)
        sizes = bench.bench_sizes(args.max_size, args.step)
        names = args.dataset or list(bench.DATASETS)
        bench.run_datasets(names, sizes, reps=args.reps, max_workers=args.workers,
                           output_dir=args.output_dir, seed=args.seed)


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        run(args)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug("unhandled error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
