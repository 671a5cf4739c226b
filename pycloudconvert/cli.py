"""
Command line entry point.

    pycloudconvert source_file target_file [options]
    pycloudconvert source_directory target_directory [options]
"""
import argparse
import sys

import open3d as o3d

from .batch import run
from .config import ConfigError, resolve_config
from .logger import ConvertLogger

DESCRIPTION = "Read point cloud from source file and convert it to target file."

EPILOG = """\
Options are applied in the order listed: clip, voxel_sample, estimate_normals,
orient_normals. Estimated normals are oriented w.r.t. the original normals of
the point cloud if they exist, otherwise towards the -Z direction.
"""

VECTOR_OPTIONS = ('--orient_normals',)

O3D_VERBOSITY = {
    0: o3d.utility.VerbosityLevel.Error,
    1: o3d.utility.VerbosityLevel.Warning,
    2: o3d.utility.VerbosityLevel.Info,
    3: o3d.utility.VerbosityLevel.Debug,
    4: o3d.utility.VerbosityLevel.Debug,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pycloudconvert',
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('source', nargs='?', help="source file or directory")
    parser.add_argument('target', nargs='?', help="target file or directory")
    parser.add_argument('--verbose', type=int, default=2, metavar='n',
                        help="set verbose level (0-4)")
    for axis in 'xyz':
        parser.add_argument(f'--clip_{axis}_min', type=float, metavar=f'{axis}0',
                            help=f"clip points with {axis} coordinate < {axis}0")
        parser.add_argument(f'--clip_{axis}_max', type=float, metavar=f'{axis}1',
                            help=f"clip points with {axis} coordinate > {axis}1")
    parser.add_argument('--voxel_sample', type=float, metavar='voxel_size',
                        help="downsample the point cloud with a voxel grid")
    parser.add_argument('--estimate_normals', type=float, metavar='radius',
                        help="estimate normals using a search neighborhood of radius")
    parser.add_argument('--orient_normals', metavar='x,y,z',
                        help="orient the normals w.r.t. the direction x,y,z")
    parser.add_argument('--write_ascii', action='store_true',
                        help="write ASCII output where the format supports it")
    parser.add_argument('--no_compress', dest='compressed', action='store_false',
                        help="disable output compression")
    parser.add_argument('--log_file', metavar='path',
                        help="also write the log to this file")
    return parser


def join_vector_options(argv):
    """
    Glue `--orient_normals x,y,z` into one token.

    argparse only accepts plain negative numbers as option values, so a
    vector such as -1,0,0 would otherwise be taken for a new option.
    """
    joined = []
    args = iter(argv)
    for arg in args:
        if arg in VECTOR_OPTIONS:
            value = next(args, None)
            joined.append(arg if value is None else f"{arg}={value}")
        else:
            joined.append(arg)
    return joined


def main(argv=None) -> int:
    """
    Run the converter.

    Returns:
        0 on success or when only help was printed, 1 if the source does not
        exist or any file failed, 2 for invalid option values.
    """
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(join_vector_options(argv))

    if args.source is None or args.target is None:
        parser.print_help()
        return 0

    try:
        config = resolve_config(vars(args))
    except ConfigError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    logger = ConvertLogger.from_verbosity(config.verbosity, log_file=args.log_file)
    o3d.utility.set_verbosity_level(O3D_VERBOSITY[min(max(config.verbosity, 0), 4)])

    result = run(args.source, args.target, config, logger)
    if result.failed and result.converted:
        logger.warning(f"{len(result.failed)} of {len(result.failed) + len(result.converted)} files failed.")
    return 0 if result.ok else 1


if __name__ == '__main__':
    sys.exit(main())
