"""Command-line entry point: derive internal coordinates for geometry files."""

import argparse
import logging
import sys
from typing import List, Optional

from .core.config import AnalysisConfig, GeometryConfig, ReportConfig
from .core.constants import DEFAULT_TOLERANCE
from .core.exceptions import ConfigurationError
from .workflow.runner import GeometryAnalysis, GeometryResult
from .workflow.report import render

logger = logging.getLogger(__name__)


def _quadruple(text: str):
    """argparse type for 'i,j,k,l'."""
    parts = text.split(",")
    try:
        quad = tuple(int(p) for p in parts)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected four integers 'i,j,k,l', got '{text}'")
    if len(quad) != 4 or any(i < 0 for i in quad):
        raise argparse.ArgumentTypeError(
            f"expected four non-negative integers 'i,j,k,l', got '{text}'"
        )
    return quad


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="molgeom",
        description="Bond lengths, bond angles and out-of-plane angles "
                    "from Cartesian atom positions"
    )
    parser.add_argument(
        "files", nargs="+", metavar="FILE",
        help="Geometry files (native 'tag x y z' format, or .xyz)"
    )
    parser.add_argument(
        "--degrees", action="store_true",
        help="Report angles in degrees instead of radians"
    )
    parser.add_argument(
        "--format", dest="output_format", choices=["text", "json"], default="text",
        help="Report format (default: text)"
    )
    parser.add_argument(
        "--precision", type=int, default=6,
        help="Decimals printed for lengths and angles (default: 6)"
    )
    parser.add_argument(
        "--out-of-plane", action="append", type=_quadruple, default=[],
        metavar="I,J,K,L",
        help="Out-of-plane angle of atom I from the J-K-L plane (repeatable)"
    )
    parser.add_argument(
        "--dihedral", action="append", type=_quadruple, default=[],
        metavar="I,J,K,L",
        help="Dihedral angle I-J-K-L (repeatable)"
    )
    parser.add_argument(
        "--tolerance", type=float, default=DEFAULT_TOLERANCE,
        help="Lengths at or below this count as zero (default: %(default)g)"
    )
    parser.add_argument(
        "--output-dir", default=None,
        help="Write one report per input file into this directory"
    )
    parser.add_argument(
        "--plot", action="store_true",
        help="Save bond-length and bond-angle plots (needs --output-dir)"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Only log warnings and errors")
    return parser


def config_from_args(args: argparse.Namespace) -> AnalysisConfig:
    """Translate parsed arguments into an AnalysisConfig."""
    return AnalysisConfig(
        geometry=GeometryConfig(tolerance=args.tolerance),
        report=ReportConfig(
            output_format=args.output_format,
            angle_units="degrees" if args.degrees else "radians",
            precision=args.precision,
        ),
        out_of_plane=args.out_of_plane,
        dihedrals=args.dihedral,
        output_dir=args.output_dir,
        plot=args.plot,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command line; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        parser.error(str(e))

    if config.plot and config.output_dir is None:
        parser.error("--plot requires --output-dir")

    analysis = GeometryAnalysis(config)
    results = analysis.analyze_files(args.files)

    for result, stem in zip(results, _output_stems(results)):
        _emit(result, config, stem)

    return 0 if all(r.succeeded for r in results) else 1


def _output_stems(results: List[GeometryResult]) -> List[str]:
    """File stems for each result, suffixed with _2, _3, ... where they clash."""
    stems = []
    used = set()
    for result in results:
        stem = result.file_stem
        candidate = stem
        counter = 2
        while candidate in used:
            candidate = f"{stem}_{counter}"
            counter += 1
        if candidate != stem:
            logger.warning(
                f"Output name '{stem}' already used; writing {result.source} as '{candidate}'"
            )
        used.add(candidate)
        stems.append(candidate)
    return stems


def _emit(result: GeometryResult, config: AnalysisConfig, stem: str) -> None:
    """Write one result to stdout or into the output directory."""
    text = render(result, config.report)

    if config.output_dir is None:
        print(text)
        return

    config.output_dir.mkdir(parents=True, exist_ok=True)
    suffix = ".json" if config.report.output_format == "json" else ".txt"
    path = config.output_dir / f"{stem}{suffix}"
    path.write_text(text + "\n")
    logger.info(f"Wrote report to {path}")

    if config.plot:
        import matplotlib
        matplotlib.use("Agg")
        from .visualization import save_geometry_plots

        for plot_path in save_geometry_plots(result, config.output_dir, stem):
            logger.info(f"Wrote plot to {plot_path}")


if __name__ == "__main__":
    sys.exit(main())
