"""Command-line interface for wingstl.

Builds an STL file for a swept, tapered wing from a NACA 4-digit code or a
digitized .dat airfoil. Configuration defaults can be supplied through a YAML
file or ``WINGSTL_*`` environment variables; flags override both.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from . import __version__
from .config import MAX_CHORD_POINTS, MIN_CHORD_POINTS, VALID_UNITS, WingstlConfig
from .exceptions import InputFormatError, WingstlError, validate_positive
from .logging import log_error, log_run_start, setup_logging
from .mesh import MeshReport, WingPlanform, WingProperties, build_planform
from .pipeline import build_and_write, load_section

FLAG_AIRFOIL = "-a"
FLAG_SEMI_SPAN = "-b"
FLAG_ROOT_CHORD = "-c"


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="wingstl",
        description="Generate an STL file for a swept wing given dimensions and an airfoil.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  wingstl -a 2412 -b 6 -c 1 -v -o planform.stl
  wingstl -a 1224 -b 3 -c 0.75 -u in -l 85 -t 85
  wingstl -a clarky.dat -b 1.2 -c 0.3 -p 150 -n 5
  wingstl config template --output wingstl.yaml

Chordwise points must be between {MIN_CHORD_POINTS} and {MAX_CHORD_POINTS}.
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="Configuration file (YAML)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    parser.add_argument("-a", dest="airfoil", metavar="STR", help="NACA 4-digit code or .dat file (required)")
    parser.add_argument("-b", dest="semi_span", type=float, metavar="REAL", help="Semi span length (required)")
    parser.add_argument("-c", dest="root_chord", type=float, metavar="REAL", help="Root chord length (required)")
    parser.add_argument(
        "-l", dest="sweep_leading", type=float, default=90.0, metavar="REAL",
        help="Leading edge sweep angle in degrees (default: 90)",
    )
    parser.add_argument(
        "-t", dest="sweep_trailing", type=float, default=90.0, metavar="REAL",
        help="Trailing edge sweep angle in degrees (default: 90)",
    )
    parser.add_argument("-p", dest="chord_points", type=int, metavar="INT", help="Number of points along the chord")
    parser.add_argument("-n", "--stations", dest="stations", type=int, metavar="INT", help="Number of spanwise stations")
    parser.add_argument("-u", dest="units", choices=VALID_UNITS, help="Units (default: 'm')")
    parser.add_argument("-o", dest="output", type=Path, metavar="STR", help="Output file name (default: 'wing.stl')")
    parser.add_argument("--linear", action="store_true", help="Use linear instead of cosine chordwise spacing")
    parser.add_argument("--open-te", action="store_true", help="Open trailing edge for NACA airfoils")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_parser.add_argument(
        "action",
        choices=["show", "validate", "template"],
        help="Configuration action",
    )
    config_parser.add_argument("--output", dest="template_output", type=Path, help="Output file for template")

    return parser


def _set(data: Dict[str, Any], section: str, key: str, value: Any) -> None:
    if value is not None:
        data.setdefault(section, {})[key] = value


def load_configuration(args: argparse.Namespace) -> WingstlConfig:
    """Load file and environment defaults, then apply command-line overrides."""
    if args.config:
        if not args.config.exists():
            raise InputFormatError(f"Configuration file not found: {args.config}", details={"flag": "--config"})
        base = WingstlConfig.from_yaml(args.config)
    else:
        base = WingstlConfig.create()

    data = base.model_dump()

    _set(data, "mesh", "num_chordwise_points", getattr(args, "chord_points", None))
    _set(data, "mesh", "num_spanwise_stations", getattr(args, "stations", None))
    if getattr(args, "linear", False):
        data["mesh"]["cosine_spacing"] = False
    if getattr(args, "open_te", False):
        data["mesh"]["closed_trailing_edge"] = False
    _set(data, "output", "units", getattr(args, "units", None))
    _set(data, "output", "path", getattr(args, "output", None))

    if args.verbose:
        data["verbose"] = True
    if args.verbose or args.debug:
        data["logging"]["level"] = "DEBUG" if args.debug else "INFO"

    return WingstlConfig.create(**data)


def planform_from_args(args: argparse.Namespace, config: WingstlConfig) -> WingPlanform:
    """Check the required wing dimensions and build the planform."""
    if args.semi_span is None:
        raise InputFormatError(
            "Specify semi span using the flag '-b' followed by a value",
            details={"flag": FLAG_SEMI_SPAN},
        )
    if args.root_chord is None:
        raise InputFormatError(
            "Specify root chord using the flag '-c' followed by a value",
            details={"flag": FLAG_ROOT_CHORD},
        )

    validate_positive(args.semi_span, "semi span", FLAG_SEMI_SPAN)
    validate_positive(args.root_chord, "root chord", FLAG_ROOT_CHORD)

    return build_planform(
        semi_span=args.semi_span,
        root_chord=args.root_chord,
        sweep_leading=args.sweep_leading,
        sweep_trailing=args.sweep_trailing,
        num_chordwise_points=config.mesh.num_chordwise_points,
        num_spanwise_stations=config.mesh.num_spanwise_stations,
        cosine_spacing=config.mesh.cosine_spacing,
        units=config.output.units,
    )


def main_build(args: argparse.Namespace) -> int:
    """Build the wing and write the STL file."""
    try:
        config = load_configuration(args)
        setup_logging(config)

        if not args.airfoil:
            raise InputFormatError(
                "Specify a 4-digit NACA airfoil or .dat file using the flag '-a' followed by a value",
                details={"flag": FLAG_AIRFOIL},
            )

        section = load_section(args.airfoil, closed_trailing_edge=config.mesh.closed_trailing_edge)
        planform = planform_from_args(args, config)

        log_run_start(args.airfoil, planform.model_dump(mode="json"))

        if config.verbose:
            for line in WingProperties.from_planform(planform, section).format_lines():
                print(line)

        mesh, path = build_and_write(section, planform, config.output.path)

        if config.verbose:
            report = MeshReport.from_mesh(mesh)
            print(f"  Watertight:\t\t\t{'yes' if report.is_watertight else 'no'}")
            print(f"Wrote {mesh.num_triangles} facets to {path}")

        return 0

    except WingstlError as e:
        log_error(e)
        print(f"wingstl: error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        error = WingstlError(f"Unexpected error: {e}", details={"original_error": type(e).__name__})
        log_error(error)
        print(f"wingstl: unexpected error: {e}", file=sys.stderr)
        return 1


def main_config(args: argparse.Namespace) -> int:
    """Run configuration management command."""
    try:
        if args.action == "show":
            config = load_configuration(args)
            print("Current Configuration:")
            print("=" * 50)
            for section_name, section in config.model_dump(mode="json").items():
                print(f"\n{section_name.upper()}:")
                if isinstance(section, dict):
                    for key, value in section.items():
                        print(f"  {key}: {value}")
                else:
                    print(f"  {section}")

        elif args.action == "validate":
            load_configuration(args)
            print("Configuration is valid")

        elif args.action == "template":
            template_config = WingstlConfig.create()
            output_path = args.template_output or Path("wingstl.yaml")
            template_config.to_yaml(output_path)
            print(f"Template configuration saved to: {output_path}")

        return 0

    except WingstlError as e:
        print(f"wingstl: error: {e}", file=sys.stderr)
        return 1


def _dispatch_command(args: argparse.Namespace) -> int:
    """Route parsed arguments to the corresponding command handler."""
    if args.command == "config":
        return main_config(args)
    return main_build(args)


def _main_with_argv(argv: Optional[list] = None) -> int:
    """Main CLI execution path with optional argv override."""
    parser = create_parser()
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv:
        print("wingstl: missing required arguments; use flag ('-h') for help", file=sys.stderr)
        return 1

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # -h/--version exit with 0; malformed flags are a parse failure
        return 1 if e.code else 0

    return _dispatch_command(args)


def main() -> int:
    """Main CLI entry point."""
    return _main_with_argv()


if __name__ == "__main__":
    sys.exit(main())
