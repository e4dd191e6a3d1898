"""
Render a charge configuration to an image file.

Charges are given on the command line as ``x,y,+`` or ``x,y,-`` in
viewport pixel coordinates.

Usage:
    python scripts/render_scene.py --charge 200,200,+ --charge 400,200,- -o dipole
"""

import sys
import argparse
from pathlib import Path
from typing import List

import matplotlib
matplotlib.use('Agg')

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import load_config, print_config
from chargefield import Charge, SceneComposer, SimulationParameters
from chargefield.physics import InvalidChargeError
from chargefield.utils import MatplotlibSurface, setup_logging


def parse_charge(text: str) -> Charge:
    """Parse ``x,y,+`` / ``x,y,-`` into a Charge."""
    parts = [p.strip() for p in text.split(',')]
    if len(parts) != 3 or parts[2] not in ('+', '-'):
        raise argparse.ArgumentTypeError(f"Expected x,y,+ or x,y,-, got {text!r}")
    try:
        return Charge(float(parts[0]), float(parts[1]), parts[2] == '+')
    except (ValueError, InvalidChargeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid charge {text!r}: {e}")


def parse_args(argv: List[str] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render point charges to an image")
    parser.add_argument('--charge', '-c', type=parse_charge, action='append', default=[],
                        help="Charge as x,y,+ or x,y,- (repeatable)")
    parser.add_argument('--output', '-o', default='scene', help="Output file name without extension")
    parser.add_argument('--directory', '-d', default='plots', help="Output directory")
    parser.add_argument('--config', nargs='*', default=[], help="Override configuration files")
    parser.add_argument('--print-config', action='store_true', help="Print the merged configuration before rendering")
    return parser.parse_args(argv)


def main(argv: List[str] = None) -> int:
    args = parse_args(argv)
    config = load_config(*args.config)
    logger = setup_logging(config.get('logging'))
    if args.print_config:
        print_config()

    params = SimulationParameters.from_config(config)
    viewport = params.viewport
    logger.info(f"Rendering {len(args.charge)} charges on a {viewport.width}x{viewport.height} viewport "
                f"({params.device})")

    surface = MatplotlibSurface(viewport.width, viewport.height)
    SceneComposer(params).draw(args.charge, surface)
    path = surface.save(args.output, args.directory)

    logger.info(f"Saved scene: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
