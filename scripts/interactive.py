"""
Interactive electrostatics editor.

Click to add a negative charge, Ctrl+click (Cmd+click) to add a positive
charge, drag charges to move them.

Usage:
    python scripts/interactive.py --config my_overrides.yaml
"""

import sys
import argparse
from pathlib import Path
from typing import List

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import load_config
from chargefield import SimulationParameters
from chargefield.app import ChargeEditor
from chargefield.utils import setup_logging


def parse_args(argv: List[str] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive point-charge editor")
    parser.add_argument('--config', nargs='*', default=[], help="Override configuration files")
    return parser.parse_args(argv)


def main(argv: List[str] = None) -> int:
    args = parse_args(argv)
    config = load_config(*args.config)
    setup_logging(config.get('logging'))

    editor = ChargeEditor(SimulationParameters.from_config(config))
    editor.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
