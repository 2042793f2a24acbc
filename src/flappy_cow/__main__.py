"""Launch the game window: python -m flappy_cow [preset]"""

import logging
import sys

from .config import CONFIGS
from .engine import FlappyEngine


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    preset = sys.argv[1] if len(sys.argv) > 1 else "default"
    if preset not in CONFIGS:
        sys.exit(f"Unknown preset {preset!r}, choose from: {', '.join(CONFIGS)}")
    FlappyEngine(CONFIGS[preset]).run()


if __name__ == "__main__":
    main()
