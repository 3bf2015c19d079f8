#!/usr/bin/env python
import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from core.exceptions import ConfigError, ExpressionSyntaxError
from evaluation.frame import frame_to_text, render_frames
from inout.config import RenderConfig, load_render_config
from symbolic.expressions import CompiledEvaluator, unresolved_names
from symbolic.parser import parse_expr
from utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

def main(argv: Optional[List[str]] = None) -> int:
    """
    Compile a tixy expression and render it as text frames.

    Command-line arguments:
      expression: The expression over t, i, x, y (overrides the config's expression).
      --config: Path to a YAML render configuration file.
      --time: Start time in seconds.
      --frames: Number of frames to render.
      --size: Grid size (dots per side).
      --dump: Optional path to dump frames (e.g., frames.npz).
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Render a tixy expression f(t, i, x, y).")
    parser.add_argument("expression", nargs="?", help='Expression, e.g. "sin(t-sqrt((x-7.5)**2+(y-6)**2))"')
    parser.add_argument("--config", help="Path to the YAML render configuration file.", default=None)
    parser.add_argument("--time", type=float, help="Start time in seconds.", default=None)
    parser.add_argument("--frames", type=int, help="Number of frames to render.", default=None)
    parser.add_argument("--size", type=int, help="Dots per side of the grid.", default=None)
    parser.add_argument("--dump", help="Path to dump frames (e.g., frames.npz)", default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging(level=logging.DEBUG)
        logger.debug("Verbose logging enabled.")
    else:
        setup_logging(level=logging.INFO)

    try:
        config = load_render_config(args.config) if args.config else RenderConfig()
        # re-validate so command line overrides obey the same schema
        render = {k: v for k, v in vars(config).items() if k != "expression"}
        overrides = {"start": args.time, "frames": args.frames, "size": args.size}
        render.update({k: v for k, v in overrides.items() if v is not None})
        config = RenderConfig.from_dict({"expression": config.expression, "render": render})
    except ConfigError as e:
        logger.error("Invalid render configuration: %s", e)
        return 2

    source = args.expression if args.expression is not None else config.expression
    if source is None:
        logger.error("No expression given on the command line or in the config.")
        return 2

    try:
        evaluator = CompiledEvaluator(source, parse_expr(source))
    except ExpressionSyntaxError as e:
        logger.error("Could not compile expression '%s': %s", source, e)
        return 2
    except RecursionError:
        logger.error("Could not compile expression '%s': nested too deeply", source)
        return 2

    missing = unresolved_names(evaluator)
    if missing:
        logger.warning("Unresolved names (every call will fail): %s", ", ".join(missing))

    frames = render_frames(evaluator, config)
    logger.info("Render completed.")

    for frame in frames:
        print(f"t={frame.time:.3f}")
        print(frame_to_text(frame))

    if args.dump:
        np.savez(args.dump,
                 times=np.array([f.time for f in frames]),
                 frames=np.stack([f.values for f in frames]))
        print(f"Frames dumped to {args.dump}")

    return 0

if __name__ == "__main__":
    sys.exit(main())
