# evaluation/frame.py
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Optional

import numpy as np

from core.evaluation_types import EvalError
from inout.config import RenderConfig
from symbolic.expressions import CompiledEvaluator
from utils.logging_config import get_logger

logger = get_logger(__name__)

POSITIVE_GLYPHS = " .oO@"
NEGATIVE_GLYPHS = " ,xX%"


class FrameResult:
    """
    One grid of dots sampled at a single instant.

    Attributes:
        time: The t value every dot was evaluated with.
        values: Array of shape (size, size) indexed [y, x]; errors are stored as 0.
        errors: Distinct error results met while rendering, in first-seen order.
        stats: Counters such as the number of failed dots and elapsed seconds.
    """
    def __init__(self, time: float, values: np.ndarray, errors: List[EvalError], stats: Optional[Dict] = None):
        self.time = time
        self.values = values
        self.errors = errors
        self.stats = stats or {}

    @property
    def size(self) -> int:
        return self.values.shape[0]


def render_frame(evaluator: CompiledEvaluator, t: float, size: int = 16, clamp: bool = True) -> FrameResult:
    """
    Evaluate every dot of a size x size grid at time t.

    Dots are visited row by row, so the index of dot (x, y) is y * size + x.
    """
    values = np.zeros((size, size), dtype=float)
    errors: List[EvalError] = []
    failed = 0
    start_time = time.time()

    for y in range(size):
        for x in range(size):
            result = evaluator(t, y * size + x, x, y)
            if isinstance(result, EvalError):
                failed += 1
                if result not in errors:
                    errors.append(result)
                continue
            values[y, x] = result.value

    if clamp:
        # NaN has no radius; draw it as an empty dot
        values = np.clip(np.nan_to_num(values, nan=0.0), -1.0, 1.0)

    stats = {"dots": size * size, "failed": failed, "elapsed": time.time() - start_time}
    return FrameResult(t, values, errors, stats)


def _render_batch(evaluator: CompiledEvaluator, times: List[float], size: int, clamp: bool) -> List[FrameResult]:
    return [render_frame(evaluator, t, size, clamp) for t in times]


def render_frames(evaluator: CompiledEvaluator, config: RenderConfig) -> List[FrameResult]:
    """
    Render config.frames frames starting at config.start, 1 / config.fps seconds apart.

    With more than one worker the frames are split into batches evaluated in
    separate processes; frame order is preserved either way.
    """
    times = config.times
    start_time = time.time()

    if config.workers <= 1 or len(times) == 1:
        frames = _render_batch(evaluator, times, config.size, config.clamp)
    else:
        batch_size = max(1, -(-len(times) // config.workers))
        batches = [times[i:i + batch_size] for i in range(0, len(times), batch_size)]
        frames = []
        with ProcessPoolExecutor(max_workers=config.workers) as executor:
            futures = [executor.submit(_render_batch, evaluator, batch, config.size, config.clamp)
                       for batch in batches]
            for future in futures:
                frames.extend(future.result())

    for frame in frames:
        for err in frame.errors:
            logger.warning("t=%.3f: %s: %s", frame.time, err.kind, err.message)

    logger.debug("Rendered %d frame(s) of %dx%d in %.3f s",
                 len(frames), config.size, config.size, time.time() - start_time)
    return frames


def frame_to_text(frame: FrameResult) -> str:
    """
    Draw a frame as text, one line per row.

    Magnitude picks the glyph; positive values use POSITIVE_GLYPHS and
    negative ones NEGATIVE_GLYPHS.
    """
    levels = len(POSITIVE_GLYPHS) - 1
    lines = []
    for row in frame.values:
        chars = []
        for value in row:
            if not np.isfinite(value):
                value = 0.0 if np.isnan(value) else np.sign(value)
            step = int(np.ceil(min(abs(value), 1.0) * levels))
            chars.append(POSITIVE_GLYPHS[step] if value >= 0 else NEGATIVE_GLYPHS[step])
        lines.append("".join(chars))
    return "\n".join(lines)
