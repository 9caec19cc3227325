"""
Ambient noise floor calibration.

While the subject stands still, the per-frame wrist speed is collected and
averaged. The mean becomes the noise floor that scales the onset threshold.
"""

import statistics
from typing import Optional, Tuple


def add_noise_sample(samples: Tuple[float, ...], speed: float,
                     sample_count: int) -> Tuple[Tuple[float, ...], Optional[float]]:
    """
    Add one idle speed sample to the calibration buffer.

    Args:
        samples: Samples collected so far, oldest first
        speed: Max-of-wrists speed of the current frame
        sample_count: Number of samples that completes calibration

    Returns:
        tuple: (new_samples, noise_level) where noise_level is None until the
        buffer is full; on completion the returned buffer is empty
    """
    samples = samples + (speed,)
    if len(samples) < sample_count:
        return samples, None
    return (), statistics.mean(samples)
