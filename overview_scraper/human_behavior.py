"""
Human behavior simulation module for anti-detection.
Simulates pointer movements between navigation steps.
"""

import asyncio
import random
import logging
from typing import Optional

from playwright.async_api import Page

logger = logging.getLogger(__name__)


async def random_mouse_movement(page: Page, max_x: Optional[int] = None, max_y: Optional[int] = None,
                                steps: int = 5) -> None:
    """
    Move the pointer to a random point near the top-left of the page.

    Movement is interpolated in a few noisy steps. Failures are logged and ignored.

    Args:
        page: Playwright page object
        max_x: Upper bound for the target x coordinate (defaults to viewport width)
        max_y: Upper bound for the target y coordinate (defaults to viewport height)
        steps: Number of intermediate positions
    """
    try:
        viewport = page.viewport_size or {'width': 1280, 'height': 720}
        width = max_x if max_x is not None else viewport['width']
        height = max_y if max_y is not None else viewport['height']

        target_x = random.uniform(0, width)
        target_y = random.uniform(0, height)

        for step in range(1, steps + 1):
            t = step / steps
            noise = 0 if step == steps else random.uniform(-5, 5)
            x = max(0.0, min(width, target_x * t + noise))
            y = max(0.0, min(height, target_y * t + noise))
            await page.mouse.move(x, y)
            await asyncio.sleep(random.uniform(0.01, 0.05))

        logger.debug(f"Moved pointer to ({target_x:.0f}, {target_y:.0f})")
    except Exception as e:
        logger.debug(f"Mouse movement simulation error (non-critical): {e}")
