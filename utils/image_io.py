"""Image I/O using OpenCV."""

import cv2
import numpy as np


def load_image(path: str) -> np.ndarray:
    """Load image as a float64 BGR buffer."""
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None:
        raise ValueError(f"Could not load image from {path}")
    return img.astype(np.float64)


def save_image(image: np.ndarray, path: str) -> None:
    """Save a BGR (or single-plane) buffer as 8-bit."""
    data = np.clip(np.rint(image), 0, 255).astype(np.uint8)
    if not cv2.imwrite(str(path), data):
        raise ValueError(f"Could not write image to {path}")
