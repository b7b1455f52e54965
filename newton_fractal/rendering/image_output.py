"""
Image export for Newton fractal renders.

Saves rendered RGB arrays through Pillow, embedding render metadata as PNG
text chunks or as a companion JSON file for formats without text support.
"""

import numpy as np
from typing import Any, Dict, Optional, Tuple, Union
from pathlib import Path
from dataclasses import dataclass, asdict, field
import json
import logging
from datetime import datetime

try:
    from PIL import Image, PngImagePlugin
    PIL_AVAILABLE = True
except ImportError:
    PIL_AVAILABLE = False
    logging.warning("Pillow not available - image export disabled")

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = "out.png"


@dataclass
class RenderMetadata:
    """Metadata for Newton fractal renders."""

    polynomial: str
    derivative: str
    bounds: Tuple[float, float, float, float]  # xmin, xmax, ymin, ymax
    resolution: Tuple[int, int]  # width, height
    max_iterations: int
    color_palette: str
    roots: list = field(default_factory=list)  # [real, imag] pairs
    max_root_index: int = 0
    render_time_seconds: float = 0.0
    timestamp: str = ""
    software_version: str = "1.0.0"

    def __post_init__(self):
        """Set default timestamp if not provided."""
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderMetadata':
        data = dict(data)
        data['bounds'] = tuple(data['bounds'])
        data['resolution'] = tuple(data['resolution'])
        return cls(**data)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> 'RenderMetadata':
        return cls.from_dict(json.loads(json_str))


class ImageExporter:
    """Image export with metadata support."""

    def __init__(self):
        """Initialize image exporter."""
        if not PIL_AVAILABLE:
            raise RuntimeError("Pillow required for image export")

        self.supported_formats = {
            '.png': self._save_png,
            '.jpg': self._save_jpeg,
            '.jpeg': self._save_jpeg,
            '.bmp': self._save_bmp,
        }

    def save_image(self, image_array: np.ndarray, filepath: Union[str, Path],
                   metadata: Optional[RenderMetadata] = None,
                   quality: int = 95) -> Path:
        """
        Save RGB image array to file with metadata.

        Args:
            image_array: RGB image array (height, width, 3)
            filepath: Output file path
            metadata: Render metadata to embed
            quality: JPEG quality (1-100)

        Returns:
            Path the image was written to
        """
        filepath = Path(filepath)
        suffix = filepath.suffix.lower()

        if suffix not in self.supported_formats:
            supported = ', '.join(self.supported_formats.keys())
            raise ValueError(f"Unsupported format '{suffix}'. Supported: {supported}")

        image_array = self._prepare_image_array(image_array)
        pil_image = Image.fromarray(image_array)

        if not filepath.parent.exists():
            filepath.parent.mkdir(parents=True, exist_ok=True)

        save_method = self.supported_formats[suffix]
        save_method(pil_image, filepath, metadata, quality)

        logger.info(f"Saved image: {filepath} ({pil_image.size[0]}x{pil_image.size[1]})")
        return filepath

    def _prepare_image_array(self, image_array: np.ndarray) -> np.ndarray:
        """Prepare and validate image array for export."""
        if len(image_array.shape) != 3 or image_array.shape[2] != 3:
            raise ValueError(f"Expected RGB image array (H, W, 3), got {image_array.shape}")

        if image_array.dtype != np.uint8:
            if np.issubdtype(image_array.dtype, np.floating):
                # Float arrays are taken to be in 0-1 range
                image_array = np.nan_to_num(image_array, nan=0.0)
                image_array = (np.clip(image_array, 0.0, 1.0) * 255).astype(np.uint8)
            else:
                image_array = np.clip(image_array, 0, 255).astype(np.uint8)

        return np.ascontiguousarray(image_array)

    def _save_png(self, pil_image: 'Image.Image', filepath: Path,
                  metadata: Optional[RenderMetadata], quality: int) -> None:
        """Save as PNG with metadata."""
        pnginfo = PngImagePlugin.PngInfo()

        if metadata:
            pnginfo.add_text("Title", f"Newton fractal: {metadata.polynomial}")
            pnginfo.add_text("Software", f"NewtonFractal v{metadata.software_version}")
            pnginfo.add_text("Creation Time", metadata.timestamp)
            pnginfo.add_text("FractalMetadata", metadata.to_json())

        pil_image.save(filepath, "PNG", pnginfo=pnginfo)

    def _save_jpeg(self, pil_image: 'Image.Image', filepath: Path,
                   metadata: Optional[RenderMetadata], quality: int) -> None:
        """Save as JPEG with a companion JSON metadata file."""
        pil_image.save(filepath, "JPEG", quality=quality, optimize=True)
        if metadata:
            self._save_companion_metadata(filepath, metadata)

    def _save_bmp(self, pil_image: 'Image.Image', filepath: Path,
                  metadata: Optional[RenderMetadata], quality: int) -> None:
        pil_image.save(filepath, "BMP")
        if metadata:
            self._save_companion_metadata(filepath, metadata)

    def _save_companion_metadata(self, filepath: Path, metadata: RenderMetadata) -> None:
        json_path = filepath.with_suffix('.json')
        with open(json_path, 'w') as f:
            f.write(metadata.to_json())
        logger.info(f"Saved metadata: {json_path}")

    def read_metadata(self, filepath: Union[str, Path]) -> Optional[RenderMetadata]:
        """Read metadata embedded in a PNG or stored next to the image."""
        filepath = Path(filepath)
        if filepath.suffix.lower() == '.png':
            with Image.open(filepath) as img:
                text = img.info.get("FractalMetadata")
            if text:
                return RenderMetadata.from_json(text)

        json_path = filepath.with_suffix('.json')
        if json_path.exists():
            with open(json_path, 'r') as f:
                return RenderMetadata.from_json(f.read())
        return None

    def save_raw_data(self, data: np.ndarray, filepath: Union[str, Path],
                      metadata: Optional[RenderMetadata] = None) -> Path:
        """
        Save raw render data as NumPy array.

        Args:
            data: Array to save (image, iteration counts or root indices)
            filepath: Output file path (.npy)
            metadata: Metadata to save alongside
        """
        filepath = Path(filepath)
        if filepath.suffix.lower() != '.npy':
            filepath = filepath.with_suffix('.npy')

        np.save(filepath, data)

        if metadata:
            self._save_companion_metadata(filepath, metadata)

        logger.info(f"Saved raw data: {filepath}")
        return filepath

    def load_raw_data(self, filepath: Union[str, Path]) -> Tuple[np.ndarray, Optional[RenderMetadata]]:
        """
        Load raw data and metadata.

        Args:
            filepath: Input file path (.npy)

        Returns:
            Tuple of (array, metadata)
        """
        filepath = Path(filepath)
        data = np.load(filepath)

        metadata = None
        metadata_path = filepath.with_suffix('.json')
        if metadata_path.exists():
            try:
                with open(metadata_path, 'r') as f:
                    metadata = RenderMetadata.from_json(f.read())
            except (ValueError, TypeError, KeyError) as e:
                logger.warning(f"Could not load metadata from {metadata_path}: {e}")

        return data, metadata
