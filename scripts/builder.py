#!/usr/bin/env python3
"""
Portfolio Image Builder - Web Derivative Generator
Resizes master images into WebP derivatives plus a tiny LQIP placeholder
and records the results in a manifest.
"""

import os
import sys
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from PIL import Image, ImageOps

from utils import NoInputImagesError, ensure_dir

VALID_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.tif', '.tiff'}
MANIFEST_NAME = 'manifest.json'
PLACEHOLDER_NAME = 'placeholder.webp'


@dataclass
class BuildConfig:
    """Fixed settings for a build run."""

    input_dir: Path = field(default_factory=lambda: Path('assets/masters').resolve())
    output_dir: Path = field(default_factory=lambda: Path('assets/web').resolve())
    # widths for grid thumbnails
    thumb_widths: List[int] = field(default_factory=lambda: [480, 720, 960, 1200])
    # widths for detail page (max detail = 1600)
    detail_widths: List[int] = field(default_factory=lambda: [800, 1200, 1600])
    webp_quality: int = 75
    webp_method: int = 5
    placeholder_width: int = 32
    placeholder_quality: int = 40
    placeholder_method: int = 3


def slug_from_filename(filename: str) -> str:
    return Path(filename).stem


def list_input_files(input_dir: Path) -> List[Path]:
    """Return the accepted master images in input_dir, sorted by name."""
    return sorted(
        path for path in input_dir.iterdir()
        if path.is_file() and path.suffix.lower() in VALID_EXTENSIONS
    )


def target_widths(src_width: Optional[int],
                  thumb_widths: Iterable[int],
                  detail_widths: Iterable[int]) -> List[int]:
    """
    Combine both width lists, dedupe, sort, and drop widths that would upscale.

    Args:
        src_width: Upright source width; 0 or None when unknown
        thumb_widths: Grid thumbnail widths
        detail_widths: Detail page widths

    Returns:
        Ascending list of widths to generate
    """
    widths = sorted(set(thumb_widths) | set(detail_widths))
    if not src_width:
        # Unknown source width: keep the configured sizes, resize never enlarges.
        return widths
    return [w for w in widths if w <= src_width]


def resize_to_width(img: Image.Image, width: int) -> Image.Image:
    """Resize keeping aspect ratio; never enlarges."""
    if width >= img.width:
        return img.copy()
    height = max(1, round(img.height * width / img.width))
    return img.resize((width, height), Image.Resampling.LANCZOS)


class ImageBuilder:
    """Generates web derivatives for every master image in the input directory."""

    def __init__(self, config: Optional[BuildConfig] = None):
        self.config = config or BuildConfig()

    def load_upright(self, input_path: Path) -> Image.Image:
        """Open a master image with its EXIF orientation applied."""
        with Image.open(input_path) as img:
            upright = ImageOps.exif_transpose(img)
            upright.load()
        if upright.mode not in ('RGB', 'RGBA'):
            has_alpha = 'A' in upright.getbands() or 'transparency' in upright.info
            upright = upright.convert('RGBA' if has_alpha else 'RGB')
        return upright

    def build_one(self, input_path: Path) -> Dict[str, Any]:
        """
        Generate all derivatives and the placeholder for one master image.

        Args:
            input_path: Path to the master image

        Returns:
            Dictionary with slug, source, widths and placeholder path
        """
        cfg = self.config
        slug = slug_from_filename(input_path.name)
        out_dir = ensure_dir(cfg.output_dir / slug)

        # Decode once and reuse for every width
        img = self.load_upright(input_path)
        widths = target_widths(img.width, cfg.thumb_widths, cfg.detail_widths)

        for w in widths:
            resize_to_width(img, w).save(
                out_dir / f"{w}.webp",
                format='WEBP',
                quality=cfg.webp_quality,
                method=cfg.webp_method,
            )

        placeholder_path = out_dir / PLACEHOLDER_NAME
        resize_to_width(img, cfg.placeholder_width).save(
            placeholder_path,
            format='WEBP',
            quality=cfg.placeholder_quality,
            method=cfg.placeholder_method,
        )

        return {
            'slug': slug,
            'source': input_path,
            'widths': widths,
            'placeholder': placeholder_path,
        }

    def run(self) -> Path:
        """
        Build every master image and write a fresh manifest.

        Returns:
            Path to the written manifest
        """
        cfg = self.config
        ensure_dir(cfg.output_dir)

        inputs = list_input_files(cfg.input_dir)
        if not inputs:
            raise NoInputImagesError(f"No images found in: {cfg.input_dir}")

        manifest: Dict[str, Dict[str, Any]] = {}

        # One master is fully written before the next starts
        for input_path in inputs:
            result = self.build_one(input_path)
            manifest[result['slug']] = {
                'widths': result['widths'],
                'placeholder': os.path.relpath(result['placeholder'], Path.cwd()),
            }
            widths_text = ', '.join(str(w) for w in result['widths'])
            print(f"✔ {result['slug']}: {widths_text} (+ placeholder)")

        manifest_path = cfg.output_dir / MANIFEST_NAME
        with open(manifest_path, 'w', encoding='utf-8') as f:
            json.dump(manifest, f, indent=2)

        print(f"\nWrote manifest: {manifest_path}")
        return manifest_path


def main() -> int:
    """Entry point for the image builder."""
    try:
        ImageBuilder().run()
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
