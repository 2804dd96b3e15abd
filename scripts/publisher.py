#!/usr/bin/env python3
"""
Portfolio Publisher - CDN Upload Step
Syncs the generated derivatives to S3 and prints example public URLs.
"""

import os
import sys
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from builder import MANIFEST_NAME
from image_urls import image_url
from utils import get_env, run

CACHE_CONTROL = 'public,max-age=31536000,immutable'
PREFERRED_SAMPLE_WIDTH = 1200
SAMPLE_LIMIT = 5


class PublishConfig:
    """Remote destination settings read from the environment."""

    def __init__(self, bucket: str, cdn_base: str, prefix: str = '',
                 local_dir: Optional[Path] = None):
        self.bucket = bucket
        self.prefix = prefix.strip('/')
        self.cdn_base = cdn_base.rstrip('/')
        self.local_dir = local_dir or Path('assets/web').resolve()

    @classmethod
    def from_env(cls, local_dir: Optional[Path] = None) -> 'PublishConfig':
        """Raises ConfigError if S3_BUCKET or PUBLIC_IMAGE_CDN_BASE is missing."""
        bucket = get_env('S3_BUCKET')
        prefix = os.getenv('S3_PREFIX', '')
        cdn_base = get_env('PUBLIC_IMAGE_CDN_BASE')  # e.g. https://images.example.com
        return cls(bucket, cdn_base, prefix=prefix, local_dir=local_dir)

    @property
    def manifest_path(self) -> Path:
        return self.local_dir / MANIFEST_NAME

    @property
    def destination(self) -> str:
        return remote_destination(self.bucket, self.prefix)


def remote_destination(bucket: str, prefix: str = '') -> str:
    prefix = prefix.strip('/')
    return f"s3://{bucket}/{prefix}" if prefix else f"s3://{bucket}"


def sync_command(local_dir: Path, dest: str) -> List[str]:
    """Arguments for `aws`; everything except the manifest is uploaded."""
    return [
        's3',
        'sync',
        str(local_dir),
        dest,
        '--exclude',
        MANIFEST_NAME,
        '--cache-control',
        CACHE_CONTROL,
    ]


def load_manifest(path: Path) -> Dict[str, Dict[str, Any]]:
    with open(path, encoding='utf-8') as f:
        return json.load(f)


def sample_width(widths: List[int]) -> Optional[int]:
    """Pick the 1200 variant if present, otherwise the largest one."""
    if not widths:
        return None
    if PREFERRED_SAMPLE_WIDTH in widths:
        return PREFERRED_SAMPLE_WIDTH
    return max(widths)


def sample_urls(manifest: Dict[str, Dict[str, Any]], cdn_base: str,
                limit: int = SAMPLE_LIMIT) -> List[Tuple[str, str]]:
    """
    Build example public URLs for the first few slugs in the manifest.

    Args:
        manifest: Parsed manifest.json
        cdn_base: Public CDN base URL
        limit: Maximum number of slugs to sample

    Returns:
        List of (slug, url) pairs; slugs with no widths are skipped
    """
    urls = []
    for slug in list(manifest)[:limit]:
        width = sample_width(manifest[slug].get('widths', []))
        if width is None:
            continue
        urls.append((slug, image_url(slug, width, base=cdn_base)))
    return urls


class Publisher:
    """Uploads the built output directory to the CDN bucket."""

    def __init__(self, config: PublishConfig):
        self.config = config

    def run(self):
        cfg = self.config

        if not cfg.local_dir.is_dir():
            raise FileNotFoundError(f"Output directory not found: {cfg.local_dir}")
        manifest = load_manifest(cfg.manifest_path)

        # AWS CLI sets Content-Type from the file extension
        run('aws', sync_command(cfg.local_dir, cfg.destination))

        print("\nPublished. Example URLs:")
        for slug, url in sample_urls(manifest, cfg.cdn_base):
            print(f"- {slug}: {url}")


def main() -> int:
    """Entry point for the publisher."""
    load_dotenv(Path('.env'))

    try:
        config = PublishConfig.from_env()
        Publisher(config).run()
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
