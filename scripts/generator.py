#!/usr/bin/env python3
"""
Portfolio Generator - Static Site Builder
Validates portfolio content and renders the gallery and detail pages
with responsive CDN image markup.
"""

import sys
import json
import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, select_autoescape

from builder import MANIFEST_NAME
from image_urls import (
    DETAIL_SIZES,
    DETAIL_WIDTHS,
    GALLERY_SIZES,
    THUMB_WIDTHS,
    cdn_base,
    image_url,
    placeholder_url,
    srcset,
)
from portfolio import PortfolioDocument, load_entries


class SiteGenerator:
    """Renders the static portfolio site from validated content entries."""

    def __init__(self, repo_root: Path, base_url: Optional[str] = None):
        """Initialize the generator."""
        self.repo_root = repo_root
        self.content_dir = repo_root / 'content' / 'portfolio'
        self.manifest_path = repo_root / 'assets' / 'web' / MANIFEST_NAME
        self.site_dir = repo_root / 'site'
        self.templates_dir = self.site_dir / 'templates'
        self.public_dir = self.site_dir / 'public'
        self.base_url = cdn_base() if base_url is None else base_url.rstrip('/')

        # Setup Jinja2
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(['html']),
        )
        self._manifest: Optional[Dict[str, Any]] = None

    @property
    def manifest(self) -> Dict[str, Any]:
        """The builder's manifest, or an empty mapping if it has not been built."""
        if self._manifest is None:
            if self.manifest_path.exists():
                with open(self.manifest_path, encoding='utf-8') as f:
                    self._manifest = json.load(f)
            else:
                self._manifest = {}
        return self._manifest

    def widths_for(self, slug: str, widths: Iterable[int]) -> List[int]:
        """Restrict widths to those the builder actually generated for slug."""
        widths = list(widths)
        record = self.manifest.get(slug)
        if record is None:
            return widths
        generated = set(record.get('widths', []))
        return [w for w in widths if w in generated]

    def generated_widths(self, slug: str) -> List[int]:
        """All widths the manifest records for slug, ascending."""
        record = self.manifest.get(slug) or {}
        return sorted(record.get('widths', []))

    def entry_context(self, document: PortfolioDocument) -> Dict[str, Any]:
        """Template variables for one entry."""
        entry = document.entry
        slug = entry.imageSlug
        thumb_widths = self.widths_for(slug, THUMB_WIDTHS)
        detail_widths = self.widths_for(slug, DETAIL_WIDTHS)
        if not detail_widths:
            # Narrow masters only have thumbnail sizes; use those on the detail page
            detail_widths = self.generated_widths(slug)

        return {
            **entry.model_dump(),
            'slug': slug,
            'body': document.body,
            'page': f"{slug}.html",
            'thumb_src': image_url(slug, thumb_widths[0], self.base_url) if thumb_widths else None,
            'thumb_srcset': srcset(slug, thumb_widths, self.base_url),
            'detail_src': image_url(slug, detail_widths[-1], self.base_url) if detail_widths else None,
            'detail_srcset': srcset(slug, detail_widths, self.base_url),
            'placeholder': placeholder_url(slug, self.base_url),
        }

    def get_all_entries(self) -> List[Dict[str, Any]]:
        """Load and validate all portfolio entries."""
        return [self.entry_context(doc) for doc in load_entries(self.content_dir)]

    def build_site(self):
        """Rebuild the entire static website."""
        self.public_dir.mkdir(parents=True, exist_ok=True)

        entries = self.get_all_entries()

        # Render index page
        template = self.jinja_env.get_template('index.html')
        index_html = template.render(
            entries=entries,
            total=len(entries),
            sizes=GALLERY_SIZES,
        )
        (self.public_dir / 'index.html').write_text(index_html, encoding='utf-8')

        # Render individual entry pages
        entry_template = self.jinja_env.get_template('entry.html')

        for entry in entries:
            entry_html = entry_template.render(entry=entry, sizes=DETAIL_SIZES)
            (self.public_dir / entry['page']).write_text(entry_html, encoding='utf-8')

        # Copy CSS
        css_src = self.templates_dir / 'style.css'
        if css_src.exists():
            shutil.copy2(css_src, self.public_dir / 'style.css')

        print(f"Site built successfully: {len(entries)} entries")


def main() -> int:
    """CLI interface for the Generator."""
    repo_root = Path.cwd()
    load_dotenv(repo_root / '.env')

    try:
        SiteGenerator(repo_root).build_site()
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
