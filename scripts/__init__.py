"""
Photography portfolio build scripts

Components:
- builder.py: Resizes master images into WebP derivatives and writes the manifest
- publisher.py: Syncs derivatives to S3 behind the image CDN
- image_urls.py: CDN URL and srcset helpers for page rendering
- portfolio.py: Content schema for portfolio entries
- generator.py: Renders the static portfolio site
"""

__version__ = '1.0.0'
