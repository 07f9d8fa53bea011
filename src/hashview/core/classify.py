"""Media type classification and filename-based display language lookup"""

from pathlib import PurePosixPath
from typing import Optional

from hashview.core.models import Classification, MediaVariant


LANGUAGE_MAP: dict[str, str] = {
    'js':   'javascript',
    'ts':   'typescript',
    'py':   'python',
    'go':   'go',
    'java': 'java',
    'html': 'html',
    'css':  'css',
}
DEFAULT_LANGUAGE = 'text'


def language_for_filename(filename: Optional[str]) -> str:
    """Return the display language for a filename; raw extension if unmapped, 'text' if none."""
    if not filename:
        return DEFAULT_LANGUAGE
    extension = PurePosixPath(filename.replace('\\', '/')).suffix[1:]
    if not extension:
        return DEFAULT_LANGUAGE
    return LANGUAGE_MAP.get(extension, extension)


def classify_media_type(media_type: Optional[str]) -> MediaVariant:
    """Ordered prefix/substring rules; first match wins, unknown is the catch-all."""
    media_type = (media_type or '').strip().lower()
    if media_type.startswith('image/'):
        return MediaVariant.image
    if media_type.startswith('video/'):
        return MediaVariant.video
    if media_type.split(';', 1)[0].strip() == 'application/pdf':
        return MediaVariant.pdf
    if 'text/markdown' in media_type:
        return MediaVariant.markdown
    if media_type.startswith('text/'):
        return MediaVariant.code
    return MediaVariant.unknown


def classify(media_type: Optional[str], filename: Optional[str] = None) -> Classification:
    """Classify a declared media type; resolve a display language for code."""
    variant = classify_media_type(media_type)
    if variant is MediaVariant.code:
        return Classification(variant, language_for_filename(filename))
    return Classification(variant)
