"""
Default settings for editable regions.

Every default can be overridden project-wide in Django settings:

    CONTENT_TOOLS = {
        'LANGUAGE': True,
        'SAVE_ENGINE': {'save': '/pages/save/'},
        'STYLES': {
            'Bootstrap Green': {'class': 'text-success', 'tags': ['p', 'h2']},
        },
    }

Template tag arguments override these per region.
"""
from copy import deepcopy

from django.conf import settings
from django.templatetags.static import static

DEFAULTS = {
    # Tag wrapping the editable content
    'TAG': 'div',
    # data-* attribute storing the region identifier
    'DATA_NAME': 'name',
    # data-* attribute marking the region as editable
    'DATA_INIT': 'editable',
    # Extra attributes for the wrapping tag
    'OPTIONS': {},
    # Image action urls, or False to wire images up yourself
    'IMAGES_ENGINE': {
        'upload': '/content-tools/image-upload/',
        'rotate': '/content-tools/image-rotate/',
        'insert': '/content-tools/image-insert/',
    },
    # Save action url, or False to wire saving up yourself
    'SAVE_ENGINE': {
        'save': '/content-tools/save/',
    },
    # {'Style name': {'class': 'css-class', 'tags': ['p', 'h1'] or 'p,h1'}}
    'STYLES': {},
    # False (no translation), True (application language) or a language code
    'LANGUAGE': False,
    # First region on the page sets the configuration for the rest
    'GLOBAL_CONFIG': True,
    'AUTO_ID_PREFIX': 'contentTools',
    'EDITOR_JS': 'content_tools/content-tools.min.js',
    'EDITOR_CSS': 'content_tools/content-tools.min.css',
    'IMAGES_JS': 'content_tools/content-tools-images.js',
    # Base url of the <lang>.json translation files, None for static files
    'TRANSLATIONS_URL': None,
}


def get_setting(name: str):
    """Return a setting from CONTENT_TOOLS, falling back to DEFAULTS."""
    overrides = getattr(settings, 'CONTENT_TOOLS', None) or {}
    if name in overrides:
        return deepcopy(overrides[name])
    return deepcopy(DEFAULTS[name])


def static_url(path: str) -> str:
    """Resolve an asset path, leaving absolute urls and paths untouched."""
    if path.startswith(('http://', 'https://', '//', '/')):
        return path
    return static(path)


def translations_url() -> str:
    url = get_setting('TRANSLATIONS_URL')
    if url is None:
        url = static('content_tools/translations')
    return url.rstrip('/')
