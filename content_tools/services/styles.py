"""
Style registration for the editor's style palette.

Styles are configured as an ordered mapping:

    {
        'Bootstrap Green': {'class': 'text-success', 'tags': ['p', 'h2', 'h1']},
        'Lead': {'class': 'lead', 'tags': 'p, div'},
        'Muted': {'class': 'text-muted'},
    }

'tags' is optional; without it the style applies to every element.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from content_tools.exceptions import ConfigurationError
from content_tools.services.config_scope import EditorConfig, GlobalConfig

logger = logging.getLogger(__name__)

QUOTE_CHARS = str.maketrans('', '', '\'"')


@dataclass(frozen=True)
class StyleDefinition:
    """A style palette entry."""
    name: str
    css_class: str
    tags: tuple[str, ...] = ()


def normalize_tags(tags) -> list[str]:
    """
    Normalize the 'tags' of a style into a list of tag names.

    Accepts a comma-separated string or a list of strings. Entries are
    trimmed and stripped of quote characters; empty entries and repeats are
    dropped, order is kept.

    Raises:
        ConfigurationError: for any other type, or non-string list items
    """
    if tags is None or tags == '':
        return []
    if isinstance(tags, str):
        items = tags.split(',')
    elif isinstance(tags, (list, tuple)):
        items = list(tags)
        if not all(isinstance(item, str) for item in items):
            raise ConfigurationError('styles', 'Invalid options for styles configuration!')
    else:
        raise ConfigurationError('styles', 'Invalid options for styles configuration!')

    result = []
    for item in items:
        tag = item.strip().translate(QUOTE_CHARS)
        if tag and tag not in result:
            result.append(tag)
    return result


def build_style(name, style) -> StyleDefinition:
    """Validate one configured style and build its palette entry."""
    if not isinstance(name, str) or not name:
        raise ConfigurationError('styles', 'Invalid options for styles configuration!')
    if not isinstance(style, Mapping):
        raise ConfigurationError('styles', 'Invalid options for styles configuration!')
    css_class = style.get('class')
    if not isinstance(css_class, str) or not css_class:
        raise ConfigurationError('styles', 'Invalid options for styles configuration!')
    return StyleDefinition(name=name, css_class=css_class, tags=tuple(normalize_tags(style.get('tags'))))


def add_styles(config: EditorConfig, global_config: GlobalConfig | None = None) -> list[StyleDefinition]:
    """
    Collect the style definitions a region contributes to the palette.

    Every configured style is validated. With a global configuration in play,
    styles whose names were already emitted on this page are skipped and the
    new names are recorded; without one every style is returned.

    Args:
        config: Effective region config
        global_config: Page-wide configuration, if any

    Returns:
        New style definitions, in configuration order
    """
    new_styles = []
    for name, style in config.styles.items():
        definition = build_style(name, style)
        if global_config is None:
            new_styles.append(definition)
        elif name not in global_config.emitted_style_names:
            new_styles.append(definition)
            global_config.emitted_style_names.add(name)
        else:
            logger.debug(f"Style already on the palette: {name}")
    return new_styles
