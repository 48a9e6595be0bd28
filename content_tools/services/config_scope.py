"""
Config Scope Service.

Resolves the effective configuration of an editable region against the
page-wide (global) configuration.

The first region on a page that asks for a global configuration publishes its
settings into the page state. Every later region on the same page adopts the
published data attribute names, image and save endpoints and language, while
keeping its own tag and html options. The published configuration also keeps
track of the style names already added to the style palette.

Page state lives for one page render only: it is attached to the request (or
to the render context when rendering without a request).
"""
import logging
import re
from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass, field, fields, replace

from content_tools import conf
from content_tools.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

GLOBAL_CONFIG_KEY = 'content-tools-global-configuration'
REGION_COUNTER_KEY = 'content-tools-region-counter'
PAGE_STATE_ATTR = '_content_tools_page_state'
PAGE_STATE_CONTEXT_KEY = '_content_tools_page_state'

TAG_NAME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9-]*$')


@dataclass
class EditorConfig:
    """Configuration of a single editable region."""
    tag: str = 'div'
    data_name: str = 'name'
    data_init: str = 'editable'
    options: dict = field(default_factory=dict)
    images_engine: dict | bool = False
    save_engine: dict | bool = False
    styles: dict = field(default_factory=dict)
    language: bool | str = False
    global_config: bool = True

    @classmethod
    def from_options(cls, **options) -> 'EditorConfig':
        """
        Build a config from keyword options, filling the rest from settings.

        Raises:
            TypeError: for option names that are not config fields
        """
        names = {f.name for f in fields(cls)}
        unknown = set(options) - names
        if unknown:
            raise TypeError(f"Unknown content tools options: {', '.join(sorted(unknown))}")
        values = {name: conf.get_setting(name.upper()) for name in names}
        values.update(options)
        return cls(**values)


@dataclass(frozen=True)
class GlobalConfig:
    """
    Page-wide configuration published by the first global region.

    Only emitted_style_names changes after creation, and it only grows.
    """
    data_name: str
    data_init: str
    images_engine: dict | bool
    save_engine: dict | bool
    language: bool | str
    emitted_style_names: set = field(default_factory=set)

    @classmethod
    def snapshot(cls, config: EditorConfig) -> 'GlobalConfig':
        return cls(
            data_name=config.data_name,
            data_init=config.data_init,
            images_engine=deepcopy(config.images_engine),
            save_engine=deepcopy(config.save_engine),
            language=config.language,
        )


class PageState:
    """Key/value store scoped to one page render."""

    def __init__(self):
        self._values = {}

    def get(self, key, default=None):
        return self._values.get(key, default)

    def set(self, key, value):
        self._values[key] = value

    def __contains__(self, key):
        return key in self._values

    def next_region_id(self, prefix: str) -> str:
        """Hand out page-unique ids for regions rendered without one."""
        counter = self.get(REGION_COUNTER_KEY, 0)
        self.set(REGION_COUNTER_KEY, counter + 1)
        return f'{prefix}{counter}'


def get_page_state(context) -> PageState:
    """
    Return the page state of the template render behind ``context``.

    The request is the natural carrier of a page render; without one the state
    lives in the render context. The state is also cached in the outermost
    render context layer, which Context.new() shares, so regions inside
    ``{% include ... only %}`` and inclusion tags join the same page.
    """
    root = context.render_context.dicts[0]
    state = root.get(PAGE_STATE_CONTEXT_KEY)
    if state is not None:
        return state

    request = getattr(context, 'request', None) or context.get('request')
    if request is not None:
        state = getattr(request, PAGE_STATE_ATTR, None)
        if state is None:
            state = PageState()
            setattr(request, PAGE_STATE_ATTR, state)
    else:
        state = PageState()
    root[PAGE_STATE_CONTEXT_KEY] = state
    return state


def validate_config(config: EditorConfig) -> None:
    """
    Check the shape of every config value.

    Endpoint presence and style contents are checked when they are used.

    Raises:
        ConfigurationError: naming the first invalid field
    """
    if not isinstance(config.tag, str) or not TAG_NAME_RE.match(config.tag):
        raise ConfigurationError('tag')
    if not isinstance(config.data_init, str) or not config.data_init:
        raise ConfigurationError('data_init')
    if not isinstance(config.data_name, str) or not config.data_name:
        raise ConfigurationError('data_name')
    if not isinstance(config.options, Mapping):
        raise ConfigurationError('options')
    if config.images_engine is not False and not isinstance(config.images_engine, Mapping):
        raise ConfigurationError('images_engine')
    if config.save_engine is not False and not isinstance(config.save_engine, Mapping):
        raise ConfigurationError('save_engine')
    if not isinstance(config.styles, Mapping):
        raise ConfigurationError('styles')
    if not isinstance(config.language, (bool, str)):
        raise ConfigurationError('language')
    if not isinstance(config.global_config, bool):
        raise ConfigurationError('global_config')


def get_global_config(page_state: PageState) -> GlobalConfig | None:
    return page_state.get(GLOBAL_CONFIG_KEY)


def resolve(config: EditorConfig, page_state: PageState) -> tuple[EditorConfig, bool]:
    """
    Resolve a region config against the page's global configuration.

    - A published global configuration always wins, even over a region that
      asked for global_config=False. The region adopts its data attribute
      names, engines and language and does not own the bootstrap scripts.
    - Otherwise a global region publishes its own settings and owns the
      bootstrap scripts for the whole page.
    - Otherwise the region is independent and owns its own bootstrap scripts.

    Returns:
        Tuple of (effective config, is_global_owner)
    """
    global_config = get_global_config(page_state)
    if global_config is not None:
        logger.debug(f"Region adopts global configuration (data-{global_config.data_init})")
        effective = replace(
            config,
            data_name=global_config.data_name,
            data_init=global_config.data_init,
            images_engine=deepcopy(global_config.images_engine),
            save_engine=deepcopy(global_config.save_engine),
            language=global_config.language,
        )
        return effective, False

    if config.global_config:
        page_state.set(GLOBAL_CONFIG_KEY, GlobalConfig.snapshot(config))
        logger.info(f"Published global content tools configuration (data-{config.data_init})")

    return config, True
