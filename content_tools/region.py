"""
Editable region.

Wraps part of a page in a tag the ContentTools editor turns into an editable
zone:

    region = EditableRegion(page_state, region_id='intro', tag='section')
    html = region.begin() + content + region.end(csrf)

Regions can be used many times on one page. With global_config (the default)
the first region sets tag data attributes, engines and language for every
region after it, emits the bootstrap scripts once, and styles are added to
the palette only once per name. The {% content_tools %} template tag is the
usual way in.
"""
import logging

from django.forms.utils import flatatt
from django.middleware.csrf import get_token
from django.utils.html import format_html
from django.utils.safestring import SafeString

from content_tools import conf
from content_tools.services.bootstrap import (
    BootstrapPayload,
    CsrfPair,
    build_bootstrap_payload,
    data_attribute,
)
from content_tools.services.config_scope import (
    EditorConfig,
    PageState,
    get_global_config,
    resolve,
    validate_config,
)
from content_tools.services.scripts import get_script_registry, register_bootstrap, register_styles
from content_tools.services.styles import StyleDefinition, add_styles

logger = logging.getLogger(__name__)

CSRF_PARAM = 'csrfmiddlewaretoken'


def csrf_pair_for(request=None, context=None) -> CsrfPair:
    """CSRF parameter and token for the current request."""
    if request is not None:
        return CsrfPair(CSRF_PARAM, get_token(request))
    token = context.get('csrf_token', '') if context is not None else ''
    return CsrfPair(CSRF_PARAM, str(token or ''))


class EditableRegion:
    """
    One editable region of a page.

    The config is built from options and settings, validated, then resolved
    against the page's global configuration on construction.

    Raises:
        ConfigurationError: for invalid options
    """

    def __init__(self, page_state: PageState, region_id: str | None = None, **options):
        config = EditorConfig.from_options(**options)
        validate_config(config)
        self.page_state = page_state
        self.region_id = region_id or page_state.next_region_id(conf.get_setting('AUTO_ID_PREFIX'))
        self.config, self.is_global_owner = resolve(config, page_state)
        self.payload: BootstrapPayload | None = None
        self.styles: list[StyleDefinition] | None = None

    def prepare_options(self) -> dict:
        """Merge the editable marker attributes into the html options."""
        markers = {
            data_attribute(self.config.data_init): 'true',
            data_attribute(self.config.data_name): self.region_id,
        }
        attrs = dict(self.config.options)
        for name, value in markers.items():
            if name in attrs and attrs[name] != value:
                logger.warning(f"Option {name} of region {self.region_id} is reserved for the editor, ignoring it")
            attrs[name] = value
        return attrs

    def prepare(self, csrf: CsrfPair, app_language: str | None = None):
        """
        Build the bootstrap payload and new styles without registering them.

        Raises:
            ConfigurationError: for missing endpoints or invalid styles
        """
        if self.is_global_owner:
            self.payload = build_bootstrap_payload(
                self.config,
                csrf,
                app_language=app_language,
                translations_url=conf.translations_url(),
            )
        self.styles = add_styles(self.config, get_global_config(self.page_state))

    def begin(self) -> SafeString:
        return format_html('<{}{}>', self.config.tag, flatatt(self.prepare_options()))

    def end(self, csrf: CsrfPair | None = None, app_language: str | None = None) -> SafeString:
        """Register scripts for the page and close the region's tag."""
        if self.styles is None:
            self.prepare(csrf or CsrfPair(CSRF_PARAM, ''), app_language)

        registry = get_script_registry(self.page_state)
        if self.payload is not None:
            register_bootstrap(registry, self.payload)
            logger.debug(f"Registered editor bootstrap for region {self.region_id}")
        register_styles(registry, self.styles)
        return format_html('</{}>', self.config.tag)
