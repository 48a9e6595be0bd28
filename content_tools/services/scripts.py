"""
Client script registration and rendering.

Scripts are collected per page in a ScriptRegistry and written out by the
{% content_tools_scripts %} tag. Script bodies are rendered from the Django
templates in templates/content_tools/js/; every value embedded in them goes
through js_literal().
"""
import json

from django.template.loader import render_to_string
from django.utils.safestring import SafeString, mark_safe

from content_tools import conf
from content_tools.services.bootstrap import BootstrapPayload, TranslationPayload, ImagesPayload, EditorPayload
from content_tools.services.config_scope import PageState
from content_tools.services.styles import StyleDefinition

POS_BEGIN = 'begin'
POS_END = 'end'

SCRIPTS_KEY = 'content-tools-scripts'

_JS_ESCAPES = {
    ord('<'): '\\u003C',
    ord('>'): '\\u003E',
    ord('&'): '\\u0026',
}


def js_literal(value) -> str:
    """Serialize a value as a JavaScript literal safe inside <script>."""
    return json.dumps(value).translate(_JS_ESCAPES)


class ScriptRegistry:
    """Scripts and assets registered during one page render."""

    def __init__(self):
        self.clear()

    def clear(self):
        self.scripts = {POS_BEGIN: [], POS_END: []}
        self.css_files = []
        self.js_files = []

    def register_js(self, script: str, position: str = POS_END):
        if position not in self.scripts:
            raise ValueError(f"Unknown script position: {position}")
        self.scripts[position].append(script)

    def register_css(self, url: str):
        if url not in self.css_files:
            self.css_files.append(url)

    def register_js_file(self, url: str):
        if url not in self.js_files:
            self.js_files.append(url)

    def is_empty(self) -> bool:
        return not (self.css_files or self.js_files or any(self.scripts.values()))

    def render(self) -> SafeString:
        """Render everything registered so far and empty the registry."""
        if self.is_empty():
            return mark_safe('')
        html = render_to_string('content_tools/scripts.html', {
            'begin_scripts': [mark_safe(script) for script in self.scripts[POS_BEGIN]],
            'css_files': self.css_files,
            'js_files': self.js_files,
            'end_scripts': [mark_safe(script) for script in self.scripts[POS_END]],
        })
        self.clear()
        return mark_safe(html)


def get_script_registry(page_state: PageState) -> ScriptRegistry:
    registry = page_state.get(SCRIPTS_KEY)
    if registry is None:
        registry = ScriptRegistry()
        page_state.set(SCRIPTS_KEY, registry)
    return registry


def render_translation_js(payload: TranslationPayload) -> str:
    return render_to_string('content_tools/js/translation.js', {
        'base_url': js_literal(payload.base_url),
        'language': js_literal(payload.language),
        'fallback': js_literal(payload.fallback),
    })


def render_images_js(payload: ImagesPayload) -> str:
    return render_to_string('content_tools/js/images.js', {
        'urls': js_literal(list(payload.urls)),
        'csrf': js_literal(list(payload.csrf)),
    })


def render_editor_js(payload: EditorPayload) -> str:
    context = {
        'init_selector': js_literal(payload.init_selector),
        'name_attribute': js_literal(payload.name_attribute),
        'save': payload.save is not None,
    }
    if payload.save is not None:
        context.update({
            'save_url': js_literal(payload.save.url),
            'csrf_param': js_literal(payload.save.csrf.param),
            'csrf_token': js_literal(payload.save.csrf.token),
        })
    return render_to_string('content_tools/js/editor.js', context)


def render_styles_js(styles: list[StyleDefinition]) -> str:
    return render_to_string('content_tools/js/styles.js', {
        'styles': [
            {
                'name': js_literal(style.name),
                'css_class': js_literal(style.css_class),
                'tags': js_literal(list(style.tags)) if style.tags else None,
            }
            for style in styles
        ],
    })


def register_bootstrap(registry: ScriptRegistry, payload: BootstrapPayload):
    """Register the one-time editor bootstrap for the page."""
    if payload.translation is not None:
        registry.register_js(render_translation_js(payload.translation), POS_END)

    registry.register_js(render_images_js(payload.images), POS_BEGIN)
    registry.register_css(conf.static_url(conf.get_setting('EDITOR_CSS')))
    registry.register_js_file(conf.static_url(conf.get_setting('EDITOR_JS')))
    if payload.images.enabled:
        registry.register_js_file(conf.static_url(conf.get_setting('IMAGES_JS')))

    registry.register_js(render_editor_js(payload.editor), POS_END)


def register_styles(registry: ScriptRegistry, styles: list[StyleDefinition]):
    """Add new styles to the palette in a single call."""
    if styles:
        registry.register_js(render_styles_js(styles), POS_END)
