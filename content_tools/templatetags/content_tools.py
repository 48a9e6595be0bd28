"""
Template tags for ContentTools editable regions.

    {% load content_tools %}

    {% content_tools id="intro" tag="section" options=attrs styles=styles %}
        <p>This part of the page is editable.</p>
    {% end_content_tools %}

    ...
    {% content_tools_scripts %}
    </body>
"""
from django import template
from django.template.base import token_kwargs
from django.utils.translation import get_language

from content_tools.region import EditableRegion, csrf_pair_for
from content_tools.services.config_scope import get_page_state
from content_tools.services.scripts import get_script_registry

register = template.Library()

REGION_ARGUMENTS = {
    'id', 'tag', 'data_name', 'data_init', 'options', 'images_engine',
    'save_engine', 'styles', 'language', 'global_config',
}


class ContentToolsNode(template.Node):
    def __init__(self, nodelist, kwargs):
        self.nodelist = nodelist
        self.kwargs = kwargs

    def render(self, context):
        options = {key: value.resolve(context) for key, value in self.kwargs.items()}
        region_id = options.pop('id', None)
        page_state = get_page_state(context)
        region = EditableRegion(page_state, region_id=None if region_id is None else str(region_id), **options)
        region.prepare(csrf_pair_for(context.get('request'), context), get_language())

        opening = region.begin()
        content = self.nodelist.render(context)
        return opening + content + region.end()


class ContentToolsScriptsNode(template.Node):
    def render(self, context):
        return get_script_registry(get_page_state(context)).render()


@register.tag('content_tools')
def do_content_tools(parser, token):
    """
    Wrap content in an editable region.

    Arguments are key=value pairs; see content_tools.conf for their meaning.
    """
    bits = token.split_contents()
    tag_name = bits.pop(0)
    kwargs = token_kwargs(bits, parser)
    if bits:
        raise template.TemplateSyntaxError(f"{tag_name!r} only accepts key=value arguments")
    unknown = set(kwargs) - REGION_ARGUMENTS
    if unknown:
        raise template.TemplateSyntaxError(
            f"{tag_name!r} received unknown arguments: {', '.join(sorted(unknown))}"
        )
    nodelist = parser.parse(('end_content_tools',))
    parser.delete_first_token()
    return ContentToolsNode(nodelist, kwargs)


@register.tag('content_tools_scripts')
def do_content_tools_scripts(parser, token):
    """Write out the editor assets and scripts registered on the page."""
    if len(token.split_contents()) > 1:
        raise template.TemplateSyntaxError("'content_tools_scripts' takes no arguments")
    return ContentToolsScriptsNode()
