"""
Tests for the {% content_tools %} template tags.
"""
import logging

import pytest
from django.template import RequestContext, Template, TemplateSyntaxError

from content_tools.exceptions import ConfigurationError

IMAGES = {
    'upload': '/images/upload/',
    'rotate': '/images/rotate/',
    'insert': '/images/insert/',
}

TWO_REGIONS = (
    '{% content_tools id="first" images_engine=images styles=first_styles language="pt-BR" %}'
    '<p>First</p>'
    '{% end_content_tools %}'
    '{% content_tools id="second" tag="aside" data_init="ignored" styles=second_styles %}'
    '<p>Second</p>'
    '{% end_content_tools %}'
    '{% content_tools_scripts %}'
)


class TestContentToolsTag:
    """Tests for the region block tag."""

    def test_wraps_content(self, render_template, attributes_of):
        html = render_template(
            '{% content_tools id="region1" options=opts %}<p>Hello</p>{% end_content_tools %}',
            {'opts': {'class': 'wrapper'}},
        )

        assert attributes_of(html, 'div') == {
            'data-editable': 'true',
            'data-name': 'region1',
            'class': 'wrapper',
        }
        assert html.endswith('<p>Hello</p></div>')

    def test_falsy_id_is_kept(self, render_template, attributes_of):
        html = render_template('{% content_tools id=0 %}A{% end_content_tools %}')

        assert attributes_of(html, 'div')['data-name'] == '0'

    def test_content_is_rendered_in_context(self, render_template):
        html = render_template(
            '{% content_tools tag="section" %}{{ greeting }}{% end_content_tools %}',
            {'greeting': 'Hi <b>'},
        )

        assert '>Hi &lt;b&gt;</section>' in html

    def test_scripts_emitted_once(self, render_template):
        html = render_template(TWO_REGIONS, {
            'images': IMAGES,
            'first_styles': {'Foo': {'class': 'foo', 'tags': 'p, h1'}},
            'second_styles': {'Foo': {'class': 'other'}, 'Bar': {'class': 'bar'}},
        })

        assert html.count('EditorApp.get()') == 1
        assert html.count('var _imagesUrl=') == 1
        assert html.count('content-tools.min.js') == 1
        assert 'loadTranslation("pt-br","pt");' in html
        assert html.count('new ContentTools.Style("Foo"') == 1
        assert 'new ContentTools.Style("Foo","foo",["p", "h1"])' in html
        assert 'new ContentTools.Style("Bar","bar")' in html
        # Second region adopts the data attributes but keeps its own tag
        assert '<aside data-editable="true" data-name="second">' in html

    def test_begin_scripts_come_first(self, render_template):
        html = render_template(TWO_REGIONS, {'images': IMAGES, 'first_styles': {}, 'second_styles': {}})

        assert html.index('var _imagesUrl=') < html.index('content-tools.min.js') < html.index('EditorApp.get()')

    def test_independent_regions(self, render_template):
        html = render_template(
            '{% content_tools global_config=False styles=styles %}A{% end_content_tools %}'
            '{% content_tools global_config=False styles=styles %}B{% end_content_tools %}'
            '{% content_tools_scripts %}',
            {'styles': {'Foo': {'class': 'foo'}}},
        )

        assert html.count('EditorApp.get()') == 2
        assert html.count('new ContentTools.Style("Foo","foo")') == 2
        assert html.count('content-tools.min.js') == 1
        assert 'data-name="contentTools0"' in html
        assert 'data-name="contentTools1"' in html

    def test_scripts_tag_flushes(self, render_template):
        html = render_template(
            '{% content_tools %}A{% end_content_tools %}'
            '{% content_tools_scripts %}|{% content_tools_scripts %}'
        )

        assert html.split('|')[1] == ''

    def test_scripts_without_regions(self, render_template):
        assert render_template('{% content_tools_scripts %}') == ''

    def test_csrf_from_request(self, render_template, rf):
        request = rf.get('/')

        html = render_template('{% content_tools %}A{% end_content_tools %}{% content_tools_scripts %}', request=request)

        assert request.META['CSRF_COOKIE']
        assert '"csrfmiddlewaretoken"' in html

    def test_state_shared_per_request(self, render_template, rf):
        """Two templates rendered for one request form one page."""
        request = rf.get('/')

        first = render_template('{% content_tools id="a" data_init="ct" %}A{% end_content_tools %}', request=request)
        second = render_template(
            '{% content_tools id="b" %}B{% end_content_tools %}{% content_tools_scripts %}',
            request=request,
        )

        assert 'data-ct="true"' in first
        assert 'data-ct="true"' in second
        assert second.count('EditorApp.get()') == 1

    def test_missing_rotate_raises_before_output(self, render_template):
        with pytest.raises(ConfigurationError) as excinfo:
            render_template(
                '{% content_tools images_engine=images %}A{% end_content_tools %}',
                {'images': {'upload': '/u/', 'insert': '/i/'}},
            )

        assert excinfo.value.field == 'images_engine'

    def test_non_string_style_class(self, render_template):
        with pytest.raises(ConfigurationError) as excinfo:
            render_template(
                '{% content_tools styles=styles %}A{% end_content_tools %}',
                {'styles': {'Foo': {'class': 42}}},
            )

        assert excinfo.value.field == 'styles'

    def test_invalid_global_config(self, render_template):
        with pytest.raises(ConfigurationError):
            render_template('{% content_tools global_config="yes" %}A{% end_content_tools %}')


class TestTagSyntax:
    """Tests for template syntax errors."""

    def test_unknown_argument(self, render_template):
        with pytest.raises(TemplateSyntaxError):
            render_template('{% content_tools colour="red" %}A{% end_content_tools %}')

    def test_positional_argument(self, render_template):
        with pytest.raises(TemplateSyntaxError):
            render_template('{% content_tools "div" %}A{% end_content_tools %}')

    def test_missing_end_tag(self, render_template):
        with pytest.raises(TemplateSyntaxError):
            render_template('{% content_tools %}A')

    def test_scripts_arguments(self, render_template):
        with pytest.raises(TemplateSyntaxError):
            render_template('{% content_tools_scripts "end" %}')


class TestIsolatedPartials:
    """Regions rendered through {% include ... only %} join the page."""

    PAGE = (
        '{% content_tools id="main" data_init="ct" %}M{% end_content_tools %}'
        '{% include partial with styles=styles only %}'
        '{% content_tools_scripts %}'
    )

    @pytest.fixture
    def partial(self):
        return Template(
            '{% load content_tools %}'
            '{% content_tools id="side" styles=styles %}S{% end_content_tools %}'
        )

    def check_page(self, html):
        assert '<div data-ct="true" data-name="side">S</div>' in html
        assert html.count('EditorApp.get()') == 1
        assert 'new ContentTools.Style("Foo","foo")' in html

    def test_without_request(self, render_template, partial):
        html = render_template(self.PAGE, {'partial': partial, 'styles': {'Foo': {'class': 'foo'}}})

        self.check_page(html)

    def test_with_request(self, rf, partial):
        template = Template('{% load content_tools %}' + self.PAGE)
        context = RequestContext(rf.get('/'), {'partial': partial, 'styles': {'Foo': {'class': 'foo'}}})

        html = template.render(context)

        self.check_page(html)

    def test_published_once(self, render_template, partial, caplog):
        caplog.set_level(logging.INFO, logger='content_tools')

        render_template(self.PAGE, {'partial': partial, 'styles': {}})

        assert caplog.text.count('Published global content tools configuration') == 1
