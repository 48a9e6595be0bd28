"""
Pytest configuration and shared fixtures for testing.
"""
import re

import pytest
from django.template import Context, Template

from content_tools.services.bootstrap import CsrfPair
from content_tools.services.config_scope import EditorConfig, PageState


@pytest.fixture
def page_state():
    """Fresh page state, as for a new page render."""
    return PageState()


@pytest.fixture
def csrf():
    return CsrfPair('csrfmiddlewaretoken', 'token123')


@pytest.fixture
def images_engine():
    return {
        'upload': '/images/upload/',
        'rotate': '/images/rotate/',
        'insert': '/images/insert/',
    }


@pytest.fixture
def make_config(images_engine):
    """Factory for region configs with working engines."""
    def _make(**overrides):
        values = {
            'images_engine': dict(images_engine),
            'save_engine': {'save': '/pages/save/'},
        }
        values.update(overrides)
        return EditorConfig(**values)
    return _make


@pytest.fixture
def render_template():
    """Render a template string with content_tools loaded."""
    def _render(source, context=None, request=None):
        template = Template('{% load content_tools %}' + source)
        values = dict(context or {})
        if request is not None:
            values['request'] = request
        return template.render(Context(values))
    return _render


def tag_attributes(html, tag):
    """Attributes of the first opening <tag> in html, as a dict."""
    match = re.search(rf'<{tag}(\s[^>]*)?>', html)
    assert match, f'no <{tag}> in {html!r}'
    return dict(re.findall(r'([\w:-]+)="([^"]*)"', match.group(1) or ''))


@pytest.fixture
def attributes_of():
    return tag_attributes
