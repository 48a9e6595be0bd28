from django.shortcuts import render
from django.urls import reverse

from content_tools.views import SaveContentView

SESSION_KEY = 'content_tools_regions'

DEMO_STYLES = {
    'Lead': {'class': 'lead', 'tags': ['p']},
    'Muted': {'class': 'text-muted', 'tags': 'p, h2'},
}

SIDEBAR_STYLES = {
    'Lead': {'class': 'lead-alt'},
    'Highlight': {'class': 'bg-warning'},
}


def demo(request):
    """Demo page with two editable regions sharing one configuration."""
    return render(request, 'main/demo.html', {
        'regions': request.session.get(SESSION_KEY, {}),
        'save_engine': {'save': reverse('main_save')},
        'demo_styles': DEMO_STYLES,
        'sidebar_styles': SIDEBAR_STYLES,
        'sidebar_options': {'class': 'sidebar'},
    })


class SaveDemoContentView(SaveContentView):
    """Keeps edited regions in the session."""

    def save_regions(self, regions):
        errors = [f'Region {name} is empty' for name, html in regions.items() if not html.strip()]
        if errors:
            return errors
        stored = self.request.session.get(SESSION_KEY, {})
        stored.update(regions)
        self.request.session[SESSION_KEY] = stored
        return []
