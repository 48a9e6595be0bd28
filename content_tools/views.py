"""
Save endpoint support.

The editor posts every changed region as multipart form data,
{region name: html}, plus the CSRF token, and expects JSON back:

    {}                          - saved
    {"errors": ["...", ...]}    - not saved, errors are logged in the browser

Subclass SaveContentView, implement save_regions() and point the save_engine
'save' url at it.
"""
import logging

from django.http import JsonResponse
from django.views import View

from content_tools.region import CSRF_PARAM

logger = logging.getLogger(__name__)


class SaveContentView(View):
    """POST endpoint receiving edited regions."""
    http_method_names = ['post']

    def get_regions(self, request) -> dict[str, str]:
        return {name: value for name, value in request.POST.items() if name != CSRF_PARAM}

    def save_regions(self, regions: dict[str, str]) -> list[str]:
        """
        Persist edited regions.

        Args:
            regions: Region name to html content

        Returns:
            List of error messages, empty when everything was saved
        """
        raise NotImplementedError('Subclasses must implement save_regions()')

    def post(self, request, *args, **kwargs):
        regions = self.get_regions(request)
        errors = list(self.save_regions(regions) or [])
        if errors:
            logger.warning(f"Saving regions {', '.join(regions)} failed: {errors}")
            return JsonResponse({'errors': errors})
        logger.info(f"Saved regions: {', '.join(regions)}")
        return JsonResponse({})
