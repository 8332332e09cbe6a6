"""Core middleware."""
from django.conf import settings
from django.utils.cache import patch_cache_control

DOCUMENT_CONTENT_TYPES = ("application/pdf", "application/zip")


class NoStoreReportMiddleware:
    """Mark API responses and report documents as non-cacheable.

    A report is regenerated in place for the same date, so neither a browser
    nor a proxy may hand back an older JSON body, PDF or archive. Covered
    paths come from ``NO_STORE_PATH_PREFIXES``; PDF and ZIP responses are
    covered wherever they are served.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.prefixes = tuple(getattr(settings, "NO_STORE_PATH_PREFIXES", ("/api/",)))

    def _applies(self, request, response) -> bool:
        if request.path.startswith(self.prefixes):
            return True
        content_type = response.get("Content-Type", "").split(";")[0].strip()
        return content_type in DOCUMENT_CONTENT_TYPES

    def __call__(self, request):
        response = self.get_response(request)

        if self._applies(request, response):
            patch_cache_control(
                response,
                private=True,
                no_cache=True,
                no_store=True,
                must_revalidate=True,
                max_age=0,
            )
            response["Pragma"] = "no-cache"
            response["Expires"] = "0"

        return response
