"""
URL configuration for country_gdp project.

Every public route lives in ``countries.urls``; this module only adds the
JSON fallbacks for unknown routes and unhandled server errors.
"""
from django.urls import path, include
from django.http import JsonResponse

urlpatterns = [
    path('', include('countries.urls')),
]


def custom_404(request, exception):
    return JsonResponse({"error": "Endpoint not found"}, status=404)


def custom_500(request):
    return JsonResponse({"error": "Internal server error"}, status=500)


handler404 = "country_gdp.urls.custom_404"
handler500 = "country_gdp.urls.custom_500"
