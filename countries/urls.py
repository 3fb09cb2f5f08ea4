from django.urls import path
from . import views


urlpatterns = [
    # GET /status → metadata of the last committed refresh
    path('status', views.get_status, name='get_status'),
    # POST /countries/refresh → fetch both sources and upsert every country
    path('countries/refresh', views.refresh_countries, name='refresh_countries'),

    # GET /countries/image → summary image, before the <name> route
    path('countries/image', views.get_summary_image, name='get_summary_image'),
    # GET /countries → list with region/currency filters and sort
    path('countries', views.list_countries, name='list_countries'),

    # GET or DELETE /countries/<name>
    path('countries/<str:name>', views.country_detail, name='country_detail'),
]
