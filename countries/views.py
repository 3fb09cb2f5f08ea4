from django.conf import settings
from django.db.models import F
from django.http import FileResponse
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .exceptions import CountryNotFound
from .models import Country, RefreshMetadata
from .refresh import CountryRefresher
from .serializers import CountryListQuerySerializer, CountrySerializer, RefreshMetadataSerializer
from .store import CountryStore


SORT_ORDERINGS = {
    "gdp_desc": (F("estimated_gdp").desc(nulls_last=True), "name"),
    "gdp_asc": (F("estimated_gdp").asc(nulls_first=True), "name"),
    "population_desc": ("-population", "name"),
    "name_asc": ("name",),
}


def filter_countries(region=None, currency=None, sort="name_asc"):
    qs = Country.objects.all()
    if region:
        qs = qs.filter(region__iexact=region)
    if currency:
        qs = qs.filter(currency_code__iexact=currency)
    return qs.order_by(*SORT_ORDERINGS[sort])


@api_view(['POST'])
def refresh_countries(request):
    """
    POST /countries/refresh
    Fetch countries and exchange rates, then upsert everything in one transaction.
    Source failures map to 503 and storage failures to 500 (see exceptions.py).
    """
    result = CountryRefresher().refresh()
    return Response(
        {
            "message": "Countries refreshed successfully",
            "total_processed": result.processed_count,
        },
        status=status.HTTP_200_OK,
    )


@api_view(['GET'])
def list_countries(request):
    """
    GET /countries
    Filters: ?region=, ?currency= (case-insensitive exact match)
    Sorting: ?sort=gdp_desc|gdp_asc|population_desc|name_asc (default name_asc)
    """
    params = CountryListQuerySerializer(data=request.query_params)
    params.is_valid(raise_exception=True)
    qs = filter_countries(**params.validated_data)
    return Response(CountrySerializer(qs, many=True).data)


@api_view(['GET', 'DELETE'])
def country_detail(request, name):
    """
    GET /countries/:name  -> country or 404
    DELETE /countries/:name -> delete and resync metadata count, or 404
    """
    if request.method == 'GET':
        country = Country.objects.filter(name__iexact=name).first()
        if country is None:
            raise CountryNotFound(name)
        return Response(CountrySerializer(country).data)

    deleted = CountryStore().delete_country(name)
    return Response({"message": "Country deleted successfully", "deleted_country": deleted})


@api_view(['GET'])
def get_status(request):
    """
    GET /status -> { total_countries, last_refreshed_at } of the last committed refresh
    """
    return Response(RefreshMetadataSerializer(RefreshMetadata.current()).data)


@api_view(['GET'])
def get_summary_image(request):
    """
    GET /countries/image
    Serve the summary image at settings.SUMMARY_IMAGE_PATH, 404 until one exists.
    """
    path = settings.SUMMARY_IMAGE_PATH
    if not path.exists():
        return Response({"error": "Summary image not found"}, status=status.HTTP_404_NOT_FOUND)
    return FileResponse(open(path, 'rb'), content_type='image/png')
