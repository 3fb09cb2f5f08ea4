from rest_framework import serializers
from .models import Country, RefreshMetadata


SORT_CHOICES = ("gdp_desc", "gdp_asc", "population_desc", "name_asc")
DEFAULT_SORT = "name_asc"


class CountrySerializer(serializers.ModelSerializer):
    class Meta:
        model = Country
        fields = [
            'id', 'name', 'capital', 'region', 'population',
            'currency_code', 'exchange_rate', 'estimated_gdp',
            'flag_url', 'last_refreshed_at'
        ]


class RefreshMetadataSerializer(serializers.ModelSerializer):
    class Meta:
        model = RefreshMetadata
        fields = ['total_countries', 'last_refreshed_at']


class CountryListQuerySerializer(serializers.Serializer):
    """
    Query parameters accepted by GET /countries.

    Unknown parameters and sort values outside SORT_CHOICES are rejected.
    """
    region = serializers.CharField(required=False, allow_blank=False)
    currency = serializers.CharField(required=False, allow_blank=False)
    sort = serializers.ChoiceField(choices=SORT_CHOICES, required=False, default=DEFAULT_SORT)

    def validate(self, data):
        unknown = sorted(set(self.initial_data.keys()) - set(self.fields.keys()))
        if unknown:
            raise serializers.ValidationError({key: "is not a valid filter" for key in unknown})
        return data
