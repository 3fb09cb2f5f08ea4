from django.db import models


class Country(models.Model):
    # id: auto-generated
    # name: upsert key; exact match at storage, reads compare with iexact
    name = models.CharField(max_length=200, unique=True)
    capital = models.CharField(max_length=200, null=True, blank=True)
    region = models.CharField(max_length=100, null=True, blank=True)
    population = models.PositiveBigIntegerField(default=0)
    # currency_code: null when the country has no currency
    currency_code = models.CharField(max_length=10, null=True, blank=True)
    # exchange_rate: null when the code has no usable rate
    exchange_rate = models.FloatField(null=True, blank=True)
    # estimated_gdp: 0 without currency, null without rate
    estimated_gdp = models.FloatField(null=True, blank=True)
    flag_url = models.URLField(max_length=500, null=True, blank=True)
    last_refreshed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'countries'
        ordering = ['name']

    def __str__(self):
        return self.name


class RefreshMetadata(models.Model):
    """Singleton row (id = 1) summarising the last committed refresh."""

    SINGLETON_ID = 1

    id = models.PositiveSmallIntegerField(primary_key=True, default=SINGLETON_ID)
    total_countries = models.PositiveIntegerField(default=0)
    last_refreshed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'refresh_metadata'

    def __str__(self):
        return f"{self.total_countries} countries @ {self.last_refreshed_at}"

    @classmethod
    def current(cls):
        """Return the stored row, or an unsaved zero-value default before any refresh."""
        row = cls.objects.filter(pk=cls.SINGLETON_ID).first()
        if row is None:
            return cls(id=cls.SINGLETON_ID, total_countries=0, last_refreshed_at=None)
        return row
