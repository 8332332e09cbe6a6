"""Filters for the daily report listing."""
import django_filters

from reports.models import DailyReport


class DailyReportFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = DailyReport
        fields = ["date_from", "date_to"]
